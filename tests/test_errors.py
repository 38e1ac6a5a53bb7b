import pytest

from irishub.sdk.errors import (
    ERR_DELETE_GENESIS_SUPER,
    ERR_SUPER_EXISTS,
    ERR_UNKNOWN_OPERATOR,
    ErrorKind,
    SdkError,
    register,
)


def test_register_and_wrap():
    kind = register("errtest_wrap", 7, "something failed")
    error = kind.wrap("while testing")
    assert str(error) == "while testing: something failed"
    assert error.code == 7
    assert error.codespace == "errtest_wrap"


def test_wrap_without_message_uses_description():
    kind = register("errtest_plain", 2, "plain failure")
    assert str(kind.wrap()) == "plain failure"


def test_duplicate_registration_rejected():
    register("errtest_dup", 3, "first")
    with pytest.raises(ValueError):
        register("errtest_dup", 3, "second")


def test_same_code_other_codespace_allowed():
    first = register("errtest_a", 9, "a")
    second = register("errtest_b", 9, "b")
    assert first.code == second.code
    assert first != second


def test_code_zero_rejected():
    with pytest.raises(ValueError):
        register("errtest_zero", 0, "success")


def test_guardian_kinds_are_registered():
    with pytest.raises(ValueError):
        register("guardian", 2, "again")


def test_is_kind():
    error = ERR_SUPER_EXISTS.wrap("iaa1example")
    assert error.is_kind(ERR_SUPER_EXISTS)
    assert not error.is_kind(ERR_DELETE_GENESIS_SUPER)


def test_wrapped_error_carries_kind():
    error = ERR_UNKNOWN_OPERATOR.wrap("operator")
    assert isinstance(error, SdkError)
    assert error.kind == ERR_UNKNOWN_OPERATOR
    assert error.message == "operator"
    assert str(error) == "operator: unknown operator"


def test_kind_equality_is_by_value():
    kind = ErrorKind("guardian", 4, "super already exists")
    assert kind == ERR_SUPER_EXISTS