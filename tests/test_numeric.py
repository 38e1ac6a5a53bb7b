import pytest

from irishub.sdk.numeric import Dec, int_with_decimal


def test_from_prec_text():
    assert str(Dec.from_prec(4, 2)) == "0.040000000000000000"


def test_parse_matches_from_prec():
    assert Dec.parse("0.04") == Dec.from_prec(4, 2)
    assert Dec.parse("0.2") == Dec.from_prec(2, 1)


@pytest.mark.parametrize("value,prec", [(0, 0), (4, 2), (-7, 3), (123456789, 18), (5, 0)])
def test_text_round_trip(value, prec):
    dec = Dec.from_prec(value, prec)
    assert Dec.parse(str(dec)) == dec


def test_truncate_int_positive():
    assert Dec.parse("2.9").truncate_int() == 2


def test_truncate_int_negative_toward_zero():
    assert Dec.parse("-2.9").truncate_int() == -2


@pytest.mark.parametrize("text", ["", "abc", "1.", ".", "-", "+1", "0." + "1" * 19])
def test_parse_rejects(text):
    with pytest.raises(ValueError):
        Dec.parse(text)


def test_is_positive():
    assert not Dec.from_prec(0, 0).is_positive()
    assert not Dec.from_prec(-1, 2).is_positive()
    assert Dec.from_prec(1, 2).is_positive()


def test_ordering():
    assert Dec.from_prec(2, 1) > Dec.from_prec(4, 2)
    assert Dec.from_prec(-1, 0) < Dec.from_prec(0, 0)


@pytest.mark.parametrize("divisor", [3, 7, 12 * 60 * 8766])
def test_quo_int_never_exceeds(divisor):
    dec = Dec.from_prec(20, 2).mul_int(int_with_decimal(100, 18))
    quotient = dec.quo_int(divisor)
    assert quotient.mul_int(divisor) <= dec
    assert quotient.mul_int(divisor) > Dec(dec.raw - divisor)


def test_mul_int_then_quo_int_restores():
    dec = Dec.from_prec(4, 2)
    assert dec.mul_int(1000).quo_int(1000) == dec


def test_quo_int_by_zero():
    with pytest.raises(ZeroDivisionError):
        Dec.from_prec(1, 0).quo_int(0)


def test_int_with_decimal_scales():
    for value, decimals in [(20, 8), (1, 6), (2, 9)]:
        assert int_with_decimal(value, decimals) // 10**decimals == value
        assert int_with_decimal(value, decimals) % 10**decimals == 0


def test_int_with_decimal_overflow():
    with pytest.raises(OverflowError):
        int_with_decimal(1, 78)


def test_from_prec_too_precise():
    with pytest.raises(ValueError):
        Dec.from_prec(1, 19)