"""Registered error kinds with codespaces and codes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorKind:
    """A registered error: a code within a codespace and a description."""

    codespace: str
    code: int
    description: str

    def wrap(self, message: str = "") -> SdkError:
        """Return an exception of this kind carrying ``message``."""
        return SdkError(self, message)


class SdkError(Exception):
    """An error of a registered kind."""

    def __init__(self, kind: ErrorKind, message: str = "") -> None:
        self.kind = kind
        self.message = message
        text = f"{message}: {kind.description}" if message else kind.description
        super().__init__(text)

    @property
    def codespace(self) -> str:
        return self.kind.codespace

    @property
    def code(self) -> int:
        return self.kind.code

    def is_kind(self, kind: ErrorKind) -> bool:
        return self.kind == kind


_REGISTRY: dict[tuple[str, int], ErrorKind] = {}


def register(codespace: str, code: int, description: str) -> ErrorKind:
    """Register a new error kind; each codespace and code pair is used once."""
    if code == 0:
        raise ValueError("error code 0 is reserved for success")
    existing = _REGISTRY.get((codespace, code))
    if existing is not None:
        raise ValueError(
            f"error with code {code} is already registered: {existing.description!r}"
        )
    kind = ErrorKind(codespace, code, description)
    _REGISTRY[(codespace, code)] = kind
    return kind


SDK_CODESPACE = "sdk"

ERR_UNAUTHORIZED = register(SDK_CODESPACE, 4, "unauthorized")
ERR_INSUFFICIENT_FUNDS = register(SDK_CODESPACE, 5, "insufficient funds")
ERR_UNKNOWN_REQUEST = register(SDK_CODESPACE, 6, "unknown request")
ERR_INVALID_ADDRESS = register(SDK_CODESPACE, 7, "invalid address")
ERR_UNKNOWN_ADDRESS = register(SDK_CODESPACE, 9, "unknown address")
ERR_INVALID_COINS = register(SDK_CODESPACE, 10, "invalid coins")
ERR_JSON_MARSHAL = register(SDK_CODESPACE, 16, "failed to marshal JSON bytes")
ERR_JSON_UNMARSHAL = register(SDK_CODESPACE, 17, "failed to unmarshal JSON bytes")
ERR_INVALID_REQUEST = register(SDK_CODESPACE, 18, "invalid request")

ERR_UNKNOWN_OPERATOR = register("guardian", 2, "unknown operator")
ERR_UNKNOWN_SUPER = register("guardian", 3, "unknown super")
ERR_SUPER_EXISTS = register("guardian", 4, "super already exists")
ERR_DELETE_GENESIS_SUPER = register("guardian", 5, "can't delete genesis super")

ERR_INVALID_MINT_INFLATION = register("mint", 2, "invalid mint inflation")
ERR_INVALID_MINT_DENOM = register("mint", 3, "invalid mint denom")