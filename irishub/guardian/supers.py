"""Super accounts of the guardian module, their store keys and genesis state."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..sdk.address import AccAddress

MODULE_NAME = "guardian"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = STORE_KEY
QUERY_SUPERS = "supers"

SUPER_KEY = b"\x00"

EVENT_TYPE_ADD_SUPER = "add_super"
EVENT_TYPE_DELETE_SUPER = "delete_super"
ATTRIBUTE_KEY_SUPER_ADDRESS = "address"
ATTRIBUTE_KEY_ADDED_BY = "added_by"
ATTRIBUTE_KEY_DELETED_BY = "deleted_by"
ATTRIBUTE_VALUE_CATEGORY = MODULE_NAME

INVALID_ACCOUNT_TYPE = 0xFF


class AccountType(enum.Enum):
    """Kind of super account: created at genesis or added later."""

    GENESIS = 0
    ORDINARY = 1

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def to_bytes(self) -> bytes:
        return bytes([self.value])

    @classmethod
    def from_bytes(cls, data: bytes) -> AccountType:
        if not data:
            raise ValueError("account type data is empty")
        return cls(data[0])

    def __str__(self) -> str:
        return self.label


def account_type_from_string(text: str) -> AccountType:
    """Parse ``"Genesis"`` or ``"Ordinary"``."""
    for member in AccountType:
        if member.label == text:
            return member
    raise ValueError(f"'{text}' is not a valid account type")


def valid_account_type(option: Any) -> bool:
    """Return True if ``option`` names a known account type."""
    try:
        AccountType(option)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class Super:
    """A super account allowed to operate privileged functions."""

    description: str = ""
    account_type: AccountType = AccountType.GENESIS
    address: str = ""
    added_by: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "account_type": self.account_type.label,
            "address": self.address,
            "added_by": self.added_by,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Super:
        raw_type = data.get("account_type", AccountType.GENESIS.value)
        if isinstance(raw_type, str):
            account_type = account_type_from_string(raw_type)
        else:
            account_type = AccountType(raw_type)
        return cls(
            description=data.get("description", ""),
            account_type=account_type,
            address=data.get("address", ""),
            added_by=data.get("added_by", ""),
        )


def new_super(
    description: str,
    account_type: AccountType,
    address: AccAddress,
    added_by: AccAddress,
) -> Super:
    return Super(
        description=description,
        account_type=AccountType(account_type),
        address=str(address),
        added_by=str(added_by),
    )


def super_key(address: AccAddress) -> bytes:
    """Return the store key of the super at ``address``."""
    return SUPER_KEY + bytes(address)


def supers_subspace_key() -> bytes:
    """Return the key prefix under which all supers are stored."""
    return SUPER_KEY


@dataclass
class GenesisState:
    """Supers present when the chain starts."""

    supers: list[Super] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"supers": [super_.to_dict() for super_ in self.supers]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenesisState:
        return cls([Super.from_dict(item) for item in data.get("supers") or ()])


def default_genesis_state() -> GenesisState:
    return GenesisState()