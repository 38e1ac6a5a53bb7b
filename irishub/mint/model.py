"""Minter state, inflation parameters and genesis state of the mint module."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from ..sdk.coins import Coin, validate_denom
from ..sdk.errors import ERR_INVALID_MINT_DENOM, ERR_INVALID_MINT_INFLATION
from ..sdk.numeric import Dec, int_with_decimal

MODULE_NAME = "mint"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
QUERY_PARAMETERS = "parameters"
QUERY_INFLATION = "inflation"

MINTER_KEY = b"\x00"

EVENT_TYPE_MINT = "mint"
ATTRIBUTE_KEY_LAST_INFLATION_TIME = "last_inflation_time"
ATTRIBUTE_KEY_INFLATION_TIME = "inflation_time"
ATTRIBUTE_KEY_MINT_COIN = "mint_coin"

DEFAULT_PARAM_SPACE = "mint"
MINT_DENOM = "stake"
KEY_INFLATION = b"Inflation"
KEY_MINT_DENOM = b"MintDenom"

# 5 seconds a block, 8766 hours a year (365.25 days)
BLOCKS_PER_YEAR = 60 * 60 * 8766 // 5
INITIAL_ISSUE = int_with_decimal(20, 8)

_MAX_INFLATION = Dec.from_prec(2, 1)
_ZERO = Dec()
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _format_time(moment: datetime) -> str:
    moment = _as_utc(moment)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    return text + "Z"


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid timestamp {text!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    microsecond = int((match.group(7) or "").ljust(6, "0")[:6])
    zone = match.group(8)
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    moment = datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class Params:
    """Inflation rate and the denomination that is minted."""

    inflation: Dec = field(default_factory=lambda: Dec.from_prec(4, 2))
    mint_denom: str = MINT_DENOM

    def validate(self) -> None:
        """Raise SdkError if inflation is outside [0, 0.2] or the denom is empty."""
        if self.inflation > _MAX_INFLATION or self.inflation < _ZERO:
            raise ERR_INVALID_MINT_INFLATION.wrap(
                f"Mint inflation [{self.inflation}] should be between [0, 0.2] "
            )
        if not self.mint_denom:
            raise ERR_INVALID_MINT_DENOM.wrap(
                f"Mint denom [{self.mint_denom}] should not be empty"
            )

    def to_dict(self) -> dict[str, str]:
        return {"inflation": str(self.inflation), "mint_denom": self.mint_denom}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Params:
        return cls(
            inflation=Dec.parse(str(data.get("inflation", "0"))),
            mint_denom=str(data.get("mint_denom", "")),
        )

    def __str__(self) -> str:
        denom = self.mint_denom or '""'
        return f'inflation: "{self.inflation}"\nmint_denom: {denom}\n'


def default_params() -> Params:
    return Params(inflation=Dec.from_prec(4, 2), mint_denom=MINT_DENOM)


def validate_inflation(value: Any) -> None:
    """Check a candidate inflation parameter value."""
    if not isinstance(value, Dec):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    if value > _MAX_INFLATION or value < _ZERO:
        raise ValueError(f"Mint inflation [{value}] should be between [0, 0.2] ")


def validate_mint_denom(value: Any) -> None:
    """Check a candidate mint denomination parameter value."""
    if not isinstance(value, str):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    if not value.strip():
        raise ValueError("mint denom cannot be blank")
    validate_denom(value)


PARAM_VALIDATORS: Mapping[bytes, Callable[[Any], None]] = {
    KEY_INFLATION: validate_inflation,
    KEY_MINT_DENOM: validate_mint_denom,
}


@dataclass(frozen=True)
class Minter:
    """Time of the last mint and the base amount inflation applies to."""

    last_update: datetime = _EPOCH
    inflation_base: int = 0

    def next_annual_provisions(self, params: Params) -> Dec:
        """Return the amount minted per year at the current rate."""
        return params.inflation.mul_int(self.inflation_base)

    def block_provision(self, params: Params) -> Coin:
        """Return the coin minted for a single block."""
        provisions = self.next_annual_provisions(params)
        amount = provisions.quo_int(BLOCKS_PER_YEAR).truncate_int()
        return Coin(params.mint_denom, amount)

    def to_dict(self) -> dict[str, str]:
        return {
            "last_update": _format_time(self.last_update),
            "inflation_base": str(self.inflation_base),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Minter:
        raw_time = data.get("last_update")
        last_update = _EPOCH if raw_time is None else _parse_time(str(raw_time))
        return cls(last_update=last_update, inflation_base=int(data.get("inflation_base", 0)))


def default_minter() -> Minter:
    """Return the minter of a new chain: 2e9 iris expressed in micro units."""
    return Minter(_EPOCH, INITIAL_ISSUE * int_with_decimal(1, 6))


def validate_minter(minter: Minter) -> None:
    """Raise ValueError if the minter's time precedes 1970 or its base is not positive."""
    if _as_utc(minter.last_update) < _EPOCH:
        raise ValueError(
            f"minter last update time({_format_time(minter.last_update)}) should not be "
            "a time before January 1, 1970 UTC"
        )
    if not minter.inflation_base > 0:
        raise ValueError(
            f"minter inflation basement ({minter.inflation_base}) should be positive"
        )


@dataclass(frozen=True)
class GenesisState:
    """Minter and parameters at chain start."""

    minter: Minter = field(default_factory=default_minter)
    params: Params = field(default_factory=default_params)

    def to_dict(self) -> dict[str, Any]:
        return {"minter": self.minter.to_dict(), "params": self.params.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenesisState:
        return cls(
            minter=Minter.from_dict(data.get("minter") or {}),
            params=Params.from_dict(data.get("params") or {}),
        )


def default_genesis_state() -> GenesisState:
    return GenesisState(default_minter(), default_params())


def validate_genesis(data: GenesisState) -> None:
    """Check the parameters, then the minter."""
    data.params.validate()
    validate_minter(data.minter)