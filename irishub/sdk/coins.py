"""Coins and sorted coin sets."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")


def validate_denom(denom: str) -> None:
    """Raise ValueError unless ``denom`` is a valid coin denomination."""
    if not isinstance(denom, str) or not _DENOM_RE.fullmatch(denom):
        raise ValueError(f"invalid denom: {denom}")


@dataclass(frozen=True)
class Coin:
    """An amount of one denomination; the amount is never negative."""

    denom: str
    amount: int

    def __post_init__(self) -> None:
        validate_denom(self.denom)
        if self.amount < 0:
            raise ValueError(f"negative coin amount: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class Coins(Sequence[Coin]):
    """A set of coins sorted by denomination with no zero amounts."""

    __slots__ = ("_coins",)

    def __init__(self, coins: Iterable[Coin] = ()) -> None:
        by_denom: dict[str, Coin] = {}
        for coin in coins:
            if coin.amount == 0:
                continue
            if coin.denom in by_denom:
                raise ValueError(f"duplicate denomination {coin.denom}")
            by_denom[coin.denom] = coin
        self._coins = tuple(sorted(by_denom.values(), key=lambda coin: coin.denom))

    def __getitem__(self, index):
        return self._coins[index]

    def __len__(self) -> int:
        return len(self._coins)

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Coins):
            return self._coins == other._coins
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._coins)

    def __repr__(self) -> str:
        return f"Coins({list(self._coins)!r})"

    def is_empty(self) -> bool:
        return not self._coins

    def _amounts(self) -> dict[str, int]:
        return {coin.denom: coin.amount for coin in self._coins}

    def add(self, other: Iterable[Coin]) -> Coins:
        amounts = self._amounts()
        for coin in other:
            amounts[coin.denom] = amounts.get(coin.denom, 0) + coin.amount
        return Coins(Coin(denom, amount) for denom, amount in amounts.items())

    def sub(self, other: Iterable[Coin]) -> Coins:
        """Subtract ``other``; raises ValueError if any amount would go negative."""
        amounts = self._amounts()
        for coin in other:
            remaining = amounts.get(coin.denom, 0) - coin.amount
            if remaining < 0:
                raise ValueError(f"negative coin amount: {remaining}{coin.denom}")
            amounts[coin.denom] = remaining
        return Coins(Coin(denom, amount) for denom, amount in amounts.items())

    def amount_of(self, denom: str) -> int:
        validate_denom(denom)
        return self._amounts().get(denom, 0)

    def __str__(self) -> str:
        return ",".join(str(coin) for coin in self._coins)