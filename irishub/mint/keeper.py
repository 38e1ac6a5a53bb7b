"""Storage of the minter and mint parameters, and queries over them."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Sequence

from ..sdk.bank import FEE_COLLECTOR_NAME, BankKeeper
from ..sdk.coins import Coin, Coins
from ..sdk.errors import ERR_UNKNOWN_REQUEST
from ..sdk.numeric import Dec
from ..sdk.store import Context, KVStore
from .model import (
    DEFAULT_PARAM_SPACE,
    KEY_INFLATION,
    KEY_MINT_DENOM,
    MINTER_KEY,
    MODULE_NAME,
    PARAM_VALIDATORS,
    QUERY_PARAMETERS,
    STORE_KEY,
    Minter,
    Params,
)

PARAM_STORE_KEY = "params"

Querier = Callable[[Context, Sequence[str]], bytes]


def _param_key(key: bytes) -> bytes:
    return DEFAULT_PARAM_SPACE.encode() + b"/" + key


class Keeper:
    """Reads and writes the minter and parameters and moves minted coins."""

    def __init__(
        self,
        bank: BankKeeper,
        fee_collector_name: str = FEE_COLLECTOR_NAME,
        store_key: str = STORE_KEY,
        param_store_key: str = PARAM_STORE_KEY,
    ) -> None:
        self.bank = bank
        self.fee_collector_name = fee_collector_name
        self.store_key = store_key
        self.param_store_key = param_store_key

    def logger(self, ctx: Context) -> logging.Logger:
        return ctx.logger.getChild(MODULE_NAME)

    def _store(self, ctx: Context) -> KVStore:
        return ctx.kv_store(self.store_key)

    def _param_store(self, ctx: Context) -> KVStore:
        return ctx.kv_store(self.param_store_key)

    def get_minter(self, ctx: Context) -> Minter:
        """Return the stored minter; raises LookupError if none was stored."""
        data = self._store(ctx).get(MINTER_KEY)
        if data is None:
            raise LookupError("Stored minter should not have been nil")
        return Minter.from_dict(json.loads(data))

    def set_minter(self, ctx: Context, minter: Minter) -> None:
        data = json.dumps(minter.to_dict(), sort_keys=True, separators=(",", ":"))
        self._store(ctx).set(MINTER_KEY, data.encode())

    def mint_coins(self, ctx: Context, coins: Iterable[Coin]) -> None:
        """Mint ``coins`` into the mint module account; nothing happens if empty."""
        coins = Coins(coins)
        if coins.is_empty():
            return
        self.bank.mint_coins(MODULE_NAME, coins)

    def add_collected_fees(self, ctx: Context, coins: Iterable[Coin]) -> None:
        """Move ``coins`` from the mint module account to the fee collector."""
        self.bank.send_coins_from_module_to_module(
            MODULE_NAME, self.fee_collector_name, Coins(coins)
        )

    def get_params(self, ctx: Context) -> Params:
        """Return the stored parameters; raises LookupError if any is missing."""
        store = self._param_store(ctx)
        values: dict[bytes, str] = {}
        for key in (KEY_INFLATION, KEY_MINT_DENOM):
            data = store.get(_param_key(key))
            if data is None:
                raise LookupError(f"parameter {key.decode()} has not been set")
            values[key] = json.loads(data)
        return Params(
            inflation=Dec.parse(values[KEY_INFLATION]),
            mint_denom=values[KEY_MINT_DENOM],
        )

    def set_params(self, ctx: Context, params: Params) -> None:
        """Validate every parameter, then store them all."""
        pairs = (
            (KEY_INFLATION, params.inflation, str(params.inflation)),
            (KEY_MINT_DENOM, params.mint_denom, params.mint_denom),
        )
        for key, value, _ in pairs:
            try:
                PARAM_VALIDATORS[key](value)
            except ValueError as exc:
                raise ValueError(f"value from ParamSetPair is invalid: {exc}") from exc
        store = self._param_store(ctx)
        for key, _, text in pairs:
            store.set(_param_key(key), json.dumps(text).encode())

    def params(self, ctx: Context) -> Params:
        """Answer the parameters query."""
        return self.get_params(ctx)


def new_querier(keeper: Keeper) -> Querier:
    """Return a legacy querier answering JSON for the given path."""

    def querier(ctx: Context, path: Sequence[str]) -> bytes:
        endpoint = path[0] if path else ""
        if endpoint == QUERY_PARAMETERS:
            return json.dumps(keeper.get_params(ctx).to_dict(), indent=2).encode()
        raise ERR_UNKNOWN_REQUEST.wrap(f"unknown query path: {endpoint}")

    return querier