"""Block minting, genesis handling and the application module for mint."""

from __future__ import annotations

import json
import random
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from ..sdk.coins import Coins
from ..sdk.errors import SdkError
from ..sdk.store import Context, Event
from .keeper import Keeper, Querier, new_querier
from .model import (
    ATTRIBUTE_KEY_INFLATION_TIME,
    ATTRIBUTE_KEY_LAST_INFLATION_TIME,
    ATTRIBUTE_KEY_MINT_COIN,
    EVENT_TYPE_MINT,
    MODULE_NAME,
    QUERIER_ROUTE,
    GenesisState,
    default_genesis_state,
)
from .simulation import ParamChange, new_decode_store, param_changes

CONSENSUS_VERSION = 1


def _time_string(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    return text + " +0000 UTC"


def begin_blocker(ctx: Context, keeper: Keeper) -> None:
    """Mint this block's provision and hand it to the fee collector."""
    logger = keeper.logger(ctx)
    block_time = ctx.block_time
    minter = keeper.get_minter(ctx)
    if ctx.block_height <= 1:
        keeper.set_minter(ctx, replace(minter, last_update=block_time))
        return

    params = keeper.get_params(ctx)
    logger.info(
        "Mint parameters inflation_rate=%s mint_denom=%s", params.inflation, params.mint_denom
    )
    minted_coin = minter.block_provision(params)
    logger.info(
        "Mint result block_provisions=%s time=%s", minted_coin, _time_string(block_time)
    )

    minted_coins = Coins([minted_coin])
    keeper.mint_coins(ctx, minted_coins)
    keeper.add_collected_fees(ctx, minted_coins)

    last_inflation_time = minter.last_update
    keeper.set_minter(ctx, replace(minter, last_update=block_time))

    ctx.event_manager.emit(
        Event(
            EVENT_TYPE_MINT,
            (
                (ATTRIBUTE_KEY_LAST_INFLATION_TIME, _time_string(last_inflation_time)),
                (ATTRIBUTE_KEY_INFLATION_TIME, _time_string(block_time)),
                (ATTRIBUTE_KEY_MINT_COIN, str(minted_coin.amount)),
            ),
        )
    )


def validate_genesis(data: GenesisState) -> None:
    """Raise if the inflation base is not positive or the parameters are invalid."""
    if not data.minter.inflation_base > 0:
        raise ValueError("base inflation must be positive")
    data.params.validate()


def init_genesis(ctx: Context, keeper: Keeper, data: GenesisState) -> None:
    """Validate ``data`` and store its minter and parameters."""
    try:
        validate_genesis(data)
    except (ValueError, SdkError) as exc:
        raise ValueError(f"failed to initialize mint genesis state: {exc}") from exc
    keeper.set_minter(ctx, data.minter)
    keeper.set_params(ctx, data.params)


def export_genesis(ctx: Context, keeper: Keeper) -> GenesisState:
    return GenesisState(keeper.get_minter(ctx), keeper.get_params(ctx))


def _parse_genesis(raw: bytes | str) -> GenesisState:
    try:
        return GenesisState.from_dict(json.loads(raw))
    except (ValueError, TypeError, AttributeError) as exc:
        raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc


def _dump(state: GenesisState) -> bytes:
    return json.dumps(state.to_dict(), sort_keys=True).encode()


class AppModule:
    """The mint module as plugged into the application."""

    name = MODULE_NAME
    querier_route = QUERIER_ROUTE
    consensus_version = CONSENSUS_VERSION

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def default_genesis(self) -> bytes:
        return _dump(default_genesis_state())

    def validate_genesis_json(self, raw: bytes | str) -> None:
        """Decode ``raw`` and validate the genesis state it holds."""
        validate_genesis(_parse_genesis(raw))

    def init_genesis(self, ctx: Context, raw: bytes | str) -> list[Any]:
        """Load genesis from JSON; returns no validator updates."""
        init_genesis(ctx, self.keeper, _parse_genesis(raw))
        return []

    def export_genesis(self, ctx: Context) -> bytes:
        return _dump(export_genesis(ctx, self.keeper))

    def legacy_querier_handler(self) -> Querier:
        return new_querier(self.keeper)

    def begin_block(self, ctx: Context) -> None:
        begin_blocker(ctx, self.keeper)

    def end_block(self, ctx: Context) -> list[Any]:
        return []

    def randomized_params(self, rng: random.Random) -> list[ParamChange]:
        return param_changes(rng)

    def store_decoder(self) -> Callable[[tuple[bytes, bytes], tuple[bytes, bytes]], str]:
        return new_decode_store()