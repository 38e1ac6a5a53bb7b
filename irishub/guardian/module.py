"""Genesis handling, message routing and the application module for guardian."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any

from ..sdk.address import AccAddress
from ..sdk.errors import ERR_UNKNOWN_REQUEST
from ..sdk.store import Context, Event, EventManager
from .keeper import Keeper, MsgServer, new_querier
from .msgs import MsgAddSuper, MsgDeleteSuper
from .supers import (
    MODULE_NAME,
    QUERIER_ROUTE,
    ROUTER_KEY,
    GenesisState,
    default_genesis_state,
)

CONSENSUS_VERSION = 1

Handler = Callable[[Context, Any], tuple[Event, ...]]
Querier = Callable[[Context, Sequence[str]], bytes]


def validate_genesis(data: GenesisState) -> None:
    """Raise ValueError if any super carries a malformed address."""
    for super_ in data.supers:
        AccAddress.from_bech32(super_.address)
        AccAddress.from_bech32(super_.added_by)


def init_genesis(ctx: Context, keeper: Keeper, data: GenesisState) -> None:
    """Validate ``data`` and store every super it holds."""
    try:
        validate_genesis(data)
    except ValueError as exc:
        raise ValueError(f"failed to initialize guardian genesis state: {exc}") from exc
    for super_ in data.supers:
        keeper.add_super(ctx, super_)


def export_genesis(ctx: Context, keeper: Keeper) -> GenesisState:
    """Return the genesis state holding every stored super."""
    return GenesisState(list(keeper.iterate_supers(ctx)))


def new_handler(keeper: Keeper) -> Handler:
    """Return a handler that runs guardian messages and returns their events."""
    server = MsgServer(keeper)

    def handler(ctx: Context, msg: Any) -> tuple[Event, ...]:
        ctx = ctx.with_event_manager(EventManager())
        if isinstance(msg, MsgAddSuper):
            server.add_super(ctx, msg)
        elif isinstance(msg, MsgDeleteSuper):
            server.delete_super(ctx, msg)
        else:
            raise ERR_UNKNOWN_REQUEST.wrap(
                f"unrecognized guardian message type: {type(msg).__name__}"
            )
        return ctx.event_manager.events

    return handler


def _parse_genesis(raw: bytes | str) -> GenesisState:
    try:
        return GenesisState.from_dict(json.loads(raw))
    except (ValueError, TypeError, AttributeError) as exc:
        raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc


def _dump(state: GenesisState) -> bytes:
    return json.dumps(state.to_dict(), sort_keys=True).encode()


class AppModule:
    """The guardian module as plugged into the application."""

    name = MODULE_NAME
    querier_route = QUERIER_ROUTE
    consensus_version = CONSENSUS_VERSION

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def default_genesis(self) -> bytes:
        return _dump(default_genesis_state())

    def validate_genesis_json(self, raw: bytes | str) -> None:
        """Check that ``raw`` decodes as a guardian genesis state."""
        _parse_genesis(raw)

    def init_genesis(self, ctx: Context, raw: bytes | str) -> list[Any]:
        """Load genesis from JSON; returns no validator updates."""
        init_genesis(ctx, self.keeper, _parse_genesis(raw))
        return []

    def export_genesis(self, ctx: Context) -> bytes:
        return _dump(export_genesis(ctx, self.keeper))

    def route(self) -> tuple[str, Handler]:
        return ROUTER_KEY, new_handler(self.keeper)

    def legacy_querier_handler(self) -> Querier:
        return new_querier(self.keeper)

    def begin_block(self, ctx: Context) -> None:
        return None

    def end_block(self, ctx: Context) -> list[Any]:
        return []