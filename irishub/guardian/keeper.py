"""Storage, queries and message handling for super accounts."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from ..sdk.address import AccAddress
from ..sdk.errors import (
    ERR_DELETE_GENESIS_SUPER,
    ERR_SUPER_EXISTS,
    ERR_UNKNOWN_OPERATOR,
    ERR_UNKNOWN_REQUEST,
    ERR_UNKNOWN_SUPER,
)
from ..sdk.store import Context, Event, KVStore
from .msgs import MsgAddSuper, MsgDeleteSuper
from .supers import (
    ATTRIBUTE_KEY_ADDED_BY,
    ATTRIBUTE_KEY_DELETED_BY,
    ATTRIBUTE_KEY_SUPER_ADDRESS,
    ATTRIBUTE_VALUE_CATEGORY,
    EVENT_TYPE_ADD_SUPER,
    EVENT_TYPE_DELETE_SUPER,
    QUERY_SUPERS,
    STORE_KEY,
    AccountType,
    Super,
    new_super,
    super_key,
    supers_subspace_key,
)

DEFAULT_PAGE_LIMIT = 100

EVENT_TYPE_MESSAGE = "message"
ATTRIBUTE_KEY_MODULE = "module"
ATTRIBUTE_KEY_SENDER = "sender"


@dataclass(frozen=True)
class PageRequest:
    """Selects a page either by start key or by offset."""

    key: bytes = b""
    offset: int = 0
    limit: int = 0
    count_total: bool = False
    reverse: bool = False


@dataclass(frozen=True)
class PageResponse:
    """Key of the next page (empty when none) and, if requested, the total."""

    next_key: bytes = b""
    total: int = 0


def _encode(super_: Super) -> bytes:
    return json.dumps(super_.to_dict(), sort_keys=True, separators=(",", ":")).encode()


def _decode(data: bytes) -> Super:
    return Super.from_dict(json.loads(data))


def _paginate(
    store: KVStore, request: PageRequest
) -> tuple[list[tuple[bytes, bytes]], PageResponse]:
    if request.offset > 0 and request.key:
        raise ValueError("invalid request, either offset or key is expected, got both")
    limit = request.limit
    count_total = request.count_total
    if limit == 0:
        limit = DEFAULT_PAGE_LIMIT
        count_total = True

    entries = list(store.iterate_prefix(b""))
    if request.reverse:
        entries.reverse()

    selected: list[tuple[bytes, bytes]] = []
    if request.key:
        start = bytes(request.key)
        if request.reverse:
            entries = [entry for entry in entries if entry[0] <= start]
        else:
            entries = [entry for entry in entries if entry[0] >= start]
        next_key = b""
        for key, value in entries:
            if len(selected) == limit:
                next_key = key
                break
            selected.append((key, value))
        return selected, PageResponse(next_key=next_key)

    end = request.offset + limit
    next_key = b""
    count = 0
    for key, value in entries:
        count += 1
        if count <= request.offset:
            continue
        if count <= end:
            selected.append((key, value))
        elif count == end + 1:
            next_key = key
            if not count_total:
                break
    return selected, PageResponse(next_key=next_key, total=count if count_total else 0)


class Keeper:
    """Reads and writes supers in the guardian store."""

    def __init__(self, store_key: str = STORE_KEY) -> None:
        self.store_key = store_key

    def _store(self, ctx: Context) -> KVStore:
        return ctx.kv_store(self.store_key)

    def add_super(self, ctx: Context, super_: Super) -> None:
        """Store ``super_`` under its address, replacing any existing entry."""
        try:
            address = AccAddress.from_bech32(super_.address)
        except ValueError:
            address = AccAddress()
        self._store(ctx).set(super_key(address), _encode(super_))

    def delete_super(self, ctx: Context, address: AccAddress) -> None:
        self._store(ctx).delete(super_key(address))

    def get_super(self, ctx: Context, address: AccAddress) -> Super | None:
        data = self._store(ctx).get(super_key(address))
        return None if data is None else _decode(data)

    def iterate_supers(self, ctx: Context) -> Iterator[Super]:
        """Yield every stored super in key order."""
        for _, value in self._store(ctx).iterate_prefix(supers_subspace_key()):
            yield _decode(value)

    def authorized(self, ctx: Context, address: AccAddress) -> bool:
        return self.get_super(ctx, address) is not None

    def supers(
        self, ctx: Context, pagination: PageRequest | None = None
    ) -> tuple[list[Super], PageResponse]:
        """Return one page of supers and the page information."""
        try:
            entries, page = _paginate(self._store(ctx), pagination or PageRequest())
        except ValueError as exc:
            raise ValueError(f"paginate: {exc}") from exc
        return [_decode(value) for _, value in entries], page


def _require_genesis_operator(keeper: Keeper, ctx: Context, operator: AccAddress, text: str) -> None:
    operator_super = keeper.get_super(ctx, operator)
    if operator_super is None or operator_super.account_type != AccountType.GENESIS:
        raise ERR_UNKNOWN_OPERATOR.wrap(text)


class MsgServer:
    """Handles guardian messages against a keeper."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def add_super(self, ctx: Context, msg: MsgAddSuper) -> None:
        added_by = AccAddress.from_bech32(msg.added_by)
        address = AccAddress.from_bech32(msg.address)
        _require_genesis_operator(self.keeper, ctx, added_by, msg.added_by)
        if self.keeper.get_super(ctx, address) is not None:
            raise ERR_SUPER_EXISTS.wrap(msg.address)
        self.keeper.add_super(
            ctx, new_super(msg.description, AccountType.ORDINARY, address, added_by)
        )
        ctx.event_manager.emit_events(
            [
                Event(
                    EVENT_TYPE_MESSAGE,
                    (
                        (ATTRIBUTE_KEY_MODULE, ATTRIBUTE_VALUE_CATEGORY),
                        (ATTRIBUTE_KEY_SENDER, msg.added_by),
                    ),
                ),
                Event(
                    EVENT_TYPE_ADD_SUPER,
                    (
                        (ATTRIBUTE_KEY_SUPER_ADDRESS, msg.address),
                        (ATTRIBUTE_KEY_ADDED_BY, msg.added_by),
                    ),
                ),
            ]
        )

    def delete_super(self, ctx: Context, msg: MsgDeleteSuper) -> None:
        deleted_by = AccAddress.from_bech32(msg.deleted_by)
        address = AccAddress.from_bech32(msg.address)
        _require_genesis_operator(self.keeper, ctx, deleted_by, msg.deleted_by)
        target = self.keeper.get_super(ctx, address)
        if target is None:
            raise ERR_UNKNOWN_SUPER.wrap(msg.address)
        if target.account_type == AccountType.GENESIS:
            raise ERR_DELETE_GENESIS_SUPER.wrap(msg.address)
        self.keeper.delete_super(ctx, address)
        ctx.event_manager.emit_events(
            [
                Event(
                    EVENT_TYPE_MESSAGE,
                    (
                        (ATTRIBUTE_KEY_MODULE, ATTRIBUTE_VALUE_CATEGORY),
                        (ATTRIBUTE_KEY_SENDER, msg.deleted_by),
                    ),
                ),
                Event(
                    EVENT_TYPE_DELETE_SUPER,
                    (
                        (ATTRIBUTE_KEY_SUPER_ADDRESS, msg.address),
                        (ATTRIBUTE_KEY_DELETED_BY, msg.deleted_by),
                    ),
                ),
            ]
        )


def new_querier(keeper: Keeper) -> Callable[[Context, Sequence[str]], bytes]:
    """Return a legacy querier answering JSON for the given path."""

    def querier(ctx: Context, path: Sequence[str]) -> bytes:
        endpoint = path[0] if path else ""
        if endpoint == QUERY_SUPERS:
            supers = [super_.to_dict() for super_ in keeper.iterate_supers(ctx)]
            return json.dumps(supers or None, indent=2).encode()
        raise ERR_UNKNOWN_REQUEST.wrap(f"unknown query path: {endpoint}")

    return querier