import json

import pytest

from irishub.guardian.keeper import Keeper
from irishub.guardian.module import (
    AppModule,
    export_genesis,
    init_genesis,
    new_handler,
    validate_genesis,
)
from irishub.guardian.msgs import new_msg_add_super, new_msg_delete_super
from irishub.guardian.supers import (
    ROUTER_KEY,
    AccountType,
    GenesisState,
    Super,
    default_genesis_state,
    new_super,
)
from irishub.sdk.address import AccAddress, address_hash
from irishub.sdk.errors import ERR_UNKNOWN_REQUEST, SdkError
from irishub.sdk.store import Context

GENESIS_ADDR = AccAddress(address_hash(b"genesis"))
OTHER_ADDR = AccAddress(address_hash(b"other"))


@pytest.fixture
def ctx():
    return Context()


@pytest.fixture
def keeper():
    return Keeper()


def test_export_genesis_matches_default(ctx, keeper):
    assert export_genesis(ctx, keeper) == default_genesis_state()


def test_init_then_export_round_trip(ctx, keeper):
    super_ = new_super("root", AccountType.GENESIS, GENESIS_ADDR, GENESIS_ADDR)
    init_genesis(ctx, keeper, GenesisState([super_]))
    assert export_genesis(ctx, keeper).supers == [super_]


def test_validate_genesis_rejects_bad_address():
    bad = Super(description="x", address="not-an-address", added_by=str(GENESIS_ADDR))
    with pytest.raises(ValueError):
        validate_genesis(GenesisState([bad]))


def test_init_genesis_rejects_bad_added_by(ctx, keeper):
    bad = Super(description="x", address=str(GENESIS_ADDR), added_by="")
    with pytest.raises(ValueError, match="failed to initialize guardian genesis state"):
        init_genesis(ctx, keeper, GenesisState([bad]))
    assert list(keeper.iterate_supers(ctx)) == []


def test_handler_add_and_delete(ctx, keeper):
    init_genesis(
        ctx,
        keeper,
        GenesisState([new_super("root", AccountType.GENESIS, GENESIS_ADDR, GENESIS_ADDR)]),
    )
    handler = new_handler(keeper)
    events = handler(ctx, new_msg_add_super("ops", OTHER_ADDR, GENESIS_ADDR))
    assert [event.type for event in events] == ["message", "add_super"]
    assert ctx.event_manager.events == ()
    added = keeper.get_super(ctx, OTHER_ADDR)
    assert added.account_type == AccountType.ORDINARY
    assert added.added_by == str(GENESIS_ADDR)

    events = handler(ctx, new_msg_delete_super(OTHER_ADDR, GENESIS_ADDR))
    assert [event.type for event in events] == ["message", "delete_super"]
    assert keeper.get_super(ctx, OTHER_ADDR) is None


def test_handler_rejects_unknown_message(ctx, keeper):
    with pytest.raises(SdkError) as info:
        new_handler(keeper)(ctx, object())
    assert info.value.is_kind(ERR_UNKNOWN_REQUEST)


def test_default_genesis_json(keeper):
    assert json.loads(AppModule(keeper).default_genesis()) == {"supers": []}


def test_module_genesis_json_round_trip(ctx, keeper):
    module = AppModule(keeper)
    super_ = new_super("root", AccountType.GENESIS, GENESIS_ADDR, GENESIS_ADDR)
    raw = json.dumps(GenesisState([super_]).to_dict())
    assert module.init_genesis(ctx, raw) == []
    exported = json.loads(module.export_genesis(ctx))
    assert GenesisState.from_dict(exported).supers == [super_]


def test_validate_genesis_json_rejects_garbage(keeper):
    with pytest.raises(ValueError, match="failed to unmarshal guardian genesis state"):
        AppModule(keeper).validate_genesis_json(b"{not json")


def test_route_and_blocks(ctx, keeper):
    module = AppModule(keeper)
    key, _handler = module.route()
    assert key == ROUTER_KEY
    assert module.end_block(ctx) == []
    assert module.consensus_version == 1


def test_legacy_querier_handler_lists_supers(ctx, keeper):
    module = AppModule(keeper)
    super_ = new_super("root", AccountType.GENESIS, GENESIS_ADDR, GENESIS_ADDR)
    keeper.add_super(ctx, super_)
    result = json.loads(module.legacy_querier_handler()(ctx, ["supers"]))
    assert [Super.from_dict(item) for item in result] == [super_]