# irishub

This package holds the state logic of two ledger modules, *guardian* and
*mint*, and the fee handling of an EVM module. It runs on an in-memory
key-value store and a small in-memory bank. Only the standard library is
needed.

## Contents

### `irishub.sdk`: shared building blocks

- `irishub.sdk.address` provides `AccAddress`. It has `from_bech32`,
  `from_hex`, `to_bech32` and `hex`, and `str()` gives the bech32 form with the
  `iaa` prefix. The module also has `bech32_encode`, `bech32_decode` and
  `address_hash`, which returns the first 20 bytes of a SHA-256 digest.
- `irishub.sdk.numeric` provides `Dec`, a decimal with 18 fixed places. It has
  `from_prec`, `parse`, `mul_int`, `quo_int`, `truncate_int` and
  `is_positive`. The module also has `int_with_decimal`.
- `irishub.sdk.coins` provides `Coin` and `Coins`, plus `validate_denom`.
  `Coins` is sorted by denomination and drops zero amounts. It has `add`,
  `sub`, `amount_of` and `is_empty`.
- `irishub.sdk.errors` provides `ErrorKind`, `SdkError` and `register`, along
  with the registered error kinds of the SDK, guardian and mint.
- `irishub.sdk.store` provides `KVStore`, `Event`, `EventManager` and
  `Context`. `Context` holds the chain id, block height, block time, stores,
  event manager and logger.
- `irishub.sdk.bank` provides `BankKeeper`. It tracks balances and total
  supply, and gives each module account its permissions. By default,
  `fee_collector` may burn and `mint` may mint.

### `irishub.guardian`: super accounts

- `supers` defines `AccountType` (`GENESIS`, `ORDINARY`), `Super`,
  `GenesisState` and the store key helpers `super_key` and
  `supers_subspace_key`.
- `msgs` defines `MsgAddSuper` and `MsgDeleteSuper`. Both have
  `validate_basic`, `get_sign_bytes` and `get_signers`.
- `keeper` defines the following:
  - `Keeper`, with `add_super`, `delete_super`, `get_super`,
    `iterate_supers`, `authorized` and the paginated `supers` query, which
    takes a `PageRequest` and returns a `PageResponse`.
  - `MsgServer`. Only a genesis super may add or delete supers, and genesis
    supers cannot be deleted.
  - `new_querier`, which answers the `supers` path with JSON.
- `module` defines `init_genesis`, `export_genesis`, `validate_genesis`,
  `new_handler` and `AppModule`.

### `irishub.mint`: block inflation

- `model` defines `Minter`, `Params` and `GenesisState`. It has
  `default_minter`, `default_params`, `validate_minter`, `validate_inflation`,
  `validate_mint_denom` and `validate_genesis`. Inflation must lie in
  [0, 0.2]. Each block mints `inflation * inflation_base / 6311520`, truncated
  to an integer.
- `keeper` defines `Keeper`, which has the following methods:
  - `get_minter`, `set_minter`, `get_params`, `set_params` and `params`.
  - `mint_coins`, which mints into the mint module account.
  - `add_collected_fees`, which moves coins to the fee collector.

  It also defines `new_querier`, which answers the `parameters` path.
- `simulation` defines `new_decode_store`, `gen_inflation`,
  `randomized_gen_state`, `param_changes` and `ParamChange`. Pass a
  `random.Random` to the functions that take one.
- `module` defines `begin_blocker`, `init_genesis`, `export_genesis`,
  `validate_genesis` and `AppModule`. `begin_blocker` only records the block
  time at heights up to 1. At greater heights it mints the block provision,
  credits the fee collector and emits a `mint` event.

### `irishub.evm.fees`: transaction fees

`FeeKeeper.refund_gas` pays `leftover_gas * gas_price` from the fee collector
to a hex fee-payer address. `FeeKeeper.burn_base_fee` burns
`base_fee * gas_used` from the fee collector and emits an `eip1559_burnt`
event.

## Installation

```
pip install .
```

## Example: minting one block

```python
from irishub.sdk.store import Context
from irishub.sdk.bank import BankKeeper
from irishub.mint.keeper import Keeper
from irishub.mint.model import default_minter, default_params
from irishub.mint.module import begin_blocker

bank = BankKeeper()
ctx = Context(block_height=2)
keeper = Keeper(bank)
keeper.set_minter(ctx, default_minter())
keeper.set_params(ctx, default_params())

begin_blocker(ctx, keeper)
print(bank.balances(bank.module_address("fee_collector")))
```

## Example: managing supers

```python
from irishub.sdk.address import AccAddress, address_hash
from irishub.sdk.store import Context
from irishub.guardian.keeper import Keeper, MsgServer
from irishub.guardian.msgs import new_msg_add_super
from irishub.guardian.supers import AccountType, new_super

ctx = Context()
keeper = Keeper()
root = AccAddress(address_hash(b"root"))
keeper.add_super(ctx, new_super("root", AccountType.GENESIS, root, root))

newcomer = AccAddress(address_hash(b"newcomer"))
MsgServer(keeper).add_super(ctx, new_msg_add_super("ops", newcomer, root))
print(keeper.authorized(ctx, newcomer))  # True
```

## Errors

Operations that the ledger rejects raise `SdkError`. Examples are an unknown
operator, an existing super, insufficient funds and invalid mint parameters.
Call `is_kind` on the error to check which registered kind it is. A malformed
address or genesis document raises `ValueError`.

## What this package does not do

- It has no command-line tool.
- It runs no node, REST or gRPC server.
- It keeps no state on disk. All stores and balances live in memory for as
  long as the objects that hold them exist.
- It does not execute EVM transactions. It only covers the refund and burn of
  their fees.

## Tests

```
pip install .[test]
pytest
```