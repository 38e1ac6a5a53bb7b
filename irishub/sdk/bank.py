"""An in-memory bank holding balances of accounts and module accounts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .address import AccAddress, address_hash
from .coins import Coin, Coins
from .errors import ERR_INSUFFICIENT_FUNDS, ERR_UNAUTHORIZED, ERR_UNKNOWN_ADDRESS

FEE_COLLECTOR_NAME = "fee_collector"
MINTER = "minter"
BURNER = "burner"

DEFAULT_MODULE_PERMISSIONS: Mapping[str, tuple[str, ...]] = {
    FEE_COLLECTOR_NAME: (BURNER,),
    "mint": (MINTER,),
}


class BankKeeper:
    """Tracks balances, total supply and module account permissions."""

    def __init__(self, module_permissions: Mapping[str, Iterable[str]] | None = None) -> None:
        if module_permissions is None:
            module_permissions = DEFAULT_MODULE_PERMISSIONS
        self._permissions = {
            name: frozenset(perms) for name, perms in module_permissions.items()
        }
        self._balances: dict[AccAddress, Coins] = {}
        self.supply = Coins()

    def module_address(self, name: str) -> AccAddress:
        """Return the address of the module account called ``name``."""
        return AccAddress(address_hash(name.encode()))

    def balances(self, address: AccAddress) -> Coins:
        return self._balances.get(address, Coins())

    def _module_account(self, name: str, permission: str | None = None) -> AccAddress:
        if name not in self._permissions:
            raise ERR_UNKNOWN_ADDRESS.wrap(f"module account {name} does not exist")
        if permission is not None and permission not in self._permissions[name]:
            action = "mint" if permission == MINTER else "burn"
            raise ERR_UNAUTHORIZED.wrap(
                f"module account {name} does not have permissions to {action} tokens"
            )
        return self.module_address(name)

    def _withdraw(self, address: AccAddress, amount: Coins) -> None:
        balance = self.balances(address)
        for coin in amount:
            held = balance.amount_of(coin.denom)
            if held < coin.amount:
                raise ERR_INSUFFICIENT_FUNDS.wrap(
                    f"{Coin(coin.denom, held)} is smaller than {coin}"
                )
        self._balances[address] = balance.sub(amount)

    def _deposit(self, address: AccAddress, amount: Coins) -> None:
        self._balances[address] = self.balances(address).add(amount)

    def _transfer(self, sender: AccAddress, recipient: AccAddress, amount: Coins) -> None:
        self._withdraw(sender, amount)
        self._deposit(recipient, amount)

    def mint_coins(self, module: str, amount: Iterable[Coin]) -> None:
        """Create ``amount`` in the module account, which must be a minter."""
        amount = Coins(amount)
        address = self._module_account(module, MINTER)
        self._deposit(address, amount)
        self.supply = self.supply.add(amount)

    def burn_coins(self, module: str, amount: Iterable[Coin]) -> None:
        """Destroy ``amount`` held by the module account, which must be a burner."""
        amount = Coins(amount)
        address = self._module_account(module, BURNER)
        self._withdraw(address, amount)
        self.supply = self.supply.sub(amount)

    def send_coins_from_module_to_account(
        self, module: str, address: AccAddress, amount: Iterable[Coin]
    ) -> None:
        sender = self._module_account(module)
        self._transfer(sender, address, Coins(amount))

    def send_coins_from_module_to_module(
        self, sender: str, recipient: str, amount: Iterable[Coin]
    ) -> None:
        sender_address = self._module_account(sender)
        recipient_address = self._module_account(recipient)
        self._transfer(sender_address, recipient_address, Coins(amount))