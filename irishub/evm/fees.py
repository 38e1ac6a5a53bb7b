"""Base-fee burning and gas refunds for Ethereum transactions."""

from __future__ import annotations

from ..sdk.address import ADDRESS_LENGTH, AccAddress
from ..sdk.bank import FEE_COLLECTOR_NAME, BankKeeper
from ..sdk.coins import Coin, Coins
from ..sdk.errors import ERR_INSUFFICIENT_FUNDS, SdkError, register
from ..sdk.store import Context, Event

MODULE_NAME = "evm"

EVENT_EIP1559_BURNT = "eip1559_burnt"
ATTRIBUTE_KEY_BASE_FEE = "base_fee"
ATTRIBUTE_KEY_BURNT_FEE = "burnt_fee"

ERR_INVALID_REFUND = register(MODULE_NAME, 15, "invalid gas refund amount")


def _hex_to_address(text: str) -> AccAddress:
    """Interpret hexadecimal text as a 20-byte address, left-padding or cropping."""
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if len(text) % 2:
        text = "0" + text
    data = bytes.fromhex(text)
    if len(data) > ADDRESS_LENGTH:
        data = data[-ADDRESS_LENGTH:]
    return AccAddress(data.rjust(ADDRESS_LENGTH, b"\x00"))


class FeeKeeper:
    """Moves transaction fees held by the fee collector."""

    def __init__(self, bank: BankKeeper, fee_collector_name: str = FEE_COLLECTOR_NAME) -> None:
        self.bank = bank
        self.fee_collector_name = fee_collector_name

    def burn_base_fee(self, ctx: Context, gas_used: int, base_fee: int, denom: str) -> Coin:
        """Burn ``base_fee * gas_used`` from the fee collector and emit an event."""
        burn_coin = Coin(denom, base_fee * gas_used)
        self.bank.burn_coins(self.fee_collector_name, Coins([burn_coin]))
        ctx.event_manager.emit(
            Event(
                EVENT_EIP1559_BURNT,
                (
                    (ATTRIBUTE_KEY_BURNT_FEE, str(burn_coin)),
                    (ATTRIBUTE_KEY_BASE_FEE, str(base_fee)),
                ),
            )
        )
        return burn_coin

    def refund_gas(
        self,
        ctx: Context,
        gas_price: int,
        leftover_gas: int,
        fee_payer: str,
        denom: str,
    ) -> Coins:
        """Return the price of unused gas to ``fee_payer``, a hex address.

        Returns the refunded coins, which are empty when nothing is owed.
        """
        remaining = leftover_gas * gas_price
        if remaining < 0:
            raise ERR_INVALID_REFUND.wrap(
                f"refunded amount value cannot be negative {remaining}"
            )
        if remaining == 0:
            return Coins()
        refunded = Coins([Coin(denom, remaining)])
        recipient = _hex_to_address(fee_payer)
        try:
            self.bank.send_coins_from_module_to_account(
                self.fee_collector_name, recipient, refunded
            )
        except SdkError as exc:
            raise ERR_INSUFFICIENT_FUNDS.wrap(
                f"failed to refund {leftover_gas} leftover gas ({refunded}): "
                f"fee collector account failed to refund fees: {exc}"
            ) from exc
        return refunded