import pytest

from irishub.sdk.address import AccAddress, address_hash
from irishub.sdk.bank import FEE_COLLECTOR_NAME, BankKeeper
from irishub.sdk.coins import Coin, Coins
from irishub.sdk.errors import (
    ERR_INSUFFICIENT_FUNDS,
    ERR_UNAUTHORIZED,
    ERR_UNKNOWN_ADDRESS,
    SdkError,
)

MINTED = Coins([Coin("iris", 1000)])


def test_module_address_is_hash_of_name():
    bank = BankKeeper()
    assert bank.module_address("mint") == AccAddress(address_hash(b"mint"))


def test_fresh_balance_is_empty():
    bank = BankKeeper()
    assert bank.balances(AccAddress(address_hash(b"nobody"))).is_empty()


def test_mint_credits_module_and_supply():
    bank = BankKeeper()
    bank.mint_coins("mint", MINTED)
    assert bank.balances(bank.module_address("mint")) == MINTED
    assert bank.supply == MINTED


def test_mint_without_permission():
    bank = BankKeeper()
    with pytest.raises(SdkError) as info:
        bank.mint_coins(FEE_COLLECTOR_NAME, MINTED)
    assert info.value.is_kind(ERR_UNAUTHORIZED)


def test_unknown_module():
    bank = BankKeeper()
    with pytest.raises(SdkError) as info:
        bank.mint_coins("nonexistent", MINTED)
    assert info.value.is_kind(ERR_UNKNOWN_ADDRESS)


def test_send_module_to_module_moves_everything():
    bank = BankKeeper()
    before = bank.balances(bank.module_address(FEE_COLLECTOR_NAME))
    bank.mint_coins("mint", MINTED)
    bank.send_coins_from_module_to_module("mint", FEE_COLLECTOR_NAME, MINTED)
    assert bank.balances(bank.module_address("mint")).is_empty()
    after = bank.balances(bank.module_address(FEE_COLLECTOR_NAME))
    assert after.sub(before) == MINTED
    assert bank.supply == MINTED


def test_send_to_account():
    bank = BankKeeper()
    account = AccAddress(address_hash(b"sender"))
    bank.mint_coins("mint", MINTED)
    bank.send_coins_from_module_to_account("mint", account, MINTED)
    assert bank.balances(account) == MINTED


def test_insufficient_funds():
    bank = BankKeeper()
    bank.mint_coins("mint", MINTED)
    with pytest.raises(SdkError) as info:
        bank.send_coins_from_module_to_module(
            "mint", FEE_COLLECTOR_NAME, MINTED.add(MINTED)
        )
    assert info.value.is_kind(ERR_INSUFFICIENT_FUNDS)
    assert bank.balances(bank.module_address("mint")) == MINTED


def test_burn_reduces_balance_and_supply():
    bank = BankKeeper()
    bank.mint_coins("mint", MINTED)
    bank.send_coins_from_module_to_module("mint", FEE_COLLECTOR_NAME, MINTED)
    bank.burn_coins(FEE_COLLECTOR_NAME, MINTED)
    assert bank.balances(bank.module_address(FEE_COLLECTOR_NAME)).is_empty()
    assert bank.supply.is_empty()


def test_burn_without_permission():
    bank = BankKeeper()
    bank.mint_coins("mint", MINTED)
    with pytest.raises(SdkError) as info:
        bank.burn_coins("mint", MINTED)
    assert info.value.is_kind(ERR_UNAUTHORIZED)


def test_custom_permissions():
    bank = BankKeeper({"evm": ("minter", "burner")})
    bank.mint_coins("evm", MINTED)
    bank.burn_coins("evm", MINTED)
    assert bank.supply.is_empty()
    with pytest.raises(SdkError):
        bank.mint_coins("mint", MINTED)