import pytest

from animeapi import wallet
from animeapi.wallet import Storage, Wallet


@pytest.fixture(autouse=True)
def storage(tmp_path):
    store = Storage(tmp_path / "sub" / "wallet.db")
    wallet.use_storage(store)
    return store


def test_unknown_user_has_no_money():
    assert wallet.get_wallet_of(42) == 0


def test_insert_adds_money():
    wallet.insert_wallet_of(1, 100)
    wallet.insert_wallet_of(1, 50)
    assert wallet.get_wallet_of(1) == 150


def test_balance_never_negative():
    wallet.insert_wallet_of(1, 100)
    wallet.insert_wallet_of(1, -150)
    assert wallet.get_wallet_of(1) == 0


def test_group_wallets_sorted_descending_and_ascending():
    wallet.insert_wallet_of(1, 10)
    wallet.insert_wallet_of(2, 30)
    wallet.insert_wallet_of(3, 20)
    wallet.insert_wallet_of(4, 99)
    desc = wallet.get_group_wallet_of(True, 1, 2, 3)
    asc = wallet.get_group_wallet_of(False, 1, 2, 3)
    assert [w.uid for w in desc] == [2, 3, 1]
    assert [w.uid for w in asc] == [1, 3, 2]
    assert Wallet(uid=2, money=30) in desc


def test_group_wallets_empty():
    assert wallet.get_group_wallet_of(True) == []


def test_wallet_name_round_trip():
    old = wallet.get_wallet_name()
    try:
        wallet.set_wallet_name("coin")
        assert wallet.get_wallet_name() == "coin"
    finally:
        wallet.set_wallet_name(old)


def test_storage_persists_between_instances(tmp_path):
    path = tmp_path / "persist.db"
    first = Storage(path)
    first.update(7, 77)
    second = Storage(path)
    assert second.wallet_of(7) == Wallet(uid=7, money=77)