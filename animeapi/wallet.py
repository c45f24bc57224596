"""Currency wallets kept in a small SQLite database."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PATH = "data/wallet/wallet.db"
DEFAULT_WALLET_NAME = "Atri币"


@dataclass
class Wallet:
    """Money held by one user."""

    uid: int
    money: int = 0


class Storage:
    """SQLite-backed wallet table."""

    def __init__(self, path):
        path = str(path)
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self.lock = threading.RLock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        with self.lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS storage ("
                "uid INTEGER PRIMARY KEY, money INTEGER NOT NULL DEFAULT 0)"
            )

    def wallet_of(self, uid):
        """Return the wallet of ``uid``; an unknown user holds nothing."""
        with self.lock:
            row = self._conn.execute(
                "SELECT uid, money FROM storage WHERE uid = ?", (uid,)
            ).fetchone()
        if row is None:
            return Wallet(uid=uid, money=0)
        return Wallet(uid=row[0], money=row[1])

    def group_wallets(self, sortable, uids):
        """Return the wallets of ``uids``, richest first when ``sortable``."""
        uids = list(uids)
        if not uids:
            return []
        order = "DESC" if sortable else "ASC"
        marks = ",".join("?" for _ in uids)
        with self.lock:
            rows = self._conn.execute(
                f"SELECT uid, money FROM storage WHERE uid IN ({marks}) "
                f"ORDER BY money {order}",
                uids,
            ).fetchall()
        return [Wallet(uid=uid, money=money) for uid, money in rows]

    def update(self, uid, money):
        """Store ``money`` as the balance of ``uid``."""
        with self.lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO storage (uid, money) VALUES (?, ?)",
                (uid, money),
            )


_storage: Storage | None = None
_storage_lock = threading.Lock()
_settings_lock = threading.Lock()
_settings = {"wallet_name": DEFAULT_WALLET_NAME}


def _current() -> Storage:
    global _storage
    with _storage_lock:
        if _storage is None:
            _storage = Storage(DEFAULT_PATH)
        return _storage


def use_storage(storage):
    """Make ``storage`` the store used by the module-level functions."""
    global _storage
    with _storage_lock:
        _storage = storage


def get_wallet_name():
    """Return the name of the currency."""
    with _settings_lock:
        return _settings["wallet_name"]


def set_wallet_name(name):
    """Rename the currency."""
    with _settings_lock:
        _settings["wallet_name"] = name


def get_wallet_of(uid):
    """Return how much money ``uid`` holds."""
    return _current().wallet_of(uid).money


def get_group_wallet_of(sortable, *args):
    """Return the wallets of the given uids, descending when ``sortable``."""
    return _current().group_wallets(sortable, args)


def insert_wallet_of(uid, money):
    """Add ``money`` (negative to take) to ``uid``; the balance never drops below zero."""
    storage = _current()
    with storage.lock:
        new_money = max(storage.wallet_of(uid).money + money, 0)
        storage.update(uid, new_money)