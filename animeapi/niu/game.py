"""Commands of the niuniu game."""

from __future__ import annotations

import threading

from animeapi import wallet
from animeapi.niu.models import (
    ADDUSER_NO_NIUNIU,
    ALREADY_REGISTERED,
    CANNOT_FIGHT,
    NO_BOYS,
    NO_GIRLS,
    NO_MONEY,
    NO_NIUNIU,
    NO_NIUNIU_IN_AUCTION,
    NO_NIUNIU_TWO,
    AuctionInfo,
    BaseInfo,
    NiuDatabase,
    NiuError,
    UserInfo,
    filter_users,
    ranking,
)
from animeapi.niu.utils import generate_random_string, profit

DEFAULT_PATH = "data/niuniu/niuniu.db"
REDEEM_PRICE = 150

_lock = threading.RLock()
_database: NiuDatabase | None = None


def _db() -> NiuDatabase:
    global _database
    with _lock:
        if _database is None:
            _database = NiuDatabase(DEFAULT_PATH)
        return _database


def use_database(database):
    """Make ``database`` the store used by the game."""
    global _database
    with _lock:
        _database = database


def delete_word_niuniu(gid, uid):
    """Remove a player's niuniu."""
    with _lock:
        _db().delete(gid, uid)


def set_word_niuniu(gid, uid, length):
    """Add ``length`` (negative to shorten) to a player's niuniu."""
    with _lock:
        db = _db()
        user = db.get(gid, uid)
        user.length += length
        db.set(gid, user)


def get_word_niuniu(gid, uid):
    """Return the length of a player's niuniu."""
    with _lock:
        return _db().get(gid, uid).length


def get_ranking_info(gid, positive):
    """Return the players with positive lengths, or the others when not ``positive``."""
    with _lock:
        try:
            group = _db().all_of_group(gid)
        except NiuError:
            raise NiuError(NO_BOYS if positive else NO_GIRLS) from None
        return [BaseInfo(uid=u.uid, length=u.length) for u in filter_users(group, positive)]


def get_group_user_rank(gid, uid):
    """Return the place of ``uid`` in its group."""
    with _lock:
        db = _db()
        user = db.get(gid, uid)
        return ranking(db.all_of_group(gid), user.length, uid)


def view(gid, uid, name):
    """Describe a player's niuniu."""
    with _lock:
        db = _db()
        try:
            user = db.get(gid, uid)
        except NiuError:
            raise NiuError(NO_NIUNIU) from None
        length = user.length
        sex_long, sex = ("深", "♀️") if length < 0 else ("长", "♂️")
        place = ranking(db.all_of_group(gid), length, uid)
    return (
        f"\n📛{name}<{uid}>的牛牛信息\n⭕性别:{sex}\n⭕{sex_long}度:{length:.2f}cm"
        f"\n⭕排行:{place}\n⭕{generate_random_string(length)} "
    )


def hit_glue(gid, uid, prop):
    """Play one round alone, with an optional prop; return the message."""
    with _lock:
        db = _db()
        try:
            user = db.get(gid, uid)
        except NiuError:
            raise NiuError(NO_NIUNIU_TWO) from None
        message = user.process_niuniu_action(prop)
        db.set(gid, user)
        return message


def register(gid, uid):
    """Give a new player a niuniu of random length."""
    with _lock:
        db = _db()
        try:
            db.get(gid, uid)
        except NiuError:
            pass
        else:
            raise NiuError(ALREADY_REGISTERED)
        user = UserInfo(uid=uid, length=db.new_length())
        db.set(gid, user)
        return f"注册成功,你的牛牛现在有{user.length:.2f}cm"


def jj(gid, uid, adduser, prop):
    """Fight ``adduser``; return ``(message, adduser_new_length)``."""
    with _lock:
        db = _db()
        try:
            me = db.get(gid, uid)
        except NiuError:
            raise NiuError(NO_NIUNIU) from None
        try:
            opponent = db.get(gid, adduser)
        except NiuError:
            raise NiuError(ADDUSER_NO_NIUNIU) from None
        if uid == adduser:
            raise NiuError(CANNOT_FIGHT)
        message = me.process_jj_action(opponent, prop)
        db.set(gid, me)
        db.set(gid, opponent)
        return message, opponent.length


def cancel(gid, uid):
    """Remove a player's niuniu for good."""
    with _lock:
        db = _db()
        try:
            db.get(gid, uid)
        except NiuError:
            raise NiuError(NO_NIUNIU_TWO) from None
        try:
            db.delete(gid, uid)
        except NiuError:
            raise NiuError("遇到不可抗力因素，注销失败！") from None
        return "注销成功,你已经没有牛牛了"


def redeem(gid, uid, last_length):
    """Pay 150 coins to restore the niuniu to ``last_length``."""
    with _lock:
        money = wallet.get_wallet_of(uid)
        if money < REDEEM_PRICE:
            name = wallet.get_wallet_name()
            raise NiuError(f"赎牛牛需要150{name}，快去赚钱吧，目前仅有:{money}个{name}")
        wallet.insert_wallet_of(uid, -REDEEM_PRICE)
        db = _db()
        try:
            user = db.get(gid, uid)
        except NiuError:
            raise NiuError(NO_NIUNIU) from None
        user.length = last_length
        db.set(gid, user)


def store(gid, uid, n):
    """Buy shop item ``n``."""
    with _lock:
        db = _db()
        user = db.get(gid, uid)
        price = user.purchase_item(n)
        if wallet.get_wallet_of(uid) < price:
            raise NiuError(NO_MONEY)
        wallet.insert_wallet_of(uid, -price)
        db.set(gid, user)


def sell(gid, uid):
    """Sell a niuniu for coins and put it up for auction at twice the price."""
    with _lock:
        db = _db()
        try:
            user = db.get(gid, uid)
        except NiuError:
            raise NiuError(NO_NIUNIU) from None
        money, sold, message = profit(user.length)
        if not sold:
            raise NiuError(message)
        wallet.insert_wallet_of(uid, money)
        db.set_auction(gid, AuctionInfo(user_id=user.uid, length=user.length, money=money * 2))
        return message


def show_auction(gid):
    """Return the niuniu for sale in group ``gid``."""
    with _lock:
        return _db().all_auctions(gid)


def auction(gid, uid, index):
    """Buy the auction at position ``index``; return the message."""
    with _lock:
        db = _db()
        try:
            items = db.all_auctions(gid)
        except NiuError:
            raise NiuError(NO_NIUNIU_IN_AUCTION) from None
        if not 0 <= index < len(items):
            raise NiuError(NO_NIUNIU_IN_AUCTION)
        item = items[index]
        try:
            wallet.insert_wallet_of(uid, -item.money)
        except Exception:
            raise NiuError(NO_MONEY) from None
        try:
            user = db.get(gid, uid)
        except NiuError:
            user = UserInfo(uid=uid)
        user.length = item.length
        bonus = item.money > 500
        if bonus:
            user.weige += 2
            user.artifact += 2
        db.set(gid, user)
        db.delete_auction(gid, item.id)
    if bonus:
        return f"恭喜你购买成功,当前长度为{user.length:.2f}cm,此次购买将赠送你2个伟哥,2个媚药"
    return f"恭喜你购买成功,当前长度为{user.length:.2f}cm"


def bag(gid, uid):
    """List the props a player holds."""
    with _lock:
        try:
            user = _db().get(gid, uid)
        except NiuError:
            raise NiuError(NO_NIUNIU) from None
    return (
        "当前牛牛背包如下\n"
        f"伟哥: {user.weige}\n"
        f"媚药: {user.philter}\n"
        f"击剑神器: {user.artifact}\n"
        f"击剑神稽: {user.shenji}\n"
    )