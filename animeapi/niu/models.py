"""Players, props and storage of the niuniu game."""

from __future__ import annotations

import math
import random
import sqlite3
import threading
from dataclasses import dataclass, fields
from pathlib import Path

from animeapi.niu.utils import (
    fencing,
    hit_glue,
    hit_glue_niuniu,
    random_choice,
)

NO_BOYS = "暂时没有男孩子哦"
NO_GIRLS = "暂时没有女孩子哦"
NO_NIUNIU = "你还没有牛牛呢,快去注册吧！"
NO_NIUNIU_IN_AUCTION = "拍卖行还没有牛牛呢"
NO_MONEY = "你的钱不够快去赚钱吧！"
ADDUSER_NO_NIUNIU = "对方还没有牛牛呢，不能🤺"
CANNOT_FIGHT = "你要和谁🤺？你自己吗？"
NO_NIUNIU_TWO = "你还没有牛牛呢，咋的你想凭空造一个啊"
ALREADY_REGISTERED = "你已经注册过了"
INVALID_PROP_TYPE = "道具类别传入错误"
INVALID_PROP_USAGE_SCOPE = "道具使用域错误"
PROP_NOT_FOUND = "道具不存在"
INVALID_CHOICE = "无效的选择"

DAJIAO_PROPS = ("伟哥", "媚药")
JJ_PROPS = ("击剑神器", "击剑神稽")

_PROP_FIELDS = {
    "伟哥": ("weige", "你还没有伟哥呢,不能使用"),
    "媚药": ("philter", "你还没有媚药呢,不能使用"),
    "击剑神器": ("artifact", "你还没有击剑神器呢,不能使用"),
    "击剑神稽": ("shenji", "你还没有击剑神稽呢,不能使用"),
}

# item number -> (price, prop field, amount)
_SHOP = {
    1: (300, "weige", 5),
    2: (300, "philter", 5),
    3: (500, "artifact", 2),
    4: (500, "shenji", 2),
}


class NiuError(Exception):
    """A rule of the game was broken; the message is meant for the player."""


@dataclass
class UserInfo:
    """One player's niuniu and bag."""

    uid: int
    length: float = 0.0
    user_count: int = 0
    weige: int = 0
    philter: int = 0
    artifact: int = 0
    shenji: int = 0
    buff1: int = 0
    buff2: int = 0
    buff3: int = 0
    buff4: int = 0
    buff5: int = 0

    def use_weige(self):
        """Return ``(message, new_length)`` after using a 伟哥."""
        reduce = abs(hit_glue(self.length))
        length = self.length + reduce
        return random_choice([
            f"哈哈，你这一用道具，牛牛就像是被激发了潜能，增加了{reduce:.2f}cm！看来今天是个大日子呢！",
            f"你这是用了什么神奇的道具？牛牛竟然增加了{reduce:.2f}cm，简直是牛气冲天！",
            f"使用道具后，你的牛牛就像是开启了加速模式，一下增加了{reduce:.2f}cm，这成长速度让人惊叹！",
        ]), length

    def use_philter(self):
        """Return ``(message, new_length)`` after using a 媚药."""
        reduce = abs(hit_glue(self.length))
        length = self.length - reduce
        return random_choice([
            f"你使用媚药,咿呀咿呀一下使当前长度发生了一些变化，当前长度{length:.2f}",
            f"看来你追求的是‘微观之美’，故意使用道具让牛牛凹进去了{reduce:.2f}cm！",
            f"缩小奇迹’在你身上发生了，牛牛凹进去了{reduce:.2f}cm，你的选择真是独特！",
        ]), length

    def _fight_change(self, oppo_length):
        if self.length - oppo_length > 0:
            return hit_glue(self.length + oppo_length)
        return hit_glue((self.length + oppo_length) / 2)

    def use_artifact(self, oppo_length):
        """Return ``(message, my_length, oppo_length)`` after a fight with 击剑神器."""
        change = self._fight_change(oppo_length)
        my_length = self.length + change
        return random_choice([
            f"凭借神秘道具的力量，你让对方在你的长度面前俯首称臣！你的长度增加了{change:.2f}cm，当前长度达到了{my_length:.2f}cm",
            f"神器在手，天下我有！你使用道具后，长度猛增{change:.2f}cm，现在的总长度是{my_length:.2f}cm，无人能敌！",
            f"这就是道具的魔力！你轻松增加了{change:.2f}cm，让对手望尘莫及，当前长度为{my_length:.2f}cm！",
            f"道具一出，谁与争锋！你的长度因道具而增长{change:.2f}cm，现在的长度是{my_length:.2f}cm，霸气尽显！",
            f"使用道具的你，如同获得神助！你的长度增长了{change:.2f}cm，达到{my_length:.2f}cm的惊人长度，胜利自然到手！",
        ]), my_length, oppo_length - change / 1.3

    def use_shenji(self, oppo_length):
        """Return ``(message, my_length, oppo_length)`` after a fight with 击剑神稽."""
        change = self._fight_change(oppo_length)
        my_length = self.length - change
        if my_length > 0:
            message = random_choice([
                f"哦吼！？看来你的牛牛因为使用了神秘道具而缩水了呢🤣🤣🤣！缩小了{change:.2f}cm！",
                f"哈哈，看来这个道具有点儿调皮，让你的长度缩水了{change:.2f}cm！现在你的长度是{my_length:.2f}cm，下次可得小心使用哦！",
                f"使用道具后，你的牛牛似乎有点儿害羞，缩水了{change:.2f}cm！现在的长度是{my_length:.2f}cm，希望下次它能挺直腰板！",
                f"哎呀，这个道具的效果有点儿意外，你的长度减少了{change:.2f}cm，现在只有{my_length:.2f}cm了！下次选道具可得睁大眼睛！",
            ])
        else:
            message = random_choice([
                f"哦哟，小姐姐真是玩得一手好游戏，使用道具后数值又降低了{change:.2f}cm，小巧得更显魅力！",
                f"看来小姐姐喜欢更加精致的风格，使用道具后，数值减少了{change:.2f}cm，更加迷人了！",
                f"小姐姐的每一次变化都让人惊喜，使用道具后，数值减少了{change:.2f}cm，更加优雅动人！",
                f"小姐姐这是在展示什么是真正的精致小巧，使用道具后，数值减少了{change:.2f}cm，美得不可方物！",
            ])
        return message, my_length, oppo_length + 0.7 * change

    def apply_prop(self, prop):
        """Take one ``prop`` out of the bag."""
        entry = _PROP_FIELDS.get(prop)
        if entry is None:
            raise NiuError(PROP_NOT_FOUND)
        name, message = entry
        count = getattr(self, name)
        if count <= 0:
            raise NiuError(message)
        setattr(self, name, count - 1)

    def check_props(self, prop, prop_sort):
        """Check that ``prop`` may be used for ``prop_sort`` ("dajiao" or "jj")."""
        valid = {"dajiao": DAJIAO_PROPS, "jj": JJ_PROPS}.get(prop_sort)
        if valid is None:
            raise NiuError(INVALID_PROP_TYPE)
        if prop in valid:
            return
        conflicting = JJ_PROPS if prop_sort == "dajiao" else DAJIAO_PROPS
        if prop in conflicting:
            raise NiuError(INVALID_PROP_USAGE_SCOPE)
        raise NiuError(PROP_NOT_FOUND)

    def purchase_item(self, n):
        """Put shop item ``n`` into the bag and return its price."""
        item = _SHOP.get(n)
        if item is None:
            raise NiuError(INVALID_CHOICE)
        price, name, amount = item
        setattr(self, name, getattr(self, name) + amount)
        return price

    def process_niuniu_action(self, prop):
        """Play one round alone, using ``prop`` if given; return the message."""
        if prop:
            self.check_props(prop, "dajiao")
            self.apply_prop(prop)
        if prop == "伟哥":
            message, self.length = self.use_weige()
        elif prop == "媚药":
            message, self.length = self.use_philter()
        else:
            message, self.length = hit_glue_niuniu(self.length)
        return message

    def process_jj_action(self, opponent, prop):
        """Fight ``opponent``, using ``prop`` if given; return the message."""
        if prop:
            self.check_props(prop, "jj")
            self.apply_prop(prop)
        if prop == "击剑神稽":
            message, self.length, opponent.length = self.use_shenji(opponent.length)
        elif prop == "击剑神器":
            message, self.length, opponent.length = self.use_artifact(opponent.length)
        else:
            message, self.length, opponent.length = fencing(self.length, opponent.length)
        return message


@dataclass
class AuctionInfo:
    """A niuniu waiting in the auction house."""

    id: int = 0
    user_id: int = 0
    length: float = 0.0
    money: int = 0


@dataclass
class BaseInfo:
    """A player and the length of the niuniu."""

    uid: int
    length: float


def filter_users(users, positive):
    """Keep the users with positive lengths, or the rest when not ``positive``."""
    if positive:
        return [u for u in users if u.length > 0]
    return [u for u in users if u.length <= 0]


def ranking(users, length, uid):
    """Return the 1-based place of ``uid``, or -1 when absent.

    Longer ranks first for positive ``length``, deeper first otherwise.
    """
    ordered = sorted(users, key=lambda u: u.length, reverse=length > 0)
    for place, user in enumerate(ordered, start=1):
        if user.uid == uid:
            return place
    return -1


_USER_COLUMNS = (
    ("UID", "INTEGER PRIMARY KEY"),
    ("Length", "REAL"),
    ("UserCount", "INTEGER"),
    ("WeiGe", "INTEGER"),
    ("Philter", "INTEGER"),
    ("Artifact", "INTEGER"),
    ("ShenJi", "INTEGER"),
    ("Buff1", "INTEGER"),
    ("Buff2", "INTEGER"),
    ("Buff3", "INTEGER"),
    ("Buff4", "INTEGER"),
    ("Buff5", "INTEGER"),
)
_AUCTION_COLUMNS = (
    ("ID", "INTEGER PRIMARY KEY"),
    ("UserID", "INTEGER"),
    ("Length", "REAL"),
    ("Money", "INTEGER"),
)
_USER_NAMES = ", ".join(name for name, _ in _USER_COLUMNS)
_AUCTION_NAMES = ", ".join(name for name, _ in _AUCTION_COLUMNS)


def _schema(columns):
    return ", ".join(f"{name} {kind}" for name, kind in columns)


def _values(obj):
    return tuple(getattr(obj, f.name) for f in fields(obj))


class NiuDatabase:
    """One table of players per group, one auction table per group."""

    def __init__(self, path):
        path = str(path)
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(path, check_same_thread=False)

    @staticmethod
    def _group_table(gid):
        return f'"{int(gid)}"'

    @staticmethod
    def _auction_table(gid):
        return f'"auction_{int(gid)}"'

    def _exists(self, table):
        row = self._conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table.strip('"'),),
        ).fetchone()
        return row is not None

    def new_length(self):
        """Return a starting length between 1.00 and 9.99."""
        return float(random.randint(1, 9)) + random.randrange(100) / 100

    def get(self, gid, uid):
        """Return the player ``uid`` of group ``gid``."""
        table = self._group_table(gid)
        with self._lock:
            if not self._exists(table):
                raise NiuError(NO_NIUNIU)
            row = self._conn.execute(
                f"SELECT {_USER_NAMES} FROM {table} WHERE UID = ?", (uid,)
            ).fetchone()
        if row is None:
            raise NiuError(NO_NIUNIU)
        return UserInfo(*row)

    def set(self, gid, user):
        """Insert or replace ``user`` in group ``gid``."""
        table = self._group_table(gid)
        marks = ", ".join("?" for _ in _USER_COLUMNS)
        with self._lock, self._conn:
            self._conn.execute(f"CREATE TABLE IF NOT EXISTS {table} ({_schema(_USER_COLUMNS)})")
            self._conn.execute(
                f"INSERT OR REPLACE INTO {table} ({_USER_NAMES}) VALUES ({marks})",
                _values(user),
            )

    def delete(self, gid, uid):
        """Remove the player ``uid`` from group ``gid``."""
        table = self._group_table(gid)
        with self._lock, self._conn:
            if not self._exists(table):
                raise NiuError(NO_NIUNIU)
            self._conn.execute(f"DELETE FROM {table} WHERE UID = ?", (uid,))

    def all_of_group(self, gid):
        """Return every player of group ``gid`` in storage order."""
        table = self._group_table(gid)
        with self._lock:
            if not self._exists(table):
                raise NiuError(f"group {gid} has no niuniu")
            rows = self._conn.execute(
                f"SELECT {_USER_NAMES} FROM {table} ORDER BY rowid"
            ).fetchall()
        return [UserInfo(*row) for row in rows]

    def set_auction(self, gid, info):
        """Give ``info`` a fresh id and put it up for auction in group ``gid``."""
        table = self._auction_table(gid)
        marks = ", ".join("?" for _ in _AUCTION_COLUMNS)
        with self._lock, self._conn:
            self._conn.execute(f"CREATE TABLE IF NOT EXISTS {table} ({_schema(_AUCTION_COLUMNS)})")
            (top,) = self._conn.execute(f"SELECT MAX(ID) FROM {table}").fetchone()
            info.id = 1 if top is None else top + 1
            self._conn.execute(
                f"INSERT OR REPLACE INTO {table} ({_AUCTION_NAMES}) VALUES ({marks})",
                _values(info),
            )

    def delete_auction(self, gid, auction_id):
        """Remove auction ``auction_id`` from group ``gid``."""
        table = self._auction_table(gid)
        with self._lock, self._conn:
            if not self._exists(table):
                raise NiuError(NO_NIUNIU_IN_AUCTION)
            self._conn.execute(f"DELETE FROM {table} WHERE ID = ?", (auction_id,))

    def all_auctions(self, gid):
        """Return every auction of group ``gid`` in storage order."""
        table = self._auction_table(gid)
        with self._lock:
            if not self._exists(table):
                raise NiuError(NO_NIUNIU_IN_AUCTION)
            rows = self._conn.execute(
                f"SELECT {_AUCTION_NAMES} FROM {table} ORDER BY rowid"
            ).fetchall()
        return [AuctionInfo(*row) for row in rows]


# keep math imported for callers that extend the rules with it
_ = math