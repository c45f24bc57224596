"""Endpoints, records and cookie storage for the bilibili APIs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

T_URL = "https://t.bilibili.com/"
LIVE_URL = "https://live.bilibili.com/"
DYNAMIC_DETAIL_URL = (
    "https://api.vc.bilibili.com/dynamic_svr/v1/dynamic_svr/get_dynamic_detail?dynamic_id={}"
)
MEMBER_CARD_URL = "https://api.bilibili.com/x/web-interface/card?mid={}"
ARTICLE_INFO_URL = "https://api.bilibili.com/x/article/viewinfo?id={}"
CV_URL = "https://www.bilibili.com/read/cv"
LIVE_ROOM_INFO_URL = (
    "https://api.live.bilibili.com/xlive/web-room/v1/index/getInfoByRoom?room_id={}"
)
L_URL = "https://live.bilibili.com/"
VIDEO_INFO_URL = "https://api.bilibili.com/x/web-interface/view?aid={}&bvid={}"
V_URL = "https://www.bilibili.com/video/"
SEARCH_USER_URL = (
    "http://api.bilibili.com/x/web-interface/search/type?search_type=bili_user&keyword={}"
)
VTB_DETAIL_URL = "https://api.vtbs.moe/v1/detail/{}"
MEDAL_WALL_URL = "https://api.live.bilibili.com/xlive/web-ucenter/user/MedalWall?target_id={}"
SPACE_HISTORY_URL = (
    "https://api.vc.bilibili.com/dynamic_svr/v1/dynamic_svr/space_history"
    "?host_uid={}&offset_dynamic_id={}&need_top=0"
)
LIVE_LIST_URL = "https://api.live.bilibili.com/room/v1/Room/get_status_info_by_uids"
DANMAKU_API = (
    "https://ukamnads.icu/api/v2/user?uId={}&pageNum={}&pageSize=5&target=-1&useEmoji=true"
)
DANMAKU_URL = "https://danmakus.com/user/{}"
ALL_GUARD_URL = "https://api.vtbs.moe/v1/guard/all"
VIDEO_SUMMARY_URL = (
    "https://api.bilibili.com/x/web-interface/view/conclusion/get?bvid={}&cid={}&up_mid={}"
)
NAV_URL = "https://api.bilibili.com/x/web-interface/nav"


def _int(value):
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _str(value):
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass
class Medal:
    """A fan medal shown on a user's medal wall."""

    uname: str = ""
    mid: int = 0
    medal_name: str = ""
    level: int = 0
    medal_color_start: int = 0
    medal_color_end: int = 0
    medal_color_border: int = 0

    @classmethod
    def from_dict(cls, data):
        info = data.get("medal_info") or {}
        return cls(
            uname=_str(data.get("target_name")),
            mid=_int(info.get("target_id")),
            medal_name=_str(info.get("medal_name")),
            level=_int(info.get("level")),
            medal_color_start=_int(info.get("medal_color_start")),
            medal_color_end=_int(info.get("medal_color_end")),
            medal_color_border=_int(info.get("medal_color_border")),
        )


def sort_medals(medals):
    """Return ``medals`` ordered from the highest level down."""
    return sorted(medals, key=lambda m: m.level, reverse=True)


@dataclass
class SearchResult:
    """A user found by a search."""

    mid: int = 0
    uname: str = ""
    gender: int = 0
    usign: str = ""
    level: int = 0

    @classmethod
    def from_dict(cls, data):
        return cls(
            mid=_int(data.get("mid")),
            uname=_str(data.get("uname")),
            gender=_int(data.get("gender")),
            usign=_str(data.get("usign")),
            level=_int(data.get("level")),
        )


@dataclass
class VtbDetail:
    """Statistics of a virtual streamer."""

    mid: int = 0
    uname: str = ""
    video: int = 0
    roomid: int = 0
    rise: int = 0
    follower: int = 0
    guard_num: int = 0
    area_rank: int = 0

    @classmethod
    def from_dict(cls, data):
        return cls(
            mid=_int(data.get("mid")),
            uname=_str(data.get("uname")),
            video=_int(data.get("video")),
            roomid=_int(data.get("roomid")),
            rise=_int(data.get("rise")),
            follower=_int(data.get("follower")),
            guard_num=_int(data.get("guardNum")),
            area_rank=_int(data.get("areaRank")),
        )


@dataclass
class GuardUser:
    """A user and the ships they hold in live rooms."""

    uname: str = ""
    face: str = ""
    mid: int = 0
    dd: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data):
        dd = data.get("dd") or []
        return cls(
            uname=_str(data.get("uname")),
            face=_str(data.get("face")),
            mid=_int(data.get("mid")),
            dd=[[_int(v) for v in row or []] for row in dd],
        )


class CookieConfig:
    """A bilibili cookie kept in a JSON file."""

    def __init__(self, path):
        self.path = Path(path)
        self.bilibili_cookie = ""

    def set(self, cookie):
        """Use ``cookie`` and write it to the file."""
        self.bilibili_cookie = cookie
        self.save()

    def load(self):
        """Return the cookie, reading the file if none is held yet."""
        if self.bilibili_cookie:
            return self.bilibili_cookie
        if not self.path.exists():
            raise FileNotFoundError("no cookie config")
        with self.path.open(encoding="utf-8") as fh:
            data = json.load(fh)
        if isinstance(data, dict):
            self.bilibili_cookie = _str(data.get("bilibili_cookie"))
        return self.bilibili_cookie

    def save(self):
        """Write the cookie to the file."""
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump({"bilibili_cookie": self.bilibili_cookie}, fh, ensure_ascii=False)
            fh.write("\n")