"""Queries against the bilibili web APIs."""

from __future__ import annotations

import json
import random
import re

import requests

from animeapi.bilibili.types import (
    ALL_GUARD_URL,
    ARTICLE_INFO_URL,
    DYNAMIC_DETAIL_URL,
    LIVE_ROOM_INFO_URL,
    MEDAL_WALL_URL,
    MEMBER_CARD_URL,
    SEARCH_USER_URL,
    VIDEO_INFO_URL,
    VIDEO_SUMMARY_URL,
    VTB_DETAIL_URL,
    GuardUser,
    Medal,
    SearchResult,
    VtbDetail,
)
from animeapi.bilibili.wbi import sign_url

TIMEOUT = 30
_INTEGER = re.compile(r"[+-]?\d+")
_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
)


class APINeedCookieError(Exception):
    """The API refuses to answer without a login cookie."""

    def __init__(self, message="api need cookie"):
        super().__init__(message)


def _headers(cookie_config, **extra):
    headers = dict(extra)
    if cookie_config is not None:
        headers["cookie"] = cookie_config.load()
    return headers


def _get(url, headers=None):
    response = requests.get(url, headers=headers, timeout=TIMEOUT)
    response.raise_for_status()
    return response.json()


def _at(body, *path):
    value = body
    for key in path:
        if not isinstance(value, dict) or key not in value:
            raise ValueError("missing field " + ".".join(path))
        value = value[key]
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("field " + ".".join(path) + " is not an object")
    return value


def _load_object(text):
    value = json.loads(text)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    return value


def search_user(cookie_config, keyword):
    """Search users by ``keyword``."""
    response = requests.get(SEARCH_USER_URL.format(keyword),
                            headers=_headers(cookie_config), timeout=TIMEOUT)
    if response.status_code != 200:
        raise requests.HTTPError(f"status code: {response.status_code}", response=response)
    data = _at(response.json(), "data")
    return [SearchResult.from_dict(item) for item in data.get("result") or []]


def get_vtb_detail(uid):
    """Return statistics of the virtual streamer ``uid``."""
    body = _get(VTB_DETAIL_URL.format(uid))
    if not isinstance(body, dict):
        raise ValueError("expected a JSON object")
    return VtbDetail.from_dict(body)


def load_card_detail(text):
    """Parse a card from its JSON text."""
    return _load_object(text)


def load_dynamic_detail(text):
    """Parse a dynamic card from its JSON text."""
    return _load_object(text)


def get_dynamic_detail(cookie_config, dynamic_id):
    """Return the dynamic card with id ``dynamic_id``."""
    body = _get(DYNAMIC_DETAIL_URL.format(dynamic_id), headers=_headers(cookie_config))
    return _at(body, "data", "card")


def get_member_card(uid):
    """Return the profile card of user ``uid``."""
    body = _get(MEMBER_CARD_URL.format(uid),
                headers={"User-Agent": random.choice(_USER_AGENTS)})
    return _at(body, "data", "card")


def get_medal_wall(cookie_config, uid):
    """Return the fan medals of user ``uid``."""
    body = _get(MEDAL_WALL_URL.format(uid), headers=_headers(cookie_config))
    if not isinstance(body, dict):
        raise ValueError("expected a JSON object")
    code = body.get("code", 0)
    if code == -101:
        raise APINeedCookieError()
    if code != 0:
        raise RuntimeError(str(body.get("message", "")))
    data = body.get("data") or {}
    return [Medal.from_dict(item) for item in data.get("list") or []]


def get_all_guard(mid):
    """Return the ships held by user ``mid``."""
    body = _get(ALL_GUARD_URL)
    if not isinstance(body, dict) or not isinstance(body.get(mid), dict):
        raise ValueError(f"no guard data for {mid}")
    return GuardUser.from_dict(body[mid])


def get_article_info(article_id):
    """Return the card of article ``article_id``."""
    return _at(_get(ARTICLE_INFO_URL.format(article_id)), "data")


def get_live_room_info(room_id):
    """Return the card of live room ``room_id``."""
    return _at(_get(LIVE_ROOM_INFO_URL.format(room_id)), "data")


def _video_info_url(video_id):
    if _INTEGER.fullmatch(video_id):
        return VIDEO_INFO_URL.format(video_id, "")
    return VIDEO_INFO_URL.format("", video_id)


def get_video_info(video_id):
    """Return the card of a video given by av number or BV id."""
    return _at(_get(_video_info_url(video_id)), "data")


def get_video_summary(cookie_config, video_id):
    """Return the AI summary of a video given by av number or BV id."""
    card = get_video_info(video_id)
    owner = card.get("owner") or {}
    url = sign_url(VIDEO_SUMMARY_URL.format(
        card.get("bvid") or "", card.get("cid") or 0, owner.get("mid") or 0,
    ))
    headers = _headers(cookie_config, **{"User-Agent": random.choice(_USER_AGENTS)})
    body = _get(url, headers=headers)
    if not isinstance(body, dict):
        raise ValueError("expected a JSON object")
    return body