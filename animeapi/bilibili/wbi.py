"""WBI request signing for bilibili web APIs."""

from __future__ import annotations

import hashlib
import threading
import time
from urllib.parse import parse_qsl, urlencode, urlsplit

import requests

NAV_URL = "https://api.bilibili.com/x/web-interface/nav"
TIMEOUT = 30
_CACHE_SECONDS = 600

MIXIN_KEY_ENC_TAB = (
    46, 47, 18, 2, 53, 8, 23, 32, 15, 50, 10, 31, 58, 3, 45, 35, 27, 43, 5, 49,
    33, 9, 42, 19, 29, 28, 14, 39, 12, 38, 41, 13, 37, 48, 7, 16, 24, 55, 40,
    61, 26, 17, 0, 1, 60, 51, 30, 4, 22, 25, 54, 21, 56, 59, 6, 63, 57, 62, 11,
    36, 20, 34, 44, 52,
)
_REMOVED_CHARS = str.maketrans("", "", "!'()*")

_cache_lock = threading.Lock()
_cached_keys = ("", "")
_last_update: float | None = None


def sign_url(url):
    """Return ``url`` with ``wts`` and ``w_rid`` signature parameters added."""
    parts = urlsplit(url)
    img_key, sub_key = _get_wbi_keys_cached()
    params = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        params.setdefault(key, value)
    signed = wbi_sign(params, img_key, sub_key)
    query = urlencode(sorted(signed.items()))
    return parts._replace(query=query).geturl()


def get_mixin_key(orig):
    """Shuffle ``orig`` by the mixin table and keep 32 characters."""
    picked = [orig[v] for v in MIXIN_KEY_ENC_TAB if v < len(orig)]
    return "".join(picked[:32])


def wbi_sign(params, img_key, sub_key):
    """Return a copy of ``params`` with ``wts`` and ``w_rid`` set."""
    mixin_key = get_mixin_key(img_key + sub_key)
    signed = {k: str(v).translate(_REMOVED_CHARS) for k, v in params.items()}
    signed["wts"] = str(int(time.time()))
    text = "&".join(f"{k}={signed[k]}" for k in sorted(signed))
    signed["w_rid"] = hashlib.md5((text + mixin_key).encode()).hexdigest()
    return signed


def _key_from_url(url):
    name = url[url.rfind("/") + 1:]
    dot = name.rfind(".")
    return name[:dot] if dot >= 0 else name


def get_wbi_keys():
    """Fetch the current ``(img_key, sub_key)``; empty strings when unavailable."""
    try:
        response = requests.get(NAV_URL, timeout=TIMEOUT)
        response.raise_for_status()
        wbi_img = response.json().get("data", {}).get("wbi_img", {})
    except (requests.RequestException, ValueError, AttributeError):
        wbi_img = {}
    if not isinstance(wbi_img, dict):
        wbi_img = {}
    img_url = str(wbi_img.get("img_url") or "")
    sub_url = str(wbi_img.get("sub_url") or "")
    return _key_from_url(img_url), _key_from_url(sub_url)


def _get_wbi_keys_cached():
    global _cached_keys, _last_update
    with _cache_lock:
        now = time.monotonic()
        if _last_update is None or now - _last_update > _CACHE_SECONDS:
            _cached_keys = get_wbi_keys()
            _last_update = now
        return _cached_keys