"""A folder-backed pool of pictures, refilled from a remote source."""

from __future__ import annotations

import io
import logging
import os
import random
import threading
from functools import lru_cache

import requests
from PIL import Image, UnidentifiedImageError

DEFAULT_POOL_DIR = "data/setupool"
DEFAULT_IMAGE_URL = "https://img.moehu.org/pic.php?id=pc"
DEFAULT_TIMEOUT = 60.0
HTTP_TIMEOUT = 60

NIL_FOLDER = "nil folder"
NO_SUCH_TYPE = "no such type"
EMPTY_TYPE = "empty type"

_FORMATS = frozenset({"gif", "jpeg", "png", "webp"})
_LOCAL_TRIES = 128

log = logging.getLogger(__name__)


class SetuError(Exception):
    """The pool cannot provide a picture."""


def _run_with_timeout(func, arg, timeout):
    outcome = {}

    def target():
        try:
            outcome["value"] = func(arg)
        except Exception as exc:  # handed back to the caller
            outcome["error"] = exc

    worker = threading.Thread(target=target, daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        raise TimeoutError(f"no answer within {timeout}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


def _difference_hash(image):
    small = image.convert("RGB").resize((9, 8), Image.Resampling.BILINEAR)
    gray = [0.299 * r + 0.587 * g + 0.114 * b for r, g, b in small.getdata()]
    rows = [gray[i:i + 9] for i in range(0, len(gray), 9)]
    bits = [left < right for row in rows for left, right in zip(row, row[1:])]
    return sum(1 << (63 - i) for i, bit in enumerate(bits) if bit)


def _base16384(data):
    chars = []
    for offset in range(0, len(data), 7):
        chunk = data[offset:offset + 7]
        value = int.from_bytes(chunk.ljust(7, b"\0"), "big")
        count = -(-len(chunk) * 8 // 14)
        chars.extend(chr(0x4E00 + ((value >> (42 - 14 * k)) & 0x3FFF)) for k in range(count))
    rest = len(data) % 7
    if rest:
        chars.append(chr(0x3D00 + rest))
    return "".join(chars)


def _get_data(url):
    response = requests.get(url, timeout=HTTP_TIMEOUT)
    response.raise_for_status()
    return response.content


class Pool:
    """Pictures grouped by type in sub-folders of ``folder``.

    ``rolimg(typ)`` names a remote picture, ``getdat(source)`` fetches its
    bytes; each is given ``timeout`` seconds before the pool falls back to
    what is already stored.
    """

    def __init__(self, folder, rolimg, getdat, timeout):
        folder = str(folder)
        if not folder:
            raise SetuError(NIL_FOLDER)
        os.makedirs(folder, exist_ok=True)
        if not folder.endswith("/"):
            folder += "/"
        self.folder = folder
        self.rolimg = rolimg
        self.getdat = getdat
        self.timeout = timeout

    def roll(self, typ):
        """Fetch a new picture of ``typ`` into the pool, or pick a stored one."""
        directory = self.folder + typ
        if self.rolimg is None:
            return self._roll_local(directory)
        try:
            source = _run_with_timeout(self.rolimg, typ, self.timeout)
        except Exception as exc:
            log.warning("[setu.pool] roll img err: %s", exc)
            return self._roll_local(directory)
        try:
            data = _run_with_timeout(self.getdat, source, self.timeout)
        except Exception as exc:
            log.warning("[setu.pool] get img err: %s", exc)
            return self._roll_local(directory)
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                ext = (image.format or "").lower()
                if ext not in _FORMATS:
                    raise ValueError(f"unsupported format {ext!r}")
                digest = _difference_hash(image)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            log.warning("[setu.pool] decode img err: %s", exc)
            return self._roll_local(directory)
        encoded = _base16384(digest.to_bytes(8, "big"))
        if len(encoded.encode("utf-8")) != 6 * 3:
            return self._roll_local(directory)
        path = f"{directory}/{encoded[:5]}.{ext}"
        if os.path.exists(path):
            return path
        with open(path, "wb") as fh:
            fh.write(data)
        return path

    def roll_local(self, typ):
        """Pick a stored picture of ``typ``."""
        directory = self.folder + typ
        if not os.path.exists(directory):
            raise SetuError(NO_SUCH_TYPE)
        return self._roll_local(directory)

    @staticmethod
    def _roll_local(directory):
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
        if not entries:
            raise SetuError(EMPTY_TYPE)
        if len(entries) == 1:
            if entries[0].is_dir():
                raise SetuError(EMPTY_TYPE)
            return f"{directory}/{entries[0].name}"
        for _ in range(_LOCAL_TRIES):
            entry = random.choice(entries)
            if not entry.is_dir():
                return f"{directory}/{entry.name}"
        raise SetuError(EMPTY_TYPE)


@lru_cache(maxsize=None)
def default_pool():
    """Return the shared pool under ``data/setupool``."""

    def rolimg(typ):
        os.makedirs(f"{DEFAULT_POOL_DIR}/{typ}", exist_ok=True)
        return DEFAULT_IMAGE_URL

    return Pool(DEFAULT_POOL_DIR, rolimg, _get_data, DEFAULT_TIMEOUT)