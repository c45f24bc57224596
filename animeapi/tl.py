"""Translation lookup."""

from __future__ import annotations

import requests

API = "http://api.cloolc.club/fanyi?data="
TIMEOUT = 30


def translate(target):
    """Translate ``target``; meanings are joined by ", "."""
    response = requests.get(API + target, timeout=TIMEOUT)
    response.raise_for_status()
    try:
        meanings = response.json().get("translation") or []
    except (ValueError, AttributeError):
        meanings = []
    if not isinstance(meanings, list) or not meanings:
        return "ERROR: 无返回"
    return ", ".join(m if isinstance(m, str) else str(m) for m in meanings)