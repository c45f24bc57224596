"""Small helpers for bilibili data."""

from __future__ import annotations

import requests

TIMEOUT = 30


def human_num(res):
    """Format a count, using units of 万 from ten thousand up."""
    if abs(res) >= 10000:
        return f"{res / 10000:.2f}万"
    return str(res)


def get_real_url(url):
    """Follow redirects from ``url`` and return where they end."""
    response = requests.head(url, allow_redirects=True, timeout=TIMEOUT)
    response.close()
    return response.url