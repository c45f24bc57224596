"""Image content classification."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote_plus

import requests

API_URL = "https://nsfwtag.azurewebsites.net/api/nsfw?url="
TIMEOUT = 30


@dataclass
class Picture:
    """Scores of one classified image."""

    sexy: float = 0.0
    neutral: float = 0.0
    porn: float = 0.0
    hentai: float = 0.0
    drawings: float = 0.0

    @classmethod
    def from_dict(cls, data):
        return cls(**{name: float(data.get(name, 0.0)) for name in
                      ("sexy", "neutral", "porn", "hentai", "drawings")})


def classify(url):
    """Classify the image at ``url``."""
    response = requests.get(API_URL + quote_plus(url), timeout=TIMEOUT)
    response.raise_for_status()
    results = response.json()
    if not results:
        raise ValueError("no classification returned")
    return Picture.from_dict(results[0])