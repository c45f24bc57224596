"""Client of the emozi emoji transcription service."""

from __future__ import annotations

import hashlib
from urllib.parse import quote_plus

import requests

API = "https://emozi.seku.su/api/"
TIMEOUT = 30


class EmoziError(Exception):
    """The service refused a request."""


def _checked(body):
    if not isinstance(body, dict):
        raise EmoziError("unexpected response")
    if body.get("code", 0) != 0:
        raise EmoziError(str(body.get("message", "")))
    return body


def _str(value):
    return value if isinstance(value, str) else ""


class User:
    """An account of the service; an empty name means anonymous use."""

    def __init__(self, name="", password=""):
        self.name = name
        self.password = password
        self.auth = ""

    def _headers(self):
        headers = {"Content-Type": "application/json"}
        if self.auth:
            headers["Authorization"] = self.auth
        return headers

    def login(self):
        """Log in and keep the session token."""
        response = requests.get(API + "getLoginSalt?username=" + quote_plus(self.name),
                                timeout=TIMEOUT)
        response.raise_for_status()
        body = _checked(response.json())
        salt = _str((body.get("result") or {}).get("salt"))
        challenge = hashlib.md5((self.password + salt).encode()).hexdigest()
        response = requests.post(
            API + "login",
            json={"username": self.name, "password": challenge, "salt": salt},
            timeout=TIMEOUT,
        )
        response.raise_for_status()
        body = _checked(response.json())
        self.auth = _str((body.get("result") or {}).get("token"))

    def is_valid(self):
        """Return whether the user is logged in with a token the service accepts."""
        if not (self.name and self.password and self.auth):
            return False
        try:
            response = requests.get(API, headers={"Authorization": self.auth}, timeout=TIMEOUT)
            response.raise_for_status()
        except requests.RequestException:
            return False
        return True

    def marshal(self, random_same_meaning, text, *args):
        """Encode ``text``; ``args`` pick readings of polyphones.

        Returns ``(emoji_text, choices)``.
        """
        payload = {
            "random": random_same_meaning,
            "text": text,
            "choice": list(args) if args else None,
        }
        response = requests.post(API + "encode", json=payload, headers=self._headers(),
                                 timeout=TIMEOUT)
        body = _checked(response.json())
        result = body.get("result") or {}
        return _str(result.get("text")), list(result.get("choice") or [])

    def unmarshal(self, force, text):
        """Decode emoji ``text``; ``force`` decodes text the service did not produce."""
        response = requests.post(API + "decode", json={"force": force, "text": text},
                                 headers=self._headers(), timeout=TIMEOUT)
        body = _checked(response.json())
        return _str(body.get("result"))


def anonymous():
    """Return an anonymous user, limited in the number of requests."""
    return User()