"""Replies from the 青云客 chat API."""

from __future__ import annotations

import json
import random
import re
from urllib.parse import quote_plus

import requests

from animeapi.aireply.base import AIReply

QYK_URL = "http://api.qingyunke.com/api.php?key=free&appid=0&msg=%s"
QYK_BOT_NAME = "菲菲"
SENSITIVE_REPLY = "ERROR: 回复可能含有敏感内容"
TIMEOUT = 30

_FACE = re.compile(r"\{face:(\d+)\}(.*)")
_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
)


def _content(text):
    try:
        value = json.loads(text)
    except ValueError:
        return ""
    content = value.get("content") if isinstance(value, dict) else None
    if content is None:
        return ""
    return content if isinstance(content, str) else json.dumps(content, ensure_ascii=False)


class QYK(AIReply):
    """Chat bot answering through 青云客."""

    def __init__(self, url, name, *args):
        self.url = url
        self.name = name
        self.banwords = args

    def __str__(self):
        return "青云客"

    def _ask(self, msg):
        url = self.url % (quote_plus(msg),)
        response = requests.get(url, headers={"User-Agent": random.choice(_USER_AGENTS)},
                                timeout=TIMEOUT)
        response.raise_for_status()
        return _content(response.content.decode("utf-8", errors="replace"))

    def _finish(self, reply, nickname):
        reply = reply.replace(self.name, nickname)
        if any(word in reply for word in self.banwords):
            return SENSITIVE_REPLY
        return reply

    def talk(self, uid, msg, nickname):
        """Return a reply with faces turned into CQ codes."""
        try:
            reply = self._ask(msg.replace(nickname, self.name))
        except requests.RequestException as exc:
            return "ERROR: " + str(exc)
        reply = (
            reply.replace("{face:", "[CQ:face,id=")
            .replace("{br}", "\n")
            .replace("}", "]")
        )
        return self._finish(reply, nickname)

    def talk_plain(self, uid, msg, nickname):
        """Return a reply with faces removed."""
        try:
            reply = self._ask(msg.replace(nickname, self.name))
        except requests.RequestException as exc:
            return "ERROR: " + str(exc)
        reply = _FACE.sub("", reply).replace("{br}", "\n")
        return self._finish(reply, nickname)