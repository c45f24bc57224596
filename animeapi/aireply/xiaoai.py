"""Replies from the 小爱 chat API."""

from __future__ import annotations

from urllib.parse import quote_plus

import requests

from animeapi.aireply.base import AIReply

XIAOAI_URL = "http://81.70.100.130/api/xiaoai.php?n=text&msg=%s"
XIAOAI_BOT_NAME = "小爱"
SENSITIVE_REPLY = "ERROR: 回复可能含有敏感内容"
TIMEOUT = 30


class XiaoAi(AIReply):
    """Chat bot answering through 小爱."""

    def __init__(self, url, name, *args):
        self.url = url
        self.name = name
        self.banwords = args

    def __str__(self):
        return "小爱"

    def talk_plain(self, uid, msg, nickname):
        """Return the plain-text reply to ``msg``."""
        msg = msg.replace(nickname, self.name)
        try:
            response = requests.get(self.url % (quote_plus(msg),), timeout=TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as exc:
            return "ERROR: " + str(exc)
        reply = response.content.decode("utf-8", errors="replace").replace(self.name, nickname)
        if reply == "":
            reply = nickname + "听不懂你的话了, 能再说一遍吗"
        reply = reply.replace("小米智能助理", "电子宠物")
        if any(word in reply for word in self.banwords):
            return SENSITIVE_REPLY
        return reply

    def talk(self, uid, msg, nickname):
        """Same as :meth:`talk_plain`."""
        return self.talk_plain(0, msg, nickname)