"""Replies from the lolimi chat APIs, optionally with conversation memory."""

from __future__ import annotations

import json
from urllib.parse import quote_plus

import requests

from animeapi.aireply.base import AIReply

LOLIMI_URL = "https://apii.lolimi.cn"
MOMO_URL = LOLIMI_URL + "/api/mmai/mm?key=%s&msg=%s"
MOMO_BOT_NAME = "沫沫"
JINGFENG_URL = LOLIMI_URL + "/api/jjai/jj?key=%s&msg=%s"
JINGFENG_BOT_NAME = "婧枫"
GPT4O_URL = LOLIMI_URL + "/api/4o/gpt4o?key=%s&msg=%s"
GPT4O_BOT_NAME = "GPT4o"
# POST endpoint that takes the whole conversation
C4O_URL = LOLIMI_URL + "/api/c4o/c?key=%s"
C4O_BOT_NAME = "GPT4o"

SENSITIVE_REPLY = "ERROR: 回复可能含有敏感内容"
TIMEOUT = 60


def _stringify(value):
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value, ensure_ascii=False)


def _json_string(text, *path):
    try:
        value = json.loads(text)
    except ValueError:
        return ""
    for key in path:
        if not isinstance(value, dict):
            return ""
        value = value.get(key)
    return _stringify(value)


class LolimiAi(AIReply):
    """Chat bot on the lolimi APIs; ``memory_limit`` below 1 disables memory."""

    def __init__(self, url, name, key, text_mode, memory_limit, *args):
        self.url = url
        self.name = name
        self.key = key
        self.text_mode = text_mode
        self.memory_limit = memory_limit
        self.banwords = args
        self.memory = []

    def __str__(self):
        return self.name

    def _fetch(self, msg):
        if self.memory_limit > 0:
            url = self.url % (quote_plus(self.key),)
            messages = [*self.memory, {"role": "user", "content": msg}]
            response = requests.post(url, json=messages, timeout=TIMEOUT)
        else:
            url = self.url % (quote_plus(self.key), quote_plus(msg))
            response = requests.get(url, timeout=TIMEOUT)
        response.raise_for_status()
        return response.content.decode("utf-8", errors="replace")

    def talk_plain(self, uid, msg, nickname):
        """Return the reply to ``msg``, remembering the exchange when memory is on."""
        msg = msg.replace(nickname, self.name)
        try:
            data = self._fetch(msg)
        except requests.RequestException as exc:
            message = str(exc)
            if self.key:
                message = message.replace(self.key, "********")
            return "ERROR: " + message
        reply = data if self.text_mode else _json_string(data, "data", "output")
        reply = (
            reply.replace('<img src="', "[CQ:image,file=")
            .replace("<br>", "\n")
            .replace('" />', "]")
        )
        text_reply = reply.replace(self.name, nickname)
        if any(word in text_reply for word in self.banwords):
            return SENSITIVE_REPLY
        if self.memory_limit > 0:
            if len(self.memory) >= self.memory_limit - 1 and len(self.memory) >= 2:
                self.memory = self.memory[2:]
            self.memory.extend([
                {"role": "user", "content": msg},
                {"role": "assistant", "content": text_reply},
            ])
        return text_reply

    def talk(self, uid, msg, nickname):
        """Same as :meth:`talk_plain`."""
        return self.talk_plain(0, msg, nickname)