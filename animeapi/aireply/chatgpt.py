"""Replies from an OpenAI-style text completion endpoint."""

from __future__ import annotations

import requests

from animeapi.aireply.base import AIReply

CHATGPT_URL = "https://api.openai.com/v1/"
SENSITIVE_REPLY = "ERROR: 回复可能含有敏感内容"
TIMEOUT = 120


def _chat(msg, api_key, url):
    payload = {
        "model": "text-davinci-003",
        "prompt": msg,
        "max_tokens": 2048,
        "temperature": 0.7,
        "top_p": 1,
        "frequency_penalty": 0,
        "presence_penalty": 0,
    }
    headers = {
        "Content-Type": "application/json",
        "Authorization": "Bearer " + api_key,
    }
    try:
        response = requests.post(url + "completions", json=payload, headers=headers, timeout=TIMEOUT)
    except requests.RequestException as exc:
        return str(exc)
    try:
        body = response.json()
    except ValueError as exc:
        return str(exc)
    choices = body.get("choices") if isinstance(body, dict) else None
    if not choices:
        return ""
    first = choices[0]
    text = first.get("text") if isinstance(first, dict) else None
    return "" if text is None else str(text)


class ChatGPT(AIReply):
    """Chat bot answering through a completion API."""

    def __init__(self, url, key, *args):
        self.url = url
        self.key = key
        self.banwords = args

    def __str__(self):
        return "ChatGPT"

    def talk(self, uid, msg, nickname):
        """Return the completion of ``msg``, refusing replies with banned words."""
        reply = _chat(msg, self.key, self.url)
        if any(word in reply for word in self.banwords):
            return SENSITIVE_REPLY
        return reply

    def talk_plain(self, uid, msg, nickname):
        """Same as :meth:`talk`; completions carry no CQ codes."""
        return self.talk(0, msg, nickname)