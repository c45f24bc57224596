import re
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from animeapi.aireply.xiaoai import XIAOAI_BOT_NAME, XiaoAi

URL = "https://xiaoai.example.com/api?msg=%s"
PATTERN = re.compile(r"https://xiaoai\.example\.com/api.*")


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def test_reply_renames_bot_and_assistant(rsps):
    rsps.add(responses.GET, PATTERN, body="我是小爱，小米智能助理")
    bot = XiaoAi(URL, XIAOAI_BOT_NAME)
    assert bot.talk_plain(1, "Alice是谁", "Alice") == "我是Alice，电子宠物"
    query = parse_qs(urlsplit(rsps.calls[0].request.url).query)
    assert query["msg"] == ["小爱是谁"]


def test_empty_reply(rsps):
    rsps.add(responses.GET, PATTERN, body="")
    bot = XiaoAi(URL, XIAOAI_BOT_NAME)
    assert bot.talk_plain(1, "hi", "Alice") == "Alice听不懂你的话了, 能再说一遍吗"


def test_banword(rsps):
    rsps.add(responses.GET, PATTERN, body="rude answer")
    bot = XiaoAi(URL, XIAOAI_BOT_NAME, "rude")
    assert bot.talk(1, "hi", "Alice") == "ERROR: 回复可能含有敏感内容"


def test_talk_matches_talk_plain(rsps):
    rsps.add(responses.GET, PATTERN, body="same")
    rsps.add(responses.GET, PATTERN, body="same")
    bot = XiaoAi(URL, XIAOAI_BOT_NAME)
    assert bot.talk(1, "hi", "Alice") == bot.talk_plain(1, "hi", "Alice")


def test_http_error_reported(rsps):
    rsps.add(responses.GET, PATTERN, status=404)
    assert XiaoAi(URL, XIAOAI_BOT_NAME).talk(1, "hi", "Alice").startswith("ERROR: ")


def test_name():
    assert str(XiaoAi(URL, XIAOAI_BOT_NAME)) == "小爱"