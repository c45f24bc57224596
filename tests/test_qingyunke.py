import re
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from animeapi.aireply.qingyunke import QYK, QYK_BOT_NAME

URL = "https://qyk.example.com/api.php?msg=%s"
PATTERN = re.compile(r"https://qyk\.example\.com/api\.php.*")


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def test_talk_turns_faces_into_cq_codes(rsps):
    rsps.add(responses.GET, PATTERN, json={"result": 0, "content": "{face:14}你好菲菲{br}再见"})
    bot = QYK(URL, QYK_BOT_NAME)
    assert bot.talk(1, "Alice你好", "Alice") == "[CQ:face,id=14]你好Alice\n再见"
    query = parse_qs(urlsplit(rsps.calls[0].request.url).query)
    assert query["msg"] == ["菲菲你好"]


def test_talk_plain_drops_faces(rsps):
    rsps.add(responses.GET, PATTERN, json={"content": "菲菲说{br}好{face:14}笑"})
    bot = QYK(URL, QYK_BOT_NAME)
    assert bot.talk_plain(1, "hi", "Alice") == "Alice说\n好"


def test_sends_browser_user_agent(rsps):
    rsps.add(responses.GET, PATTERN, json={"content": "x"})
    assert QYK(URL, QYK_BOT_NAME).talk(1, "hi", "Alice") == "x"
    assert rsps.calls[0].request.headers["User-Agent"].startswith("Mozilla/5.0")


def test_banword(rsps):
    rsps.add(responses.GET, PATTERN, json={"content": "nasty"})
    bot = QYK(URL, QYK_BOT_NAME, "nasty")
    assert bot.talk_plain(1, "hi", "Alice") == "ERROR: 回复可能含有敏感内容"


def test_http_error_reported(rsps):
    rsps.add(responses.GET, PATTERN, status=500)
    assert QYK(URL, QYK_BOT_NAME).talk(1, "hi", "Alice").startswith("ERROR: ")


def test_name():
    assert str(QYK(URL, QYK_BOT_NAME)) == "青云客"