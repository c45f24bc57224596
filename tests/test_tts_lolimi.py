import re
from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses

from animeapi.tts import lolimi

AUDIO = "https://example.com/audio.wav"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def test_mapped_speaker_uses_own_endpoint(rsps):
    rsps.add(responses.GET, "https://api.lolimi.cn/API/yyhc/jr.php", json={"music": AUDIO})
    assert lolimi.tts("嘉然", "ni hao") == AUDIO
    query = parse_qs(urlsplit(rsps.calls[0].request.url).query)
    assert query == {"msg": ["nihao"]}


def test_other_speaker_uses_genshin_endpoint(rsps):
    rsps.add(responses.GET, "https://api.lolimi.cn/API/yyhc/y.php", json={"music": AUDIO})
    assert lolimi.tts("派蒙", "你 好") == AUDIO
    query = parse_qs(urlsplit(rsps.calls[0].request.url).query)
    assert query == {"msg": ["你好"], "speaker": ["派蒙"]}


def test_missing_music_gives_empty_string(rsps):
    rsps.add(responses.GET, "https://api.lolimi.cn/API/yyhc/kb.php", json={"code": 1})
    assert lolimi.tts("科比", "hi") == ""


def test_http_error_raises(rsps):
    rsps.add(responses.GET, "https://api.lolimi.cn/API/yyhc/dz.php", status=404)
    with pytest.raises(requests.HTTPError):
        lolimi.tts("丁真", "hi")


@pytest.mark.parametrize("name", sorted(lolimi.LOLIMI_MAP))
def test_every_mapped_speaker_has_own_endpoint(rsps, name):
    rsps.add(responses.GET, re.compile(r"https://api\.lolimi\.cn/API/yyhc/.*"), json={"music": AUDIO})
    assert lolimi.tts(name, "hi") == AUDIO
    parts = urlsplit(rsps.calls[0].request.url)
    assert not parts.path.endswith("/y.php")
    assert parse_qs(parts.query) == {"msg": ["hi"]}