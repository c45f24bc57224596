import base64
import io
import json

import pytest
import responses

from animeapi.novelai import (
    GEN_API,
    LOGIN_API,
    NovalAI,
    Payload,
    new_default_payload,
)

IMAGE = b"\x89PNG fake image"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def _stream(image=IMAGE):
    return b"event: newImage\nid: 1\ndata:" + base64.b64encode(image) + b"\n"


def _client():
    client = NovalAI("placeholder", new_default_payload())
    client.tok = "token"
    return client


def test_default_payload_values():
    payload = new_default_payload()
    assert payload.model == "safe-diffusion"
    assert payload.parameters.width == 512
    assert payload.parameters.height == 768
    assert payload.parameters.sampler == "k_euler_ancestral"
    assert payload.parameters.steps == 28
    assert payload.parameters.seed == 0


def test_str_is_compact_json_round_trip():
    payload = new_default_payload()
    text = str(payload)
    assert json.loads(text) == payload.to_dict()
    assert '"model":"safe-diffusion"' in text
    assert set(json.loads(text)["parameters"]) >= {"n_samples", "ucPreset", "uc"}


def test_write_json_writes_one_line():
    payload = Payload(input="cat", model="m")
    buf = io.StringIO()
    payload.write_json(buf)
    value = buf.getvalue()
    assert value.endswith("\n")
    assert value.count("\n") == 1
    assert json.loads(value) == payload.to_dict()


def test_login_stores_token(rsps):
    rsps.add(responses.POST, LOGIN_API, json={"accessToken": "token"})
    client = NovalAI("placeholder", new_default_payload())
    client.login()
    assert client.tok == "token"
    assert json.loads(rsps.calls[0].request.body) == {"key": "placeholder"}


def test_login_skipped_when_token_held(rsps):
    client = _client()
    client.login()
    assert client.tok == "token"
    assert len(rsps.calls) == 0


def test_draw_returns_decoded_image(rsps):
    rsps.add(responses.POST, GEN_API, body=_stream())
    client = _client()
    seed, tags, image = client.draw("a，b")
    assert image == IMAGE
    assert tags == "a,b"
    assert 0 < seed < 2 ** 31
    request = rsps.calls[0].request
    sent = json.loads(request.body)
    assert sent["input"] == tags
    assert sent["parameters"]["seed"] == seed
    assert request.headers["Authorization"] == "Bearer token"
    assert client.config.parameters.seed == 0


def test_draw_turns_spaces_into_commas_and_keeps_seed(rsps):
    rsps.add(responses.POST, GEN_API, body=_stream())
    client = _client()
    client.config.parameters.seed = 42
    seed, tags, _ = client.draw("a b")
    assert seed == 42
    assert tags == "a,b"


def test_draw_keeps_spaces_when_commas_present(rsps):
    rsps.add(responses.POST, GEN_API, body=_stream())
    _, tags, _ = _client().draw("blue sky, cloud")
    assert tags == "blue sky, cloud"


def test_draw_empty_tags_does_nothing(rsps):
    assert _client().draw("") == (0, "", b"")
    assert len(rsps.calls) == 0


def test_draw_rejects_malformed_stream(rsps):
    rsps.add(responses.POST, GEN_API, body=b"no newline here")
    with pytest.raises(ValueError):
        _client().draw("cat")