"""Image generation through the NovelAI API."""

from __future__ import annotations

import base64
import json
import random
from dataclasses import dataclass, field, replace

import requests

LOGIN_API = "https://api.novelai.net/user/login"
GEN_API = "https://api.novelai.net/ai/generate-image"
TIMEOUT = 300

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
)


@dataclass
class Para:
    """Generation parameters."""

    width: int = 0
    height: int = 0
    scale: int = 0
    sampler: str = ""
    steps: int = 0
    seed: int = 0
    n_samples: int = 0
    strength: float = 0.0
    noise: float = 0.0
    uc_preset: int = 0
    uc: str = ""

    def to_dict(self):
        return {
            "width": self.width,
            "height": self.height,
            "scale": self.scale,
            "sampler": self.sampler,
            "steps": self.steps,
            "seed": self.seed,
            "n_samples": self.n_samples,
            "strength": self.strength,
            "noise": self.noise,
            "ucPreset": self.uc_preset,
            "uc": self.uc,
        }


@dataclass
class Payload:
    """A generation request."""

    input: str = ""
    model: str = ""
    parameters: Para = field(default_factory=Para)

    def to_dict(self):
        return {"input": self.input, "model": self.model,
                "parameters": self.parameters.to_dict()}

    def __str__(self):
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def write_json(self, writer):
        """Write the payload as one line of JSON to the text stream ``writer``."""
        writer.write(str(self) + "\n")


def new_default_payload():
    """Return the payload used unless told otherwise."""
    return Payload(
        model="safe-diffusion",
        parameters=Para(
            width=512,
            height=768,
            scale=12,
            sampler="k_euler_ancestral",
            steps=28,
            n_samples=1,
            strength=0.7,
            noise=0.2,
            uc_preset=0,
            uc="lowres, bad anatomy, bad hands, text, error, missing fingers, extra digit, "
               "fewer digits, cropped, worst quality, low quality, normal quality, "
               "jpeg artifacts, signature, watermark, username, blurry",
        ),
    )


def _decode_image_stream(content):
    rest = content
    for _ in range(2):
        pos = rest.find(b"\n")
        if pos < 0:
            raise ValueError("unexpected end of image stream")
        rest = rest[pos + 1:]
    if not rest:
        raise ValueError("unexpected end of image stream")
    encoded = rest[5:].replace(b"\r", b"").replace(b"\n", b"")
    return base64.b64decode(encoded, validate=True)


class NovalAI:
    """A NovelAI account drawing pictures with ``config``."""

    def __init__(self, key, config):
        self.tok = ""
        self.key = key
        self.config = config

    def login(self):
        """Exchange the key for an access token, once."""
        if self.tok:
            return
        response = requests.post(LOGIN_API, json={"key": self.key}, timeout=TIMEOUT)
        body = response.json()
        if isinstance(body, dict) and "accessToken" in body:
            self.tok = str(body["accessToken"])

    def draw(self, tags):
        """Draw ``tags``; return ``(seed, tags_used, image_bytes)``."""
        tags = tags.replace("，", ",")
        if "," not in tags:
            tags = tags.replace(" ", ",")
        if not tags:
            return 0, "", b""
        params = replace(self.config.parameters)
        while params.seed == 0:
            params.seed = random.randrange(2 ** 31)
        payload = replace(self.config, input=tags, parameters=params)
        headers = {
            "Authorization": "Bearer " + self.tok,
            "Content-Type": "application/json",
            "Origin": "https://novelai.net",
            "Referer": "https://novelai.net/",
            "User-Agent": random.choice(_USER_AGENTS),
        }
        response = requests.post(GEN_API, data=(str(payload) + "\n").encode("utf-8"),
                                 headers=headers, timeout=TIMEOUT)
        return params.seed, tags, _decode_image_stream(response.content)