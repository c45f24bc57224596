"""Queue requests to huggingface spaces."""

from __future__ import annotations

from dataclasses import dataclass, field

import requests

HUGGINGFACE_SPACE_HTTPS = "https://hf.space"
EMBED = HUGGINGFACE_SPACE_HTTPS + "/embed"
HTTPS_PUSH_PATH = EMBED + "/%s/api/queue/push/"
HTTPS_STATUS_PATH = EMBED + "/%s/api/queue/status/"
HUGGINGFACE_SPACE_WSS = "wss://spaces.huggingface.tech"
WSS_JOIN_PATH = HUGGINGFACE_SPACE_WSS + "/%s/queue/join"
HTTPS_PREDICT_PATH = EMBED + "/%s/api/predict/"
DEFAULT_ACTION = "predict"
COMPLETE_STATUS = "COMPLETE"
WSS_COMPLETE_STATUS = "process_completed"
TIMEOUT_MAX = 300


@dataclass
class PushRequest:
    """A job pushed onto a space's queue."""

    action: str = ""
    fn_index: int = 0
    data: list = field(default_factory=list)
    session_hash: str = ""

    def to_dict(self):
        body = {}
        if self.action:
            body["action"] = self.action
        body.update(fn_index=self.fn_index, data=self.data, session_hash=self.session_hash)
        return body


@dataclass
class PushResponse:
    """Where a pushed job stands in the queue."""

    hash: str = ""
    queue_position: int = 0

    @classmethod
    def from_dict(cls, data):
        return cls(hash=str(data.get("hash", "")),
                   queue_position=int(data.get("queue_position", 0)))


@dataclass
class StatusRequest:
    """A question about a queued job."""

    hash: str = ""

    def to_dict(self):
        return {"hash": self.hash}


def push(push_url, push_req):
    """Push a job and return its place in the queue."""
    response = requests.post(push_url, json=push_req.to_dict(), timeout=TIMEOUT_MAX)
    response.raise_for_status()
    return PushResponse.from_dict(response.json())


def status(status_url, status_req):
    """Ask for the status of a job and return the raw response body."""
    response = requests.post(status_url, json=status_req.to_dict(), timeout=TIMEOUT_MAX)
    response.raise_for_status()
    return response.content