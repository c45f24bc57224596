"""Common interface of chat reply services."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AIReply(ABC):
    """A chat bot that answers messages."""

    @abstractmethod
    def talk(self, uid, msg, nickname):
        """Return a reply that may carry CQ codes."""

    @abstractmethod
    def talk_plain(self, uid, msg, nickname):
        """Return a plain-text reply."""

    @abstractmethod
    def __str__(self):
        """Return the name of the reply service in use."""