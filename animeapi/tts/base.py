"""Common interface of text-to-speech services."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TTS(ABC):
    """A text-to-speech service."""

    @abstractmethod
    def speak(self, key, text):
        """Return the location of audio speaking ``text()``."""

    @abstractmethod
    def __str__(self):
        """Return the name of the service in use."""