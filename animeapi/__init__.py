"""Clients for chat bots, media sites, text-to-speech and a chat-group game."""

__version__ = "0.1.0"