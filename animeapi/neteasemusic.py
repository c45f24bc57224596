"""Search and download songs and lyrics from NetEase Cloud Music."""

from __future__ import annotations

import os
import random
import time
from pathlib import Path
from urllib.parse import quote_plus

import requests

SEARCH_URL = "http://music.163.com/api/search/get/web?type=1&limit={}&s={}"
MEDIA_URL = "http://music.163.com/song/media/outer/url?id={}"
LYRIC_URL = "http://music.163.com/api/song/media?id={}"
TIMEOUT = 60


def _get_json(url):
    response = requests.get(url, timeout=TIMEOUT)
    response.raise_for_status()
    return response.json()


def _song_title(song):
    title = song.get("name") or ""
    artists = song.get("artists") or []
    if artists:
        title += " - "
        for i, artist in enumerate(artists):
            title += artist.get("name") or ""
            if i != 0 and i < len(artists) - 1:
                title += "&"
    alias = song.get("alias") or []
    if alias:
        title += " - " + str(alias[0])
    return title


def search_music(keyword, n):
    """Search for ``n`` songs; return a mapping of song title to song id."""
    body = _get_json(SEARCH_URL.format(n, quote_plus(keyword)))
    code = body.get("code", 0)
    if code != 200:
        raise RuntimeError(f"Status Code: {code}")
    songs = (body.get("result") or {}).get("songs") or []
    return {_song_title(song): song.get("id", 0) for song in songs}


def download_music(music_id, music_name, path):
    """Download a song to ``path/music_name.mp3`` unless it is already there."""
    target = Path(f"{path}/{music_name}.mp3")
    if target.exists():
        return
    url = MEDIA_URL.format(music_id)
    head = requests.head(url, allow_redirects=True, timeout=TIMEOUT)
    head.close()
    if head.status_code != 200:
        raise RuntimeError(f"Status Code: {head.status_code}")
    if head.headers.get("Content-Type", "").startswith("text/html"):
        raise ValueError("URL points to an HTML page instead of an MP3 file")
    try:
        response = requests.get(url, timeout=TIMEOUT)
        response.raise_for_status()
        target.write_bytes(response.content)
    finally:
        time.sleep(1 + random.random())


def search_lrc(music_id):
    """Return the lyrics of a song."""
    body = _get_json(LYRIC_URL.format(music_id))
    return body.get("lyric") or ""


def download_lrc(music_id, music_name, path):
    """Save the lyrics of a song to ``path/music_name.lrc`` unless already there."""
    os.makedirs(path, exist_ok=True)
    target = Path(f"{path}/{music_name}.lrc")
    if target.exists():
        return
    body = _get_json(LYRIC_URL.format(music_id))
    code = body.get("code", 0)
    if code != 200:
        raise RuntimeError(f"Status Code: {code}")
    lyric = body.get("lyric") or ""
    if not lyric:
        raise RuntimeError("该歌曲无歌词")
    target.write_text(lyric, encoding="utf-8")