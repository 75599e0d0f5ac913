from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple
from urllib.parse import quote

from tourdesk.schemas.catalog import Song

UNKNOWN_ARTIST = "Unknown Artist"
_TRAILING_PARENS = re.compile(r"^(.+?)\s*\(([^)]+)\)$")


def parse_song_name(stem: str) -> Tuple[str, str]:
    """Split a file stem into (title, artist).

    Understands ``Artist - Title`` and ``Title (Artist)``.
    """
    if " - " in stem:
        artist, title = stem.split(" - ", 1)
        return title.strip(), artist.strip()
    match = _TRAILING_PARENS.match(stem)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return stem, UNKNOWN_ARTIST


class SongsService:
    def __init__(self, music_dir: str, url_prefix: str = "/music") -> None:
        self.music_dir = Path(music_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def list_songs(self) -> List[Song]:
        if not self.music_dir.is_dir():
            return []
        files = sorted(
            path.name
            for path in self.music_dir.iterdir()
            if path.is_file() and path.suffix.lower() == ".mp3"
        )
        songs = []
        for index, filename in enumerate(files, start=1):
            title, artist = parse_song_name(filename[: -len(".mp3")])
            songs.append(
                Song(
                    id=str(index),
                    title=title,
                    artist=artist,
                    url=f"{self.url_prefix}/{quote(filename)}",
                )
            )
        return songs
