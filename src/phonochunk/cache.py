"""File-based cache for reference-recording tokens.

Synthesizing and scoring a reference recording is slow and costs provider
calls, so callers keep the extracted tokens keyed by text and accent. The
cache is an explicit object the caller owns; the chunking engine never reads
or writes it.
"""

import hashlib
import json
import logging
import os
import tempfile
from pathlib import Path

from phonochunk.types import CoachToken, Span

logger = logging.getLogger(__name__)

CACHE_DIR = Path(os.environ.get("PHONOCHUNK_CACHE_DIR", "~/.cache/phonochunk")).expanduser()


def cache_key(text: str, accent: str) -> str:
    """SHA-256 of the normalized accent and text."""
    normalized = " ".join(text.split()).lower()
    h = hashlib.sha256(f"{accent.lower()}\n{normalized}".encode())
    return h.hexdigest()


def _atomic_write(target: Path, data: bytes) -> None:
    """Write data to target atomically via temp file + rename."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, target)
    except Exception:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def _serialize_tokens(words: list[list[CoachToken]]) -> dict:
    return {
        "words": [
            [
                {
                    "index": t.index,
                    "symbol": t.symbol,
                    "start": t.span.start if t.span else None,
                    "end": t.span.end if t.span else None,
                }
                for t in tokens
            ]
            for tokens in words
        ],
    }


def _deserialize_tokens(data: dict) -> list[list[CoachToken]]:
    words = []
    for tokens in data["words"]:
        words.append([
            CoachToken(
                index=t["index"],
                symbol=t["symbol"],
                span=(
                    Span(t["start"], t["end"])
                    if t.get("start") is not None and t.get("end") is not None
                    else None
                ),
            )
            for t in tokens
        ])
    return words


class ReferenceCache:
    """Reference tokens on disk, one JSON file per (text, accent)."""

    def __init__(self, directory: str | Path | None = None):
        self.directory = Path(directory).expanduser() if directory else CACHE_DIR

    def _path(self, text: str, accent: str) -> Path:
        return self.directory / "reference" / f"{cache_key(text, accent)}.json"

    def get(self, text: str, accent: str) -> list[list[CoachToken]] | None:
        """Return cached tokens, or None on a miss or unreadable entry."""
        path = self._path(text, accent)
        if not path.exists():
            return None
        try:
            tokens = _deserialize_tokens(json.loads(path.read_text()))
        except (json.JSONDecodeError, OSError, KeyError, TypeError):
            logger.debug(f"Ignoring unreadable cache entry {path.name}")
            return None
        logger.info(f"Cache hit: reference tokens ({path.stem[:12]}...)")
        return tokens

    def put(self, text: str, accent: str, tokens: list[list[CoachToken]]) -> Path:
        """Store tokens for (text, accent). Returns the cache file path."""
        path = self._path(text, accent)
        _atomic_write(path, json.dumps(_serialize_tokens(tokens)).encode())
        logger.info(f"Cached reference tokens ({path.stem[:12]}...)")
        return path
