"""Tests for the reference token cache."""

import pytest

from phonochunk.cache import ReferenceCache, cache_key
from phonochunk.types import CoachToken, Span


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path, monkeypatch):
    """Redirect cache to tmp_path so tests don't pollute the real cache."""
    monkeypatch.setattr("phonochunk.cache.CACHE_DIR", tmp_path / "cache")


def _tokens() -> list[list[CoachToken]]:
    return [
        [CoachToken(0, "B", Span(1.0, 1.1)), CoachToken(1, "EH", None)],
        [],
    ]


# --- cache_key ---


def test_cache_key_is_sha256():
    assert len(cache_key("hello", "en_us")) == 64


def test_cache_key_normalizes_text():
    assert cache_key("Hello   World", "en_us") == cache_key(" hello world ", "EN_US")


def test_cache_key_depends_on_accent():
    assert cache_key("hello", "en_us") != cache_key("hello", "en_br")


# --- ReferenceCache ---


def test_miss():
    assert ReferenceCache().get("nothing here", "en_us") is None


def test_roundtrip():
    cache = ReferenceCache()
    path = cache.put("Better day", "en_us", _tokens())
    assert path.exists()
    assert cache.get("better day", "en_us") == _tokens()


def test_default_directory_from_module(tmp_path):
    assert ReferenceCache().directory == tmp_path / "cache"


def test_explicit_directory(tmp_path):
    cache = ReferenceCache(tmp_path / "elsewhere")
    path = cache.put("hi", "en_us", _tokens())
    assert path.is_relative_to(tmp_path / "elsewhere")


def test_accents_are_separate():
    cache = ReferenceCache()
    cache.put("hi", "en_us", _tokens())
    assert cache.get("hi", "en_br") is None


def test_put_overwrites():
    cache = ReferenceCache()
    cache.put("hi", "en_us", _tokens())
    cache.put("hi", "en_us", [[CoachToken(0, "HH", None)]])
    assert cache.get("hi", "en_us") == [[CoachToken(0, "HH", None)]]


def test_corrupt_entry_is_a_miss():
    cache = ReferenceCache()
    path = cache.put("hi", "en_us", _tokens())
    path.write_text("{not json")
    assert cache.get("hi", "en_us") is None


def test_wrong_shape_is_a_miss():
    cache = ReferenceCache()
    path = cache.put("hi", "en_us", _tokens())
    path.write_text('{"tokens": []}')
    assert cache.get("hi", "en_us") is None


def test_no_temp_files_left(tmp_path):
    cache = ReferenceCache()
    cache.put("hi", "en_us", _tokens())
    leftovers = list((tmp_path / "cache").rglob("*.tmp"))
    assert leftovers == []
