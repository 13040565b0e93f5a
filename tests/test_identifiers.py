"""
Tests for identifier and token helpers
"""

import pytest

from datepoll.core.config import settings
from datepoll.utils.security import (
    ALPHABET,
    build_share_urls,
    is_valid_public_id,
    new_public_id,
    new_secret_token,
    tokens_match,
)

def test_public_id_shape():
    """Public ids are 8 characters from the alphanumeric alphabet"""
    event_id = new_public_id()
    assert len(event_id) == 8
    assert all(ch in ALPHABET for ch in event_id)
    assert is_valid_public_id(event_id)

def test_secret_token_shape():
    token = new_secret_token()
    assert len(token) == settings.SECRET_TOKEN_LENGTH
    assert len(token) >= 12
    assert all(ch in ALPHABET for ch in token)

def test_secret_token_minimum_length():
    with pytest.raises(ValueError):
        new_secret_token(8)

def test_generated_values_differ():
    """Draws come from a CSPRNG, so a small sample never repeats"""
    ids = {new_public_id() for _ in range(200)}
    tokens = {new_secret_token() for _ in range(200)}
    assert len(ids) == 200
    assert len(tokens) == 200

@pytest.mark.parametrize("value", ["", None, "abc", "abcdefghijk", "abc-defg", "abcd efg"])
def test_invalid_public_ids(value):
    assert not is_valid_public_id(value)

def test_tokens_match():
    assert tokens_match("secret123456", "secret123456")
    assert not tokens_match("secret123456", "secret123457")
    assert not tokens_match(None, "secret123456")
    assert not tokens_match("secret123456", None)
    assert not tokens_match("", "")

def test_share_urls(monkeypatch):
    monkeypatch.setattr(settings, "BASE_URL", "https://polls.example.com/")
    urls = build_share_urls("AbC12345", "tok")
    assert urls["shareUrl"] == "https://polls.example.com/e/AbC12345"
    assert urls["editUrl"] == "https://polls.example.com/e/AbC12345?edit=tok"
