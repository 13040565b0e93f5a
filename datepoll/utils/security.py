"""
Identifier generation and edit-token helpers
"""

import hmac
import secrets
from typing import Optional

from fastapi import Header

from datepoll.core.config import settings

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def _random_string(length: int) -> str:
    # Modulo mapping of CSPRNG bytes onto the 62-symbol alphabet
    raw = secrets.token_bytes(length)
    return "".join(ALPHABET[byte % len(ALPHABET)] for byte in raw)


def new_public_id(length: Optional[int] = None) -> str:
    """Short URL-safe event id"""
    return _random_string(length or settings.PUBLIC_ID_LENGTH)


def new_secret_token(length: Optional[int] = None) -> str:
    """Long random capability token for edit and response access"""
    length = length or settings.SECRET_TOKEN_LENGTH
    if length < 12:
        raise ValueError("Secret tokens must be at least 12 characters")
    return _random_string(length)


def is_valid_public_id(value: Optional[str]) -> bool:
    if not value or len(value) < 7 or len(value) > 10:
        return False
    return all(ch in ALPHABET for ch in value)


def tokens_match(presented: Optional[str], stored: Optional[str]) -> bool:
    """Constant-time comparison; a missing value on either side never matches"""
    if not presented or not stored:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), stored.encode("utf-8"))


def get_edit_token(x_edit_token: Optional[str] = Header(None)) -> Optional[str]:
    """Read the edit token header; the services decide what a missing token means"""
    return x_edit_token.strip() if x_edit_token else None


def get_fingerprint(x_fingerprint: Optional[str] = Header(None)) -> Optional[str]:
    return x_fingerprint or None


def build_share_urls(event_id: str, edit_token: str) -> dict:
    base = settings.BASE_URL.rstrip("/")
    return {
        "shareUrl": f"{base}/e/{event_id}",
        "editUrl": f"{base}/e/{event_id}?edit={edit_token}",
    }
