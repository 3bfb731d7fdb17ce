"""API key format rules

Keys look like ``sk_live_<64 hex>`` or ``sk_live_<prefix>_<64 hex>``. Only
the key_id (public lookup part) and the SHA-256 hash of the secret are
needed to validate a key.
"""

import hashlib
import hmac
import re
import secrets
from typing import Optional, Tuple

API_KEY_PREFIX = "sk_live_"
SECRET_BYTES = 32
SECRET_HEX_LENGTH = SECRET_BYTES * 2
KEY_ID_SECRET_CHARS = 8
MAX_CUSTOM_PREFIX_LENGTH = 20

_SECRET_RE = re.compile(r"^[0-9a-fA-F]{%d}$" % SECRET_HEX_LENGTH)
_PREFIX_RE = re.compile(r"^[a-z0-9_]+$")
_INVALID_PREFIX_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_prefix(custom_prefix: Optional[str]) -> Optional[str]:
    if not custom_prefix or not custom_prefix.strip():
        return None
    sanitized = _INVALID_PREFIX_CHARS.sub("", custom_prefix.strip())[:MAX_CUSTOM_PREFIX_LENGTH].lower()
    # a trailing underscore would make the separator ambiguous
    sanitized = sanitized.strip("_")
    return sanitized or None


def generate_api_key(custom_prefix: Optional[str] = None) -> str:
    secret = secrets.token_hex(SECRET_BYTES)
    prefix = sanitize_prefix(custom_prefix)
    if prefix:
        return f"{API_KEY_PREFIX}{prefix}_{secret}"
    return f"{API_KEY_PREFIX}{secret}"


def split_api_key(full_key: str) -> Optional[Tuple[Optional[str], str]]:
    """
    Split a key into (custom prefix, secret)

    Returns:
        None when the key is malformed
    """
    if not full_key or not full_key.startswith(API_KEY_PREFIX):
        return None

    rest = full_key[len(API_KEY_PREFIX):]
    if _SECRET_RE.match(rest):
        return None, rest

    prefix, sep, secret = rest.rpartition("_")
    if sep and prefix and _PREFIX_RE.match(prefix) and _SECRET_RE.match(secret):
        return prefix, secret
    return None


def validate_api_key_format(full_key: str) -> bool:
    return split_api_key(full_key) is not None


def extract_key_id(full_key: str) -> Optional[str]:
    parts = split_api_key(full_key)
    if parts is None:
        return None
    prefix, secret = parts
    if prefix:
        return f"{API_KEY_PREFIX}{prefix}_{secret[:KEY_ID_SECRET_CHARS]}"
    return f"{API_KEY_PREFIX}{secret[:KEY_ID_SECRET_CHARS]}"


def hash_secret(secret: str) -> str:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def secret_matches(secret: str, expected_hash: str) -> bool:
    return hmac.compare_digest(hash_secret(secret), expected_hash or "")


def mask_key_id(key_id: str) -> str:
    return f"{key_id}****"
