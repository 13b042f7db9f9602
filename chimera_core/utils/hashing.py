"""
Hashing Utilities
=================

SHA-256 helpers used to derive opaque record keys and receipt integrity tags.

These digests are unkeyed: they give a stable fingerprint, not authenticity.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Union


def sha256_hex(message: Union[str, bytes]) -> str:
    """
    Hex SHA-256 digest of a string (UTF-8 encoded) or bytes.

    Returns:
        64-character lowercase hex string
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hashlib.sha256(message).hexdigest()


def email_key(email: str) -> str:
    """Opaque record key for an email address."""
    return sha256_hex(email)


def canonical_json(data: Any) -> str:
    """Deterministic JSON encoding (sorted keys, no whitespace)."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
