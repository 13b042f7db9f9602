"""
Utility Module
==============

Common utilities for the Chimera risk exchange.
"""

from chimera_core.utils.dates import (
    parse_timestamp,
    date_to_quarter,
    quarter_or_none,
)
from chimera_core.utils.hashing import (
    sha256_hex,
    email_key,
    canonical_json,
)

__all__ = [
    "parse_timestamp",
    "date_to_quarter",
    "quarter_or_none",
    "sha256_hex",
    "email_key",
    "canonical_json",
]
