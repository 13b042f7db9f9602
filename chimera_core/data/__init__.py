"""
Reference Data Module
=====================

Built-in risk-record table used by the demo and tests.
"""

from chimera_core.data.reference import (
    REFERENCE_RECORDS,
    DEMO_USERS,
    load_reference_table,
)

__all__ = [
    "REFERENCE_RECORDS",
    "DEMO_USERS",
    "load_reference_table",
]
