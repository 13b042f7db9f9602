"""
Proof Receipt Module
====================

Signed, partner-safe receipts for risk queries.
"""

from chimera_core.proof.receipt import (
    ProofReceipt,
    generate_receipt,
    generate_recommendation,
    build_result_block,
    compute_signature,
    query_digest,
    format_timestamp,
)

__all__ = [
    "ProofReceipt",
    "generate_receipt",
    "generate_recommendation",
    "build_result_block",
    "compute_signature",
    "query_digest",
    "format_timestamp",
]
