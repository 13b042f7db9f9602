"""
Proof Receipts
==============

Partner-facing receipts for risk queries.

A receipt carries the partner-safe view of a classification (risk tags,
quarter, status, recommendation) and an integrity tag. The tag is an
unkeyed SHA-256 over the receipt content: it detects accidental
alteration, not forgery.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Sequence

from chimera_core.matching.classifier import (
    MatchResult,
    MatchQuality,
    Unmatched,
    Ambiguous,
    Conflicted,
    PartialMatch,
)
from chimera_core.matching.identity import IdentityFields, RecordStatus
from chimera_core.utils.hashing import sha256_hex, canonical_json


APPROVE_NO_MATCH = "APPROVE - No risk flags detected in partner network"
APPROVE_CLEAN = "APPROVE - Record found with no risk flags"
REJECT_EXTREME = "REJECT - Extreme compliance risk detected"
REJECT_HIGH = "REJECT - High risk user, manual review required"
REVIEW_MODERATE = "MANUAL_REVIEW - Moderate risk flags detected"
REVIEW_CONFLICT = "MANUAL_REVIEW - Identity attributes conflict with partner record"
ESCALATE_AMBIGUOUS = "ESCALATE - Identity attributes span multiple partner records"

DEFAULT_REGULATIONS = ("BSA", "KYC", "OFAC")


def format_timestamp(moment: datetime) -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def query_digest(query: IdentityFields) -> str:
    """
    Hash identifying a query without exposing its values.

    An email-only query hashes the bare email, which is also how the
    provider keys its records.
    """
    present = query.present_fields()
    if present == ("email",):
        return sha256_hex(query.email)
    return sha256_hex(canonical_json({
        name: query.value_of(name) for name in present
    }))


def generate_recommendation(result: MatchResult) -> str:
    """Compliance recommendation for a classification."""
    if isinstance(result, Unmatched):
        return APPROVE_NO_MATCH
    if isinstance(result, Ambiguous):
        return ESCALATE_AMBIGUOUS
    if isinstance(result, Conflicted):
        return REVIEW_CONFLICT

    record = result.record
    if record.is_clean:
        return APPROVE_CLEAN
    if record.status == RecordStatus.BLOCKED or "Sanctions_List_Hit" in record.risk_tags:
        return REJECT_EXTREME
    if record.status == RecordStatus.BANNED or "Velocity_Withdrawals" in record.risk_tags:
        return REJECT_HIGH
    return REVIEW_MODERATE


def build_result_block(result: MatchResult) -> Dict[str, Any]:
    """Partner-safe summary of a classification."""
    block: Dict[str, Any] = {
        "match_found": result.match_found,
        "match_quality": result.quality.value,
    }

    if isinstance(result, Unmatched):
        block["searched_fields"] = list(result.searched_fields)
    elif isinstance(result, Ambiguous):
        block["candidate_count"] = result.candidate_count
    elif isinstance(result, Conflicted):
        block["matched_fields"] = list(result.matched_fields)
        block["conflicting_fields"] = list(result.conflicting_fields)
    else:
        record = result.record
        block["matched_fields"] = list(result.matched_fields)
        block["risk_tags"] = record.sorted_tags
        block["flagged_quarter"] = record.flagged_quarter
        block["status"] = record.status.value
        if isinstance(result, PartialMatch):
            block["confidence"] = result.confidence.value

    block["recommendation"] = generate_recommendation(result)
    return block


def compute_signature(
    provider: str,
    timestamp: str,
    query_hash: str,
    result: Dict[str, Any],
) -> str:
    """Integrity tag over the public receipt content."""
    return sha256_hex(f"{provider}{timestamp}{query_hash}{canonical_json(result)}")


def _internal_details(
    query: IdentityFields,
    result: MatchResult,
    provider: str,
) -> Dict[str, Any]:
    details: Dict[str, Any] = {
        "original_query": {k: v for k, v in query.to_dict().items() if v is not None},
    }

    if isinstance(result, Unmatched):
        details["note"] = f"This user is not in {provider}'s risk database"
    elif isinstance(result, Ambiguous):
        details["candidate_record_ids"] = list(result.record_ids)
    else:
        record = result.record
        details.update({
            "record_id": result.record_id,
            "exact_flagged_date": record.exact_flagged_date,
            "investigation_notes": record.investigation_notes,
            "compliance_officer": record.compliance_officer,
            "internal_case_id": record.internal_case_id,
            "wallet_addresses": list(record.wallet_addresses),
        })
    return details


@dataclass
class ProofReceipt:
    """
    Receipt returned to the querying exchange.

    Attributes:
        provider: Exchange that answered the query
        query_hash: Digest of the query
        timestamp: Issue time (ISO-8601, UTC)
        result: Partner-safe classification summary
        compliance: Query ID and regulation list
        signature: Integrity tag over provider, timestamp, hash and result
        internal: Provider-only details (the decrypted view)
    """
    provider: str
    query_hash: str
    timestamp: str
    result: Dict[str, Any]
    compliance: Dict[str, Any]
    signature: str = ""
    internal: Dict[str, Any] = field(default_factory=dict)

    @property
    def match_found(self) -> bool:
        return bool(self.result.get("match_found"))

    @property
    def match_quality(self) -> str:
        return self.result.get("match_quality", MatchQuality.UNMATCHED.value)

    @property
    def recommendation(self) -> str:
        return self.result.get("recommendation", "")

    @property
    def query_id(self) -> str:
        return self.compliance.get("query_id", "")

    def verify_signature(self) -> bool:
        """Check the integrity tag against the current content."""
        expected = compute_signature(self.provider, self.timestamp, self.query_hash, self.result)
        return expected == self.signature

    def partner_view(self) -> Dict[str, Any]:
        """What the querying exchange receives."""
        return {
            "provider": self.provider,
            "query_hash": self.query_hash,
            "timestamp": self.timestamp,
            "result": self.result,
            "compliance": self.compliance,
            "signature": self.signature,
        }

    def internal_view(self) -> Dict[str, Any]:
        """Partner view plus the provider's internal details."""
        data = self.partner_view()
        data["internal"] = self.internal
        return data

    def to_dict(self, include_internal: bool = False) -> Dict[str, Any]:
        """Convert to dictionary."""
        return self.internal_view() if include_internal else self.partner_view()

    def to_json(self, include_internal: bool = False) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(include_internal), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProofReceipt":
        """Create from dictionary."""
        return cls(
            provider=data["provider"],
            query_hash=data["query_hash"],
            timestamp=data["timestamp"],
            result=data.get("result", {}),
            compliance=data.get("compliance", {}),
            signature=data.get("signature", ""),
            internal=data.get("internal", {}),
        )


def generate_receipt(
    query: IdentityFields,
    result: MatchResult,
    provider: str = "MapleCEX",
    regulations: Sequence[str] = DEFAULT_REGULATIONS,
    now: Optional[datetime] = None,
) -> ProofReceipt:
    """
    Issue a signed receipt for a classified query.

    Args:
        query: The query that was classified
        result: Its classification
        provider: Name of the answering exchange
        regulations: Regulations listed in the compliance block
        now: Issue time (defaults to the current UTC time)

    Returns:
        ProofReceipt with signature stamped
    """
    moment = now or datetime.now(timezone.utc)
    timestamp = format_timestamp(moment)
    query_hash = query_digest(query)
    result_block = build_result_block(result)

    receipt = ProofReceipt(
        provider=provider,
        query_hash=query_hash,
        timestamp=timestamp,
        result=result_block,
        compliance={
            "query_id": f"QUERY-{int(moment.timestamp() * 1000)}",
            "auditable": True,
            "regulation_compliance": list(regulations),
        },
        internal=_internal_details(query, result, provider),
    )
    receipt.signature = compute_signature(provider, timestamp, query_hash, result_block)
    return receipt
