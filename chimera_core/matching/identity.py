"""
Identity Data Structures
=========================

Data models for risk records, partial identity queries, and the record table.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Any, List, Optional, Iterator, Tuple

import yaml

from chimera_core.utils.dates import quarter_or_none


# Logical fields in match order. "document" is the (type, number) pair.
LOGICAL_FIELDS: Tuple[str, ...] = ("email", "phone", "country", "document")

# Accepted spellings for identity keys in input mappings
_FIELD_ALIASES = {
    "email": "email",
    "phone": "phone",
    "country": "country",
    "document_type": "document_type",
    "documentType": "document_type",
    "document_number": "document_number",
    "documentNumber": "document_number",
}


class RecordStatus(str, Enum):
    """Account status of a risk record."""
    CLEAN = "CLEAN"
    UNDER_REVIEW = "UNDER_REVIEW"
    BANNED = "BANNED"
    BLOCKED = "BLOCKED"


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class IdentityFields:
    """
    Identifying attributes of a person.

    Every attribute is optional. Blank strings are stored as None.

    Attributes:
        email: Email address
        phone: Phone number
        country: Country of residence
        document_type: Identity document type (Passport, National_ID, ...)
        document_number: Identity document number
    """
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None

    def __post_init__(self):
        for name in ("email", "phone", "country", "document_type", "document_number"):
            object.__setattr__(self, name, _clean(getattr(self, name)))

    @property
    def document(self) -> Optional[Tuple[str, str]]:
        """The (type, number) pair, or None unless both halves are present."""
        if self.document_type and self.document_number:
            return (self.document_type, self.document_number)
        return None

    def value_of(self, logical_field: str) -> Optional[Any]:
        """Value of a logical field (see LOGICAL_FIELDS)."""
        if logical_field == "document":
            return self.document
        if logical_field in ("email", "phone", "country"):
            return getattr(self, logical_field)
        raise KeyError(f"Unknown logical field: {logical_field}")

    def present_fields(self) -> Tuple[str, ...]:
        """Logical fields that carry a value, in LOGICAL_FIELDS order."""
        return tuple(f for f in LOGICAL_FIELDS if self.value_of(f) is not None)

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to dictionary."""
        return {
            "email": self.email,
            "phone": self.phone,
            "country": self.country,
            "document_type": self.document_type,
            "document_number": self.document_number,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "IdentityFields":
        """Create from a dictionary using snake_case or camelCase keys."""
        kwargs = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key)
            if name is not None:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class QueryRecord(IdentityFields):
    """
    A partial identity submitted by a querying exchange.

    A query with no logical fields present is valid and classifies as
    unmatched.
    """

    @classmethod
    def from_email(cls, email: Optional[str]) -> "QueryRecord":
        return cls(email=email)

    @property
    def is_empty(self) -> bool:
        return not self.present_fields()


@dataclass(frozen=True)
class RiskRecord:
    """
    A provider's risk record for one user.

    Only ``identity`` takes part in matching. The investigative fields are
    internal data, shown only in the decrypted view.

    Attributes:
        identity: Identifying attributes (None for a malformed entry)
        risk_tags: Risk labels; empty for a clean record
        status: Account status
        flagged_quarter: Quarter label, derived from exact_flagged_date if omitted
        exact_flagged_date: ISO-8601 timestamp of the flag (internal)
        investigation_notes: Analyst notes (internal)
        internal_case_id: Case reference (internal)
        compliance_officer: Assigned officer (internal)
        wallet_addresses: Linked wallets (internal)
    """
    identity: Optional[IdentityFields] = None
    risk_tags: frozenset = field(default_factory=frozenset)
    status: RecordStatus = RecordStatus.CLEAN
    flagged_quarter: Optional[str] = None
    exact_flagged_date: Optional[str] = None
    investigation_notes: Optional[str] = None
    internal_case_id: Optional[str] = None
    compliance_officer: Optional[str] = None
    wallet_addresses: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "risk_tags", frozenset(self.risk_tags))
        object.__setattr__(self, "wallet_addresses", tuple(self.wallet_addresses))
        object.__setattr__(self, "status", RecordStatus(self.status))
        if self.flagged_quarter is None:
            object.__setattr__(self, "flagged_quarter", quarter_or_none(self.exact_flagged_date))

    @property
    def is_clean(self) -> bool:
        return not self.risk_tags

    @property
    def sorted_tags(self) -> List[str]:
        return sorted(self.risk_tags)

    def to_dict(self, include_internal: bool = True) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "risk_tags": self.sorted_tags,
            "flagged_quarter": self.flagged_quarter,
            "status": self.status.value,
        }
        if include_internal:
            data.update({
                "identity": self.identity.to_dict() if self.identity else None,
                "exact_flagged_date": self.exact_flagged_date,
                "investigation_notes": self.investigation_notes,
                "internal_case_id": self.internal_case_id,
                "compliance_officer": self.compliance_officer,
                "wallet_addresses": list(self.wallet_addresses),
            })
        return data

    @classmethod
    def from_dict(cls, data: Mapping) -> "RiskRecord":
        """
        Create from dictionary.

        Raises:
            ValueError: If status is not a known RecordStatus
        """
        identity_data = data.get("identity")
        identity = IdentityFields.from_dict(identity_data) if isinstance(identity_data, Mapping) else None
        return cls(
            identity=identity,
            risk_tags=frozenset(data.get("risk_tags") or ()),
            status=RecordStatus(data.get("status", RecordStatus.CLEAN.value)),
            flagged_quarter=data.get("flagged_quarter"),
            exact_flagged_date=data.get("exact_flagged_date"),
            investigation_notes=data.get("investigation_notes"),
            internal_case_id=data.get("internal_case_id"),
            compliance_officer=data.get("compliance_officer"),
            wallet_addresses=tuple(data.get("wallet_addresses") or ()),
        )


class RecordTable(Mapping):
    """
    Read-only table of risk records keyed by opaque identifier.

    Iteration follows insertion order, which the classifier uses to
    break ties between equally strong candidates.

    Example:
        >>> table = RecordTable({"rec-1": RiskRecord(identity=IdentityFields(email="a@b.c"))})
        >>> table.count()
        1
    """

    def __init__(self, records: Optional[Mapping[str, RiskRecord]] = None):
        self._records = MappingProxyType(dict(records or {}))

    def __getitem__(self, record_id: str) -> RiskRecord:
        return self._records[record_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: str, default: Optional[RiskRecord] = None) -> Optional[RiskRecord]:
        """Get a record by ID."""
        return self._records.get(record_id, default)

    def count(self) -> int:
        """Get number of records."""
        return len(self._records)

    def list_all(self) -> List[RiskRecord]:
        """List all records in table order."""
        return list(self._records.values())

    def search(
        self,
        status: Optional[RecordStatus] = None,
        tag: Optional[str] = None,
    ) -> List[Tuple[str, RiskRecord]]:
        """
        Filter records by status and/or risk tag.

        Args:
            status: Only records with this status
            tag: Only records carrying this risk tag

        Returns:
            List of (record_id, record) pairs in table order
        """
        results = list(self._records.items())
        if status is not None:
            status = RecordStatus(status)
            results = [(rid, r) for rid, r in results if r.status == status]
        if tag:
            results = [(rid, r) for rid, r in results if tag in r.risk_tags]
        return results

    def status_counts(self) -> Dict[str, int]:
        """Number of records per status."""
        counts = {status.value: 0 for status in RecordStatus}
        for record in self._records.values():
            counts[record.status.value] += 1
        return counts

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert to a plain dictionary."""
        return {rid: record.to_dict() for rid, record in self._records.items()}

    @classmethod
    def from_dict(cls, data: Mapping) -> "RecordTable":
        """
        Build a table from a mapping of record ID to record dictionary.

        A ``{"records": {...}}`` wrapper is also accepted.
        """
        if "records" in data and isinstance(data["records"], Mapping):
            data = data["records"]
        return cls({str(rid): RiskRecord.from_dict(entry) for rid, entry in data.items()})

    @classmethod
    def from_file(cls, path: str | Path) -> "RecordTable":
        """
        Load a table from a JSON or YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Record table not found: {path}")

        with open(path, "r") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    def __repr__(self) -> str:
        return f"RecordTable(count={len(self._records)})"
