"""
Audit Logger
=============

Append-only audit trail of risk queries and internal-data access.
"""

from __future__ import annotations

import json
import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Dict, Any, List
from enum import Enum
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditAction(str, Enum):
    """Types of auditable actions."""
    # Queries
    RISK_QUERY = "risk_query"

    # Data access
    VIEW_INTERNAL = "view_internal"
    EXPORT = "export"

    # System
    TABLE_LOAD = "table_load"
    CONFIG_CHANGE = "config_change"


@dataclass
class AuditEvent:
    """
    Represents a single audit log event.

    Attributes:
        id: Unique event identifier
        timestamp: Event timestamp (UTC)
        action: Type of action performed
        user_id: User who performed the action
        resource_type: Type of resource accessed
        resource_id: ID of the resource
        details: Additional event details
        session_id: Session identifier
        success: Whether the action succeeded
        error_message: Error message if failed
    """
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=_utcnow)
    action: str = ""
    user_id: str = "system"
    resource_type: str = ""
    resource_id: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    session_id: Optional[str] = None
    success: bool = True
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "action": self.action,
            "user_id": self.user_id,
            "resource_type": self.resource_type,
            "resource_id": self.resource_id,
            "details": self.details,
            "session_id": self.session_id,
            "success": self.success,
            "error_message": self.error_message,
        }

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditEvent":
        """Create from dictionary."""
        return cls(
            id=data.get("id", str(uuid.uuid4())),
            timestamp=datetime.fromisoformat(data["timestamp"]) if "timestamp" in data else _utcnow(),
            action=data.get("action", ""),
            user_id=data.get("user_id", "system"),
            resource_type=data.get("resource_type", ""),
            resource_id=data.get("resource_id"),
            details=data.get("details", {}),
            session_id=data.get("session_id"),
            success=data.get("success", True),
            error_message=data.get("error_message"),
        )


class AuditLogger:
    """
    Audit logger for partner risk queries.

    Writes one JSON line per event to a daily file. Events are only ever
    appended; retention is enforced by purge_old_logs.

    Example:
        >>> audit = AuditLogger(log_path="./data/audit_logs")
        >>> audit.log_risk_query(user_id="coinflex", query_hash="4a283f...",
        ...                      query_id="QUERY-1", match_quality="FULL_MATCH")
    """

    def __init__(
        self,
        log_path: str = "./data/audit_logs",
        retention_days: int = 365,
        anonymize: bool = False,
        enabled: bool = True,
    ):
        """
        Initialize audit logger.

        Args:
            log_path: Directory for log files
            retention_days: How long to retain logs
            anonymize: Hash user identifiers in logs
            enabled: Whether logging is enabled
        """
        self.log_path = Path(log_path)
        self.retention_days = retention_days
        self.anonymize = anonymize
        self.enabled = enabled

        if self.enabled:
            self.log_path.mkdir(parents=True, exist_ok=True)

    def log(self, event: AuditEvent) -> None:
        """
        Log an audit event.

        Args:
            event: Audit event to log
        """
        if not self.enabled:
            return

        if self.anonymize:
            event = self._anonymize_event(event)

        log_file = self._get_log_file(event.timestamp)

        with open(log_file, "a") as f:
            f.write(event.to_json() + "\n")

    def log_risk_query(
        self,
        user_id: str,
        query_hash: str,
        query_id: str,
        match_quality: str,
        matched_fields: Optional[List[str]] = None,
        record_id: Optional[str] = None,
        recommendation: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> None:
        """Log a classified risk query."""
        self.log(AuditEvent(
            action=AuditAction.RISK_QUERY.value,
            user_id=user_id,
            resource_type="risk_query",
            resource_id=query_id,
            details={
                "query_hash": query_hash,
                "match_quality": match_quality,
                "matched_fields": matched_fields or [],
                "record_id": record_id,
                "recommendation": recommendation,
            },
            session_id=session_id,
        ))

    def log_internal_view(
        self,
        user_id: str,
        query_id: str,
        record_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> None:
        """Log viewing the provider's internal data for a query."""
        self.log(AuditEvent(
            action=AuditAction.VIEW_INTERNAL.value,
            user_id=user_id,
            resource_type="risk_record",
            resource_id=record_id,
            details={"query_id": query_id},
            session_id=session_id,
        ))

    def log_export(
        self,
        user_id: str,
        export_type: str,
        record_count: int,
    ) -> None:
        """Log a data export."""
        self.log(AuditEvent(
            action=AuditAction.EXPORT.value,
            user_id=user_id,
            resource_type="data_export",
            details={
                "export_type": export_type,
                "record_count": record_count,
            },
        ))

    def log_table_load(
        self,
        source: str,
        record_count: int,
        user_id: str = "system",
    ) -> None:
        """Log loading a record table."""
        self.log(AuditEvent(
            action=AuditAction.TABLE_LOAD.value,
            user_id=user_id,
            resource_type="record_table",
            details={
                "source": source,
                "record_count": record_count,
            },
        ))

    def _get_log_file(self, timestamp: datetime) -> Path:
        """Get log file path for a given date."""
        date_str = timestamp.strftime("%Y-%m-%d")
        return self.log_path / f"audit_{date_str}.jsonl"

    def _anonymize_event(self, event: AuditEvent) -> AuditEvent:
        """Anonymize sensitive data in an event."""
        event.user_id = self._hash(event.user_id)
        if event.session_id:
            event.session_id = self._hash(event.session_id)
        return event

    def _hash(self, value: Optional[str]) -> Optional[str]:
        """Hash a value for anonymization."""
        if value is None:
            return None
        return hashlib.sha256(value.encode()).hexdigest()[:16]

    def query(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
        resource_id: Optional[str] = None,
        limit: int = 1000,
    ) -> List[AuditEvent]:
        """
        Query audit logs.

        Args:
            start_date: Start of date range
            end_date: End of date range
            action: Filter by action type
            user_id: Filter by user
            resource_id: Filter by resource
            limit: Maximum results

        Returns:
            List of matching audit events
        """
        if start_date is None:
            start_date = _utcnow() - timedelta(days=30)
        if end_date is None:
            end_date = _utcnow()

        events = []
        current = start_date.date()
        last = end_date.date()

        while current <= last and len(events) < limit:
            log_file = self.log_path / f"audit_{current.isoformat()}.jsonl"

            if log_file.exists():
                with open(log_file, "r") as f:
                    for line in f:
                        if len(events) >= limit:
                            break

                        try:
                            data = json.loads(line.strip())
                        except json.JSONDecodeError:
                            continue
                        event = AuditEvent.from_dict(data)

                        if action and event.action != action:
                            continue
                        if user_id and event.user_id != user_id:
                            continue
                        if resource_id and event.resource_id != resource_id:
                            continue

                        events.append(event)

            current += timedelta(days=1)

        return events

    def export_logs(
        self,
        start_date: datetime,
        end_date: datetime,
        format: str = "json",
    ) -> str:
        """
        Export logs for a date range.

        Args:
            start_date: Start date
            end_date: End date
            format: Export format (json, csv)

        Returns:
            Exported data as string
        """
        events = self.query(start_date, end_date, limit=100000)

        if format == "json":
            return json.dumps([e.to_dict() for e in events], indent=2)
        elif format == "csv":
            lines = ["timestamp,action,user_id,resource_type,resource_id,success"]
            for e in events:
                lines.append(
                    f"{e.timestamp.isoformat()},{e.action},{e.user_id},"
                    f"{e.resource_type},{e.resource_id or ''},{e.success}"
                )
            return "\n".join(lines)
        else:
            raise ValueError(f"Unsupported format: {format}")

    def purge_old_logs(self) -> int:
        """
        Remove logs older than retention period.

        Returns:
            Number of files removed
        """
        cutoff = _utcnow() - timedelta(days=self.retention_days)
        removed = 0

        for log_file in self.log_path.glob("audit_*.jsonl"):
            try:
                date_str = log_file.stem.replace("audit_", "")
                file_date = datetime.strptime(date_str, "%Y-%m-%d").replace(tzinfo=timezone.utc)

                if file_date < cutoff:
                    log_file.unlink()
                    removed += 1
            except (ValueError, OSError):
                continue

        return removed
