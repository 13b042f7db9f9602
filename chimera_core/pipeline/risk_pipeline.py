"""
Risk Query Pipeline
====================

End-to-end handling of a partner risk query: classify, issue receipt, audit.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Union, Callable, Mapping

from chimera_core.config import SystemConfig, load_config
from chimera_core.matching import (
    IdentityFields,
    QueryRecord,
    RecordTable,
    IdentityMatchClassifier,
    MatchResult,
)
from chimera_core.data import load_reference_table
from chimera_core.proof import ProofReceipt, generate_receipt
from chimera_core.compliance import AuditLogger


logger = logging.getLogger(__name__)

NO_MATCH = "No Match Found"


class RiskQueryPipeline:
    """
    Complete risk query pipeline.

    Combines the record table, the match classifier, receipt issuing,
    and audit logging.

    Example:
        >>> pipeline = RiskQueryPipeline(SystemConfig())
        >>> receipt = pipeline.query({"email": "alex.chen@gmail.com"})
        >>> receipt.result["risk_tags"]
        ['Suspicious_Patterns', 'Velocity_Withdrawals']
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        table: Optional[RecordTable] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: System configuration (defaults if None)
            table: Record table (loaded from config if None)
            audit_logger: Audit logger (created from config if None)
            clock: Returns the current time; used for receipt timestamps
        """
        self.config = config or SystemConfig()

        self.audit_logger = audit_logger or self._create_audit_logger()
        self.table = table if table is not None else self._create_table()
        self.classifier = IdentityMatchClassifier(self.config.matching)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

        # Current user context
        self._current_user = "system"
        self._current_session = None

        # Receipts whose internal view has already been audited
        self._viewed_internal = set()

    @classmethod
    def from_config(cls, config_path: str) -> "RiskQueryPipeline":
        """
        Create pipeline from configuration file.

        Args:
            config_path: Path to YAML config file

        Returns:
            Configured RiskQueryPipeline instance
        """
        config = load_config(config_path)
        return cls(config)

    def _create_table(self) -> RecordTable:
        """Load the record table named in config, or the reference table."""
        records_path = self.config.provider.records_path
        if records_path:
            table = RecordTable.from_file(records_path)
            logger.info("Loaded %d records from %s", table.count(), records_path)
        else:
            table = load_reference_table()

        if self.audit_logger:
            self.audit_logger.log_table_load(
                source=records_path or "reference",
                record_count=table.count(),
            )
        return table

    def _create_audit_logger(self) -> AuditLogger:
        """Create audit logger from config."""
        return AuditLogger(
            log_path=self.config.compliance.audit_log_path,
            retention_days=self.config.compliance.log_retention_days,
            anonymize=self.config.compliance.anonymize,
            enabled=self.config.compliance.enabled,
        )

    def set_user_context(
        self,
        user_id: str,
        session_id: Optional[str] = None,
    ) -> None:
        """Set current user context for audit logging."""
        self._current_user = user_id
        self._current_session = session_id

    def classify(self, query: Union[IdentityFields, Mapping]) -> MatchResult:
        """Classify a query without issuing a receipt or logging."""
        return self.classifier.classify(query, self.table)

    def query(self, query: Union[IdentityFields, Mapping]) -> ProofReceipt:
        """
        Run a risk query.

        Args:
            query: QueryRecord or mapping of identity fields

        Returns:
            Signed ProofReceipt
        """
        if isinstance(query, Mapping):
            query = QueryRecord.from_dict(query)

        result = self.classifier.classify(query, self.table)
        receipt = generate_receipt(
            query,
            result,
            provider=self.config.provider.name,
            regulations=self.config.provider.regulation_compliance,
            now=self.clock(),
        )

        logger.info(
            "Query %s... classified as %s",
            receipt.query_hash[:16], receipt.match_quality,
        )

        if self.audit_logger:
            self.audit_logger.log_risk_query(
                user_id=self._current_user,
                query_hash=receipt.query_hash,
                query_id=receipt.query_id,
                match_quality=receipt.match_quality,
                matched_fields=list(receipt.result.get("matched_fields", [])),
                record_id=receipt.internal.get("record_id"),
                recommendation=receipt.recommendation,
                session_id=self._current_session,
            )

        return receipt

    def perform_risk_query(self, email: str) -> ProofReceipt:
        """Run an email-only risk query."""
        return self.query(QueryRecord.from_email(email))

    def check_user(self, email: Optional[str]) -> Union[List[str], str]:
        """
        Legacy lookup by email.

        Returns:
            Sorted risk tags of the matched record, or "No Match Found"
        """
        if not email or not email.strip():
            return NO_MATCH

        receipt = self.perform_risk_query(email)
        if receipt.match_found and "risk_tags" in receipt.result:
            return receipt.result["risk_tags"]
        return NO_MATCH

    def view_internal(self, receipt: ProofReceipt) -> Dict[str, Any]:
        """Internal view of a receipt; the first access per receipt is audited."""
        key = (receipt.query_id, receipt.query_hash, receipt.signature)
        if self.audit_logger and key not in self._viewed_internal:
            self._viewed_internal.add(key)
            self.audit_logger.log_internal_view(
                user_id=self._current_user,
                query_id=receipt.query_id,
                record_id=receipt.internal.get("record_id"),
                session_id=self._current_session,
            )
        return receipt.internal_view()

    def export_audit_log(
        self,
        start_date: datetime,
        end_date: datetime,
        format: str = "json",
    ) -> str:
        """
        Export audit events for a date range.

        The export itself is recorded as an audit event.

        Args:
            start_date: Start date
            end_date: End date
            format: Export format (json, csv)

        Returns:
            Exported data as string
        """
        event_count = len(self.audit_logger.query(start_date, end_date, limit=100000))
        data = self.audit_logger.export_logs(start_date, end_date, format=format)
        self.audit_logger.log_export(
            user_id=self._current_user,
            export_type=f"audit_log_{format}",
            record_count=event_count,
        )
        return data

    def get_statistics(self) -> Dict[str, Any]:
        """Get pipeline statistics."""
        return {
            "provider": self.config.provider.name,
            "total_records": self.table.count(),
            "status_counts": self.table.status_counts(),
            "audit_enabled": bool(self.audit_logger and self.audit_logger.enabled),
            "config": self.config.matching.model_dump(),
        }
