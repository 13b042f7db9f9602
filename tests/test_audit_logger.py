"""
Test Audit Logger
=================
"""

import json
from datetime import datetime, timedelta, timezone

from chimera_core.compliance.audit_logger import AuditLogger, AuditEvent, AuditAction


class TestAuditEvent:
    """Tests for AuditEvent."""

    def test_round_trip(self):
        """Test dictionary serialization."""
        event = AuditEvent(
            action=AuditAction.RISK_QUERY.value,
            user_id="coinflex",
            resource_id="QUERY-1",
            details={"match_quality": "FULL_MATCH"},
        )

        restored = AuditEvent.from_dict(event.to_dict())

        assert restored.id == event.id
        assert restored.timestamp == event.timestamp
        assert restored.details == {"match_quality": "FULL_MATCH"}


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_log_risk_query(self, tmp_path):
        """Test a query event is appended to today's file."""
        audit = AuditLogger(log_path=str(tmp_path))

        audit.log_risk_query(
            user_id="coinflex",
            query_hash="abc123",
            query_id="QUERY-1",
            match_quality="PARTIAL_MATCH",
            matched_fields=["email"],
            record_id="rec-1",
            recommendation="REJECT - High risk user, manual review required",
        )

        files = list(tmp_path.glob("audit_*.jsonl"))
        assert len(files) == 1

        data = json.loads(files[0].read_text().strip())
        assert data["action"] == "risk_query"
        assert data["resource_id"] == "QUERY-1"
        assert data["details"]["query_hash"] == "abc123"
        assert data["details"]["matched_fields"] == ["email"]

    def test_append_only(self, tmp_path):
        """Test events accumulate rather than overwrite."""
        audit = AuditLogger(log_path=str(tmp_path))

        for i in range(3):
            audit.log_risk_query("u", f"h{i}", f"QUERY-{i}", "UNMATCHED")

        events = audit.query()
        assert [e.resource_id for e in events] == ["QUERY-0", "QUERY-1", "QUERY-2"]

    def test_disabled(self, tmp_path):
        """Test a disabled logger writes nothing."""
        log_dir = tmp_path / "logs"
        audit = AuditLogger(log_path=str(log_dir), enabled=False)

        audit.log_risk_query("u", "h", "QUERY-1", "UNMATCHED")

        assert not log_dir.exists()

    def test_anonymize(self, tmp_path):
        """Test user identifiers are hashed."""
        audit = AuditLogger(log_path=str(tmp_path), anonymize=True)

        audit.log_internal_view(user_id="analyst", query_id="QUERY-1", record_id="rec-1")

        event = audit.query()[0]
        assert event.user_id != "analyst"
        assert len(event.user_id) == 16
        assert event.action == AuditAction.VIEW_INTERNAL.value

    def test_query_filters(self, tmp_path):
        """Test filtering by action and user."""
        audit = AuditLogger(log_path=str(tmp_path))

        audit.log_risk_query("alice", "h1", "QUERY-1", "UNMATCHED")
        audit.log_risk_query("bob", "h2", "QUERY-2", "FULL_MATCH")
        audit.log_table_load(source="reference", record_count=6)

        assert len(audit.query(action="risk_query")) == 2
        assert [e.resource_id for e in audit.query(user_id="bob")] == ["QUERY-2"]
        assert audit.query(action="table_load")[0].details["record_count"] == 6

    def test_query_skips_bad_lines(self, tmp_path):
        """Test unparsable lines are ignored."""
        audit = AuditLogger(log_path=str(tmp_path))
        audit.log_risk_query("u", "h", "QUERY-1", "UNMATCHED")

        log_file = next(tmp_path.glob("audit_*.jsonl"))
        with open(log_file, "a") as f:
            f.write("not json\n")

        assert len(audit.query()) == 1

    def test_export_csv(self, tmp_path):
        """Test CSV export."""
        audit = AuditLogger(log_path=str(tmp_path))
        audit.log_export(user_id="admin", export_type="receipts", record_count=3)

        now = datetime.now(timezone.utc)
        csv = audit.export_logs(now - timedelta(days=1), now, format="csv")

        lines = csv.splitlines()
        assert lines[0] == "timestamp,action,user_id,resource_type,resource_id,success"
        assert ",export,admin,data_export," in lines[1]

    def test_purge_old_logs(self, tmp_path):
        """Test logs beyond retention are removed."""
        audit = AuditLogger(log_path=str(tmp_path), retention_days=30)
        old = tmp_path / "audit_2000-01-01.jsonl"
        old.write_text("{}\n")
        audit.log_risk_query("u", "h", "QUERY-1", "UNMATCHED")

        removed = audit.purge_old_logs()

        assert removed == 1
        assert not old.exists()
        assert len(list(tmp_path.glob("audit_*.jsonl"))) == 1
