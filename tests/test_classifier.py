"""
Test Identity Match Classifier
==============================
"""

import logging

import pytest

from chimera_core.config import MatchingConfig
from chimera_core.data import load_reference_table
from chimera_core.matching import (
    IdentityFields,
    QueryRecord,
    RecordTable,
    RiskRecord,
    IdentityMatchClassifier,
    MatchQuality,
    MatchConfidence,
    Unmatched,
    FullMatch,
    CleanMatch,
    PartialMatch,
    Conflicted,
    Ambiguous,
    classify,
)
from chimera_core.utils.hashing import email_key


ALEX = {
    "email": "alex.chen@gmail.com",
    "phone": "+1-555-0123",
    "country": "United States",
    "documentType": "Passport",
    "documentNumber": "US123456789",
}


@pytest.fixture
def table():
    return load_reference_table()


def _record(risk_tags=("Flag",), **identity):
    return RiskRecord(identity=IdentityFields(**identity), risk_tags=frozenset(risk_tags))


class TestUnmatched:
    """Tests for queries that match nothing."""

    def test_empty_query(self, table):
        """Test an empty query is unmatched, not an error."""
        result = classify(QueryRecord(), table)

        assert isinstance(result, Unmatched)
        assert result.searched_fields == ()
        assert result.match_found is False

    def test_missing_query(self, table):
        """Test a None query is unmatched rather than an error."""
        result = classify(None, table)

        assert isinstance(result, Unmatched)
        assert result.searched_fields == ()

    def test_half_document_is_empty(self, table):
        """Test a document number without a type supplies no field."""
        result = classify(QueryRecord(document_number="US123456789"), table)

        assert isinstance(result, Unmatched)

    def test_unknown_email(self, table):
        """Test an email absent from the table."""
        result = classify({"email": "clean-user@example.com"}, table)

        assert isinstance(result, Unmatched)
        assert result.quality == MatchQuality.UNMATCHED
        assert result.searched_fields == ("email",)

    def test_empty_table(self):
        """Test classification over an empty table."""
        result = classify(QueryRecord(email="a@b.c", phone="1"), RecordTable())

        assert isinstance(result, Unmatched)
        assert result.searched_fields == ("email", "phone")


class TestFullMatch:
    """Tests for full and clean matches."""

    def test_reference_full_match(self, table):
        """Test every field of alex.chen matches despite the shared passport."""
        result = classify(ALEX, table)

        assert isinstance(result, FullMatch)
        assert result.matched_fields == ("email", "phone", "country", "document")
        assert "Velocity_Withdrawals" in result.record.risk_tags
        assert result.record_id == email_key("alex.chen@gmail.com")

    def test_clean_match(self, table):
        """Test a full match on a record without risk tags."""
        result = classify({"email": "maria.rodriguez@yahoo.com", "country": "spain"}, table)

        assert isinstance(result, CleanMatch)
        assert result.matched_fields == ("email", "country")
        assert result.match_found is True

    def test_exclusive_full_match(self):
        """Test a query equal to one record that shares nothing with others."""
        table = RecordTable({
            "r1": _record(email="a@x.io", phone="111"),
            "r2": _record(email="b@x.io", phone="222"),
        })

        result = classify({"email": "a@x.io", "phone": "111"}, table)

        assert isinstance(result, FullMatch)
        assert result.record_id == "r1"

    def test_single_field_threshold_configurable(self, table):
        """Test a single-field full match when one field suffices."""
        config = MatchingConfig(min_full_match_fields=1)

        result = classify({"email": "fraud-user-1@email.com"}, table, config)

        assert isinstance(result, FullMatch)

    def test_case_sensitive_country(self, table):
        """Test country comparison can be made case-sensitive."""
        config = MatchingConfig(case_insensitive_country=False)

        result = classify({"email": "maria.rodriguez@yahoo.com", "country": "spain"}, table, config)

        assert isinstance(result, Conflicted)
        assert result.conflicting_fields == ("country",)


class TestConflicted:
    """Tests for internally conflicting matches."""

    def test_phone_contradicts_email_match(self, table):
        """Test email matches a record whose phone differs from the query."""
        result = classify({"email": "alex.chen@gmail.com", "phone": "+1-555-9999"}, table)

        assert isinstance(result, Conflicted)
        assert "email" in result.matched_fields
        assert "phone" in result.conflicting_fields
        assert result.record_id == email_key("alex.chen@gmail.com")

    def test_document_type_mismatch(self):
        """Test the document pair conflicts when only the number agrees."""
        table = RecordTable({
            "r1": _record(email="a@x.io", document_type="Passport", document_number="P1"),
        })

        result = classify({
            "email": "a@x.io",
            "document_type": "National_ID",
            "document_number": "P1",
        }, table)

        assert isinstance(result, Conflicted)
        assert result.matched_fields == ("email",)
        assert result.conflicting_fields == ("document",)

    def test_missing_record_value_is_not_conflict(self, table):
        """Test a field the record lacks yields a medium partial match."""
        result = classify({"email": "fraud-user-1@email.com", "phone": "+1-555-0000"}, table)

        assert isinstance(result, PartialMatch)
        assert result.confidence == MatchConfidence.MEDIUM
        assert result.matched_fields == ("email",)


class TestAmbiguous:
    """Tests for cross-contaminated queries."""

    def test_fields_split_across_records(self, table):
        """Test two fields that each match a different record."""
        result = classify({
            "email": "alex.chen@gmail.com",
            "phone": "+44-20-7946-0958",
        }, table)

        assert isinstance(result, Ambiguous)
        assert result.candidate_count == 2
        assert result.match_found is True

    def test_split_without_overlap(self):
        """Test records that leave the other field blank."""
        table = RecordTable({
            "r1": _record(email="a@x.io"),
            "r2": _record(phone="222"),
        })

        result = classify({"email": "a@x.io", "phone": "222"}, table)

        assert isinstance(result, Ambiguous)
        assert result.record_ids == ("r1", "r2")

    def test_multiple_strong_candidates(self, table):
        """Test two records that each match every supplied field."""
        result = classify({
            "country": "United States",
            "document_type": "Passport",
            "document_number": "US123456789",
        }, table)

        assert isinstance(result, Ambiguous)
        assert result.candidate_count == 2

    def test_unexplained_conflict_wins(self):
        """Test a conflict no other record explains stays Conflicted."""
        table = RecordTable({
            "r1": _record(email="a@x.io", phone="111", country="Spain"),
            "r2": _record(phone="222"),
        })

        result = classify({"email": "a@x.io", "phone": "222", "country": "France"}, table)

        assert isinstance(result, Conflicted)
        assert result.conflicting_fields == ("phone", "country")


class TestPartialMatch:
    """Tests for partial matches."""

    def test_single_field_low_confidence(self, table):
        """Test one supplied field matching one record."""
        result = classify({"email": "alex.chen@gmail.com"}, table)

        assert isinstance(result, PartialMatch)
        assert result.confidence == MatchConfidence.LOW
        assert result.matched_fields == ("email",)

    def test_shared_document_single_field(self, table):
        """Test a document shared by two records, queried alone."""
        result = classify({"documentNumber": "US123456789", "documentType": "Passport"}, table)

        assert isinstance(result, PartialMatch)
        assert result.confidence == MatchConfidence.LOW
        # ties keep table order
        assert result.record_id == email_key("alex.chen@gmail.com")

    def test_shared_document_without_bypass(self, table):
        """Test the same query is ambiguous when single fields are not exempt."""
        config = MatchingConfig(single_field_bypass_ambiguity=False)

        result = classify({"documentNumber": "US123456789", "documentType": "Passport"}, table, config)

        assert isinstance(result, Ambiguous)
        assert result.candidate_count == 2

    def test_single_field_unique_without_bypass(self, table):
        """Test a unique single-field hit is still partial without the bypass."""
        config = MatchingConfig(single_field_bypass_ambiguity=False)

        result = classify({"email": "alex.chen@gmail.com"}, table, config)

        assert isinstance(result, PartialMatch)

    def test_stronger_candidate_first(self):
        """Test the strongest candidate is chosen over table order."""
        table = RecordTable({
            "weak": _record(country="Spain", phone="999"),
            "strong": _record(email="a@x.io", country="Spain"),
        })

        candidates = IdentityMatchClassifier().find_candidates(
            QueryRecord(email="a@x.io", country="Spain"), table,
        )

        assert [c.record_id for c in candidates] == ["strong", "weak"]
        assert candidates[0].match_strength == 2
        assert not candidates[1].internal_conflict


class TestRobustness:
    """Tests for malformed tables and determinism."""

    def test_malformed_record_skipped(self, caplog):
        """Test a record without identity is skipped with a warning."""
        table = RecordTable({
            "broken": RiskRecord(identity=None, risk_tags={"X"}),
            "ok": _record(email="a@x.io"),
        })

        with caplog.at_level(logging.WARNING, logger="chimera_core.matching.classifier"):
            result = classify({"email": "a@x.io"}, table)

        assert isinstance(result, PartialMatch)
        assert result.record_id == "ok"
        assert "broken" in caplog.text

    def test_foreign_values_skipped(self):
        """Test table values that are not records do not abort classification."""
        table = {"junk": {"email": "a@x.io"}, "ok": _record(email="a@x.io")}

        result = classify({"email": "a@x.io"}, table)

        assert isinstance(result, PartialMatch)
        assert result.record_id == "ok"

    def test_deterministic(self, table):
        """Test repeated classification gives equal results."""
        queries = [
            ALEX,
            {"email": "alex.chen@gmail.com", "phone": "+44-20-7946-0958"},
            {"email": "alex.chen@gmail.com", "phone": "+1-555-9999"},
            {"documentNumber": "US123456789", "documentType": "Passport"},
            {},
        ]
        classifier = IdentityMatchClassifier()

        for query in queries:
            assert classifier.classify(query, table) == classifier.classify(query, table)

    def test_table_not_mutated(self, table):
        """Test classification leaves the table untouched."""
        before = table.to_dict()

        classify(ALEX, table)

        assert table.to_dict() == before

    def test_result_to_dict(self, table):
        """Test result serialization carries the variant tag."""
        data = classify({"email": "alex.chen@gmail.com", "phone": "+1-555-9999"}, table).to_dict()

        assert data["quality"] == "CONFLICTED"
        assert data["matched_fields"] == ["email"]
        assert data["conflicting_fields"] == ["phone"]
