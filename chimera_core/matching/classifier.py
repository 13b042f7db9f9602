"""
Identity Match Classifier
==========================

Multi-field matching of a partial identity against a risk-record table.

Classification runs in three steps:

1. Candidate generation: every record sharing at least one logical field
   with the query becomes a candidate.
2. Conflict detection: queried fields where a candidate's record holds a
   different value are recorded as conflicting.
3. Classification, first rule wins:
   unmatched, full/clean match, conflicted, ambiguous, partial match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, Tuple, Union, Mapping

from chimera_core.config import MatchingConfig
from chimera_core.matching.identity import (
    LOGICAL_FIELDS,
    IdentityFields,
    QueryRecord,
    RecordTable,
    RiskRecord,
)


logger = logging.getLogger(__name__)


class MatchQuality(str, Enum):
    """Tag of a MatchResult variant."""
    UNMATCHED = "UNMATCHED"
    FULL_MATCH = "FULL_MATCH"
    CLEAN_MATCH = "CLEAN_MATCH"
    PARTIAL_MATCH = "PARTIAL_MATCH"
    CONFLICTED = "CONFLICTED"
    AMBIGUOUS = "AMBIGUOUS"


class MatchConfidence(str, Enum):
    """Confidence of a partial match."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"


def _ordered(fields) -> Tuple[str, ...]:
    return tuple(f for f in LOGICAL_FIELDS if f in fields)


@dataclass(frozen=True)
class MatchCandidate:
    """
    A record that shares at least one logical field with the query.

    Attributes:
        record_id: Key of the record in the table
        record: The matched record
        matched_fields: Logical fields equal to the query
        conflicting_fields: Queried fields where the record holds a different value
    """
    record_id: str
    record: RiskRecord
    matched_fields: frozenset
    conflicting_fields: frozenset = frozenset()

    @property
    def match_strength(self) -> int:
        return len(self.matched_fields)

    @property
    def internal_conflict(self) -> bool:
        return bool(self.conflicting_fields)


# =============================================================================
# Result Variants
# =============================================================================

@dataclass(frozen=True)
class MatchResult:
    """Base class of all classification outcomes."""

    quality = None

    @property
    def match_found(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"quality": self.quality.value, "match_found": self.match_found}


@dataclass(frozen=True)
class Unmatched(MatchResult):
    """No record shares a field with the query."""
    searched_fields: Tuple[str, ...] = ()

    quality = MatchQuality.UNMATCHED

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["searched_fields"] = list(self.searched_fields)
        return data


@dataclass(frozen=True)
class _RecordResult(MatchResult):
    record_id: str = ""
    record: Optional[RiskRecord] = None
    matched_fields: Tuple[str, ...] = ()

    @property
    def match_found(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["record_id"] = self.record_id
        data["matched_fields"] = list(self.matched_fields)
        return data


@dataclass(frozen=True)
class FullMatch(_RecordResult):
    """Every queried field matched one flagged record."""
    quality = MatchQuality.FULL_MATCH


@dataclass(frozen=True)
class CleanMatch(_RecordResult):
    """Every queried field matched one record that carries no risk tags."""
    quality = MatchQuality.CLEAN_MATCH


@dataclass(frozen=True)
class PartialMatch(_RecordResult):
    """A non-conflicting subset of the queried fields matched one record."""
    confidence: MatchConfidence = MatchConfidence.LOW

    quality = MatchQuality.PARTIAL_MATCH

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["confidence"] = self.confidence.value
        return data


@dataclass(frozen=True)
class Conflicted(_RecordResult):
    """Some fields match a record while others contradict it."""
    conflicting_fields: Tuple[str, ...] = ()

    quality = MatchQuality.CONFLICTED

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["conflicting_fields"] = list(self.conflicting_fields)
        return data


@dataclass(frozen=True)
class Ambiguous(MatchResult):
    """The queried fields are spread over several distinct records."""
    candidate_count: int = 0
    record_ids: Tuple[str, ...] = ()

    quality = MatchQuality.AMBIGUOUS

    @property
    def match_found(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["candidate_count"] = self.candidate_count
        data["record_ids"] = list(self.record_ids)
        return data


# =============================================================================
# Classifier
# =============================================================================

class IdentityMatchClassifier:
    """
    Classifies a partial identity query against a record table.

    The classifier holds no state besides its configuration and never
    mutates the table, so one instance can serve concurrent callers.

    Example:
        >>> classifier = IdentityMatchClassifier()
        >>> result = classifier.classify(QueryRecord(email="alex.chen@gmail.com"), table)
        >>> result.quality
        <MatchQuality.PARTIAL_MATCH: 'PARTIAL_MATCH'>
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()

    def classify(
        self,
        query: Optional[Union[IdentityFields, Mapping]],
        table: Mapping[str, RiskRecord],
    ) -> MatchResult:
        """
        Classify a query.

        Args:
            query: QueryRecord (or a mapping of identity fields)
            table: Record table to search

        Returns:
            One of Unmatched, FullMatch, CleanMatch, PartialMatch,
            Conflicted or Ambiguous
        """
        if query is None:
            return Unmatched(searched_fields=())
        if isinstance(query, Mapping):
            query = QueryRecord.from_dict(query)

        queried = query.present_fields()
        if not queried:
            return Unmatched(searched_fields=())

        candidates = self.find_candidates(query, table)
        result = self._classify_candidates(queried, candidates)

        logger.debug(
            "Classified query over %s as %s (%d candidates)",
            ",".join(queried), result.quality.value, len(candidates),
        )
        return result

    def find_candidates(
        self,
        query: IdentityFields,
        table: Mapping[str, RiskRecord],
    ) -> List[MatchCandidate]:
        """
        Build match candidates, strongest first.

        Equal-strength candidates keep table order.
        """
        queried = query.present_fields()
        candidates = []

        for record_id, record in table.items():
            identity = getattr(record, "identity", None)
            if not isinstance(identity, IdentityFields):
                logger.warning("Skipping record %s: missing identity", record_id)
                continue

            matched = set()
            conflicting = set()
            for name in queried:
                record_value = identity.value_of(name)
                if record_value is None:
                    continue
                if self._field_equal(name, query.value_of(name), record_value):
                    matched.add(name)
                else:
                    conflicting.add(name)

            if matched:
                candidates.append(MatchCandidate(
                    record_id=record_id,
                    record=record,
                    matched_fields=frozenset(matched),
                    conflicting_fields=frozenset(conflicting),
                ))

        # sort is stable, so ties keep table order
        candidates.sort(key=lambda c: c.match_strength, reverse=True)
        return candidates

    def _field_equal(self, name: str, query_value: Any, record_value: Any) -> bool:
        if name == "country" and self.config.case_insensitive_country:
            return query_value.casefold() == record_value.casefold()
        return query_value == record_value

    def _classify_candidates(
        self,
        queried: Tuple[str, ...],
        candidates: List[MatchCandidate],
    ) -> MatchResult:
        if not candidates:
            return Unmatched(searched_fields=queried)

        # Full match: one record covers every queried field
        if len(queried) >= self.config.min_full_match_fields:
            complete = [c for c in candidates if c.match_strength == len(queried)]
            if len(complete) == 1:
                best = complete[0]
                variant = CleanMatch if best.record.is_clean else FullMatch
                return variant(
                    record_id=best.record_id,
                    record=best.record,
                    matched_fields=_ordered(best.matched_fields),
                )

        top = candidates[0]
        others = candidates[1:]

        # Conflicts that another record explains are cross-contamination
        covered_elsewhere = set()
        for candidate in others:
            covered_elsewhere |= candidate.matched_fields
        unexplained = top.conflicting_fields - covered_elsewhere
        if unexplained:
            return Conflicted(
                record_id=top.record_id,
                record=top.record,
                matched_fields=_ordered(top.matched_fields),
                conflicting_fields=_ordered(top.conflicting_fields),
            )

        if self._is_cross_contaminated(queried, top, candidates):
            return Ambiguous(
                candidate_count=len(candidates),
                record_ids=tuple(c.record_id for c in candidates),
            )

        confidence = MatchConfidence.LOW if len(queried) == 1 else MatchConfidence.MEDIUM
        return PartialMatch(
            record_id=top.record_id,
            record=top.record,
            matched_fields=_ordered(top.matched_fields),
            confidence=confidence,
        )

    def _is_cross_contaminated(
        self,
        queried: Tuple[str, ...],
        top: MatchCandidate,
        candidates: List[MatchCandidate],
    ) -> bool:
        if len(candidates) < 2:
            return False

        if len(queried) == 1:
            # Several records sharing the single supplied field
            return not self.config.single_field_bypass_ambiguity

        covered = set()
        for candidate in candidates:
            covered |= candidate.matched_fields
        if len(covered) > top.match_strength:
            return True

        strong = [c for c in candidates if c.match_strength >= 2]
        return len(strong) >= 2


def classify(
    query: Optional[Union[IdentityFields, Mapping]],
    table: Union[RecordTable, Mapping[str, RiskRecord]],
    config: Optional[MatchingConfig] = None,
) -> MatchResult:
    """Classify ``query`` against ``table`` with a one-off classifier."""
    return IdentityMatchClassifier(config).classify(query, table)
