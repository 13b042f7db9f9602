"""
Identity Matching Module
========================

Risk records, partial identity queries, and match classification.
"""

from chimera_core.matching.identity import (
    LOGICAL_FIELDS,
    IdentityFields,
    QueryRecord,
    RecordStatus,
    RiskRecord,
    RecordTable,
)
from chimera_core.matching.classifier import (
    MatchQuality,
    MatchConfidence,
    MatchCandidate,
    MatchResult,
    Unmatched,
    FullMatch,
    CleanMatch,
    PartialMatch,
    Conflicted,
    Ambiguous,
    IdentityMatchClassifier,
    classify,
)

__all__ = [
    "LOGICAL_FIELDS",
    "IdentityFields",
    "QueryRecord",
    "RecordStatus",
    "RiskRecord",
    "RecordTable",
    "MatchQuality",
    "MatchConfidence",
    "MatchCandidate",
    "MatchResult",
    "Unmatched",
    "FullMatch",
    "CleanMatch",
    "PartialMatch",
    "Conflicted",
    "Ambiguous",
    "IdentityMatchClassifier",
    "classify",
]
