"""
Chimera Core - Partner Risk Exchange
=====================================

Privacy-preserving risk-data coordination between exchanges:
- Multi-field identity matching with conflict and cross-contamination detection
- Partner-safe proof receipts with integrity tags
- Quarter-level date coarsening for shared risk data
- Append-only audit trail of every query

Example:
    >>> from chimera_core import RiskQueryPipeline
    >>> pipeline = RiskQueryPipeline()
    >>> receipt = pipeline.query({"email": "alex.chen@gmail.com", "phone": "+1-555-0123"})
    >>> receipt.match_quality
    'FULL_MATCH'
"""

__version__ = "1.0.0"
__author__ = "Chimera Project"

from chimera_core.config import (
    SystemConfig,
    MatchingConfig,
    ProviderConfig,
    ComplianceConfig,
    UIConfig,
    load_config,
)

from chimera_core.matching import (
    IdentityFields,
    QueryRecord,
    RiskRecord,
    RecordStatus,
    RecordTable,
    MatchQuality,
    MatchConfidence,
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
from chimera_core.utils import date_to_quarter, sha256_hex
from chimera_core.data import load_reference_table
from chimera_core.proof import ProofReceipt, generate_receipt
from chimera_core.compliance import AuditLogger
from chimera_core.pipeline import RiskQueryPipeline

__all__ = [
    # Version
    "__version__",
    # Config
    "SystemConfig",
    "MatchingConfig",
    "ProviderConfig",
    "ComplianceConfig",
    "UIConfig",
    "load_config",
    # Matching
    "IdentityFields",
    "QueryRecord",
    "RiskRecord",
    "RecordStatus",
    "RecordTable",
    "MatchQuality",
    "MatchConfidence",
    "MatchResult",
    "Unmatched",
    "FullMatch",
    "CleanMatch",
    "PartialMatch",
    "Conflicted",
    "Ambiguous",
    "IdentityMatchClassifier",
    "classify",
    # Utils
    "date_to_quarter",
    "sha256_hex",
    # Data
    "load_reference_table",
    # Receipts
    "ProofReceipt",
    "generate_receipt",
    # Compliance
    "AuditLogger",
    # Pipeline
    "RiskQueryPipeline",
]
