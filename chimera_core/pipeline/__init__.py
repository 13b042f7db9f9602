"""
Pipeline Module
===============

End-to-end risk query pipeline combining all components.
"""

from chimera_core.pipeline.risk_pipeline import RiskQueryPipeline, NO_MATCH

__all__ = [
    "RiskQueryPipeline",
    "NO_MATCH",
]
