"""
Compliance Module
=================

Audit trail for partner risk queries.
"""

from chimera_core.compliance.audit_logger import AuditLogger, AuditEvent, AuditAction

__all__ = [
    "AuditLogger",
    "AuditEvent",
    "AuditAction",
]
