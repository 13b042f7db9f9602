"""
Configuration Management Module
===============================

Centralized configuration for the Chimera risk exchange.
Supports YAML files, environment variables, and programmatic configuration.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Dict, Any, List

import yaml
from pydantic import BaseModel, Field


# =============================================================================
# Configuration Classes (Pydantic Models)
# =============================================================================

class MatchingConfig(BaseModel):
    """Identity match classification configuration."""

    min_full_match_fields: int = Field(
        default=2,
        ge=1, le=2,
        description="Logical fields a query must supply before it can be a full match"
    )
    single_field_bypass_ambiguity: bool = Field(
        default=True,
        description="Classify single-field queries as partial matches even when several records share the field"
    )
    case_insensitive_country: bool = Field(
        default=True,
        description="Compare country values case-insensitively"
    )


class ProviderConfig(BaseModel):
    """Risk-data provider (the exchange answering queries)."""

    name: str = Field(
        default="MapleCEX",
        description="Provider name stamped on proof receipts"
    )
    regulation_compliance: List[str] = Field(
        default=["BSA", "KYC", "OFAC"],
        description="Regulations listed in the receipt compliance block"
    )
    records_path: Optional[str] = Field(
        default=None,
        description="JSON/YAML record table (uses the built-in reference table if None)"
    )


class ComplianceConfig(BaseModel):
    """Audit trail configuration."""

    enabled: bool = Field(
        default=True,
        description="Enable audit logging"
    )
    audit_log_path: str = Field(
        default="./data/audit_logs",
        description="Audit log directory"
    )
    log_retention_days: int = Field(
        default=365,
        ge=1,
        description="Log retention period in days"
    )
    anonymize: bool = Field(
        default=False,
        description="Hash user identifiers in audit events"
    )


class UIConfig(BaseModel):
    """Streamlit demo configuration."""

    show_internal_by_default: bool = Field(
        default=False,
        description="Start with the partner's internal data visible"
    )
    simulated_latency_ms: int = Field(
        default=0,
        ge=0, le=10000,
        description="Artificial delay before showing a result"
    )


# =============================================================================
# Master System Configuration
# =============================================================================

class SystemConfig(BaseModel):
    """Master system configuration combining all modules."""

    # Project metadata
    project_name: str = Field(default="Chimera")
    version: str = Field(default="1.0.0")

    # Sub-configurations
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    compliance: ComplianceConfig = Field(default_factory=ComplianceConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def save_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, indent=2, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SystemConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """Load configuration from environment variables."""
        config_path = os.environ.get("CHIMERA_CONFIG_PATH")
        if config_path and Path(config_path).exists():
            return cls.from_yaml(config_path)
        return cls()


# =============================================================================
# Utility Functions
# =============================================================================

def load_config(path: Optional[str | Path] = None) -> SystemConfig:
    """
    Load system configuration from file or environment.

    Args:
        path: Path to YAML configuration file.
              If None, checks CHIMERA_CONFIG_PATH env var, then uses defaults.

    Returns:
        SystemConfig instance

    Example:
        >>> config = load_config("configs/default.yaml")
        >>> config = load_config()  # Uses env var or defaults
    """
    if path is not None:
        return SystemConfig.from_yaml(path)

    return SystemConfig.from_env()


def create_default_config(path: str | Path = "configs/default.yaml") -> SystemConfig:
    """Create and save a default configuration file."""
    config = SystemConfig()
    config.save_yaml(path)
    return config


# =============================================================================
# Default Configuration Instance
# =============================================================================

# Lazy-loaded default config
_default_config: Optional[SystemConfig] = None


def get_default_config() -> SystemConfig:
    """Get the default configuration (lazy-loaded singleton)."""
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config
