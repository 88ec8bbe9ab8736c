"""Pydantic models for zone-redundancy classification.

Inputs describe what ARM reports for one App Service plan or App Service
Environment.  Outputs pair a status with an eligibility verdict; neither
side carries identity or lifecycle.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TriState(StrEnum):
    """Three-valued boolean: ARM fields are often absent or ``null``."""

    true = "true"
    false = "false"
    unknown = "unknown"

    @classmethod
    def from_value(cls, value: object) -> TriState:
        """Map an ARM JSON value to a member; anything unrecognised is unknown."""
        if isinstance(value, bool):
            return cls.true if value else cls.false
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "true":
                return cls.true
            if lowered == "false":
                return cls.false
        return cls.unknown


class Eligibility(StrEnum):
    already_enabled = "AlreadyEnabled"
    eligible = "Eligible"
    requires_upgrade = "RequiresUpgrade"
    ineligible = "Ineligible"
    unknown = "Unknown"


class PlanStatus(StrEnum):
    region_not_supported = "RegionNotSupported"
    sku_not_supported = "SkuNotSupported"
    requires_new_plan = "RequiresNewPlan"
    ase_not_zone_redundant = "AseNotZoneRedundant"
    ase_status_unknown = "AseStatusUnknown"
    enabled = "Enabled"
    disabled = "Disabled"
    status_unknown = "StatusUnknown"


class EnvironmentStatus(StrEnum):
    region_not_supported = "RegionNotSupported"
    max_zones_unknown = "MaxZonesUnknown"
    max_zones_zero = "MaxZonesZero"
    requires_new_environment = "RequiresNewEnvironment"
    enabled = "Enabled"
    disabled = "Disabled"
    status_unknown = "StatusUnknown"


# ---------------------------------------------------------------------------
# Input / output records
# ---------------------------------------------------------------------------


class NestedEnvironment(BaseModel):
    """The App Service Environment a plan is deployed into."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    zone_redundant: TriState = TriState.unknown


class ResourceAttributes(BaseModel):
    """Observed attributes of one plan or environment."""

    model_config = ConfigDict(frozen=True)

    location: str = ""
    sku_name: str | None = None
    sku_capacity: int | None = Field(default=None, ge=0)
    zone_redundant: TriState = TriState.unknown
    maximum_zones: int | None = Field(default=None, ge=0)
    current_zones_utilized: int | None = None
    environment: NestedEnvironment | None = None


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: PlanStatus | EnvironmentStatus
    eligible: Eligibility
