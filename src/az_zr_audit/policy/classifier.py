"""Zone-redundancy eligibility classifier.

Rules are checked top-down and the first match wins; later rules rely on
earlier ones having failed.  Missing data never raises: it falls through
to the ``Unknown`` branches.

Plans (``classify_plan``)
-------------------------
1. region not zone-capable           RegionNotSupported   Ineligible
2. SKU not zone-capable              SkuNotSupported      Ineligible
3. maximumNumberOfZones == 1         RequiresNewPlan      Ineligible
4. Isolated v2, ASE not redundant    AseNotZoneRedundant  Ineligible
5. Isolated v2, ASE state unknown    AseStatusUnknown     Unknown
6. zoneRedundant true                Enabled              AlreadyEnabled
7. zoneRedundant false               Disabled             Eligible / Ineligible
8. otherwise                         StatusUnknown        Unknown

Environments (``classify_environment``)
---------------------------------------
1. region not zone-capable           RegionNotSupported      Ineligible
2. maximumNumberOfZones missing      MaxZonesUnknown         Unknown
3. maximumNumberOfZones == 0         MaxZonesZero            Ineligible
4. maximumNumberOfZones == 1         RequiresNewEnvironment  Ineligible
5. zoneRedundant true                Enabled                 AlreadyEnabled
6. zoneRedundant false               Disabled                Eligible / Ineligible
7. otherwise                         StatusUnknown           Unknown
"""

from __future__ import annotations

from az_zr_audit.models.eligibility import (
    ClassificationResult,
    Eligibility,
    EnvironmentStatus,
    PlanStatus,
    ResourceAttributes,
    TriState,
)
from az_zr_audit.policy.zone_policy import ZonePolicy

_DEFAULT_POLICY = ZonePolicy.default()


def _result(status: PlanStatus | EnvironmentStatus, eligible: Eligibility) -> ClassificationResult:
    return ClassificationResult(status=status, eligible=eligible)


def _nested_zone_redundant(attrs: ResourceAttributes) -> TriState:
    if attrs.environment is None:
        return TriState.unknown
    return attrs.environment.zone_redundant


def classify_plan(
    attrs: ResourceAttributes,
    policy: ZonePolicy | None = None,
) -> ClassificationResult:
    """Classify an App Service plan."""
    policy = policy or _DEFAULT_POLICY
    region_ok = policy.region_supported(attrs.location)
    sku_ok = policy.sku_supported(attrs.sku_name)
    isolated = policy.is_isolated_v2(attrs.sku_name)
    ase_state = _nested_zone_redundant(attrs)

    if not region_ok:
        return _result(PlanStatus.region_not_supported, Eligibility.ineligible)
    if not sku_ok:
        return _result(PlanStatus.sku_not_supported, Eligibility.ineligible)
    if attrs.maximum_zones == 1:
        return _result(PlanStatus.requires_new_plan, Eligibility.ineligible)
    if isolated and ase_state is TriState.false:
        return _result(PlanStatus.ase_not_zone_redundant, Eligibility.ineligible)
    if isolated and ase_state is TriState.unknown:
        return _result(PlanStatus.ase_status_unknown, Eligibility.unknown)
    if attrs.zone_redundant is TriState.true:
        return _result(PlanStatus.enabled, Eligibility.already_enabled)
    if attrs.zone_redundant is TriState.false:
        eligible = (
            region_ok
            and sku_ok
            and (attrs.maximum_zones or 0) > 1
            and (not isolated or ase_state is TriState.true)
        )
        return _result(
            PlanStatus.disabled,
            Eligibility.eligible if eligible else Eligibility.ineligible,
        )
    return _result(PlanStatus.status_unknown, Eligibility.unknown)


def classify_environment(
    attrs: ResourceAttributes,
    policy: ZonePolicy | None = None,
) -> ClassificationResult:
    """Classify an App Service Environment.  The SKU is not considered."""
    policy = policy or _DEFAULT_POLICY
    region_ok = policy.region_supported(attrs.location)

    if not region_ok:
        return _result(EnvironmentStatus.region_not_supported, Eligibility.ineligible)
    if attrs.maximum_zones is None:
        return _result(EnvironmentStatus.max_zones_unknown, Eligibility.unknown)
    if attrs.maximum_zones == 0:
        return _result(EnvironmentStatus.max_zones_zero, Eligibility.ineligible)
    if attrs.maximum_zones == 1:
        return _result(EnvironmentStatus.requires_new_environment, Eligibility.ineligible)
    if attrs.zone_redundant is TriState.true:
        return _result(EnvironmentStatus.enabled, Eligibility.already_enabled)
    if attrs.zone_redundant is TriState.false:
        eligible = region_ok and attrs.maximum_zones > 1
        return _result(
            EnvironmentStatus.disabled,
            Eligibility.eligible if eligible else Eligibility.ineligible,
        )
    return _result(EnvironmentStatus.status_unknown, Eligibility.unknown)
