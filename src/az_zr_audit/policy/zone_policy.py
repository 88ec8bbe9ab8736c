"""Zone-redundancy capability tables for App Service.

The region and SKU lists track what Azure publishes for App Service zone
redundancy and change over time.  They are only defaults: ``ZonePolicy`` is
built from settings (see ``az_zr_audit.settings``) so the lists can be
replaced without touching the classifier.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Default capability tables
# ---------------------------------------------------------------------------

DEFAULT_ZONE_REGIONS: tuple[str, ...] = (
    "australiaeast",
    "brazilsouth",
    "canadacentral",
    "centralindia",
    "centralus",
    "eastasia",
    "eastus",
    "eastus2",
    "francecentral",
    "germanywestcentral",
    "israelcentral",
    "italynorth",
    "japaneast",
    "koreacentral",
    "mexicocentral",
    "newzealandnorth",
    "northeurope",
    "norwayeast",
    "polandcentral",
    "qatarcentral",
    "southafricanorth",
    "southcentralus",
    "southeastasia",
    "spaincentral",
    "swedencentral",
    "switzerlandnorth",
    "uaenorth",
    "uksouth",
    "westeurope",
    "westus2",
    "westus3",
)

DEFAULT_ZONE_SKUS: tuple[str, ...] = (
    # Premium v2
    "P1v2",
    "P2v2",
    "P3v2",
    # Premium v3
    "P0v3",
    "P1v3",
    "P2v3",
    "P3v3",
    "P1mv3",
    "P2mv3",
    "P3mv3",
    "P4mv3",
    "P5mv3",
    # Isolated v2
    "I1v2",
    "I2v2",
    "I3v2",
    "I4v2",
    "I5v2",
    "I6v2",
    "I1mv2",
    "I2mv2",
    "I3mv2",
    "I4mv2",
    "I5mv2",
    # Elastic Premium (Functions) and Workflow Standard (Logic Apps)
    "EP1",
    "EP2",
    "EP3",
    "WS1",
    "WS2",
    "WS3",
)

# Matches normalised names: i1v2, i6v2, i1mv2 ("I2m v2" normalises to i2mv2).
ISOLATED_V2_PATTERN = re.compile(r"^i\d+m?v2$")


def normalize_name(value: str | None) -> str:
    """Lower-case *value* and drop all whitespace (``"East US"`` becomes ``"eastus"``)."""
    if not value:
        return ""
    return "".join(value.split()).lower()


# ---------------------------------------------------------------------------
# Policy value object
# ---------------------------------------------------------------------------


class ZonePolicy(BaseModel):
    """Immutable set of zone-capable regions and SKUs."""

    model_config = ConfigDict(frozen=True)

    regions: frozenset[str]
    skus: frozenset[str]

    @field_validator("regions", "skus", mode="before")
    @classmethod
    def _normalize(cls, value: Iterable[str]) -> frozenset[str]:
        if isinstance(value, str):
            value = [value]
        return frozenset(n for n in (normalize_name(v) for v in value) if n)

    @classmethod
    def default(cls) -> ZonePolicy:
        return cls(regions=DEFAULT_ZONE_REGIONS, skus=DEFAULT_ZONE_SKUS)

    def region_supported(self, location: str | None) -> bool:
        return normalize_name(location) in self.regions

    def sku_supported(self, sku_name: str | None) -> bool:
        return normalize_name(sku_name) in self.skus

    @staticmethod
    def is_isolated_v2(sku_name: str | None) -> bool:
        return ISOLATED_V2_PATTERN.match(normalize_name(sku_name)) is not None
