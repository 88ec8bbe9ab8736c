"""Audit settings loaded from environment variables."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from az_zr_audit.policy.zone_policy import DEFAULT_ZONE_REGIONS, DEFAULT_ZONE_SKUS, ZonePolicy

logger = logging.getLogger(__name__)


class AuditSettings(BaseSettings):
    """Configuration for az-zr-audit.

    Values are read from ``AZ_ZR_*`` environment variables (case-insensitive)
    and optionally from a ``.env`` file in the working directory.  List
    values are given as JSON, e.g. ``AZ_ZR_ZONE_REGIONS='["eastus"]'``.
    """

    zone_regions: list[str] = Field(default_factory=lambda: list(DEFAULT_ZONE_REGIONS))
    zone_skus: list[str] = Field(default_factory=lambda: list(DEFAULT_ZONE_SKUS))
    policy_file: Path | None = None

    web_api_version: str = "2023-12-01"
    request_timeout: int = 30

    min_zone_redundant_capacity: int = Field(default=2, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="AZ_ZR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def _read_policy_file(path: Path) -> dict[str, list[str]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read policy file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Policy file {path} must contain a JSON object")
    for key in ("regions", "skus"):
        value = data.get(key)
        if value is not None and not (
            isinstance(value, list) and all(isinstance(v, str) for v in value)
        ):
            raise ValueError(f"Policy file {path}: '{key}' must be a list of strings")
    return data


def load_policy(settings: AuditSettings) -> ZonePolicy:
    """Build the ``ZonePolicy`` for *settings*.

    Lists present in ``policy_file`` replace the configured ones; missing
    keys keep the configured value.
    """
    regions = settings.zone_regions
    skus = settings.zone_skus
    if settings.policy_file is not None:
        data = _read_policy_file(settings.policy_file)
        if data.get("regions") is not None:
            regions = data["regions"]
        if data.get("skus") is not None:
            skus = data["skus"]
        logger.info("Loaded zone policy from %s", settings.policy_file)
    return ZonePolicy(regions=regions, skus=skus)
