"""Shared test fixtures for az-zr-audit tests."""

from __future__ import annotations

import os
from unittest.mock import MagicMock, patch

import pytest

from az_zr_audit.settings import AuditSettings


@pytest.fixture(autouse=True)
def _mock_credential():
    """Prevent real Azure credential calls in every test."""
    mock_token = MagicMock()
    mock_token.token = "fake-token"
    with patch("az_zr_audit.azure_api._auth.credential") as cred:
        cred.get_token.return_value = mock_token
        yield cred


@pytest.fixture(autouse=True)
def _clear_environment_cache():
    """Clear the App Service Environment cache between tests."""
    from az_zr_audit.azure_api import _environment_cache

    _environment_cache.clear()
    yield
    _environment_cache.clear()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep ``AZ_ZR_*`` variables and a stray ``.env`` out of the settings."""
    for key in list(os.environ):
        if key.upper().startswith("AZ_ZR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def settings() -> AuditSettings:
    return AuditSettings()


def plan_payload(
    *,
    location: str = "East US",
    sku: str = "P1v3",
    capacity: int | None = 1,
    zone_redundant: bool | None = False,
    max_zones: int | None = 3,
    environment_id: str | None = None,
) -> dict:
    """Build an ARM ``serverfarms`` GET payload."""
    props: dict = {"zoneRedundant": zone_redundant, "maximumNumberOfZones": max_zones}
    if environment_id:
        props["hostingEnvironmentProfile"] = {"id": environment_id}
    return {
        "location": location,
        "sku": {"name": sku, "capacity": capacity},
        "properties": props,
    }


def mock_response(status_code: int = 200, json_data: object = None, headers: dict | None = None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.headers = headers or {}
    resp.reason = "Reason"
    resp.content = b"{}" if json_data is not None else b""
    resp.json.return_value = json_data
    return resp
