"""Tests for settings and policy loading."""

import json

import pytest

from az_zr_audit.policy.zone_policy import DEFAULT_ZONE_REGIONS, ZonePolicy
from az_zr_audit.settings import AuditSettings, load_policy


class TestAuditSettings:
    def test_defaults(self):
        settings = AuditSettings()
        assert settings.web_api_version == "2023-12-01"
        assert settings.request_timeout == 30
        assert settings.min_zone_redundant_capacity == 2
        assert settings.policy_file is None
        assert settings.zone_regions == list(DEFAULT_ZONE_REGIONS)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("AZ_ZR_ZONE_REGIONS", '["West Central US"]')
        monkeypatch.setenv("AZ_ZR_REQUEST_TIMEOUT", "10")
        settings = AuditSettings()
        assert settings.zone_regions == ["West Central US"]
        assert settings.request_timeout == 10

    def test_dotenv_file(self, tmp_path):
        # The autouse fixture chdirs into tmp_path.
        (tmp_path / ".env").write_text("AZ_ZR_MIN_ZONE_REDUNDANT_CAPACITY=3\n")
        assert AuditSettings().min_zone_redundant_capacity == 3


class TestLoadPolicy:
    def test_default_policy(self):
        assert load_policy(AuditSettings()) == ZonePolicy.default()

    def test_configured_lists_are_normalised(self):
        policy = load_policy(AuditSettings(zone_regions=["East US 2"], zone_skus=["P1 V3"]))
        assert policy.regions == frozenset({"eastus2"})
        assert policy.skus == frozenset({"p1v3"})

    def test_policy_file_replaces_lists(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"regions": ["westcentralus"]}))
        policy = load_policy(AuditSettings(policy_file=path))
        assert policy.regions == frozenset({"westcentralus"})
        assert policy.sku_supported("P1v3")

    def test_policy_file_empty_list_is_honoured(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"skus": []}))
        assert load_policy(AuditSettings(policy_file=path)).skus == frozenset()

    @pytest.mark.parametrize(
        "content",
        ["not json", "[1, 2]", '{"regions": "eastus"}', '{"skus": [1]}'],
    )
    def test_malformed_policy_file(self, tmp_path, content):
        path = tmp_path / "policy.json"
        path.write_text(content)
        with pytest.raises(ValueError, match="policy"):
            load_policy(AuditSettings(policy_file=path))

    def test_missing_policy_file(self, tmp_path):
        with pytest.raises(ValueError, match="missing.json"):
            load_policy(AuditSettings(policy_file=tmp_path / "missing.json"))
