"""Tests for text report rendering."""

from az_zr_audit.models.audit import (
    AuditRecord,
    AuditReport,
    RecordError,
    UpdateOutcome,
    UpdateResult,
)
from az_zr_audit.models.eligibility import ResourceAttributes, TriState
from az_zr_audit.policy.classifier import classify_plan
from az_zr_audit.report import render_summary, render_table

_PLAN_A = "/subscriptions/s/resourceGroups/rg/providers/Microsoft.Web/serverfarms/plan-a"

_ATTRS = ResourceAttributes(
    location="eastus",
    sku_name="P1v3",
    sku_capacity=1,
    zone_redundant=TriState.false,
    maximum_zones=3,
    current_zones_utilized=1,
)


def _report() -> AuditReport:
    return AuditReport(
        kind="plan",
        records=[
            AuditRecord(
                resource_id=_PLAN_A,
                kind="plan",
                name="plan-a",
                resource_group="rg",
                attributes=_ATTRS,
                result=classify_plan(_ATTRS),
                update=UpdateResult(outcome=UpdateOutcome.dry_run, target_capacity=2),
            ),
            AuditRecord(
                resource_id="garbage",
                kind="plan",
                error=RecordError.invalid_resource_id,
                message="Invalid resource ID format",
            ),
        ],
    )


class TestRenderTable:
    def test_plain(self):
        lines = render_table(_report(), color=False).splitlines()
        assert lines[0].startswith("Name")
        assert "Status" in lines[0]
        assert set(lines[1].replace(" ", "")) == {"-"}
        assert "plan-a" in lines[2]
        assert "Disabled" in lines[2]
        assert "Eligible" in lines[2]
        assert "1/3" in lines[2]
        assert "DryRun (capacity->2)" in lines[2]
        assert lines[3].startswith("garbage")
        assert "InvalidResourceId" in lines[3]

    def test_columns_aligned(self):
        lines = render_table(_report(), color=False).splitlines()
        status_col = lines[0].index("Status")
        assert lines[2][status_col:].startswith("Disabled")
        assert lines[3][status_col:].startswith("InvalidResourceId")

    def test_color(self):
        assert "\x1b[" in render_table(_report(), color=True)


class TestRenderSummary:
    def test_counts(self):
        text = render_summary(_report())
        assert "Total plan resources: 2" in text
        assert "  Disabled: 1" in text
        assert "  Eligible: 1" in text
        assert "  InvalidResourceId: 1" in text
        assert "  DryRun: 1" in text

    def test_empty_sections_omitted(self):
        text = render_summary(AuditReport(kind="environment"))
        assert text == "Total environment resources: 0"
