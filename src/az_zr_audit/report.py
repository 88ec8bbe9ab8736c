"""Plain-text rendering of an ``AuditReport``."""

from __future__ import annotations

import click

from az_zr_audit.models.audit import AuditRecord, AuditReport, UpdateOutcome
from az_zr_audit.models.eligibility import Eligibility

_COLUMNS: list[tuple[str, str]] = [
    ("name", "Name"),
    ("resource_group", "Resource group"),
    ("location", "Location"),
    ("sku", "SKU"),
    ("capacity", "Capacity"),
    ("zones", "Zones (used/max)"),
    ("status", "Status"),
    ("eligible", "Eligible"),
    ("update", "Update"),
]

_ELIGIBILITY_COLOURS: dict[str, str] = {
    Eligibility.already_enabled: "green",
    Eligibility.eligible: "cyan",
    Eligibility.requires_upgrade: "yellow",
    Eligibility.ineligible: "red",
    Eligibility.unknown: "yellow",
}

_UPDATE_COLOURS: dict[str, str] = {
    UpdateOutcome.updated: "green",
    UpdateOutcome.dry_run: "cyan",
    UpdateOutcome.skipped: "yellow",
    UpdateOutcome.update_failed: "red",
}


def _dash(value: object) -> str:
    return "-" if value is None or value == "" else str(value)


def _row(record: AuditRecord) -> dict[str, str]:
    attrs = record.attributes
    zones = "-"
    if attrs is not None and (attrs.maximum_zones is not None or attrs.current_zones_utilized):
        zones = f"{_dash(attrs.current_zones_utilized)}/{_dash(attrs.maximum_zones)}"
    update = "-"
    if record.update is not None:
        update = record.update.outcome.value
        if record.update.target_capacity is not None:
            update += f" (capacity->{record.update.target_capacity})"
    return {
        "name": _dash(record.name or record.resource_id),
        "resource_group": _dash(record.resource_group),
        "location": _dash(attrs.location if attrs else None),
        "sku": _dash(attrs.sku_name if attrs else None),
        "capacity": _dash(attrs.sku_capacity if attrs else None),
        "zones": zones,
        "status": record.status,
        "eligible": _dash(record.eligible.value if record.eligible else None),
        "update": update,
    }


def render_table(report: AuditReport, *, color: bool = True) -> str:
    """Return *report* as an aligned text table."""
    rows = [_row(r) for r in report.records]
    widths = {
        key: max([len(title)] + [len(row[key]) for row in rows]) for key, title in _COLUMNS
    }

    lines = [
        "  ".join(title.ljust(widths[key]) for key, title in _COLUMNS),
        "  ".join("-" * widths[key] for key, _ in _COLUMNS),
    ]
    for record, row in zip(report.records, rows, strict=True):
        cells: list[str] = []
        for key, _ in _COLUMNS:
            cell = row[key].ljust(widths[key])
            if color:
                cell = _colourise(key, record, cell)
            cells.append(cell)
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)


def _colourise(key: str, record: AuditRecord, cell: str) -> str:
    if key == "status" and record.error is not None:
        return click.style(cell, fg="red")
    if key == "eligible" and record.eligible is not None:
        return click.style(cell, fg=_ELIGIBILITY_COLOURS[record.eligible])
    if key == "update" and record.update is not None:
        return click.style(cell, fg=_UPDATE_COLOURS[record.update.outcome])
    return cell


def render_summary(report: AuditReport) -> str:
    """Return per-status, per-error and per-update counts."""
    lines = [f"Total {report.kind} resources: {len(report.records)}"]
    for title, counts in (
        ("Status", report.summary()),
        ("Eligibility", report.eligibility_summary()),
        ("Errors", report.errors()),
        ("Updates", report.updates()),
    ):
        if not counts:
            continue
        lines.append(f"{title}:")
        for name, count in sorted(counts.items()):
            lines.append(f"  {name}: {count}")
    return "\n".join(lines)
