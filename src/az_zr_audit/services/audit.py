"""Audit loop and zone-redundancy remediation.

``audit_resources`` walks a list of resource IDs, fetches each one and
classifies it.  Records that cannot be parsed or fetched get an error
status and the loop moves on: one bad line never stops the batch.

``remediate`` then enables zone redundancy on the records classified as
``Eligible``, asking the caller-supplied ``confirm`` callback first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from az_zr_audit import azure_api
from az_zr_audit.azure_api import ResourceKind
from az_zr_audit.models.audit import (
    AuditRecord,
    AuditReport,
    RecordError,
    UpdateOutcome,
    UpdateResult,
)
from az_zr_audit.models.eligibility import Eligibility, ResourceAttributes
from az_zr_audit.policy.classifier import classify_environment, classify_plan
from az_zr_audit.policy.zone_policy import ZonePolicy
from az_zr_audit.settings import AuditSettings

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[AuditRecord], bool]


def _fetch(kind: ResourceKind, resource_id: str, settings: AuditSettings) -> ResourceAttributes:
    fetch = (
        azure_api.fetch_plan_attributes
        if kind == "plan"
        else azure_api.fetch_environment_attributes
    )
    return fetch(
        resource_id,
        api_version=settings.web_api_version,
        timeout=settings.request_timeout,
    )


def audit_resource(
    raw_id: str,
    kind: ResourceKind,
    *,
    policy: ZonePolicy,
    settings: AuditSettings,
    subscription_id: str | None = None,
) -> AuditRecord:
    """Parse, fetch and classify one resource ID."""
    try:
        rid = azure_api.parse_resource_id(raw_id)
    except azure_api.InvalidResourceIdError as exc:
        logger.warning("%s", exc)
        return AuditRecord(
            resource_id=raw_id,
            kind=kind,
            error=RecordError.invalid_resource_id,
            message=str(exc),
        )

    record = AuditRecord(
        resource_id=rid.id,
        kind=kind,
        name=rid.name,
        resource_group=rid.resource_group,
        subscription_id=rid.subscription_id,
    )

    if rid.kind != kind:
        record.error = RecordError.invalid_resource_id
        record.message = f"Expected a {kind} resource ID, got a {rid.kind}"
        return record

    if subscription_id and rid.subscription_id.lower() != subscription_id.lower():
        record.error = RecordError.subscription_mismatch
        record.message = f"Resource is not in subscription {subscription_id}"
        return record

    try:
        attrs = _fetch(kind, rid.id, settings)
    except azure_api.ArmError as exc:
        logger.warning("Failed to fetch %s: %s", rid.id, exc)
        record.error = RecordError.fetch_error
        record.message = str(exc)
        return record

    record.attributes = attrs
    record.result = (
        classify_plan(attrs, policy) if kind == "plan" else classify_environment(attrs, policy)
    )
    logger.debug("%s -> %s / %s", rid.id, record.result.status, record.result.eligible)
    return record


def audit_resources(
    resource_ids: Iterable[str],
    kind: ResourceKind,
    *,
    policy: ZonePolicy,
    settings: AuditSettings,
    subscription_id: str | None = None,
) -> AuditReport:
    """Audit every ID in *resource_ids* in order."""
    report = AuditReport(kind=kind)
    for raw_id in resource_ids:
        report.records.append(
            audit_resource(
                raw_id,
                kind,
                policy=policy,
                settings=settings,
                subscription_id=subscription_id,
            )
        )
    logger.info("Audited %d %s resource(s)", len(report.records), kind)
    return report


# ---------------------------------------------------------------------------
# Remediation
# ---------------------------------------------------------------------------


def target_capacity(current: int | None, minimum: int = 2) -> int | None:
    """Return the instance count to set when enabling zone redundancy.

    Capacity is only ever raised to *minimum*, never lowered.  ``None``
    means the current capacity is already sufficient.
    """
    if current is not None and current >= minimum:
        return None
    return minimum


def _apply(record: AuditRecord, settings: AuditSettings, dry_run: bool) -> UpdateResult:
    capacity: int | None = None
    if record.kind == "plan" and record.attributes is not None:
        capacity = target_capacity(
            record.attributes.sku_capacity, settings.min_zone_redundant_capacity
        )

    if dry_run:
        return UpdateResult(outcome=UpdateOutcome.dry_run, target_capacity=capacity)

    try:
        if record.kind == "plan":
            azure_api.update_plan(
                record.resource_id,
                capacity,
                api_version=settings.web_api_version,
                timeout=settings.request_timeout,
            )
        else:
            azure_api.update_environment(
                record.resource_id,
                api_version=settings.web_api_version,
                timeout=settings.request_timeout,
            )
    except azure_api.ArmError as exc:
        logger.error("Update failed for %s: %s", record.resource_id, exc)
        return UpdateResult(
            outcome=UpdateOutcome.update_failed, target_capacity=capacity, message=str(exc)
        )
    logger.info("Enabled zone redundancy on %s", record.resource_id)
    return UpdateResult(outcome=UpdateOutcome.updated, target_capacity=capacity)


def remediate(
    report: AuditReport,
    *,
    settings: AuditSettings,
    confirm: ConfirmCallback,
    dry_run: bool = False,
) -> AuditReport:
    """Enable zone redundancy on every ``Eligible`` record of *report*.

    Records are updated in place and *report* is returned.  Update
    failures are recorded per record; the remaining records are still
    processed.
    """
    for record in report.records:
        if record.eligible is not Eligibility.eligible:
            continue
        if not confirm(record):
            record.update = UpdateResult(outcome=UpdateOutcome.skipped)
            continue
        record.update = _apply(record, settings, dry_run)
    return report
