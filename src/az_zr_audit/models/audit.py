"""Pydantic models for an audit run.

One ``AuditRecord`` per input line.  A record either carries a
classification or an error status, never both; error records stay out of
the classification summary.
"""

from __future__ import annotations

from collections import Counter
from enum import StrEnum

from pydantic import BaseModel, Field

from az_zr_audit.models.eligibility import (
    ClassificationResult,
    Eligibility,
    ResourceAttributes,
)


class RecordError(StrEnum):
    invalid_resource_id = "InvalidResourceId"
    subscription_mismatch = "SubscriptionMismatch"
    fetch_error = "FetchError"


class UpdateOutcome(StrEnum):
    updated = "Updated"
    skipped = "Skipped"
    dry_run = "DryRun"
    update_failed = "UpdateFailed"


class UpdateResult(BaseModel):
    outcome: UpdateOutcome
    target_capacity: int | None = None
    message: str | None = None


class AuditRecord(BaseModel):
    """Result for a single resource ID."""

    resource_id: str
    kind: str
    name: str | None = None
    resource_group: str | None = None
    subscription_id: str | None = None
    attributes: ResourceAttributes | None = None
    result: ClassificationResult | None = None
    error: RecordError | None = None
    message: str | None = None
    update: UpdateResult | None = None

    @property
    def status(self) -> str:
        """Classification status, or the error status for failed records."""
        if self.error is not None:
            return self.error.value
        if self.result is not None:
            return self.result.status.value
        return ""

    @property
    def eligible(self) -> Eligibility | None:
        return self.result.eligible if self.result is not None else None


class AuditReport(BaseModel):
    kind: str
    records: list[AuditRecord] = Field(default_factory=list)

    def summary(self) -> Counter[str]:
        """Count classified records per status."""
        return Counter(r.result.status.value for r in self.records if r.result is not None)

    def eligibility_summary(self) -> Counter[str]:
        return Counter(r.result.eligible.value for r in self.records if r.result is not None)

    def errors(self) -> Counter[str]:
        return Counter(r.error.value for r in self.records if r.error is not None)

    def updates(self) -> Counter[str]:
        return Counter(r.update.outcome.value for r in self.records if r.update is not None)

    def eligible_records(self) -> list[AuditRecord]:
        return [r for r in self.records if r.eligible is Eligibility.eligible]

    @property
    def has_failures(self) -> bool:
        """True when any fetch or update failed."""
        return any(
            r.error is RecordError.fetch_error
            or (r.update is not None and r.update.outcome is UpdateOutcome.update_failed)
            for r in self.records
        )
