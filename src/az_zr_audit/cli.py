"""Unified CLI for az-zr-audit.

Provides two subcommands:
    az-zr-audit plans FILE         – audit App Service plans
    az-zr-audit environments FILE  – audit App Service Environments

Both read one resource ID per line from FILE (blank lines and ``#`` comments
are ignored).  With ``--enable`` eligible resources are switched to
zone-redundant after confirmation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from az_zr_audit import __version__
from az_zr_audit.azure_api import ResourceKind, read_resource_ids
from az_zr_audit.models.audit import AuditRecord
from az_zr_audit.report import render_summary, render_table
from az_zr_audit.services.audit import audit_resources, remediate, target_capacity
from az_zr_audit.settings import AuditSettings, load_policy


def _setup_logging(level: int = logging.WARNING) -> None:
    """Configure the root ``az_zr_audit`` logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s - %(message)s"))
    app_logger = logging.getLogger("az_zr_audit")
    app_logger.handlers = [handler]
    app_logger.setLevel(level)
    app_logger.propagate = False

    # Silence noisy third-party loggers
    logging.getLogger("azure").setLevel(logging.WARNING)


def _audit_options(func: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.argument(
            "resource_file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
        ),
        click.option(
            "--subscription",
            "-s",
            default=None,
            help="Only process resources in this subscription ID.",
        ),
        click.option(
            "--policy-file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help='JSON file with {"regions": [...], "skus": [...]} overriding the built-in lists.',
        ),
        click.option(
            "--enable",
            is_flag=True,
            default=False,
            help="Enable zone redundancy on eligible resources.",
        ),
        click.option(
            "--yes",
            "-y",
            is_flag=True,
            default=False,
            help="Don't ask for confirmation before each update.",
        ),
        click.option(
            "--dry-run",
            is_flag=True,
            default=False,
            help="Show the updates --enable would make without applying them.",
        ),
        click.option(
            "--output",
            "-o",
            type=click.Choice(["table", "json"]),
            default="table",
            show_default=True,
            help="Output format.",
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            default=False,
            help="Enable verbose logging.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="az-zr-audit")
def cli() -> None:
    """Audit and enable zone redundancy for Azure App Service."""


def _confirm_prompt(record: AuditRecord, min_capacity: int) -> bool:
    msg = f"Enable zone redundancy on {record.name} ({record.resource_group})"
    if record.kind == "plan" and record.attributes is not None:
        capacity = target_capacity(record.attributes.sku_capacity, min_capacity)
        if capacity is not None:
            msg += f" and raise capacity to {capacity}"
    return click.confirm(msg + "?", default=False, err=True)


def _run(
    kind: ResourceKind,
    resource_file: Path,
    subscription: str | None,
    policy_file: Path | None,
    enable: bool,
    yes: bool,
    dry_run: bool,
    output: str,
    verbose: bool,
) -> None:
    _setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        settings = AuditSettings()
        if policy_file is not None:
            settings = settings.model_copy(update={"policy_file": policy_file})
        policy = load_policy(settings)
    except (ValidationError, ValueError) as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    try:
        resource_ids = read_resource_ids(resource_file)
    except OSError as exc:
        raise click.ClickException(f"Cannot read {resource_file}: {exc}") from exc
    if not resource_ids:
        raise click.ClickException(f"No resource IDs found in {resource_file}")

    report = audit_resources(
        resource_ids,
        kind,
        policy=policy,
        settings=settings,
        subscription_id=subscription,
    )

    if enable or dry_run:
        min_capacity = settings.min_zone_redundant_capacity

        def confirm(record: AuditRecord) -> bool:
            return yes or dry_run or _confirm_prompt(record, min_capacity)

        remediate(report, settings=settings, confirm=confirm, dry_run=dry_run)

    if output == "json":
        click.echo(report.model_dump_json(indent=2))
    else:
        click.echo(render_table(report, color=True))
        click.echo()
        click.echo(render_summary(report))

    if report.has_failures:
        raise SystemExit(1)


@cli.command()
@_audit_options
def plans(**kwargs: Any) -> None:
    """Audit App Service plans listed in RESOURCE_FILE."""
    _run("plan", **kwargs)


@cli.command()
@_audit_options
def environments(**kwargs: Any) -> None:
    """Audit App Service Environments listed in RESOURCE_FILE."""
    _run("environment", **kwargs)
