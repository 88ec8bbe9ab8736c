"""App Service plan and App Service Environment queries and updates."""

from __future__ import annotations

import logging
import time

import requests
from azure.core.exceptions import ClientAuthenticationError

from az_zr_audit.azure_api._auth import AZURE_MGMT_URL, _get_headers
from az_zr_audit.azure_api._cache import _cache_set, _cached
from az_zr_audit.azure_api.errors import ArmError, ArmRequestError, ResourceNotFoundError
from az_zr_audit.models.eligibility import NestedEnvironment, ResourceAttributes, TriState

logger = logging.getLogger(__name__)

WEB_API_VERSION = "2023-12-01"
_MAX_ATTEMPTS = 3


def _request(
    method: str,
    resource_id: str,
    *,
    api_version: str = WEB_API_VERSION,
    timeout: int = 30,
    body: dict | None = None,
) -> dict:
    """Send one ARM request for *resource_id* and return the JSON body.

    HTTP 429 is retried with back-off (``Retry-After`` when present).
    404 raises ``ResourceNotFoundError``; any other failure raises
    ``ArmRequestError``, including credential errors.
    """
    url = f"{AZURE_MGMT_URL}{resource_id}?api-version={api_version}"
    try:
        headers = _get_headers()
    except ClientAuthenticationError as exc:
        raise ArmRequestError(resource_id, f"Authentication failed: {exc.message}") from exc

    attempt = 0
    while True:
        try:
            resp = requests.request(method, url, headers=headers, json=body, timeout=timeout)
        except requests.RequestException as exc:
            raise ArmRequestError(resource_id, f"{method} failed: {exc}") from exc
        if resp.status_code != 429 or attempt >= _MAX_ATTEMPTS - 1:
            break
        try:
            retry_after = int(resp.headers.get("Retry-After", str(2**attempt)))
        except (TypeError, ValueError):
            retry_after = 2**attempt
        if retry_after < 0:
            retry_after = 2**attempt
        logger.warning(
            "%s %s throttled (429), retrying in %ss (attempt %s/%s)",
            method,
            resource_id,
            retry_after,
            attempt + 1,
            _MAX_ATTEMPTS,
        )
        time.sleep(retry_after)
        attempt += 1

    if resp.status_code == 404:
        raise ResourceNotFoundError(resource_id, "Resource not found", status_code=404)
    if not resp.ok:
        raise ArmRequestError(
            resource_id,
            f"{method} returned HTTP {resp.status_code}: {_error_message(resp)}",
            status_code=resp.status_code,
        )
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError as exc:
        raise ArmRequestError(resource_id, "Response is not valid JSON") from exc
    return data if isinstance(data, dict) else {}


def _error_message(resp: requests.Response) -> str:
    """Extract the ARM ``error.message`` from *resp*, falling back to the reason."""
    try:
        error = resp.json().get("error", {})
    except (ValueError, AttributeError):
        return resp.reason or ""
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return resp.reason or ""


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_resource(
    resource_id: str, *, api_version: str = WEB_API_VERSION, timeout: int = 30
) -> dict:
    """Return the ARM JSON for a plan or environment."""
    return _request("GET", resource_id, api_version=api_version, timeout=timeout)


def get_environment(
    environment_id: str, *, api_version: str = WEB_API_VERSION, timeout: int = 30
) -> dict:
    """Return an App Service Environment, served from cache when fresh."""
    cached = _cached(environment_id)
    if cached is not None:
        return cached
    data = get_resource(environment_id, api_version=api_version, timeout=timeout)
    _cache_set(environment_id, data)
    return data


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None


def _count(value: object) -> int | None:
    """Like ``_optional_int`` but negative values are treated as missing."""
    number = _optional_int(value)
    return number if number is None or number >= 0 else None


def environment_attributes(env: dict) -> ResourceAttributes:
    """Map an App Service Environment payload to ``ResourceAttributes``."""
    props = env.get("properties") or {}
    return ResourceAttributes(
        location=env.get("location") or "",
        zone_redundant=TriState.from_value(props.get("zoneRedundant")),
        maximum_zones=_count(props.get("maximumNumberOfZones")),
        current_zones_utilized=_optional_int(props.get("currentNumberOfZonesUtilized")),
    )


def plan_attributes(plan: dict, environment: dict | None = None) -> ResourceAttributes:
    """Map an App Service plan payload to ``ResourceAttributes``.

    *environment* is the payload of the plan's App Service Environment, or
    ``None`` when the plan has none or it could not be fetched.
    """
    props = plan.get("properties") or {}
    sku = plan.get("sku") or {}

    nested: NestedEnvironment | None = None
    env_id = (props.get("hostingEnvironmentProfile") or {}).get("id")
    if env_id:
        env_state = TriState.unknown
        if environment is not None:
            env_state = TriState.from_value(
                (environment.get("properties") or {}).get("zoneRedundant")
            )
        nested = NestedEnvironment(id=env_id, zone_redundant=env_state)

    return ResourceAttributes(
        location=plan.get("location") or "",
        sku_name=sku.get("name"),
        sku_capacity=_count(sku.get("capacity")),
        zone_redundant=TriState.from_value(props.get("zoneRedundant")),
        maximum_zones=_count(props.get("maximumNumberOfZones")),
        current_zones_utilized=_optional_int(props.get("currentNumberOfZonesUtilized")),
        environment=nested,
    )


def fetch_plan_attributes(
    resource_id: str, *, api_version: str = WEB_API_VERSION, timeout: int = 30
) -> ResourceAttributes:
    """Fetch a plan and, when it runs in one, its App Service Environment.

    A failing environment lookup does not fail the plan: the environment's
    zone redundancy is reported as unknown instead.
    """
    plan = get_resource(resource_id, api_version=api_version, timeout=timeout)
    env_id = ((plan.get("properties") or {}).get("hostingEnvironmentProfile") or {}).get("id")
    environment: dict | None = None
    if env_id:
        try:
            environment = get_environment(env_id, api_version=api_version, timeout=timeout)
        except ArmError as exc:
            logger.warning("Could not fetch environment %s for %s: %s", env_id, resource_id, exc)
    return plan_attributes(plan, environment)


def fetch_environment_attributes(
    resource_id: str, *, api_version: str = WEB_API_VERSION, timeout: int = 30
) -> ResourceAttributes:
    return environment_attributes(
        get_resource(resource_id, api_version=api_version, timeout=timeout)
    )


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------


def update_plan(
    resource_id: str,
    capacity: int | None = None,
    *,
    api_version: str = WEB_API_VERSION,
    timeout: int = 30,
) -> dict:
    """Enable zone redundancy on a plan, raising its instance count to *capacity*."""
    body: dict = {"properties": {"zoneRedundant": True}}
    if capacity is not None:
        body["sku"] = {"capacity": capacity}
    logger.info("Updating plan %s: %s", resource_id, body)
    return _request(
        "PATCH", resource_id, body=body, api_version=api_version, timeout=timeout
    )


def update_environment(
    resource_id: str, *, api_version: str = WEB_API_VERSION, timeout: int = 30
) -> dict:
    """Enable zone redundancy on an App Service Environment."""
    body = {"properties": {"zoneRedundant": True}}
    logger.info("Updating environment %s: %s", resource_id, body)
    return _request(
        "PATCH", resource_id, body=body, api_version=api_version, timeout=timeout
    )
