"""Azure ARM helpers for App Service plans and environments.

Every public function returns plain Python objects or pydantic models;
failures surface as ``ArmError`` subclasses.

This package re-exports the public names so callers can use
``from az_zr_audit import azure_api`` and ``azure_api.fetch_plan_attributes``.
"""

# -- Auth & constants -------------------------------------------------------
from az_zr_audit.azure_api._auth import (  # noqa: F401
    AZURE_MGMT_URL,
    _get_headers,
    credential,
)

# -- Cache (exposed for test fixtures) ---------------------------------------
from az_zr_audit.azure_api._cache import _environment_cache  # noqa: F401

# -- Errors ------------------------------------------------------------------
from az_zr_audit.azure_api.errors import (  # noqa: F401
    ArmError,
    ArmRequestError,
    ResourceNotFoundError,
)

# -- Resource IDs ------------------------------------------------------------
from az_zr_audit.azure_api.resource_ids import (  # noqa: F401
    InvalidResourceIdError,
    ResourceId,
    ResourceKind,
    parse_resource_id,
    read_resource_ids,
)

# -- Microsoft.Web -----------------------------------------------------------
from az_zr_audit.azure_api.web import (  # noqa: F401
    WEB_API_VERSION,
    environment_attributes,
    fetch_environment_attributes,
    fetch_plan_attributes,
    get_environment,
    get_resource,
    plan_attributes,
    update_environment,
    update_plan,
)
