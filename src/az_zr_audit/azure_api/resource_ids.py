"""Resource ID files and ``Microsoft.Web`` resource ID parsing."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal, NamedTuple

ResourceKind = Literal["plan", "environment"]

_RESOURCE_TYPES: dict[str, ResourceKind] = {
    "serverfarms": "plan",
    "hostingenvironments": "environment",
}

_CANONICAL_TYPES: dict[ResourceKind, str] = {
    "plan": "serverfarms",
    "environment": "hostingEnvironments",
}

_ID_PATTERN = re.compile(
    r"^/?subscriptions/(?P<sub>[^/]+)"
    r"/resourcegroups/(?P<rg>[^/]+)"
    r"/providers/microsoft\.web/(?P<type>[^/]+)/(?P<name>[^/]+)/?$",
    re.IGNORECASE,
)


class InvalidResourceIdError(ValueError):
    """The text is not a ``Microsoft.Web`` plan or environment resource ID."""


class ResourceId(NamedTuple):
    subscription_id: str
    resource_group: str
    name: str
    kind: ResourceKind

    @property
    def id(self) -> str:
        """Canonical ARM path for the resource."""
        return (
            f"/subscriptions/{self.subscription_id}/resourceGroups/{self.resource_group}"
            f"/providers/Microsoft.Web/{_CANONICAL_TYPES[self.kind]}/{self.name}"
        )


def parse_resource_id(text: str) -> ResourceId:
    """Split a plan or environment resource ID into its parts.

    Raises ``InvalidResourceIdError`` for anything that is not
    ``/subscriptions/{sub}/resourceGroups/{rg}/providers/Microsoft.Web/
    {serverfarms|hostingEnvironments}/{name}``.
    """
    match = _ID_PATTERN.match(text.strip())
    if match is None:
        raise InvalidResourceIdError(f"Invalid resource ID format: {text.strip()!r}")
    kind = _RESOURCE_TYPES.get(match["type"].lower())
    if kind is None:
        raise InvalidResourceIdError(
            f"Unsupported resource type {match['type']!r} "
            "(expected serverfarms or hostingEnvironments)"
        )
    return ResourceId(match["sub"], match["rg"], match["name"], kind)


def read_resource_ids(path: str | Path) -> list[str]:
    """Return non-blank, non-comment lines of *path*, stripped, in file order."""
    ids: list[str] = []
    with Path(path).open(encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            ids.append(line)
    return ids
