"""Exceptions raised by the ARM helpers."""

from __future__ import annotations


class ArmError(Exception):
    """An ARM request for a resource failed."""

    def __init__(self, resource_id: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.resource_id = resource_id
        self.status_code = status_code


class ResourceNotFoundError(ArmError):
    """ARM returned 404 for the resource."""


class ArmRequestError(ArmError):
    """Transport failure or non-success HTTP status other than 404."""
