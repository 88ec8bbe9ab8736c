"""Authentication helpers for Azure ARM API calls."""

from __future__ import annotations

from azure.identity import DefaultAzureCredential

AZURE_MGMT_URL = "https://management.azure.com"

credential = DefaultAzureCredential()


def _get_headers() -> dict[str, str]:
    """Return authorization headers using *DefaultAzureCredential*."""
    token = credential.get_token(f"{AZURE_MGMT_URL}/.default")
    return {
        "Authorization": f"Bearer {token.token}",
        "Content-Type": "application/json",
    }
