"""
API key resolution utilities.

Resolves the OpenAI API key from multiple sources:
1. Explicit value
2. Environment variable (OPENAI_API_KEY)
3. System keyring (optional)
"""

from __future__ import annotations

import os

from openai_lite.telemetry import get_logger

API_KEY_ENV = "OPENAI_API_KEY"
ORGANIZATION_ENV = "OPENAI_ORG_ID"
KEYRING_SERVICE = "openai-lite"

logger = get_logger(__name__)


def resolve_api_key(explicit_key: str | None = None) -> str | None:
    """Resolve the API key.

    Resolution order:
    1. Explicit key if provided
    2. OPENAI_API_KEY environment variable
    3. System keyring (if the keyring extra is installed)

    Args:
        explicit_key: Explicitly provided API key

    Returns:
        Resolved API key or None if not found
    """
    if explicit_key:
        return explicit_key

    key = os.getenv(API_KEY_ENV)
    if key:
        return key

    return _try_keyring()


def resolve_organization(explicit_org: str | None = None) -> str | None:
    """Resolve the optional organization id (explicit value, then OPENAI_ORG_ID)."""
    return explicit_org or os.getenv(ORGANIZATION_ENV) or None


def _try_keyring() -> str | None:
    """Try to get the API key from the system keyring."""
    try:
        import keyring
        from keyring.errors import KeyringError
    except ImportError:
        return None

    try:
        return keyring.get_password(KEYRING_SERVICE, "openai")
    except KeyringError as e:
        # No usable backend is common in containers and CI
        logger.debug("Keyring lookup failed", error=str(e))
        return None


def get_auth_headers(
    api_key: str | None = None,
    organization: str | None = None,
) -> dict[str, str]:
    """Build authentication headers.

    Args:
        api_key: Optional explicit API key
        organization: Optional explicit organization id

    Returns:
        Dictionary with authentication header(s); empty when no key is found
    """
    headers: dict[str, str] = {}
    key = resolve_api_key(api_key)
    if key:
        headers["Authorization"] = f"Bearer {key}"
    org = resolve_organization(organization)
    if org:
        headers["OpenAI-Organization"] = org
    return headers
