"""Service identity (``OFFICIAL_EMAIL``) checks."""

from __future__ import annotations

import logging

from bfhl_api.core.config import settings
from bfhl_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)


def require_official_email() -> str:
    """Return the configured service identity.

    Raises:
        ConfigurationAppError: If ``OFFICIAL_EMAIL`` is unset or blank.
    """
    official_email = settings.app.official_email
    if not official_email or not official_email.strip():
        raise ConfigurationAppError(
            code="official_email_missing",
            message="Server not configured: OFFICIAL_EMAIL missing",
        )
    return official_email


def warn_if_unconfigured() -> None:
    """Log the missing identity once at startup; the server keeps running."""
    if not settings.app.official_email:
        logger.error(
            "config.official_email_missing",
            extra={"hint": "Set OFFICIAL_EMAIL and restart; requests answer 500 until then."},
        )
