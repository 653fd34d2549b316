"""Uniform response envelope returned by every route."""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from bfhl_api.core.config import settings


class ResponseEnvelope(BaseModel):
    """The single wire shape of the API.

    ``data`` is present on success, ``error`` on failure. ``official_email`` is
    always serialized, as ``null`` while the service identity is unconfigured.
    """

    is_success: bool = Field(..., description="True when the request succeeded.")
    official_email: str | None = Field(
        ...,
        description="Configured service identity (null when unconfigured).",
    )
    data: Any = Field(default=None, description="Result payload on success.")
    error: str | None = Field(default=None, description="Error message on failure.")


def envelope_response(
    envelope: ResponseEnvelope,
    *,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Serialize an envelope, omitting fields that were never set."""
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_unset=True),
        headers=headers,
    )


def success_response(**payload: Any) -> JSONResponse:
    """Build a 200 envelope; pass ``data=...`` to include a result payload."""
    envelope = ResponseEnvelope(
        is_success=True,
        official_email=settings.app.official_email,
        **payload,
    )
    return envelope_response(envelope)


def error_response(
    status_code: int,
    message: str,
    *,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ResponseEnvelope(
        is_success=False,
        official_email=settings.app.official_email or None,
        error=message,
    )
    return envelope_response(envelope, status_code=status_code, headers=headers)
