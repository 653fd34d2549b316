from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from bfhl_api.core.service_identity import require_official_email
from bfhl_api.schemas.envelope import ResponseEnvelope, success_response

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=ResponseEnvelope)
def health_check() -> JSONResponse:
    """Health check endpoint.

    Reports success together with the service identity. Answers 500 while
    ``OFFICIAL_EMAIL`` is unset so load balancers can tell a misconfigured
    instance apart from a healthy one.
    """

    require_official_email()
    return success_response()
