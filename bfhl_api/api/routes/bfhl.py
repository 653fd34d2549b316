from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from bfhl_api.adapters.llm.factory import get_llm_client
from bfhl_api.core.body_limit import read_body_limited
from bfhl_api.core.service_identity import require_official_email
from bfhl_api.schemas.envelope import ResponseEnvelope, success_response
from bfhl_api.services.bfhl_service import BfhlDispatcher, decode_json_body, parse_bfhl_request

router = APIRouter(tags=["BFHL"])


def get_dispatcher() -> BfhlDispatcher:
    return BfhlDispatcher(llm_provider=get_llm_client)


@router.post("/bfhl", response_model=ResponseEnvelope)
async def bfhl(
    request: Request,
    dispatcher: BfhlDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Run exactly one of ``fibonacci``, ``prime``, ``lcm``, ``hcf`` or ``AI``.

    The body is read manually (size-limited, JSON-decoded) so every
    validation failure carries its own message in the response envelope.

    Returns:
        JSONResponse: Success envelope whose ``data`` holds the result.

    Raises:
        ConfigurationAppError: 500 when ``OFFICIAL_EMAIL`` is unset.
        PayloadTooLargeAppError: 413 when the body exceeds the limit.
        ValidationAppError: 400 for any malformed input.
        ServiceUnavailableAppError: 503 for ``AI`` without a credential.
        LLMAppError: 502 when the AI provider fails.
    """
    require_official_email()

    raw = await read_body_limited(request)
    bfhl_request = parse_bfhl_request(decode_json_body(raw))
    data = await dispatcher.execute(bfhl_request)
    return success_response(data=data)
