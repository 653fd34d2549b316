"""Request body reading with a hard size limit."""
from __future__ import annotations

import logging

from fastapi import Request

from bfhl_api.core.config import settings
from bfhl_api.core.errors import PayloadTooLargeAppError

logger = logging.getLogger(__name__)


def _too_large(max_bytes: int, size: int) -> PayloadTooLargeAppError:
    return PayloadTooLargeAppError(
        code="payload_too_large",
        message="Request body too large",
        details={"limit": max_bytes, "actual_value": size},
    )


async def read_body_limited(request: Request, max_bytes: int | None = None) -> bytes:
    """Read the request body in chunks enforcing the max size limit.

    Rejects early on a ``Content-Length`` above the limit, and keeps counting
    while streaming for clients that send no (or a wrong) length.

    Args:
        request: Incoming request.
        max_bytes: Override for ``APP_MAX_BODY_BYTES``.

    Returns:
        The raw body bytes.

    Raises:
        PayloadTooLargeAppError: If the body exceeds the limit.
    """
    limit = max_bytes or settings.app.max_body_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        logger.warning(
            "body_limit.rejected_by_header",
            extra={"content_length": int(declared), "max_bytes": limit},
        )
        raise _too_large(limit, int(declared))

    size = 0
    chunks: list[bytes] = []

    async for chunk in request.stream():
        if not chunk:
            continue
        size += len(chunk)
        if size > limit:
            logger.warning(
                "body_limit.rejected_by_stream",
                extra={"size": size, "max_bytes": limit},
            )
            raise _too_large(limit, size)
        chunks.append(chunk)

    return b"".join(chunks)
