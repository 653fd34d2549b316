from __future__ import annotations

from bfhl_api.api.routes.bfhl import router as bfhl_router
from bfhl_api.api.routes.health import router as health_router

__all__ = ["bfhl_router", "health_router"]
