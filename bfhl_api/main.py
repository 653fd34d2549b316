import uvicorn

from bfhl_api.core.app_factory import create_app
from bfhl_api.core.config import settings

app = create_app()


def run() -> None:
    """Console entry point: serve the app on ``HOST``/``PORT`` (default 3000)."""
    uvicorn.run(
        "bfhl_api.main:app",
        host=settings.app.host,
        port=settings.app.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
