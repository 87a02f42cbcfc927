"""Uvicorn runner that routes server logs through the application logging setup."""

import uvicorn

from docseq.app import App
from docseq.config import Config
from docseq.web.server import create_fastapi_app


def uvicorn_options(config: Config) -> dict[str, object]:
    # log_config=None keeps uvicorn off dictConfig, its records reach the root handler from setup_logging
    return {
        "host": config.host,
        "port": config.port,
        "log_config": None,
        "access_log": config.debug,
        "proxy_headers": True,
        "server_header": False,
    }


def run_server(app: App, config: Config) -> None:
    """Build the FastAPI app and serve it until shutdown."""
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(fastapi_app, **uvicorn_options(config))  # type: ignore[arg-type]
