"""FastAPI application setup for the Toolbench server."""

import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from . import __version__
from .config import ServerConfig
from .errors import ToolHandlerError
from .models import ErrorResponse
from .module import ToolboxModule
from .settings import SettingsStore

logger = logging.getLogger(__name__)

DISPATCH_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(module: Optional[ToolboxModule] = None, config: Optional[ServerConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        module: Pre-built module. When omitted one is created over the
            discovered tools and initialised from the configured settings file.
        config: Server configuration; read from the environment when omitted.

    Raises:
        ToolConstructionError: If a discovered tool cannot be constructed.
    """
    config = config or ServerConfig.from_env()
    if module is None:
        module = ToolboxModule()
        module.init(SettingsStore(config.settings_file))
    # No traffic is served unless every tool constructs.
    module.resolver

    # Tools own the whole URL space, so no docs or schema routes.
    app = FastAPI(
        title="Toolbench",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config
    app.state.module = module

    @app.exception_handler(ToolHandlerError)
    async def tool_error_handler(request: Request, exc: ToolHandlerError) -> JSONResponse:
        body = ErrorResponse.from_handler_error(exc)
        return JSONResponse(status_code=500, content=body.model_dump(mode="json"))

    @app.api_route("/{path:path}", methods=DISPATCH_METHODS, include_in_schema=False)
    async def dispatch(request: Request) -> Response:
        return await request.app.state.module.dispatch(request)

    return app


def run(config: ServerConfig) -> None:
    """Configure logging, build the application and serve it until interrupted."""
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info(f"Starting Toolbench server on {config.host}:{config.port}")

    try:
        uvicorn.run(
            create_app(config=config),
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Server startup failed: {e}")
        sys.exit(1)


def main():
    """Entry point for the toolbench-server command."""
    run(ServerConfig.from_env())


if __name__ == "__main__":
    main()
