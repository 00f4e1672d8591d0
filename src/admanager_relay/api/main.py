"""FastAPI application for the AdManager revenue relay."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from admanager_relay import __version__
from admanager_relay.api.routes import router
from admanager_relay.core.config import Settings, get_settings, setup_logging
from admanager_relay.core.exceptions import sanitize_error_message

logger = logging.getLogger(__name__)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for errors no endpoint handled."""
    logger.error(f"API error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "message": sanitize_error_message(str(exc)),
        },
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or get_settings()

    app = FastAPI(title="AdManager Revenue Relay", version=__version__)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router)

    return app


def main() -> None:
    """Run the relay with uvicorn."""
    settings = get_settings()
    setup_logging(settings)
    app = create_app(settings)

    logger.info(f"AdManager revenue relay listening on port {settings.port}")
    logger.info("Endpoints:")
    logger.info("  GET  /health - API status")
    logger.info("  POST /test-connection - Test service account")
    logger.info("  POST /admanager-revenue - Look up campaign revenue")

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
