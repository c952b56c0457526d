"""FastAPI application"""
import asyncio
from contextlib import asynccontextmanager, suppress
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ratify.api.routes import router
from ratify.config import Settings, settings as default_settings
from ratify.errors import RatifyError
from ratify.state import AppState
from ratify.utils.logging import setup_logging, get_logger

logger = get_logger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level, app_settings.log_json)

    state = AppState.from_settings(app_settings)
    state.bootstrap()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        pruner = asyncio.create_task(state.prune_forever())
        logger.info("Ratify API started", data_file=app_settings.data_file)
        try:
            yield
        finally:
            pruner.cancel()
            with suppress(asyncio.CancelledError):
                await pruner

    app = FastAPI(
        title="Ratify",
        description="Club membership ratification voting",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.ratify = state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.frontend_origin],
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    @app.exception_handler(RatifyError)
    async def ratify_error_handler(request: Request, exc: RatifyError):
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=exc.headers)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response

    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ratify.main:create_app", factory=True, host=default_settings.host, port=default_settings.port)
