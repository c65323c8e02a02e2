"""Application factory and top-level wiring.

Builds the FastAPI app: logging, request correlation, error envelopes, the
hardware router and Prometheus metrics.
"""

from __future__ import annotations

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from .core.errors import register_exception_handlers
from .core.logging import configure_logging
from .middlewares import RequestIdMiddleware
from .routers import api_hardware
from .settings import get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)
    app.include_router(api_hardware.router)

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    Instrumentator().instrument(app).expose(app, include_in_schema=False)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("posdevices.main:app", host=settings.HOST, port=settings.PORT)


__all__ = ["app", "create_app"]
