"""
FastAPI application serving apcupsd metrics in the Prometheus text format.
"""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from .collector.prometheus import CollectionError
from .exporter import Exporter

logger = logging.getLogger("apcupsd_exporter.app")


def create_app(exporter: Exporter, metrics_path: str = "/metrics") -> FastAPI:
    """
    Build the exporter's HTTP application.

    Each instance owns a private registry so that only apcupsd metrics are
    exposed, without the default process and platform collectors.
    """
    registry = CollectorRegistry()
    registry.register(exporter.prometheus_collector())

    app = FastAPI(
        title="apcupsd exporter",
        description="Prometheus exporter for apcupsd Network Information Server metrics",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.registry = registry

    # Request logging middleware (complements Uvicorn access logs)
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.monotonic()
        path = request.url.path
        method = request.method
        try:
            response = await call_next(request)
            duration_ms = int((time.monotonic() - start) * 1000)
            logger.info("%s %s -> %s in %dms", method, path, response.status_code, duration_ms)
            return response
        except Exception as e:
            duration_ms = int((time.monotonic() - start) * 1000)
            logger.exception("%s %s -> 500 in %dms (error: %s)", method, path, duration_ms, e)
            raise

    @app.get(metrics_path, include_in_schema=False)
    def metrics() -> Response:
        try:
            payload = generate_latest(registry)
        except CollectionError as e:
            logger.error("Scrape failed: %s", e)
            return PlainTextResponse(
                f"An error has occurred while serving metrics:\n\n{e}\n",
                status_code=500,
            )
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    if metrics_path != "/":
        @app.get("/", include_in_schema=False)
        def index() -> RedirectResponse:
            return RedirectResponse(url=metrics_path, status_code=301)

    return app
