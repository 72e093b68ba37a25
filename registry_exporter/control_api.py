"""Control API for runtime management using FastAPI."""
from fastapi import FastAPI, HTTPException, Response
from prometheus_client import CONTENT_TYPE_LATEST
from pydantic import BaseModel
import logging
import time

from registry_exporter.registry import MetricKind

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogLevelRequest(BaseModel):
    """Request to change log level."""
    level: str


class ControlAPI:
    """FastAPI-based control API for runtime management."""

    def __init__(self, exporter):
        """
        Initialize control API.

        Args:
            exporter: PrometheusExporter serving the application registry
        """
        self.exporter = exporter
        self.start_time = time.time()
        self.app = FastAPI(title="Registry Exporter Control API")

        # Setup routes
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/healthz")
        async def healthz():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": time.time()}

        @self.app.get("/status")
        async def status():
            """Get registered metric counts and exporter settings."""
            try:
                registry = self.exporter.source_registry
                registered = {
                    kind.value: len(kind.metrics_of(registry))
                    for kind in MetricKind
                }
                return {
                    "uptime_seconds": time.time() - self.start_time,
                    "registered_metrics": registered,
                    "total_metrics": sum(registered.values()),
                    "exporter": {
                        "enabled": self.exporter.config.enabled,
                        "port": self.exporter.config.port,
                        "bind_address": self.exporter.config.bind_address,
                    }
                }
            except Exception as e:
                logger.error(f"Error getting status: {e}")
                raise HTTPException(status_code=500, detail=str(e))

        @self.app.get("/metrics")
        async def metrics():
            """Prometheus exposition of the application registry."""
            try:
                return Response(content=self.exporter.render(), media_type=CONTENT_TYPE_LATEST)
            except Exception as e:
                logger.error(f"Error rendering metrics: {e}")
                raise HTTPException(status_code=500, detail=str(e))

        @self.app.post("/control/loglevel")
        async def set_log_level(request: LogLevelRequest):
            """Change log level at runtime."""
            level = request.level.upper()

            if level not in LOG_LEVELS:
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid log level: {level}"
                )

            logging.getLogger().setLevel(getattr(logging, level))
            logger.info(f"Log level changed to: {level}")

            return {
                "status": "log_level_changed",
                "level": level,
                "timestamp": time.time()
            }

    def run(self, host: str = "0.0.0.0", port: int = 8081):
        """Run the API server."""
        import uvicorn
        uvicorn.run(self.app, host=host, port=port, log_level="info")
