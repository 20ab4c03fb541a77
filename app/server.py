"""FastAPI server setup and routes"""
import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Response
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse
from prometheus_client import REGISTRY, CollectorRegistry
from config import Config
from collectors.errors import GpuPipelineError
from collectors.nvidia_smi import NvidiaSmiCollector
from metrics.exporters.prometheus import PrometheusExporter
from metrics.registry import ExporterMetrics
from logging_config import get_logger, log_scrape, log_error
from middleware.request_logging import RequestLoggingMiddleware


logger = get_logger(__name__)

INDEX_HTML = """<html>
    <head><title>Nvidia SMI exporter</title></head>
    <body>
    <h1>Nvidia SMI exporter</h1>
    <p><a href='/metrics'>Metrics</a></p>
    </body>
    </html>"""


class MetricsServer:
    """FastAPI server for the nvidia-smi exporter"""

    def __init__(self, config: Config, registry: Optional[CollectorRegistry] = None, collector: Optional[NvidiaSmiCollector] = None):
        self.config = config
        self.app = FastAPI(
            title="Nvidia SMI Exporter",
            version=config.service_version,
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
            lifespan=self._lifespan
        )
        self.metrics = ExporterMetrics(registry if registry is not None else REGISTRY)
        self.exporter = PrometheusExporter(self.metrics)
        self.collector = collector or NvidiaSmiCollector(config)

        self._setup_middleware()
        self._setup_routes()

    def _setup_middleware(self):
        """Setup middleware (last added is executed first)"""
        if self.config.enable_compression:
            self.app.add_middleware(GZipMiddleware, minimum_size=self.config.compression_minimum_size)

        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)

    def _setup_routes(self):
        """Setup FastAPI routes"""

        @self.app.get('/metrics', response_class=Response)
        async def get_metrics():
            """Serve self metrics plus GPU metrics in Prometheus format"""
            content = await self.scrape()
            return Response(content, media_type='text/plain')

        @self.app.get('/', response_class=HTMLResponse)
        def index():
            """Landing page"""
            return INDEX_HTML

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Release the collector thread pool on shutdown"""
        yield
        logger.info("Shutting down nvidia-smi exporter", event_type="server_shutdown")
        self.collector.cleanup()

    async def scrape(self) -> bytes:
        """Run the GPU pipeline once and render the response body.

        Pipeline failures are logged and counted, and the body then holds
        only the registry output. Counters are updated before rendering so
        the failure shows up in the same response.
        """
        start_time = time.time()
        scrape = None

        try:
            scrape = await self.collector.collect_async()
        except GpuPipelineError as e:
            log_error(logger, e, {"component": "nvidia_smi", "stage": e.stage, "endpoint": "/metrics"})
            self.metrics.record_failure(e.stage)
        else:
            self.metrics.record_success(scrape.gpu_count, [e.stage for e in scrape.skipped])

        scrape_time = time.time() - start_time
        self.metrics.observe_duration(scrape_time)

        if scrape is None:
            log_scrape(logger, 0, scrape_time, degraded=True)
            return self.exporter.render()

        log_scrape(logger, scrape.gpu_count, scrape_time, skipped_rows=len(scrape.skipped))
        return self.exporter.render(scrape.samples)

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app
