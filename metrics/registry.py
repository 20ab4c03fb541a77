"""Self-observability metrics for the exporter itself"""
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, generate_latest


NAMESPACE = "nvidia_smi_exporter"
PIPELINE_STAGES = ("invoke", "parse", "map")


class ExporterMetrics:
    """Scrape counters and gauges kept in a prometheus_client registry

    The process-wide ``REGISTRY`` is used by default so its process and
    platform collectors are rendered alongside these metrics.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        self.registry = registry

        self.scrapes_total = Counter(
            "scrapes",
            "Number of /metrics scrapes handled",
            namespace=NAMESPACE,
            registry=registry,
        )
        self.scrape_errors_total = Counter(
            "scrape_errors",
            "Scrapes that returned no GPU metrics, by failing pipeline stage",
            ["stage"],
            namespace=NAMESPACE,
            registry=registry,
        )
        self.skipped_rows_total = Counter(
            "skipped_rows",
            "nvidia-smi rows dropped while skipping malformed rows",
            ["stage"],
            namespace=NAMESPACE,
            registry=registry,
        )
        self.last_scrape_duration_seconds = Gauge(
            "last_scrape_duration_seconds",
            "Duration of the most recent nvidia-smi pipeline run",
            namespace=NAMESPACE,
            registry=registry,
        )
        self.gpus = Gauge(
            "gpus",
            "GPUs reported by the most recent scrape, 0 when it failed",
            namespace=NAMESPACE,
            registry=registry,
        )

        for stage in PIPELINE_STAGES:
            self.scrape_errors_total.labels(stage=stage)
            self.skipped_rows_total.labels(stage=stage)

    def record_success(self, gpu_count: int, skipped_stages=()) -> None:
        self.scrapes_total.inc()
        self.gpus.set(gpu_count)
        for stage in skipped_stages:
            self.skipped_rows_total.labels(stage=stage).inc()

    def record_failure(self, stage: str) -> None:
        self.scrapes_total.inc()
        self.gpus.set(0)
        self.scrape_errors_total.labels(stage=stage).inc()

    def observe_duration(self, seconds: float) -> None:
        self.last_scrape_duration_seconds.set(seconds)

    def render(self) -> bytes:
        """Render the whole registry in the text exposition format"""
        return generate_latest(self.registry)
