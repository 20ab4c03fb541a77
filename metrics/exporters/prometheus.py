"""Prometheus text exposition for GPU samples"""
from typing import Iterable, List, Optional

from metrics.models import GpuSample
from metrics.registry import ExporterMetrics
from logging_config import get_logger


logger = get_logger(__name__)


class PrometheusExporter:
    """Render GPU samples after the self-observability registry output"""

    def __init__(self, metrics: ExporterMetrics):
        self.metrics = metrics

    def render_samples(self, samples: Iterable[GpuSample]) -> bytes:
        """Render GPU metric lines, samples in arrival order then catalog order.

        No HELP or TYPE comments are emitted for GPU metrics.
        """
        lines: List[str] = []
        for sample in samples:
            lines.extend(sample.to_exposition_lines())

        logger.debug("Rendered GPU metrics", line_count=len(lines))
        return "".join(lines).encode("utf-8")

    def render(self, samples: Optional[Iterable[GpuSample]] = None) -> bytes:
        """Registry exposition followed by GPU lines, if any"""
        buffer = self.metrics.render()
        if samples:
            buffer += self.render_samples(samples)
        return buffer
