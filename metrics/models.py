"""GPU metric data models"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from collectors.errors import MappingError, ParseError
from metrics.catalog import METRIC_CATALOG, MetricName


@dataclass(frozen=True)
class GpuRecord:
    """One parsed nvidia-smi row"""
    fields: Tuple[str, ...]
    line_number: int = 0

    def __len__(self) -> int:
        return len(self.fields)


@dataclass
class GpuSample:
    """Metric values reported for a single GPU"""
    index: str
    name: str
    values: Dict[MetricName, str] = field(default_factory=dict)

    def to_exposition_line(self, metric: MetricName) -> str:
        """Convert one metric to an exposition line.

        Label values are inserted as-is; quotes in the GPU name are not escaped.
        """
        return f'{metric.value}{{gpu="{self.index}", name="{self.name}"}} {self.values[metric]}\n'

    def to_exposition_lines(self) -> List[str]:
        """All metric lines for this GPU, in catalog order"""
        return [self.to_exposition_line(metric) for metric in METRIC_CATALOG if metric in self.values]


@dataclass
class GpuScrape:
    """Outcome of one nvidia-smi pipeline run"""
    samples: List[GpuSample] = field(default_factory=list)
    skipped: List[Union[ParseError, MappingError]] = field(default_factory=list)

    @property
    def gpu_count(self) -> int:
        return len(self.samples)
