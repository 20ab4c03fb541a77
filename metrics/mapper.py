"""Map parsed nvidia-smi rows onto the metric catalog"""
from collectors.errors import MappingError
from metrics.catalog import METRIC_CATALOG
from metrics.models import GpuRecord, GpuSample


def map_record(record: GpuRecord) -> GpuSample:
    """Build a GpuSample from a record laid out as name, index, metrics...

    Metric column ``2 + i`` belongs to ``METRIC_CATALOG[i]``. Extra columns
    are ignored and a short row maps only the catalog prefix it covers.
    """
    if len(record) < 2:
        raise MappingError(record.line_number, len(record))

    name = record.fields[0]
    index = record.fields[1].strip()

    # zip stops at the shorter side
    values = {
        metric: value.strip()
        for metric, value in zip(METRIC_CATALOG, record.fields[2:])
    }

    return GpuSample(index=index, name=name, values=values)
