"""Tests for mapping rows onto the metric catalog"""
import pytest

from collectors.errors import MappingError
from metrics.catalog import METRIC_CATALOG, NVIDIA_SMI_QUERY, QUERY_FIELDS, MetricName
from metrics.mapper import map_record
from metrics.models import GpuRecord


def make_record(*fields, line_number=1):
    return GpuRecord(fields=tuple(fields), line_number=line_number)


class TestMetricCatalog:
    """The catalog must line up with the nvidia-smi query columns"""

    def test_catalog_order(self):
        assert [m.value for m in METRIC_CATALOG] == [
            "nvidia_fan_speed",
            "nvidia_temperature_gpu",
            "nvidia_clocks_gr",
            "nvidia_clocks_sm",
            "nvidia_clocks_mem",
            "nvidia_power_draw",
            "nvidia_utilization_gpu",
            "nvidia_utilization_memory",
            "nvidia_memory_total",
            "nvidia_memory_free",
            "nvidia_memory_used",
        ]

    def test_query_columns(self):
        assert ",".join(NVIDIA_SMI_QUERY) == (
            "name,index,fan.speed,temperature.gpu,clocks.gr,clocks.sm,clocks.mem,"
            "power.draw,utilization.gpu,utilization.memory,memory.total,memory.free,memory.used"
        )
        assert len(QUERY_FIELDS) == len(METRIC_CATALOG)
        for position, metric in enumerate(METRIC_CATALOG, start=2):
            assert NVIDIA_SMI_QUERY[position] == QUERY_FIELDS[metric]


class TestMapRecord:
    """Test GpuRecord to GpuSample mapping"""

    def test_full_row(self):
        record = make_record(
            "NVIDIA Tesla T4", " 0", " 30", " 45", " 300", " 1500", " 5000",
            " 70.5", " 25", " 10", " 16384", " 12000", " 4384",
        )

        sample = map_record(record)

        assert sample.name == "NVIDIA Tesla T4"
        assert sample.index == "0"
        assert list(sample.values) == list(METRIC_CATALOG)
        assert sample.values[MetricName.FAN_SPEED] == "30"
        assert sample.values[MetricName.POWER_DRAW] == "70.5"
        assert sample.values[MetricName.MEMORY_USED] == "4384"

    def test_index_is_trimmed(self):
        sample = map_record(make_record("GPU", " 0 ", "1"))

        assert sample.index == "0"
        assert map_record(make_record("GPU", sample.index, "1")).index == "0"

    def test_index_not_validated_as_numeric(self):
        sample = map_record(make_record("GPU", "gpu-a", "1"))

        assert sample.index == "gpu-a"

    def test_name_used_verbatim(self):
        sample = map_record(make_record('GPU "quoted"', "0"))

        assert sample.name == 'GPU "quoted"'

    def test_partial_row_maps_prefix(self):
        """Short rows silently under-report: only the covered catalog prefix is mapped"""
        record = make_record("GPU", "0", "1", "2", "3", "4", "5")

        sample = map_record(record)

        assert list(sample.values) == list(METRIC_CATALOG[:5])
        assert sample.values[MetricName.CLOCKS_MEM] == "5"

    def test_identity_only_row(self):
        sample = map_record(make_record("GPU", "0"))

        assert sample.values == {}

    def test_extra_columns_ignored(self):
        fields = ["GPU", "0"] + [str(i) for i in range(len(METRIC_CATALOG) + 3)]

        sample = map_record(make_record(*fields))

        assert len(sample.values) == len(METRIC_CATALOG)
        assert sample.values[MetricName.MEMORY_USED] == "10"

    def test_raw_values_not_validated(self):
        sample = map_record(make_record("GPU", "0", "[N/A]", "[Not Supported]"))

        assert sample.values[MetricName.FAN_SPEED] == "[N/A]"
        assert sample.values[MetricName.TEMPERATURE_GPU] == "[Not Supported]"

    @pytest.mark.parametrize("fields", [(), ("GPU only",)])
    def test_missing_identity_fields(self, fields):
        with pytest.raises(MappingError) as exc_info:
            map_record(make_record(*fields, line_number=7))

        assert exc_info.value.stage == "map"
        assert exc_info.value.line_number == 7
        assert exc_info.value.field_count == len(fields)
