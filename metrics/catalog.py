"""Fixed catalog of GPU metrics exported from nvidia-smi"""
from enum import Enum
from typing import Dict, Tuple


class MetricName(str, Enum):
    """Exported GPU metric names, in nvidia-smi column order"""
    FAN_SPEED = "nvidia_fan_speed"
    TEMPERATURE_GPU = "nvidia_temperature_gpu"
    CLOCKS_GR = "nvidia_clocks_gr"
    CLOCKS_SM = "nvidia_clocks_sm"
    CLOCKS_MEM = "nvidia_clocks_mem"
    POWER_DRAW = "nvidia_power_draw"
    UTILIZATION_GPU = "nvidia_utilization_gpu"
    UTILIZATION_MEMORY = "nvidia_utilization_memory"
    MEMORY_TOTAL = "nvidia_memory_total"
    MEMORY_FREE = "nvidia_memory_free"
    MEMORY_USED = "nvidia_memory_used"


# Enum iteration follows definition order
METRIC_CATALOG: Tuple[MetricName, ...] = tuple(MetricName)

QUERY_FIELDS: Dict[MetricName, str] = {
    MetricName.FAN_SPEED: "fan.speed",
    MetricName.TEMPERATURE_GPU: "temperature.gpu",
    MetricName.CLOCKS_GR: "clocks.gr",
    MetricName.CLOCKS_SM: "clocks.sm",
    MetricName.CLOCKS_MEM: "clocks.mem",
    MetricName.POWER_DRAW: "power.draw",
    MetricName.UTILIZATION_GPU: "utilization.gpu",
    MetricName.UTILIZATION_MEMORY: "utilization.memory",
    MetricName.MEMORY_TOTAL: "memory.total",
    MetricName.MEMORY_FREE: "memory.free",
    MetricName.MEMORY_USED: "memory.used",
}

# Identifying columns come first, then one column per catalog entry
IDENTITY_FIELDS: Tuple[str, ...] = ("name", "index")
NVIDIA_SMI_QUERY: Tuple[str, ...] = IDENTITY_FIELDS + tuple(QUERY_FIELDS[m] for m in METRIC_CATALOG)
NVIDIA_SMI_FORMAT = "csv,noheader,nounits"
