"""Data model for GPU devices, their readings and the processes using them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

# Growth step used when the list of tracked processes is enlarged.
COMMON_PROCESS_LINEAR_REALLOC_INC = 16

# Maximum number of metric lines drawn in one plot.
MAX_LINES_PER_PLOT = 4

# Maximum length of a device name, terminator included.
MAX_DEVICE_NAME = 128

# Maximum length of a PCI device identifier, terminator included.
PDEV_LEN = 16

_U64_MASK = (1 << 64) - 1


class ProcessType(enum.IntFlag):
    """Kind of GPU work a process performs; kinds combine with ``|``."""

    UNKNOWN = 0
    GRAPHICAL = 1
    COMPUTE = 2
    GRAPHICAL_COMPUTE = 3


@dataclass
class StaticInfo:
    """Device properties that do not change while the device is monitored.

    A field set to ``None`` holds no valid reading.
    """

    device_name: Optional[str] = None
    max_pcie_gen: Optional[int] = None
    max_pcie_link_width: Optional[int] = None
    temperature_shutdown_threshold: Optional[int] = None
    temperature_slowdown_threshold: Optional[int] = None
    n_shared_cores: Optional[int] = None
    l2cache_size: Optional[int] = None
    n_exec_engines: Optional[int] = None
    integrated_graphics: bool = False


@dataclass
class DynamicInfo:
    """Device readings refreshed on every update; ``None`` means not valid."""

    gpu_clock_speed: Optional[int] = None  # MHz
    gpu_clock_speed_max: Optional[int] = None  # MHz
    mem_clock_speed: Optional[int] = None  # MHz
    mem_clock_speed_max: Optional[int] = None  # MHz
    gpu_util_rate: Optional[int] = None  # percent
    mem_util_rate: Optional[int] = None  # percent
    encoder_rate: Optional[int] = None  # percent
    decoder_rate: Optional[int] = None  # percent
    total_memory: Optional[int] = None  # bytes
    free_memory: Optional[int] = None  # bytes
    used_memory: Optional[int] = None  # bytes
    pcie_link_gen: Optional[int] = None
    pcie_link_width: Optional[int] = None
    pcie_rx: Optional[int] = None  # KB/s
    pcie_tx: Optional[int] = None  # KB/s
    fan_speed: Optional[int] = None  # percent
    gpu_temp: Optional[int] = None  # degrees Celsius
    power_draw: Optional[int] = None  # milliwatts
    power_draw_max: Optional[int] = None  # milliwatts
    encode_decode_shared: bool = False


_ACCUMULATED_FIELDS = (
    "gpu_memory_usage",
    "gpu_usage",
    "encode_usage",
    "decode_usage",
    "gfx_engine_used",
    "compute_engine_used",
    "enc_engine_used",
    "dec_engine_used",
    "gpu_cycles",
    "sample_delta",
)


@dataclass
class GpuProcess:
    """A process using a GPU; ``None`` fields hold no valid reading."""

    pid: int = 0
    type: ProcessType = ProcessType.UNKNOWN
    cmdline: Optional[str] = None
    user_name: Optional[str] = None
    sample_delta: Optional[int] = None  # ns between two samples
    gfx_engine_used: Optional[int] = None  # ns
    compute_engine_used: Optional[int] = None  # ns
    enc_engine_used: Optional[int] = None  # ns
    dec_engine_used: Optional[int] = None  # ns
    gpu_cycles: Optional[int] = None
    gpu_usage: Optional[int] = None  # percent
    encode_usage: Optional[int] = None  # percent
    decode_usage: Optional[int] = None  # percent
    gpu_memory_usage: Optional[int] = None  # bytes
    gpu_memory_percentage: Optional[int] = None
    cpu_usage: Optional[int] = None
    cpu_memory_virt: Optional[int] = None
    cpu_memory_res: Optional[int] = None

    def accumulate(self, other: "GpuProcess") -> None:
        """Add the valid usage readings of ``other`` into this process."""
        self.type = ProcessType(self.type | other.type)
        for name in _ACCUMULATED_FIELDS:
            value = getattr(other, name)
            if value is not None:
                setattr(self, name, (getattr(self, name) or 0) + value)


@dataclass
class GpuInfo:
    """One monitored GPU: its vendor, readings and running processes."""

    vendor: str
    pdev: str = ""
    static_info: StaticInfo = field(default_factory=StaticInfo)
    dynamic_info: DynamicInfo = field(default_factory=DynamicInfo)
    processes: List[GpuProcess] = field(default_factory=list)


def busy_usage_from_time_usage_round(
    current_use_ns: int, previous_use_ns: int, time_between_measurement: int
) -> int:
    """Percentage of busy time between two cumulative readings, rounded."""
    delta = (current_use_ns - previous_use_ns) & _U64_MASK
    numerator = (delta * 100 + time_between_measurement // 2) & _U64_MASK
    return numerator // time_between_measurement