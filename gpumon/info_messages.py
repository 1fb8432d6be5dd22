"""Startup notes about what cannot be shown for the detected GPUs."""

from __future__ import annotations

import platform
import re
from typing import Iterable, List, Optional, Tuple

from gpumon.gpuinfo import GpuInfo

AMD_PROCESSES_NEED_NEWER_KERNEL = (
    "Nvtop won't be able to show AMD GPU processes on your kernel version (requires Linux >= 5.14)"
)
INTEL_NEEDS_NEWER_KERNEL = (
    "Nvtop won't be able to show Intel GPU utilization and processes on your kernel version "
    "(requires Linux >= 5.19)"
)
INTEL_PARTIAL_SUPPORT = (
    "This version of Nvtop does not yet support reporting all data for Intel GPUs, "
    "such as memory, power, fan and temperature information"
)
MSM_PARTIAL_SUPPORT = (
    "This version of Nvtop does not yet support reporting all data for MSM GPUs, "
    "such as power, fan and temperature information"
)

_RELEASE = re.compile(r"\s*\+?(\d+)\.\s*\+?(\d+)\.\s*\+?(\d+)")


def parse_kernel_release(release: str) -> Tuple[int, int, int]:
    """Major, minor and patch numbers at the start of a kernel release string.

    Raises :class:`ValueError` when the string does not start with them.
    """
    match = _RELEASE.match(release)
    if not match:
        raise ValueError(f"not a kernel release: {release!r}")
    major, minor, patch = (int(group) for group in match.groups())
    return major, minor, patch


def get_info_messages(devices: Iterable[GpuInfo], kernel_release: Optional[str] = None) -> List[str]:
    """Messages to show for ``devices`` on the given (or running) kernel."""
    if kernel_release is None:
        kernel_release = platform.release()
    try:
        major, minor, _ = parse_kernel_release(kernel_release)
    except ValueError:
        return []

    vendors = {device.vendor for device in devices}
    messages: List[str] = []
    if "AMD" in vendors and (major, minor) < (5, 14):
        messages.append(AMD_PROCESSES_NEED_NEWER_KERNEL)
    if "Intel" in vendors:
        if (major, minor) < (5, 19):
            messages.append(INTEL_NEEDS_NEWER_KERNEL)
        messages.append(INTEL_PARTIAL_SUPPORT)
    if "msm" in vendors:
        messages.append(MSM_PARTIAL_SUPPORT)
    return messages