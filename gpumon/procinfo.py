"""CPU usage, owner and command line of processes, read from procfs."""

from __future__ import annotations

import os
import pwd
from dataclasses import dataclass, field
from typing import Optional, Union

from gpumon.timeutil import Timestamp, now

PathLike = Union[str, "os.PathLike[str]"]

# Fields following the command name in /proc/<pid>/stat, counted from the
# process state (index 0).
_UTIME_INDEX = 11
_STIME_INDEX = 12
_VSIZE_INDEX = 20
_RSS_INDEX = 21


@dataclass
class ProcessCpuUsage:
    """CPU time and memory of one process at one point in time."""

    total_user_time: float  # seconds
    total_kernel_time: float  # seconds
    virtual_memory: int  # bytes
    resident_memory: int  # bytes
    timestamp: Timestamp = field(default_factory=now)


def parse_stat(content: str, clock_ticks_per_second: float, page_size: int) -> ProcessCpuUsage:
    """Read CPU times and memory sizes from the text of ``/proc/<pid>/stat``.

    Raises :class:`ValueError` when the text does not have the expected form.
    """
    timestamp = now()
    head, sep, tail = content.partition(")")
    if not sep:
        raise ValueError("stat content has no closing parenthesis after the command")
    head_fields = head.split(None, 1)
    if not head_fields:
        raise ValueError("stat content has no process id")
    int(head_fields[0])
    fields = tail.split()
    if len(fields) <= _RSS_INDEX:
        raise ValueError(f"stat content has {len(fields)} fields after the command, too few")
    user_ticks = int(fields[_UTIME_INDEX])
    kernel_ticks = int(fields[_STIME_INDEX])
    virtual_memory = int(fields[_VSIZE_INDEX])
    resident_pages = int(fields[_RSS_INDEX])
    return ProcessCpuUsage(
        total_user_time=user_ticks / clock_ticks_per_second,
        total_kernel_time=kernel_ticks / clock_ticks_per_second,
        virtual_memory=virtual_memory,
        resident_memory=resident_pages * page_size,
        timestamp=timestamp,
    )


def format_cmdline(raw: bytes) -> str:
    """Turn the NUL-separated arguments of ``/proc/<pid>/cmdline`` into one line."""
    if not raw:
        return ""
    joined = raw[:-1].replace(b"\0", b" ") + raw[-1:]
    joined = joined.split(b"\0", 1)[0]
    return joined.decode("utf-8", errors="replace")


def get_username_from_pid(pid: int, proc_root: PathLike = "/proc") -> Optional[str]:
    """Name of the user owning process ``pid``, or ``None`` if unknown."""
    try:
        uid = os.stat(os.path.join(proc_root, str(pid))).st_uid
    except OSError:
        return None
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return None


def get_command_from_pid(pid: int, proc_root: PathLike = "/proc") -> Optional[str]:
    """Command line of process ``pid``, or ``None`` if it cannot be read."""
    try:
        with open(os.path.join(proc_root, str(pid), "cmdline"), "rb") as file:
            raw = file.read()
    except OSError:
        return None
    return format_cmdline(raw)


def get_process_info(pid: int, proc_root: PathLike = "/proc") -> Optional[ProcessCpuUsage]:
    """CPU usage of process ``pid``, or ``None`` if it cannot be read."""
    clock_ticks_per_second = float(os.sysconf("SC_CLK_TCK"))
    page_size = os.sysconf("SC_PAGESIZE")
    try:
        with open(os.path.join(proc_root, str(pid), "stat"), "r", encoding="utf-8", errors="replace") as file:
            content = file.read()
    except OSError:
        return None
    try:
        return parse_stat(content, clock_ticks_per_second, page_size)
    except ValueError:
        return None