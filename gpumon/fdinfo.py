"""Collect per-process GPU usage from the fdinfo of open DRM file descriptors."""

from __future__ import annotations

import io
import os
import re
import stat
from dataclasses import dataclass
from typing import Callable, List, Optional, TextIO, Tuple, Union

from gpumon.gpuinfo import GpuInfo, GpuProcess, ProcessType

PathLike = Union[str, "os.PathLike[str]"]

# Device major number of DRM character devices.
DRM_MAJOR = 226

FdinfoCallback = Callable[[GpuInfo, TextIO, GpuProcess], bool]
"""Fills a process from an fdinfo file; returns True when the data is valid."""

_LEADING_DIGITS = re.compile(r"\d+")


def _is_drm_fd(path: str) -> bool:
    try:
        st = os.stat(path)
    except OSError:
        return False
    return stat.S_ISCHR(st.st_mode) and os.major(st.st_rdev) == DRM_MAJOR


def _description_key(content: str) -> Tuple[str, ...]:
    # Descriptors sharing one open file show the same fdinfo, except for
    # the per-descriptor flags.
    return tuple(line for line in content.splitlines() if not line.startswith("flags:"))


def _leading_number(name: str) -> int:
    match = _LEADING_DIGITS.match(name)
    return int(match.group()) if match else 0


@dataclass
class _CallbackEntry:
    info: GpuInfo
    callback: FdinfoCallback
    active: bool = True


class FdinfoRegistry:
    """Callbacks that turn DRM fdinfo files into process entries of GPUs."""

    def __init__(self, is_drm_fd: Optional[Callable[[str], bool]] = None) -> None:
        self._entries: List[_CallbackEntry] = []
        self._is_drm_fd = is_drm_fd or _is_drm_fd

    def register(self, callback: FdinfoCallback, info: GpuInfo) -> None:
        """Add a callback whose successes update the processes of ``info``."""
        self._entries.append(_CallbackEntry(info, callback))

    def drop(self, info: GpuInfo) -> None:
        """Remove the first callback registered for ``info``."""
        for index, entry in enumerate(self._entries):
            if entry.info is info:
                del self._entries[index]
                return

    def enable_disable(self, info: GpuInfo, enable: bool) -> None:
        """Turn the callbacks registered for ``info`` on or off."""
        for entry in self._entries:
            if entry.info is info:
                entry.active = enable

    def sweep(self, proc_root: PathLike = "/proc") -> None:
        """Scan every process for DRM descriptors and run the callbacks on them.

        The first active callback that succeeds on a descriptor adds its
        readings to the process list of its GPU.
        """
        if not any(entry.active for entry in self._entries):
            return
        try:
            proc_entries = list(os.scandir(proc_root))
        except OSError:
            return
        for proc_entry in proc_entries:
            if not proc_entry.name[:1].isdigit():
                continue
            try:
                if not proc_entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            client_pid = _leading_number(proc_entry.name)
            if not client_pid:
                continue
            self._sweep_process(proc_entry.path, client_pid)

    def _sweep_process(self, pid_dir: str, client_pid: int) -> None:
        fd_dir = os.path.join(pid_dir, "fd")
        fdinfo_dir = os.path.join(pid_dir, "fdinfo")
        if not os.path.isdir(fd_dir):
            return
        try:
            fdinfo_entries = list(os.scandir(fdinfo_dir))
        except OSError:
            return
        seen = set()
        for fdinfo_entry in fdinfo_entries:
            if not fdinfo_entry.name[:1].isdigit():
                continue
            try:
                if not fdinfo_entry.is_file(follow_symlinks=False):
                    continue
            except OSError:
                continue
            if not self._is_drm_fd(os.path.join(fd_dir, fdinfo_entry.name)):
                continue
            try:
                with open(fdinfo_entry.path, "r", encoding="utf-8", errors="replace") as file:
                    content = file.read()
            except OSError:
                continue
            key = _description_key(content)
            if key in seen:
                continue
            seen.add(key)
            self._dispatch(content, client_pid)

    def _dispatch(self, content: str, client_pid: int) -> None:
        for entry in self._entries:
            if not entry.active:
                continue
            local = GpuProcess(pid=client_pid)
            if entry.callback(entry.info, io.StringIO(content), local):
                break
        else:
            return
        if local.type == ProcessType.UNKNOWN:
            local.type = ProcessType.GRAPHICAL
        processes = entry.info.processes
        if not processes or processes[-1].pid != client_pid:
            processes.append(GpuProcess(pid=client_pid))
        processes[-1].accumulate(local)