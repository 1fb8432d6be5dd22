"""Fixed-size history of readings for each device and each metric."""

from __future__ import annotations

from collections import deque
from typing import Deque, List


class RingBuffer:
    """Per-device, per-metric ring buffers of integer readings.

    A ring of ``buffer_size`` slots keeps at most ``buffer_size - 1``
    values; pushing onto a full ring drops the oldest value.
    """

    def __init__(self, monitored_dev_count: int, per_device_data: int, buffer_size: int) -> None:
        if monitored_dev_count < 0 or per_device_data < 0:
            raise ValueError("device and metric counts must not be negative")
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        self.monitored_dev_count = monitored_dev_count
        self.per_device_data_saved = per_device_data
        self.buffer_size = buffer_size
        self._rings: List[List[Deque[int]]] = [
            [deque(maxlen=buffer_size - 1) for _ in range(per_device_data)]
            for _ in range(monitored_dev_count)
        ]

    def _ring(self, device: int, which_data: int) -> Deque[int]:
        if not 0 <= device < self.monitored_dev_count:
            raise IndexError(f"device {device} out of range")
        if not 0 <= which_data < self.per_device_data_saved:
            raise IndexError(f"data slot {which_data} out of range")
        return self._rings[device][which_data]

    def stored(self, device: int, which_data: int) -> int:
        """Number of values held for one device and metric."""
        return len(self._ring(device, which_data))

    def get(self, device: int, which_data: int, index: int) -> int:
        """Value at ``index``, counting from the oldest one held."""
        ring = self._ring(device, which_data)
        if not 0 <= index < len(ring):
            raise IndexError(f"index {index} out of range for {len(ring)} stored values")
        return ring[index]

    def push(self, device: int, which_data: int, value: int) -> None:
        """Append a value, dropping the oldest when the ring is full."""
        self._ring(device, which_data).append(value)

    def pop(self, device: int, which_data: int) -> None:
        """Drop the oldest value; does nothing when the ring is empty."""
        ring = self._ring(device, which_data)
        if ring:
            ring.popleft()

    def clear_select(self, device: int, which_data: int) -> None:
        """Empty the ring of one device and metric."""
        self._ring(device, which_data).clear()

    def clear(self, device: int) -> None:
        """Empty every ring of one device."""
        for which_data in range(self.per_device_data_saved):
            self.clear_select(device, which_data)