"""Building blocks for monitoring GPUs and the processes using them on Linux."""

__version__ = "0.1.0"
__all__ = [
    "fdinfo",
    "gpuinfo",
    "info_messages",
    "ini",
    "mali_models",
    "options",
    "procinfo",
    "ringbuffer",
    "timeutil",
]