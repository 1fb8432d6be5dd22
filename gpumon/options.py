"""Bit sets selecting which metrics are plotted and which columns are shown."""

from __future__ import annotations

import enum

from gpumon.gpuinfo import MAX_LINES_PER_PLOT


class PlotInformation(enum.IntEnum):
    """Metrics that can be drawn in a plot."""

    GPU_RATE = 0
    GPU_MEM_RATE = 1
    ENCODER_RATE = 2
    DECODER_RATE = 3
    GPU_TEMPERATURE = 4
    GPU_POWER_DRAW_RATE = 5
    FAN_SPEED = 6
    GPU_CLOCK_RATE = 7
    GPU_MEM_CLOCK_RATE = 8


class ProcessField(enum.IntEnum):
    """Columns of the process list."""

    PID = 0
    USER = 1
    GPU_ID = 2
    TYPE = 3
    GPU_RATE = 4
    ENC_RATE = 5
    DEC_RATE = 6
    MEMORY = 7
    CPU_USAGE = 8
    CPU_MEM_USAGE = 9
    COMMAND = 10


def plot_isset_draw_info(check_info: PlotInformation, to_draw: int) -> bool:
    """Whether ``check_info`` is part of the set ``to_draw``."""
    return (to_draw & (1 << check_info)) > 0


def plot_count_draw_info(to_draw: int) -> int:
    """Number of metrics selected in ``to_draw``."""
    return sum(plot_isset_draw_info(info, to_draw) for info in PlotInformation)


def plot_add_draw_info(set_info: PlotInformation, to_draw: int) -> int:
    """Add a metric unless the plot already holds the maximum number of lines."""
    if plot_count_draw_info(to_draw) < MAX_LINES_PER_PLOT:
        return to_draw | (1 << set_info)
    return to_draw


def plot_remove_draw_info(reset_info: PlotInformation, to_draw: int) -> int:
    """Remove a metric from the set."""
    return to_draw & ~(1 << reset_info)


def plot_default_draw_info() -> int:
    """GPU and memory utilisation rates."""
    return (1 << PlotInformation.GPU_RATE) | (1 << PlotInformation.GPU_MEM_RATE)


def process_is_field_displayed(field: ProcessField, fields_displayed: int) -> bool:
    """Whether the column ``field`` is shown."""
    return (fields_displayed & (1 << field)) > 0


def process_remove_field_to_display(field: ProcessField, fields_displayed: int) -> int:
    """Hide a column."""
    return fields_displayed & ~(1 << field)


def process_add_field_to_display(field: ProcessField, fields_displayed: int) -> int:
    """Show a column."""
    return fields_displayed | (1 << field)


def process_default_displayed_field() -> int:
    """Every column except the encoder and decoder rates."""
    to_display = 0
    for field in ProcessField:
        to_display = process_add_field_to_display(field, to_display)
    to_display = process_remove_field_to_display(ProcessField.ENC_RATE, to_display)
    return process_remove_field_to_display(ProcessField.DEC_RATE, to_display)


def process_field_displayed_count(fields_displayed: int) -> int:
    """Number of columns shown."""
    return sum(process_is_field_displayed(field, fields_displayed) for field in ProcessField)