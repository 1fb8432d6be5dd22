# gpumon

Pure-Python building blocks for monitoring GPUs and the processes that use
them on Linux. It uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `gpumon.gpuinfo`: dataclasses describing a GPU (`GpuInfo`, with its
  `StaticInfo` and `DynamicInfo`) and the processes running on it
  (`GpuProcess`, with a `ProcessType` flag). A field set to `None` holds no
  valid reading. `GpuProcess.accumulate(other)` ORs the process types together
  and adds the valid usage counters of `other` (memory, usage percentages,
  engine times, cycles, sample delta) into the process.
  `busy_usage_from_time_usage_round(current_use_ns, previous_use_ns,
  time_between_measurement)` turns two cumulative engine-time readings into a
  rounded busy percentage.
- `gpumon.timeutil`: `Timestamp` (seconds plus nanoseconds) and `now()`, which
  reads the raw monotonic clock where available. `difftime` gives the seconds
  between two timestamps as a float, `difftime_u64` and `time_u64` give
  nanosecond counts wrapped to 64 bits. `add_time`, `subtract_time` and
  `hmns_to_time` are arithmetic helpers that carry or borrow one second at
  1,000,000 units of the sub-second field.
- `gpumon.ringbuffer`: `RingBuffer(monitored_dev_count, per_device_data,
  buffer_size)` keeps a history of integer readings per device and metric.
  Each ring holds at most `buffer_size - 1` values and drops the oldest when
  full. Methods: `push`, `get` (index 0 is the oldest value), `stored`, `pop`,
  `clear_select` and `clear`. Out-of-range devices, metrics or indices raise
  `IndexError`.
- `gpumon.ini`: an INI parser with `parse(filename, handler)`,
  `parse_file(file, handler)`, `parse_string(text, handler)` and
  `parse_stream(lines, handler)`. The handler is called as
  `handler(section, name, value)`. The parser accepts `[section]` headings,
  `name=value` and `name:value` pairs, comment lines starting with `;` or `#`,
  inline `;` comments preceded by whitespace, indented continuation lines
  (passed to the handler under the previous name) and a leading UTF-8 BOM.
  A line that cannot be parsed, or whose handler returns `False`, is an error.
  Parsing carries on to the end, then raises `IniParseError`, whose `lineno`
  is the first bad line. `parse` raises `OSError` if the file cannot be opened.
- `gpumon.options`: the `PlotInformation` and `ProcessField` enumerations and
  bit-set helpers for choosing which metrics are plotted and which process
  columns are shown. `plot_add_draw_info` will not add a metric once four are
  selected. `plot_default_draw_info()` selects the GPU and memory rates.
  `process_default_displayed_field()` shows every column except the encoder
  and decoder rates.
- `gpumon.procinfo`: reads `/proc/<pid>` (the root can be changed with
  `proc_root`). `get_username_from_pid`, `get_command_from_pid` and
  `get_process_info` return `None` when the data cannot be read.
  `get_process_info` returns a `ProcessCpuUsage` with user and kernel CPU time
  in seconds and virtual and resident memory in bytes. `parse_stat` and
  `format_cmdline` work on text and bytes you have already read.
- `gpumon.fdinfo`: `FdinfoRegistry` holds per-GPU callbacks (`register`,
  `drop`, `enable_disable`). `sweep()` walks `/proc/*/fdinfo` and picks out
  descriptors that point at DRM character devices (major 226). It skips
  descriptors with the same fdinfo content as one already seen in that
  process. Each remaining descriptor goes to the active callbacks until one
  returns `True`; the result is then merged into that GPU's process list.
  A process of unknown type is counted as graphical.
- `gpumon.mali_models`: `panfrost_parse_marketing_name`, `get_number_engines`,
  `util_last_bit` and `panthor_device_name` look up names and engine counts of
  Arm Mali GPUs from their id registers.
- `gpumon.info_messages`: `get_info_messages(devices, kernel_release=None)`
  lists warnings for the vendors present (`"AMD"`, `"Intel"`, `"msm"`) given
  a kernel release string. It reads the running kernel when none is given and
  returns nothing if the release cannot be parsed. `parse_kernel_release`
  splits a release into major, minor and patch numbers.

## Example

```python
from gpumon import ini

values = {}

def handler(section, name, value):
    values[(section, name)] = value
    return True

ini.parse_string("[general]\nupdate_interval = 1000 ; ms\n", handler)
print(values)  # {('general', 'update_interval'): '1000'}
```

```python
from gpumon.ringbuffer import RingBuffer

ring = RingBuffer(monitored_dev_count=1, per_device_data=2, buffer_size=4)
for value in (10, 20, 30, 40):
    ring.push(0, 0, value)
print([ring.get(0, 0, i) for i in range(ring.stored(0, 0))])  # [20, 30, 40]
```

## What it does not do

This is a library only. It has no command to run and no terminal screen, and
it does not draw charts. It does not query GPU drivers or vendor management
libraries for device readings. The `StaticInfo` and `DynamicInfo` records are
filled by the caller, and so is the parsing of each driver's fdinfo keys,
through callbacks given to `FdinfoRegistry`. It does not load or save
settings files. `gpumon.ini` parses INI data and leaves it to your handler to
decide what to do with each value.