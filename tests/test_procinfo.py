import os
import pwd

import pytest

from gpumon.procinfo import (
    ProcessCpuUsage,
    format_cmdline,
    get_command_from_pid,
    get_process_info,
    get_username_from_pid,
    parse_stat,
)
from gpumon.timeutil import Timestamp

STAT_LINE = "1234 (my proc) S 1 1234 1234 0 -1 4194304 100 0 0 0 250 50 0 0 20 0 1 0 12345 1048576 300\n"


def test_parse_stat_reads_fields_with_unit_scales():
    usage = parse_stat(STAT_LINE, 1, 1)
    assert usage.total_user_time == 250.0
    assert usage.total_kernel_time == 50.0
    assert usage.virtual_memory == 1048576
    assert usage.resident_memory == 300


def test_parse_stat_scales_by_clock_and_page_size():
    base = parse_stat(STAT_LINE, 1, 1)
    scaled = parse_stat(STAT_LINE, 100, 4096)
    assert scaled.total_user_time * 100 == pytest.approx(base.total_user_time)
    assert scaled.total_kernel_time * 100 == pytest.approx(base.total_kernel_time)
    assert scaled.resident_memory == base.resident_memory * 4096
    assert scaled.virtual_memory == base.virtual_memory
    assert isinstance(scaled.timestamp, Timestamp)


def test_parse_stat_rejects_missing_parenthesis():
    with pytest.raises(ValueError):
        parse_stat("1234 my proc S 1 2 3", 100, 4096)


def test_parse_stat_rejects_too_few_fields():
    with pytest.raises(ValueError):
        parse_stat("1234 (x) S 1 2 3 4", 100, 4096)


def test_parse_stat_rejects_bad_pid():
    with pytest.raises(ValueError):
        parse_stat(STAT_LINE.replace("1234 (", "abc (", 1), 100, 4096)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"", ""),
        (b"python\0script.py\0", "python script.py"),
        (b"python\0script.py", "python script.py"),
        (b"single\0", "single"),
    ],
)
def test_format_cmdline(raw, expected):
    assert format_cmdline(raw) == expected


def test_get_command_from_pid_reads_cmdline(tmp_path):
    (tmp_path / "42").mkdir()
    (tmp_path / "42" / "cmdline").write_bytes(b"/usr/bin/app\0--flag\0value\0")
    assert get_command_from_pid(42, tmp_path) == "/usr/bin/app --flag value"


def test_get_command_from_missing_pid_is_none(tmp_path):
    assert get_command_from_pid(7, tmp_path) is None


def test_get_username_from_pid_matches_owner(tmp_path):
    (tmp_path / "42").mkdir()
    try:
        expected = pwd.getpwuid(os.getuid()).pw_name
    except KeyError:
        expected = None
    assert get_username_from_pid(42, tmp_path) == expected


def test_get_username_from_missing_pid_is_none(tmp_path):
    assert get_username_from_pid(99, tmp_path) is None


def test_get_process_info_reads_stat(tmp_path):
    (tmp_path / "1234").mkdir()
    (tmp_path / "1234" / "stat").write_text(STAT_LINE)
    usage = get_process_info(1234, tmp_path)
    reference = parse_stat(STAT_LINE, float(os.sysconf("SC_CLK_TCK")), os.sysconf("SC_PAGESIZE"))
    assert isinstance(usage, ProcessCpuUsage)
    assert usage.total_user_time == pytest.approx(reference.total_user_time)
    assert usage.total_kernel_time == pytest.approx(reference.total_kernel_time)
    assert usage.virtual_memory == 1048576
    assert usage.resident_memory == reference.resident_memory


def test_get_process_info_missing_or_malformed(tmp_path):
    assert get_process_info(5, tmp_path) is None
    (tmp_path / "6").mkdir()
    (tmp_path / "6" / "stat").write_text("garbage")
    assert get_process_info(6, tmp_path) is None