"""Tests for CLI output formatting."""

import pytest

from cli.utils import format_file_size, format_progress_bar, format_upload_line


@pytest.mark.parametrize("size,expected", [
    (0, "0 B"),
    (512, "512 B"),
    (1024, "1.00 KiB"),
    (1536, "1.50 KiB"),
    (1024 * 1024, "1.00 MiB"),
    (5 * 1024 ** 3, "5.00 GiB"),
    (1024 ** 5, "1.00 PiB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_progress_bar_bounds():
    assert format_progress_bar(0, width=10) == "[----------]   0%"
    assert format_progress_bar(100, width=10) == "[##########] 100%"
    assert format_progress_bar(150, width=10) == "[##########] 100%"
    assert format_progress_bar(-5, width=10) == "[----------]   0%"


def test_progress_bar_partial():
    assert format_progress_bar(50, width=10) == "[#####-----]  50%"


def test_upload_line():
    line = format_upload_line("a.txt", 2048, 100, "complete")
    assert line.startswith("a.txt (2.00 KiB) [")
    assert "complete" in line
