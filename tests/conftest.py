"""Pytest configuration and fixtures."""

import pytest

from printerapp.config import ClientSettings
from printerapp.ipp import GroupTag, IppMessage, Operation, ValueTag


@pytest.fixture
def settings(tmp_path) -> ClientSettings:
    """Client settings pointing all socket directories at tmp_path."""
    return ClientSettings(
        tmpdir=str(tmp_path),
        snap_common=None,
        socket_dir=str(tmp_path / "run"),
        connect_timeout=1.0,
        poll_interval=0.01,
        startup_timeout=1.0,
    )


@pytest.fixture
def supported() -> IppMessage:
    """Get-Printer-Attributes response with vendor job creation attributes."""
    response = IppMessage(Operation.GET_PRINTER_ATTRIBUTES)
    group = GroupTag.PRINTER
    response.add_strings(
        group,
        ValueTag.KEYWORD,
        "job-creation-attributes-supported",
        [
            "copies",
            "media",
            "print-darkness",
            "smoothing",
            "density",
            "head-temperature",
            "dither",
            "job-note",
            "job-hold-until",
        ],
    )
    response.add_string(group, ValueTag.KEYWORD, "copies-supported", "ignored")
    response.add_boolean(group, "smoothing-supported", True)
    response.add(group, ValueTag.RANGE, "density-supported", (-10, 10))
    response.add_integer(group, ValueTag.INTEGER, "head-temperature-supported", 90)
    response.add_strings(group, ValueTag.KEYWORD, "dither-supported", ["none", "ordered"])
    response.add_string(group, ValueTag.NAME, "job-hold-until-supported", "no-hold")
    return response


@pytest.fixture
def job_request() -> IppMessage:
    """Empty Print-Job request."""
    return IppMessage(Operation.PRINT_JOB)


@pytest.fixture
def printer_request() -> IppMessage:
    """Empty Create-Printer request."""
    return IppMessage(Operation.CREATE_PRINTER)
