"""printerapp - client-side support for local printer application servers.

Two independent pieces:

- ``printerapp.attributes`` turns a flat set of ``name=value`` options into
  typed job-template or printer-default attributes on an IPP request.
- ``printerapp.server`` finds the local printer application server for the
  current user, starting it in the background when it is not running yet.

Usage:
    connector = ServerConnector("myprinterapp", "/usr/bin/myprinterapp")
    with connector.connect() as connection:
        request = IppMessage(Operation.PRINT_JOB)
        add_options(request, Options.parse("copies=2 media=na_letter_8.5x11in"), supported)
"""

from printerapp.attributes import add_options
from printerapp.client import Connection, add_printer_uri, connect_uri, get_default_printer
from printerapp.errors import (
    PrinterURIError,
    ServerConnectError,
    ServerError,
    ServerNotRunningError,
    ServerStartError,
    ServerStartTimeoutError,
)
from printerapp.ipp import GroupTag, IppMessage, Operation, ValueTag
from printerapp.options import Options
from printerapp.server import ServerConnector, get_server_path

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "GroupTag",
    "IppMessage",
    "Operation",
    "Options",
    "PrinterURIError",
    "ServerConnectError",
    "ServerConnector",
    "ServerError",
    "ServerNotRunningError",
    "ServerStartError",
    "ServerStartTimeoutError",
    "ValueTag",
    "add_options",
    "add_printer_uri",
    "connect_uri",
    "get_default_printer",
    "get_server_path",
]
