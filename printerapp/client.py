"""Connections to printer application servers and IPP printers."""

import getpass
import logging
import socket
from collections.abc import Callable
from urllib.parse import quote, urlsplit

import httpx

from printerapp.config import DEFAULT_IPP_PORT, ClientSettings, get_settings
from printerapp.errors import PrinterURIError, ServerConnectError
from printerapp.ipp import GroupTag, IppMessage, Operation, ValueTag, new_request

logger = logging.getLogger(__name__)


class Connection:
    """A live connection to a server or printer.

    Wraps an ``httpx.Client`` bound to either a local domain socket or a
    host and port. Requests are encoded and sent by the caller's transport.
    """

    def __init__(
        self,
        address: str,
        port: int,
        client: httpx.Client,
        encrypted: bool = False,
    ):
        """Initialize the connection.

        Args:
            address: Socket path or host name.
            port: Port number (unused for domain sockets).
            client: HTTP client bound to the endpoint.
            encrypted: Whether TLS is used.
        """
        self.address = address
        self.port = port
        self.client = client
        self.encrypted = encrypted

    def __repr__(self) -> str:
        return f"<Connection {self.address}{'' if self.is_local else f':{self.port}'}>"

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_local(self) -> bool:
        """True for domain socket connections."""
        return self.address.startswith("/")

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()


# Sends a request over a connection to a resource path and returns the response
SendRequest = Callable[[Connection, IppMessage, str], IppMessage | None]


def open_connection(
    address: str,
    port: int = DEFAULT_IPP_PORT,
    encrypted: bool = False,
    timeout: float = 30.0,
) -> Connection:
    """Connect to a domain socket path or a host and port.

    The endpoint is probed before the HTTP client is created, so a server
    that is not listening fails here rather than on the first request.

    Args:
        address: Socket path (starting with '/') or host name.
        port: Port for host names.
        encrypted: Use TLS (host names only).
        timeout: Seconds to wait for the connection.

    Returns:
        Connection: The live connection.

    Raises:
        OSError: If nothing is listening at the address.
    """
    if address.startswith("/"):
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout)
            sock.connect(address)

        client = httpx.Client(
            base_url="http://localhost",
            transport=httpx.HTTPTransport(uds=address),
            timeout=timeout,
        )
        return Connection(address, port, client)

    with socket.create_connection((address, port), timeout=timeout):
        pass

    scheme = "https" if encrypted else "http"
    client = httpx.Client(base_url=f"{scheme}://{address}:{port}", timeout=timeout)
    return Connection(address, port, client, encrypted=encrypted)


def connect_uri(
    base_name: str,
    printer_uri: str,
    settings: ClientSettings | None = None,
) -> tuple[Connection, str]:
    """Connect directly to an IPP printer.

    Args:
        base_name: Application name used in error messages.
        printer_uri: ``ipp://`` or ``ipps://`` printer URI.
        settings: Client settings (defaults from the environment).

    Returns:
        tuple[Connection, str]: The connection and the resource path.

    Raises:
        PrinterURIError: If the URI is malformed or not an IPP URI.
        ServerConnectError: If the printer cannot be reached.
    """
    settings = settings or get_settings()

    try:
        parts = urlsplit(printer_uri)
        port = parts.port
    except ValueError as err:
        raise PrinterURIError(base_name, f"Bad printer URI '{printer_uri}'.") from err

    if not parts.scheme or not parts.hostname:
        raise PrinterURIError(base_name, f"Bad printer URI '{printer_uri}'.")

    if parts.scheme not in ("ipp", "ipps"):
        raise PrinterURIError(base_name, f"Unsupported URI scheme '{parts.scheme}'.")

    if parts.username or parts.password:
        logger.warning(f"{base_name}: User credentials are not supported in URIs.")

    port = port or settings.ipp_port
    encrypted = parts.scheme == "ipps" or port == 443
    resource = parts.path or "/"

    try:
        connection = open_connection(parts.hostname, port, encrypted, settings.connect_timeout)
    except OSError as err:
        message = f"Unable to connect to printer at '{parts.hostname}:{port}': {err}"
        logger.error(f"{base_name}: {message}")
        raise ServerConnectError(base_name, message) from err

    return connection, resource


def add_printer_uri(request: IppMessage, printer_name: str) -> str:
    """Add the printer-uri operation attribute for a local printer.

    Args:
        request: Request to add to.
        printer_name: Printer name.

    Returns:
        str: Resource path to send the request to.
    """
    resource = f"/ipp/print/{printer_name}"
    uri = f"ipp://localhost{quote(resource)}"
    request.add_string(GroupTag.OPERATION, ValueTag.URI, "printer-uri", uri)
    return resource


def get_default_printer(connection: Connection, send: SendRequest) -> str | None:
    """Ask the server for its default printer.

    Args:
        connection: Connection to the server.
        send: Transport that sends the request and returns the response.

    Returns:
        str | None: Default printer name, or None if there is none.
    """
    request = new_request(Operation.CUPS_GET_DEFAULT)
    request.add_string(
        GroupTag.OPERATION, ValueTag.NAME, "requesting-user-name", getpass.getuser()
    )
    request.add_string(GroupTag.OPERATION, ValueTag.KEYWORD, "requested-attributes", "printer-name")

    response = send(connection, request, "/ipp/system")
    if response is None:
        return None

    attr = response.find("printer-name", ValueTag.NAME)
    return attr.value if attr and attr.value else None
