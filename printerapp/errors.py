"""Errors raised while locating or starting a printer application server."""


class ServerError(Exception):
    """The printer application server could not be reached."""

    def __init__(self, base_name: str, message: str):
        self.base_name = base_name
        self.message = message
        super().__init__(f"{base_name}: {message}")


class ServerNotRunningError(ServerError):
    """No server is running and auto-start was not requested."""

    pass


class ServerStartError(ServerError):
    """The server process could not be launched or exited during startup."""

    pass


class ServerStartTimeoutError(ServerError):
    """The server was launched but never created its socket."""

    pass


class ServerConnectError(ServerError):
    """The endpoint exists but a connection could not be established."""

    pass


class PrinterURIError(ServerError, ValueError):
    """A printer URI could not be parsed or uses an unsupported scheme."""

    pass
