"""Locate the local printer application server, starting it if needed.

The server listens on a domain socket whose path depends on who runs it:
a per-user server in the temporary directory, or a system-wide server in the
snap or system socket directory. Clients try their own server first, then
the system-wide one, and can start a private server as a last resort.
"""

import logging
import os
import platform
import subprocess
import time

from printerapp.client import Connection, open_connection
from printerapp.config import ClientSettings
from printerapp.errors import (
    ServerConnectError,
    ServerNotRunningError,
    ServerStartError,
    ServerStartTimeoutError,
)

logger = logging.getLogger(__name__)

# Command-line arguments that run a private server for the current user
SERVER_ARGS = ("server", "-o", "private-server=true")


def _current_uid() -> int:
    """Get the current user ID (0 on platforms without user IDs)."""
    if platform.system() == "Windows":
        return 0
    return os.getuid()


def get_server_path(base_name: str, uid: int, settings: ClientSettings | None = None) -> str:
    """Get the socket path of the server for a user.

    Args:
        base_name: Printer application name.
        uid: User ID the server runs as (0 = system-wide server).
        settings: Client settings (read from the environment on each call if None).

    Returns:
        str: Domain socket path, or 'localhost' for a system-wide server on Windows.
    """
    settings = settings if settings is not None else ClientSettings()
    system = platform.system()

    if uid:
        tmpdir = settings.tmpdir or ("/private/tmp" if system == "Darwin" else "/tmp")
        path = f"{tmpdir}/{base_name}{uid}.sock"
    elif settings.snap_common:
        path = f"{settings.snap_common}/{base_name}.sock"
    elif system == "Windows":
        path = "localhost"
    else:
        path = f"{settings.socket_dir}/{base_name}.sock"

    logger.debug(f"Using domain socket '{path}'")
    return path


class ServerConnector:
    """Connects to the printer application server, starting it on demand."""

    def __init__(
        self,
        base_name: str,
        self_path: str,
        settings: ClientSettings | None = None,
    ):
        """Initialize the connector.

        Args:
            base_name: Printer application name (used for the socket name).
            self_path: Path to the printer application executable, run with
                ``server -o private-server=true`` to start a server.
            settings: Client settings (read from the environment on each use if None).
        """
        self.base_name = base_name
        self.self_path = self_path
        self.process: subprocess.Popen | None = None
        self._settings = settings

    @property
    def settings(self) -> ClientSettings:
        """Explicit settings, or a fresh read of the environment."""
        return self._settings if self._settings is not None else ClientSettings()

    def _try_connect(self, uid: int, settings: ClientSettings) -> Connection | None:
        """Try the server of one user, returning None if it isn't reachable."""
        path = get_server_path(self.base_name, uid, settings)
        try:
            return open_connection(path, settings.ipp_port, timeout=settings.connect_timeout)
        except OSError as e:
            logger.debug(f"No server at '{path}': {e}")
            return None

    def connect(self, auto_start: bool = True) -> Connection:
        """Connect to the server.

        Tries the current user's server, then (for regular users) the
        system-wide server. If neither is running and ``auto_start`` is set,
        starts a private server and waits for its socket.

        Args:
            auto_start: Start a server if none is running.

        Returns:
            Connection: Connection to the server.

        Raises:
            ServerNotRunningError: If no server is running and auto_start is False.
            ServerStartError: If the server could not be started.
            ServerStartTimeoutError: If the server never created its socket.
            ServerConnectError: If the started server could not be connected to.
        """
        uid = _current_uid()
        settings = self.settings

        connection = self._try_connect(uid, settings)
        if connection is None and uid:
            # Try the system-wide server
            connection = self._try_connect(0, settings)

        if connection is not None:
            return connection

        if not auto_start or platform.system() == "Windows":
            raise ServerNotRunningError(self.base_name, "Server is not running.")

        self.process = self.start_server()

        path = get_server_path(self.base_name, uid, settings)
        self.wait_for_server(path, self.process, settings)

        try:
            return open_connection(path, settings.ipp_port, timeout=settings.connect_timeout)
        except OSError as err:
            logger.error(f"{self.base_name}: Unable to connect to server: {err}")
            raise ServerConnectError(
                self.base_name, f"Unable to connect to server: {err}"
            ) from err

    def start_server(self) -> subprocess.Popen:
        """Start a private server in its own process group.

        Returns:
            subprocess.Popen: The server process.

        Raises:
            ServerStartError: If the executable could not be run.
        """
        args = [self.self_path, *SERVER_ARGS]

        try:
            process = subprocess.Popen(args, process_group=0)
        except OSError as err:
            logger.error(f"{self.base_name}: Unable to start server: {err}")
            raise ServerStartError(self.base_name, f"Unable to start server: {err}") from err

        logger.info(f"Started {self.base_name} server (pid {process.pid})")
        return process

    def wait_for_server(
        self,
        path: str,
        process: subprocess.Popen,
        settings: ClientSettings | None = None,
    ) -> None:
        """Wait for a freshly started server to create its socket.

        Args:
            path: Socket path to wait for.
            process: The server process.
            settings: Settings to use (the connector's settings if None).

        Raises:
            ServerStartError: If the server exits before creating the socket.
            ServerStartTimeoutError: If startup_timeout elapses first.
        """
        settings = settings if settings is not None else self.settings
        timeout = settings.startup_timeout
        deadline = None if timeout is None else time.monotonic() + timeout

        while not os.path.exists(path):
            if (status := process.poll()) is not None:
                logger.error(f"{self.base_name}: Server exited with status {status}")
                raise ServerStartError(
                    self.base_name, f"Server exited with status {status} during startup."
                )

            if deadline is not None and time.monotonic() >= deadline:
                logger.error(f"{self.base_name}: Server did not create '{path}' in {timeout}s")
                raise ServerStartTimeoutError(
                    self.base_name, f"Timed out after {timeout}s waiting for '{path}'."
                )

            time.sleep(settings.poll_interval)
