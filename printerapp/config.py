"""Client configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default directory for the system-wide server socket
DEFAULT_SOCKET_DIR = "/var/run"

# Default IPP port for network endpoints
DEFAULT_IPP_PORT = 631


class ClientSettings(BaseSettings):
    """Settings for connecting to a printer application server.

    Values come from ``PRINTERAPP_*`` environment variables, except
    ``tmpdir`` and ``snap_common`` which follow the standard ``TMPDIR`` and
    ``SNAP_COMMON`` variables.

    Attributes:
        connect_timeout: Seconds to wait for a single connection attempt.
        poll_interval: Seconds between checks for the socket of a freshly
            started server.
        startup_timeout: Seconds to wait for a freshly started server to create
            its socket (None = wait forever).
        socket_dir: Directory holding the socket of the system-wide server.
        ipp_port: Port used when the endpoint is a network name.
        tmpdir: Override for the per-user socket directory.
        snap_common: Socket directory of a system-wide server inside a snap.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRINTERAPP_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    connect_timeout: float = 30.0
    poll_interval: float = 0.25
    startup_timeout: float | None = 60.0
    socket_dir: str = DEFAULT_SOCKET_DIR
    ipp_port: int = DEFAULT_IPP_PORT

    # Standard environment variables, not prefixed
    tmpdir: str | None = Field(default=None, validation_alias="TMPDIR")
    snap_common: str | None = Field(default=None, validation_alias="SNAP_COMMON")


@lru_cache
def get_settings() -> ClientSettings:
    """Get cached client settings.

    Returns:
        ClientSettings: Settings loaded from the environment.
    """
    return ClientSettings()
