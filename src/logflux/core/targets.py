"""Connection targets for the LogFlux agent.

A client talks to exactly one target: a Unix-domain stream socket or a TCP
endpoint. Targets are plain values; building one performs no I/O.

Targets can be configured with a URL:
- ``unix:///run/logflux/agent.sock`` (or just ``/run/logflux/agent.sock``)
- ``tcp://127.0.0.1:5514``, ``tcp://[::1]:5514``
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlsplit

from logflux.core.exceptions import ConfigurationError

AGENT_URL_ENV = "LOGFLUX_AGENT_URL"
DEFAULT_SOCKET_PATH = "/tmp/logflux-agent.sock"


@dataclass(frozen=True)
class UnixTarget:
    """A Unix-domain stream socket path."""

    path: str

    def __str__(self) -> str:
        return f"unix://{self.path}"


@dataclass(frozen=True)
class TcpTarget:
    """A TCP host and port."""

    host: str
    port: int

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"tcp://{host}:{self.port}"


Target = UnixTarget | TcpTarget


def parse_target(url: str) -> Target:
    """Parse a target URL.

    Args:
        url: ``unix://`` or ``tcp://`` URL, or a bare filesystem path.

    Returns:
        UnixTarget or TcpTarget.

    Raises:
        ConfigurationError: Unknown scheme, empty socket path, or a TCP URL
            without a valid host and port.
    """
    if "://" not in url and not url.startswith("unix:"):
        if not url:
            raise ConfigurationError("Empty agent URL")
        return UnixTarget(url)

    parts = urlsplit(url)
    if parts.scheme == "unix":
        # unix:///path keeps the path; unix://relative has it in netloc
        path = parts.netloc + parts.path
        if not path:
            raise ConfigurationError(f"Missing socket path in {url!r}")
        return UnixTarget(path)

    if parts.scheme == "tcp":
        try:
            port = parts.port
        except ValueError as exc:
            raise ConfigurationError(f"Invalid port in {url!r}") from exc
        if not parts.hostname or port is None:
            raise ConfigurationError(f"TCP agent URL needs host and port: {url!r}")
        return TcpTarget(parts.hostname, port)

    raise ConfigurationError(f"Unsupported agent URL scheme {parts.scheme!r}")


def target_from_env(environ: Mapping[str, str] | None = None) -> Target:
    """Read the agent target from ``LOGFLUX_AGENT_URL``.

    Falls back to the Unix socket at DEFAULT_SOCKET_PATH when the variable is
    unset or empty.
    """
    env = os.environ if environ is None else environ
    url = env.get(AGENT_URL_ENV, "")
    if not url:
        return UnixTarget(DEFAULT_SOCKET_PATH)
    return parse_target(url)
