"""Socket client for the LogFlux agent.

Entries are written as newline-delimited JSON over a Unix-domain or TCP
stream socket. The protocol is fire-and-forget: nothing is read back from
the agent.

A Client is not thread-safe. Callers sharing one client between threads must
serialize connect(), send() and close() themselves.
"""

import contextlib
import logging
import socket
from collections.abc import Mapping
from types import TracebackType

from logflux.core.encoding.ndjson import encode_entry
from logflux.core.exceptions import (
    AgentConnectionError,
    NotConnectedError,
    TransportError,
)
from logflux.core.models import Entry
from logflux.core.targets import (
    TcpTarget,
    Target,
    UnixTarget,
    parse_target,
    target_from_env,
)

logger = logging.getLogger(__name__)


def _open_unix(path: str) -> socket.socket:
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.connect(path)
    except BaseException:
        sock.close()
        raise
    return sock


def _open_tcp(host: str, port: int) -> socket.socket:
    # create_connection closes any socket it opened before re-raising
    return socket.create_connection((host, port))


class Client:
    """Client that sends entries to a LogFlux agent.

    The client owns at most one socket. It starts unconnected; connect()
    opens the socket, close() or a failed send() releases it.

    Example:
        ```python
        from logflux import Client, Entry

        with Client.unix("/tmp/logflux-agent.sock") as client:
            client.send(Entry("Hello from Python"))
        ```
    """

    def __init__(self, target: Target) -> None:
        """Initialize the client for a target. No I/O is performed.

        Args:
            target: UnixTarget or TcpTarget to connect to.
        """
        self._target = target
        self._sock: socket.socket | None = None
        self._connected = False

    @classmethod
    def unix(cls, path: str) -> "Client":
        """Create a client for a Unix-domain socket path."""
        return cls(UnixTarget(path))

    @classmethod
    def tcp(cls, host: str, port: int) -> "Client":
        """Create a client for a TCP host and port."""
        return cls(TcpTarget(host, port))

    @classmethod
    def from_url(cls, url: str) -> "Client":
        """Create a client from a ``unix://`` or ``tcp://`` URL."""
        return cls(parse_target(url))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Client":
        """Create a client from ``LOGFLUX_AGENT_URL`` (or the default socket)."""
        return cls(target_from_env(environ))

    def __repr__(self) -> str:
        state = "connected" if self.is_connected() else "unconnected"
        return f"Client({self._target}, {state})"

    @property
    def target(self) -> Target:
        return self._target

    @property
    def connected(self) -> bool:
        return self.is_connected()

    def is_connected(self) -> bool:
        """Return True if the client holds a usable socket."""
        return self._connected and self._sock is not None

    def connect(self) -> None:
        """Open the connection to the agent.

        Does nothing if the client is already connected.

        Raises:
            AgentConnectionError: The socket could not be created or connected.
                The underlying OSError is available as ``__cause__``.
        """
        if self.is_connected():
            return

        target = self._target
        try:
            if isinstance(target, UnixTarget):
                sock = _open_unix(target.path)
            else:
                sock = _open_tcp(target.host, target.port)
        except OSError as exc:
            raise AgentConnectionError(
                f"Failed to connect to LogFlux agent at {self._target}: {exc}"
            ) from exc

        self._sock = sock
        self._connected = True
        logger.debug("Connected to LogFlux agent at %s", self._target)

    def send(self, entry: Entry) -> None:
        """Send one entry as a newline-terminated JSON object.

        The whole line is written before returning.

        Args:
            entry: The entry to send.

        Raises:
            NotConnectedError: connect() has not succeeded yet.
            SerializationError: The entry could not be encoded. The connection
                is left as it was.
            TransportError: The write failed. The connection is closed and
                connect() must be called again before the next send.
        """
        if not self.is_connected():
            raise NotConnectedError()

        data = encode_entry(entry)

        try:
            self._sock.sendall(data)
        except OSError as exc:
            self._release()
            raise TransportError(f"Failed to send log entry: {exc}") from exc

    def close(self) -> None:
        """Close the connection. Safe to call any number of times; never raises."""
        if self._sock is None and not self._connected:
            return
        logger.debug("Closed connection to LogFlux agent at %s", self._target)
        self._release()

    def _release(self) -> None:
        sock, self._sock = self._sock, None
        self._connected = False
        if sock is not None:
            with contextlib.suppress(OSError):
                sock.close()

    def __enter__(self) -> "Client":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        # __init__ may not have run if construction failed
        if getattr(self, "_sock", None) is not None:
            self._release()
