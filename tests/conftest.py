"""Shared test fixtures for all test modules."""

import json
import socket
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from logflux.core.targets import TcpTarget, Target, UnixTarget

# Timeout for fake agent sockets so a broken test fails instead of hanging
AGENT_TIMEOUT = 5.0


@dataclass
class FakeAgent:
    """A listening socket standing in for the LogFlux agent.

    The listen backlog lets a client connect before accept() is called, so
    tests can drive the client and the agent from the same thread.
    """

    listener: socket.socket
    target: Target

    def accept(self) -> socket.socket:
        """Accept the next pending client connection."""
        conn, _ = self.listener.accept()
        conn.settimeout(AGENT_TIMEOUT)
        return conn

    def read_raw(self) -> bytes:
        """Accept one connection and read it until the client closes."""
        conn = self.accept()
        chunks = []
        with conn:
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)

    def read_records(self) -> list[dict[str, Any]]:
        """Accept one connection and decode every NDJSON line it sent."""
        raw = self.read_raw()
        return [json.loads(line) for line in raw.decode("utf-8").splitlines()]


@pytest.fixture
def socket_dir() -> Iterator[Path]:
    """Provide a short temporary directory for Unix socket files.

    AF_UNIX paths are limited to ~100 bytes, which pytest's tmp_path can exceed.
    """
    with tempfile.TemporaryDirectory(prefix="lf-") as path:
        yield Path(path)


@pytest.fixture
def missing_socket_path(socket_dir: Path) -> str:
    """Path of a Unix socket nobody listens on."""
    return str(socket_dir / "nonexistent.sock")


@pytest.fixture
def unix_agent(socket_dir: Path) -> Iterator[FakeAgent]:
    """Fake agent listening on a Unix-domain socket."""
    path = str(socket_dir / "agent.sock")
    listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    listener.bind(path)
    listener.listen(8)
    listener.settimeout(AGENT_TIMEOUT)
    with listener:
        yield FakeAgent(listener, UnixTarget(path))


@pytest.fixture
def tcp_agent() -> Iterator[FakeAgent]:
    """Fake agent listening on an ephemeral TCP port on localhost."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(8)
    listener.settimeout(AGENT_TIMEOUT)
    host, port = listener.getsockname()
    with listener:
        yield FakeAgent(listener, TcpTarget(host, port))


@pytest.fixture
def unused_tcp_port() -> int:
    """A localhost TCP port with no listener."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
