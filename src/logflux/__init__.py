"""logflux - Python client for the LogFlux agent.

Build structured entries and send them as newline-delimited JSON to a local
LogFlux agent over a Unix-domain or TCP socket.
"""

from logflux.adapters.logging import LogFluxHandler
from logflux.adapters.transport.socket_client import Client
from logflux.core.encoding.ndjson import encode_entries, encode_entry
from logflux.core.entries import (
    application_entry,
    container_entry,
    generic_entry,
    is_valid_json,
    metric_entry,
    syslog_entry,
    systemd_journal_entry,
)
from logflux.core.exceptions import (
    AgentConnectionError,
    ConfigurationError,
    ConstructionError,
    LogFluxError,
    NotConnectedError,
    SerializationError,
    TransportError,
)
from logflux.core.models import Entry, EntryType, Level, PayloadType
from logflux.core.ports import EntrySinkPort
from logflux.core.targets import TcpTarget, UnixTarget, parse_target, target_from_env

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "EntrySinkPort",
    "LogFluxHandler",
    # Targets
    "TcpTarget",
    "UnixTarget",
    "parse_target",
    "target_from_env",
    # Models
    "Entry",
    "EntryType",
    "Level",
    "PayloadType",
    # Factories
    "application_entry",
    "container_entry",
    "generic_entry",
    "is_valid_json",
    "metric_entry",
    "syslog_entry",
    "systemd_journal_entry",
    # Encoding
    "encode_entries",
    "encode_entry",
    # Errors
    "AgentConnectionError",
    "ConfigurationError",
    "ConstructionError",
    "LogFluxError",
    "NotConnectedError",
    "SerializationError",
    "TransportError",
]
