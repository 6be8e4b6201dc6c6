"""Transport adapters implementing EntrySinkPort."""

from logflux.adapters.transport.socket_client import Client

__all__ = ["Client"]
