"""Adapters connecting the core to sockets and stdlib logging."""
