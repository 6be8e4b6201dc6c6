"""Exception hierarchy for the LogFlux client.

Every error raised by this package derives from LogFluxError. Errors that
wrap a lower-level failure (socket, JSON encoder) keep it as ``__cause__``.
"""


class LogFluxError(Exception):
    """Base class for all LogFlux client errors."""


class ConstructionError(LogFluxError):
    """An entry could not be constructed (identifier generation failed)."""


class ConfigurationError(LogFluxError, ValueError):
    """A connection target could not be parsed."""


class AgentConnectionError(LogFluxError):
    """Socket creation or the connect handshake to the agent failed."""


class NotConnectedError(LogFluxError):
    """send() was called on a client that is not connected."""

    def __init__(self, message: str = "Client not connected. Call connect() first.") -> None:
        super().__init__(message)


class SerializationError(LogFluxError):
    """An entry could not be encoded to JSON."""


class TransportError(LogFluxError):
    """Writing to the agent socket failed; the connection has been closed."""
