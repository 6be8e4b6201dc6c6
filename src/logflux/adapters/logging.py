"""Python logging handler adapter for LogFlux.

This adapter bridges Python's standard library logging module to an
EntrySinkPort, so application logs are forwarded to the LogFlux agent.
"""

import logging
import traceback

from logflux.core.models import DEFAULT_SOURCE, Entry, Level, PayloadType
from logflux.core.ports import EntrySinkPort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["module", "funcName", "lineno", "pathname"]

# Root of this package's logger hierarchy; the handler drops its records
_OWN_LOGGER = "logflux"


def _is_foreign_record(record: logging.LogRecord) -> bool:
    """Return False for records logged by this package itself."""
    name = record.name
    return not (name == _OWN_LOGGER or name.startswith(_OWN_LOGGER + "."))


def syslog_level(levelno: int) -> Level:
    """Map a Python logging level number to a syslog severity.

    Args:
        levelno: Numeric level of a LogRecord.

    Returns:
        CRITICAL for 50 and above, ERROR for 40-49, WARNING for 30-39,
        INFO for 20-29, DEBUG below 20.
    """
    if levelno >= logging.CRITICAL:
        return Level.CRITICAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARNING
    if levelno >= logging.INFO:
        return Level.INFO
    return Level.DEBUG


class LogFluxHandler(logging.Handler):
    """Logging handler that sends log records to a LogFlux agent.

    The sink (usually a Client) must already be connected. Send failures are
    reported through ``logging.Handler.handleError`` and never raised at the
    logging call site. Records from the ``logflux`` loggers themselves are
    dropped.

    Example:
        ```python
        from logflux import Client, LogFluxHandler

        client = Client.from_env()
        client.connect()
        logging.getLogger().addHandler(LogFluxHandler(client, source="billing"))
        ```
    """

    def __init__(
        self,
        sink: EntrySinkPort,
        source: str = DEFAULT_SOURCE,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with an entry sink.

        Args:
            sink: Destination implementing EntrySinkPort.
            source: Source tag set on every entry.
            include_attrs: List of LogRecord attributes to include as labels.
                Defaults to ["module", "funcName", "lineno", "pathname"].
            level: Minimum logging level handled.
        """
        super().__init__(level)
        self._sink = sink
        self._source = source
        self._include_attrs = include_attrs or _DEFAULT_INCLUDE_ATTRS
        self.addFilter(_is_foreign_record)

    def build_entry(self, record: logging.LogRecord) -> Entry:
        """Convert a log record into an Entry.

        Args:
            record: The log record to convert.

        Returns:
            Application entry labelled with the logger name, the configured
            record attributes, scalar extra fields and exception details.
        """
        # Map of attribute names to their values from LogRecord
        attr_mapping: dict[str, str | int] = {
            "module": record.module,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
        }

        entry = (
            Entry(record.getMessage())
            .with_source(self._source)
            .with_level(syslog_level(record.levelno))
            .with_timestamp(int(record.created))
        )

        for key in self._include_attrs:
            if key in attr_mapping:
                entry.with_label(key, str(attr_mapping[key]))

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                entry.with_label(key, str(value))

        # Reserved labels win over extra fields of the same name
        entry.with_payload_type(PayloadType.APPLICATION)
        entry.with_label("logger", record.name)

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                entry.with_label("exc_type", exc_type.__name__)
            if exc_value is not None:
                entry.with_label("exc_message", str(exc_value))
            if exc_tb is not None:
                entry.with_label(
                    "exc_traceback",
                    "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
                )

        return entry

    def emit(self, record: logging.LogRecord) -> None:
        """Send a log record to the agent.

        Args:
            record: The log record to emit.
        """
        try:
            self._sink.send(self.build_entry(record))
        except Exception:
            self.handleError(record)
