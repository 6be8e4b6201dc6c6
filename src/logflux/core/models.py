"""Core domain models for LogFlux entries."""

import json
import time
import uuid
from enum import IntEnum, StrEnum
from typing import Any

from logflux.core.exceptions import ConstructionError

PAYLOAD_TYPE_LABEL = "payload_type"
DEFAULT_SOURCE = "sdk"


class EntryType(IntEnum):
    """Kind of record carried by an entry (wire codes 1-5)."""

    LOG = 1
    METRIC = 2
    TRACE = 3
    EVENT = 4
    AUDIT = 5


class Level(IntEnum):
    """Syslog severity levels (0 is most severe)."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


class PayloadType(StrEnum):
    """Reserved values of the ``payload_type`` label."""

    SYSTEMD_JOURNAL = "systemd_journal"
    SYSLOG = "syslog"
    METRICS = "metrics"
    APPLICATION = "application"
    CONTAINER = "container"
    GENERIC = "generic"
    GENERIC_JSON = "generic_json"


def _known_or_raw(enum_cls: type[IntEnum], value: int) -> IntEnum | int:
    """Return the enum member for value, or the raw int if it is not a known code."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _plain(value: int) -> int:
    return int(value) if isinstance(value, int) else value


def _new_id() -> str:
    try:
        return str(uuid.uuid4())
    except (OSError, NotImplementedError) as exc:
        raise ConstructionError(f"Failed to generate entry id: {exc}") from exc


class Entry:
    """A structured record destined for the LogFlux agent.

    Entries are built fluently: every ``with_*`` method mutates the entry in
    place and returns it, so calls can be chained. ``id`` and ``message`` are
    fixed at construction.

    Integer fields are permissive. ``with_type`` and ``with_level`` accept any
    int; unknown codes are sent to the agent as-is and the accessors return
    the raw int instead of an enum member.

    Factories set the ``payload_type`` label. Overwriting it afterwards with
    ``with_label`` or ``with_payload_type`` is allowed but the agent will then
    classify the payload by the new value.

    Example:
        ```python
        entry = (
            Entry("User login attempt")
            .with_source("auth-service")
            .with_level(Level.NOTICE)
            .with_label("user_id", "12345")
        )
        ```
    """

    __slots__ = (
        "_entry_type",
        "_id",
        "_labels",
        "_level",
        "_message",
        "_source",
        "_timestamp",
    )

    def __init__(self, message: str) -> None:
        self._id = _new_id()
        self._message = message
        self._source = DEFAULT_SOURCE
        self._entry_type: int = EntryType.LOG
        self._level: int = Level.INFO
        self._timestamp = int(time.time())
        self._labels: dict[str, str] = {}

    def __repr__(self) -> str:
        return (
            f"Entry(id={self._id!r}, message={self._message!r}, "
            f"source={self._source!r}, entry_type={self._entry_type!r}, "
            f"level={self._level!r}, timestamp={self._timestamp!r}, "
            f"labels={self._labels!r})"
        )

    # Builder

    def with_source(self, source: str) -> "Entry":
        """Set the producing application's tag."""
        self._source = source
        return self

    def with_type(self, entry_type: EntryType | int) -> "Entry":
        """Set the entry type. Unknown codes pass through unvalidated."""
        self._entry_type = entry_type
        return self

    def with_level(self, level: Level | int) -> "Entry":
        """Set the syslog severity. Unknown codes pass through unvalidated."""
        self._level = level
        return self

    def with_timestamp(self, timestamp: int) -> "Entry":
        """Override the capture time (unix seconds)."""
        self._timestamp = timestamp
        return self

    def with_label(self, key: str, value: str) -> "Entry":
        """Set a label. An existing value for key is replaced."""
        self._labels[key] = value
        return self

    def with_labels(self, labels: dict[str, str]) -> "Entry":
        """Set several labels at once."""
        for key, value in labels.items():
            self.with_label(key, value)
        return self

    def with_payload_type(self, payload_type: PayloadType | str) -> "Entry":
        """Set the reserved ``payload_type`` label."""
        return self.with_label(PAYLOAD_TYPE_LABEL, str(payload_type))

    # Factories

    @classmethod
    def generic(cls, message: str) -> "Entry":
        """Entry typed ``generic_json`` if message is valid JSON, else ``generic``."""
        from logflux.core.entries import generic_entry

        return generic_entry(message)

    @classmethod
    def syslog(cls, message: str) -> "Entry":
        from logflux.core.entries import syslog_entry

        return syslog_entry(message)

    @classmethod
    def systemd_journal(cls, message: str) -> "Entry":
        from logflux.core.entries import systemd_journal_entry

        return systemd_journal_entry(message)

    @classmethod
    def metric(cls, message: str) -> "Entry":
        from logflux.core.entries import metric_entry

        return metric_entry(message)

    @classmethod
    def application(cls, message: str) -> "Entry":
        from logflux.core.entries import application_entry

        return application_entry(message)

    @classmethod
    def container(cls, message: str) -> "Entry":
        from logflux.core.entries import container_entry

        return container_entry(message)

    # Accessors

    @property
    def id(self) -> str:
        return self._id

    @property
    def message(self) -> str:
        return self._message

    @property
    def source(self) -> str:
        return self._source

    @property
    def entry_type(self) -> EntryType | int:
        return _known_or_raw(EntryType, self._entry_type)

    @property
    def level(self) -> Level | int:
        return _known_or_raw(Level, self._level)

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def labels(self) -> dict[str, str]:
        """A copy of the labels; mutating it does not affect the entry."""
        return dict(self._labels)

    @property
    def payload_type(self) -> str | None:
        return self._labels.get(PAYLOAD_TYPE_LABEL)

    # Serialization

    def to_record(self) -> dict[str, Any]:
        """Return the wire record as an ordered dict of plain JSON types.

        Returns:
            Dict with keys id, message, source, entry_type, level,
            timestamp and labels. Enum members are lowered to int.
        """
        return {
            "id": self._id,
            "message": self._message,
            "source": self._source,
            "entry_type": _plain(self._entry_type),
            "level": _plain(self._level),
            "timestamp": self._timestamp,
            "labels": dict(self._labels),
        }

    def to_json(self) -> str:
        """Return the JSON text of ``to_record()`` without a trailing newline.

        Raises:
            TypeError: A field holds a value the JSON encoder cannot represent.
            ValueError: A field holds a non-finite float.
        """
        return json.dumps(self.to_record(), allow_nan=False)
