"""NDJSON encoder for entries."""

from collections.abc import Iterable

from logflux.core.exceptions import SerializationError
from logflux.core.models import Entry


def _entry_json(entry: Entry) -> str:
    try:
        return entry.to_json()
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to encode entry {entry.id}: {exc}") from exc


def encode_entry(entry: Entry) -> bytes:
    """Encode a single entry as one newline-terminated JSON line.

    Args:
        entry: The entry to encode.

    Returns:
        UTF-8 bytes of the JSON object followed by ``\\n``.

    Raises:
        SerializationError: The entry holds a value JSON cannot represent.
    """
    return (_entry_json(entry) + "\n").encode("utf-8")


def encode_entries(entries: Iterable[Entry]) -> str:
    """Encode entries to newline-delimited JSON.

    Args:
        entries: An iterable of Entry objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no entries.
    """
    lines = [_entry_json(entry) for entry in entries]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
