"""Factory functions for creating pre-configured Entry objects."""

import json

from logflux.core.models import Entry, EntryType, PayloadType


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def is_valid_json(text: str) -> bool:
    """Check whether text is a well-formed JSON document.

    Any JSON value qualifies (object, array, string, number, boolean, null).
    This is a grammar check only, not a schema check.

    Args:
        text: Candidate JSON text. Surrounding whitespace is ignored.

    Returns:
        False for empty or whitespace-only text, for text that fails to
        parse, and for the non-standard NaN/Infinity constants.
    """
    stripped = text.strip(" \t\n\r")
    if not stripped:
        return False
    try:
        json.loads(stripped, parse_constant=_reject_constant)
    except ValueError:
        return False
    return True


def generic_entry(message: str) -> Entry:
    """Create an entry whose payload type is inferred from the message.

    Args:
        message: The entry message

    Returns:
        Entry with payload_type ``generic_json`` if message is valid JSON,
        ``generic`` otherwise
    """
    payload_type = (
        PayloadType.GENERIC_JSON if is_valid_json(message) else PayloadType.GENERIC
    )
    return Entry(message).with_payload_type(payload_type)


def syslog_entry(message: str) -> Entry:
    """Create an entry with payload_type ``syslog``."""
    return Entry(message).with_payload_type(PayloadType.SYSLOG)


def systemd_journal_entry(message: str) -> Entry:
    """Create an entry with payload_type ``systemd_journal``."""
    return Entry(message).with_payload_type(PayloadType.SYSTEMD_JOURNAL)


def metric_entry(message: str) -> Entry:
    """Create a metric entry.

    Args:
        message: The metric payload, usually a JSON document

    Returns:
        Entry with entry type METRIC and payload_type ``metrics``
    """
    return (
        Entry(message).with_type(EntryType.METRIC).with_payload_type(PayloadType.METRICS)
    )


def application_entry(message: str) -> Entry:
    """Create an entry with payload_type ``application``."""
    return Entry(message).with_payload_type(PayloadType.APPLICATION)


def container_entry(message: str) -> Entry:
    """Create an entry with payload_type ``container``."""
    return Entry(message).with_payload_type(PayloadType.CONTAINER)
