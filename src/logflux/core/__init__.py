"""Core domain: entries, encoding, targets and errors."""
