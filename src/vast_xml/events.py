"""VAST codec event name constants."""

from enum import Enum


class VastEvents(str, Enum):
    """Event type constants for structured logging."""

    # Parser events
    PARSE_STARTED = "vast.parse.started"
    PARSE_COMPLETED = "vast.parse.completed"
    PARSE_FAILED = "vast.parse.failed"

    # Extension codec events
    EXTENSION_ENCODED = "vast.extension.encoded"
    EXTENSION_DECODED = "vast.extension.decoded"
    EXTENSION_SKIPPED = "vast.extension.skipped"


__all__ = ["VastEvents"]
