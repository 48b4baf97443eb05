"""Core relay logic: target extraction, event details, formatting, dispatch."""

from .details import EventDetails, extract_details
from .dispatcher import Dispatcher, RelayOutcome, pick_target, should_notify
from .events import EventKind
from .formatter import FormattedMessage, format_message
from .targets import extract_targets

__all__ = [
    "Dispatcher",
    "EventDetails",
    "EventKind",
    "FormattedMessage",
    "RelayOutcome",
    "extract_details",
    "extract_targets",
    "format_message",
    "pick_target",
    "should_notify",
]
