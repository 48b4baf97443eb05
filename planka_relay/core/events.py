"""Planka event identifiers and their classification."""

from __future__ import annotations

from enum import Enum


class EventKind(str, Enum):
    CARD = "card"
    COMMENT = "comment"
    TASK = "task"

    @classmethod
    def from_event(cls, event: str | None) -> EventKind:
        """Classify a raw event string such as ``commentCreate``."""
        lowered = (event or "").lower()
        if "comment" in lowered:
            return cls.COMMENT
        if "task" in lowered:
            return cls.TASK
        return cls.CARD


CARD_CREATE = "cardCreate"
CARD_UPDATE = "cardUpdate"
CARD_EDIT = "cardEdit"
CARD_MOVE = "cardMove"
CARD_ARCHIVE = "cardArchive"
CARD_RESTORE = "cardRestore"
CARD_DELETE = "cardDelete"
COMMENT_CREATE = "commentCreate"
COMMENT_UPDATE = "commentUpdate"
TASK_CREATE = "taskCreate"
TASK_UPDATE = "taskUpdate"
TASK_DELETE = "taskDelete"

# Events that may trigger a chat notification
NOTIFY_EVENTS: frozenset[str] = frozenset({
    CARD_CREATE,
    CARD_UPDATE,
    CARD_EDIT,
    CARD_MOVE,
    CARD_ARCHIVE,
    CARD_RESTORE,
    COMMENT_CREATE,
    COMMENT_UPDATE,
    TASK_CREATE,
    TASK_UPDATE,
    TASK_DELETE,
})
