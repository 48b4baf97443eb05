"""Normalize loosely-structured Planka webhook payloads into EventDetails."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from urllib.parse import parse_qs

from planka_relay.core.events import CARD_UPDATE, EventKind
from planka_relay.core.targets import extract_targets

NA = "N/A"

_APPRISE_USER_RE = re.compile(r"by\s+([^\n]+)")


@dataclass(frozen=True)
class EventDetails:
    card_title: str = NA
    board_name: str = NA
    list_name: str = NA
    username: str = NA
    notification_targets: tuple[str, ...] = ()
    comment_text: str | None = None
    is_comment: bool = False
    task_name: str | None = None
    task_completed: bool = False
    is_task: bool = False
    description: str | None = None
    change_summaries: tuple[str, ...] = ()
    event: str = ""
    kind: EventKind = EventKind.CARD

    @classmethod
    def empty(cls) -> EventDetails:
        return cls()


# ---------------------------------------------------------------------------
# Absence-tolerant access
# ---------------------------------------------------------------------------

def dig(obj: Any, *path: str | int, default: Any = None) -> Any:
    """Walk ``path`` through nested dicts/lists, returning ``default`` on any miss.

    A ``None`` leaf also yields ``default``.
    """
    current = obj
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return default
            current = current[key]
        else:
            if not isinstance(current, dict):
                return default
            current = current.get(key)
        if current is None:
            return default
    return current


def _text(value: Any, default: str = NA) -> str:
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _find_by_id(entries: Any, entry_id: Any) -> dict[str, Any] | None:
    if entry_id is None or not isinstance(entries, list):
        return None
    for entry in entries:
        if isinstance(entry, dict) and entry.get("id") == entry_id:
            return entry
    return None


# ---------------------------------------------------------------------------
# Change summaries
# ---------------------------------------------------------------------------

def format_due_date(value: Any) -> str:
    if value is None or value == "":
        return "none"
    if not isinstance(value, str):
        return str(value)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%d %H:%M")


def _list_name(lists: Any, list_id: Any) -> str | None:
    entry = _find_by_id(lists, list_id)
    if entry is None:
        return None
    name = entry.get("name")
    return name if isinstance(name, str) and name else None


def summarize_changes(payload: dict[str, Any], current_list_name: str) -> list[str]:
    """Describe what changed between ``prevData.item`` and ``data.item``.

    Entries come in a fixed order: title, description, due date, list,
    completion. Fields equal on both sides contribute nothing.
    """
    old = dig(payload, "prevData", "item")
    new = dig(payload, "data", "item")
    if not isinstance(old, dict) or not isinstance(new, dict):
        return []

    changes: list[str] = []

    if old.get("name") != new.get("name"):
        changes.append(
            f'title: "{_text(old.get("name"), "")}" → "{_text(new.get("name"), "")}"'
        )

    if old.get("description") != new.get("description"):
        changes.append("description updated")

    if old.get("dueDate") != new.get("dueDate"):
        changes.append(
            f"due date: {format_due_date(old.get('dueDate'))} → {format_due_date(new.get('dueDate'))}"
        )

    old_list_id = old.get("listId")
    new_list_id = new.get("listId")
    if old_list_id != new_list_id:
        current_lists = dig(payload, "data", "included", "lists")
        old_name = (
            _list_name(dig(payload, "prevData", "included", "lists"), old_list_id)
            or _list_name(current_lists, old_list_id)
            or _text(old_list_id, "none")
        )
        new_name = _list_name(current_lists, new_list_id)
        if new_name is None:
            new_name = current_list_name if current_list_name != NA else _text(new_list_id, "none")
        changes.append(f"moved: {old_name} → {new_name}")

    if old.get("isCompleted") != new.get("isCompleted"):
        changes.append("marked completed" if new.get("isCompleted") is True else "marked incomplete")

    return changes


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def parse_payload(raw_payload: bytes | str) -> dict[str, Any] | None:
    """Decode a JSON object body, falling back to a urlencoded form."""
    try:
        payload = json.loads(raw_payload)
    except (RecursionError, TypeError):
        return None
    except ValueError:
        return _parse_form(raw_payload)
    return payload if isinstance(payload, dict) else None


def _parse_form(raw_payload: bytes | str) -> dict[str, Any] | None:
    # Apprise may post application/x-www-form-urlencoded bodies
    try:
        text = raw_payload.decode("utf-8") if isinstance(raw_payload, bytes) else raw_payload
    except UnicodeDecodeError:
        return None
    fields = parse_qs(text, strict_parsing=False)
    if not fields:
        return None
    return {key: values[0] for key, values in fields.items()}


def extract_details(raw_payload: bytes | str) -> EventDetails:
    """Build an EventDetails record from a raw webhook body.

    Never raises: unparseable input yields ``EventDetails.empty()``.
    """
    payload = parse_payload(raw_payload)
    if payload is None:
        return EventDetails.empty()

    item = dig(payload, "data", "item")
    if not isinstance(item, dict):
        return _extract_apprise(payload)

    event = _text(payload.get("event"), "")
    kind = EventKind.from_event(event)
    included = dig(payload, "data", "included", default={})

    username = _text(dig(payload, "user", "name"), "") or _text(dig(payload, "user", "username"))
    board_name = _text(dig(included, "boards", 0, "name"))
    list_name = _text(dig(included, "lists", 0, "name"))

    comment_text: str | None = None
    task_name: str | None = None
    task_completed = False

    if kind is EventKind.CARD:
        card_title = _text(item.get("name"))
        description = _optional_text(item.get("description"))
    else:
        card_title = _text(dig(included, "cards", 0, "name"))
        description = _optional_text(dig(included, "cards", 0, "description"))
        if kind is EventKind.COMMENT:
            comment_text = _text(item.get("text"), "") or _text(item.get("content"))
        else:
            task_name = _optional_text(item.get("name"))
            task_completed = item.get("isCompleted") is True

    change_summaries: tuple[str, ...] = ()
    if event == CARD_UPDATE:
        change_summaries = tuple(summarize_changes(payload, list_name))

    return EventDetails(
        card_title=card_title,
        board_name=board_name,
        list_name=list_name,
        username=username,
        notification_targets=tuple(extract_targets(description)),
        comment_text=comment_text,
        is_comment=kind is EventKind.COMMENT,
        task_name=task_name,
        task_completed=task_completed,
        is_task=kind is EventKind.TASK,
        description=description,
        change_summaries=change_summaries,
        event=event,
        kind=kind,
    )


def _extract_apprise(payload: dict[str, Any]) -> EventDetails:
    """Apprise-style payloads carry only a title and a free-text body."""
    title = payload.get("title")
    if not isinstance(title, str) or not title:
        return EventDetails.empty()

    username = NA
    body = payload.get("body")
    if isinstance(body, str):
        match = _APPRISE_USER_RE.search(body)
        if match:
            username = match.group(1).strip() or NA

    return EventDetails(card_title=title, username=username)
