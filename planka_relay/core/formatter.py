"""Render EventDetails into chat message text and color."""

from __future__ import annotations

from dataclasses import dataclass

from planka_relay.core import events
from planka_relay.core.details import EventDetails
from planka_relay.core.targets import is_user_target

COMMENT_TRUNCATE_AT = 200
MAX_CHANGES_SHOWN = 3

GREEN = "#36a64f"
BLUE = "#439fe0"
AMBER = "#daa038"
RED = "#d00000"
PURPLE = "#7c5cbf"
NEUTRAL = "#808080"


@dataclass(frozen=True)
class FormattedMessage:
    color: str
    text: str


def truncate(text: str, limit: int = COMMENT_TRUNCATE_AT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def summarize(changes: tuple[str, ...] | list[str]) -> str:
    shown = ", ".join(changes[:MAX_CHANGES_SHOWN])
    extra = len(changes) - MAX_CHANGES_SHOWN
    if extra > 0:
        shown += f" (+{extra} more)"
    return shown


def _where(d: EventDetails) -> str:
    return f"{d.board_name} / {d.list_name}"


def _card_update(d: EventDetails) -> str:
    if d.change_summaries:
        return f"✏️ *{d.card_title}* updated by {d.username}: {summarize(d.change_summaries)}"
    return f"✏️ *{d.card_title}* updated by {d.username} in {_where(d)}"


def _comment(verb: str):
    def render(d: EventDetails) -> str:
        comment = truncate(d.comment_text or "N/A")
        return f"💬 {d.username} {verb} on *{d.card_title}*:\n>{comment}"
    return render


def _task_update(d: EventDetails) -> str:
    task = d.task_name or "N/A"
    if d.task_completed:
        return f"✅ {d.username} completed task *{task}* on *{d.card_title}*"
    return f"☑️ {d.username} updated task *{task}* on *{d.card_title}*"


_TEMPLATES = {
    events.CARD_CREATE: (
        GREEN,
        lambda d: f"🆕 *{d.card_title}* created by {d.username} in {_where(d)}",
    ),
    events.CARD_UPDATE: (BLUE, _card_update),
    events.CARD_EDIT: (
        BLUE,
        lambda d: f"✏️ *{d.card_title}* edited by {d.username} in {_where(d)}",
    ),
    events.CARD_MOVE: (
        PURPLE,
        lambda d: f"➡️ *{d.card_title}* moved to {d.list_name} by {d.username} ({d.board_name})",
    ),
    events.CARD_ARCHIVE: (
        NEUTRAL,
        lambda d: f"📦 *{d.card_title}* archived by {d.username} in {_where(d)}",
    ),
    events.CARD_RESTORE: (
        GREEN,
        lambda d: f"♻️ *{d.card_title}* restored by {d.username} in {_where(d)}",
    ),
    events.CARD_DELETE: (
        RED,
        lambda d: f"🗑️ *{d.card_title}* deleted by {d.username} in {_where(d)}",
    ),
    events.COMMENT_CREATE: (AMBER, _comment("commented")),
    events.COMMENT_UPDATE: (AMBER, _comment("edited a comment")),
    events.TASK_CREATE: (
        BLUE,
        lambda d: f"☑️ {d.username} added task *{d.task_name or 'N/A'}* to *{d.card_title}*",
    ),
    events.TASK_UPDATE: (GREEN, _task_update),
    events.TASK_DELETE: (
        RED,
        lambda d: f"🗑️ {d.username} removed task *{d.task_name or 'N/A'}* from *{d.card_title}*",
    ),
}


def format_message(event: str, details: EventDetails) -> FormattedMessage:
    """Pick the template for ``event`` and append any @user mentions."""
    template = _TEMPLATES.get(event)
    if template is None:
        color = NEUTRAL
        text = f"🔔 {event or 'event'} on *{details.card_title}* by {details.username}"
    else:
        color, render = template
        text = render(details)

    mentions = [t for t in details.notification_targets if is_user_target(t)]
    if mentions:
        text = f"{text} {' '.join(mentions)}"

    return FormattedMessage(color=color, text=text)
