"""Tests for chat message formatting."""

from planka_relay.core.details import EventDetails
from planka_relay.core.formatter import (
    COMMENT_TRUNCATE_AT,
    NEUTRAL,
    format_message,
    summarize,
    truncate,
)


def details(**kwargs):
    base = dict(
        card_title="Fix login",
        board_name="Product",
        list_name="Todo",
        username="Ann",
    )
    base.update(kwargs)
    return EventDetails(**base)


class TestFormatMessage:
    def test_card_create(self):
        msg = format_message("cardCreate", details())
        assert "Fix login" in msg.text
        assert "Ann" in msg.text
        assert "Product / Todo" in msg.text
        assert msg.color != NEUTRAL

    def test_unknown_event_is_generic(self):
        msg = format_message("boardCreate", details())
        assert msg.color == NEUTRAL
        assert "boardCreate" in msg.text
        assert "Fix login" in msg.text

    def test_user_mentions_appended(self):
        msg = format_message(
            "cardCreate", details(notification_targets=("&ops", "@ann", "#qa", "@bob"))
        )
        assert msg.text.endswith(" @ann @bob")
        assert "&ops" not in msg.text
        assert "#qa" not in msg.text

    def test_no_mentions_no_suffix(self):
        msg = format_message("cardCreate", details(notification_targets=("&ops",)))
        assert not msg.text.endswith(" ")
        assert "@" not in msg.text

    def test_comment_truncated(self):
        long_comment = "x" * 250
        msg = format_message(
            "commentCreate", details(comment_text=long_comment, is_comment=True)
        )
        assert "x" * COMMENT_TRUNCATE_AT + "..." in msg.text
        assert "x" * (COMMENT_TRUNCATE_AT + 1) not in msg.text

    def test_short_comment_untouched(self):
        msg = format_message("commentCreate", details(comment_text="Looks good"))
        assert "Looks good" in msg.text
        assert "..." not in msg.text

    def test_update_with_few_changes(self):
        msg = format_message(
            "cardUpdate", details(change_summaries=("description updated", "marked completed"))
        )
        assert "description updated, marked completed" in msg.text
        assert "more" not in msg.text

    def test_update_with_many_changes(self):
        changes = ("a", "b", "c", "d", "e")
        msg = format_message("cardUpdate", details(change_summaries=changes))
        assert "a, b, c (+2 more)" in msg.text
        assert ", d" not in msg.text

    def test_update_without_changes_falls_back(self):
        msg = format_message("cardUpdate", details())
        assert "updated by Ann" in msg.text

    def test_task_update_completed(self):
        msg = format_message("taskUpdate", details(task_name="Write tests", task_completed=True))
        assert "completed task *Write tests*" in msg.text

    def test_task_update_not_completed(self):
        msg = format_message("taskUpdate", details(task_name="Write tests"))
        assert "updated task *Write tests*" in msg.text

    def test_task_delete(self):
        msg = format_message("taskDelete", details(task_name="Old task"))
        assert "removed task *Old task*" in msg.text


class TestHelpers:
    def test_truncate_boundary(self):
        assert truncate("a" * COMMENT_TRUNCATE_AT) == "a" * COMMENT_TRUNCATE_AT

    def test_summarize_exactly_three(self):
        assert summarize(("a", "b", "c")) == "a, b, c"

    def test_summarize_four(self):
        assert summarize(("a", "b", "c", "d")) == "a, b, c (+1 more)"
