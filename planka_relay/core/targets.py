"""Notification target extraction from free-text card descriptions.

A card description opts into notifications with lines such as::

    Notify &ops #team-alpha @jane

Only lines containing "notify" or "notification" (any case) are scanned.
Tokens are ``&channel``, ``#channel`` or ``@user``.
"""

from __future__ import annotations

import re
from typing import Any

_TRIGGER_KEYWORDS = ("notify", "notification")
_TARGET_RE = re.compile(r"[&#@][A-Za-z0-9_-]+")

CHANNEL_PREFIXES = ("&", "#")
USER_PREFIX = "@"


def extract_targets(text: Any) -> list[str]:
    """Return unique notification targets in the order they first appear.

    Deduplication is case-sensitive: ``&General`` and ``&general`` are
    different channels.
    """
    if not isinstance(text, str) or not text:
        return []

    targets: list[str] = []
    seen: set[str] = set()

    for line in text.split("\n"):
        lowered = line.strip().lower()
        if not any(keyword in lowered for keyword in _TRIGGER_KEYWORDS):
            continue
        for match in _TARGET_RE.findall(line):
            if match not in seen:
                seen.add(match)
                targets.append(match)

    return targets


def is_channel_target(target: str) -> bool:
    return target.startswith(CHANNEL_PREFIXES)


def is_user_target(target: str) -> bool:
    return target.startswith(USER_PREFIX)
