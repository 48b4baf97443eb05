"""Shared-secret token authentication for inbound webhooks."""

from __future__ import annotations

import hmac
from typing import Mapping

TOKEN_HEADER = "X-Webhook-Token"
TOKEN_QUERY_PARAM = "token"


def extract_token(headers: Mapping[str, str], query: Mapping[str, str]) -> str:
    """Find the caller's token.

    Precedence: ``Authorization`` header (``Bearer <t>`` or bare ``<t>``),
    then ``X-Webhook-Token``, then the ``token`` query parameter.
    """
    authorization = headers.get("Authorization", "").strip()
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
        return authorization

    custom = headers.get(TOKEN_HEADER, "").strip()
    if custom:
        return custom

    return query.get(TOKEN_QUERY_PARAM, "").strip()


def validate_token(provided: str, configured: str) -> bool:
    """Validate a shared token via constant-time comparison.

    Returns False if no token is configured (rejects unauthenticated requests).
    """
    if not configured:
        return False
    if not provided:
        return False
    return hmac.compare_digest(provided.encode(), configured.encode())
