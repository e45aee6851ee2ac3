"""Draft mode session tokens and preview-secret checks."""

from __future__ import annotations

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
_TOKEN_TYPE = "draft"


def create_draft_token(secret_key: str, expires_seconds: int = 3600) -> str:
    """Create a signed token that marks a session as being in draft mode."""
    expire = datetime.now(UTC) + timedelta(seconds=expires_seconds)
    payload: dict[str, Any] = {"draft": True, "exp": expire, "type": _TOKEN_TYPE}
    return str(jwt.encode(payload, secret_key, algorithm=ALGORITHM))


def is_draft_token_valid(token: str | None, secret_key: str) -> bool:
    """Return True when the token is a current, correctly signed draft token."""
    if not token:
        return False
    try:
        payload: dict[str, Any] = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        logger.debug("Rejected invalid or expired draft token")
        return False
    return payload.get("type") == _TOKEN_TYPE and payload.get("draft") is True


def preview_secret_matches(provided: str | None, expected: str) -> bool:
    """Constant-time comparison of the preview secret.

    An unconfigured (empty) secret never matches, so draft mode cannot be
    enabled on a deployment that did not provision one.
    """
    if not expected or provided is None:
        return False
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))
