"""Session header handling for the orders API.

The frontend tags every request with an X-Session-ID header holding a
UUID v4. Anything else is refused before it reaches the logs.
"""
import re
import uuid
import logging
from fastapi import Header, HTTPException
from typing import Optional

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)


def validate_session_id(x_session_id: Optional[str] = Header(None, alias="X-Session-ID")) -> str:
    """Return the caller's session ID, or an anonymous one when absent.

    Args:
        x_session_id: Value of the X-Session-ID header

    Returns:
        Session ID string ("anon-<uuid>" when the header is missing)

    Raises:
        HTTPException: 400 if the header is not a UUID v4
    """
    if not x_session_id:
        return f"anon-{uuid.uuid4()}"

    x_session_id = x_session_id.strip()
    if not SESSION_ID_PATTERN.match(x_session_id):
        logger.warning(f"Rejected malformed session ID: {truncate_session_id(x_session_id)}")
        raise HTTPException(
            status_code=400,
            detail="Invalid session ID format. Must be a valid UUID."
        )
    return x_session_id


def truncate_session_id(session_id: Optional[str]) -> str:
    """Shorten a session ID for log lines."""
    if not session_id:
        return "unknown"
    return f"{session_id[:8]}..."
