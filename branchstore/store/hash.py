"""Commit identifier utilities."""

import hashlib
from datetime import datetime


DEFAULT_DATE_FORMAT = "%a %b %d %H:%M %Y %z"


def format_timestamp(timestamp: datetime, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render a commit timestamp the way it appears in logs and ids."""
    return timestamp.strftime(date_format)


def compute_commit_id(
    timestamp: datetime,
    message: str,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """
    Compute the identifier of a commit.
    
    The id is the SHA-1 hex digest of the formatted timestamp followed by the
    message. Two commits with the same message inside the same timestamp
    resolution share an id.
    
    Args:
        timestamp: When the commit was created.
        message: The commit message.
        date_format: strftime format applied to the timestamp.
    
    Returns:
        40-character hexadecimal digest.
    """
    content = f"{format_timestamp(timestamp, date_format)}{message}"
    return hashlib.sha1(content.encode("utf-8")).hexdigest()
