"""Utility helper functions for the vault core."""

import uuid
from datetime import datetime
from typing import Iterable, List, Union


def generate_id(prefix: str) -> str:
    """
    Generate a new prefixed identifier.

    Args:
        prefix: Entity prefix (e.g., "folder", "share")

    Returns:
        Identifier string in format: {prefix}_{uuid4 hex}
    """
    return f"{prefix}_{uuid.uuid4().hex}"


def to_iso(value: datetime) -> str:
    return value.isoformat()


def from_iso(value: str) -> datetime:
    return datetime.fromisoformat(value)


def parse_emails(emails: Union[str, Iterable[str], None]) -> List[str]:
    """
    Parse a comma-separated string (or an iterable) of email addresses.

    Args:
        emails: "a@x.com, b@y.com" or ["a@x.com", "b@y.com"]

    Returns:
        List of trimmed, non-empty addresses
    """
    if emails is None:
        return []
    if isinstance(emails, str):
        emails = emails.split(',')
    return [email.strip() for email in emails if email and email.strip()]
