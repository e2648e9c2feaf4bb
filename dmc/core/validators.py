"""Input validation helpers for DMC operations."""
from __future__ import annotations
import re

# Matches lowercase addresses only.
EMAIL_PATTERN = re.compile(
    r"^[_a-z0-9\-+]+(\.[_a-z0-9\-+]+)*@[a-z0-9\-]+(\.[a-z0-9\-]+)*(\.[a-z]{2,3})$"
)


def is_valid_email(value: object) -> bool:
    """Return True when value is an email-shaped string.
    
    Args:
        value: Candidate email address
        
    Returns:
        True if the address matches the accepted syntax
    """
    if not isinstance(value, str):
        return False
    return EMAIL_PATTERN.match(value) is not None
