"""
Header detection heuristics for contact-card exports.
"""

import re
from typing import Iterable, List, Optional


# Searched anywhere in the header, case-insensitive: "name", "full name"
# with any single separator, "contact"
NAME_HEADER_PATTERN = re.compile(r'name|full.?name|contact', re.IGNORECASE)

# "phone", "tel", "mobile", "cell", "contact no" with any single separator, "number"
PHONE_HEADER_PATTERN = re.compile(r'phone|tel|mobile|cell|contact.?no|number', re.IGNORECASE)


def is_name_header(header: str) -> bool:
    """
    Check if a header looks like it holds a person's display name.

    Args:
        header: The header text to check

    Returns:
        True if it matches any of the name tokens
    """
    if not header:
        return False

    return bool(NAME_HEADER_PATTERN.search(header))


def is_phone_header(header: str) -> bool:
    """
    Check if a header looks like it holds a phone number.

    Args:
        header: The header text to check

    Returns:
        True if it matches any of the phone tokens
    """
    if not header:
        return False

    return bool(PHONE_HEADER_PATTERN.search(header))


def find_name_header(headers: Iterable[str]) -> Optional[str]:
    """
    Return the first name-like header in the given order, or None.
    """
    for header in headers:
        if is_name_header(header):
            return header
    return None


def detect_phone_headers(headers: Iterable[str]) -> List[str]:
    """Return every phone-like header, preserving order."""
    return [header for header in headers if is_phone_header(header)]
