"""
Input Validation Utilities
==========================

Presence checks for fields sent by devices. Nothing beyond "is it there"
is enforced; firmware versions in the field send all sorts of shapes.
"""

from typing import Any


def is_blank(value: Any) -> bool:
    """
    Check whether a required field is missing.

    Args:
        value: Field value as decoded from the request body

    Returns:
        True for None and the empty string. Whitespace counts as a value.
    """
    return value is None or value == ""
