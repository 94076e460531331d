"""
Utility modules for the device gateway.
"""

from gateway.utils.validation import is_blank
from gateway.utils.body import read_body, read_fields

__all__ = [
    "is_blank",
    "read_body",
    "read_fields",
]
