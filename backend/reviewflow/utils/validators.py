"""
Input validators.  Pure functions, run before a workflow is started.
"""

from __future__ import annotations

import os
import re
from typing import Iterable

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NAME_RE = re.compile(r"^[A-Za-z\s-]+$")
_LETTER_RE = re.compile(r"[A-Za-z]")


def validate_email(email: str) -> bool:
    return bool(email) and _EMAIL_RE.match(email.strip()) is not None


def validate_name(name: str) -> bool:
    """Letters, spaces and hyphens only; at least one letter."""
    return (
        bool(name)
        and _NAME_RE.match(name) is not None
        and _LETTER_RE.search(name) is not None
    )


def validate_file_type(filename: str, allowed_extensions: Iterable[str]) -> bool:
    extension = os.path.splitext(filename)[1].lstrip(".").lower()
    allowed = {ext.lstrip(".").lower() for ext in allowed_extensions}
    return bool(extension) and extension in allowed


def validate_file_size(size_bytes: int, max_bytes: int) -> bool:
    return 0 <= size_bytes <= max_bytes
