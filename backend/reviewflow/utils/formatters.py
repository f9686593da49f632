"""Display and sanitisation helpers."""

from __future__ import annotations

import re

_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Human-readable size, e.g. ``format_bytes(1536) == "1.5 KB"``."""
    if num_bytes <= 0:
        return "0 Bytes"
    size = float(num_bytes)
    unit = 0
    while size >= 1024 and unit < len(_UNITS) - 1:
        size /= 1024
        unit += 1
    text = f"{size:.{max(decimals, 0)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[unit]}"


def sanitize_input(value: str, kind: str = "text") -> str:
    if kind == "email":
        return value.strip().lower()
    if kind == "number":
        return re.sub(r"\D", "", value)
    return value.strip()


def truncate_text(text: str, max_length: int, separator: str = "...") -> str:
    """Cut at a word boundary so the kept words fit in ``max_length``."""
    if len(text) <= max_length:
        return text
    kept: list[str] = []
    length = 0
    for word in text.split(" "):
        extra = len(word) + (1 if kept else 0)
        if length + extra > max_length:
            break
        kept.append(word)
        length += extra
    return " ".join(kept) + separator
