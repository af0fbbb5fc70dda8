"""
Width-aware string helpers for terminal output and model replies.
"""

import re

# CSI: ESC '[' parameter bytes, intermediate bytes, final letter
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[\x30-\x3f]*[\x20-\x2f]*[A-Za-z]")

ELLIPSIS = "..."

# ```lang\n ... ```  (tag is letters only, any case)
TAGGED_FENCE_PATTERN = re.compile(r"^```(?:[a-z]+)?[^\S\n]*\n(.*)```$", re.IGNORECASE | re.DOTALL)
# ``` ... ```
BARE_FENCE_PATTERN = re.compile(r"^```(.*)```$", re.DOTALL)


def strip_ansi(s: str) -> str:
    """Remove color/style escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", s)


def visible_width(s: str) -> int:
    """Number of terminal columns `s` occupies once escape sequences are ignored."""
    return len(strip_ansi(s))


def truncate_path(path: str, max_length: int) -> str:
    """Shorten `path` from the left so the file name stays readable.

    Paths that already fit are returned as-is. Otherwise the result is
    "..." followed by the tail of the path, `max_length` characters in total.
    With `max_length` of 3 or less only the ellipsis is left, so the result
    is longer than asked for.
    """
    if visible_width(path) <= max_length:
        return path
    keep = max(0, max_length - len(ELLIPSIS))
    return ELLIPSIS + path[len(path) - keep:]


def clean_commit_message(raw: str) -> str:
    """Unwrap a message the model returned inside a fenced code block."""
    stripped = raw.strip()

    match = TAGGED_FENCE_PATTERN.match(stripped)
    if match is None:
        match = BARE_FENCE_PATTERN.match(stripped)
    if match is None:
        return raw

    return match.group(1).strip()
