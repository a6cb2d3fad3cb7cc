"""Escaping helpers for Typst markup and string literals."""

from __future__ import annotations

import re

# Characters with meaning anywhere in Typst markup. A backslash before any
# non-alphanumeric character yields that character literally.
_MARKUP_SPECIAL_RE = re.compile(r"([\\#*_`$\[\]<>@~/])")

# Symbol shorthands: "--" and "---" (dashes), "-?" (soft hyphen), "..." (ellipsis).
_DASH_SHORTHAND_RE = re.compile(r"-(?=[-?])")
_ELLIPSIS_RE = re.compile(r"\.(?=\.\.)")

# Markers that only matter at the start of a line: headings, lists, term lists.
_LINE_MARKER_RE = re.compile(r"^(\s*)([=+\-])", re.MULTILINE)
_LINE_ENUM_RE = re.compile(r"^(\s*\d+)\.", re.MULTILINE)


def escape_markup(value: str) -> str:
    escaped = _MARKUP_SPECIAL_RE.sub(r"\\\1", value)
    escaped = _DASH_SHORTHAND_RE.sub(r"\\-", escaped)
    escaped = _ELLIPSIS_RE.sub(r"\\.", escaped)
    escaped = _LINE_MARKER_RE.sub(r"\1\\\2", escaped)
    return _LINE_ENUM_RE.sub(r"\1\\.", escaped)


def escape_string(value: str) -> str:
    """Escape ``value`` for use inside a double-quoted Typst string."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def quote(value: str) -> str:
    return f'"{escape_string(value)}"'
