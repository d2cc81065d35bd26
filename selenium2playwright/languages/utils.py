"""
Utility functions for emitting TypeScript from translators.
"""

import re

# {0}, {name}, {string} ... as used by QAF and cucumber expressions
PLACEHOLDER = re.compile(r"^\{\w*\}$")


def ts_string(value: str) -> str:
    """
    Quote a value as a single-quoted TypeScript string literal.

    Args:
        value: Raw text

    Returns:
        The literal, quotes included.
    """
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def ts_literal(value: str) -> str:
    """
    Quote a value, preferring the quote style that keeps the text verbatim.

    XPath expressions usually contain single quotes; wrapping them in double
    quotes leaves the original expression searchable in the output.
    """
    if "'" in value and '"' not in value and "\\" not in value:
        return f'"{value}"'
    return ts_string(value)


def is_placeholder(value: str) -> bool:
    """True for step-sentence placeholders like {0} or {username}."""
    return bool(PLACEHOLDER.match(value.strip()))


def lower_first(value: str) -> str:
    """accountsPage <- AccountsPage"""
    return value[:1].lower() + value[1:]


def js_regex(text: str) -> str:
    """Escape text for use inside a /.../i JavaScript regex literal."""
    return re.sub(r"[.*+?^${}()|\[\]\\/]", lambda m: "\\" + m.group(0), text)
