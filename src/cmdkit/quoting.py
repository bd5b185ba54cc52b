"""Quoting helpers for values that must survive command-line tokenization."""

from __future__ import annotations

import re

DEFAULT_QUOTE = '"'


def ensure_quoted(value: str, quote_char: str = DEFAULT_QUOTE) -> str:
    """Wrap value in quote_char, escaping embedded quotes, unless it is already wrapped.

    Backslashes that run up to a quote or to the end of the value are doubled
    so they cannot escape the quote that follows them.
    """

    if not quote_char:
        return value
    if len(value) >= 2 * len(quote_char) and value.startswith(quote_char) and value.endswith(quote_char):
        return value
    pattern = r"(\\*)(" + re.escape(quote_char) + r"|\Z)"
    escaped = re.sub(pattern, lambda match: match[1] * 2 + (f"\\{match[2]}" if match[2] else ""), value)
    return f"{quote_char}{escaped}{quote_char}"


def should_quote(value: str) -> bool:
    """Whether value would be split apart by the tokenizer if left bare."""

    return bool(value) and any(ch.isspace() for ch in value)


def quote_if_needed(value: str, quote_char: str = DEFAULT_QUOTE) -> str:
    return ensure_quoted(value, quote_char) if should_quote(value) else value
