"""Best-effort scalar lookups in JSON-like response text."""

from __future__ import annotations

_VALUE_TERMINATORS = frozenset(",}]")


def extract_field(body: str | None, key: str) -> str:
    """Return the raw value stored under ``key`` or ``""`` when absent.

    Only the first occurrence of the quoted key is inspected, so this is
    safe for flat response shapes only. String values are returned up to the
    next double quote without escape processing; bare literals (numbers,
    booleans) are returned trimmed.
    """

    text = body or ""
    key_index = text.find(f'"{key}"')
    if key_index == -1:
        return ""
    colon_index = text.find(":", key_index)
    if colon_index == -1:
        return ""

    start = colon_index + 1
    while start < len(text) and text[start] in " \t":
        start += 1
    if start >= len(text):
        return ""

    if text[start] == '"':
        end = text.find('"', start + 1)
        if end == -1:
            return ""
        return text[start + 1 : end]

    end = start
    while end < len(text) and text[end] not in _VALUE_TERMINATORS:
        end += 1
    return text[start:end].strip()


__all__ = ["extract_field"]
