"""Extraction of ``@name`` mentions from free text."""

import re

# Spaces are allowed so that multi-word display names can be mentioned.
MENTION_PATTERN = re.compile(r"@([\w ]+)")

# Matches the width of users.name; longer candidates can never resolve.
MAX_NAME_LENGTH = 80


def parse_mentions(text: str) -> list[str]:
    """Return trimmed mention tokens, deduplicated in order of appearance."""
    seen: dict[str, None] = {}
    for match in MENTION_PATTERN.finditer(text or ""):
        token = match.group(1).strip()
        if token:
            seen.setdefault(token, None)
    return list(seen)


def candidate_names(token: str, max_length: int = MAX_NAME_LENGTH) -> list[str]:
    """
    Word prefixes of ``token`` no longer than ``max_length``, longest first.

    ``"alice and"`` yields ``["alice and", "alice"]`` so a multi-word name is
    preferred when it exists and a plain ``@alice`` in prose still resolves.
    """
    prefixes: list[str] = []
    current = ""
    for word in token.split():
        current = f"{current} {word}" if current else word
        if len(current) > max_length:
            break
        prefixes.append(current)
    prefixes.reverse()
    return prefixes
