"""Parsing of HTTP ``link`` headers into relation -> URL mappings.

Format: <https://api.github.com/user/repos?page=2>; rel="next", <...>; rel="last"

Reference: https://docs.github.com/en/rest/using-the-rest-api/using-pagination-in-the-rest-api
"""

import re

_ENTRY_RE = re.compile(r"^\s*<([^<>]*)>\s*(.*)$", re.DOTALL)
_REL_RE = re.compile(r'^\s*rel\s*=\s*"([^"]*)"\s*$')


def _split_entries(header: str) -> list[str]:
    """Split on commas outside angle brackets.

    A comma followed by a new "<" also splits, so an unclosed bracket only
    spoils its own entry.
    """
    entries: list[str] = []
    depth = 0
    start = 0
    for i, char in enumerate(header):
        if char == "<":
            depth += 1
        elif char == ">" and depth:
            depth -= 1
        elif char == "," and (not depth or header[i + 1 :].lstrip().startswith("<")):
            entries.append(header[start:i])
            start = i + 1
            depth = 0
    entries.append(header[start:])
    return entries


def parse_link_header(header: str | None) -> dict[str, str]:
    """Map each advertised relation of a ``link`` header to its URL.

    Entries without a bracketed URL or a quoted ``rel`` parameter are skipped,
    so a missing or garbled header yields an empty dict instead of an error.
    Relation names keep their case; the first entry for a relation wins.

    Args:
        header: Raw header value, or None when the response had none

    Returns:
        Dict such as {"next": "...?page=2", "last": "...?page=5"}
    """
    links: dict[str, str] = {}
    if not header:
        return links

    for entry in _split_entries(header):
        match = _ENTRY_RE.match(entry)
        if not match:
            continue
        url, params = match.group(1).strip(), match.group(2)
        if not url or not params.lstrip().startswith(";"):
            continue
        for param in params.split(";")[1:]:
            rel = _REL_RE.match(param)
            if rel and rel.group(1):
                links.setdefault(rel.group(1), url)
                break
    return links
