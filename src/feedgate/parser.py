"""Tolerant entry extractor for arXiv Atom feeds.

Not a validating XML parser. The grammar is deliberately small:

    entry block  := "<entry" attrs ">" ... "</entry>"   (may span lines)
    field        := "<tag" attrs ">" text "</tag>"       (first occurrence)
    author names := every "<name>" text "</name>" in the block

Each field is extracted independently. A field that is missing, or whose
opening tag is never closed, comes back as ``None`` and the rest of the
block is still used. Text with no entry blocks yields an empty list.
"""

from __future__ import annotations

import re

import structlog

from feedgate.models.items import PreprintRecord

log = structlog.get_logger()

_ENTRY_RE = re.compile(r"<entry\b[^>]*>(.*?)</entry>", re.DOTALL)
_NAME_RE = re.compile(r"<name\b[^>]*>(.*?)</name>", re.DOTALL)


def _field_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(rf"<{tag}\b[^>]*>(.*?)</{tag}>", re.DOTALL)


_FIELDS: dict[str, tuple[str, re.Pattern[str], re.Pattern[str]]] = {
    # record field -> (atom tag, full pattern, opening-tag pattern)
    name: (tag, _field_pattern(tag), re.compile(rf"<{tag}\b"))
    for name, tag in [
        ("title", "title"),
        ("summary", "summary"),
        ("link", "id"),
        ("published", "published"),
    ]
}


def _extract_field(block: str, name: str) -> str | None:
    tag, pattern, opening = _FIELDS[name]
    match = pattern.search(block)
    if match is not None:
        return match.group(1).strip()
    if opening.search(block):
        log.debug("extraction_anomaly", field=name, tag=tag, reason="unclosed_tag")
    return None


def _extract_authors(block: str) -> list[str]:
    names = (name.strip() for name in _NAME_RE.findall(block))
    return [name for name in names if name]


def extract_entries(text: str, category: str) -> list[PreprintRecord]:
    """Split an Atom response into PreprintRecords tagged with ``category``.

    Records without a title are kept; filtering is the caller's job.
    """
    if not text:
        return []

    records: list[PreprintRecord] = []
    for block in _ENTRY_RE.findall(text):
        records.append(
            PreprintRecord(
                title=_extract_field(block, "title"),
                summary=_extract_field(block, "summary"),
                authors=_extract_authors(block),
                link=_extract_field(block, "link"),
                published=_extract_field(block, "published"),
                category=category,
            )
        )
    return records
