"""
Split a version's notes into subsections, then order and decorate them.

Subsections are level-3 headings inside a version body:

    Intro text that belongs to no section.

    ### Features
    - New thing

    ### Fixes
    - Broken thing
"""

import re
from typing import Dict, List, Mapping, NamedTuple, Sequence, Tuple

_RE_SECTION_HEADER = re.compile(r'^### (?P<title>[^\n]*)$', re.MULTILINE)

Section = Tuple[str, str]


class ParsedSections(NamedTuple):
    """Preamble text plus the (title, body) subsections that follow it."""
    unlabelled: str
    sections: List[Section]


def find_sections(body: str) -> ParsedSections:
    """Split a version body into unlabelled preamble and subsections.

    Args:
        body: Notes of a single version.

    Returns:
        ParsedSections with the stripped preamble and (title, body) pairs
        in document order.
    """
    sections: List[Section] = []

    match = _RE_SECTION_HEADER.search(body)
    unlabelled = body[:match.start()] if match else body

    while match:
        title = match.group('title').strip()
        if not title:
            break

        next_match = _RE_SECTION_HEADER.search(body, match.end())
        end = next_match.start() if next_match else len(body)

        sections.append((title, body[match.end():end].strip()))
        match = next_match

    return ParsedSections(unlabelled.strip(), sections)


def order_sections(sections: Sequence[Section], order: Sequence[str]) -> List[Section]:
    """Reorder sections by a priority list.

    Sections whose lowercased title appears in ``order`` come first, in the
    order of the list. The others follow, sorted by title.
    """
    priority: Dict[str, int] = {}
    for index, title in enumerate(order):
        priority.setdefault(title, index)

    ranked = [s for s in sections if s[0].lower() in priority]
    remaining = [s for s in sections if s[0].lower() not in priority]

    ranked.sort(key=lambda s: priority[s[0].lower()])
    remaining.sort(key=lambda s: s[0])
    return ranked + remaining


def decorate_sections(
    sections: Sequence[Section],
    emojis: Mapping[str, str],
    prefix: bool = True,
) -> List[Section]:
    """Add the configured emoji before (or after) each section title."""
    decorated = []
    for title, body in sections:
        emoji = emojis.get(title.lower()) or ''
        if prefix:
            decorated.append((f"{emoji} {title}".strip(), body))
        else:
            decorated.append((f"{title} {emoji}".strip(), body))
    return decorated
