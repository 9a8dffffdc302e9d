"""
Split a Markdown changelog into per-version entries.

Each version starts at a level-2 heading:

    ## v1.2.0 - 2026-01-15

The first word of the heading is the version token used for lookup; the
whole heading text is kept as the release title.
"""

import os
import re
from typing import Dict, NamedTuple

_RE_VERSION_HEADER = re.compile(r'^## (?P<title>[^\n]*)$', re.MULTILINE)


class VersionEntry(NamedTuple):
    """A single version's heading text and the notes below it."""
    title: str
    body: str


class VersionNotFoundError(ValueError):
    """Raised when the requested version has no entry in the changelog."""

    def __init__(self, version: str, source: str = "CHANGELOG.md"):
        self.version = version
        self.source = source
        super().__init__(f"Version '{version}' not found in {os.path.basename(source)}")


def find_versions(changelog: str) -> Dict[str, VersionEntry]:
    """Partition a changelog into entries keyed by version token.

    The body of a version runs from the line after its heading up to the
    next ``## `` heading (or the end of the text), stripped of surrounding
    whitespace. Text before the first heading is ignored. A heading with
    nothing after the marker ends the scan; the versions found up to that
    point are returned. Later duplicates of a token replace earlier ones.

    Args:
        changelog: Full changelog text.

    Returns:
        Dict of version token -> VersionEntry, in document order.
    """
    versions: Dict[str, VersionEntry] = {}

    match = _RE_VERSION_HEADER.search(changelog)
    while match:
        title = match.group('title').strip()
        if not title:
            break

        next_match = _RE_VERSION_HEADER.search(changelog, match.end())
        end = next_match.start() if next_match else len(changelog)

        version = title.split()[0]
        versions[version] = VersionEntry(title, changelog[match.end():end].strip())
        match = next_match

    return versions


def get_version(
    versions: Dict[str, VersionEntry],
    version: str,
    source: str = "CHANGELOG.md",
) -> VersionEntry:
    """Look up a version token in the output of find_versions().

    Raises:
        VersionNotFoundError: If the version is not in the changelog.
    """
    entry = versions.get(version)
    if entry is None:
        raise VersionNotFoundError(version, source)
    return entry
