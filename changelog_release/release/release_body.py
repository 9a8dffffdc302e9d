"""Assemble a release body from a changelog entry."""

import re
from typing import NamedTuple

from changelog_release.release.changelog import (
    VersionEntry,
    find_versions,
    get_version,
)
from changelog_release.release.sections import (
    ParsedSections,
    decorate_sections,
    find_sections,
    order_sections,
)
from changelog_release.shared.config import DEFAULT_CONFIGURATION, Configuration

# Headings nested inside a section body are flattened to plain text
_RE_LEADING_MARKERS = re.compile(r'^#+', re.MULTILINE)


class ReleaseNotes(NamedTuple):
    """Release title and formatted body for one version."""
    title: str
    body: str


def build_release(parsed: ParsedSections) -> str:
    """Join the preamble and sections into the final release body.

    Each section becomes a ``## Title`` heading followed by its body. Leading
    ``#`` characters inside a body are removed so nested headings are not
    mistaken for release sections.

    Args:
        parsed: Preamble and (already ordered/decorated) sections.

    Returns:
        Release body text, or an empty string when there is nothing to show.
    """
    unlabelled = parsed.unlabelled.strip()
    release = f"{unlabelled}\n\n" if unlabelled else ""

    for title, body in parsed.sections:
        release += f"## {title}\n\n{_RE_LEADING_MARKERS.sub('', body)}\n\n"

    return release.rstrip()


def build_release_notes(
    changelog: str,
    version: str,
    configuration: Configuration = DEFAULT_CONFIGURATION,
    source: str = "CHANGELOG.md",
) -> ReleaseNotes:
    """Extract one version from a changelog and format its release notes.

    Args:
        changelog: Full changelog text.
        version: Version token to extract (first word of the ``##`` heading).
        configuration: Section order and emoji settings.
        source: Changelog path, used in the error message.

    Returns:
        ReleaseNotes with the version heading as title and the formatted body.

    Raises:
        VersionNotFoundError: If the version is not in the changelog.
    """
    entry = get_version(find_versions(changelog), version, source)
    return format_version(entry, configuration)


def format_version(
    entry: VersionEntry,
    configuration: Configuration = DEFAULT_CONFIGURATION,
) -> ReleaseNotes:
    """Order and decorate the sections of a single changelog entry."""
    parsed = find_sections(entry.body)
    sections = order_sections(parsed.sections, configuration.order)
    sections = decorate_sections(sections, configuration.emojis, configuration.emojis_prefix)
    return ReleaseNotes(entry.title, build_release(parsed._replace(sections=sections)))
