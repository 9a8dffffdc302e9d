#!/usr/bin/env python3
"""
Turn a CHANGELOG.md entry into a GitHub release title and body.

Reads the ## VERSION entry, orders its ### sections by priority, adds
emoji to the section titles and writes the result as the `title` and `body`
step outputs. Outside GitHub Actions the body is printed to stdout.

Usage:
    python -m changelog_release.release v1.2.0
    python -m changelog_release.release v1.2.0 --changelog docs/CHANGELOG.md
    python -m changelog_release.release v1.2.0 --configuration release.yml

Inputs can also come from the action environment (INPUT_VERSION-NAME,
INPUT_CHANGELOG, INPUT_CONFIGURATION); command-line arguments win.

Exit codes:
    0 - Success
    1 - Missing input, unreadable file, invalid configuration or unknown version
"""

import argparse
import logging
import os
import sys
import uuid
from pathlib import Path
from typing import List, Optional

from changelog_release.release.changelog import (
    VersionNotFoundError,
    find_versions,
    get_version,
)
from changelog_release.release.release_body import format_version
from changelog_release.shared.config import ConfigurationError, load_configuration
from changelog_release.shared.logging_config import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_CHANGELOG = "CHANGELOG.md"
MAX_LISTED_VERSIONS = 5


class MissingInputError(ValueError):
    """Raised when a required input was not supplied."""


def get_input(name: str, value: Optional[str] = None, required: bool = False) -> str:
    """Resolve an input from the command line or the action environment.

    GitHub Actions passes ``with:`` inputs as ``INPUT_<NAME>`` environment
    variables, upper-cased with spaces replaced by underscores.

    Raises:
        MissingInputError: If ``required`` and no value was supplied.
    """
    if not value:
        env_name = f"INPUT_{name.replace(' ', '_').upper()}"
        value = os.environ.get(env_name, '')
    value = value.strip()
    if required and not value:
        raise MissingInputError(f"Input required and not supplied: {name}")
    return value


def set_output(name: str, value: str) -> bool:
    """Write a step output to the file named by GITHUB_OUTPUT.

    Returns:
        True if the output was written, False when not running in Actions.
    """
    output_path = os.environ.get('GITHUB_OUTPUT')
    if not output_path:
        return False

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_path, 'a', encoding='utf-8') as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    return True


def summarize_versions(versions: List[str]) -> str:
    listed = ", ".join(versions[:MAX_LISTED_VERSIONS])
    extra = len(versions) - MAX_LISTED_VERSIONS
    if extra > 0:
        listed += f", ... [{extra} more]"
    return listed


def run(version_name: str, changelog_path: Path, configuration_path: Optional[Path]) -> None:
    """Build the release notes and emit them as step outputs.

    Raises:
        OSError: If the changelog cannot be read.
        UnicodeDecodeError: If the changelog is not valid UTF-8.
        ConfigurationError: If the configuration is invalid.
        VersionNotFoundError: If the version is not in the changelog.
    """
    logger.info("Version: %s", version_name)
    logger.info("Changelog: %s", changelog_path)
    logger.info("Configuration: %s", configuration_path or "{default}")

    changelog = changelog_path.read_text(encoding='utf-8').strip() + "\n"
    configuration = load_configuration(configuration_path)

    versions = find_versions(changelog)
    logger.info("Versions: %s", summarize_versions(list(versions)))

    entry = get_version(versions, version_name, str(changelog_path))
    notes = format_version(entry, configuration)
    logger.debug("Release body:\n%s", notes.body)

    wrote_title = set_output('title', notes.title)
    wrote_body = set_output('body', notes.body)
    if not (wrote_title and wrote_body):
        logger.info("Title: %s", notes.title)
        print(notes.body)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Build GitHub release notes from a CHANGELOG.md entry.')
    parser.add_argument('version', nargs='?', default=None,
                        help='Version to extract (first word of the ## heading)')
    parser.add_argument('--changelog', default=None,
                        help=f'Path to the changelog (default: {DEFAULT_CHANGELOG})')
    parser.add_argument('--configuration', default=None,
                        help='YAML or JSON file with emojisPrefix, emojis and order')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show debug output')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Show only warnings and errors')
    args = parser.parse_args(argv)

    setup_logging('changelog_release', verbose=args.verbose, quiet=args.quiet)

    try:
        version_name = get_input('version-name', args.version, required=True)
        changelog_path = Path(get_input('changelog', args.changelog) or DEFAULT_CHANGELOG)
        configuration = get_input('configuration', args.configuration)
        run(version_name, changelog_path, Path(configuration) if configuration else None)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e.filename)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read file: %s", e)
        return 1
    except (MissingInputError, ConfigurationError, VersionNotFoundError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
