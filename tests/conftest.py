"""Shared pytest fixtures for unit tests."""

import logging
import sys
from pathlib import Path
from textwrap import dedent

import pytest

# Ensure project root is on sys.path for imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


SAMPLE_CHANGELOG = dedent("""\
    # Changelog

    ## v1.1.0

    ### Fixes

    * Fixed parsing issues

    ### Features

    * Added TypeScript support
    * Improved error handling

    ## v1.0.0 - First Release

    First release of the action.

    ### Features

    * Parse CHANGELOG.md to create release body
    * Add emojis to the title sections
    * Sort sections
""")


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Path to the repository root."""
    return PROJECT_ROOT


@pytest.fixture
def sample_changelog() -> str:
    """Two-version changelog with sections and a preamble."""
    return SAMPLE_CHANGELOG


@pytest.fixture
def changelog_file(tmp_path) -> Path:
    """SAMPLE_CHANGELOG written to tmp_path/CHANGELOG.md."""
    path = tmp_path / "CHANGELOG.md"
    path.write_text(SAMPLE_CHANGELOG, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_action_environment(monkeypatch):
    """Run every test as if outside GitHub Actions, with no action inputs."""
    for name in ("GITHUB_ACTIONS", "GITHUB_OUTPUT", "INPUT_VERSION-NAME",
                 "INPUT_CHANGELOG", "INPUT_CONFIGURATION", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    yield
    logging.getLogger("changelog_release").handlers.clear()
