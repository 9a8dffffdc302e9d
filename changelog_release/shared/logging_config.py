"""Logging configuration for changelog-to-release."""

import logging
import os
import sys


class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    CYAN = '\033[0;36m'
    NC = '\033[0m'  # No Color

    @classmethod
    def disable(cls):
        """Disable colors for non-TTY output."""
        cls.RED = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.CYAN = ''
        cls.NC = ''

    @classmethod
    def auto(cls, stream=None):
        """Disable colors if the stream is not a TTY or NO_COLOR is set."""
        stream = stream if stream is not None else sys.stderr
        if os.environ.get('NO_COLOR') or not stream.isatty():
            cls.disable()


class ColorFormatter(logging.Formatter):
    """Formatter that uses Colors class for TTY-aware colored output."""

    LEVEL_COLORS = {
        logging.DEBUG: ('CYAN', '[DEBUG]'),
        logging.INFO: ('GREEN', '[INFO]'),
        logging.WARNING: ('YELLOW', '[WARN]'),
        logging.ERROR: ('RED', '[ERROR]'),
        logging.CRITICAL: ('RED', '[CRITICAL]'),
    }

    def format(self, record):
        color_name, prefix = self.LEVEL_COLORS.get(record.levelno, ('NC', '[LOG]'))
        color = getattr(Colors, color_name, '')
        nc = Colors.NC
        return f"{color}{prefix}{nc} {record.getMessage()}"


def escape_command_data(value):
    """Escape a message for use in a GitHub Actions workflow command."""
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


class WorkflowCommandFormatter(logging.Formatter):
    """Formatter that renders records as GitHub Actions workflow commands.

    DEBUG, WARNING and ERROR records become ``::debug::``, ``::warning::`` and
    ``::error::`` commands so the runner turns them into annotations. INFO
    records are written as plain log lines.
    """

    LEVEL_COMMANDS = {
        logging.DEBUG: 'debug',
        logging.WARNING: 'warning',
        logging.ERROR: 'error',
        logging.CRITICAL: 'error',
    }

    def format(self, record):
        message = record.getMessage()
        command = self.LEVEL_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_command_data(message)}"


def running_in_github_actions():
    return os.environ.get('GITHUB_ACTIONS') == 'true'


def setup_logging(name, verbose=False, quiet=False):
    """Configure logging for a tool.

    Inside GitHub Actions records go to stdout as workflow commands;
    elsewhere they go to stderr with colored level prefixes.

    Args:
        name: Logger name (typically the package name)
        verbose: If True, show DEBUG messages
        quiet: If True, show only WARNING and above

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        if running_in_github_actions():
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(WorkflowCommandFormatter())
        else:
            Colors.auto(sys.stderr)
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(ColorFormatter())
        logger.addHandler(handler)

    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.INFO)

    return logger
