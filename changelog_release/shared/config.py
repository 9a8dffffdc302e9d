"""Release body configuration: built-in defaults, file loading and merging."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a configuration file cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class Configuration:
    """How subsections are ordered and decorated in the release body.

    Attributes:
        emojis_prefix: Put the emoji before the title (True) or after it.
        emojis: Lowercased section title -> emoji.
        order: Lowercased section titles, highest priority first.
    """
    emojis_prefix: bool
    emojis: Mapping[str, str]
    order: Tuple[str, ...]


DEFAULT_CONFIGURATION = Configuration(
    emojis_prefix=True,
    emojis=MappingProxyType({
        'changes': '⚙️',
        'dependencies': '📦',
        'distribution': '🚚',
        'features': '🚀',
        'new features': '🚀',
        'fixes': '🔧',
        'links': '🔗',
        'notes': '📝',
        'other': '💬',
        'security': '🛡',
    }),
    order=(
        'new features',
        'features',
        'changes',
        'fixes',
        'security',
        'dependencies',
        'distribution',
        'notes',
        'other',
        'links',
    ),
)


def _merge_emojis(value: Any) -> Mapping[str, str]:
    if not isinstance(value, dict):
        raise ConfigurationError(
            f"'emojis' must be a mapping of section title to emoji, got {type(value).__name__}"
        )
    emojis: Dict[str, str] = {}
    for title, emoji in value.items():
        if not isinstance(title, str) or not isinstance(emoji, str):
            raise ConfigurationError(f"Invalid emoji entry: {title!r}: {emoji!r}")
        emojis[title.lower()] = emoji
    return MappingProxyType(emojis)


def _merge_order(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise ConfigurationError("'order' must be a list of section titles")
    return tuple(title.lower() for title in value)


def merge_configuration(
    data: Mapping[str, Any],
    base: Configuration = DEFAULT_CONFIGURATION,
) -> Configuration:
    """Merge externally supplied settings onto a base configuration.

    Each top-level key overrides the base independently. ``emojis`` and
    ``order`` replace the base values wholesale rather than per entry.
    ``emojisPrefix`` only falls back to the base when it is missing or null,
    so an explicit ``false`` is kept.

    Args:
        data: Parsed configuration mapping (keys: emojisPrefix, emojis, order).
        base: Configuration to merge onto.

    Returns:
        A new Configuration.

    Raises:
        ConfigurationError: If a supplied field has the wrong type.
    """
    emojis_prefix = data.get('emojisPrefix')
    if emojis_prefix is None:
        emojis_prefix = base.emojis_prefix
    elif not isinstance(emojis_prefix, bool):
        raise ConfigurationError(
            f"'emojisPrefix' must be true or false, got {emojis_prefix!r}"
        )

    emojis = _merge_emojis(data['emojis']) if data.get('emojis') is not None else base.emojis
    order = _merge_order(data['order']) if data.get('order') is not None else base.order

    unknown = sorted(set(data) - {'emojisPrefix', 'emojis', 'order'})
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(map(str, unknown)))

    return Configuration(emojis_prefix=emojis_prefix, emojis=emojis, order=order)


def _parse_configuration(text: str, suffix: str) -> Any:
    # PyYAML keeps JSON surrogate-pair escapes as lone surrogates, so any
    # file that is not explicitly YAML is tried as JSON first.
    if suffix in ('.yml', '.yaml'):
        return yaml.safe_load(text) or {}
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        if suffix == '.json':
            raise
    return yaml.safe_load(text) or {}


def load_configuration(path: Optional[Path] = None) -> Configuration:
    """Load a YAML or JSON configuration file and merge it onto the defaults.

    ``.yml``/``.yaml`` files are parsed as YAML and ``.json`` files as JSON.
    Any other file is parsed as JSON when possible, YAML otherwise.

    Args:
        path: Configuration file. If None, the defaults are returned.

    Returns:
        The merged Configuration.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid
            YAML/JSON, or does not contain a mapping.
    """
    if path is None:
        return DEFAULT_CONFIGURATION

    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e

    try:
        data = _parse_configuration(text, path.suffix.lower())
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid configuration {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration {path} must be a mapping (got {type(data).__name__})"
        )

    logger.debug("Loaded configuration keys from %s: %s", path, ", ".join(map(str, data)))
    return merge_configuration(data)
