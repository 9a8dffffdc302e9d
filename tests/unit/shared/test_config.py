#!/usr/bin/env python3
"""
Unit tests for configuration loading and merging.

Usage:
    python -m pytest tests/unit/shared/test_config.py -v
"""

import json
import logging

import pytest
import yaml

from changelog_release.shared.config import (
    DEFAULT_CONFIGURATION,
    Configuration,
    ConfigurationError,
    load_configuration,
    merge_configuration,
)


class TestDefaultConfiguration:
    """Tests for the built-in defaults."""

    def test_expected_values(self):
        assert DEFAULT_CONFIGURATION.emojis_prefix is True
        assert DEFAULT_CONFIGURATION.emojis['features'] == '🚀'
        assert DEFAULT_CONFIGURATION.emojis['fixes'] == '🔧'
        assert DEFAULT_CONFIGURATION.order[:2] == ('new features', 'features')
        assert DEFAULT_CONFIGURATION.order[-1] == 'links'

    def test_every_ordered_section_has_emoji(self):
        assert set(DEFAULT_CONFIGURATION.order) == set(DEFAULT_CONFIGURATION.emojis)

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIGURATION.emojis_prefix = False
        with pytest.raises(TypeError):
            DEFAULT_CONFIGURATION.emojis['features'] = '⭐'


class TestMergeConfiguration:
    """Tests for merge_configuration()."""

    def test_empty_data_returns_defaults(self):
        assert merge_configuration({}) == DEFAULT_CONFIGURATION

    def test_explicit_false_prefix_is_kept(self):
        result = merge_configuration({'emojisPrefix': False})
        assert result.emojis_prefix is False
        assert result.emojis == DEFAULT_CONFIGURATION.emojis
        assert result.order == DEFAULT_CONFIGURATION.order

    def test_null_prefix_falls_back(self):
        assert merge_configuration({'emojisPrefix': None}).emojis_prefix is True

    def test_emojis_replaced_wholesale(self):
        result = merge_configuration({'emojis': {'features': '⭐'}})
        assert dict(result.emojis) == {'features': '⭐'}
        assert result.order == DEFAULT_CONFIGURATION.order

    def test_order_replaced_wholesale(self):
        result = merge_configuration({'order': ['fixes', 'features']})
        assert result.order == ('fixes', 'features')
        assert result.emojis == DEFAULT_CONFIGURATION.emojis

    def test_keys_are_lowercased(self):
        result = merge_configuration({'emojis': {'Bug Fixes': '🐛'}, 'order': ['Bug Fixes']})
        assert dict(result.emojis) == {'bug fixes': '🐛'}
        assert result.order == ('bug fixes',)

    def test_merges_onto_given_base(self):
        base = Configuration(emojis_prefix=False, emojis={}, order=('notes',))
        result = merge_configuration({'order': ['links']}, base=base)
        assert result == Configuration(emojis_prefix=False, emojis={}, order=('links',))

    @pytest.mark.parametrize('data', [
        {'emojisPrefix': 'yes'},
        {'emojis': ['features']},
        {'emojis': {'features': 1}},
        {'order': 'features'},
        {'order': ['features', 2]},
    ])
    def test_wrong_types_raise(self, data):
        with pytest.raises(ConfigurationError):
            merge_configuration(data)

    def test_unknown_keys_warn(self, caplog):
        with caplog.at_level(logging.WARNING):
            merge_configuration({'emoji': {'features': '⭐'}})
        assert "Ignoring unknown configuration keys: emoji" in caplog.text


class TestLoadConfiguration:
    """Tests for load_configuration()."""

    def test_no_path_returns_defaults(self):
        assert load_configuration(None) is DEFAULT_CONFIGURATION

    def test_json_file(self, tmp_path):
        config_path = tmp_path / "release.json"
        config_path.write_text(json.dumps({
            'emojisPrefix': False,
            'emojis': {'features': '⭐', 'fixes': '🐛'},
            'order': ['fixes', 'features'],
        }), encoding='utf-8')

        result = load_configuration(config_path)
        assert result.emojis_prefix is False
        assert dict(result.emojis) == {'features': '⭐', 'fixes': '🐛'}
        assert result.order == ('fixes', 'features')

    def test_yaml_file(self, tmp_path):
        config_path = tmp_path / "release.yml"
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump({'order': ['security', 'fixes']}, f)

        result = load_configuration(config_path)
        assert result.order == ('security', 'fixes')
        assert result.emojis_prefix is True

    def test_accepts_string_path(self, tmp_path):
        config_path = tmp_path / "release.yml"
        config_path.write_text("emojisPrefix: false\n", encoding='utf-8')
        assert load_configuration(str(config_path)).emojis_prefix is False

    def test_empty_yaml_returns_defaults(self, tmp_path):
        config_path = tmp_path / "release.yml"
        config_path.write_text("", encoding='utf-8')
        assert load_configuration(config_path) == DEFAULT_CONFIGURATION

    def test_invalid_yaml_raises(self, tmp_path):
        config_path = tmp_path / "release.yml"
        config_path.write_text("{{invalid: yaml: content::", encoding='utf-8')
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_configuration(config_path)

    def test_invalid_json_raises(self, tmp_path):
        config_path = tmp_path / "release.json"
        config_path.write_text('{"order": [', encoding='utf-8')
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_configuration(config_path)

    def test_non_mapping_raises(self, tmp_path):
        config_path = tmp_path / "release.yml"
        config_path.write_text("- features\n- fixes\n", encoding='utf-8')
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_configuration(config_path)

    def test_extensionless_json_joins_escaped_emoji(self, tmp_path):
        config_path = tmp_path / "changelog-config"
        config_path.write_text('{"emojis": {"features": "\\ud83d\\ude80"}}', encoding='utf-8')
        result = load_configuration(config_path)
        assert dict(result.emojis) == {'features': '🚀'}

    def test_extensionless_yaml_falls_back(self, tmp_path):
        config_path = tmp_path / "changelog-config"
        config_path.write_text("order:\n  - fixes\n", encoding='utf-8')
        assert load_configuration(config_path).order == ('fixes',)

    def test_not_utf8_raises(self, tmp_path):
        config_path = tmp_path / "release.yml"
        config_path.write_bytes(b"order: [\xff]\n")
        with pytest.raises(ConfigurationError, match="Cannot read configuration"):
            load_configuration(config_path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read configuration"):
            load_configuration(tmp_path / "nope.yml")
