"""Tests for settings loading."""

import json

import pytest

from composer_modifier.core.errors import SettingsError
from composer_modifier.core.settings import SETTINGS_ENV_VAR, ModifierSettings, load_settings


class TestModifierSettings:
    def test_defaults(self):
        s = ModifierSettings()
        assert s.indent == 4
        assert s.manifest_file == "composer.json"
        assert s.directive_file == "modify-composer.json"
        assert s.dry_run is False

    def test_from_dict(self):
        s = ModifierSettings.from_dict({"indent": 2, "dry_run": True})
        assert s.indent == 2
        assert s.dry_run is True
        assert s.manifest_file == "composer.json"

    def test_unknown_key(self):
        with pytest.raises(SettingsError, match="unknown field 'colour'"):
            ModifierSettings.from_dict({"colour": "blue"})

    def test_wrong_type(self):
        with pytest.raises(SettingsError, match="indent: Input should be a valid integer"):
            ModifierSettings.from_dict({"indent": "4"})

    def test_bool_is_not_an_int(self):
        with pytest.raises(SettingsError):
            ModifierSettings.from_dict({"indent": True})

    def test_negative_indent(self):
        with pytest.raises(SettingsError, match="greater than or equal to 0"):
            ModifierSettings.from_dict({"indent": -1})

    def test_not_an_object(self):
        with pytest.raises(SettingsError):
            ModifierSettings.from_dict(["indent"])

    def test_to_dict(self):
        assert ModifierSettings().to_dict()["directive_file"] == "modify-composer.json"


class TestLoadSettings:
    def test_defaults_without_file(self, monkeypatch):
        monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
        assert load_settings() == ModifierSettings()

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"indent": 2}))
        assert load_settings(path).indent == 2

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"manifest_file": "app/composer.json"}))
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
        assert load_settings().manifest_file == "app/composer.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError, match="settings file not found"):
            load_settings(tmp_path / "nope.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{indent: 2")
        with pytest.raises(SettingsError, match="cannot read settings file"):
            load_settings(path)
