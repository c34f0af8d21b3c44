"""
Settings for composer-modifier.

Defaults can be overridden by a JSON settings file, passed with ``--config``
or named by the COMPOSER_MODIFIER_CONFIG environment variable:

    {
        "indent": 2,
        "manifest_file": "app/composer.json",
        "directive_file": "app/modify-composer.json",
        "dry_run": true
    }

Command-line flags take precedence over both.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, ValidationError

from composer_modifier.core.errors import SettingsError
from composer_modifier.models.base import NonNegativeInt, describe_validation_error
from composer_modifier.models.directive import DIRECTIVE_FILE_NAME
from composer_modifier.models.manifest import MANIFEST_FILE_NAME

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "COMPOSER_MODIFIER_CONFIG"


class ModifierSettings(BaseModel):
    """Runtime settings shared by the CLI and the orchestrator."""

    model_config = ConfigDict(extra="forbid")

    indent: NonNegativeInt = 4
    manifest_file: StrictStr = MANIFEST_FILE_NAME
    directive_file: StrictStr = DIRECTIVE_FILE_NAME
    dry_run: StrictBool = False

    def to_dict(self) -> dict:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict) -> "ModifierSettings":
        """Build settings from a dict, rejecting unknown keys and wrong types."""
        if not isinstance(data, dict):
            raise SettingsError("settings must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SettingsError(describe_validation_error(e, data)) from e


def load_settings(path: Path | None = None) -> ModifierSettings:
    """
    Load settings from `path`, else from $COMPOSER_MODIFIER_CONFIG, else
    return the defaults.
    """
    if path is None:
        env_path = os.environ.get(SETTINGS_ENV_VAR)
        if not env_path:
            return ModifierSettings()
        path = Path(env_path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SettingsError(f"settings file not found: {path}") from None
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"cannot read settings file {path}: {e}") from e

    settings = ModifierSettings.from_dict(data)
    logger.debug(f"Loaded settings from {path}: {settings.to_dict()}")
    return settings
