"""Settings for the built-in rules: default messages and tunables.

Settings are flat dotted keys. They can be loaded from a dictionary (nested
dictionaries are flattened) or from a YAML or JSON file:

```yaml
messages:
  not_blank: "This field is required"
  min: "{value} is below the minimum of {min}"
email:
  local_part_max_length: 64
```

Built-in rules read their defaults when they are created, so load settings
before building rules.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "messages.assert_true": "Boolean flag must be true",
    "messages.assert_false": "Boolean flag must be false",
    "messages.not_blank": "Field or property required",
    "messages.not_empty": "Field or property required",
    "messages.max": "Input {value} must be at most {max}.",
    "messages.min": "Input {value} must be at least {min}.",
    "messages.between": "{value} must be between [{min}, {max}]",
    "messages.digits": "{value} number must have {integers} digits and {fractions} fractions",
    "messages.digits_int": "{value} number must have {integers} digits",
    "messages.size": "{value} size be between [{min}, {max}]",
    "messages.pattern": "{pattern} is not matching {value}",
    "messages.email": "{value} is invalid e-mail.",
    "email.local_part_max_length": 64,
}


class _Fields(dict):
    """Leaves unknown placeholders untouched when formatting."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def format_template(template: str, **fields: Any) -> str:
    """Format ``template`` with named fields; unknown placeholders are kept."""
    return template.format_map(_Fields(fields))


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{name}."))
        else:
            flat[name] = value
    return flat


class Settings:
    """Manages default messages and tunables for the built-in rules."""

    def __init__(self, defaults: dict[str, Any] | None = None) -> None:
        self._defaults = copy.deepcopy(defaults if defaults is not None else DEFAULT_SETTINGS)
        self._settings: dict[str, Any] = copy.deepcopy(self._defaults)

    def load(self, source: Union[str, Path, dict]) -> None:
        """Load settings from a dictionary or a YAML/JSON file.

        Args:
            source: File path or dictionary

        Raises:
            SettingsError: If the source cannot be loaded
        """
        if isinstance(source, dict):
            self.load_settings(source)
        elif isinstance(source, (str, Path)):
            self.load_file(source)
        else:
            raise SettingsError(f"Invalid settings source type: {type(source)}")

    def load_settings(self, settings: dict[str, Any]) -> None:
        """Merge settings from a dictionary; later loads override earlier ones.

        Args:
            settings: Settings dictionary, flat dotted keys or nested
        """
        for key, value in _flatten(settings).items():
            if key not in self._defaults:
                logger.warning(f"Unknown setting: {key}")
            self._settings[key] = value

    def load_file(self, path: Union[str, Path]) -> None:
        """Load settings from a YAML or JSON file.

        Args:
            path: Path to the settings file
        """
        path = Path(path).resolve()
        if not path.exists():
            raise SettingsError(f"Settings file not found: {path}", context={"path": str(path)})

        logger.info(f"Loading settings from {path}")

        suffix = path.suffix.lower()
        with open(path, encoding="utf-8") as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise SettingsError(f"Unsupported file format: {suffix}", context={"path": str(path)})

        if data:
            if not isinstance(data, dict):
                raise SettingsError(f"Settings file must contain a mapping: {path}")
            self.load_settings(data)

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Dotted setting key
            default: Default value if not found

        Returns:
            Setting value or default
        """
        return self._settings.get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        self._settings[key] = value

    def message(self, name: str) -> str:
        """Default message template of the built-in rule ``name``."""
        return str(self._settings.get(f"messages.{name}", name))

    def reset(self) -> None:
        """Restore the defaults."""
        self._settings = copy.deepcopy(self._defaults)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._settings)


settings = Settings()


def load_settings(source: Union[str, Path, dict]) -> None:
    """Load settings into the shared ``settings`` instance."""
    settings.load(source)


__all__ = ["DEFAULT_SETTINGS", "Settings", "settings", "load_settings", "format_template"]
