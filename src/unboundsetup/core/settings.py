"""Settings loading: defaults, YAML file, then environment overrides."""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from unboundsetup.core.errors import SettingsError
from unboundsetup.core.models import Settings

ENV_PREFIX = "UNBOUND_SETUP_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SettingsError(f"Settings file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}")

    if not isinstance(data, dict):
        raise SettingsError(f"{path}: expected a mapping at the top level")
    return data


def _coerce(field: str, raw: str) -> Any:
    """Convert an environment string to the shape the field expects."""
    annotation = Settings.model_fields[field].annotation

    if annotation is bool:
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise SettingsError(f"{ENV_PREFIX}{field.upper()}: expected a boolean, got {raw!r}")

    if annotation == list[str]:
        return [item.strip() for item in raw.split(",") if item.strip()]

    if field == "log_file" and raw.strip().lower() in ("", "none"):
        return None

    return raw


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for field in Settings.model_fields:
        key = f"{ENV_PREFIX}{field.upper()}"
        if key in environ:
            overrides[field] = _coerce(field, environ[key])
    return overrides


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from defaults, an optional YAML file and the environment."""
    if environ is None:
        environ = os.environ

    data: dict[str, Any] = {}
    if path is not None:
        data.update(_load_file(Path(path)))
    data.update(_env_overrides(environ))

    try:
        return Settings(**data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}")
