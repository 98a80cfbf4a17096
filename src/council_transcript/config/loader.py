"""Layered configuration: YAML files, then COUNCIL_TRANSCRIPT__* variables."""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from council_transcript.config.schema import TranscriptConfig
from council_transcript.core.exceptions import ConfigError
from council_transcript.utils.logging import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "COUNCIL_TRANSCRIPT"
_TRUE = {"true", "yes"}
_FALSE = {"false", "no"}
_NULL = {"null", "none"}


def deep_merge(base: dict, override: dict) -> dict:
    """Return a new dict with `override` merged into `base`.

    Nested dicts are copied, never shared with either argument.
    """
    merged = {key: _copy_dicts(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy_dicts(value)
    return merged


def _copy_dicts(value: Any) -> Any:
    return deep_merge({}, value) if isinstance(value, dict) else value


def load_yaml(path: Path) -> dict[str, Any]:
    """Read one YAML layer.

    Raises:
        ConfigError: If the file is missing, invalid YAML, or not a mapping
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def apply_env_overrides(
    config: dict[str, Any],
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Overlay `{PREFIX}__{SECTION}__{KEY}` variables onto a config dict.

    COUNCIL_TRANSCRIPT__ALIGNMENT__GRACE_WINDOW_SECONDS=0.5 sets
    `alignment.grace_window_seconds`. The input dict is left untouched.
    """
    environ = os.environ if environ is None else environ
    marker = f"{prefix}__"
    result = deep_merge({}, config)

    for name in sorted(k for k in environ if k.startswith(marker)):
        *sections, key = name[len(marker):].lower().split("__")

        target = result
        for section in sections:
            if not isinstance(target.get(section), dict):
                target[section] = {}
            target = target[section]

        target[key] = _convert_value(environ[name])
        logger.debug(f"Env override: {'.'.join([*sections, key])} = {environ[name]}")

    return result


def _convert_value(raw: str) -> Any:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    if lowered in _NULL:
        return None
    if not any(ch.isdigit() for ch in raw):
        return raw

    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def _layers(config_path: Path | str | None, env: str | None, config_dir: Path) -> list[Path]:
    """Files to merge, lowest precedence first. Optional layers that don't exist are skipped."""
    layers = [config_dir / "base.yaml"]
    if env:
        layers.append(config_dir / f"{env}.yaml")
    layers = [path for path in layers if path.exists()]
    if config_path:
        layers.append(Path(config_path))  # explicit file must exist
    return layers


def load_config(
    config_path: Path | str | None = None,
    env: str | None = None,
    config_dir: Path | str = "configs",
    environ: Mapping[str, str] | None = None,
    overrides: dict[str, Any] | None = None,
) -> TranscriptConfig:
    """Build a TranscriptConfig.

    Precedence, lowest first: schema defaults, `base.yaml`, `{env}.yaml`,
    `config_path`, environment variables, `overrides` (command-line flags).

    Raises:
        ConfigError: If a layer cannot be read or the result fails validation
    """
    config: dict[str, Any] = {}
    for path in _layers(config_path, env, Path(config_dir)):
        logger.debug(f"Loading config layer: {path}")
        config = deep_merge(config, load_yaml(path))

    config = apply_env_overrides(config, environ=environ)
    if overrides:
        config = deep_merge(config, overrides)

    try:
        return TranscriptConfig(**config)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
