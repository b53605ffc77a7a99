"""Configuration: YAML file, then BLOGBOARD_* environment overrides."""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from blogboard.errors import ConfigError
from blogboard.model.node import Node

DEFAULTS = {
    "api-url": "http://localhost:8080/api",
    "token": "",
    "timeout": 10.0,
    "page-size": 10,
    "state-dir": "~/.local/state/blogboard",
}

ENV_PREFIX = "BLOGBOARD_"
CONFIG_ENV = "BLOGBOARD_CONFIG"


def _python_key(file_key: str) -> str:
    """Convert file-style key (hyphenated) to Python-style (underscored)."""
    return file_key.replace("-", "_")


def _env_key(file_key: str) -> str:
    return ENV_PREFIX + file_key.replace("-", "_").upper()


def _coerce(file_key: str, raw: Any) -> Any:
    """Type-coerce a value using the type of its default."""
    default = DEFAULTS.get(file_key)
    if default is None or raw is None:
        return raw
    try:
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {file_key}: {raw!r}") from exc
    return str(raw)


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ
    if environ.get(CONFIG_ENV):
        return Path(environ[CONFIG_ENV]).expanduser()
    base = environ.get("XDG_CONFIG_HOME") or "~/.config"
    return Path(base).expanduser() / "blogboard" / "config.yaml"


def read_config_file(path: Path) -> dict[str, Any]:
    """Read the YAML config file. A missing file is an empty config."""
    try:
        text = path.read_text()
    except FileNotFoundError:
        return {}
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data


def load_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Node:
    """Build the effective configuration.

    Precedence, lowest first: DEFAULTS, the YAML file, environment
    variables (``BLOGBOARD_API_URL``, ``BLOGBOARD_TOKEN``, ...). Keys come
    back Python-style, e.g. ``config.api_url``.
    """
    environ = os.environ if environ is None else environ
    config_path = Path(path).expanduser() if path else default_config_path(environ)

    values: dict[str, Any] = dict(DEFAULTS)
    for key, raw in read_config_file(config_path).items():
        values[str(key).replace("_", "-")] = raw
    for key in DEFAULTS:
        if _env_key(key) in environ:
            values[key] = environ[_env_key(key)]

    return Node(**{_python_key(k): _coerce(k, v) for k, v in values.items()})
