"""Configuration management with XDG paths and precedence resolution.

hurl reads (never writes) a single JSON file of defaults:

* **Location** -- XDG Base Directory compliant on Linux/BSD
  (``$XDG_CONFIG_HOME/hurl/config.json``, default ``~/.config/hurl/``),
  ``~/.hurl/config.json`` on macOS and Windows. ``HURL_CONFIG`` points at
  an explicit file instead. See :func:`get_config_path`.
* **Schema** -- :class:`~hurl.models.HurlConfig`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables (``HURL_SECURE``, ``HURL_TIMEOUT``,
  ``HURL_VERIFY_SSL``) and the file into the effective configuration.

Example ``config.json``::

    {
      "secure": true,
      "timeout": 10,
      "default_headers": {"User-Agent": "hurl"}
    }
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

from hurl.exceptions import ConfigError
from hurl.models import HurlConfig

_APP_NAME = "hurl"
_CONFIG_FILENAME = "config.json"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# --- where the file lives ---


def _is_xdg_platform() -> bool:
    """Linux and the BSDs keep user config under XDG_CONFIG_HOME."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory. It is not created.

    On Linux/BSD: ``$XDG_CONFIG_HOME/hurl/`` (default ``~/.config/hurl/``).
    On macOS/Windows: ``~/.hurl/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


def get_config_path() -> Path:
    """Return the config file path, honouring ``HURL_CONFIG``."""
    explicit = os.environ.get("HURL_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    return get_config_dir() / _CONFIG_FILENAME


# --- reading ---


def load_config(path: Optional[Path] = None) -> HurlConfig:
    """Load the config file.

    Args:
        path: File to read; defaults to :func:`get_config_path`.

    Returns:
        The deserialised :class:`~hurl.models.HurlConfig`. If the file does
        not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = path or get_config_path()
    if not path.is_file():
        return HurlConfig()
    try:
        return HurlConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config at {path}: {exc}") from exc


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got '{raw}'")


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got '{raw}'") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got '{raw}'")
    return value


# --- merging sources ---


def resolve_config(
    cli_secure: Optional[bool] = None,
    cli_timeout: Optional[float] = None,
    path: Optional[Path] = None,
) -> HurlConfig:
    """Merge defaults, the config file, ``HURL_*`` variables and CLI flags.

    Precedence (high to low):
        1. CLI flags (``cli_secure``, ``cli_timeout``); ``None`` or
           ``False`` for ``--secure`` means "not given".
        2. Environment variables (``HURL_SECURE``, ``HURL_TIMEOUT``,
           ``HURL_VERIFY_SSL``)
        3. Config file
        4. Defaults

    Returns:
        The effective :class:`~hurl.models.HurlConfig`.

    Raises:
        ConfigError: On an invalid file or environment value.
    """
    # 4 + 3. File (fills in defaults automatically)
    config = load_config(path)

    # 2. Environment
    env_secure = _env_bool("HURL_SECURE")
    if env_secure is not None:
        config.secure = env_secure
    env_timeout = _env_float("HURL_TIMEOUT")
    if env_timeout is not None:
        config.timeout = env_timeout
    env_verify = _env_bool("HURL_VERIFY_SSL")
    if env_verify is not None:
        config.verify_ssl = env_verify

    # 1. CLI flags
    if cli_secure:
        config.secure = True
    if cli_timeout is not None:
        config.timeout = cli_timeout

    return config
