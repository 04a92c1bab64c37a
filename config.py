"""
Application configuration.

Defaults can be overridden by a JSON file in the user's config directory
and by SIGNET_* environment variables.
"""
from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "https://signature-injection-engine-backend-iosb.onrender.com"


@dataclass(frozen=True)
class AppConfig:
    backend_base_url: str = DEFAULT_BACKEND_URL
    request_timeout: float = 60.0

    # Zoom
    default_zoom: float = 1.0
    min_zoom: float = 0.5
    max_zoom: float = 2.0
    zoom_step: float = 0.1

    # Pixels per PDF point at zoom 1.0
    render_dpi_scale: float = 1.0

    # Viewer width per view mode
    desktop_max_width: int = 900
    mobile_max_width: int = 420

    # Padding between the page container and the page surface
    page_inset: int = 12

    signature_formats: tuple = ("png", "jpg", "jpeg")


def default_config_path() -> str:
    if os.name == "nt":  # Windows
        base_dir = os.environ.get("APPDATA", os.path.expanduser("~"))
        return os.path.join(base_dir, "Signet", "config.json")
    base_dir = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(base_dir, "signet", "config.json")


def _read_config_file(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", path)
        return {}
    return data


def _coerce(value, default):
    if isinstance(default, tuple):
        if isinstance(value, str):
            return (value,)
        return tuple(value)
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, (int, float, str)):
        return type(default)(value)
    return value


def load_config(path: Optional[str] = None, environ: Optional[dict] = None) -> AppConfig:
    """
    Build the configuration from defaults, a JSON file and the environment.

    Args:
        path: JSON file to read; defaults to default_config_path()
        environ: Environment mapping; defaults to os.environ

    Returns:
        The resolved AppConfig
    """
    environ = os.environ if environ is None else environ
    defaults = AppConfig()
    known = {f.name: getattr(defaults, f.name) for f in dataclasses.fields(AppConfig)}

    overrides = {}
    for key, value in _read_config_file(path or default_config_path()).items():
        if key not in known:
            logger.warning("Unknown config key %r ignored", key)
            continue
        try:
            overrides[key] = _coerce(value, known[key])
        except (TypeError, ValueError):
            logger.warning("Invalid value for config key %r ignored: %r", key, value)

    if environ.get("SIGNET_BACKEND_URL"):
        overrides["backend_base_url"] = environ["SIGNET_BACKEND_URL"]
    if environ.get("SIGNET_REQUEST_TIMEOUT"):
        try:
            overrides["request_timeout"] = float(environ["SIGNET_REQUEST_TIMEOUT"])
        except ValueError:
            logger.warning("Invalid SIGNET_REQUEST_TIMEOUT ignored: %r",
                           environ["SIGNET_REQUEST_TIMEOUT"])

    if "backend_base_url" in overrides:
        overrides["backend_base_url"] = overrides["backend_base_url"].rstrip("/")

    return dataclasses.replace(defaults, **overrides)
