"""Site admin configuration.

Loads settings from a single YAML file (``siteadmin.settings.yaml``) into
pydantic models. The file is looked up via the ``SITEADMIN_SETTINGS``
environment variable, falling back to the working directory.

Path resolution:
  * ``storage.root`` relative to the settings file directory (or the
    working directory when no file is found)
  * ``storage.config_path`` / ``storage.creds_path`` relative to the root
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILE = Path("siteadmin.settings.yaml")
SETTINGS_ENV = "SITEADMIN_SETTINGS"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    # Loopback by default so admin endpoints are not exposed to the LAN.
    host:            str       = "127.0.0.1"
    port:            int       = 3000
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseModel):
    level: str = "info"


class StorageSettings(BaseModel):
    root:             str = "."
    config_path:      str = "assets/site-content.json"
    creds_path:       str = "server-data/admins.json"
    max_config_bytes: int = 5 * 1024 * 1024

    @property
    def root_dir(self) -> Path:
        return Path(self.root)

    @property
    def config_file(self) -> Path:
        return self.root_dir / self.config_path

    @property
    def creds_file(self) -> Path:
        return self.root_dir / self.creds_path


class AppConfig(BaseModel):
    server:  ServerSettings  = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------


def _apply_env_overrides(config: AppConfig) -> None:
    host = os.environ.get("SITEADMIN_HOST")
    if host:
        config.server.host = host

    port = os.environ.get("SITEADMIN_PORT")
    if port:
        try:
            config.server.port = int(port)
        except ValueError:
            logger.warning("Ignoring non-numeric SITEADMIN_PORT=%r", port)

    root = os.environ.get("SITEADMIN_STORAGE_ROOT")
    if root:
        config.storage.root = root


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(settings_path: Optional[Path] = None) -> AppConfig:
    """Load settings from YAML and apply environment overrides.

    Args:
        settings_path: Explicit settings file. Defaults to ``$SITEADMIN_SETTINGS``
            or ``siteadmin.settings.yaml`` in the working directory.

    Returns:
        The loaded configuration with ``storage.root`` made absolute.
    """
    if settings_path is None:
        settings_path = Path(os.environ.get(SETTINGS_ENV, SETTINGS_FILE))
    settings_path = Path(settings_path)

    data = _load_yaml(settings_path)
    config = AppConfig(**data)
    _apply_env_overrides(config)

    base_dir = settings_path.resolve().parent if settings_path.exists() else Path.cwd()
    root = Path(config.storage.root).expanduser()
    if not root.is_absolute():
        root = base_dir / root
    config.storage.root = str(root)

    logger.info(
        "Settings loaded (server=%s:%s, storage.root=%s)",
        config.server.host,
        config.server.port,
        config.storage.root,
    )
    return config


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[AppConfig]) -> None:
    """Replace (or clear) the process-wide config."""
    global _config
    _config = config
