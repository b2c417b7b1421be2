"""
Configuration management for the stocks CLI.

Static defaults live on Settings (overridable through the environment or a
.env file). The storage backend chosen during `init` is persisted in
config/settings.json and read back by every other command.
"""

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from storage.base import SnapshotStore

load_dotenv(os.path.join(Path(__file__).parent, ".env"))

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the persisted configuration is missing or invalid."""
    pass


def _optional_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value else None


class Settings:
    """CLI configuration."""

    # Paths
    BASE_DIR: Path = Path(__file__).parent
    CONFIG_DIR: Path = Path(os.getenv("STOCKS_CONFIG_DIR", str(BASE_DIR / "config")))
    SETTINGS_FILE: str = "settings.json"
    STOCKS_FILE: str = "stocks.txt"
    DEFAULT_DB_PATH: str = str(BASE_DIR / "data" / "stocks.db")

    # Network (None = transport default, i.e. no timeout)
    REQUEST_TIMEOUT: Optional[float] = _optional_float(os.getenv("STOCKS_REQUEST_TIMEOUT"))


settings = Settings()


class StoreSettings(BaseModel):
    """Backend selection persisted by `init` / `set-db`."""
    mode: Literal["file", "database"]
    database_path: str = settings.DEFAULT_DB_PATH


def settings_path(config_dir: Optional[Path] = None) -> Path:
    return Path(config_dir or settings.CONFIG_DIR) / settings.SETTINGS_FILE


def load_settings(config_dir: Optional[Path] = None) -> StoreSettings:
    """
    Read config/settings.json.

    Raises:
        ConfigError: if the file is missing, not JSON, or fails validation
    """
    path = settings_path(config_dir)
    if not path.exists():
        raise ConfigError(
            "It seems that you haven't set a mode yet. Run 'init' first."
        )

    try:
        with open(path, "r") as f:
            raw = json.load(f)
        return StoreSettings(**raw)
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        raise ConfigError(f"Settings file {path} is not readable: {e}") from e


def save_settings(store_settings: StoreSettings, config_dir: Optional[Path] = None) -> Path:
    path = settings_path(config_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(store_settings.model_dump(), f, indent=4)
    logger.debug(f"Saved settings to {path}")
    return path


def open_store(store_settings: StoreSettings, config_dir: Optional[Path] = None) -> SnapshotStore:
    """Instantiate the backend named by the persisted mode."""
    if store_settings.mode == "database":
        from storage.database import DatabaseManager
        return DatabaseManager(db_path=store_settings.database_path)

    from storage.flat_file import FlatFileStore
    return FlatFileStore(Path(config_dir or settings.CONFIG_DIR) / settings.STOCKS_FILE)
