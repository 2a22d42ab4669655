"""Where customerhub keeps its SQLite database."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "customerhub"
DEFAULT_DB_FILENAME: Final[str] = "customerhub.db"


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Data directory, resolved to an absolute path on construction."""

    data_dir: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "data_dir", self.data_dir.expanduser().resolve())

    def resolve_data_dir(self) -> Path:
        return self.data_dir

    def database_uri(self) -> str:
        """SQLite URI inside the data directory, creating the directory if needed."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{self.data_dir / DEFAULT_DB_FILENAME}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    override = os.getenv("CUSTOMERHUB_DATA_DIR")
    return StorageConfig(Path(override) if override else _platform_data_home() / APP_DIR_NAME)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` when set, else the SQLite file in the data directory."""

    uri = os.getenv("DATABASE_URI")
    if not uri:
        return DatabaseConfig((storage or get_storage_config()).database_uri())
    try:
        make_url(uri)
    except ArgumentError as exc:
        raise ConfigurationError(f"DATABASE_URI is not a database URL: {uri!r}") from exc
    return DatabaseConfig(uri)
