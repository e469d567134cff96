import dataclasses
import json
import logging
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any


logger = logging.getLogger(__name__)


@dataclass
class DatabaseConfig:
    host: str = "localhost"
    port: int = 5432
    name: str = "contacts"
    user: str = "contacts"
    password: str = ""

    @property
    def conninfo(self) -> str:
        return (
            f"host={self.host} port={self.port} "
            f"dbname={self.name} user={self.user} password={self.password}"
        )


@dataclass
class SessionConfig:
    expire_minutes: int = 24 * 60


@dataclass
class PasswordConfig:
    """Argon2 cost parameters; memory_cost is in KiB."""

    time_cost: int = 3
    memory_cost: int = 65536
    parallelism: int = 4


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "text"  # "text" or "json"


def _section(cls: type, data: dict[str, Any] | None) -> Any:
    """Build a config section, ignoring keys the dataclass doesn't know."""
    known = {f.name for f in dataclasses.fields(cls)}
    return cls(**{k: v for k, v in (data or {}).items() if k in known})


@dataclass
class AppConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    password: PasswordConfig = field(default_factory=PasswordConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    loaded_from: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        return cls(
            database=_section(DatabaseConfig, data.get("database")),
            session=_section(SessionConfig, data.get("session")),
            password=_section(PasswordConfig, data.get("password")),
            logging=_section(LoggingConfig, data.get("logging")),
        )

    @classmethod
    def load(cls) -> "AppConfig":
        config_path = os.environ.get("CONFIG_FILE", "/run/secrets/config.json")
        path = pathlib.Path(config_path)

        if path.exists():
            with open(path) as f:
                data = json.load(f)
            config = cls.from_dict(data)
            config.loaded_from = str(path)
            return config

        logger.warning("Config file not found at %s, using defaults", config_path)
        return cls()
