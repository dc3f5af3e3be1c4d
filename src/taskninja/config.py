"""Configuration management for TaskNinja."""

from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional
import logging
import os

import yaml
from dotenv import load_dotenv
from rich.errors import StyleSyntaxError
from rich.style import Style

from .exceptions import ReadError, SaveError

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class ColorConfig:
    """Rich style definitions used when printing responses and tasks."""
    error: str = "red"
    flag: str = "underline"
    success: str = "green"
    default: str = "default"
    complete: str = "cyan"
    incomplete: str = "red"

    @classmethod
    def from_dict(cls, data: dict) -> "ColorConfig":
        defaults = cls()
        values = {}
        for name in asdict(defaults):
            value = str(data.get(name, getattr(defaults, name)))
            try:
                Style.parse(value)
            except StyleSyntaxError as e:
                raise ReadError(f"invalid {name} color '{value}': {e}", target="config") from e
            values[name] = value
        return cls(**values)


@dataclass
class PathConfig:
    """Path configuration."""
    base: Path = field(default_factory=lambda: Path("~/.taskninja").expanduser())

    @property
    def config_file(self) -> Path:
        return self.base / "config.yaml"

    @property
    def data_file(self) -> Path:
        return self.base / "tasks.json"


@dataclass
class Config:
    """Main configuration class."""
    data_file: Path = field(default_factory=lambda: PathConfig().data_file)
    time_24_hour: bool = False
    date_numerical: bool = False
    colors: ColorConfig = field(default_factory=ColorConfig)
    paths: PathConfig = field(default_factory=PathConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load the built-in defaults, honoring environment overrides."""
        paths = PathConfig(base=Path(os.getenv("TASKNINJA_HOME", "~/.taskninja")).expanduser())
        data_file = os.getenv("TASKNINJA_DATA_FILE")
        return cls(
            data_file=Path(data_file).expanduser() if data_file else paths.data_file,
            paths=paths,
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )

    @property
    def config_file(self) -> Path:
        override = os.getenv("TASKNINJA_CONFIG")
        return Path(override).expanduser() if override else self.paths.config_file

    def to_dict(self) -> dict:
        """Convert to the persisted form."""
        return {
            "data_file": str(self.data_file),
            "time_24_hour": self.time_24_hour,
            "date_numerical": self.date_numerical,
            "colors": asdict(self.colors),
        }

    def merged(self, data: dict) -> "Config":
        """Return a copy with persisted values applied on top of this one."""
        colors = data.get("colors") or {}
        if not isinstance(colors, dict):
            raise ReadError("'colors' must be a mapping", target="config")

        data_file = data.get("data_file")
        if data_file is not None and not isinstance(data_file, str):
            raise ReadError("'data_file' must be a path", target="config")

        switches = {}
        for name in ("time_24_hour", "date_numerical"):
            value = data.get(name, getattr(self, name))
            if not isinstance(value, bool):
                raise ReadError(f"'{name}' must be true or false", target="config")
            switches[name] = value

        return Config(
            data_file=Path(data_file or self.data_file).expanduser(),
            **switches,
            colors=ColorConfig.from_dict({**asdict(self.colors), **colors}),
            paths=self.paths,
            log_level=self.log_level,
        )

    def read(self, path: Optional[Path] = None) -> "Config":
        """
        Read the persisted configuration.

        Args:
            path: Config file (defaults to ``config_file``)

        Returns:
            New Config with file values applied

        Raises:
            ReadError: Missing file, bad YAML, or bad values
        """
        path = path or self.config_file
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ReadError(f"cannot open {path}: {e.strerror}", target="config") from e
        except yaml.YAMLError as e:
            raise ReadError(f"invalid YAML in {path}: {e}", target="config") from e

        if not isinstance(data, dict):
            raise ReadError(f"{path} does not contain a mapping", target="config")

        return self.merged(data)

    def save(self, path: Optional[Path] = None):
        """Write this configuration to disk."""
        path = path or self.config_file
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    self.to_dict(),
                    f,
                    allow_unicode=True,
                    default_flow_style=False,
                    sort_keys=False,
                )
        except OSError as e:
            raise SaveError(f"cannot write {path}: {e.strerror}", target="config") from e


def load_config(path: Optional[Path] = None, base: Optional[Config] = None) -> tuple[Config, Optional[ReadError]]:
    """
    Load the persisted configuration, falling back to the defaults.

    When the file cannot be read, the defaults are written out in its
    place (best effort) and the read error is returned alongside them so
    the caller can report it.

    Returns:
        (config, read_error or None)
    """
    base = base or Config.from_env()
    try:
        return base.read(path), None
    except ReadError as e:
        target = path or base.config_file
        if not target.exists():
            try:
                base.save(target)
            except SaveError as save_error:
                logger.warning("%s", save_error)
        return base, e


# Global config instance
config = Config.from_env()
