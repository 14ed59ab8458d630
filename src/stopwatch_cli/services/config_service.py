"""Configuration service for the persisted stopwatch settings.

The only persisted setting is the display interval. It is read once when
the stopwatch starts up and written once when it shuts down. Everything else
(elapsed time, laps) lives in memory only.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir
from pydantic import ValidationError

from stopwatch_cli.models.config_models import StopwatchConfig
from stopwatch_cli.models.stopwatch.exceptions import ConfigError
from stopwatch_cli.utils.logger import get_logger


class ConfigService:
    """Loads and saves ``config.json`` in the user config directory."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding ``config.json``. Defaults to the
                platform's user config directory.
        """
        if config_dir is None:
            config_dir = Path(user_config_dir("stopwatch_cli"))

        self.config_dir = Path(config_dir)
        self.config_path = self.config_dir / "config.json"

    def load_config(self) -> StopwatchConfig:
        """Read and validate the config file.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        try:
            with open(self.config_path, encoding="utf-8") as f:
                return StopwatchConfig.model_validate_json(f.read())
        except FileNotFoundError as e:
            raise ConfigError(f"No config file at {self.config_path}") from e
        except (ValidationError, UnicodeDecodeError) as e:
            raise ConfigError(f"Invalid data in config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Unable to open config file for reading: {e}") from e

    def save_config(self, config: StopwatchConfig) -> None:
        """Write *config* to disk.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(config.model_dump_json(indent=4))
        except OSError as e:
            raise ConfigError(f"Unable to open config file for writing: {e}") from e
        get_logger().debug("saved config to %s", self.config_path)

    def reset_config(self) -> None:
        """Delete the config file so the next load falls back to defaults."""
        if self.config_path.exists():
            self.config_path.unlink()

    def load_display_interval(self) -> float:
        """Return the persisted display interval in seconds."""
        return self.load_config().display_interval

    def save_display_interval(self, seconds: float) -> None:
        """Persist *seconds* as the display interval."""
        try:
            config = StopwatchConfig(display_interval=seconds)
        except ValidationError as e:
            raise ConfigError(f"Invalid display interval: {seconds}") from e
        self.save_config(config)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    return ConfigService()
