"""Configuration management for botbus.

Loads YAML settings (settings.yaml) and environment variables (.env)
into a Config object. Property getters provide typed access with
defaults for the command bus and logging.

Key classes:
    Config: Central configuration manager.

Key functions:
    get_config: Singleton accessor for the global Config instance.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

import structlog
import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError

logger = structlog.get_logger("botbus.config")


class Config:
    """Central configuration manager for botbus.

    Loads settings.yaml and .env from the config directory. Read-only
    after __init__.

    Args:
        config_dir: Path to the config directory. Defaults to
            ``<repo_root>/config/``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(__file__).parent.parent / "config"
        self.config_dir = Path(config_dir)

        env_file = self.config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if not filepath.exists():
            return {}
        with open(filepath, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"{filename} must contain a mapping", setting_name=filename
            )
        return data

    def validate(self) -> None:
        """Check settings at startup.

        Raises ConfigError for values the bus cannot run with; logs a
        warning for settings that are merely suspicious.
        """
        if not self.commands:
            logger.warning("no_commands_configured", config_dir=str(self.config_dir))
        logger.debug(
            "config_validated",
            case_sensitive=self.case_sensitive_commands,
            fallback=self.fallback_command,
            bot_username=self.bot_username,
        )

    # --- Command bus ---

    @property
    def bot_username(self) -> Optional[str]:
        """This bot's username. Env var BOTBUS_BOT_USERNAME takes precedence."""
        username = os.environ.get("BOTBUS_BOT_USERNAME") or self.settings.get("bot_username")
        if username:
            return str(username).lstrip("@")
        return None

    @property
    def commands(self) -> List[str]:
        """Dotted import paths of commands to register at startup."""
        commands = self.settings.get("commands", [])
        if commands is None:
            return []
        if not isinstance(commands, list) or not all(isinstance(c, str) for c in commands):
            raise ConfigError(
                "commands must be a list of import paths",
                setting_name="commands",
                type=type(commands).__name__,
            )
        return list(commands)

    @property
    def fallback_command(self) -> Optional[str]:
        """Command run for unknown names (default: none)."""
        fallback = self.settings.get("fallback_command")
        if fallback is None or fallback == "":
            return None
        if not isinstance(fallback, str):
            raise ConfigError(
                "fallback_command must be a command name",
                setting_name="fallback_command",
            )
        return fallback.lstrip("/")

    @property
    def case_sensitive_commands(self) -> bool:
        """Whether command lookup is case-sensitive (default True)."""
        value = self.settings.get("case_sensitive_commands", True)
        if not isinstance(value, bool):
            raise ConfigError(
                "case_sensitive_commands must be true or false",
                setting_name="case_sensitive_commands",
            )
        return value

    # --- Logging ---

    @property
    def _logging_settings(self) -> dict:
        """The logging: section; an empty section loads as None."""
        return self.settings.get("logging") or {}

    @property
    def log_dir(self) -> Path:
        """Get log directory path."""
        configured = self.settings.get("log_dir")
        if configured:
            return Path(configured).expanduser()
        return Path(__file__).parent.parent / "logs"

    @property
    def logging_level(self) -> str:
        """Global log level (default INFO). Controls console and combined file."""
        return self._logging_settings.get("level", "INFO")

    @property
    def logging_subsystem_levels(self) -> Dict[str, str]:
        """Per-subsystem log level overrides. E.g. {"commands": "DEBUG"}."""
        return self._logging_settings.get("subsystem_levels") or {}

    @property
    def logging_max_file_size_mb(self) -> int:
        """Max size per log file in MB before rotation (default 10)."""
        return self._logging_settings.get("max_file_size_mb", 10)

    @property
    def logging_backup_count(self) -> int:
        """Number of rotated log files to keep (default 5)."""
        return self._logging_settings.get("backup_count", 5)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
