"""Configuration loader for the hosted-login core

Values are resolved with the following priority:
1. Environment variables, named with the HOSTED_LOGIN_ prefix (highest priority)
2. .env file
3. Hardcoded defaults (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "HOSTED_LOGIN_"


class ConfigLoader:
    """Resolves typed configuration values from the environment"""

    def __init__(self, env_path: Optional[str] = None, prefix: str = ENV_PREFIX):
        """
        Args:
            env_path: Optional path to .env file. Defaults to '.env' in the current directory.
            prefix: Prefix prepended to every variable name
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self.prefix = prefix
        self._load_env_file()

    def _load_env_file(self):
        if self.env_path.exists():
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded environment variables from {self.env_path}")
        else:
            logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")

    def get(self, name: str, default: Any) -> Any:
        """Get a configuration value, coerced to the type of the default

        Args:
            name: Variable name without prefix
            default: Value used when the variable is unset or unparseable

        Returns:
            The configured value
        """
        env_var = f"{self.prefix}{name}"
        env_value = os.getenv(env_var)
        if env_value is None:
            return default

        if isinstance(default, bool):
            return env_value.strip().lower() in ("true", "1", "yes")
        if isinstance(default, (int, float)):
            try:
                return type(default)(env_value)
            except ValueError:
                logger.warning(f"Failed to parse {env_var}={env_value} as {type(default).__name__}, using default: {default}")
                return default
        if isinstance(default, tuple):
            return self.split_list(env_value)
        return env_value

    @staticmethod
    def split_list(value: str) -> Tuple[str, ...]:
        """Split a comma separated value, dropping empty items"""
        return tuple(item.strip() for item in value.split(",") if item.strip())


_config_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def reset_config_loader() -> None:
    """Drop the global instance so the next call re-reads the .env file"""
    global _config_loader
    _config_loader = None
