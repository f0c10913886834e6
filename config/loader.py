"""Environment configuration for the snap CLI

Values are resolved with the following priority:
1. SNAP_* environment variables (highest priority)
2. A .env file (./.env, or the path in SNAP_ENV_FILE)
3. The default passed by the caller (lowest priority)

The .env file is read, not exported: values from it are only visible
through ConfigLoader.get and never leak into os.environ.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigLoader:
    """Typed lookup of settings from the environment and a .env file"""

    def __init__(self, env_path: Optional[str] = None):
        """
        Args:
            env_path: Optional path to a .env file. Defaults to
                SNAP_ENV_FILE, or '.env' in the current directory.
        """
        self.env_path = Path(env_path or os.getenv("SNAP_ENV_FILE", ".env")).expanduser()
        self.dotenv = self._read_env_file()

    def _read_env_file(self) -> Dict[str, str]:
        if not self.env_path.is_file():
            logger.debug(f"No .env file at {self.env_path}")
            return {}

        values = {k: v for k, v in dotenv_values(self.env_path).items() if v is not None}
        logger.debug(f"Read {len(values)} settings from {self.env_path}")
        return values

    def raw(self, name: str) -> Optional[str]:
        """Return the unparsed value of a setting, or None if unset"""
        value = os.getenv(name)
        if value is None:
            value = self.dotenv.get(name)
        return value

    def get(self, name: str, default: Any) -> Any:
        """Look up a setting, converting it to the type of the default

        Args:
            name: Variable name, e.g. SNAP_LOGIN_TIMEOUT
            default: Value used when the setting is absent or unparsable

        Returns:
            The configured value, or the default
        """
        value = self.raw(name)

        if value is None:
            if isinstance(default, str) and default.startswith("~"):
                return str(Path(default).expanduser())
            return default

        # bool is checked first: it is a subclass of int
        if isinstance(default, bool):
            return value.strip().lower() in TRUE_VALUES
        if isinstance(default, (int, float)):
            try:
                return type(default)(value)
            except ValueError:
                logger.warning(f"Ignoring {name}={value!r}: expected {type(default).__name__}, using {default}")
                return default
        return value


_config_loader = None


def get_config_loader() -> ConfigLoader:
    """Get or create the process-wide ConfigLoader"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
