import json
import logging
import os
import platform
from pathlib import Path
from typing import Dict, Optional

from config.loader import get_config_loader
from settings import CONFIG_FILE
from config.session import SnapConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    """Local config file holding the snap settings and session credential

    Values are layered as defaults < config file < SNAP_<KEY> environment
    variables. Environment overrides apply to the loaded config only: save()
    writes the file value back for any key whose value still comes from the
    environment. There is no locking; the CLI is a single-invocation tool.
    """

    ENV_PREFIX = "SNAP_"

    def __init__(self, config_file: Optional[str] = None):
        self.config_path = Path(config_file if config_file else CONFIG_FILE).expanduser()

    def _ensure_secure_directory(self):
        """Create parent directory with secure permissions"""
        parent_dir = self.config_path.parent
        if not parent_dir.exists():
            parent_dir.mkdir(parents=True, exist_ok=True)
            # Set directory permissions to 700 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)

    def exists(self) -> bool:
        return self.config_path.exists()

    def load_file(self) -> SnapConfig:
        """Load the config file alone, without environment overrides"""
        data = {}
        if self.config_path.exists():
            try:
                text = self.config_path.read_text(encoding="utf-8")
                data = json.loads(text) if text.strip() else {}
            except (ValueError, OSError) as e:
                logger.error(f"config file was found, but another error occurred: {e}")
                data = {}
            if not isinstance(data, dict):
                logger.error(f"Ignoring config file {self.config_path}: expected a JSON object")
                data = {}
        else:
            logger.debug(f"No config file at {self.config_path}, using defaults")

        return SnapConfig.from_dict(data)

    def env_overrides(self) -> Dict[str, str]:
        """SNAP_<KEY> values set in the environment or .env file, by config key"""
        loader = get_config_loader()
        overrides = {}
        for key in SnapConfig().to_dict():
            value = loader.raw(f"{self.ENV_PREFIX}{key.upper()}")
            if value is not None:
                overrides[key] = value
        return overrides

    def load(self) -> SnapConfig:
        """Load the config file with environment overrides applied"""
        snap_config = self.load_file()
        for key, value in self.env_overrides().items():
            snap_config.set(key, value)
        return snap_config

    def save(self, snap_config: SnapConfig) -> bool:
        """Write the config to disk

        Values equal to an active environment override are not persisted;
        the file keeps its own value for those keys.

        Returns:
            True if the file was written
        """
        data = snap_config.to_dict()
        overrides = self.env_overrides()
        if overrides:
            on_disk = self.load_file().to_dict()
            for key, value in overrides.items():
                if data[key] == value:
                    data[key] = on_disk[key]

        try:
            self._ensure_secure_directory()
            self.config_path.write_text(json.dumps(data, indent=2), encoding="utf-8")

            # Set file permissions to 600 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(self.config_path, 0o600)

            logger.debug(f"Saved config to {self.config_path}")
            return True

        except OSError as e:
            logger.error(f"Failed to write config file {self.config_path}: {e}")
            return False

    def clear_session(self) -> bool:
        """Forget the access token and identity, keeping the service settings"""
        return self.save(self.load().without_session())

    @property
    def config_file(self) -> Path:
        """Get the config file path"""
        return self.config_path
