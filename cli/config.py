"""Configuration management for DropVault CLI."""

import json
import logging
import os
import shutil
from pathlib import Path

from common.constants import DEFAULT_ROOT_NAME, TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "storage_backend": os.environ.get("DROPVAULT_STORAGE_BACKEND", "json"),
        "data_path": os.environ.get("DROPVAULT_DATA_PATH", str(Path.home() / ".dropvault" / "data")),
        "root_folder_name": os.environ.get("DROPVAULT_ROOT_NAME", DEFAULT_ROOT_NAME),
        "tick_interval_ms": TICK_INTERVAL_MS,
        "share_base_url": "https://dropvault.example.com/share",
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.dropvault/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            import tempfile
            self.config_path = Path(tempfile.gettempdir()) / '.dropvault' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Corrupted config at {self.config_path}: {e}, using defaults")
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config: {copy_error}")
                return self.DEFAULT_CONFIG.copy()
        else:
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError as e:
                logger.warning(f"Could not write default config: {e}")
            return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not save config: {e}")

    def get_storage_backend(self) -> str:
        return self.data.get('storage_backend', 'json')

    def get_data_path(self) -> str:
        return self.data.get('data_path', str(self.config_path.parent / 'data'))

    def get_root_folder_name(self) -> str:
        return self.data.get('root_folder_name', DEFAULT_ROOT_NAME)

    def get_tick_interval(self) -> float:
        """
        Get upload tick interval.

        Returns:
            Interval in seconds
        """
        return self.data.get('tick_interval_ms', TICK_INTERVAL_MS) / 1000.0

    def get_share_base_url(self) -> str:
        return self.data.get('share_base_url', self.DEFAULT_CONFIG['share_base_url']).rstrip('/')

    def share_link(self, share_id: str) -> str:
        """
        Build the distributable link for a share.

        Returns:
            URL string (e.g., "https://dropvault.example.com/share/share_ab12")
        """
        return f"{self.get_share_base_url()}/{share_id}"
