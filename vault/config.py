"""Configuration settings for the vault core."""

import os
from pathlib import Path

from common.constants import DEFAULT_ROOT_NAME, TICK_INTERVAL_MS


ROOT_FOLDER_NAME = os.environ.get("DROPVAULT_ROOT_NAME", DEFAULT_ROOT_NAME)

STORAGE_BACKEND = os.environ.get("DROPVAULT_STORAGE_BACKEND", "json")

DATA_PATH = os.environ.get("DROPVAULT_DATA_PATH", str(Path.home() / ".dropvault" / "data"))

TICK_INTERVAL_SECONDS = int(os.environ.get("DROPVAULT_TICK_INTERVAL_MS", str(TICK_INTERVAL_MS))) / 1000.0
