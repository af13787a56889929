"""Project-wide constants (storage keys, folder ids, upload tuning)."""

ROOT_FOLDER_ID: str = "root"
DEFAULT_ROOT_NAME: str = "My Files"

FOLDERS_KEY: str = "dropvault_folders"
FILES_KEY: str = "dropvault_files"
SHARES_KEY: str = "dropvault_sharedItems"
CURRENT_FOLDER_KEY: str = "dropvault_currentFolder"
HISTORY_KEY: str = "dropvault_history"

ALL_KEYS: tuple[str, ...] = (FOLDERS_KEY, FILES_KEY, SHARES_KEY, CURRENT_FOLDER_KEY, HISTORY_KEY)

TICK_INTERVAL_MS: int = 500
PROGRESS_INCREMENT_MIN: int = 5
PROGRESS_INCREMENT_MAX: int = 14  # inclusive
PROGRESS_COMPLETE: int = 100

ACCESS_LEVELS: tuple[str, ...] = ("view", "comment", "edit", "admin")
EXPIRATION_OPTIONS: tuple[str, ...] = ("never", "1day", "7days", "30days", "custom")
EXPIRATION_DAYS: dict[str, int] = {"1day": 1, "7days": 7, "30days": 30}
SHARE_CHANNELS: tuple[str, ...] = ("link", "email")
ITEM_TYPES: tuple[str, ...] = ("file", "folder")

DEFAULT_MIME_TYPE: str = "application/octet-stream"

MAX_PASSWORD_BYTES: int = 72  # bcrypt input limit
