"""
xapk-input Configuration.

Centralized configuration management using Pydantic Settings.
Loads configuration from environment variables.
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_xdg_state_dir() -> str:
    """
    Get XDG-compliant state directory for xapk-input logs.

    Follows XDG Base Directory Specification:
    - Uses $XDG_STATE_HOME/xapk-input if XDG_STATE_HOME is set
    - Falls back to $HOME/.local/state/xapk-input if not set
    - Returns relative path ./logs if HOME not available (dev/testing)

    Returns:
        str: Path to state/logs directory
    """
    xdg_state_home = os.getenv("XDG_STATE_HOME")
    if xdg_state_home:
        return str(Path(xdg_state_home) / "xapk-input" / "logs")

    home = os.getenv("HOME")
    if home:
        return str(Path(home) / ".local" / "state" / "xapk-input" / "logs")

    # Fallback for development/testing environments without HOME
    return "./logs"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Zip security
    zip_security_disabled: bool = False  # Skip entry name/size checks
    zip_max_entries_count: int = 100_000  # Entries visited before giving up
    zip_bomb_detection_factor: int = 100  # Max uncompressed/compressed ratio
    zip_bomb_min_uncompressed_size: int = 25 * 1024 * 1024  # Smaller is always safe

    # Plugins
    plugin_modules: list[str] | str = []  # Optional additional input plugin modules

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""  # XDG-compliant log directory (defaults to XDG state dir if empty)
    log_format: str = "standard"  # standard or json
    log_console_enabled: bool = True  # Enable console (stdout/stderr) logging
    log_file_enabled: bool = False  # Enable file-based logging
    log_max_bytes: int = 10_485_760  # 10MB per log file
    log_backup_count: int = 5  # Keep 5 backup files

    @property
    def log_directory(self) -> Path:
        """Get the log directory path, using XDG default if not specified."""
        if self.log_dir:
            return Path(self.log_dir).expanduser()
        return Path(get_xdg_state_dir())

    @property
    def plugin_module_list(self) -> list[str]:
        """Plugin modules as a list, accepting comma-separated env values."""
        if isinstance(self.plugin_modules, str):
            return [m.strip() for m in self.plugin_modules.split(",") if m.strip()]
        return list(self.plugin_modules)


# Global settings instance
settings = Settings()
