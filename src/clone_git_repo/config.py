#!/usr/bin/env python3
"""
Configuration module for Clone Git Repo.

Settings come from an INI file and may be overridden on the command line:

    [credentials]
    username = ...
    token = ...

    [paths]
    csv_file = repositories.csv
    clone_dir = clonedir

    [logging]
    log_dir = logs
    log_max_size = 10485760
"""

import configparser
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "config.ini"
DEFAULT_CSV_FILE = "repositories.csv"
DEFAULT_CLONE_DIR = "clonedir"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_MAX_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_RETRIES = 3

logger = logging.getLogger('clone_git_repo.config')


@dataclass
class Config:
    """Settings consumed by the cloner."""

    csv_file: str = DEFAULT_CSV_FILE
    """CSV file listing repository URLs"""

    clone_dir: str = DEFAULT_CLONE_DIR
    """Root directory repositories are cloned into"""

    username: str = ""
    """Username injected when a repository requires authentication"""

    token: str = ""
    """Access token injected when a repository requires authentication"""

    log_dir: str = DEFAULT_LOG_DIR
    """Directory for log files"""

    log_max_size: int = DEFAULT_LOG_MAX_SIZE
    """Log file size in bytes before it is rotated"""

    max_retries: int = DEFAULT_MAX_RETRIES
    """Failed attempts tolerated per repository"""

    @classmethod
    def from_ini(cls, config_file: str) -> 'Config':
        """
        Load configuration from an INI file.

        A missing or unreadable file is reported and the defaults are used.

        Args:
            config_file: Path to the INI file

        Returns:
            Config populated from the file

        Raises:
            ConfigError: If a numeric value cannot be parsed
        """
        parser = configparser.ConfigParser()
        try:
            loaded = parser.read(config_file, encoding="utf-8")
        except configparser.Error as e:
            logger.warning(f"Could not load config file {config_file}: {e}")
            loaded = []

        if not loaded:
            logger.warning(f"Could not load config file {config_file}, using command line arguments instead")
            return cls()

        try:
            return cls(
                username=parser.get("credentials", "username", fallback=""),
                token=parser.get("credentials", "token", fallback=""),
                csv_file=parser.get("paths", "csv_file", fallback=DEFAULT_CSV_FILE),
                clone_dir=parser.get("paths", "clone_dir", fallback=DEFAULT_CLONE_DIR),
                log_dir=parser.get("logging", "log_dir", fallback=DEFAULT_LOG_DIR),
                log_max_size=parser.getint("logging", "log_max_size", fallback=DEFAULT_LOG_MAX_SIZE),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid value in {config_file}: {e}") from e

    def update(self, **overrides: Any) -> 'Config':
        """Apply overrides, ignoring values that were not given (None)."""
        known = {f.name for f in fields(self)}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigError(f"Unknown configuration key: {key}")
            if value is not None:
                setattr(self, key, value)
        return self

    def to_dict(self, redact: bool = True) -> Dict[str, Any]:
        """Convert config to dictionary, masking the token by default."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if redact and data["token"]:
            data["token"] = "***"
        return data

    def validate(self) -> None:
        """
        Check that the configuration can be used for a run.

        Raises:
            ConfigError: If a required value is missing or invalid
        """
        if not self.validate_credentials(self.username, self.token):
            raise ConfigError("Username and Token are required")
        if not self.validate_destination_path(self.clone_dir):
            raise ConfigError(f"Invalid clone directory: {self.clone_dir!r}")
        if self.max_retries < 0:
            raise ConfigError("max_retries must not be negative")
        if self.log_max_size <= 0:
            raise ConfigError("log_max_size must be positive")

    @staticmethod
    def validate_credentials(username: Optional[str], token: Optional[str]) -> bool:
        """
        Validate username and token.

        Returns:
            True if both are non-blank, False otherwise
        """
        return bool(username and username.strip()) and bool(token and token.strip())

    @staticmethod
    def validate_repository_url(url: str) -> bool:
        """
        Validate a repository URL.

        Accepts http(s), ssh, git and file URLs as well as scp-like
        'user@host:path' addresses.

        Returns:
            True if valid, False otherwise
        """
        if not url or not url.strip():
            return False

        url = url.strip().lower()
        if url.startswith(('http://', 'https://', 'ssh://', 'git://', 'file://')):
            return True
        user_host, sep, path = url.partition(':')
        return bool(sep and '@' in user_host and path)

    @staticmethod
    def validate_destination_path(path: str) -> bool:
        """
        Validate destination path.

        Returns:
            True if the path is usable as a clone root, False otherwise
        """
        if not path or not path.strip():
            return False

        try:
            path_obj = Path(path)
            return not path_obj.exists() or path_obj.is_dir()
        except (OSError, ValueError):
            return False
