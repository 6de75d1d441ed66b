#!/usr/bin/env python3
"""
Recovery actions for failed clone attempts.

Each action repairs one known failure and runs a fresh clone attempt through
the clone engine.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Protocol

from .engine import CloneEngine
from .errors import ErrorKind
from .models import CloneAttemptResult, CloneFailure
from .urls import redact_url, url_with_credentials


class RecoveryAction(Protocol):
    """A repair for one failure kind followed by a fresh clone attempt."""

    kind: ErrorKind

    def run(self, url: str, destination_dir: Path) -> CloneAttemptResult:
        ...


class InjectCredentials:
    """Retry the clone with username and token embedded in the URL."""

    kind = ErrorKind.AUTHENTICATION_REQUIRED

    def __init__(self, engine: CloneEngine, username: str, token: str, logger: Optional[logging.Logger] = None):
        self.engine = engine
        self.username = username
        self.token = token
        self.logger = logger or logging.getLogger('clone_git_repo.recovery')

    def run(self, url: str, destination_dir: Path) -> CloneAttemptResult:
        """
        Clone again using an authenticated URL.

        Args:
            url: Original repository URL
            destination_dir: Directory the repository is cloned into

        Returns:
            Result of the authenticated clone attempt; the clone keeps 'url',
            without credentials, as its remote URL
        """
        try:
            authenticated_url = url_with_credentials(url, self.username, self.token)
        except ValueError as e:
            self.logger.error(f"Cannot retry {redact_url(url)} with credentials: {e}")
            return CloneFailure(kind=ErrorKind.UNKNOWN, message=str(e))

        self.logger.info(f"Authentication required, retrying {redact_url(url)} as '{self.username}'")
        return self.engine.clone(authenticated_url, destination_dir, remote_url=url)


class WipeAndRetry:
    """Remove the destination directory and clone again."""

    kind = ErrorKind.DIRECTORY_EXISTS

    def __init__(self, engine: CloneEngine, logger: Optional[logging.Logger] = None):
        self.engine = engine
        self.logger = logger or logging.getLogger('clone_git_repo.recovery')

    def run(self, url: str, destination_dir: Path) -> CloneAttemptResult:
        """
        Delete the destination, then clone unchanged.

        A destination that is already gone is not an error.

        Args:
            url: Repository URL
            destination_dir: Directory to remove and clone into

        Returns:
            Result of the new clone attempt
        """
        destination = Path(destination_dir)
        try:
            if destination.is_dir() and not destination.is_symlink():
                self.logger.info(f"Removing existing directory: {destination}")
                shutil.rmtree(destination)
            elif destination.exists() or destination.is_symlink():
                self.logger.info(f"Removing existing file: {destination}")
                destination.unlink()
            else:
                self.logger.debug(f"Nothing to remove at {destination}")
        except FileNotFoundError:
            self.logger.debug(f"{destination} disappeared before it could be removed")
        except OSError as e:
            self.logger.error(f"Could not remove {destination}: {e}")
            return CloneFailure(kind=ErrorKind.UNKNOWN, message=f"could not remove {destination}: {e}")

        return self.engine.clone(url, destination)
