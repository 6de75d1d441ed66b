#!/usr/bin/env python3
"""
Error types and classification for Clone Git Repo.

Failures are tagged with an ErrorKind at the point where they happen, so the
retry controller never has to inspect error text.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Recovery categories for a failed clone attempt."""
    AUTHENTICATION_REQUIRED = "authentication_required"
    DIRECTORY_EXISTS = "directory_exists"
    UNKNOWN = "unknown"


class CloneGitRepoError(Exception):
    """Base class for all Clone Git Repo errors."""


class ConfigError(CloneGitRepoError):
    """Raised when the configuration is missing required values."""


class RepositoryListError(CloneGitRepoError):
    """Raised when the list of repository URLs cannot be read."""


class CloneError(CloneGitRepoError):
    """A clone attempt failed; carries the recovery category."""

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        return f"CloneError(kind={self.kind.value!r}, message={self.message!r})"


def classify(error: BaseException) -> ErrorKind:
    """
    Map a failure raised during a clone attempt to its ErrorKind.

    Args:
        error: Exception raised by the clone engine

    Returns:
        The kind tagged on a CloneError, UNKNOWN for anything else
    """
    if isinstance(error, CloneError):
        return error.kind
    return ErrorKind.UNKNOWN
