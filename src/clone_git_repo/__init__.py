"""
Clone Git Repo - bulk clone Git repositories and report on the results.

This package provides:
- BulkCloner: Clone a list of repositories, recovering from missing
  authentication and existing destination directories
- CloneEngine: Clone one repository and check out all of its branches
- RetryController: Bounded retry state machine around the clone engine
"""

__version__ = "1.0.0"

from .config import Config
from .engine import CloneEngine
from .controller import RetryController
from .cloner import BulkCloner
from .errors import CloneError, ErrorKind, classify
from .models import CloneFailure, CloneSuccess, RepoStatus, RepositorySpec
from .status import StatusRecorder, finalize

__all__ = [
    "BulkCloner",
    "CloneEngine",
    "RetryController",
    "Config",
    "CloneError",
    "ErrorKind",
    "classify",
    "CloneFailure",
    "CloneSuccess",
    "RepoStatus",
    "RepositorySpec",
    "StatusRecorder",
    "finalize",
]
