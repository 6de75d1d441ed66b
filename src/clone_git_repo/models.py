#!/usr/bin/env python3
"""
Data model for clone attempts and per-repository outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .errors import ErrorKind


@dataclass(frozen=True)
class RepositorySpec:
    """A repository to process."""

    url: str


@dataclass(frozen=True)
class CloneSuccess:
    """The clone completed; branch and tag names in enumeration order."""

    branches: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CloneFailure:
    """The clone failed before the transfer was committed."""

    kind: ErrorKind
    message: str = ""


CloneAttemptResult = Union[CloneSuccess, CloneFailure]


class ControllerState(Enum):
    """States of the per-repository retry state machine."""
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    NEEDS_AUTH = "needs_auth"
    NEEDS_WIPE = "needs_wipe"
    UNRECOVERABLE = "unrecoverable"
    RETRIES_EXHAUSTED = "retries_exhausted"
    CANCELLED = "cancelled"


@dataclass
class RetryState:
    """Failure bookkeeping for one repository; discarded once it is finished."""

    attempt_error_count: int = 0
    last_error_kind: Optional[ErrorKind] = None


@dataclass
class ControllerResult:
    """What the retry controller hands back once it reaches a terminal state."""

    state: ControllerState
    outcome: Optional[CloneAttemptResult]
    attempts: int
    retry_state: RetryState


@dataclass(frozen=True)
class RepoStatus:
    """Terminal record for one repository, as shown in the report."""

    repo_path: str
    is_cloned: bool = False
    branch_count: int = 0
    tag_count: int = 0

    def __post_init__(self):
        if not self.is_cloned and (self.branch_count or self.tag_count):
            raise ValueError("A repository that was not cloned cannot report branches or tags")
