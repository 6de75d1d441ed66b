#!/usr/bin/env python3
"""
Status recording for processed repositories.
"""

from typing import Iterator, List, Optional

from .models import CloneAttemptResult, CloneSuccess, RepoStatus


def finalize(repo_path: str, outcome: Optional[CloneAttemptResult]) -> RepoStatus:
    """
    Build the terminal status of a repository from its final clone outcome.

    Counts are only reported for a successful clone; any other outcome
    (including no outcome at all) is recorded as not cloned with zero counts.

    Args:
        repo_path: Local path of the repository
        outcome: Result of the last clone attempt, if any

    Returns:
        RepoStatus for the report
    """
    if isinstance(outcome, CloneSuccess):
        return RepoStatus(
            repo_path=repo_path,
            is_cloned=True,
            branch_count=len(outcome.branches),
            tag_count=len(outcome.tags),
        )
    return RepoStatus(repo_path=repo_path)


class StatusRecorder:
    """Collects one RepoStatus per repository, in processing order."""

    def __init__(self):
        self._statuses: List[RepoStatus] = []

    def record(self, repo_path: str, outcome: Optional[CloneAttemptResult]) -> RepoStatus:
        status = finalize(repo_path, outcome)
        self._statuses.append(status)
        return status

    @property
    def statuses(self) -> List[RepoStatus]:
        return list(self._statuses)

    @property
    def cloned_count(self) -> int:
        return sum(1 for status in self._statuses if status.is_cloned)

    @property
    def failed_count(self) -> int:
        return len(self._statuses) - self.cloned_count

    def __iter__(self) -> Iterator[RepoStatus]:
        return iter(self._statuses)

    def __len__(self) -> int:
        return len(self._statuses)
