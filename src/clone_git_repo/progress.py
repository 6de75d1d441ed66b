#!/usr/bin/env python3
"""
Progress reporting for bulk clone runs.
"""

from dataclasses import dataclass
from typing import List

from tqdm import tqdm


@dataclass
class ErrorRecord:
    """A repository that could not be cloned."""

    repository: str
    url: str
    message: str


class ProgressManager:
    """Progress bar over the repositories of a run, plus an error summary."""

    def __init__(self, total: int, quiet: bool = False):
        """
        Initialize the progress manager.

        Args:
            total: Number of repositories in the run
            quiet: The bar is only shown in quiet mode, where it replaces the log output
        """
        self.total = total
        self.quiet = quiet
        self.completed = 0
        self.errors: List[ErrorRecord] = []
        self.bar = tqdm(total=total, desc="Cloning repositories", unit="repo", disable=not quiet)

    def update(self, amount: int = 1) -> None:
        self.completed += amount
        self.bar.update(amount)

    def record_error(self, repository: str, url: str, message: str) -> None:
        self.errors.append(ErrorRecord(repository=repository, url=url, message=message))

    def close(self) -> None:
        self.bar.close()

    def print_summary(self) -> None:
        """Print how many repositories were processed and which ones failed."""
        tqdm.write(f"\nProcessed {self.completed}/{self.total} repositories, {len(self.errors)} failed")
        for error in self.errors:
            tqdm.write(f"  ✗ {error.repository}: {error.message}")
