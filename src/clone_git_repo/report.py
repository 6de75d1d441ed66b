#!/usr/bin/env python3
"""
Reporting of repository statuses: console table and result CSV file.
"""

import csv
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from .models import RepoStatus

RESULT_FILE = "clone-git-repo-result.csv"
HEADER = ["Repository", "Cloned", "Branches", "Tags"]


def build_status_table(statuses: Iterable[RepoStatus]) -> Table:
    """Build a table with one row per repository."""
    table = Table(title="Clone results")
    table.add_column(HEADER[0], overflow="fold")
    table.add_column(HEADER[1], justify="center")
    table.add_column(HEADER[2], justify="right")
    table.add_column(HEADER[3], justify="right")

    for status in statuses:
        table.add_row(
            status.repo_path,
            "Yes" if status.is_cloned else "No",
            str(status.branch_count),
            str(status.tag_count),
        )
    return table


def print_status_table(statuses: Iterable[RepoStatus], console: Optional[Console] = None) -> None:
    """Print the repository status table to the console."""
    (console or Console()).print(build_status_table(statuses))


def write_status_csv(statuses: Iterable[RepoStatus], filename: str = RESULT_FILE) -> None:
    """
    Write repository statuses to a CSV file.

    Args:
        statuses: Repository statuses in report order
        filename: Output file path

    Raises:
        OSError: If the file cannot be written
    """
    with open(filename, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(HEADER)
        for status in statuses:
            writer.writerow([
                status.repo_path,
                "true" if status.is_cloned else "false",
                status.branch_count,
                status.tag_count,
            ])
