#!/usr/bin/env python3
"""
Reader for the list of repositories to clone.
"""

import csv
import logging
from typing import List

from .errors import RepositoryListError

logger = logging.getLogger('clone_git_repo.repositories')


def read_repository_urls(filename: str) -> List[str]:
    """
    Read repository URLs from a CSV file.

    The first row is a header and is skipped; the URL is taken from the
    first column. Blank rows and blank URLs are ignored.

    Args:
        filename: Path to the CSV file

    Returns:
        Repository URLs in file order

    Raises:
        RepositoryListError: If the file cannot be read or parsed
    """
    try:
        with open(filename, "r", newline="", encoding="utf-8") as fh:
            records = list(csv.reader(fh))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise RepositoryListError(f"Could not read repository list {filename}: {e}") from e

    repository_urls = []
    for line_number, record in enumerate(records[1:], 2):
        if not record or not record[0].strip():
            logger.debug(f"Skipping empty row {line_number} in {filename}")
            continue
        repository_urls.append(record[0].strip())

    logger.info(f"Read {len(repository_urls)} repository URL(s) from {filename}")
    return repository_urls
