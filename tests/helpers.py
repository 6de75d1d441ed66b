"""
Shared fixtures for the test suite: local Git repositories to clone from.
"""

from pathlib import Path
from typing import Iterable

from git import Repo


def make_source_repo(root: Path, name: str = "source", branches: Iterable[str] = ("feature",),
                     tags: Iterable[str] = ("v1.0",)) -> Path:
    """
    Create a repository with one commit, extra branches and tags.

    Args:
        root: Directory the repository is created in
        name: Directory name of the repository
        branches: Branches created in addition to the default one
        tags: Tags created on the initial commit

    Returns:
        Path of the repository, usable as a clone URL
    """
    path = root / name
    repo = Repo.init(path)
    (path / "README.md").write_text("hello\n", encoding="utf-8")
    repo.index.add(["README.md"])
    repo.index.commit("initial commit")

    for branch in branches:
        repo.create_head(branch)
    for tag in tags:
        repo.create_tag(tag)

    repo.close()
    return path


def default_branch(path: Path) -> str:
    """Name of the branch HEAD points at in a repository."""
    repo = Repo(path)
    try:
        return repo.active_branch.name
    finally:
        repo.close()
