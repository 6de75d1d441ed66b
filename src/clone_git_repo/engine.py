#!/usr/bin/env python3
"""
Clone engine.

Clones a single repository with GitPython, then enumerates its remote
branches and tags and checks every remote branch out as a local branch.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from git import GitCommandError, RemoteProgress, RemoteReference, Repo

from .errors import CloneError, ErrorKind, classify
from .models import CloneAttemptResult, CloneFailure, CloneSuccess
from .urls import redact_url, scrub_credentials

DEFAULT_REMOTE = 'origin'

# git never prompts on the terminal; a missing credential fails the clone instead
GIT_ENVIRONMENT = {'GIT_TERMINAL_PROMPT': '0'}

AUTHENTICATION_MARKERS = (
    'authentication failed',
    'authentication required',
    'could not read username',
    'could not read password',
    'terminal prompts disabled',
    'invalid username or password',
    'http basic: access denied',
    'the requested url returned error: 401',
    'the requested url returned error: 403',
)

DIRECTORY_EXISTS_MARKERS = (
    'already exists and is not an empty directory',
    'repository already exists',
)


def kind_from_git_error(error: GitCommandError) -> ErrorKind:
    """
    Tag a failed git command with the recovery category it calls for.

    Args:
        error: Error raised by GitPython

    Returns:
        ErrorKind matching git's diagnostic output
    """
    output = f"{error.stderr or ''}\n{error.stdout or ''}".lower()
    if any(marker in output for marker in AUTHENTICATION_MARKERS):
        return ErrorKind.AUTHENTICATION_REQUIRED
    if any(marker in output for marker in DIRECTORY_EXISTS_MARKERS):
        return ErrorKind.DIRECTORY_EXISTS
    return ErrorKind.UNKNOWN


class CloneProgress(RemoteProgress):
    """Forwards git transfer progress to the diagnostic log."""

    STAGES = {
        RemoteProgress.COUNTING: 'Counting objects',
        RemoteProgress.COMPRESSING: 'Compressing objects',
        RemoteProgress.RECEIVING: 'Receiving objects',
        RemoteProgress.RESOLVING: 'Resolving deltas',
        RemoteProgress.WRITING: 'Writing objects',
        RemoteProgress.FINDING_SOURCES: 'Finding sources',
        RemoteProgress.CHECKING_OUT: 'Checking out files',
    }

    def __init__(self, logger: logging.Logger):
        super().__init__()
        self.logger = logger

    def update(self, op_code: int, cur_count: Any, max_count: Any = None, message: str = '') -> None:
        if not op_code & (RemoteProgress.BEGIN | RemoteProgress.END):
            return
        stage = self.STAGES.get(op_code & RemoteProgress.OP_MASK, 'Transferring')
        if max_count:
            self.logger.debug(f"  {stage}: {int(cur_count)}/{int(max_count)} {message}".rstrip())
        else:
            self.logger.debug(f"  {stage}: {int(cur_count or 0)} {message}".rstrip())


class CloneEngine:
    """Performs one clone attempt and materializes every remote branch."""

    def __init__(self, remote_name: str = DEFAULT_REMOTE, logger: Optional[logging.Logger] = None,
                 cancel_event: Optional[threading.Event] = None, env: Optional[Dict[str, str]] = None):
        """
        Initialize the clone engine.

        Args:
            remote_name: Name of the remote created by the clone
            logger: Logger for progress and diagnostics
            cancel_event: When set, remaining branch checkouts are skipped
            env: Extra environment variables for git commands
        """
        self.remote_name = remote_name
        self.logger = logger or logging.getLogger('clone_git_repo.engine')
        self.cancel_event = cancel_event
        self.env = dict(GIT_ENVIRONMENT)
        if env:
            self.env.update(env)

    def clone(self, url: str, destination_dir: Path, remote_url: Optional[str] = None) -> CloneAttemptResult:
        """
        Clone a repository and check out all of its branches.

        Args:
            url: Repository URL, possibly carrying credentials
            destination_dir: Directory the repository is cloned into
            remote_url: URL the remote is pointed at once the branches are
                checked out, so credentials in ``url`` are not kept in the
                clone's git config

        Returns:
            CloneSuccess with every enumerated branch and tag, or CloneFailure
            tagged with the recovery category
        """
        destination = Path(destination_dir)
        try:
            repo = self._transfer(url, destination)
        except CloneError as e:
            self.logger.error(f"Error cloning repo {redact_url(url)}: {e.message}")
            return CloneFailure(kind=classify(e), message=e.message)

        try:
            self.logger.info(f"Repository cloned to {destination}")

            branches = self._find_all_branches(repo)
            self.logger.info(f"Branches: {branches}")

            tags = self._find_all_tags(repo)
            self.logger.info(f"Tags: {tags}")

            self._checkout_all_branches(repo, branches)

            if remote_url is not None:
                self._reset_remote_url(repo, remote_url)

            return CloneSuccess(branches=branches, tags=tags)
        finally:
            repo.close()

    def _transfer(self, url: str, destination: Path) -> Repo:
        """Run the clone itself; every failure is raised as a tagged CloneError."""
        if destination.exists() and (not destination.is_dir() or any(destination.iterdir())):
            raise CloneError(ErrorKind.DIRECTORY_EXISTS, f"repository already exists: {destination}")

        self.logger.info(f"Cloning {redact_url(url)} into {destination}")
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            repo = Repo.clone_from(url, destination, progress=CloneProgress(self.logger), env=self.env)
        except GitCommandError as e:
            raise CloneError(kind_from_git_error(e), scrub_credentials(str(e)), cause=e) from e
        except Exception as e:
            raise CloneError(ErrorKind.UNKNOWN, scrub_credentials(str(e)), cause=e) from e

        repo.git.update_environment(**self.env)
        return repo

    def _find_all_branches(self, repo: Repo) -> List[str]:
        """
        List remote-tracking branches of the configured remote.

        The symbolic '<remote>/HEAD' is skipped; order is the order git
        reports the references in.
        """
        try:
            branches = [
                ref.name for ref in repo.references
                if isinstance(ref, RemoteReference)
                and self.remote_name in ref.name
                and not ref.name.endswith('/HEAD')
            ]
        except Exception as e:
            self.logger.error(f"Error getting branches: {scrub_credentials(str(e))}")
            return []

        self.logger.info(f"Total branch(es): {len(branches)}")
        return branches

    def _find_all_tags(self, repo: Repo) -> List[str]:
        try:
            tags = [tag.name for tag in repo.tags]
        except Exception as e:
            self.logger.error(f"Error getting tags: {scrub_credentials(str(e))}")
            return []

        self.logger.info(f"Total tag(s): {len(tags)}")
        return tags

    def _get_origin_remote(self, repo: Repo) -> Optional[Any]:
        """Return the clone's remote, or None if it cannot be found."""
        try:
            for remote in repo.remotes:
                if remote.name == self.remote_name:
                    return remote
            return None
        except Exception as e:
            self.logger.warning(f"Error getting {self.remote_name} remote: {e}")
            return None

    def _local_branch_name(self, remote_branch: str) -> str:
        prefix = f"{self.remote_name}/"
        if remote_branch.startswith(prefix):
            return remote_branch[len(prefix):]
        return remote_branch

    def _checkout_all_branches(self, repo: Repo, branches: List[str]) -> int:
        """
        Pull, then force-check out a local branch for every remote branch.

        Failures are logged per branch and never stop the loop.

        Returns:
            Number of branches checked out
        """
        origin = self._get_origin_remote(repo)
        checked_out = 0

        for idx, branch in enumerate(branches, 1):
            if self.cancel_event is not None and self.cancel_event.is_set():
                self.logger.warning(f"Cancelled, skipping {len(branches) - idx + 1} remaining branch checkout(s)")
                break

            local_branch = self._local_branch_name(branch)
            self.logger.info(f"[{idx}/{len(branches)}] Checking out branch: {local_branch}")

            if origin is not None:
                try:
                    origin.pull()
                except Exception as e:
                    self.logger.warning(f"  Pull failed before checking out {local_branch}: {scrub_credentials(str(e))}")

            try:
                repo.git.checkout('--force', '-B', local_branch, branch)
                checked_out += 1
            except GitCommandError as e:
                self.logger.error(f"  Error checking out branch {local_branch}: {scrub_credentials(str(e))}")
                continue

        self.logger.info(f"Checked out {checked_out} of {len(branches)} branch(es)")
        return checked_out

    def _reset_remote_url(self, repo: Repo, remote_url: str) -> None:
        """Point the remote at ``remote_url``; a failure leaves the clone usable."""
        origin = self._get_origin_remote(repo)
        if origin is None:
            return
        try:
            origin.set_url(remote_url)
            self.logger.debug(f"Remote {self.remote_name} set to {redact_url(remote_url)}")
        except Exception as e:
            self.logger.warning(f"Could not reset {self.remote_name} URL: {scrub_credentials(str(e))}")
