#!/usr/bin/env python3
"""
Bulk Repository Cloner

Clones a list of repositories one after another, recovering from missing
authentication and pre-existing destination directories, and records the
outcome of every repository.
"""

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional

from .config import Config
from .controller import RetryController
from .engine import CloneEngine
from .models import ControllerResult, RepoStatus, RepositorySpec
from .progress import ProgressManager
from .status import StatusRecorder
from .urls import redact_url, repository_name


class BulkCloner:
    """Main class for cloning a list of repositories."""

    def __init__(self, config: Config, quiet: bool = False, logger: Optional[logging.Logger] = None,
                 engine: Optional[CloneEngine] = None, cancel_event: Optional[threading.Event] = None):
        """
        Initialize the bulk cloner.

        Args:
            config: Run configuration (credentials, clone directory, retry ceiling)
            quiet: If True, show a progress bar instead of detailed logging
            logger: Logger to use; defaults to the package logger
            engine: Clone engine to use; one is created if not given
            cancel_event: Set to stop after the current step
        """
        self.config = config
        self.clone_dir = Path(config.clone_dir)
        self.quiet = quiet
        self.logger = logger or logging.getLogger('clone_git_repo.cloner')
        self.cancel_event = cancel_event or threading.Event()

        self.engine = engine or CloneEngine(logger=self.logger, cancel_event=self.cancel_event)
        self.controller = RetryController(
            self.engine,
            username=config.username,
            token=config.token,
            max_retries=config.max_retries,
            logger=self.logger,
            cancel_event=self.cancel_event,
        )
        self.recorder = StatusRecorder()

        # Progress manager (set later in clone_all)
        self.progress_manager: Optional[ProgressManager] = None

        # Statistics
        self.stats = {
            'repositories_cloned': 0,
            'repositories_failed': 0,
            'retries': 0,
        }

    def destination_for(self, url: str) -> Path:
        """Directory a repository URL is cloned into."""
        return self.clone_dir / repository_name(url)

    def clone_repository(self, url: str) -> RepoStatus:
        """
        Clone a single repository and record its status.

        Args:
            url: Repository URL

        Returns:
            The recorded RepoStatus
        """
        destination = self.destination_for(url)
        self.logger.info(f"{'='*70}")
        self.logger.info(f"Processing repository: {redact_url(url)}")
        self.logger.info(f"{'='*70}")

        result = self.controller.run(url, destination)
        status = self.recorder.record(str(destination), result.outcome)

        self.stats['retries'] += max(result.attempts - 1, 0)
        if status.is_cloned:
            self.stats['repositories_cloned'] += 1
            self.logger.info(
                f"✓ {destination}: {status.branch_count} branch(es), {status.tag_count} tag(s)"
            )
        else:
            self.stats['repositories_failed'] += 1
            self.logger.warning(f"✗ {destination}: not cloned ({result.state.value})")
            if self.progress_manager:
                self.progress_manager.record_error(destination.name, redact_url(url), self._failure_message(result))

        if self.progress_manager:
            self.progress_manager.update()
        return status

    def _failure_message(self, result: ControllerResult) -> str:
        message = result.state.value
        if result.retry_state.last_error_kind is not None:
            message += f" ({result.retry_state.last_error_kind.value})"
        return message

    def clone_all(self, urls: Iterable[str]) -> List[RepoStatus]:
        """
        Clone every repository in order.

        A repository that cannot be cloned is recorded as not cloned and the
        run continues with the next one. Ctrl+C stops the run; repositories
        processed so far keep their status.

        Args:
            urls: Repository URLs

        Returns:
            Statuses of the processed repositories, in input order
        """
        repositories = [RepositorySpec(url=url) for url in urls]
        self.clone_dir.mkdir(parents=True, exist_ok=True)

        self.progress_manager = ProgressManager(len(repositories), quiet=self.quiet)
        self.logger.info(f"Cloning {len(repositories)} repositories into {self.clone_dir}")

        try:
            for repository in repositories:
                if self.cancel_event.is_set():
                    self.logger.warning("Run cancelled, skipping remaining repositories")
                    break
                try:
                    self.clone_repository(repository.url)
                except KeyboardInterrupt:
                    self.logger.warning(f"Operation cancelled by user while cloning {redact_url(repository.url)}")
                    self.cancel_event.set()
                    self.recorder.record(str(self.destination_for(repository.url)), None)
                    self.stats['repositories_failed'] += 1
                    break
        finally:
            self.progress_manager.close()
            self.progress_manager.print_summary()

        self._print_statistics()
        return self.recorder.statuses

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def _print_statistics(self):
        """Print cloning statistics."""
        self.logger.info("=" * 50)
        self.logger.info("CLONING STATISTICS")
        self.logger.info("=" * 50)
        self.logger.info(f"Repositories cloned: {self.stats['repositories_cloned']}")
        self.logger.info(f"Repositories failed: {self.stats['repositories_failed']}")
        self.logger.info(f"Retries performed: {self.stats['retries']}")
        self.logger.info("=" * 50)
