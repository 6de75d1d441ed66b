#!/usr/bin/env python3
"""
Retry controller.

Drives one repository through clone attempts and recovery actions until it
is cloned, no recovery applies, or the retry ceiling is reached.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from .engine import CloneEngine
from .errors import ErrorKind
from .models import CloneSuccess, ControllerResult, ControllerState, RetryState
from .recovery import InjectCredentials, RecoveryAction, WipeAndRetry
from .urls import redact_url

DEFAULT_MAX_RETRIES = 3

NEXT_STATE = {
    ErrorKind.AUTHENTICATION_REQUIRED: ControllerState.NEEDS_AUTH,
    ErrorKind.DIRECTORY_EXISTS: ControllerState.NEEDS_WIPE,
}


class RetryController:
    """State machine tying the clone engine to the recovery actions."""

    def __init__(self, engine: CloneEngine, username: str = '', token: str = '',
                 max_retries: int = DEFAULT_MAX_RETRIES, logger: Optional[logging.Logger] = None,
                 cancel_event: Optional[threading.Event] = None):
        """
        Initialize the retry controller.

        Args:
            engine: Clone engine used for every attempt
            username: Username injected when authentication is required
            token: Token injected when authentication is required
            max_retries: Failed attempts tolerated before giving up
            logger: Logger for state transitions
            cancel_event: When set, no further retry is started
        """
        if max_retries < 0:
            raise ValueError("max_retries must not be negative")

        self.engine = engine
        self.max_retries = max_retries
        self.logger = logger or logging.getLogger('clone_git_repo.controller')
        self.cancel_event = cancel_event
        self.actions: Dict[ErrorKind, RecoveryAction] = {
            ErrorKind.AUTHENTICATION_REQUIRED: InjectCredentials(engine, username, token, self.logger),
            ErrorKind.DIRECTORY_EXISTS: WipeAndRetry(engine, self.logger),
        }

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def run(self, url: str, destination_dir: Path) -> ControllerResult:
        """
        Clone a repository, recovering from known failures.

        Args:
            url: Repository URL
            destination_dir: Directory the repository is cloned into

        Returns:
            ControllerResult with the terminal state and the last attempt's outcome
        """
        retry_state = RetryState()
        display_url = redact_url(url)

        if self._cancelled():
            self.logger.warning(f"Cancelled before cloning {display_url}")
            return ControllerResult(ControllerState.CANCELLED, None, 0, retry_state)

        state = ControllerState.ATTEMPTING
        outcome = self.engine.clone(url, destination_dir)
        attempts = 1

        while True:
            if isinstance(outcome, CloneSuccess):
                self.logger.debug(f"{display_url}: {state.value} -> {ControllerState.SUCCEEDED.value}")
                return ControllerResult(ControllerState.SUCCEEDED, outcome, attempts, retry_state)

            retry_state.attempt_error_count += 1
            retry_state.last_error_kind = outcome.kind

            if retry_state.attempt_error_count > self.max_retries:
                self.logger.error(
                    f"Error cloning repository {display_url}: giving up after {attempts} attempt(s), "
                    f"last error: {outcome.kind.value}"
                )
                return ControllerResult(ControllerState.RETRIES_EXHAUSTED, outcome, attempts, retry_state)

            action = self.actions.get(outcome.kind)
            if action is None:
                self.logger.error(
                    f"Error cloning repository {display_url}: no recovery for {outcome.kind.value} error"
                    f"{': ' + outcome.message if outcome.message else ''}"
                )
                return ControllerResult(ControllerState.UNRECOVERABLE, outcome, attempts, retry_state)

            if self._cancelled():
                self.logger.warning(f"Cancelled before retrying {display_url}")
                return ControllerResult(ControllerState.CANCELLED, outcome, attempts, retry_state)

            next_state = NEXT_STATE[outcome.kind]
            self.logger.debug(f"{display_url}: {state.value} -> {next_state.value}")
            state = next_state

            self.logger.info(
                f"Retry {retry_state.attempt_error_count}/{self.max_retries} for {display_url} "
                f"({outcome.kind.value})"
            )
            outcome = action.run(url, destination_dir)
            attempts += 1
