#!/usr/bin/env python3
"""
Unit tests for status recording.
"""

import unittest

from clone_git_repo.errors import ErrorKind
from clone_git_repo.models import CloneFailure, CloneSuccess, RepoStatus
from clone_git_repo.status import StatusRecorder, finalize


class TestFinalize(unittest.TestCase):
    """Test cases for finalize."""

    def test_success_reports_counts(self):
        outcome = CloneSuccess(branches=["origin/main", "origin/dev"], tags=["v1", "v2", "v3"])

        status = finalize("clonedir/repoA", outcome)

        self.assertEqual(status, RepoStatus("clonedir/repoA", True, 2, 3))

    def test_failure_reports_nothing(self):
        status = finalize("clonedir/repoA", CloneFailure(ErrorKind.AUTHENTICATION_REQUIRED))

        self.assertFalse(status.is_cloned)
        self.assertEqual(status.branch_count, 0)
        self.assertEqual(status.tag_count, 0)

    def test_missing_outcome_reports_nothing(self):
        self.assertEqual(finalize("clonedir/repoA", None), RepoStatus("clonedir/repoA"))

    def test_not_cloned_status_cannot_carry_counts(self):
        with self.assertRaises(ValueError):
            RepoStatus("clonedir/repoA", is_cloned=False, branch_count=2)


class TestStatusRecorder(unittest.TestCase):
    """Test cases for StatusRecorder."""

    def test_records_in_order(self):
        recorder = StatusRecorder()
        recorder.record("a", CloneSuccess(["origin/main"], []))
        recorder.record("b", CloneFailure(ErrorKind.UNKNOWN))
        recorder.record("c", CloneSuccess([], ["v1"]))

        self.assertEqual([s.repo_path for s in recorder], ["a", "b", "c"])
        self.assertEqual(len(recorder), 3)
        self.assertEqual(recorder.cloned_count, 2)
        self.assertEqual(recorder.failed_count, 1)

    def test_statuses_is_a_copy(self):
        recorder = StatusRecorder()
        recorder.record("a", None)
        recorder.statuses.clear()

        self.assertEqual(len(recorder.statuses), 1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
