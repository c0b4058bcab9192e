"""
Submission Tracking

Correlates submit_sm sequence numbers with the test cases they were built
from, so that each submit_sm_resp can be checked against the expected output
of its test case. Responses arrive on the session's reader thread while
submissions happen on the caller's thread, hence the lock.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..protocol.constants import get_status_name
from ..testcase.models import TestCase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionOutcome:
    """What the SMSC answered for one submitted test case"""

    test_case_id: int
    sequence: Optional[int] = None
    command_status: Optional[int] = None
    message_id: Optional[str] = None
    mismatches: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.error is None and not self.mismatches

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {
            'test_case_id': self.test_case_id,
            'sequence': self.sequence,
            'command_status': self.command_status,
            'message_id': self.message_id,
            'matched': self.matched,
        }
        if self.mismatches:
            result['mismatches'] = list(self.mismatches)
        if self.error:
            result['error'] = self.error
        return result


def reconcile_response(
    test_case: TestCase,
    sequence: int,
    command_status: int,
    message_id: Optional[str],
) -> SubmissionOutcome:
    """Compare a submit_sm_resp with the test case's expected output."""
    expected = test_case.expected_output
    mismatches: List[str] = []

    if (
        expected.command_status is not None
        and expected.command_status != command_status
    ):
        mismatches.append(
            f'CommandStatus mismatch. Expected: {expected.command_status} '
            f'({get_status_name(expected.command_status)}), Got: {command_status} '
            f'({get_status_name(command_status)})'
        )
    if expected.message_id is not None and expected.message_id != message_id:
        mismatches.append(
            f'MessageID mismatch. Expected: {expected.message_id}, Got: {message_id}'
        )

    return SubmissionOutcome(
        test_case_id=test_case.test_case_id,
        sequence=sequence,
        command_status=command_status,
        message_id=message_id,
        mismatches=tuple(mismatches),
    )


class SubmissionTracker:
    """Lock-guarded map of outstanding submissions and collected outcomes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._outstanding: Dict[int, TestCase] = {}
        self._outcomes: List[SubmissionOutcome] = []
        self._all_resolved = threading.Event()
        self._all_resolved.set()

    def track(self, sequence: int, test_case: TestCase) -> None:
        """Remember which test case a submit_sm sequence number belongs to."""
        with self._lock:
            self._outstanding[sequence] = test_case
            self._all_resolved.clear()

    def resolve(
        self, sequence: int, command_status: int, message_id: Optional[str] = None
    ) -> Optional[SubmissionOutcome]:
        """
        Match a response to its submission and reconcile it.

        Returns:
            The outcome, or None if the sequence number was never tracked
        """
        with self._lock:
            test_case = self._outstanding.pop(sequence, None)
            if test_case is None:
                return None
            outcome = reconcile_response(test_case, sequence, command_status, message_id)
            self._outcomes.append(outcome)
            if not self._outstanding:
                self._all_resolved.set()

        if outcome.mismatches:
            for mismatch in outcome.mismatches:
                logger.error(f'Test case {outcome.test_case_id} failed: {mismatch}')
        else:
            logger.info(f'Test case {outcome.test_case_id} passed (sequence {sequence})')
        return outcome

    def record_failure(self, test_case: TestCase, error: str) -> SubmissionOutcome:
        """Record a test case that could not be submitted at all."""
        outcome = SubmissionOutcome(test_case_id=test_case.test_case_id, error=error)
        with self._lock:
            self._outcomes.append(outcome)
        return outcome

    def discard(self, sequence: int) -> None:
        """Stop waiting for a response to a submission that never went out."""
        with self._lock:
            self._outstanding.pop(sequence, None)
            if not self._outstanding:
                self._all_resolved.set()

    def expire_outstanding(self, error: str) -> List[SubmissionOutcome]:
        """Record every submission still awaiting a response as failed."""
        with self._lock:
            expired = [
                SubmissionOutcome(
                    test_case_id=test_case.test_case_id, sequence=sequence, error=error
                )
                for sequence, test_case in self._outstanding.items()
            ]
            self._outstanding.clear()
            self._outcomes.extend(expired)
            self._all_resolved.set()

        for outcome in expired:
            logger.error(
                f'Test case {outcome.test_case_id} failed: {error} '
                f'(sequence {outcome.sequence})'
            )
        return expired

    def outstanding(self) -> Dict[int, int]:
        """Snapshot of {sequence: test_case_id} still awaiting a response."""
        with self._lock:
            return {seq: tc.test_case_id for seq, tc in self._outstanding.items()}

    def outcomes(self) -> List[SubmissionOutcome]:
        with self._lock:
            return list(self._outcomes)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every tracked submission has a response."""
        return self._all_resolved.wait(timeout)
