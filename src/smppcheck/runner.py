"""
Test Case Runner

Submits loaded test cases to an SMSC over a bound session and collects what
the SMSC answered for each of them.
"""

import logging
import time
from typing import Callable, Iterable, List, Optional

from .config import DEFAULT_READ_TIMEOUT, DEFAULT_SUBMIT_DELAY, ReassemblyConfig, SessionConfig
from .exceptions import SMPPEncodingException, SMPPSessionException
from .reassembly import Reassembler
from .session import InboundDispatcher, SMPPLibSession, SubmissionOutcome, SubmissionTracker
from .session.base import Session
from .testcase.models import TestCase

logger = logging.getLogger(__name__)

NO_RESPONSE_ERROR = 'no submit_sm_resp received'


class TestCaseRunner:
    """
    Drives a session through a list of test cases.

    Submit failures are recorded against their test case and the run carries
    on with the next one. After the last submission the runner waits up to
    response_wait seconds for the outstanding responses.
    """

    __test__ = False

    def __init__(
        self,
        session: Session,
        tracker: SubmissionTracker,
        submit_delay: float = DEFAULT_SUBMIT_DELAY,
        response_wait: float = DEFAULT_READ_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.tracker = tracker
        self.submit_delay = submit_delay
        self.response_wait = response_wait
        self._sleep = sleep

    def run(self, test_cases: Iterable[TestCase]) -> List[SubmissionOutcome]:
        """Submit every test case and return the collected outcomes."""
        cases = list(test_cases)
        for position, test_case in enumerate(cases, start=1):
            logger.info(f'Test #{test_case.test_case_id} ({position}/{len(cases)})')
            self._submit(test_case)
            if position < len(cases) and self.submit_delay > 0:
                self._sleep(self.submit_delay)

        if not self.tracker.wait(self.response_wait):
            self.tracker.expire_outstanding(NO_RESPONSE_ERROR)
        return self.tracker.outcomes()

    def _submit(self, test_case: TestCase) -> None:
        sequences: List[int] = []

        def track(sequence: int) -> None:
            sequences.append(sequence)
            self.tracker.track(sequence, test_case)

        try:
            self.session.submit(test_case, on_sequence=track)
        except (SMPPSessionException, SMPPEncodingException, UnicodeEncodeError) as e:
            for sequence in sequences:
                self.tracker.discard(sequence)
            logger.error(f'Test case {test_case.test_case_id} not submitted: {e}')
            self.tracker.record_failure(test_case, str(e))


def create_session(
    config: SessionConfig,
    tracker: SubmissionTracker,
    reassembler: Optional[Reassembler] = None,
    reassembly_config: Optional[ReassemblyConfig] = None,
) -> SMPPLibSession:
    """
    Build an unconnected smpplib session wired to a dispatcher.

    Args:
        config: Session configuration
        tracker: Tracker that submit_sm_resp PDUs are reconciled through
        reassembler: Reassembler for deliver_sm parts; created if omitted
        reassembly_config: Settings for a created reassembler
    """
    if reassembler is None:
        reassembly_config = reassembly_config or ReassemblyConfig()
        reassembler = Reassembler(part_timeout=reassembly_config.part_timeout)

    session = SMPPLibSession(config)
    session.on_pdu = InboundDispatcher(
        reassembler,
        tracker=tracker,
        close_session=session.close,
        close_on_unknown_pdu=config.close_on_unknown_pdu,
    )
    return session


def run_test_cases(
    config: SessionConfig,
    test_cases: Iterable[TestCase],
    reassembly_config: Optional[ReassemblyConfig] = None,
) -> List[SubmissionOutcome]:
    """Connect, submit every test case, then unbind and disconnect."""
    tracker = SubmissionTracker()
    session = create_session(config, tracker, reassembly_config=reassembly_config)
    session.connect()
    try:
        runner = TestCaseRunner(
            session,
            tracker,
            submit_delay=config.submit_delay,
            response_wait=config.read_timeout,
        )
        return runner.run(test_cases)
    finally:
        session.close()
