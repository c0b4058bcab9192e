"""
Shared test fixtures and configuration for smppcheck unit tests.
"""

from unittest.mock import MagicMock

import pytest
from smppcheck.exceptions import SMPPSessionException
from smppcheck.testcase.models import ExpectedOutput, InputPDU, TestCase


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSession:
    """In-memory session handing out consecutive sequence numbers."""

    def __init__(self, fail_for=()):
        self.on_pdu = None
        self.submitted = []
        self.connected = False
        self.closed = False
        self._next_sequence = 1
        self.fail_for = set(fail_for)

    def connect(self):
        self.connected = True

    def submit(self, test_case, on_sequence=None):
        sequence = self._next_sequence
        self._next_sequence += 1
        if on_sequence is not None:
            on_sequence(sequence)
        if test_case.test_case_id in self.fail_for:
            raise SMPPSessionException('connection reset', operation='submit_sm')
        self.submitted.append((sequence, test_case))
        return sequence

    def close(self):
        self.closed = True


@pytest.fixture
def fake_clock():
    """Controllable monotonic clock."""
    return FakeClock()


@pytest.fixture
def fake_session():
    """Session double recording submissions."""
    return FakeSession()


@pytest.fixture
def mock_logger():
    """Mock logger for testing log output."""
    return MagicMock()


# Common test data
@pytest.fixture
def sample_record():
    """A valid single-segment test case as it appears in a JSON file."""
    return {
        'test_case_id': 1,
        'input_pdu': {
            'command_id': 'submit_sm',
            'source_addr_ton': 1,
            'source_addr_npi': 1,
            'source_addr': '12345',
            'dest_addr_ton': 1,
            'dest_addr_npi': 1,
            'destination_addr': '447700900123',
            'esm_class': 0,
            'data_coding': 0,
            'encoding': '7-bit',
            'sm_length': 11,
            'short_message': 'Hello World',
        },
        'expected_output_pdu': {
            'command_id': 'submit_sm_resp',
            'command_status': 0,
            'delivery_status': 'accepted',
            'segments': 1,
        },
    }


@pytest.fixture
def sample_test_case(sample_record):
    """The sample record as a TestCase."""
    return TestCase.from_dict(sample_record)


def _make_test_case(test_case_id=1, expected=None, **pdu_fields):
    """Build a TestCase; destination_addr defaults to a valid number."""
    pdu_fields.setdefault('destination_addr', '447700900123')
    return TestCase(
        test_case_id=test_case_id,
        input_pdu=InputPDU(**pdu_fields),
        expected_output=expected or ExpectedOutput(),
    )


@pytest.fixture
def make_test_case():
    """Factory building TestCase objects from keyword fields."""
    return _make_test_case
