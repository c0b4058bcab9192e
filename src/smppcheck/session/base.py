"""
Session Interface

What the runner needs from an SMPP session. The SMPP wire protocol itself is
left to an SMPP library; see smpplib_session for the implementation used in
production and the unit tests for in-memory fakes.
"""

from typing import Callable, Optional, Protocol

from ..testcase.models import TestCase
from .events import InboundPDU

PDUHandler = Callable[[InboundPDU], None]
SequenceCallback = Callable[[int], None]


class Session(Protocol):
    """A bound SMPP transceiver session"""

    on_pdu: Optional[PDUHandler]

    def connect(self) -> None:
        """Open the connection and bind."""

    def submit(
        self, test_case: TestCase, on_sequence: Optional[SequenceCallback] = None
    ) -> int:
        """
        Send a submit_sm built from a test case.

        on_sequence is called with the sequence number before the PDU is
        written, so the response can never overtake the bookkeeping.
        """

    def close(self) -> None:
        """Unbind and disconnect; safe to call more than once."""
