"""
Inbound PDU Dispatch

Routes each inbound PDU variant to the component that owns it: submit
responses to the submission tracker, delivered messages to the reassembler.
Session-level responses are only logged. An unbind_resp closes the session;
unknown PDUs close it only when configured to.
"""

import logging
from typing import Callable, Optional

from ..exceptions import SMPPProtocolAnomaly, SMPPReassemblyException
from ..protocol.constants import get_status_name
from ..reassembly import Reassembler
from .events import (
    DeliverMessage,
    EnquireLinkResponse,
    GenericNack,
    InboundPDU,
    SubmitResponse,
    UnbindResponse,
    UnknownPDU,
)
from .tracker import SubmissionTracker

logger = logging.getLogger(__name__)


class InboundDispatcher:
    """Dispatches inbound PDU variants; safe to call from the reader thread."""

    def __init__(
        self,
        reassembler: Reassembler,
        tracker: Optional[SubmissionTracker] = None,
        close_session: Optional[Callable[[], None]] = None,
        close_on_unknown_pdu: bool = False,
    ):
        self.reassembler = reassembler
        self.tracker = tracker
        self.close_session = close_session
        self.close_on_unknown_pdu = close_on_unknown_pdu

        # Event handlers
        self.on_anomaly: Optional[Callable[[SMPPProtocolAnomaly], None]] = None

    def __call__(self, pdu: InboundPDU) -> None:
        self.dispatch(pdu)

    def dispatch(self, pdu: InboundPDU) -> None:
        """Handle one inbound PDU."""
        if isinstance(pdu, SubmitResponse):
            self._handle_submit_response(pdu)
        elif isinstance(pdu, DeliverMessage):
            self._handle_deliver(pdu)
        elif isinstance(pdu, GenericNack):
            logger.warning(
                f'GenericNack received (sequence {pdu.sequence}, '
                f'status {get_status_name(pdu.command_status)})'
            )
        elif isinstance(pdu, EnquireLinkResponse):
            logger.debug('EnquireLinkResp received')
        elif isinstance(pdu, UnbindResponse):
            logger.info('UnbindResp received, closing session')
            self._close()
        else:
            self._handle_unhandled(pdu)

    def _handle_submit_response(self, pdu: SubmitResponse) -> None:
        logger.debug(
            f'SubmitSMResp: sequence={pdu.sequence} '
            f'status={get_status_name(pdu.command_status)} message_id={pdu.message_id}'
        )
        if self.tracker is None:
            return
        outcome = self.tracker.resolve(pdu.sequence, pdu.command_status, pdu.message_id)
        if outcome is None:
            logger.warning(f'SubmitSMResp for untracked sequence {pdu.sequence}')

    def _handle_deliver(self, pdu: DeliverMessage) -> None:
        if pdu.is_receipt:
            logger.info(f'Delivery receipt from {pdu.source_addr}: {pdu.text}')
            return
        try:
            self.reassembler.handle(pdu.text, pdu.concat)
        except SMPPReassemblyException as e:
            logger.error(f'Dropping message part: {e}')

    def _handle_unhandled(self, pdu: object) -> None:
        command = pdu.command if isinstance(pdu, UnknownPDU) else type(pdu).__name__
        sequence = getattr(pdu, 'sequence', None)
        anomaly = SMPPProtocolAnomaly(
            f'Unhandled PDU type: {command}', command=command, sequence_number=sequence
        )
        logger.warning(str(anomaly))

        if self.on_anomaly:
            try:
                self.on_anomaly(anomaly)
            except Exception as e:
                logger.exception(f'Error in anomaly handler: {e}')

        if self.close_on_unknown_pdu:
            logger.warning(f'Closing session after unhandled PDU: {command}')
            self._close()

    def _close(self) -> None:
        if self.close_session is None:
            return
        try:
            self.close_session()
        except Exception as e:
            logger.error(f'Unable to close session: {e}')
