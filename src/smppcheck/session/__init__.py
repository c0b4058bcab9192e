"""
SMPP Session Layer

The session interface and its smpplib implementation, the inbound PDU
variants it produces, and the components those PDUs are routed to.
"""

from .base import PDUHandler, SequenceCallback, Session
from .dispatcher import InboundDispatcher
from .events import (
    DeliverMessage,
    EnquireLinkResponse,
    GenericNack,
    InboundPDU,
    SubmitResponse,
    UnbindResponse,
    UnknownPDU,
)
from .smpplib_session import SMPPLibSession, decode_deliver_sm, pdu_to_event
from .submit import build_submit_params, encode_short_message
from .tracker import SubmissionOutcome, SubmissionTracker, reconcile_response

__all__ = [
    # Interface
    'Session',
    'PDUHandler',
    'SequenceCallback',
    'SMPPLibSession',
    # Inbound PDUs
    'InboundPDU',
    'SubmitResponse',
    'DeliverMessage',
    'GenericNack',
    'EnquireLinkResponse',
    'UnbindResponse',
    'UnknownPDU',
    'pdu_to_event',
    'decode_deliver_sm',
    # Routing and bookkeeping
    'InboundDispatcher',
    'SubmissionTracker',
    'SubmissionOutcome',
    'reconcile_response',
    # Outbound
    'build_submit_params',
    'encode_short_message',
]
