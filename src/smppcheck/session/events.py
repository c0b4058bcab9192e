"""
Inbound PDU Variants

The session adapter turns every PDU read from the SMSC into exactly one of
these records. The dispatcher matches on the concrete type; anything the
adapter does not recognise arrives as UnknownPDU.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..protocol.udh import NO_CONCAT, ConcatInfo


@dataclass(frozen=True)
class SubmitResponse:
    """submit_sm_resp"""

    sequence: int
    command_status: int = 0
    message_id: Optional[str] = None


@dataclass(frozen=True)
class DeliverMessage:
    """deliver_sm with its decoded text and concatenation header"""

    sequence: int
    text: str
    concat: ConcatInfo = NO_CONCAT
    source_addr: str = ''
    destination_addr: str = ''
    is_receipt: bool = False


@dataclass(frozen=True)
class GenericNack:
    """generic_nack"""

    sequence: int
    command_status: int = 0


@dataclass(frozen=True)
class EnquireLinkResponse:
    """enquire_link_resp"""

    sequence: int


@dataclass(frozen=True)
class UnbindResponse:
    """unbind_resp"""

    sequence: int


@dataclass(frozen=True)
class UnknownPDU:
    """Any PDU without a dedicated variant"""

    command: str
    sequence: int = 0
    command_status: int = 0


InboundPDU = Union[
    SubmitResponse,
    DeliverMessage,
    GenericNack,
    EnquireLinkResponse,
    UnbindResponse,
    UnknownPDU,
]
