"""
submit_sm Parameter Building

Turns a test case's input_pdu into the keyword arguments of an smpplib
submit_sm, encoding the short message according to its data coding. Absent
numeric fields fall back to 0. A hex UDH is prepended to the message and the
UDHI bit set in esm_class. Bodies longer than the short_message field allows
are sent in the message_payload optional parameter instead.
"""

import logging
from typing import Any, Dict, Optional

from ..protocol.charset import gsm7_encode
from ..protocol.constants import (
    DATA_CODING_CODECS,
    MAX_SHORT_MESSAGE_LENGTH,
    SEVEN_BIT,
    EsmClassFlag,
)
from ..protocol.udh import parse_udh_hex
from ..testcase.models import InputPDU

logger = logging.getLogger(__name__)


def encode_short_message(text: str, data_coding: int) -> bytes:
    """
    Encode message text for the wire.

    Raises:
        SMPPEncodingException: If data_coding is 0 and text is not GSM 7-bit
        UnicodeEncodeError: If text does not fit a single-byte data coding
    """
    if data_coding == SEVEN_BIT:
        return gsm7_encode(text)
    return text.encode(DATA_CODING_CODECS.get(data_coding, 'utf-8'))


def _int(value: Optional[int]) -> int:
    return value if value is not None else 0


def build_submit_params(
    pdu: InputPDU,
    default_source: str = '',
    default_destination: str = '',
) -> Dict[str, Any]:
    """
    Build smpplib submit_sm parameters.

    Args:
        pdu: Test-case input
        default_source: source_addr used when the test case has none
        default_destination: destination_addr used when the test case has none

    Returns:
        Keyword arguments for smpplib.smpp.make_pdu('submit_sm', ...)
    """
    data_coding = _int(pdu.data_coding)
    short_message = encode_short_message(pdu.short_message or '', data_coding)
    esm_class = _int(pdu.esm_class)

    udh = parse_udh_hex(pdu.udh)
    if udh is not None:
        short_message = udh + short_message
        esm_class |= EsmClassFlag.UDHI
    elif pdu.udh and pdu.udh.strip():
        logger.warning(f'Ignoring UDH that is not hex: {pdu.udh!r}')

    source_addr = pdu.source_addr if pdu.source_addr is not None else default_source
    destination_addr = (
        pdu.destination_addr
        if pdu.destination_addr is not None
        else default_destination
    )

    params: Dict[str, Any] = {
        'service_type': pdu.service_type or '',
        'source_addr_ton': _int(pdu.source_addr_ton),
        'source_addr_npi': _int(pdu.source_addr_npi),
        'source_addr': source_addr,
        'dest_addr_ton': _int(pdu.dest_addr_ton),
        'dest_addr_npi': _int(pdu.dest_addr_npi),
        'destination_addr': destination_addr,
        'esm_class': esm_class,
        'protocol_id': _int(pdu.protocol_id),
        'priority_flag': _int(pdu.priority_flag),
        'registered_delivery': _int(pdu.registered_delivery),
        'replace_if_present_flag': _int(pdu.replace_if_present_flag),
        'data_coding': data_coding,
        'short_message': short_message,
    }
    if len(short_message) > MAX_SHORT_MESSAGE_LENGTH:
        params['short_message'] = b''
        params['message_payload'] = short_message
    return params
