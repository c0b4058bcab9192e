"""
User Data Header Handling

Splits a UDH off the front of a short message and extracts the concatenation
information element (IEI 0x00 with an 8-bit reference, IEI 0x08 with a 16-bit
reference) used to reassemble multi-part messages.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import IEI_CONCAT_8BIT_REF, IEI_CONCAT_16BIT_REF


@dataclass(frozen=True)
class ConcatInfo:
    """Concatenation header of one message part"""

    total_parts: int = 0
    sequence: int = 0
    reference: int = 0
    found: bool = False


NO_CONCAT = ConcatInfo()


def split_user_data(short_message: bytes) -> Tuple[bytes, bytes]:
    """
    Split user data carrying a UDH into (udh, payload).

    The first octet is the UDH length (UDHL) and is included in the returned
    header. Data too short for its declared UDHL yields an empty header.
    """
    if not short_message:
        return b'', b''
    udhl = short_message[0]
    if len(short_message) < udhl + 1:
        return b'', short_message
    return short_message[: udhl + 1], short_message[udhl + 1 :]


def parse_concat_info(udh: bytes) -> ConcatInfo:
    """
    Find the concatenation element in a UDH.

    Args:
        udh: Header including its leading length octet

    Returns:
        ConcatInfo with found=True, or NO_CONCAT if none is present
    """
    if len(udh) < 2:
        return NO_CONCAT

    end = min(len(udh), udh[0] + 1)
    offset = 1
    while offset + 1 < end:
        iei = udh[offset]
        iedl = udh[offset + 1]
        data = udh[offset + 2 : offset + 2 + iedl]
        if len(data) < iedl:
            break
        if iei == IEI_CONCAT_8BIT_REF and iedl == 3:
            return _concat_info(data[0], data[1], data[2])
        if iei == IEI_CONCAT_16BIT_REF and iedl == 4:
            return _concat_info((data[0] << 8) | data[1], data[2], data[3])
        offset += 2 + iedl
    return NO_CONCAT


def _concat_info(reference: int, total: int, sequence: int) -> ConcatInfo:
    if total == 0 or not (1 <= sequence <= total):
        return NO_CONCAT
    return ConcatInfo(total_parts=total, sequence=sequence, reference=reference, found=True)


def parse_udh_hex(udh: Optional[str]) -> Optional[bytes]:
    """
    Decode a hex UDH string such as "050003A40201".

    Returns None for absent or blank input and for text that is not hex.
    """
    if udh is None:
        return None
    cleaned = udh.strip().replace(' ', '')
    if not cleaned:
        return None
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        return None
