"""
SMPP Constants Used by the Validator

Data coding values, per-segment capacities, esm_class flags and the command
status codes reported back in submit_sm_resp PDUs.
"""

from enum import IntEnum
from typing import Dict, Tuple


class DataCoding(IntEnum):
    """Data Coding Scheme values"""

    DEFAULT = 0x00  # SMSC Default Alphabet (GSM 7-bit)
    IA5_ASCII = 0x01  # IA5 (CCITT T.50)/ASCII (ANSI X3.4)
    OCTET_UNSPECIFIED_1 = 0x02  # Octet unspecified (8-bit binary)
    LATIN_1 = 0x03  # Latin 1 (ISO-8859-1)
    OCTET_UNSPECIFIED_2 = 0x04  # Octet unspecified (8-bit binary)
    JIS = 0x05  # JIS (X 0208-1990)
    CYRILLIC = 0x06  # Cyrillic (ISO-8859-5)
    LATIN_HEBREW = 0x07  # Latin/Hebrew (ISO-8859-8)
    UCS2 = 0x08  # UCS2 (ISO/IEC-10646), sent as UTF-16BE
    PICTOGRAM = 0x09  # Pictogram Encoding
    ISO_2022_JP = 0x0A  # ISO-2022-JP (Music Codes)
    EXTENDED_KANJI_JIS = 0x0D  # Extended Kanji JIS(X 0212-1990)
    KS_C_5601 = 0x0E  # KS C 5601


SEVEN_BIT = DataCoding.DEFAULT
SIXTEEN_BIT = DataCoding.UCS2

# Python codec names for the single-byte data codings we can submit as text.
# Anything not listed here is sent as UTF-8.
DATA_CODING_CODECS: Dict[int, str] = {
    DataCoding.IA5_ASCII: 'ascii',
    DataCoding.LATIN_1: 'latin-1',
    DataCoding.CYRILLIC: 'iso8859-5',
    DataCoding.LATIN_HEBREW: 'iso8859-8',
    DataCoding.UCS2: 'utf-16-be',
}

# Characters (or bytes) per segment: (without UDH, with UDH)
SEGMENT_CAPACITY: Dict[int, Tuple[int, int]] = {
    SEVEN_BIT: (160, 153),
    SIXTEEN_BIT: (70, 67),
}
OTHER_SEGMENT_CAPACITY: Tuple[int, int] = (140, 134)

# Longest body the short_message field carries; longer ones go in message_payload
MAX_SHORT_MESSAGE_LENGTH = 254


class EsmClassFlag(IntEnum):
    """esm_class bits the submit builder and inbound decoder care about"""

    DELIVERY_RECEIPT = 0x04  # SMSC delivery receipt (deliver_sm only)
    UDHI = 0x40  # User Data Header Indicator
    REPLY_PATH = 0x80


# UDH information element identifiers for concatenated messages
IEI_CONCAT_8BIT_REF = 0x00
IEI_CONCAT_16BIT_REF = 0x08

# GSM 03.38 escape to the extension table
GSM7_ESCAPE = 0x1B


class CommandStatus(IntEnum):
    """SMPP Command Status codes as defined in SMPP v3.4 specification"""

    ESME_ROK = 0x00000000  # No Error
    ESME_RINVMSGLEN = 0x00000001  # Message Length is invalid
    ESME_RINVCMDLEN = 0x00000002  # Command Length is invalid
    ESME_RINVCMDID = 0x00000003  # Invalid Command ID
    ESME_RINVBNDSTS = 0x00000004  # Incorrect BIND Status for given command
    ESME_RALYBND = 0x00000005  # ESME Already in Bound State
    ESME_RSYSERR = 0x00000008  # System Error
    ESME_RINVSRCADR = 0x0000000A  # Invalid Source Address
    ESME_RINVDSTADR = 0x0000000B  # Invalid Dest Addr
    ESME_RINVMSGID = 0x0000000C  # Message ID is invalid
    ESME_RBINDFAIL = 0x0000000D  # Bind Failed
    ESME_RMSGQFUL = 0x00000014  # Message Queue Full
    ESME_RINVESMCLASS = 0x00000043  # Invalid esm_class field data
    ESME_RSUBMITFAIL = 0x00000045  # submit_sm or submit_multi failed
    ESME_RINVSRCTON = 0x00000048  # Invalid Source address TON
    ESME_RINVSRCNPI = 0x00000049  # Invalid Source address NPI
    ESME_RINVDSTTON = 0x00000050  # Invalid Destination address TON
    ESME_RINVDSTNPI = 0x00000051  # Invalid Destination address NPI
    ESME_RTHROTTLED = 0x00000058  # Exceeded allowed message limits
    ESME_RINVDCS = 0x00000104  # Invalid Data Coding Scheme (SMPP 5.0)
    ESME_RINVOPTPARSTREAM = 0x000000C0  # Error in the optional part of the PDU Body
    ESME_RINVPARLEN = 0x000000C2  # Invalid Parameter Length
    ESME_RUNKNOWNERR = 0x000000FF  # Unknown Error


def get_status_name(status_code: int) -> str:
    """Return the symbolic name of a command status, or its hex value"""
    try:
        return CommandStatus(status_code).name
    except ValueError:
        return f'0x{status_code:08X}'
