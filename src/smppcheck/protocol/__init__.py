"""
SMS Encoding Rules

This module groups the encoding knowledge the validator and the reassembly
path share:
- charset: GSM 03.38 default/extension classification and 7-bit codec
- length: encoded length under a data coding scheme
- segmentation: segment count from encoded length
- udh: user data header and concatenation element parsing
- constants: data coding values, capacities and command status codes
"""

from .charset import (
    GSM7_DEFAULT_ALPHABET,
    GSM7_EXTENDED_TABLE,
    CharClass,
    classify,
    gsm7_decode,
    gsm7_encode,
    is_gsm7_compatible,
)
from .constants import (
    SEVEN_BIT,
    SIXTEEN_BIT,
    CommandStatus,
    DataCoding,
    EsmClassFlag,
    get_status_name,
)
from .length import compute_length, gsm7_septet_count, utf16_byte_length
from .segmentation import compute_segments, segment_capacity
from .udh import NO_CONCAT, ConcatInfo, parse_concat_info, parse_udh_hex, split_user_data

__all__ = [
    # Character set
    'CharClass',
    'GSM7_DEFAULT_ALPHABET',
    'GSM7_EXTENDED_TABLE',
    'classify',
    'is_gsm7_compatible',
    'gsm7_encode',
    'gsm7_decode',
    # Constants
    'DataCoding',
    'SEVEN_BIT',
    'SIXTEEN_BIT',
    'CommandStatus',
    'EsmClassFlag',
    'get_status_name',
    # Length and segments
    'compute_length',
    'gsm7_septet_count',
    'utf16_byte_length',
    'compute_segments',
    'segment_capacity',
    # UDH
    'ConcatInfo',
    'NO_CONCAT',
    'parse_concat_info',
    'parse_udh_hex',
    'split_user_data',
]
