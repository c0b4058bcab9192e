"""
Encoded Length Calculation

Computes the length a short message occupies under a data coding scheme, the
value an SMPP sm_length field is expected to carry:

- data_coding 0 (GSM 7-bit): septet count, extension characters counting two
- data_coding 8 (UCS2/UTF-16BE): UTF-16 code units * 2 bytes
- anything else: UTF-8 byte length
"""

from ..exceptions import SMPPEncodingException
from .charset import CharClass, classify
from .constants import SEVEN_BIT, SIXTEEN_BIT


def gsm7_septet_count(text: str) -> int:
    """
    Count the septets text needs under GSM 03.38.

    Raises:
        SMPPEncodingException: On the first character that is not representable
    """
    count = 0
    for ch in text:
        char_class = classify(ch)
        if char_class is CharClass.UNREPRESENTABLE:
            raise SMPPEncodingException(ch)
        count += char_class.septets
    return count


def utf16_byte_length(text: str) -> int:
    """Byte length of text encoded as UTF-16; astral characters take 4 bytes."""
    return len(text.encode('utf-16-be'))


def compute_length(text: str, data_coding: int = SEVEN_BIT) -> int:
    """
    Compute the encoded length of a message.

    Args:
        text: Short message text
        data_coding: SMPP data_coding value

    Returns:
        Septets for 7-bit, bytes otherwise

    Raises:
        SMPPEncodingException: If data_coding is 7-bit and text cannot be encoded
    """
    if data_coding == SEVEN_BIT:
        return gsm7_septet_count(text)
    if data_coding == SIXTEEN_BIT:
        return utf16_byte_length(text)
    return len(text.encode('utf-8'))
