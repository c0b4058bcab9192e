"""
GSM 03.38 Character Classification

Classifies characters against the GSM 7-bit default alphabet and its extension
table. Default characters cost one septet, extension characters two (escape +
character); anything else cannot be sent with data_coding 0.

The tables are built once at import time and never modified, so they can be
read from any number of threads.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from ..exceptions import SMPPEncodingException
from .constants import GSM7_ESCAPE

# Default alphabet in table order; position == septet value. 0x1B is the
# escape to the extension table and is not a character in its own right.
GSM7_DEFAULT_ALPHABET = (
    '@£$¥èéùìòÇ\nØø\rÅåΔ_ΦΓΛΩΠΨΣΘΞ\x1bÆæßÉ !"#¤%&\'()*+,-./0123456789:;<=>?'
    '¡ABCDEFGHIJKLMNOPQRSTUVWXYZÄÖÑÜ§¿abcdefghijklmnopqrstuvwxyzäöñüà'
)

# Extension table: character -> septet value following the escape
GSM7_EXTENDED_TABLE: Mapping[str, int] = MappingProxyType(
    {
        '^': 0x14,
        '{': 0x28,
        '}': 0x29,
        '\\': 0x2F,
        '[': 0x3C,
        '~': 0x3D,
        ']': 0x3E,
        '|': 0x40,
        '€': 0x65,
    }
)

GSM7_DEFAULT_TABLE: Mapping[str, int] = MappingProxyType(
    {ch: index for index, ch in enumerate(GSM7_DEFAULT_ALPHABET) if index != GSM7_ESCAPE}
)

_EXTENDED_BY_SEPTET: Mapping[int, str] = MappingProxyType(
    {septet: ch for ch, septet in GSM7_EXTENDED_TABLE.items()}
)


class CharClass(Enum):
    """Repertoire a character belongs to under the GSM 7-bit alphabet"""

    DEFAULT = 'default'
    EXTENDED = 'extended'
    UNREPRESENTABLE = 'unrepresentable'

    @property
    def septets(self) -> int:
        """Encoded size in septets; 0 for unrepresentable characters"""
        return _SEPTET_COST[self]


_SEPTET_COST = {
    CharClass.DEFAULT: 1,
    CharClass.EXTENDED: 2,
    CharClass.UNREPRESENTABLE: 0,
}


def classify(ch: str) -> CharClass:
    """Classify a single character."""
    if ch in GSM7_DEFAULT_TABLE:
        return CharClass.DEFAULT
    if ch in GSM7_EXTENDED_TABLE:
        return CharClass.EXTENDED
    return CharClass.UNREPRESENTABLE


def is_gsm7_compatible(text: str) -> bool:
    """Check whether every character of text has a GSM 7-bit encoding."""
    return all(classify(ch) is not CharClass.UNREPRESENTABLE for ch in text)


def gsm7_encode(text: str) -> bytes:
    """
    Encode text as unpacked GSM 7-bit (one septet per octet).

    Args:
        text: Message text

    Returns:
        Encoded bytes, extension characters prefixed with the escape septet

    Raises:
        SMPPEncodingException: If a character is outside both tables
    """
    encoded = bytearray()
    for ch in text:
        septet = GSM7_DEFAULT_TABLE.get(ch)
        if septet is not None:
            encoded.append(septet)
            continue
        septet = GSM7_EXTENDED_TABLE.get(ch)
        if septet is None:
            raise SMPPEncodingException(ch)
        encoded.append(GSM7_ESCAPE)
        encoded.append(septet)
    return bytes(encoded)


def gsm7_decode(data: bytes) -> str:
    """
    Decode unpacked GSM 7-bit data.

    Unknown extension septets decode to the default-table character, which is
    what handsets do; a trailing lone escape is dropped.
    """
    chars = []
    escaped = False
    for octet in data:
        septet = octet & 0x7F
        if escaped:
            chars.append(
                _EXTENDED_BY_SEPTET.get(septet, GSM7_DEFAULT_ALPHABET[septet])
            )
            escaped = False
        elif septet == GSM7_ESCAPE:
            escaped = True
        else:
            chars.append(GSM7_DEFAULT_ALPHABET[septet])
    return ''.join(chars)
