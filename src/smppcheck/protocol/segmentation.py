"""
SMS Segment Calculation

Derives how many SMS segments a message of a given encoded length occupies.
A user data header takes room inside every segment, so concatenated segments
carry fewer characters than a single message.
"""

import math

from .constants import OTHER_SEGMENT_CAPACITY, SEGMENT_CAPACITY


def segment_capacity(data_coding: int, udh_present: bool) -> int:
    """Characters (7-bit) or bytes (other codings) available per segment."""
    single, concatenated = SEGMENT_CAPACITY.get(data_coding, OTHER_SEGMENT_CAPACITY)
    return concatenated if udh_present else single


def compute_segments(data_coding: int, udh_present: bool, length: int) -> int:
    """
    Compute the number of segments needed for a message.

    Args:
        data_coding: SMPP data_coding value
        udh_present: Whether a user data header is carried
        length: Encoded length from compute_length()

    Returns:
        Segment count, 0 for an empty message
    """
    if length <= 0:
        return 0
    return math.ceil(length / segment_capacity(data_coding, udh_present))
