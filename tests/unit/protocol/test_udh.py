"""
Unit tests for user data header parsing.
"""

from smppcheck.protocol.udh import (
    NO_CONCAT,
    ConcatInfo,
    parse_concat_info,
    parse_udh_hex,
    split_user_data,
)


class TestSplitUserData:
    """Tests for split_user_data()."""

    def test_split(self):
        data = bytes.fromhex('050003A40201') + b'Hello'
        udh, payload = split_user_data(data)
        assert udh == bytes.fromhex('050003A40201')
        assert payload == b'Hello'

    def test_empty(self):
        assert split_user_data(b'') == (b'', b'')

    def test_truncated_header(self):
        udh, payload = split_user_data(b'\x05\x00\x03')
        assert udh == b''
        assert payload == b'\x05\x00\x03'


class TestParseConcatInfo:
    """Tests for parse_concat_info()."""

    def test_eight_bit_reference(self):
        info = parse_concat_info(bytes.fromhex('050003A40302'))
        assert info == ConcatInfo(total_parts=3, sequence=2, reference=0xA4, found=True)

    def test_sixteen_bit_reference(self):
        info = parse_concat_info(bytes.fromhex('0608041234 0201'.replace(' ', '')))
        assert info == ConcatInfo(total_parts=2, sequence=1, reference=0x1234, found=True)

    def test_concat_after_other_element(self):
        # Port addressing element (IEI 0x05) followed by concatenation
        udh = bytes.fromhex('0B0504158A0000' + '0003070201')
        info = parse_concat_info(udh)
        assert info.found
        assert info.reference == 7
        assert (info.sequence, info.total_parts) == (1, 2)

    def test_no_concat_element(self):
        assert parse_concat_info(bytes.fromhex('0605041581 0000'.replace(' ', ''))) is NO_CONCAT

    def test_too_short(self):
        assert parse_concat_info(b'') is NO_CONCAT
        assert parse_concat_info(b'\x00') is NO_CONCAT

    def test_invalid_sequence_is_ignored(self):
        assert parse_concat_info(bytes.fromhex('050003A40203')) is NO_CONCAT
        assert parse_concat_info(bytes.fromhex('050003A40000')) is NO_CONCAT

    def test_truncated_element(self):
        assert parse_concat_info(bytes.fromhex('050003A4')) is NO_CONCAT


class TestParseUdhHex:
    """Tests for parse_udh_hex()."""

    def test_hex(self):
        assert parse_udh_hex('050003A40201') == bytes.fromhex('050003A40201')

    def test_spaces_are_ignored(self):
        assert parse_udh_hex(' 05 00 03 A4 02 01 ') == bytes.fromhex('050003A40201')

    def test_absent_or_blank(self):
        assert parse_udh_hex(None) is None
        assert parse_udh_hex('   ') is None

    def test_not_hex(self):
        assert parse_udh_hex('concat') is None
