"""
Unit tests for submit_sm parameter building.
"""

import pytest
from smppcheck.exceptions import SMPPEncodingException
from smppcheck.protocol.constants import EsmClassFlag
from smppcheck.session.submit import build_submit_params, encode_short_message
from smppcheck.testcase.models import InputPDU


class TestEncodeShortMessage:
    """Tests for encode_short_message()."""

    def test_seven_bit(self):
        assert encode_short_message('A€', 0) == b'\x41\x1b\x65'

    def test_seven_bit_rejects_unrepresentable(self):
        with pytest.raises(SMPPEncodingException):
            encode_short_message('中', 0)

    def test_ucs2(self):
        assert encode_short_message('Hi', 8) == b'\x00H\x00i'
        assert encode_short_message('😀', 8) == '😀'.encode('utf-16-be')

    @pytest.mark.parametrize(
        'data_coding,text,expected',
        [
            (1, 'abc', b'abc'),
            (3, 'é', b'\xe9'),
            (6, 'Ж', 'Ж'.encode('iso8859-5')),
            (7, 'א', 'א'.encode('iso8859-8')),
            (4, 'é', 'é'.encode('utf-8')),
        ],
    )
    def test_single_byte_codings(self, data_coding, text, expected):
        assert encode_short_message(text, data_coding) == expected

    def test_unencodable_latin1(self):
        with pytest.raises(UnicodeEncodeError):
            encode_short_message('中', 3)


class TestBuildSubmitParams:
    """Tests for build_submit_params()."""

    def test_full_pdu(self, sample_test_case):
        params = build_submit_params(sample_test_case.input_pdu)
        assert params == {
            'service_type': '',
            'source_addr_ton': 1,
            'source_addr_npi': 1,
            'source_addr': '12345',
            'dest_addr_ton': 1,
            'dest_addr_npi': 1,
            'destination_addr': '447700900123',
            'esm_class': 0,
            'protocol_id': 0,
            'priority_flag': 0,
            'registered_delivery': 0,
            'replace_if_present_flag': 0,
            'data_coding': 0,
            'short_message': b'Hello World',
        }

    def test_defaults_for_absent_fields(self):
        params = build_submit_params(
            InputPDU(), default_source='SENDER', default_destination='123'
        )
        assert params['source_addr'] == 'SENDER'
        assert params['destination_addr'] == '123'
        assert params['short_message'] == b''
        assert params['data_coding'] == 0
        assert params['esm_class'] == 0

    def test_explicit_addresses_win(self):
        params = build_submit_params(
            InputPDU(source_addr='', destination_addr='999'),
            default_source='SENDER',
            default_destination='123',
        )
        assert params['source_addr'] == ''
        assert params['destination_addr'] == '999'

    def test_udh_is_prepended(self):
        params = build_submit_params(
            InputPDU(short_message='Hi', udh='050003A40201', esm_class=0x03)
        )
        assert params['short_message'] == bytes.fromhex('050003A40201') + b'Hi'
        assert params['esm_class'] == 0x03 | EsmClassFlag.UDHI

    def test_invalid_udh_is_ignored(self, caplog):
        with caplog.at_level('WARNING'):
            params = build_submit_params(InputPDU(short_message='Hi', udh='zz'))
        assert params['short_message'] == b'Hi'
        assert params['esm_class'] == 0
        assert 'Ignoring UDH' in caplog.text

    def test_ucs2_message(self):
        params = build_submit_params(InputPDU(short_message='Привет', data_coding=8))
        assert params['data_coding'] == 8
        assert params['short_message'] == 'Привет'.encode('utf-16-be')

    def test_body_at_field_limit_stays_in_short_message(self):
        params = build_submit_params(InputPDU(short_message='A' * 254, data_coding=1))
        assert params['short_message'] == b'A' * 254
        assert 'message_payload' not in params

    def test_long_body_moves_to_message_payload(self):
        udh = '050003A40201'
        params = build_submit_params(InputPDU(short_message='A' * 300, udh=udh))
        assert params['short_message'] == b''
        assert params['message_payload'] == bytes.fromhex(udh) + b'A' * 300
        assert params['esm_class'] & EsmClassFlag.UDHI
