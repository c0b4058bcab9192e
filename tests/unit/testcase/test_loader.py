"""
Unit tests for test-case file loading.
"""

import json

import pytest
from smppcheck.testcase.loader import parse_bytes, parse_file
from smppcheck.exceptions import TestCaseParseException


@pytest.fixture
def records(sample_record):
    second = json.loads(json.dumps(sample_record))
    second['test_case_id'] = 2
    second['input_pdu']['short_message'] = 'Second'
    return [sample_record, second]


class TestJsonArray:
    """Tests for files holding one JSON array."""

    def test_array(self, records):
        test_cases = parse_bytes(json.dumps(records).encode())
        assert [tc.test_case_id for tc in test_cases] == [1, 2]
        assert test_cases[1].input_pdu.short_message == 'Second'

    def test_empty_array(self):
        assert parse_bytes(b'[]') == []

    def test_malformed_array(self):
        with pytest.raises(TestCaseParseException) as exc_info:
            parse_bytes(b'[{"test_case_id": 1},')
        assert exc_info.value.message.startswith('error unmarshalling JSON array')
        assert isinstance(exc_info.value.original_error, json.JSONDecodeError)

    def test_non_object_element(self):
        with pytest.raises(TestCaseParseException) as exc_info:
            parse_bytes(b'[{"test_case_id": 1}, 42]')
        assert exc_info.value.record_index == 1


class TestObjectStream:
    """Tests for newline-delimited or concatenated JSON objects."""

    def test_json_lines(self, records):
        data = '\n'.join(json.dumps(r) for r in records).encode()
        test_cases = parse_bytes(data)
        assert [tc.test_case_id for tc in test_cases] == [1, 2]

    def test_concatenated_objects(self):
        test_cases = parse_bytes(b'{"test_case_id": 1}{"test_case_id": 2}  {"test_case_id": 3}')
        assert [tc.test_case_id for tc in test_cases] == [1, 2, 3]

    def test_pretty_printed_objects(self, records):
        data = '\n\n'.join(json.dumps(r, indent=2) for r in records).encode()
        assert len(parse_bytes(data)) == 2

    def test_malformed_object(self):
        with pytest.raises(TestCaseParseException) as exc_info:
            parse_bytes(b'{"test_case_id": 1}\n{"test_case_id": ')
        assert exc_info.value.message.startswith('error decoding JSON object')
        assert exc_info.value.record_index == 1

    def test_not_json(self):
        with pytest.raises(TestCaseParseException):
            parse_bytes(b'test_case_id=1')


class TestEdgeCases:
    """Tests for empty input, BOM and encoding problems."""

    @pytest.mark.parametrize('data', [b'', b'   \n\t ', b'\xef\xbb\xbf', b'\xef\xbb\xbf  \n'])
    def test_empty_input(self, data):
        with pytest.raises(TestCaseParseException) as exc_info:
            parse_bytes(data)
        assert exc_info.value.message == 'input file is empty'

    def test_bom_is_stripped_before_sniffing(self, records):
        data = b'\xef\xbb\xbf' + json.dumps(records).encode()
        assert len(parse_bytes(data)) == 2

    def test_invalid_utf8(self):
        with pytest.raises(TestCaseParseException):
            parse_bytes(b'{"short_message": "\xff"}')

    def test_non_ascii_text(self):
        data = json.dumps(
            {'input_pdu': {'short_message': 'Привет €'}}, ensure_ascii=False
        ).encode('utf-8')
        assert parse_bytes(data)[0].input_pdu.short_message == 'Привет €'


class TestParseFile:
    """Tests for parse_file()."""

    def test_parse_file(self, tmp_path, records):
        path = tmp_path / 'cases.json'
        path.write_text(json.dumps(records), encoding='utf-8')
        assert len(parse_file(path)) == 2

    def test_accepts_str_path(self, tmp_path, records):
        path = tmp_path / 'cases.jsonl'
        path.write_text('\n'.join(json.dumps(r) for r in records), encoding='utf-8')
        assert len(parse_file(str(path))) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(TestCaseParseException) as exc_info:
            parse_file(tmp_path / 'missing.json')
        assert isinstance(exc_info.value.original_error, OSError)
        assert exc_info.value.file_path.endswith('missing.json')

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.json'
        path.write_bytes(b'')
        with pytest.raises(TestCaseParseException, match='input file is empty'):
            parse_file(path)
