"""
Test Case File Loading

Reads a test-case file holding either a JSON array of test cases or a stream
of JSON objects (one per line, or simply concatenated).
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from ..exceptions import TestCaseParseException
from .models import TestCase

logger = logging.getLogger(__name__)

UTF8_BOM = b'\xef\xbb\xbf'


def parse_file(file_path: Union[str, Path]) -> List[TestCase]:
    """
    Load test cases from a JSON or JSON-lines file.

    Args:
        file_path: Path to the test-case file

    Returns:
        Test cases in file order

    Raises:
        TestCaseParseException: If the file is unreadable, empty or malformed
    """
    file_path = Path(file_path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise TestCaseParseException(
            f'Error reading test case file: {file_path}',
            file_path=str(file_path),
            original_error=e,
        ) from e

    test_cases = parse_bytes(data, source=str(file_path))
    logger.info(f'Loaded {len(test_cases)} test cases from {file_path}')
    return test_cases


def parse_bytes(data: bytes, source: str = '<bytes>') -> List[TestCase]:
    """
    Parse raw file content into test cases.

    A leading UTF-8 byte order mark is ignored. Content starting with '[' is
    decoded as one JSON array; anything else as a sequence of JSON objects.
    """
    trimmed = data.strip()
    if trimmed.startswith(UTF8_BOM):
        trimmed = trimmed[len(UTF8_BOM) :].strip()
    if not trimmed:
        raise TestCaseParseException('input file is empty', file_path=source)

    try:
        text = trimmed.decode('utf-8')
    except UnicodeDecodeError as e:
        raise TestCaseParseException(
            f'input file is not valid UTF-8: {e}', file_path=source, original_error=e
        ) from e

    if text.startswith('['):
        records = _decode_array(text, source)
    else:
        records = _decode_object_stream(text, source)
        if not records:
            raise TestCaseParseException(
                'no test cases found in file', file_path=source
            )

    return [TestCase.from_dict(record, index=i) for i, record in enumerate(records)]


def _decode_array(text: str, source: str) -> List[Any]:
    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise TestCaseParseException(
            f'error unmarshalling JSON array: {e}', file_path=source, original_error=e
        ) from e
    if not isinstance(records, list):
        raise TestCaseParseException(
            'error unmarshalling JSON array: top-level value is not an array',
            file_path=source,
        )
    return records


def _decode_object_stream(text: str, source: str) -> List[Any]:
    decoder = json.JSONDecoder()
    records = []
    offset = 0
    length = len(text)
    while True:
        while offset < length and text[offset].isspace():
            offset += 1
        if offset >= length:
            break
        try:
            record, offset = decoder.raw_decode(text, offset)
        except json.JSONDecodeError as e:
            raise TestCaseParseException(
                f'error decoding JSON object: {e}',
                file_path=source,
                record_index=len(records),
                original_error=e,
            ) from e
        records.append(record)
    return records
