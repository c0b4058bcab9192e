"""
Test Case Records

Dataclasses for the test-case file format and for validation results. Every
input and expected-output field is optional: None means the field was absent
from the file, which the validator treats differently from an empty string.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from ..exceptions import TestCaseParseException

T = TypeVar('T', bound='_Record')


def _check_type(name: str, value: Any, expected: type) -> None:
    # bool is an int subclass; JSON true/false is never a valid integer field
    if expected is int and isinstance(value, bool):
        raise TypeError(f'{name} must be an integer, got {value!r}')
    if not isinstance(value, expected):
        kind = 'an integer' if expected is int else 'a string'
        raise TypeError(f'{name} must be {kind}, got {value!r}')


class _Record:
    """Mixin building a dataclass of optional str/int fields from JSON."""

    _INT_FIELDS: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls: Type[T], data: Optional[Dict[str, Any]]) -> T:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise TypeError(f'{cls.__name__} must be a JSON object')

        values = {}
        for f in fields(cls):  # type: ignore[arg-type]
            value = data.get(f.name)
            if value is None:
                continue
            _check_type(f.name, value, int if f.name in cls._INT_FIELDS else str)
            values[f.name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize present fields only."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class InputPDU(_Record):
    """The input_pdu object: submit_sm parameters of one test case"""

    _INT_FIELDS = (
        'source_addr_ton',
        'source_addr_npi',
        'dest_addr_ton',
        'dest_addr_npi',
        'esm_class',
        'protocol_id',
        'priority_flag',
        'registered_delivery',
        'replace_if_present_flag',
        'data_coding',
        'sm_length',
    )

    command_id: Optional[str] = None
    service_type: Optional[str] = None
    source_addr_ton: Optional[int] = None
    source_addr_npi: Optional[int] = None
    source_addr: Optional[str] = None
    dest_addr_ton: Optional[int] = None
    dest_addr_npi: Optional[int] = None
    destination_addr: Optional[str] = None
    esm_class: Optional[int] = None
    protocol_id: Optional[int] = None
    priority_flag: Optional[int] = None
    registered_delivery: Optional[int] = None
    replace_if_present_flag: Optional[int] = None
    data_coding: Optional[int] = None  # 0 == 7-bit, 8 == 16-bit (UCS-2/UTF-16BE)
    encoding: Optional[str] = None  # "7-bit" or "16-bit", informational only
    sm_length: Optional[int] = None
    short_message: Optional[str] = None
    udh: Optional[str] = None


@dataclass(frozen=True)
class ExpectedOutput(_Record):
    """The expected_output_pdu object"""

    _INT_FIELDS = ('command_status', 'segments')

    command_id: Optional[str] = None
    command_status: Optional[int] = None
    message_id: Optional[str] = None
    delivery_status: Optional[str] = None
    segments: Optional[int] = None
    error: Optional[str] = None
    note: Optional[str] = None

    def error_contains(self, text: str) -> bool:
        """True when an expected error is given and contains text."""
        return self.error is not None and text in self.error


@dataclass(frozen=True)
class TestCase:
    """A submit_sm input paired with the outcome it should produce"""

    __test__ = False

    test_case_id: int = 0
    input_pdu: InputPDU = field(default_factory=InputPDU)
    expected_output: ExpectedOutput = field(default_factory=ExpectedOutput)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: Optional[int] = None) -> 'TestCase':
        """
        Build a test case from a decoded JSON object.

        Raises:
            TestCaseParseException: If the object or one of its fields has the wrong type
        """
        try:
            if not isinstance(data, dict):
                raise TypeError('test case must be a JSON object')
            test_case_id = data.get('test_case_id', 0)
            if test_case_id is None:
                test_case_id = 0
            _check_type('test_case_id', test_case_id, int)
            return cls(
                test_case_id=test_case_id,
                input_pdu=InputPDU.from_dict(data.get('input_pdu')),
                expected_output=ExpectedOutput.from_dict(
                    data.get('expected_output_pdu')
                ),
            )
        except TypeError as e:
            raise TestCaseParseException(
                f'Invalid test case: {e}', record_index=index, original_error=e
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            'test_case_id': self.test_case_id,
            'input_pdu': self.input_pdu.to_dict(),
            'expected_output_pdu': self.expected_output.to_dict(),
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one test case"""

    index: int
    valid: bool = True
    errors: Tuple[str, ...] = ()
    computed_sm_length: int = 0
    segments: int = 0
    note: Optional[str] = None
    expected_output_match: bool = False
    mismatches: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """JSON form; empty errors/mismatches and a missing note are omitted."""
        result: Dict[str, Any] = {'index': self.index, 'valid': self.valid}
        if self.errors:
            result['errors'] = list(self.errors)
        result['computed_sm_length'] = self.computed_sm_length
        result['segments'] = self.segments
        if self.note:
            result['note'] = self.note
        result['expected_output_match'] = self.expected_output_match
        if self.mismatches:
            result['mismatches'] = list(self.mismatches)
        return result


@dataclass(frozen=True)
class ValidationReport:
    """Summary counts over a batch of validation results"""

    total: int = 0
    valid: int = 0
    invalid: int = 0
    mismatched: int = 0

    @classmethod
    def from_results(cls, results) -> 'ValidationReport':
        results = list(results)
        valid = sum(1 for r in results if r.valid)
        return cls(
            total=len(results),
            valid=valid,
            invalid=len(results) - valid,
            mismatched=sum(1 for r in results if not r.expected_output_match),
        )

    @property
    def all_matched(self) -> bool:
        return self.mismatched == 0
