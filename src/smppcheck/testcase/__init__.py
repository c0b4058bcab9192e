"""
Test Case Handling

Loading test-case files and validating each case against SMS encoding rules.
"""

from .loader import parse_bytes, parse_file
from .models import (
    ExpectedOutput,
    InputPDU,
    TestCase,
    ValidationReport,
    ValidationResult,
)
from .validator import validate_test_case, validate_test_cases

__all__ = [
    'InputPDU',
    'ExpectedOutput',
    'TestCase',
    'ValidationResult',
    'ValidationReport',
    'parse_file',
    'parse_bytes',
    'validate_test_case',
    'validate_test_cases',
]
