"""
smppcheck - SMPP Test-Case Validation and Concatenated SMS Reassembly

This package provides:
- GSM 03.38 character classification and 7-bit encoding
- Encoded-length and segment-count calculation per data coding scheme
- Offline validation of SMPP submit_sm test cases against their expected output
- Thread-safe reassembly of concatenated (multi-part) inbound messages
- An smpplib-backed session that submits test cases to a real SMSC and
  reconciles each submit_sm_resp with the expected result

Quick Start:
    from smppcheck import parse_file, validate_test_cases

    for result in validate_test_cases(parse_file('testcases.json')):
        print(result.to_dict())
"""

import logging

# Configuration management
from .config import (
    LoggingConfig,
    ReassemblyConfig,
    SessionConfig,
    load_session_config,
)

# Exception classes
from .exceptions import (
    ErrorCode,
    SMPPCheckException,
    SMPPConfigurationException,
    SMPPEncodingException,
    SMPPFieldMismatchException,
    SMPPProtocolAnomaly,
    SMPPReassemblyException,
    SMPPSessionException,
    TestCaseParseException,
)

# Encoding rules
from .protocol import (
    CharClass,
    ConcatInfo,
    DataCoding,
    classify,
    compute_length,
    compute_segments,
    is_gsm7_compatible,
)
from .reassembly import Reassembler
from .runner import TestCaseRunner, create_session, run_test_cases

# Session layer
from .session import (
    InboundDispatcher,
    Session,
    SMPPLibSession,
    SubmissionOutcome,
    SubmissionTracker,
)

# Test cases
from .testcase import (
    ExpectedOutput,
    InputPDU,
    TestCase,
    ValidationReport,
    ValidationResult,
    parse_bytes,
    parse_file,
    validate_test_case,
    validate_test_cases,
)

__version__ = '0.1.0'

__all__ = [
    # Encoding rules
    'CharClass',
    'DataCoding',
    'ConcatInfo',
    'classify',
    'is_gsm7_compatible',
    'compute_length',
    'compute_segments',
    # Test cases
    'InputPDU',
    'ExpectedOutput',
    'TestCase',
    'ValidationResult',
    'ValidationReport',
    'parse_file',
    'parse_bytes',
    'validate_test_case',
    'validate_test_cases',
    # Reassembly
    'Reassembler',
    # Session and runner
    'Session',
    'SMPPLibSession',
    'InboundDispatcher',
    'SubmissionTracker',
    'SubmissionOutcome',
    'TestCaseRunner',
    'create_session',
    'run_test_cases',
    # Configuration
    'SessionConfig',
    'ReassemblyConfig',
    'LoggingConfig',
    'load_session_config',
    # Exceptions
    'ErrorCode',
    'SMPPCheckException',
    'SMPPConfigurationException',
    'TestCaseParseException',
    'SMPPEncodingException',
    'SMPPFieldMismatchException',
    'SMPPProtocolAnomaly',
    'SMPPSessionException',
    'SMPPReassemblyException',
]

# Library code logs nothing unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
