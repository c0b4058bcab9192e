"""
smppcheck Exception Classes

This module defines the exception classes used throughout the package. Encoding
and field-mismatch errors are recovered by the validator into per-test-case
results; parse and configuration errors propagate to the caller.
"""

from enum import IntEnum
from typing import Any, Dict, Optional, Union


class ErrorCode(IntEnum):
    """Error codes for categorising smppcheck failures."""

    UNKNOWN = 0
    CONFIGURATION_ERROR = 2000
    PARSE_ERROR = 2001
    ENCODING_ERROR = 2002
    FIELD_MISMATCH = 2003
    PROTOCOL_ANOMALY = 2004
    SESSION_ERROR = 2005
    REASSEMBLY_ERROR = 2006


class SMPPCheckException(Exception):
    """Base exception for all smppcheck errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[Union[str, ErrorCode]] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
        **kwargs,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.original_error = original_error
        self.details = kwargs

    def __str__(self) -> str:
        """String representation with error code and context."""
        parts = [super().__str__()]

        if self.error_code:
            if isinstance(self.error_code, ErrorCode):
                parts.append(
                    f'Error Code: {self.error_code.name} ({self.error_code.value})'
                )
            else:
                parts.append(f'Error Code: {self.error_code}')

        if self.context:
            context_str = ', '.join(f'{k}={v}' for k, v in self.context.items())
            parts.append(f'Context: {context_str}')

        return ' | '.join(parts)


class SMPPConfigurationException(SMPPCheckException):
    """Raised when a required configuration value is missing or invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
        original_error: Optional[Exception] = None,
        **kwargs,
    ):
        context = {}
        if config_key:
            context['config_key'] = config_key
        if config_value:
            context['config_value'] = config_value

        super().__init__(
            message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            context=context,
            original_error=original_error,
            **kwargs,
        )
        self.config_key = config_key
        self.config_value = config_value


class TestCaseParseException(SMPPCheckException):
    """Raised when a test-case file is empty or cannot be decoded."""

    # Not a pytest test class despite the name.
    __test__ = False

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        record_index: Optional[int] = None,
        original_error: Optional[Exception] = None,
        **kwargs,
    ):
        context = {}
        if file_path:
            context['file_path'] = file_path
        if record_index is not None:
            context['record_index'] = str(record_index)

        super().__init__(
            message,
            error_code=ErrorCode.PARSE_ERROR,
            context=context,
            original_error=original_error,
            **kwargs,
        )
        self.file_path = file_path
        self.record_index = record_index


class SMPPEncodingException(SMPPCheckException):
    """Raised when a character cannot be represented in the GSM 7-bit alphabet."""

    def __init__(self, character: str, **kwargs):
        codepoint = ord(character)
        super().__init__(
            f'character U+{codepoint:04X} ({character!r}) not representable in GSM 03.38',
            error_code=ErrorCode.ENCODING_ERROR,
            context={'codepoint': f'U+{codepoint:04X}'},
            **kwargs,
        )
        self.character = character
        self.codepoint = codepoint

    def __str__(self) -> str:
        # Validation results embed this text verbatim.
        return self.message


class SMPPFieldMismatchException(SMPPCheckException):
    """Raised when a declared field value disagrees with the computed one."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        expected: Optional[Any] = None,
        actual: Optional[Any] = None,
        **kwargs,
    ):
        context = {}
        if field_name:
            context['field_name'] = field_name
        if expected is not None:
            context['expected'] = str(expected)
        if actual is not None:
            context['actual'] = str(actual)

        super().__init__(
            message,
            error_code=ErrorCode.FIELD_MISMATCH,
            context=context,
            **kwargs,
        )
        self.field_name = field_name
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        return self.message


class SMPPProtocolAnomaly(SMPPCheckException):
    """Raised or recorded for an inbound PDU the dispatcher does not handle."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        sequence_number: Optional[int] = None,
        **kwargs,
    ):
        context = {}
        if command:
            context['command'] = command
        if sequence_number is not None:
            context['sequence_number'] = str(sequence_number)

        super().__init__(
            message,
            error_code=ErrorCode.PROTOCOL_ANOMALY,
            context=context,
            **kwargs,
        )
        self.command = command
        self.sequence_number = sequence_number


class SMPPSessionException(SMPPCheckException):
    """Raised for session-level failures reported by the SMPP library."""

    def __init__(
        self,
        message: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
        **kwargs,
    ):
        context = {}
        if host:
            context['host'] = host
        if port:
            context['port'] = str(port)
        if operation:
            context['operation'] = operation

        super().__init__(
            message,
            error_code=ErrorCode.SESSION_ERROR,
            context=context,
            original_error=original_error,
            **kwargs,
        )
        self.host = host
        self.port = port
        self.operation = operation


class SMPPReassemblyException(SMPPCheckException):
    """Raised when a concatenated part carries impossible header values."""

    def __init__(
        self,
        message: str,
        reference: Optional[int] = None,
        total_parts: Optional[int] = None,
        sequence: Optional[int] = None,
        **kwargs,
    ):
        context = {}
        if reference is not None:
            context['reference'] = str(reference)
        if total_parts is not None:
            context['total_parts'] = str(total_parts)
        if sequence is not None:
            context['sequence'] = str(sequence)

        super().__init__(
            message,
            error_code=ErrorCode.REASSEMBLY_ERROR,
            context=context,
            **kwargs,
        )
        self.reference = reference
        self.total_parts = total_parts
        self.sequence = sequence
