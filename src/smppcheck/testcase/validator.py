"""
Test Case Validation

Checks one submit_sm test case the way an SMSC would before accepting it:
required fields first, then encoding, then the declared sm_length, and only
then the segment count. The first definitive failure ends the check. The
result is finally compared with the test case's expected output.

sm_length semantics follow the data coding: septets for 7-bit, UTF-16 bytes
for UCS2, UTF-8 bytes for anything else.
"""

import logging
from typing import Iterable, List

from ..exceptions import SMPPEncodingException, SMPPFieldMismatchException
from ..protocol.constants import SEVEN_BIT
from ..protocol.length import compute_length
from ..protocol.segmentation import compute_segments
from .models import TestCase, ValidationResult

logger = logging.getLogger(__name__)

MISSING_DESTINATION_ERROR = 'Missing required field: destination_addr'
INCOMPATIBLE_ENCODING_ERROR = (
    'Message contains characters incompatible with data_coding 0 (GSM 7-bit)'
)
SM_LENGTH_ERROR = (
    'sm_length indicates {declared} bytes but actual short_message is '
    '{computed} bytes (truncated or malformed PDU)'
)
SEGMENTS_MISMATCH = 'expected segments {expected} but computed {computed}'
UDHI_NOTE = 'UDHI present, SMSC should concatenate segments'


def _is_blank(value) -> bool:
    return value is None or not value.strip()


def check_sm_length(declared: int, computed: int) -> None:
    """
    Compare a declared sm_length with the computed length.

    Raises:
        SMPPFieldMismatchException: If they differ
    """
    if declared != computed:
        raise SMPPFieldMismatchException(
            SM_LENGTH_ERROR.format(declared=declared, computed=computed),
            field_name='sm_length',
            expected=declared,
            actual=computed,
        )


def validate_test_case(index: int, test_case: TestCase) -> ValidationResult:
    """
    Validate a single test case.

    Args:
        index: Position of the test case in its batch
        test_case: Parsed test case

    Returns:
        ValidationResult; validation failures never raise
    """
    pdu = test_case.input_pdu
    expected = test_case.expected_output

    if _is_blank(pdu.destination_addr):
        return ValidationResult(
            index=index,
            valid=False,
            errors=(MISSING_DESTINATION_ERROR,),
            expected_output_match=expected.error_contains('Missing required field'),
        )

    short_message = pdu.short_message if pdu.short_message is not None else ''
    data_coding = pdu.data_coding if pdu.data_coding is not None else SEVEN_BIT

    try:
        computed_length = compute_length(short_message, data_coding)
    except SMPPEncodingException as e:
        logger.debug(f'Test case {test_case.test_case_id}: {e}')
        return ValidationResult(
            index=index,
            valid=False,
            errors=(INCOMPATIBLE_ENCODING_ERROR, str(e)),
            expected_output_match=expected.error_contains('incompatible'),
        )

    if pdu.sm_length is not None:
        try:
            check_sm_length(pdu.sm_length, computed_length)
        except SMPPFieldMismatchException as e:
            logger.debug(f'Test case {test_case.test_case_id}: {e}')
            return ValidationResult(
                index=index,
                valid=False,
                errors=(str(e),),
                computed_sm_length=computed_length,
                expected_output_match=expected.error_contains('sm_length indicates'),
            )

    valid = True
    udh_present = not _is_blank(pdu.udh)
    segments = compute_segments(data_coding, udh_present, computed_length)

    # Best-effort comparison; message_id and the like cannot be checked offline.
    match = True
    mismatches: List[str] = []
    if expected.delivery_status is not None:
        status = expected.delivery_status.strip().lower()
        if (status == 'accepted' and not valid) or (status == 'failed' and valid):
            match = False
    if expected.segments is not None and expected.segments != segments:
        match = False
        mismatches.append(
            SEGMENTS_MISMATCH.format(expected=expected.segments, computed=segments)
        )

    return ValidationResult(
        index=index,
        valid=valid,
        computed_sm_length=computed_length,
        segments=segments,
        note=UDHI_NOTE if udh_present else None,
        expected_output_match=match,
        mismatches=tuple(mismatches),
    )


def validate_test_cases(test_cases: Iterable[TestCase]) -> List[ValidationResult]:
    """Validate a batch; results keep the input order."""
    results = [validate_test_case(i, tc) for i, tc in enumerate(test_cases)]
    invalid = sum(1 for r in results if not r.valid)
    logger.info(f'Validated {len(results)} test cases, {invalid} invalid')
    return results
