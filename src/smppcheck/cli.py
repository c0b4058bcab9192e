"""
smppcheck Command Line

    smppcheck validate FILE [--output OUT]
    smppcheck run FILE [--env-file PATH]

Exit status is 0 when every test case matched its expected output, 2 when at
least one did not, and 1 when the input or configuration could not be used.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import LoggingConfig, ReassemblyConfig, load_session_config
from .exceptions import (
    SMPPConfigurationException,
    SMPPSessionException,
    TestCaseParseException,
)
from .runner import run_test_cases
from .testcase import ValidationReport, parse_file, validate_test_cases
from .utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISMATCH = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='smppcheck',
        description='Validate SMPP test cases and run them against an SMSC',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: SMPPCHECK_LOG_LEVEL or INFO)',
    )
    parser.add_argument('--log-file', default=None, help='Also log to this file')

    subparsers = parser.add_subparsers(dest='command', required=True)

    validate = subparsers.add_parser(
        'validate', help='Check encoding, length and segmentation offline'
    )
    validate.add_argument('file', type=Path, help='Test-case JSON file')
    validate.add_argument(
        '--output', '-o', type=Path, default=None, help='Write results here'
    )

    run = subparsers.add_parser('run', help='Submit test cases to an SMSC')
    run.add_argument('file', type=Path, help='Test-case JSON file')
    run.add_argument(
        '--env-file', default=None, help='.env file with the SMPP_* settings'
    )
    run.add_argument('--output', '-o', type=Path, default=None, help='Write outcomes here')

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    config = LoggingConfig.from_env()
    if args.log_level:
        config = LoggingConfig.from_dict({**config.to_dict(), 'level': args.log_level})
    log_file = args.log_file or config.log_file
    setup_logging(
        level=getattr(logging, config.level.upper()),
        fmt=config.format,
        log_file=log_file,
    )


def _write_json(records: List[dict], output: Optional[Path]) -> None:
    text = json.dumps(records, indent=2, ensure_ascii=False)
    if output is None:
        print(text)
    else:
        output.write_text(text + '\n', encoding='utf-8')
        logger.info(f'Results written to {output}')


def cmd_validate(args: argparse.Namespace) -> int:
    test_cases = parse_file(args.file)
    results = validate_test_cases(test_cases)
    _write_json([result.to_dict() for result in results], args.output)

    report = ValidationReport.from_results(results)
    return EXIT_OK if report.all_matched else EXIT_MISMATCH


def cmd_run(args: argparse.Namespace) -> int:
    test_cases = parse_file(args.file)
    config = load_session_config(args.env_file)
    outcomes = run_test_cases(config, test_cases, ReassemblyConfig.from_env())
    _write_json([outcome.to_dict() for outcome in outcomes], args.output)

    failed = [outcome for outcome in outcomes if not outcome.matched]
    logger.info(f'{len(outcomes) - len(failed)}/{len(outcomes)} test cases passed')
    return EXIT_MISMATCH if failed else EXIT_OK


COMMANDS = {
    'validate': cmd_validate,
    'run': cmd_run,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        _configure_logging(args)
    except SMPPConfigurationException as e:
        print(f'smppcheck: {e}', file=sys.stderr)
        return EXIT_ERROR

    try:
        return COMMANDS[args.command](args)
    except TestCaseParseException as e:
        logger.error(f'Error parsing test cases: {e}')
    except SMPPConfigurationException as e:
        logger.error(f'Configuration error: {e}')
    except SMPPSessionException as e:
        logger.error(f'Session error: {e}')
    except OSError as e:
        logger.error(f'Error writing output: {e}')
    return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
