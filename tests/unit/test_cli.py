"""
Unit tests for the smppcheck command line.
"""

import json
import logging
import os
from unittest.mock import patch

import pytest
from smppcheck.cli import EXIT_ERROR, EXIT_MISMATCH, EXIT_OK, build_parser, main
from smppcheck.exceptions import SMPPSessionException
from smppcheck.session.tracker import SubmissionOutcome


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """Run in an empty directory and restore root logging afterwards."""
    for name in ('SMPP_HOST', 'SMPPCHECK_LOG_LEVEL', 'SMPPCHECK_LOG_FILE'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    os.environ.pop('SMPP_HOST', None)


@pytest.fixture
def cases_file(tmp_path, sample_record):
    mismatching = json.loads(json.dumps(sample_record))
    mismatching['test_case_id'] = 2
    mismatching['expected_output_pdu']['segments'] = 3
    path = tmp_path / 'cases.json'
    path.write_text(json.dumps([sample_record, mismatching]), encoding='utf-8')
    return path


@pytest.fixture
def matching_file(tmp_path, sample_record):
    path = tmp_path / 'matching.jsonl'
    path.write_text(json.dumps(sample_record) + '\n', encoding='utf-8')
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_validate_arguments(self):
        args = build_parser().parse_args(['--log-level', 'DEBUG', 'validate', 'f.json', '-o', 'out.json'])
        assert args.command == 'validate'
        assert str(args.file) == 'f.json'
        assert str(args.output) == 'out.json'
        assert args.log_level == 'DEBUG'


class TestValidateCommand:
    """Tests for `smppcheck validate`."""

    def test_all_matched(self, matching_file, capsys):
        assert main(['validate', str(matching_file)]) == EXIT_OK
        results = json.loads(capsys.readouterr().out)
        assert results == [
            {
                'index': 0,
                'valid': True,
                'computed_sm_length': 11,
                'segments': 1,
                'expected_output_match': True,
            }
        ]

    def test_mismatch(self, cases_file, capsys):
        assert main(['validate', str(cases_file)]) == EXIT_MISMATCH
        results = json.loads(capsys.readouterr().out)
        assert results[1]['mismatches'] == ['expected segments 3 but computed 1']

    def test_output_file(self, cases_file, tmp_path, capsys):
        output = tmp_path / 'results.json'
        main(['validate', str(cases_file), '--output', str(output)])
        assert capsys.readouterr().out == ''
        assert len(json.loads(output.read_text(encoding='utf-8'))) == 2

    def test_parse_error(self, tmp_path):
        path = tmp_path / 'empty.json'
        path.write_text('', encoding='utf-8')
        assert main(['validate', str(path)]) == EXIT_ERROR

    def test_missing_file(self, tmp_path):
        assert main(['validate', str(tmp_path / 'nope.json')]) == EXIT_ERROR

    def test_invalid_log_level(self, matching_file):
        assert main(['--log-level', 'LOUD', 'validate', str(matching_file)]) == EXIT_ERROR

    def test_log_file(self, matching_file, tmp_path):
        log_file = tmp_path / 'smppcheck.log'
        main(['--log-file', str(log_file), 'validate', str(matching_file)])
        logging.getLogger().handlers[-1].flush()
        assert 'Loaded 1 test cases' in log_file.read_text(encoding='utf-8')


class TestRunCommand:
    """Tests for `smppcheck run`."""

    def test_run(self, matching_file, monkeypatch, capsys):
        monkeypatch.setenv('SMPP_HOST', 'smsc.example.com')
        outcome = SubmissionOutcome(test_case_id=1, sequence=1, command_status=0)
        with patch('smppcheck.cli.run_test_cases', return_value=[outcome]) as run:
            assert main(['run', str(matching_file)]) == EXIT_OK

        config, test_cases, _ = run.call_args.args
        assert config.host == 'smsc.example.com'
        assert [tc.test_case_id for tc in test_cases] == [1]
        assert json.loads(capsys.readouterr().out)[0]['matched'] is True

    def test_run_with_failures(self, matching_file, monkeypatch):
        monkeypatch.setenv('SMPP_HOST', 'smsc.example.com')
        outcome = SubmissionOutcome(test_case_id=1, mismatches=('CommandStatus mismatch',))
        with patch('smppcheck.cli.run_test_cases', return_value=[outcome]):
            assert main(['run', str(matching_file)]) == EXIT_MISMATCH

    def test_env_file(self, matching_file, tmp_path):
        env_file = tmp_path / 'smsc.env'
        env_file.write_text('SMPP_HOST=from-env-file\n', encoding='utf-8')
        with patch('smppcheck.cli.run_test_cases', return_value=[]) as run:
            assert main(['run', str(matching_file), '--env-file', str(env_file)]) == EXIT_OK
        assert run.call_args.args[0].host == 'from-env-file'

    def test_missing_host(self, matching_file):
        with patch('smppcheck.cli.run_test_cases') as run:
            assert main(['run', str(matching_file)]) == EXIT_ERROR
        run.assert_not_called()

    def test_session_error(self, matching_file, monkeypatch):
        monkeypatch.setenv('SMPP_HOST', 'smsc.example.com')
        with patch(
            'smppcheck.cli.run_test_cases', side_effect=SMPPSessionException('refused')
        ):
            assert main(['run', str(matching_file)]) == EXIT_ERROR
