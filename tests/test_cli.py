"""
Tests for the dxcore command line.

Error output goes through rich on stderr, so failures are checked by
exit code rather than message text.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from dxcore.cli import cli, detect_format
from dxcore.exit_codes import CONFIG_ERROR, DATA_ERROR, USAGE_ERROR

from conftest import SHA1


@pytest.fixture
def runner():
    return CliRunner()


class TestDetectFormat:

    def test_explicit_wins(self):
        assert detect_format("ref.yaml", "json") == "json"

    def test_by_extension(self):
        assert detect_format("ref.yaml", None) == "yaml"
        assert detect_format("ref.YML", None) == "yaml"
        assert detect_format("ref.json", None) == "json"

    def test_default(self):
        assert detect_format("<stdin>", None) == "json"
        assert detect_format(None, None) == "json"


class TestTypesCommand:

    def test_lists_types(self, runner):
        result = runner.invoke(cli, ['types'])
        assert result.exit_code == 0
        assert "Commit" in result.output
        assert "WorktreeStatus" in result.output


class TestValidateCommand:
    """Tests for `dxcore validate`."""

    def test_valid_hash_from_stdin(self, runner):
        result = runner.invoke(cli, ['validate', 'Hash'], input=f'"{SHA1}"')
        assert result.exit_code == 0
        assert result.output.strip() == "ok: Hash"

    def test_type_name_case_insensitive(self, runner):
        result = runner.invoke(cli, ['validate', 'worktreestatus'], input='{"has_staged": true}')
        assert result.exit_code == 0
        assert "ok: WorktreeStatus" in result.output

    def test_invalid_value(self, runner):
        result = runner.invoke(cli, ['validate', 'Hash'], input='"xyz"')
        assert result.exit_code == DATA_ERROR

    def test_invalid_json(self, runner):
        result = runner.invoke(cli, ['validate', 'Ref'], input='{not json')
        assert result.exit_code == DATA_ERROR

    def test_unknown_type(self, runner):
        result = runner.invoke(cli, ['validate', 'Banana'], input='{}')
        assert result.exit_code == USAGE_ERROR

    def test_yaml_file_by_extension(self, runner, tmp_path, main_ref):
        path = tmp_path / 'ref.yaml'
        path.write_text(main_ref.to_yaml())
        result = runner.invoke(cli, ['validate', 'Ref', str(path)])
        assert result.exit_code == 0
        assert "ok: Ref" in result.output

    @pytest.mark.parametrize("filename", ['bad.json', 'bad.yaml'])
    def test_undecodable_file(self, runner, tmp_path, filename):
        path = tmp_path / filename
        path.write_bytes(b'"\xff\xfe"')
        result = runner.invoke(cli, ['validate', 'Hash', str(path)])
        assert result.exit_code == DATA_ERROR

    def test_explicit_yaml_format(self, runner):
        result = runner.invoke(
            cli, ['validate', 'WorktreeStatus', '--format', 'yaml'],
            input="has_untracked: true\n",
        )
        assert result.exit_code == 0


class TestConvertCommand:
    """Tests for `dxcore convert`."""

    def test_json_to_yaml(self, runner, main_ref):
        result = runner.invoke(cli, ['convert', 'Ref', '--to', 'yaml'], input=main_ref.to_json())
        assert result.exit_code == 0
        assert yaml.safe_load(result.output) == main_ref.to_dict()

    def test_yaml_to_json(self, runner, signature):
        result = runner.invoke(
            cli, ['convert', 'Signature', '--format', 'yaml', '--to', 'json'],
            input=signature.to_yaml(),
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == signature.to_dict()

    def test_output_format_from_environment(self, runner, main_ref, monkeypatch):
        monkeypatch.setenv('DXCORE_OUTPUT_FORMAT', 'yaml')
        result = runner.invoke(cli, ['convert', 'Ref'], input=main_ref.to_json())
        assert result.exit_code == 0
        assert "kind: branch" in result.output

    def test_indent_from_config(self, runner, main_ref, monkeypatch):
        monkeypatch.setenv('DXCORE_OUTPUT_INDENT', '4')
        result = runner.invoke(cli, ['convert', 'Ref', '--to', 'json'], input=main_ref.to_json())
        assert result.exit_code == 0
        assert '\n    "name"' in result.output

    def test_invalid_input(self, runner):
        result = runner.invoke(cli, ['convert', 'Tag'], input='{}')
        assert result.exit_code == DATA_ERROR

    def test_undecodable_file(self, runner, tmp_path):
        path = tmp_path / 'ref.json'
        path.write_bytes(b'{"name": "refs/heads/\xe9"}')
        result = runner.invoke(cli, ['convert', 'Ref', str(path)])
        assert result.exit_code == DATA_ERROR


class TestShowCommand:
    """Tests for `dxcore show`."""

    def test_redacted_by_default(self, runner):
        result = runner.invoke(cli, ['show', 'Hash'], input=f'"{SHA1}"')
        assert result.exit_code == 0
        assert "a1b2c3d" in result.output
        assert SHA1 not in result.output

    def test_unsafe_flag(self, runner):
        result = runner.invoke(cli, ['show', 'Hash', '--unsafe'], input=f'"{SHA1}"')
        assert result.exit_code == 0
        assert SHA1 in result.output

    def test_unsafe_from_config(self, runner, monkeypatch):
        monkeypatch.setenv('DXCORE_LOGGING_UNSAFE', 'true')
        result = runner.invoke(cli, ['show', 'Hash'], input=f'"{SHA1}"')
        assert SHA1 in result.output

    def test_safe_overrides_config(self, runner, monkeypatch):
        monkeypatch.setenv('DXCORE_LOGGING_UNSAFE', 'true')
        result = runner.invoke(cli, ['show', 'Hash', '--safe'], input=f'"{SHA1}"')
        assert SHA1 not in result.output


class TestInferKindCommand:

    @pytest.mark.parametrize("name,expected", [
        ("refs/tags/v1.0.0", "tag"),
        ("refs/remotes/origin/main", "remote-branch"),
        ("HEAD", "head"),
        ("main", "unknown"),
    ])
    def test_infer(self, runner, name, expected):
        result = runner.invoke(cli, ['infer-kind', name])
        assert result.exit_code == 0
        assert result.output.strip() == expected


class TestConfigFile:
    """Tests for commands run with a malformed config file."""

    def test_scalar_sections_ignored(self, runner, tmp_path, monkeypatch, main_ref):
        path = tmp_path / 'config.yaml'
        path.write_text("logging: verbose\noutput: yaml\n")
        monkeypatch.setenv('DXCORE_CONFIG', str(path))
        result = runner.invoke(cli, ['convert', 'Ref'], input=main_ref.to_json())
        assert result.exit_code == 0
        assert json.loads(result.output) == main_ref.to_dict()
        result = runner.invoke(cli, ['show', 'Hash'], input=f'"{SHA1}"')
        assert result.exit_code == 0
        assert SHA1 not in result.output


class TestGlobalOptions:

    def test_bad_log_level(self, runner):
        result = runner.invoke(cli, ['--log-level', 'chatty', 'types'])
        assert result.exit_code == CONFIG_ERROR

    def test_log_level_accepted(self, runner):
        result = runner.invoke(cli, ['--log-level', 'debug', 'infer-kind', 'HEAD'])
        assert result.exit_code == 0
