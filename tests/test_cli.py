"""Tests for the `hcimport` command line interface."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from hcimporter import __main__ as cli_mod
from hcimporter.__main__ import cli, main

from conftest import CLIENT_CONFIG_PROPS, make_corrupt_deflated_archive

EMPTY_DOCUMENT = '{"HADOOP_CONFIG_KEY":{}}'


@pytest.fixture(autouse=True)
def _no_log_level_env(monkeypatch):
    monkeypatch.delenv("HCIMPORT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("HADOOP_CLIENT_CONFIG_URL", raising=False)
    monkeypatch.delenv("HADOOP_CLIENT_CONFIG_USER", raising=False)
    monkeypatch.delenv("HADOOP_CLIENT_CONFIG_PASSWORD", raising=False)


@pytest.fixture()
def runner():
    return CliRunner()


class TestImport:
    def test_reads_archive_from_stdin(self, runner, client_config_archive):
        result = runner.invoke(cli, [], input=client_config_archive)

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"HADOOP_CONFIG_KEY": CLIENT_CONFIG_PROPS}

    def test_reads_archive_from_config_url(self, runner, client_config_file):
        result = runner.invoke(cli, ["-cu", client_config_file.as_uri()])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"HADOOP_CONFIG_KEY": CLIENT_CONFIG_PROPS}

    def test_config_url_from_environment(self, runner, monkeypatch, client_config_file):
        monkeypatch.setenv("HADOOP_CLIENT_CONFIG_URL", client_config_file.as_uri())
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"HADOOP_CONFIG_KEY": CLIENT_CONFIG_PROPS}

    def test_passes_request_options(self, runner):
        url = "https://cm.example.com:7183/clientConfig"
        with patch.object(cli_mod, "import_client_params", return_value=EMPTY_DOCUMENT) as imp:
            result = runner.invoke(
                cli,
                ["-cu", url, "--user", "admin", "--password", "secret", "--verify", "false",
                 "--proxy", "http://proxy:3128"],
            )

        assert result.exit_code == 0
        args, kwargs = imp.call_args
        assert args == (url,)
        assert kwargs["auth"].username == "admin"
        assert kwargs["auth"].password == "secret"
        assert kwargs["verify"] is False
        assert kwargs["proxies"] == {"http": "http://proxy:3128", "https": "http://proxy:3128"}


class TestFailures:
    def test_corrupt_archive_exits_non_zero(self, runner):
        result = runner.invoke(cli, [], input=b"not a zip archive")

        assert result.exit_code == 1
        assert "HADOOP_CONFIG_KEY" not in result.stdout
        assert "ArchiveFormatError" in result.output

    def test_verbose_logs_full_traceback(self, runner):
        result = runner.invoke(cli, ["-v"], input=b"not a zip archive")

        assert result.exit_code == 1
        assert "HADOOP_CONFIG_KEY" not in result.stdout
        assert "Traceback" in result.output

    def test_corrupt_compressed_entry_is_reported_tersely(self, runner):
        result = runner.invoke(cli, [], input=make_corrupt_deflated_archive())

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "HADOOP_CONFIG_KEY" not in result.stdout
        assert "ArchiveFormatError" in result.output
        assert "Traceback" not in result.output

    def test_missing_file_exits_non_zero(self, runner, tmp_path):
        result = runner.invoke(cli, ["-cu", (tmp_path / "missing.zip").as_uri()])

        assert result.exit_code == 1
        assert "SourceReadError" in result.output


class TestArguments:
    def test_help_performs_no_import(self, capfd):
        with patch.object(cli_mod, "import_client_params") as imp:
            with pytest.raises(SystemExit) as exc_info:
                main(["-h"])

        assert exc_info.value.code == 0
        captured = capfd.readouterr()
        assert "Usage" in captured.out + captured.err
        imp.assert_not_called()

    def test_invalid_config_url_shows_usage(self, capfd):
        with patch.object(cli_mod, "import_client_params") as imp:
            with pytest.raises(SystemExit) as exc_info:
                main(["-cu", "sldasd"])

        assert exc_info.value.code == 0
        assert "Usage" in capfd.readouterr().err
        imp.assert_not_called()

    def test_unknown_option_shows_usage(self, capfd):
        with patch.object(cli_mod, "import_client_params") as imp:
            with pytest.raises(SystemExit) as exc_info:
                main(["--bogus"])

        assert exc_info.value.code == 0
        assert "Usage" in capfd.readouterr().err
        imp.assert_not_called()

    def test_log_file_in_missing_directory_shows_usage(self, capfd, tmp_path):
        log = tmp_path / "missing" / "hcimport.log"
        with patch.object(cli_mod, "import_client_params") as imp:
            with pytest.raises(SystemExit) as exc_info:
                main(["--log", str(log)])

        assert exc_info.value.code == 0
        err = capfd.readouterr().err
        assert "Usage" in err
        assert "does not exist" in err
        assert not log.parent.exists()
        imp.assert_not_called()

    def test_log_file(self, runner, tmp_path, client_config_file):
        log = tmp_path / "hcimport.log"
        result = runner.invoke(cli, ["-cu", client_config_file.as_uri(), "--log", str(log)])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"HADOOP_CONFIG_KEY": CLIENT_CONFIG_PROPS}
        assert log.exists()

    def test_valid_config_url(self, capfd):
        url = "http://localhost/config-zip"
        with patch.object(cli_mod, "import_client_params", return_value=EMPTY_DOCUMENT) as imp:
            with pytest.raises(SystemExit) as exc_info:
                main(["-cu", url])

        assert exc_info.value.code == 0
        assert capfd.readouterr().out.strip() == EMPTY_DOCUMENT
        imp.assert_called_once_with(url)

    def test_failure_exits_non_zero(self, tmp_path):
        path = tmp_path / "corrupt.zip"
        path.write_bytes(b"corrupt")

        with pytest.raises(SystemExit) as exc_info:
            main(["-cu", path.as_uri()])

        assert exc_info.value.code == 1

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "hcimport" in result.output
