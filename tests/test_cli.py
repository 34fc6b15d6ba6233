"""End-to-end tests for the ``aws-vault`` command table with fake clients."""

import logging
import sys
from unittest.mock import MagicMock
import pytest

from awsvault import cli
from awsvault.base import CloudStorageBlueprint, SecretExistence, SecretManagerBlueprint
from awsvault.base.exceptions import SecretManagerError, StorageError
from awsvault.base.logger import vault_logger

ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:db-pass-AbCdEf"


@pytest.fixture
def factory(monkeypatch):
    """Replace the universal factory; yields (factory_mock, clients_by_service)."""
    clients = {
        "secret_manager": MagicMock(spec=SecretManagerBlueprint),
        "storage": MagicMock(spec=CloudStorageBlueprint),
    }
    clients["secret_manager"].create_secret.return_value = ARN
    clients["secret_manager"].with_timeout.return_value = clients["secret_manager"]
    mock = MagicMock(side_effect=lambda service, provider, config: clients[service])
    monkeypatch.setattr("awsvault.factory.universal_factory", mock)
    return mock, clients


@pytest.fixture
def secret_file(tmp_path):
    path = tmp_path / "secret.json"
    path.write_text('{"password":"x"}')
    return str(path)


def _secret_args(command, secret_file, *extra):
    return [
        command,
        "--name", "db-pass",
        "--region", "us-east-1",
        "--description", "prod db password",
        "--json-file", secret_file,
        *extra,
    ]


class TestNoCommand:
    def test_prints_usage(self, capsys):
        cli.main([])
        assert "usage: aws-vault" in capsys.readouterr().out


class TestCommandTable:
    def test_names(self):
        names = [c.name for c in cli.build_commands()]
        assert names == ["upload", "download", "update-secret", "create-secret"]

    def test_tables_are_independent(self):
        first = cli.build_commands()
        first[0].flags.clear()
        assert cli.build_commands()[0].flags


class TestParseDuration:
    @pytest.mark.parametrize(
        "text, seconds",
        [("30s", 30.0), ("1m30s", 90.0), ("250ms", 0.25), ("2h", 7200.0), ("45", 45.0), ("1.5s", 1.5)],
    )
    def test_valid(self, text, seconds):
        assert cli.parse_duration(text) == pytest.approx(seconds)

    @pytest.mark.parametrize("text", ["", "abc", "10x", "s30", "1m 30s"])
    def test_invalid(self, text):
        import argparse

        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_duration(text)


class TestCreateSecret:
    def test_not_found_creates_and_prints_arn(self, factory, secret_file, capsys):
        mock, clients = factory
        sm = clients["secret_manager"]
        sm.describe_secret.return_value = SecretExistence.NOT_FOUND

        cli.main(_secret_args("create-secret", secret_file))

        sm.create_secret.assert_called_once_with("db-pass", "prod db password", '{"password":"x"}')
        sm.update_secret.assert_not_called()
        assert capsys.readouterr().out == f"Successfully created, Secret ARN: {ARN}\n"
        _, _, config = mock.call_args.args
        assert config == {"region_name": "us-east-1", "timeout": 30.0}

    def test_exists_is_noop(self, factory, secret_file, capsys):
        _, clients = factory
        sm = clients["secret_manager"]
        sm.describe_secret.return_value = SecretExistence.EXISTS

        cli.main(_secret_args("create-secret", secret_file))

        sm.create_secret.assert_not_called()
        sm.update_secret.assert_not_called()
        assert "already exists" in capsys.readouterr().out

    def test_custom_timeout(self, factory, secret_file):
        mock, clients = factory
        clients["secret_manager"].describe_secret.return_value = SecretExistence.NOT_FOUND
        cli.main(_secret_args("create-secret", secret_file, "-t", "1m"))
        _, _, config = mock.call_args.args
        assert config["timeout"] == 60.0

    def test_missing_flag(self, factory, capsys):
        mock, _ = factory
        with pytest.raises(SystemExit) as exc:
            cli.main(["create-secret", "--name", "db-pass"])
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "--name, --region, --description, and --json-file" in err
        mock.assert_not_called()

    def test_unreadable_json_file(self, factory, tmp_path, capsys):
        mock, _ = factory
        with pytest.raises(SystemExit) as exc:
            cli.main(_secret_args("create-secret", str(tmp_path / "missing.json")))
        assert exc.value.code == 1
        assert "Failed to read file" in capsys.readouterr().err
        mock.assert_not_called()


class TestUpdateSecret:
    def test_exists_with_update(self, factory, secret_file, capsys):
        _, clients = factory
        sm = clients["secret_manager"]
        sm.describe_secret.return_value = SecretExistence.EXISTS

        cli.main(_secret_args("update-secret", secret_file, "--update"))

        sm.update_secret.assert_called_once_with("db-pass", "prod db password", '{"password":"x"}')
        sm.create_secret.assert_not_called()
        assert capsys.readouterr().out == "Successfully updated secret.\n"

    def test_exists_without_update(self, factory, secret_file, capsys):
        _, clients = factory
        sm = clients["secret_manager"]
        sm.describe_secret.return_value = SecretExistence.EXISTS

        cli.main(_secret_args("update-secret", secret_file))

        sm.update_secret.assert_not_called()
        sm.create_secret.assert_not_called()
        assert capsys.readouterr().out == (
            "Secret already exists and update flag not set. Exiting.\n"
        )

    def test_not_found_with_update_creates(self, factory, secret_file):
        _, clients = factory
        sm = clients["secret_manager"]
        sm.describe_secret.return_value = SecretExistence.NOT_FOUND

        cli.main(_secret_args("update-secret", secret_file, "-u"))

        sm.create_secret.assert_called_once()
        sm.update_secret.assert_not_called()

    def test_describe_failure_exits_1(self, factory, secret_file, capsys):
        _, clients = factory
        sm = clients["secret_manager"]
        sm.describe_secret.side_effect = SecretManagerError("Failed to describe secret 'db-pass': denied")

        with pytest.raises(SystemExit) as exc:
            cli.main(_secret_args("update-secret", secret_file, "--update"))

        assert exc.value.code == 1
        sm.create_secret.assert_not_called()
        sm.update_secret.assert_not_called()
        assert "Failed to describe secret" in capsys.readouterr().err

    def test_non_positive_timeout(self, factory, secret_file, capsys):
        mock, _ = factory
        with pytest.raises(SystemExit) as exc:
            cli.main(_secret_args("update-secret", secret_file, "--timeout", "0s"))
        assert exc.value.code == 1
        mock.assert_not_called()


class TestTransfer:
    def test_upload(self, factory, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "notes.txt").write_bytes(b"hello")
        _, clients = factory

        cli.main(["upload", "-b", "my-bucket", "-f", "notes.txt", "-s", "backups"])

        clients["storage"].put_object.assert_called_once_with(
            "my-bucket", "backups/notes.txt", b"hello"
        )
        assert capsys.readouterr().out == "File uploaded to S3 successfully.\n"

    def test_download(self, factory, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        _, clients = factory
        clients["storage"].get_object.return_value = b"from s3"

        cli.main(["download", "--bucket", "my-bucket", "--file", "notes.txt"])

        clients["storage"].get_object.assert_called_once_with("my-bucket", "/notes.txt")
        assert (tmp_path / "notes.txt").read_bytes() == b"from s3"
        assert capsys.readouterr().out == "File downloaded from S3 successfully.\n"

    def test_missing_bucket(self, factory, capsys):
        mock, _ = factory
        with pytest.raises(SystemExit) as exc:
            cli.main(["upload", "--file", "notes.txt"])
        assert exc.value.code == 1
        assert "--bucket and --file" in capsys.readouterr().err
        mock.assert_not_called()

    def test_storage_failure_exits_1(self, factory, capsys):
        _, clients = factory
        clients["storage"].get_object.side_effect = StorageError("Failed to download")
        with pytest.raises(SystemExit) as exc:
            cli.main(["download", "-b", "b", "-f", "x.txt"])
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith("Error: Failed to download")

    def test_client_config_error(self, monkeypatch, capsys):
        monkeypatch.setattr(
            "awsvault.factory.universal_factory",
            MagicMock(side_effect=ValueError("bad region")),
        )
        with pytest.raises(SystemExit) as exc:
            cli.main(["download", "-b", "b", "-f", "x.txt"])
        assert exc.value.code == 1
        assert "Error loading AWS SDK config" in capsys.readouterr().err


class _CurrentStderr:
    """Forward writes to whatever ``sys.stderr`` is when the record is emitted.

    capsys swaps its stream between the setup and call phases, so the stream
    seen during fixture setup is already closed by the time the test logs.
    """

    def write(self, text):
        return sys.stderr.write(text)

    def flush(self):
        sys.stderr.flush()


@pytest.fixture
def log_to_stderr(monkeypatch, capsys):
    """Point the shared handler at the captured stderr and restore its level afterwards."""
    previous = vault_logger.logger.level
    for handler in vault_logger.logger.handlers:
        monkeypatch.setattr(handler, "stream", _CurrentStderr())
    yield
    vault_logger.set_level(previous)


class TestVerbose:
    def test_enables_debug_records(self, factory, log_to_stderr, capsys):
        _, clients = factory
        clients["storage"].get_object.side_effect = StorageError("Failed to download")

        with pytest.raises(SystemExit) as exc:
            cli.main(["-v", "download", "-b", "b", "-f", "x.txt"])

        assert exc.value.code == 1
        assert vault_logger.logger.level == logging.DEBUG
        err = capsys.readouterr().err
        assert '"level": "DEBUG"' in err
        assert '"operation": "download"' in err

    def test_quiet_by_default(self, factory, log_to_stderr, capsys):
        _, clients = factory
        clients["storage"].get_object.side_effect = StorageError("Failed to download")

        with pytest.raises(SystemExit):
            cli.main(["download", "-b", "b", "-f", "x.txt"])

        assert capsys.readouterr().err == "Error: Failed to download\n"


class TestSecretInputErrors:
    def test_non_utf8_secret_file(self, factory, tmp_path, capsys):
        mock, _ = factory
        path = tmp_path / "secret.json"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(SystemExit) as exc:
            cli.main(_secret_args("create-secret", str(path)))

        assert exc.value.code == 1
        assert "is not UTF-8 text" in capsys.readouterr().err
        mock.assert_not_called()

    @pytest.mark.parametrize("timeout", ["inf", "1e400", "nan"])
    def test_non_finite_timeout(self, factory, secret_file, capsys, timeout):
        mock, _ = factory
        with pytest.raises(SystemExit) as exc:
            cli.main(_secret_args("update-secret", secret_file, "--timeout", timeout))
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith("Invalid input")
        mock.assert_not_called()


class TestCommandSummary:
    def test_subcommand_help_uses_summary(self, capsys):
        with pytest.raises(SystemExit):
            cli.main(["upload", "--help"])
        assert "Upload file to S3 bucket" in capsys.readouterr().out
