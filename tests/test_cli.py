"""Tests for CLI command."""

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner
from mdview.cli import cli
from mdview.config import CONFIG_FILENAME, Config
from mdview.core.scanner import ScanOrder
from mdview.errors import ScanError, ShutdownError


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> list[Config]:
    """Replace run_server, record the configs it receives and report serving."""
    configs: list[Config] = []

    def fake_run_server(config: Config, on_serving: Callable[[], None] | None = None) -> None:
        configs.append(config)
        if on_serving is not None:
            on_serving()

    monkeypatch.setattr("mdview.server.run_server", fake_run_server)
    return configs


@pytest.fixture
def empty_config(tmp_path: Path) -> Path:
    config_file = tmp_path / CONFIG_FILENAME
    config_file.write_text("")
    return config_file


class TestArguments:
    """Tests for positional argument validation."""

    def test__no_directory__exits_1(self, served: list[Config]) -> None:
        """Require a directory argument."""
        result = CliRunner().invoke(cli, [])

        assert result.exit_code == 1
        assert "exactly one DIRECTORY argument, got 0" in result.output
        assert served == []

    def test__two_directories__exits_1(self, tmp_path: Path, served: list[Config]) -> None:
        """Reject more than one directory."""
        result = CliRunner().invoke(cli, [str(tmp_path), str(tmp_path)])

        assert result.exit_code == 1
        assert "got 2" in result.output

    def test__file_argument__exits_1(self, tmp_path: Path, served: list[Config]) -> None:
        """Reject paths that are not directories."""
        file_path = tmp_path / "notes.md"
        file_path.write_text("# Notes")

        result = CliRunner().invoke(cli, [str(file_path)])

        assert result.exit_code == 1
        assert "not a directory" in result.output

    def test__missing_directory__exits_1(self, tmp_path: Path, served: list[Config]) -> None:
        """Reject directories that do not exist."""
        result = CliRunner().invoke(cli, [str(tmp_path / "nonexistent")])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestServe:
    """Tests for starting the server."""

    def test__defaults__serves_directory(
        self,
        docs_dir: Path,
        empty_config: Path,
        served: list[Config],
    ) -> None:
        """Build the config from defaults and the directory."""
        result = CliRunner().invoke(cli, ["-c", str(empty_config), str(docs_dir)])

        assert result.exit_code == 0
        assert f"Serving {docs_dir} at http://127.0.0.1:8080/" in result.output
        [config] = served
        assert config.docs.source_dir == docs_dir
        assert config.server.port == 8080
        assert config.theme.dark is False
        assert config.docs.order is ScanOrder.DEPTH

    def test__flags__override_config(
        self,
        docs_dir: Path,
        empty_config: Path,
        served: list[Config],
    ) -> None:
        """Apply port, host, order and theme flags."""
        result = CliRunner().invoke(
            cli,
            [
                "-c",
                str(empty_config),
                "-p",
                "9000",
                "--host",
                "0.0.0.0",
                "--order",
                "walk",
                "-d",
                "-v",
                str(docs_dir),
            ],
        )

        assert result.exit_code == 0
        [config] = served
        assert config.server.port == 9000
        assert config.server.host == "0.0.0.0"
        assert config.docs.order is ScanOrder.WALK
        assert config.theme.dark is True

    def test__config_file__used_without_flags(
        self,
        tmp_path: Path,
        docs_dir: Path,
        served: list[Config],
    ) -> None:
        """Read settings from the config file."""
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[server]\nport = 9200\n\n[theme]\ndark = true\n")

        result = CliRunner().invoke(cli, ["-c", str(config_file), str(docs_dir)])

        assert result.exit_code == 0
        [config] = served
        assert config.server.port == 9200
        assert config.theme.dark is True

    def test__invalid_config__exits_1(
        self,
        tmp_path: Path,
        docs_dir: Path,
        served: list[Config],
    ) -> None:
        """Exit with an error for invalid config values."""
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[server]\nport = "high"\n')

        result = CliRunner().invoke(cli, ["-c", str(config_file), str(docs_dir)])

        assert result.exit_code == 1
        assert "server.port must be an integer" in result.output
        assert served == []

    @pytest.mark.parametrize(
        "error",
        [
            ScanError("Failed to scan docs: permission denied"),
            ShutdownError("Graceful shutdown failed: boom"),
            OSError("address already in use"),
        ],
    )
    def test__server_failure__exits_1(
        self,
        docs_dir: Path,
        empty_config: Path,
        monkeypatch: pytest.MonkeyPatch,
        error: Exception,
    ) -> None:
        """Exit with status 1 when the server fails."""

        def fail(config: Config, on_serving: Callable[[], None] | None = None) -> None:
            raise error

        monkeypatch.setattr("mdview.server.run_server", fail)

        result = CliRunner().invoke(cli, ["-c", str(empty_config), str(docs_dir)])

        assert result.exit_code == 1
        assert str(error) in result.output
        assert "Serving" not in result.output
