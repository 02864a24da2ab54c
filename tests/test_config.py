"""Tests for configuration loading."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from terminal_radio.core.config import (
    Config,
    LoggingConfig,
    PlayerConfig,
    get_config_path,
    get_log_file_path,
    load_config,
)


@pytest.fixture
def config_home(tmp_path, monkeypatch) -> Path:
    """Isolated XDG config dir with a working directory holding no config.toml."""
    home = tmp_path / "config"
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("TERMINAL_RADIO_DIRECTORY_URL", raising=False)
    monkeypatch.delenv("TERMINAL_RADIO_VOLUME", raising=False)
    monkeypatch.chdir(work)
    return home / "terminal-radio"


def write_config(config_home: Path, content: str) -> None:
    config_home.mkdir(parents=True, exist_ok=True)
    (config_home / "config.toml").write_text(content, encoding="utf-8")


class TestLoadConfig:
    """Tests for load_config()."""

    def test_creates_default_file(self, config_home, capsys) -> None:
        """A missing config file is written with defaults."""
        config = load_config()

        assert (config_home / "config.toml").exists()
        assert config == Config()
        assert "Created default configuration" in capsys.readouterr().out

    def test_default_file_round_trips(self, config_home) -> None:
        """The generated default file loads back to the default config."""
        load_config()
        assert load_config() == Config()

    def test_reads_sections(self, config_home) -> None:
        write_config(
            config_home,
            """
[player]
primary = "cvlc"
volume = 40
stop_grace_period = 2

[directory]
base_url = "http://dir.test"
results_shown = 5

[shutdown]
exit_delay = 0.5

[logging]
level = "debug"
""",
        )

        config = load_config()

        assert config.player.primary == "cvlc"
        assert config.player.secondary == "vlc"
        assert config.player.volume == 40
        assert config.player.stop_grace_period == 2.0
        assert config.directory.base_url == "http://dir.test"
        assert config.directory.results_shown == 5
        assert config.directory.timeout == 5.0
        assert config.shutdown.exit_delay == 0.5
        assert config.logging.level == "DEBUG"

    def test_invalid_player_section_falls_back(self, config_home, capsys) -> None:
        write_config(config_home, "[player]\nvolume = 150\n")

        config = load_config()

        assert config.player == PlayerConfig()
        assert "Invalid player configuration" in capsys.readouterr().out

    def test_malformed_toml_uses_defaults(self, config_home, capsys) -> None:
        write_config(config_home, "[player\nvolume = ")

        assert load_config() == Config()
        assert "Error loading configuration" in capsys.readouterr().out

    def test_local_config_takes_precedence(self, config_home) -> None:
        """config.toml in the working directory wins over the XDG one."""
        write_config(config_home, "[player]\nvolume = 10\n")
        Path("config.toml").write_text("[player]\nvolume = 90\n", encoding="utf-8")

        assert get_config_path() == Path.cwd() / "config.toml"
        assert load_config().player.volume == 90


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_directory_url(self, config_home, monkeypatch) -> None:
        monkeypatch.setenv("TERMINAL_RADIO_DIRECTORY_URL", "http://mirror.test")
        assert load_config().directory.base_url == "http://mirror.test"

    def test_volume_is_clamped(self, config_home, monkeypatch) -> None:
        monkeypatch.setenv("TERMINAL_RADIO_VOLUME", "250")
        assert load_config().player.volume == 100

    def test_invalid_volume_ignored(self, config_home, monkeypatch, capsys) -> None:
        monkeypatch.setenv("TERMINAL_RADIO_VOLUME", "loud")

        assert load_config().player.volume == 70
        assert "TERMINAL_RADIO_VOLUME" in capsys.readouterr().out

    def test_dotenv_in_config_dir(self, config_home, monkeypatch) -> None:
        """Overrides can live in a .env file next to config.toml."""
        write_config(config_home, "")
        (config_home / ".env").write_text("TERMINAL_RADIO_VOLUME=33\n", encoding="utf-8")

        with patch.dict(os.environ):
            assert load_config().player.volume == 33


class TestPlayerConfigValidate:
    """Tests for PlayerConfig.validate()."""

    def test_valid_defaults(self) -> None:
        PlayerConfig().validate()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"volume": -1},
            {"volume": 101},
            {"startup_delay": -0.5},
            {"stop_grace_period": -1},
            {"secondary": ""},
        ],
    )
    def test_invalid(self, overrides) -> None:
        with pytest.raises(ValueError):
            PlayerConfig(**overrides).validate()


class TestLogFilePath:
    """Tests for get_log_file_path()."""

    def test_default_under_data_dir(self, config_home, tmp_path) -> None:
        path = get_log_file_path(Config())
        assert path == tmp_path / "data" / "terminal-radio" / "terminal-radio.log"

    def test_custom_path(self) -> None:
        config = Config(logging=LoggingConfig(log_file="/tmp/radio.log"))
        assert get_log_file_path(config) == Path("/tmp/radio.log")
