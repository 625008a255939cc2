import logging

import pytest

from inventory.core.errors import ConfigurationError
from inventory.shared import load_config, load_secret_key


def test_shared_config_loads():
    config = load_config()

    assert config.database.url.startswith("sqlite")
    assert config.network.rate_limit.requests_per_second > 0
    assert isinstance(config.logging.level, int)


def test_specific_config_replaces_sections(tmp_path):
    specific = tmp_path / "specific.toml"
    specific.write_text('[logging]\nlevel = "debug"\n\n[database]\nurl = "sqlite://"\n')

    config = load_config(specific_config_file=specific)

    assert config.logging.level == logging.DEBUG
    assert config.database.url == "sqlite://"


def test_unknown_log_level_defaults_to_info(tmp_path):
    specific = tmp_path / "specific.toml"
    specific.write_text('[logging]\nlevel = "chatty"\n')

    assert load_config(specific_config_file=specific).logging.level == logging.INFO


class TestSecretKey:
    def test_valid_key(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AES_SECRET_KEY", "ab" * 32)

        assert load_secret_key(tmp_path / "missing.env") == bytes([0xAB]) * 32

    @pytest.mark.parametrize(
        "value",
        ["", "ab" * 31, "ab" * 33, "zz" * 32],
    )
    def test_bad_key(self, monkeypatch, tmp_path, value):
        monkeypatch.setenv("AES_SECRET_KEY", value)

        with pytest.raises(ConfigurationError):
            load_secret_key(tmp_path / "missing.env")

    def test_missing_key(self, monkeypatch, tmp_path):
        monkeypatch.delenv("AES_SECRET_KEY", raising=False)

        with pytest.raises(ConfigurationError):
            load_secret_key(tmp_path / "missing.env")

    def test_read_from_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("AES_SECRET_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("AES_SECRET_KEY=" + "cd" * 32 + "\n")

        assert load_secret_key(env_file) == bytes([0xCD]) * 32
