"""
Tests for config.py - BnfParseConfig and the base directory.
"""

import json
import os

import pytest

from bnfparse.config import (
    DEFAULT_PORT,
    BnfParseConfig,
    BnfParseConfigError,
    _ensure_bnfparse_dir,
    get_base_dir,
)


class TestBaseDir:
    """Tests for locating the base directory."""

    def test_env_override(self, bnfparse_home):
        assert get_base_dir() == bnfparse_home.resolve()

    def test_default_under_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BNFPARSE_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_base_dir() == tmp_path / ".bnfparse"

    def test_ensure_creates_directory(self, bnfparse_home):
        result = _ensure_bnfparse_dir()
        assert os.path.isdir(result)
        assert result.endswith(".bnfparse")


class TestBnfParseConfig:
    """Tests for the BnfParseConfig class."""

    def test_defaults(self):
        config = BnfParseConfig()
        assert config.port == DEFAULT_PORT == 3000
        assert config.host == "0.0.0.0"
        assert config.log_level == "INFO"
        assert config.log_to_file is False
        assert os.path.isfile(config.webpage_path)
        assert os.path.isfile(config.api_spec_path)

    def test_custom_values(self):
        config = BnfParseConfig(port="8080", host="127.0.0.1")
        assert config.port == 8080
        assert config.host == "127.0.0.1"

    def test_get_method(self):
        config = BnfParseConfig()
        assert config.get("port") == 3000
        assert config.get("nonexistent_key") is None
        assert config.get("nonexistent_key", "default") == "default"

    def test_attribute_set(self):
        config = BnfParseConfig()
        config.port = 9000
        assert config.port == 9000

    def test_invalid_attribute(self):
        with pytest.raises(AttributeError):
            _ = BnfParseConfig().nonexistent_attribute

    def test_unknown_keys_rejected(self):
        with pytest.raises(BnfParseConfigError):
            BnfParseConfig(colour="blue")

    def test_invalid_port_rejected(self):
        with pytest.raises(BnfParseConfigError):
            BnfParseConfig(port="not-a-port")

    def test_path_expansion(self):
        config = BnfParseConfig(webpage_path="~/page.html")
        assert not config.webpage_path.startswith("~")
        assert config.webpage_path.endswith("page.html")

    def test_load_creates_default_file(self, bnfparse_home):
        config = BnfParseConfig.load()
        config_path = bnfparse_home / "config.json"
        assert config_path.exists()
        with open(config_path) as f:
            assert json.load(f)["port"] == config.port

    def test_load_reads_existing_default_file(self, bnfparse_home):
        bnfparse_home.mkdir(parents=True)
        (bnfparse_home / "config.json").write_text(json.dumps({"port": 4000}))
        assert BnfParseConfig.load().port == 4000

    def test_save_and_load_explicit_path(self, tmp_path):
        path = str(tmp_path / "custom.json")
        BnfParseConfig(port=5001, log_level="DEBUG").save(path)
        config = BnfParseConfig.load(path)
        assert config.port == 5001
        assert config.log_level == "DEBUG"

    def test_load_missing_explicit_path(self, tmp_path):
        with pytest.raises(BnfParseConfigError):
            BnfParseConfig.load(str(tmp_path / "missing.json"))

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(BnfParseConfigError):
            BnfParseConfig.load(str(path))

    def test_load_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(BnfParseConfigError):
            BnfParseConfig.load(str(path))

    def test_to_dict_is_a_copy(self):
        config = BnfParseConfig()
        data = config.to_dict()
        data["port"] = 1
        assert config.port == 3000
