"""Tests for environment configuration."""

import pytest

from streamboard.config import Config, DEFAULT_RPC_URL
from streamboard.errors import ConfigError

CONTRACT = "0x6AB397FF662e42312c003175DCD76EfF69D048Fc"


def test_defaults(monkeypatch):
    for name in ("HOST", "PORT", "RPC_URL", "STREAMS_CONTRACT", "PRIVATE_KEY",
                 "PUBLISHER_WALLET", "STREAMS_BACKEND", "SCHEMA_NAME",
                 "PUBLISH_INTERVAL", "POLL_INTERVAL"):
        monkeypatch.delenv(name, raising=False)

    config = Config.from_env()

    assert config.port == 3000
    assert config.rpc_url == DEFAULT_RPC_URL
    assert config.streams_backend == "somnia"
    assert config.schema_name == "player_score"
    assert config.private_key is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("STREAMS_BACKEND", "Memory")
    monkeypatch.setenv("PUBLISHER_WALLET", "0xabc")
    monkeypatch.setenv("POLL_INTERVAL", "0.5")

    config = Config.from_env()

    assert config.port == 8080
    assert config.streams_backend == "memory"
    assert config.publisher_wallet == "0xabc"
    assert config.poll_interval == 0.5


def test_bad_number(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ConfigError):
        Config.from_env()


def test_validate():
    Config(streams_backend="memory").validate(require_signer=True)
    Config(streams_contract=CONTRACT).validate()
    Config(streams_contract=CONTRACT, private_key="0x01").validate(require_signer=True)

    with pytest.raises(ConfigError):
        Config().validate()
    with pytest.raises(ConfigError):
        Config(streams_contract=CONTRACT).validate(require_signer=True)
    with pytest.raises(ConfigError):
        Config(streams_backend="kafka").validate()
    with pytest.raises(ConfigError):
        Config(streams_backend="memory", poll_interval=0).validate()
