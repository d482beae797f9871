"""Tests for environment configuration."""

from pathlib import Path

from zorkmate.config import Config


def test_defaults(monkeypatch):
    for name in (
        "ZORKMATE_STORY_FILE",
        "ZORKMATE_QUEUE_DELAY",
        "ZORKMATE_JSON_LOGS",
        "ZORKMATE_HASH_FINGERPRINTS",
    ):
        monkeypatch.delenv(name, raising=False)
    config = Config.from_env()
    assert config.story_file == Path("zork1.z3")
    assert config.interpreter_command == "dfrotz"
    assert config.queue_delay == 0.25
    assert config.json_logs is False
    assert config.hash_fingerprints is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("ZORKMATE_STORY_FILE", "/games/zork1.z5")
    monkeypatch.setenv("ZORKMATE_QUEUE_DELAY", "0")
    monkeypatch.setenv("ZORKMATE_MAX_INPUT_LENGTH", "60")
    monkeypatch.setenv("ZORKMATE_JSON_LOGS", "yes")
    monkeypatch.setenv("ZORKMATE_HASH_FINGERPRINTS", "false")
    monkeypatch.setenv("ZORKMATE_CERTFILE", "cert.pem")

    config = Config.from_env()
    assert config.story_file == Path("/games/zork1.z5")
    assert config.queue_delay == 0.0
    assert config.max_input_length == 60
    assert config.json_logs is True
    assert config.hash_fingerprints is False
    assert config.certfile == Path("cert.pem")
    assert config.keyfile is None
