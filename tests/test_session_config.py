import io
import json

import pytest
from rich.console import Console

from loz.errors import ConfigurationError
from loz.utils.session_config import SessionConfig, SessionConfigStore


def test_set_returns_previous_value():
    session_config = SessionConfig({"mode": "esl"})
    assert session_config.set("mode", "proofread") == "esl"
    assert session_config.set("model", "gpt-4o") is None
    assert session_config.mode == "proofread"
    assert session_config.get("model") == "gpt-4o"


def test_reserved_keys():
    session_config = SessionConfig({"api": "ollama"})
    assert session_config.api == "ollama"
    assert session_config.mode is None
    assert "api" in session_config
    assert len(session_config) == 1


def test_to_dict_is_a_copy():
    session_config = SessionConfig({"a": "1"})
    data = session_config.to_dict()
    data["a"] = "2"
    assert session_config.get("a") == "1"


def test_print_entries(recording_console):
    SessionConfig({"mode": "esl", "api": "openai"}).print_entries(recording_console)
    assert recording_console.lines == ["[cyan]mode[/cyan]: esl", "[cyan]api[/cyan]: openai"]


def test_print_entries_empty(recording_console):
    SessionConfig().print_entries(recording_console)
    assert "No config entries" in recording_console.text


def test_load_missing_file_is_empty(tmp_path):
    session_config = SessionConfigStore(tmp_path / "nope" / "config.json").load()
    assert len(session_config) == 0
    assert not (tmp_path / "nope").exists()


def test_save_then_load(tmp_path):
    path = tmp_path / ".loz" / "config.json"
    store = SessionConfigStore(path)
    store.save(SessionConfig({"mode": "esl", "api": "ollama"}))
    assert json.loads(path.read_text()) == {"mode": "esl", "api": "ollama"}
    assert store.load().to_dict() == {"mode": "esl", "api": "ollama"}


def test_load_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        SessionConfigStore(path).load()


def test_load_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('["mode", "esl"]')
    with pytest.raises(ConfigurationError, match="expected a JSON object"):
        SessionConfigStore(path).load()


def test_print_entries_with_markup_characters():
    buffer = io.StringIO()
    SessionConfig({"mode": "[/esl]", "[key]": "v"}).print_entries(Console(file=buffer, width=80))
    assert buffer.getvalue().splitlines() == ["mode: [/esl]", "[key]: v"]
