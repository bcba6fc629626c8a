import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from loz.utils import config as config_mod
from loz.utils.config import Config
from loz.utils.console import print_assistant_message, print_error, print_plain, write_fragment
from loz.utils.input_handler import InputHandler
from loz.utils.logging import NOISY_LOGGERS, setup_logging
from loz.utils.prompts import ESL_PROMPT, PROOFREAD_PROMPT, mode_prefix


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("LOZ_CONFIG_DIR", "LOZ_DEV_MODE", "LOZ_DEFAULT_API", "LOZ_OPENAI_MODEL", "OPENAI_API_KEY", "LOZ_OPENAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_config_defaults(clean_env):
    config = Config(DEV_MODE=False)
    assert config.DEFAULT_API == "openai"
    assert config.OPENAI_MODEL == "gpt-3.5-turbo"
    assert config.MAX_TOKENS == 4000
    assert config.COMMIT_MAX_TOKENS == 500
    assert config.OPENAI_API_KEY is None


def test_config_reads_env(clean_env, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("LOZ_OPENAI_MODEL", "gpt-4o")
    config = Config()
    assert config.OPENAI_API_KEY == "sk-test"
    assert config.OPENAI_MODEL == "gpt-4o"


def test_installed_storage_locations(clean_env, tmp_path):
    config = Config(CONFIG_DIR=str(tmp_path / "home"), DEV_MODE=False)
    assert config.config_file == tmp_path / "home" / "config.json"
    assert config.log_dir == tmp_path / "home"
    assert not (tmp_path / "home").exists()


def test_dev_storage_locations(clean_env, tmp_path, monkeypatch):
    monkeypatch.setattr(config_mod, "get_project_root", lambda: tmp_path / "repo")
    config = Config(DEV_MODE=True)
    assert config.config_file == tmp_path / "repo" / ".loz" / "config.json"
    assert config.log_dir == tmp_path / "repo" / "logs"


def test_dev_mode_autodetect(clean_env, tmp_path, monkeypatch):
    monkeypatch.setattr(config_mod, "get_project_root", lambda: tmp_path)
    assert Config().is_dev_mode is False
    (tmp_path / ".git").mkdir()
    assert Config().is_dev_mode is True


def test_config_dir_expands_user(clean_env):
    config = Config(CONFIG_DIR="~/somewhere")
    assert config.CONFIG_DIR == str(Path("~/somewhere").expanduser())


def test_model_for(clean_env):
    config = Config(OLLAMA_MODEL="mistral")
    assert config.model_for("ollama") == "mistral"
    assert config.model_for("openai") == config.OPENAI_MODEL


def test_mode_prefix():
    assert mode_prefix("esl") == ESL_PROMPT
    assert mode_prefix("proofread") == PROOFREAD_PROMPT
    assert mode_prefix(None) == ""
    assert mode_prefix("unknown") == ""


def test_input_handler_reads_piped_lines(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("first\nsecond"))
    handler = InputHandler(console=Console(file=io.StringIO()))
    assert handler.get_input() == "first"
    assert handler.get_input() == "second"
    with pytest.raises(EOFError):
        handler.get_input()


def test_write_fragment_and_plain():
    buffer = io.StringIO()
    write_fragment(buffer, "abc")
    print_plain("def", out=buffer)
    assert buffer.getvalue() == "abcdef\n"


def test_print_error():
    buffer = io.StringIO()
    print_error("Invalid API key", Console(file=buffer))
    assert buffer.getvalue().strip() == "Error: Invalid API key"


def test_print_assistant_message_splits_paragraphs():
    buffer = io.StringIO()
    print_assistant_message("Title line\n\nSecond paragraph", title="model", target=Console(file=buffer, width=60))
    text = buffer.getvalue()
    assert "Title line" in text
    assert "Second paragraph" in text
    assert "model" in text


def test_setup_logging_levels():
    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.INFO
    setup_logging(debug=True)
    assert logging.getLogger().level == logging.DEBUG
    setup_logging()
    assert logging.getLogger().level == logging.WARNING
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_print_error_keeps_bracketed_text():
    buffer = io.StringIO()
    print_error("pathspec '[/x]' did not match", Console(file=buffer))
    assert buffer.getvalue().strip() == "Error: pathspec '[/x]' did not match"
