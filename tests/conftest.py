import io
from types import SimpleNamespace

import pytest

from loz.clients.base import LLMClient
from loz.core import LozSession
from loz.models.params import Completion
from loz.models.provider import ProviderIdentity
from loz.pipeline import CompletionPipeline
from loz.utils.history import HistoryLog
from loz.utils.session_config import SessionConfig, SessionConfigStore


def make_config(tmp_path, **overrides):
    """SimpleNamespace stand-in for Config with every field the code reads."""
    values = dict(
        CONFIG_DIR=str(tmp_path),
        DEV_MODE=False,
        DEFAULT_API="openai",
        OPENAI_API_KEY="test-key",
        OPENAI_MODEL="gpt-3.5-turbo",
        OLLAMA_URL="http://localhost:11434",
        OLLAMA_MODEL="llama2",
        OLLAMA_BINARY="ollama",
        REQUEST_TIMEOUT=30,
        MAX_TOKENS=4000,
        COMMIT_MAX_TOKENS=500,
        TEMPERATURE=0.0,
        TOP_P=1.0,
        FREQUENCY_PENALTY=0.0,
        PRESENCE_PENALTY=0.0,
        VERBOSE=False,
        PLAIN_OUTPUT=True,
        NO_STREAM=False,
        config_file=tmp_path / "config.json",
        log_dir=tmp_path,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class FakeClient(LLMClient):
    """Scripted client: replies come from a list of fragment lists or exceptions."""

    PROVIDER = ProviderIdentity.OPENAI
    SUPPORTS_STREAMING = True

    def __init__(self, config, replies=None, model="fake-model", streaming=True):
        super().__init__(model, config)
        self.replies = list(replies or [])
        self.calls = []
        self.SUPPORTS_STREAMING = streaming

    def _next_reply(self, params):
        self.calls.append(params)
        reply = self.replies.pop(0) if self.replies else [""]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def complete(self, params):
        return Completion(text="".join(self._next_reply(params)), model=self.model)

    def _iter_fragments(self, params):
        for fragment in self._next_reply(params):
            if isinstance(fragment, BaseException):
                raise fragment
            yield fragment

    def get_styling(self):
        return None, "green"


class RecordingConsole:
    """Collects whatever is printed, in order."""

    def __init__(self):
        self.lines = []

    def print(self, *args, **kwargs):
        self.lines.append(" ".join(str(a) for a in args))

    @property
    def text(self):
        return "\n".join(self.lines)


@pytest.fixture
def config(tmp_path):
    return make_config(tmp_path)


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def make_session(config, out):
    """Build a LozSession around a FakeClient without touching disk."""

    def _make(replies=None, entries=None, streaming=True, **config_overrides):
        for key, value in config_overrides.items():
            setattr(config, key, value)
        client = FakeClient(config, replies=replies, streaming=streaming)
        pipeline = CompletionPipeline(client, console=RecordingConsole(), out=out)
        return LozSession(
            config,
            SessionConfig(entries),
            SessionConfigStore(config.config_file),
            client,
            HistoryLog(config.log_dir),
            console=RecordingConsole(),
            pipeline=pipeline,
        )

    return _make


@pytest.fixture
def make_client(config):
    def _make(replies=None, streaming=True, model="fake-model"):
        return FakeClient(config, replies=replies, model=model, streaming=streaming)

    return _make


@pytest.fixture
def recording_console():
    return RecordingConsole()
