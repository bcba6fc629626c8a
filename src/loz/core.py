import logging
from typing import Any

from rich.console import Console

from .clients import ClientFactory, LLMClient
from .models.chat_turn import DEFAULT_MODE, ChatTurn
from .models.params import CompletionParameters
from .models.provider import ProviderIdentity
from .pipeline import CompletionPipeline
from .utils.config import Config
from .utils.console import console as default_console
from .utils.history import HistoryLog
from .utils.prompts import mode_prefix
from .utils.session_config import SessionConfig, SessionConfigStore

logger = logging.getLogger(__name__)


class LozSession:
    """Everything one run of loz shares: settings, session config, client, history.

    Nothing is written to disk until :meth:`shutdown`.
    """

    def __init__(
        self,
        config: Config,
        session_config: SessionConfig,
        store: SessionConfigStore,
        client: LLMClient,
        history: HistoryLog,
        console: Console | None = None,
        pipeline: CompletionPipeline | None = None,
    ):
        self.config = config
        self.session_config = session_config
        self.store = store
        self.client = client
        self.history = history
        self.console = console or default_console
        self.pipeline = pipeline or CompletionPipeline(client)
        self.provider = client.PROVIDER
        self._closed = False

    @classmethod
    def create(cls, config: Config, console: Console | None = None) -> 'LozSession':
        """Load the session config and build the provider client.

        Raises ConfigurationError or ProviderEnvironmentError before anything
        is written.
        """
        store = SessionConfigStore(config.config_file)
        session_config = store.load()
        provider = ProviderIdentity.parse(session_config.api, default=config.DEFAULT_API)
        client = ClientFactory.create(provider, config)
        history = HistoryLog(config.log_dir)
        logger.debug(f"Session ready: provider={provider.value}, model={client.model}, dev_mode={config.is_dev_mode}")
        return cls(config, session_config, store, client, history, console=console)

    @property
    def mode(self) -> str:
        return self.session_config.mode or DEFAULT_MODE

    def build_params(self, prompt: str, **overrides: Any) -> CompletionParameters:
        return CompletionParameters.from_settings(
            self.config,
            model=self.client.model,
            prompt=prompt,
            session=self.session_config.to_dict(),
            **overrides,
        )

    def build_mode_prompt(self, line: str) -> str:
        """The mode's fixed prefix followed by the raw line, verbatim."""
        return mode_prefix(self.session_config.mode) + line

    def ask(self, line: str, **overrides: Any) -> str:
        """Complete *line* in the current mode and record the turn on success."""
        mode = self.mode
        answer = self.pipeline.run(self.build_params(self.build_mode_prompt(line), **overrides))
        if answer:
            self.history.append(ChatTurn(mode, line, answer))
        return answer

    def shutdown(self) -> None:
        """Persist session config and history. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self.store.save(self.session_config)
        except OSError as e:
            logger.error(f"Failed to save session config to {self.store.path}: {e}")
            self.console.print(f"[bold red]Error saving config:[/bold red] {e}")
        try:
            path = self.history.save()
            logger.debug(f"Chat history written to {path}")
        except OSError as e:
            logger.error(f"Failed to save chat history: {e}")
            self.console.print(f"[bold red]Error saving history:[/bold red] {e}")
