import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator

from rich.console import Console
from rich.json import JSON
from rich.rule import Rule

from ..errors import StreamInterruptedError, TransportError
from ..models.params import Completion, CompletionParameters
from ..models.provider import ProviderIdentity
from ..utils.config import Config # Import Config for type hinting

FragmentCallback = Callable[[str], None]

logger = logging.getLogger(__name__)


class LLMClient(ABC):
    """Abstract base class for LLM clients.

    Subclasses raise :class:`~loz.errors.TransportError` (or one of its
    subclasses) on failure. They never print answers themselves; the
    completion pipeline owns the output sink.
    """

    PROVIDER: ProviderIdentity
    SUPPORTS_STREAMING = False
    RULE_STYLE = "green"

    def __init__(self, model: str, config: Config):
        self.model = model
        self.config = config
        force_term = not self.config.PLAIN_OUTPUT
        self.console = Console(force_terminal=force_term, stderr=True)

    @abstractmethod
    def complete(self, params: CompletionParameters) -> Completion:
        """Run a non-streaming completion and return the whole answer."""
        pass

    def stream_complete(self, params: CompletionParameters, on_fragment: FragmentCallback) -> str:
        """Stream a completion, calling *on_fragment* per fragment in arrival order.

        Returns the concatenation of every fragment delivered.
        """
        return self._collect_stream(self._iter_fragments(params), on_fragment)

    def _iter_fragments(self, params: CompletionParameters) -> Iterator[str]:
        raise NotImplementedError(f"{type(self).__name__} does not support streaming")

    def _collect_stream(self, stream_iterator: Iterator[str], on_fragment: FragmentCallback) -> str:
        """Drain *stream_iterator*, forwarding fragments and keeping the running total.

        A transport failure after the first fragment becomes a
        :class:`StreamInterruptedError` that carries the partial answer.
        """
        total_response = ""
        try:
            for content in stream_iterator:
                if not content:
                    continue
                total_response += content
                on_fragment(content)
        except StreamInterruptedError:
            raise
        except TransportError as e:
            if not total_response:
                raise
            raise StreamInterruptedError(str(e), partial=total_response) from e
        return total_response

    @abstractmethod
    def get_styling(self) -> tuple[str | None, str]:
        """Return the specific panel title and border style for this client."""
        pass

    def _print_verbose_payload(self, title: str, payload: dict[str, Any]) -> None:
        if self.config.VERBOSE:
            self.console.print(Rule(title, style=self.RULE_STYLE))
            try:
                self.console.print(JSON(json.dumps(payload, indent=2)))
            except TypeError as e:
                logger.error(f"Could not serialize payload for Rich JSON printing: {e}")
                self.console.print(f"[red]Error printing payload:[/red] {e}")
            self.console.print(Rule(style=self.RULE_STYLE))
        elif logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"{title}: {json.dumps(payload, default=str)}")
