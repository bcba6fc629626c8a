"""Turns completion parameters into a final answer using the active client."""
import logging
import sys
from typing import TextIO

from rich.console import Console

from .clients.base import LLMClient
from .errors import AuthError, RateLimitError, StreamInterruptedError, TransportError
from .models.params import CompletionParameters
from .utils.console import error_console, print_error, write_fragment

logger = logging.getLogger(__name__)


class CompletionPipeline:
    """Runs one completion at a time against the active provider client.

    Streamed fragments are written to ``out`` as they arrive. Provider errors
    never escape :meth:`run`: a diagnostic goes to the error console and the
    answer is ``""``. Callers treat the empty answer as a failed completion.
    """

    def __init__(self, client: LLMClient, console: Console | None = None, out: TextIO | None = None):
        self.client = client
        self.console = console or error_console
        self._out = out
        self.last_model: str | None = None

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    def switch_client(self, client: LLMClient) -> None:
        """Replace the active client; later calls target the new one."""
        logger.info(f"Switching provider client to {type(client).__name__} ({client.model})")
        self.client = client

    def run(self, params: CompletionParameters) -> str:
        """Return the full answer, or ``""`` when the provider call failed."""
        self.last_model = None
        try:
            if params.stream:
                return self._run_streaming(params)
            completion = self.client.complete(params)
            self.last_model = completion.model
            return completion.text
        except StreamInterruptedError as e:
            write_fragment(self.out, "\n")
            logger.error(f"Stream interrupted after {len(e.partial)} characters: {e}")
            print_error(f"The answer was interrupted and is incomplete: {e}", self.console)
        except AuthError as e:
            logger.error(f"Authentication failed: {e}")
            print_error("Invalid API key", self.console)
        except RateLimitError as e:
            logger.error(f"Rate limited: {e}")
            print_error("API request limit reached", self.console)
        except TransportError as e:
            logger.error(f"Provider request failed: {e}")
            print_error(f"Request failed: {e}", self.console)
        return ""

    def _run_streaming(self, params: CompletionParameters) -> str:
        if self.client.SUPPORTS_STREAMING:
            answer = self.client.stream_complete(params, lambda fragment: write_fragment(self.out, fragment))
            self.last_model = params.model
        else:
            completion = self.client.complete(params)
            self.last_model = completion.model
            answer = completion.text
            write_fragment(self.out, answer)
        write_fragment(self.out, "\n")
        return answer
