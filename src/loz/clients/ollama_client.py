import json
import logging
from typing import Any, Iterator

import requests

from ..clients.base import LLMClient
from ..errors import TransportError
from ..models.params import Completion, CompletionParameters
from ..models.provider import ProviderIdentity
from ..utils.config import Config # Keep for type hinting
from ..utils.ollama_utils import probe_ollama_version

# Get logger instance
logger = logging.getLogger(__name__)


class OllamaClient(LLMClient):
    """Client for a locally running Ollama daemon.

    Ollama is driven through its streaming ``/api/generate`` endpoint only;
    non-streaming completions drain the same stream.
    """
    PROVIDER = ProviderIdentity.OLLAMA
    SUPPORTS_STREAMING = True
    RULE_STYLE = "purple"

    def __init__(self, model: str, config: Config):
        super().__init__(model, config) # Pass config to base class
        self.base_url = config.OLLAMA_URL.rstrip("/")

    def check_environment(self) -> str:
        """Verify the daemon is installed; raises ProviderEnvironmentError otherwise."""
        return probe_ollama_version(self.config.OLLAMA_BINARY)

    def _build_payload(self, params: CompletionParameters) -> dict[str, Any]:
        options: dict[str, Any] = {
            "temperature": params.temperature,
            "num_predict": params.max_tokens,
            "top_p": params.top_p,
            "frequency_penalty": params.frequency_penalty,
            "presence_penalty": params.presence_penalty,
        }
        if params.stop:
            options["stop"] = list(params.stop)
        return {
            "model": params.model,
            "prompt": params.prompt,
            "stream": True,
            "options": options,
        }

    def complete(self, params: CompletionParameters) -> Completion:
        text = self.stream_complete(params, lambda fragment: None)
        return Completion(text=text, model=params.model)

    def _iter_fragments(self, params: CompletionParameters) -> Iterator[str]:
        """Iterates through Ollama stream chunks, raising on daemon errors."""
        payload = self._build_payload(params)
        self._print_verbose_payload("Querying Ollama API (Streaming)", payload)
        try:
            http_response = requests.post(
                f"{self.base_url}/api/generate",
                json=payload,
                stream=True,
                timeout=self.config.REQUEST_TIMEOUT,
            )
            http_response.raise_for_status()
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Could not connect to Ollama server at {self.base_url}. Ensure it is running.") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(f"Ollama request failed: {e}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Ollama request failed: {e}") from e

        try:
            for line in http_response.iter_lines():
                if not line:
                    continue
                try:
                    chunk = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning(f"Could not decode JSON line from Ollama: {line!r}")
                    continue

                if "error" in chunk:
                    raise TransportError(f"Ollama Error: {chunk['error']}")
                content = chunk.get("response")
                if content:
                    yield content
                if chunk.get("done"):
                    break
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Error during Ollama stream processing: {e}") from e
        finally:
            http_response.close()

    def get_styling(self) -> tuple[str | None, str]:
        """Return Ollama specific styling."""
        panel_border_style = "purple"
        panel_title = f"[bold {panel_border_style}]{self.model}[/bold {panel_border_style}]"
        return panel_title, panel_border_style
