import logging
import os
from typing import Any, Iterator

from openai import APIStatusError, AuthenticationError, OpenAI, OpenAIError
from openai import RateLimitError as OpenAIRateLimitError

from ..clients.base import LLMClient
from ..errors import AuthError, ConfigurationError, RateLimitError, TransportError
from ..models.params import Completion, CompletionParameters
from ..models.provider import ProviderIdentity
from ..utils.config import Config # Keep for type hinting

logger = logging.getLogger(__name__)


class OpenAIClient(LLMClient):
    """Client for OpenAI API"""
    PROVIDER = ProviderIdentity.OPENAI
    SUPPORTS_STREAMING = True
    RULE_STYLE = "green"

    def __init__(self, model: str, config: Config):
        super().__init__(model, config) # Pass config to base class
        self.api_key = self._get_api_key()
        if not self.api_key:
            raise ConfigurationError("Please set OPENAI_API_KEY in your environment variables")
        self.client = OpenAI(api_key=self.api_key, timeout=config.REQUEST_TIMEOUT)

    def _get_api_key(self) -> str | None:
        return self.config.OPENAI_API_KEY or os.getenv("OPENAI_API_KEY")

    def _model_supports_temperature_top_p(self) -> bool:
        """Some specialized models like gpt-4o-search-preview reject temperature and top_p."""
        unsupported_models = [
            "gpt-4o-search-preview",
            "gpt-4o-audio-preview",
        ]
        return self.model not in unsupported_models

    def _initial_token_param_key(self) -> str:
        # Newer reasoning families take 'max_completion_tokens' instead of 'max_tokens'
        m = self.model.lower()
        if m.startswith("o1") or m.startswith("o3") or m.startswith("o4"):
            return "max_completion_tokens"
        return "max_tokens"

    def _build_payload(self, params: CompletionParameters, stream: bool) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": params.model,
            "messages": [{"role": "user", "content": params.prompt}],
            "stream": stream,
            self._initial_token_param_key(): params.max_tokens,
            "frequency_penalty": params.frequency_penalty,
            "presence_penalty": params.presence_penalty,
        }
        if self._model_supports_temperature_top_p():
            payload["temperature"] = params.temperature
            payload["top_p"] = params.top_p
        if params.stop:
            payload["stop"] = list(params.stop)
        return payload

    def _translate_error(self, error: OpenAIError) -> TransportError:
        if isinstance(error, AuthenticationError):
            return AuthError(f"OpenAI rejected the API key: {error}", status_code=401)
        if isinstance(error, OpenAIRateLimitError):
            return RateLimitError(f"OpenAI rate limit reached: {error}", status_code=429)
        if isinstance(error, APIStatusError):
            return TransportError(f"OpenAI API Error - {error}", status_code=error.status_code)
        return TransportError(f"OpenAI API Error - {error}")

    def complete(self, params: CompletionParameters) -> Completion:
        payload = self._build_payload(params, stream=False)
        self._print_verbose_payload("Querying OpenAI API", payload)
        try:
            completion = self.client.chat.completions.create(**payload)
        except OpenAIError as e:
            logger.error(f"Error making OpenAI API request: {e}")
            raise self._translate_error(e) from e

        response_text = completion.choices[0].message.content or ""
        usage = completion.usage
        if usage and self.config.VERBOSE:
            self.console.print(f"[dim]OpenAI Tokens: Prompt={usage.prompt_tokens}, Completion={usage.completion_tokens}, Total={usage.total_tokens}[/dim]")
        elif usage and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"OpenAI Tokens: Prompt={usage.prompt_tokens}, Completion={usage.completion_tokens}, Total={usage.total_tokens}")
        return Completion(text=response_text, model=completion.model or params.model)

    def _iter_fragments(self, params: CompletionParameters) -> Iterator[str]:
        """Iterates through OpenAI stream chunks and yields content."""
        payload = self._build_payload(params, stream=True)
        self._print_verbose_payload("Querying OpenAI API (Streaming)", payload)
        try:
            stream = self.client.chat.completions.create(**payload)
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except OpenAIError as e:
            logger.error(f"Error during OpenAI stream processing: {e}")
            raise self._translate_error(e) from e

    def get_styling(self) -> tuple[str | None, str]:
        """Return OpenAI specific styling."""
        panel_border_style = "green"
        panel_title = f"[bold {panel_border_style}]{self.model}[/bold {panel_border_style}]"
        return panel_title, panel_border_style
