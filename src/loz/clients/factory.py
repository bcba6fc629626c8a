"""Provider client factory keyed on :class:`ProviderIdentity`."""
import logging

from .base import LLMClient
from .ollama_client import OllamaClient
from .openai_client import OpenAIClient
from ..models.provider import ProviderIdentity
from ..utils.config import Config

logger = logging.getLogger(__name__)


class ClientFactory:
    """Creates the single active provider client for a session."""

    _clients: dict[ProviderIdentity, type[LLMClient]] = {
        ProviderIdentity.OPENAI: OpenAIClient,
        ProviderIdentity.OLLAMA: OllamaClient,
    }

    @classmethod
    def create(cls, provider: ProviderIdentity, config: Config) -> LLMClient:
        """Build and verify the client for *provider*.

        Raises ConfigurationError when a credential is missing and
        ProviderEnvironmentError when a local daemon is not available.
        """
        client_class = cls._clients[provider]
        model = config.model_for(provider.value)
        logger.debug(f"Initializing {client_class.__name__} for model {model}")
        client = client_class(model, config)
        if isinstance(client, OllamaClient):
            version = client.check_environment()
            logger.debug(f"Ollama detected: {version}")
        return client

    @classmethod
    def list_supported_providers(cls) -> list[str]:
        return [provider.value for provider in cls._clients]
