from .base import LLMClient
from .factory import ClientFactory
from .ollama_client import OllamaClient
from .openai_client import OpenAIClient

__all__ = ['LLMClient', 'ClientFactory', 'OpenAIClient', 'OllamaClient']
