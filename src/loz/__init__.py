"""Loz: a simple CLI for LLM."""

__version__ = "0.3.0"

# Re-export client classes
from .clients.openai_client import OpenAIClient
from .clients.ollama_client import OllamaClient
