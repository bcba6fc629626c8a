from enum import Enum

from ..errors import ConfigurationError


class ProviderIdentity(str, Enum):
    """Which provider client is active for the session."""

    OPENAI = "openai"
    OLLAMA = "ollama"

    @classmethod
    def parse(cls, value: str | None, default: str = "openai") -> 'ProviderIdentity':
        """Resolve a configured ``api`` value, falling back to *default* when unset."""
        raw = (value or default).strip().lower()
        try:
            return cls(raw)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ConfigurationError(f"Unknown api '{raw}'. Valid values are: {valid}") from None
