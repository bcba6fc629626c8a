import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

logger = logging.getLogger(__name__)

# Session config keys that override generation defaults, with their parsers.
_SESSION_OVERRIDES = {
    "model": str,
    "temperature": float,
    "top_p": float,
    "max_tokens": int,
}


@dataclass(frozen=True)
class Completion:
    """Result of a non-streaming completion."""

    text: str
    model: str


@dataclass(frozen=True)
class CompletionParameters:
    """Everything a provider needs for one completion call.

    Instances are immutable; derive a variant with :meth:`with_overrides`.
    """

    prompt: str
    model: str
    max_tokens: int
    temperature: float = 0.0
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    stop: tuple[str, ...] = field(default_factory=tuple)
    stream: bool = True

    @classmethod
    def from_settings(
        cls,
        config: Any,
        model: str,
        prompt: str,
        session: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> 'CompletionParameters':
        """Build parameters from config defaults, session entries, then *overrides*.

        Session entries that cannot be parsed are skipped with a warning so a
        bad ``config temperature hot`` never breaks the next prompt.
        """
        values: dict[str, Any] = {
            "prompt": prompt,
            "model": model,
            "max_tokens": config.MAX_TOKENS,
            "temperature": config.TEMPERATURE,
            "top_p": config.TOP_P,
            "frequency_penalty": config.FREQUENCY_PENALTY,
            "presence_penalty": config.PRESENCE_PENALTY,
            "stream": not config.NO_STREAM,
        }
        for key, parse in _SESSION_OVERRIDES.items():
            raw = session.get(key) if session else None
            if raw is None:
                continue
            try:
                values[key] = parse(raw)
            except ValueError:
                logger.warning(f"Ignoring session config {key}={raw!r}: not a valid {parse.__name__}")
        values.update(overrides)
        stop = values.pop("stop", None)
        if stop:
            values["stop"] = tuple(stop)
        return cls(**values)

    def with_overrides(self, **changes: Any) -> 'CompletionParameters':
        return replace(self, **changes)
