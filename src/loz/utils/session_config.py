"""Per-session key/value settings and their JSON persistence.

``mode`` and ``api`` are the reserved keys: ``mode`` selects the prompt
prefix applied to every interactive prompt, ``api`` selects the provider at
startup.
"""
import json
import logging
from pathlib import Path
from typing import Iterator

from rich.console import Console
from rich.markup import escape

from ..errors import ConfigurationError

MODE_KEY = "mode"
API_KEY = "api"

logger = logging.getLogger(__name__)


class SessionConfig:
    """Mutable mapping of unique string keys to string values."""

    def __init__(self, entries: dict[str, str] | None = None):
        self._entries: dict[str, str] = dict(entries or {})

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> str | None:
        """Set *key* and return the value it replaced, if any."""
        previous = self._entries.get(key)
        self._entries[key] = value
        return previous

    @property
    def mode(self) -> str | None:
        return self._entries.get(MODE_KEY)

    @property
    def api(self) -> str | None:
        return self._entries.get(API_KEY)

    def to_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def print_entries(self, console: Console) -> None:
        if not self._entries:
            console.print("[dim]No config entries set.[/dim]")
            return
        for key, value in self._entries.items():
            console.print(f"[cyan]{escape(key)}[/cyan]: {escape(value)}", highlight=False)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class SessionConfigStore:
    """Loads and saves a :class:`SessionConfig` as a JSON object."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> SessionConfig:
        """Read the persisted config; an absent file yields an empty config."""
        if not self.path.is_file():
            logger.debug(f"No session config at {self.path}, starting empty")
            return SessionConfig()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {self.path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid config format in {self.path}: expected a JSON object")
        return SessionConfig({str(k): str(v) for k, v in data.items()})

    def save(self, session_config: SessionConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(session_config.to_dict(), f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved session config to {self.path}")
