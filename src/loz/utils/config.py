import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROVIDER_OPENAI = "openai"
PROVIDER_OLLAMA = "ollama"

CONFIG_FILE_NAME = "config.json"
DEV_CONFIG_DIR_NAME = ".loz"
DEV_LOG_DIR_NAME = "logs"

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """Root of the checkout this package was loaded from (src layout)."""
    return Path(__file__).resolve().parents[3]


def running_from_checkout() -> bool:
    """True when the package runs from its own git repository."""
    return (get_project_root() / ".git").exists()


class Config(BaseSettings):
    # --- Storage --- #
    CONFIG_DIR: str = Field(default=os.path.expanduser("~/.loz"), description="User configuration directory for config.json and chat logs")
    DEV_MODE: Optional[bool] = Field(default=None, description="Force dev (repo-local) storage on or off. Auto-detected when unset")

    # --- Provider Settings --- #
    DEFAULT_API: str = Field(default=PROVIDER_OPENAI, description="Provider used when the session config has no 'api' entry")
    OPENAI_API_KEY: Optional[str] = Field(default=None, validation_alias=AliasChoices("OPENAI_API_KEY", "LOZ_OPENAI_API_KEY"), description="Credential for the OpenAI API")
    OPENAI_MODEL: str = Field(default="gpt-3.5-turbo", description="OpenAI chat model")
    OLLAMA_URL: str = Field(default="http://localhost:11434")
    OLLAMA_MODEL: str = Field(default="llama2", description="Ollama model name")
    OLLAMA_BINARY: str = Field(default="ollama", description="Executable used for the daemon version probe")
    REQUEST_TIMEOUT: int = Field(default=120, description="Provider request timeout in seconds")

    # --- LLM Generation Settings --- #
    MAX_TOKENS: int = Field(default=4000, description="Maximum tokens for interactive answers")
    COMMIT_MAX_TOKENS: int = Field(default=500, description="Maximum tokens for commit messages and piped prompts")
    TEMPERATURE: float = Field(default=0.0, description="Default generation temperature")
    TOP_P: float = Field(default=1.0, description="Default nucleus sampling top-p")
    FREQUENCY_PENALTY: float = Field(default=0.0)
    PRESENCE_PENALTY: float = Field(default=0.0)

    # --- UI/Interaction Settings --- #
    VERBOSE: bool = Field(default=False, description="Verbose mode for debugging")
    PLAIN_OUTPUT: bool = Field(default=False, description="Use plain text output without Rich formatting")
    NO_STREAM: bool = Field(default=False, description="Disable streaming output")

    model_config = SettingsConfigDict(
        env_prefix="LOZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra='ignore'
    )

    def __init__(self, **values: Any):
        if 'CONFIG_DIR' in values:
            values['CONFIG_DIR'] = str(Path(values['CONFIG_DIR']).expanduser())
        super().__init__(**values)

    @property
    def is_dev_mode(self) -> bool:
        if self.DEV_MODE is not None:
            return self.DEV_MODE
        return running_from_checkout()

    @property
    def config_file(self) -> Path:
        """Where the session config is persisted."""
        if self.is_dev_mode:
            return get_project_root() / DEV_CONFIG_DIR_NAME / CONFIG_FILE_NAME
        return Path(self.CONFIG_DIR) / CONFIG_FILE_NAME

    @property
    def log_dir(self) -> Path:
        """Where chat history files are written."""
        if self.is_dev_mode:
            return get_project_root() / DEV_LOG_DIR_NAME
        return Path(self.CONFIG_DIR)

    def model_for(self, provider: str) -> str:
        if provider == PROVIDER_OLLAMA:
            return self.OLLAMA_MODEL
        return self.OPENAI_MODEL
