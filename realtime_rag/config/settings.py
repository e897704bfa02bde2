"""
Runtime settings for the realtime RAG voice client.

Settings are read from the environment (optionally populated from a .env file)
once at startup and passed explicitly to the components that need them.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

import dotenv
from pydantic import BaseModel, Field

from realtime_rag.config.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_OUTPUT_AUDIO_FILE,
    LOGGER_NAME,
)
from realtime_rag.errors import ConfigurationMissing

logger = logging.getLogger(LOGGER_NAME)

# Setting name -> environment variable
REQUIRED_SETTINGS: Dict[str, str] = {
    "openai_endpoint": "AZURE_OPENAI_ENDPOINT",
    "openai_api_key": "AZURE_OPENAI_API_KEY",
    "deployment": "AZURE_OPENAI_DEPLOYMENT",
    "search_endpoint": "AZURE_SEARCH_ENDPOINT",
    "search_api_key": "AZURE_SEARCH_API_KEY",
    "search_index": "AZURE_SEARCH_INDEX",
    "input_audio_path": "INPUT_AUDIO_PATH",
}

OPTIONAL_SETTINGS: Dict[str, str] = {
    "api_version": "AZURE_OPENAI_API_VERSION",
    "output_audio_path": "OUTPUT_AUDIO_PATH",
}


class Settings(BaseModel):
    """Validated configuration for one conversation run."""

    openai_endpoint: str = Field(..., description="Azure OpenAI resource endpoint")
    openai_api_key: str = Field(..., description="Azure OpenAI API key")
    deployment: str = Field(..., description="Realtime model deployment name")
    api_version: str = Field(DEFAULT_API_VERSION, description="Realtime API version")
    search_endpoint: str = Field(..., description="Azure AI Search endpoint")
    search_api_key: str = Field(..., description="Azure AI Search API key")
    search_index: str = Field(..., description="Search index holding the product catalog")
    input_audio_path: Path = Field(..., description="PCM16 file with the user question")
    output_audio_path: Path = Field(
        Path(DEFAULT_OUTPUT_AUDIO_FILE), description="Where the assistant audio is written"
    )


def load_dotenv_file(env_path: Path = Path(".") / ".env") -> bool:
    """Load environment variables from a .env file if it exists."""
    if env_path.exists():
        dotenv.load_dotenv(env_path)
        logger.debug(f"Loaded environment from {env_path}")
        return True
    return False


def load_settings(
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from the environment, applying non-empty overrides on top.

    Args:
        overrides: Values keyed by setting name (e.g. from command line flags)
        environ: Environment mapping to read; defaults to os.environ

    Returns:
        Settings: The validated settings

    Raises:
        ConfigurationMissing: If any required setting is absent or empty
    """
    environ = os.environ if environ is None else environ
    overrides = overrides or {}

    values: Dict[str, str] = {}
    for name, env_var in {**REQUIRED_SETTINGS, **OPTIONAL_SETTINGS}.items():
        value = overrides.get(name) or environ.get(env_var)
        if value:
            values[name] = value

    for name, env_var in REQUIRED_SETTINGS.items():
        if name not in values:
            raise ConfigurationMissing(name, env_var)

    settings = Settings(**values)
    logger.debug(
        f"Settings loaded: deployment={settings.deployment}, index={settings.search_index}"
    )
    return settings
