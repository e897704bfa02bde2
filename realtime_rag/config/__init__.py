"""
Configuration module for the realtime RAG voice client.

This module provides centralized configuration management for the application,
including constants, logging setup, and environment-based settings.

Key components:
- constants: Application-wide constants such as the logger name, realtime
  event types, audio defaults and the search result limit.
- logging_config: Console and rotating file logging for the application logger.
- settings: The Settings model and load_settings(), which reads the Azure
  OpenAI and Azure AI Search configuration from the environment and fails
  with ConfigurationMissing when a required value is absent.

Usage examples:
```python
from realtime_rag.config.logging_config import configure_logging
from realtime_rag.config.settings import load_dotenv_file, load_settings

logger = configure_logging()
load_dotenv_file()
settings = load_settings({"deployment": "gpt-4o-realtime-preview"})
logger.info(f"Using deployment {settings.deployment}")
```
"""
