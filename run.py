"""
Run script for a realtime voice conversation grounded in product search.

This script loads configuration from the environment (and a .env file when
present), lets command line flags override it, and runs one conversation:
the recorded question is sent to the realtime model, the model searches the
product catalog, and the spoken answer is saved while its transcript is printed.

Usage:
    python run.py [--input-audio PATH] [--output-audio PATH] [--deployment NAME]
                  [--search-index NAME] [--log-level LEVEL]
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent))

from realtime_rag.config.constants import DEFAULT_INPUT_AUDIO_FILE, DEFAULT_OUTPUT_AUDIO_FILE
from realtime_rag.config.logging_config import configure_logging
from realtime_rag.config.settings import load_dotenv_file, load_settings
from realtime_rag.errors import ConfigurationMissing
from realtime_rag.main import main as run_main


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Ask a recorded question to a realtime voice assistant grounded in product search"
    )
    parser.add_argument(
        "--input-audio",
        default=os.getenv("INPUT_AUDIO_PATH", str(Path.cwd() / DEFAULT_INPUT_AUDIO_FILE)),
        help="PCM16 recording of the user question (default: INPUT_AUDIO_PATH env var or ./user-question.pcm)",
    )
    parser.add_argument(
        "--output-audio",
        default=os.getenv("OUTPUT_AUDIO_PATH", DEFAULT_OUTPUT_AUDIO_FILE),
        help="Where the assistant audio is written (default: OUTPUT_AUDIO_PATH env var or assistant-response.pcm)",
    )
    parser.add_argument(
        "--deployment",
        default=os.getenv("AZURE_OPENAI_DEPLOYMENT"),
        help="Azure OpenAI realtime deployment (default: AZURE_OPENAI_DEPLOYMENT env var)",
    )
    parser.add_argument(
        "--search-index",
        default=os.getenv("AZURE_SEARCH_INDEX"),
        help="Azure AI Search index with the product catalog (default: AZURE_SEARCH_INDEX env var)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO or LOG_LEVEL env var)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for running a conversation."""
    # Flag defaults read the environment, so load .env first
    load_dotenv_file()
    args = parse_args(argv)
    logger = configure_logging(args.log_level)

    try:
        settings = load_settings({
            "input_audio_path": args.input_audio,
            "output_audio_path": args.output_audio,
            "deployment": args.deployment,
            "search_index": args.search_index,
        })
    except ConfigurationMissing as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info(f"Deployment: {settings.deployment}")
    logger.info(f"Search index: {settings.search_index}")
    return asyncio.run(run_main(settings))


if __name__ == "__main__":
    sys.exit(main())
