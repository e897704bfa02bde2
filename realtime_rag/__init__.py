"""
Realtime RAG Voice Client - Azure OpenAI Realtime API grounded in Azure AI Search

This application demonstrates a realtime speech-to-speech conversation in which
the model answers product questions using a catalog search tool. A recorded
user question is streamed to the model; the model calls the "search" tool, the
client runs the query against Azure AI Search and reports the results back,
and the spoken answer is saved while its transcript is printed.

Architecture Overview:
- A realtime WebSocket session to an Azure OpenAI deployment
- A single dispatch loop routing session updates to audio, transcript and
  tool call handling
- An Azure AI Search client for the product catalog

Key Components:
- bot: Realtime session client, update dispatcher and tool executor
- config: Constants, logging setup and environment-based settings
- models: Pydantic models for updates, outgoing messages and pending calls
- services: Product search over Azure AI Search
- main: Orchestration of one conversation run

Getting Started:
1. Set up environment variables (or a .env file):
   - AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_API_KEY, AZURE_OPENAI_DEPLOYMENT
   - AZURE_SEARCH_ENDPOINT, AZURE_SEARCH_API_KEY, AZURE_SEARCH_INDEX
   - INPUT_AUDIO_PATH: PCM16 recording of the user question
   - LOG_LEVEL: Logging level (default INFO)

2. Run a conversation:
   ```bash
   python run.py
   ```
"""
