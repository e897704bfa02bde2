import asyncio
import base64
import json
import logging
import time
import traceback
from typing import Any, AsyncIterator, BinaryIO, Dict, Optional
from urllib.parse import urlencode

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, ConnectionClosedOK

from realtime_rag.config.constants import (
    AUDIO_CHUNK_SIZE,
    DEFAULT_API_VERSION,
    EVENT_INPUT_AUDIO_APPEND,
    EVENT_INPUT_AUDIO_COMMIT,
    EVENT_RESPONSE_CREATE,
    LOGGER_NAME,
)
from realtime_rag.errors import SessionConnectionError
from realtime_rag.models.session import FunctionCallOutputItem, SessionOptions
from realtime_rag.models.updates import Update, parse_server_event

logger = logging.getLogger(LOGGER_NAME)

CONNECTION_TIMEOUT = 30  # seconds
SEND_TIMEOUT = 5.0  # seconds

# WebSocket configuration
WS_MAX_SIZE = 16 * 1024 * 1024  # 16MB - large enough for audio chunks
WS_PING_INTERVAL = 5  # 5 seconds between pings


def build_realtime_url(endpoint: str, deployment: str, api_version: str = DEFAULT_API_VERSION) -> str:
    """Build the realtime websocket URL for an Azure OpenAI resource endpoint."""
    base = endpoint.strip().rstrip("/")
    if base.startswith("https://"):
        base = "wss://" + base[len("https://"):]
    elif base.startswith("http://"):
        base = "ws://" + base[len("http://"):]
    elif not base.startswith(("wss://", "ws://")):
        base = "wss://" + base
    query = urlencode({"api-version": api_version, "deployment": deployment})
    return f"{base}/openai/realtime?{query}"


class RealtimeConversationSession:
    """
    Realtime conversation session with an Azure OpenAI deployment over WebSocket.

    The session sends audio and conversation items to the model and exposes the
    server events it receives as a single, non-restartable stream of updates.
    """
    def __init__(self, endpoint: str, api_key: str, deployment: str,
                 api_version: str = DEFAULT_API_VERSION):
        self.endpoint = endpoint
        self.api_key = api_key
        self.deployment = deployment
        self.api_version = api_version
        self.url = build_realtime_url(endpoint, deployment, api_version)
        self.ws = None
        self.options: Optional[SessionOptions] = None
        self._updates_started = False
        self._is_closing = False
        logger.info(f"RealtimeConversationSession initialized with deployment: {deployment}")

    async def connect(self) -> None:
        """
        Open the WebSocket connection to the realtime endpoint.

        Raises:
            SessionConnectionError: If the connection cannot be established
        """
        headers = {"api-key": self.api_key}
        try:
            logger.info(f"Connecting to Azure OpenAI realtime deployment: {self.deployment}")
            logger.debug(f"WebSocket URL: {self.url}")
            connection_start = time.time()
            self.ws = await asyncio.wait_for(
                websockets.connect(
                    self.url,
                    max_size=WS_MAX_SIZE,
                    ping_interval=WS_PING_INTERVAL,
                    ping_timeout=10,
                    additional_headers=headers,
                ),
                timeout=CONNECTION_TIMEOUT,
            )
            connection_time = time.time() - connection_start
            logger.debug(f"WebSocket connection established in {connection_time:.2f} seconds")
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout while connecting to realtime API (after {CONNECTION_TIMEOUT}s)")
            raise SessionConnectionError(
                f"Timed out connecting to realtime API after {CONNECTION_TIMEOUT}s"
            ) from e
        except Exception as e:
            logger.error(f"Failed to connect to realtime API: {e}")
            logger.debug(f"Connection error details: {traceback.format_exc()}")
            raise SessionConnectionError(f"Failed to connect to realtime API: {e}") from e
        logger.info("Successfully connected to realtime API")

    async def _send_event(self, event: Dict[str, Any]) -> None:
        if self.ws is None:
            raise SessionConnectionError("Realtime session is not connected")
        try:
            await asyncio.wait_for(self.ws.send(json.dumps(event)), timeout=SEND_TIMEOUT)
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout while sending {event.get('type')}")
            raise SessionConnectionError(f"Timed out sending {event.get('type')}") from e
        except ConnectionClosed as e:
            logger.error(f"Connection closed while sending {event.get('type')}: {e}")
            raise SessionConnectionError(f"Connection closed while sending {event.get('type')}") from e

    async def configure(self, options: SessionOptions) -> None:
        """
        Send the session configuration (instructions, tools, audio formats).

        Args:
            options: Session options to apply
        """
        self.options = options
        await self._send_event(options.to_event())
        logger.info(f"Session configured with {len(options.tools)} tool(s)")

    async def send_audio(self, stream: BinaryIO, chunk_size: int = AUDIO_CHUNK_SIZE) -> int:
        """
        Stream raw PCM16 audio from a binary stream into the input audio buffer.

        When server turn detection is disabled the buffer is committed and a
        response is requested explicitly.

        Args:
            stream: Readable binary stream of audio
            chunk_size: Bytes sent per append event

        Returns:
            int: Total number of audio bytes sent
        """
        total = 0
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            await self._send_event({
                "type": EVENT_INPUT_AUDIO_APPEND,
                "audio": base64.b64encode(chunk).decode("ascii"),
            })
            total += len(chunk)
        logger.debug(f"Sent {total} bytes of input audio")

        if self.options is not None and self.options.turn_detection is None:
            await self._send_event({"type": EVENT_INPUT_AUDIO_COMMIT})
            await self.start_new_turn()
        return total

    async def add_item(self, item: FunctionCallOutputItem) -> None:
        """Add an item to the conversation."""
        await self._send_event(item.to_event())
        logger.debug(f"Added {item.type} item for call: {item.call_id}")

    async def start_new_turn(self) -> None:
        """Ask the model to start a new response turn."""
        await self._send_event({"type": EVENT_RESPONSE_CREATE})
        logger.debug("Requested new response turn")

    async def receive_updates(self) -> AsyncIterator[Update]:
        """
        Yield updates from the session until the connection closes.

        Server events that do not map to an update and messages that are not
        valid JSON are skipped.
        """
        if self._updates_started:
            raise SessionConnectionError("Update stream has already been consumed")
        if self.ws is None:
            raise SessionConnectionError("Realtime session is not connected")
        self._updates_started = True

        while not self._is_closing:
            try:
                message = await self.ws.recv()
            except ConnectionClosedOK:
                logger.info("WebSocket connection closed normally")
                break
            except ConnectionClosedError as e:
                logger.warning(f"Connection closed during receive: {e}")
                break

            if isinstance(message, bytes):
                logger.debug(f"Ignoring binary message of size {len(message)} bytes")
                continue
            try:
                event = json.loads(message)
            except json.JSONDecodeError:
                logger.warning(f"Received invalid JSON: {message[:100]}...")
                continue
            if not isinstance(event, dict):
                logger.warning(f"Received non-object event: {message[:100]}...")
                continue

            try:
                update = parse_server_event(event)
            except (KeyError, ValueError) as e:
                logger.warning(f"Could not parse {event.get('type')} event: {e}")
                continue
            if update is not None:
                yield update

        logger.info("Update stream ended")

    async def close(self) -> None:
        """Close the WebSocket connection."""
        if self._is_closing:
            return
        self._is_closing = True
        if self.ws:
            logger.debug("Closing WebSocket connection")
            await self.ws.close()
        logger.info("Realtime session closed")

    async def __aenter__(self) -> "RealtimeConversationSession":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
