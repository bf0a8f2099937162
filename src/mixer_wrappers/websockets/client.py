import asyncio as _asyncio
import itertools as _it
import logging as _log

import aiohttp as _ahttp
import mixer_wrappers.errors as _mwerr
import mixer_wrappers.websockets.common as _mwwcom
import mixer_wrappers.websockets.types as _mwwt

_LOGGER = _log.getLogger(__name__)


class SocketClient:
    """
    One websocket connection to a Mixer socket endpoint.

    `start` spawns a task that performs the handshake and then receives frames
    until the socket closes. Frames reach the caller through the message
    sink (by default a queue exposed as `messages`); connection status
    changes go through a one-slot channel that `check_connection` polls
    without blocking. Nothing reconnects a closed connection.
    """

    def __init__(
        self,
        session: _ahttp.ClientSession,
        endpoint: str,
        client_id: str,
        frame_sink: _mwwt.FrameSink | None = None,
        is_bot: bool = True,
    ) -> None:
        self._session = session
        self._endpoint = endpoint
        self._client_id = client_id
        self._is_bot = is_bot

        self._queue_sink: _mwwt.QueueFrameSink | None = None
        if frame_sink is None:
            self._queue_sink = _mwwt.QueueFrameSink()
            frame_sink = self._queue_sink
        self._frame_sink = frame_sink

        self._status_channel = _asyncio.Queue[bool](maxsize=1)
        self._is_connected = False
        self._method_ids = _it.count()

        self._websocket: _ahttp.ClientWebSocketResponse | None = None
        self._connection_task: _asyncio.Task[None] | None = None
        self._connect_attempted = _asyncio.Event()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def messages(self) -> _asyncio.Queue[str]:
        if self._queue_sink is None:
            raise RuntimeError("Frames are delivered to a custom sink.")
        return self._queue_sink.queue

    def handshake_headers(self) -> dict[str, str]:
        return {
            "client-id": self._client_id,
            "x-is-bot": "true" if self._is_bot else "false",
        }

    def start(self) -> None:
        if self._connection_task:
            raise RuntimeError("Already started.")

        _LOGGER.info("Starting.")

        self._connection_task = _asyncio.create_task(self._run())

    async def _run(self) -> None:
        _LOGGER.debug("Starting connection to %s.", self._endpoint)

        try:
            websocket = await self._session.ws_connect(
                self._endpoint, headers=self.handshake_headers()
            )
        except (_ahttp.ClientError, TimeoutError) as error:
            _LOGGER.error("Could not start socket connection: %r", error)
            raise _mwerr.ConnectionSetupError(
                f"Could not connect to {self._endpoint}."
            ) from error
        else:
            self._websocket = websocket
            _LOGGER.info("Connected.")
            self._publish_status(True)
        finally:
            self._connect_attempted.set()

        try:
            await _mwwcom.forward_frames(websocket, self._frame_sink)
        finally:
            _LOGGER.warning("Closed: %s", websocket.close_code)
            self._publish_status(False)
            if not websocket.closed:
                await websocket.close()

    def _publish_status(self, is_connected: bool) -> None:
        # Only the latest status matters.
        while not self._status_channel.empty():
            self._status_channel.get_nowait()
        self._status_channel.put_nowait(is_connected)

    def check_connection(self) -> bool:
        try:
            is_connected = self._status_channel.get_nowait()
        except _asyncio.QueueEmpty:
            return self._is_connected

        _LOGGER.debug("Got new connection status: %s", is_connected)
        self._is_connected = is_connected
        return self._is_connected

    def next_method_id(self) -> int:
        return next(self._method_ids)

    async def send_raw_message(self, message: str) -> None:
        if not self.check_connection() or self._websocket is None:
            raise _mwerr.NotConnectedError()

        _LOGGER.debug("Sending message to socket: %s", message)
        await self._websocket.send_str(message)

    async def wait_until_connected(self) -> None:
        if not self._connection_task:
            raise RuntimeError("Not started.")

        await self._connect_attempted.wait()

        if self._websocket is None:
            # Re-raises the setup error.
            await self._connection_task

    async def join(self) -> None:
        if not self._connection_task:
            raise RuntimeError("Not started.")

        await self._connection_task

    async def close(self) -> None:
        """
        Close the socket and wait for the connection task to finish.

        A connection still in its handshake is closed once the handshake ends.
        Setup failures are not raised again here; `join` and
        `wait_until_connected` report them.
        """
        if not self._connection_task:
            raise RuntimeError("Not started.")

        await self._connect_attempted.wait()

        if self._websocket is not None:
            await self._websocket.close()

        try:
            await self._connection_task
        except _mwerr.ConnectionSetupError:
            _LOGGER.debug("Closed a connection that never opened.")
