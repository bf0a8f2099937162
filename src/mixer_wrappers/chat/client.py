import asyncio as _asyncio
import collections.abc as _cabc
import logging as _log

import aiohttp as _ahttp
import mixer_wrappers.chat.models as _mwcm
import mixer_wrappers.protocol.models as _mwpm
import mixer_wrappers.types as _tps
import mixer_wrappers.websockets.client as _mwwc

_LOGGER = _log.getLogger(__name__)


class ChatClient:
    """
    Client for one of a channel's chat servers.

    The endpoint comes from `ChatHelper.get_servers`. After connecting, call
    `authenticate` once; anonymous connections can read but not send.
    """

    def __init__(
        self, session: _ahttp.ClientSession, endpoint: str, client_id: str
    ) -> None:
        self._socket = _mwwc.SocketClient(session, endpoint, client_id)

    @classmethod
    def connect(
        cls, session: _ahttp.ClientSession, endpoint: str, client_id: str
    ) -> "ChatClient":
        client = cls(session, endpoint, client_id)
        client.start()
        return client

    @property
    def socket(self) -> _mwwc.SocketClient:
        return self._socket

    @property
    def messages(self) -> _asyncio.Queue[str]:
        return self._socket.messages

    def start(self) -> None:
        self._socket.start()

    async def wait_until_connected(self) -> None:
        await self._socket.wait_until_connected()

    async def join(self) -> None:
        await self._socket.join()

    async def close(self) -> None:
        await self._socket.close()

    def create_method(
        self, method: str, arguments: _cabc.Sequence[_tps.Json] = ()
    ) -> _mwcm.Method:
        return _mwcm.Method(
            method=method, arguments=list(arguments), id=self._socket.next_method_id()
        )

    async def call_method(
        self, method: str, arguments: _cabc.Sequence[_tps.Json] = ()
    ) -> _mwcm.Method:
        """
        Send a method call and return it; match its `id` against replies.
        """
        to_send = self.create_method(method, arguments)
        _LOGGER.debug("Sending method call to socket: %s", to_send)
        await self._socket.send_raw_message(to_send.model_dump_json())
        return to_send

    async def authenticate(
        self,
        channel_id: int,
        user_id: int | None = None,
        auth_key: str | None = None,
    ) -> _mwcm.Method:
        if user_id is None or auth_key is None:
            _LOGGER.debug("Authenticating as anonymous.")
            return await self.call_method("auth", [channel_id])

        _LOGGER.debug("Authenticating as a user.")
        return await self.call_method("auth", [channel_id, user_id, auth_key])

    async def send_message(self, text: str) -> _mwcm.Method:
        return await self.call_method("msg", [text])

    async def whisper(self, username: str, text: str) -> _mwcm.Method:
        return await self.call_method("whisper", [username, text])

    async def ping(self) -> _mwcm.Method:
        return await self.call_method("ping")

    @staticmethod
    def parse(message: str | bytes) -> _mwcm.StreamMessage:
        return _mwpm.parse_stream_message(message, _mwcm.MODELS_BY_TYPE)

    async def receive(self) -> _mwcm.StreamMessage:
        return await _mwpm.receive_stream_message(
            self._socket.messages, _mwcm.MODELS_BY_TYPE
        )
