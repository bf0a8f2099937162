import asyncio as _asyncio
import collections.abc as _cabc
import logging as _log

import aiohttp as _ahttp
import mixer_wrappers.constellation.models as _mwcm
import mixer_wrappers.endpoints as _mwe
import mixer_wrappers.protocol.models as _mwpm
import mixer_wrappers.types as _tps
import mixer_wrappers.websockets.client as _mwwc

_LOGGER = _log.getLogger(__name__)


class ConstellationClient:
    """
    Client for Constellation, Mixer's real-time event service.

    No authentication beyond the handshake headers is needed; subscribe to
    events with `subscribe` and read them with `receive` or from `messages`.
    """

    def __init__(
        self,
        session: _ahttp.ClientSession,
        client_id: str,
        endpoints: _mwe.Endpoints = _mwe.Endpoints(),
    ) -> None:
        self._socket = _mwwc.SocketClient(
            session, endpoints.constellation_url, client_id
        )

    @classmethod
    def connect(
        cls,
        session: _ahttp.ClientSession,
        client_id: str,
        endpoints: _mwe.Endpoints = _mwe.Endpoints(),
    ) -> "ConstellationClient":
        client = cls(session, client_id, endpoints)
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
        self, method: str, params: _cabc.Mapping[str, _tps.Json] | None = None
    ) -> _mwcm.Method:
        return _mwcm.Method(
            method=method, params=dict(params or {}), id=self._socket.next_method_id()
        )

    async def call_method(
        self, method: str, params: _cabc.Mapping[str, _tps.Json] | None = None
    ) -> _mwcm.Method:
        to_send = self.create_method(method, params)
        _LOGGER.debug("Sending method call to socket: %s", to_send)
        await self._socket.send_raw_message(to_send.model_dump_json())
        return to_send

    async def subscribe(self, events: _cabc.Sequence[str]) -> _mwcm.Method:
        return await self.call_method("livesubscribe", {"events": list(events)})

    async def unsubscribe(self, events: _cabc.Sequence[str]) -> _mwcm.Method:
        return await self.call_method("liveunsubscribe", {"events": list(events)})

    @staticmethod
    def parse(message: str | bytes) -> _mwcm.StreamMessage:
        return _mwpm.parse_stream_message(message, _mwcm.MODELS_BY_TYPE)

    async def receive(self) -> _mwcm.StreamMessage:
        return await _mwpm.receive_stream_message(
            self._socket.messages, _mwcm.MODELS_BY_TYPE
        )
