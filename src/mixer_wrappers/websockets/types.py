import abc as _abc
import asyncio as _asyncio
import collections.abc as _cabc
import typing as _tp

import aiohttp as _ahttp


class FrameSource(_tp.Protocol):
    """The read side of an open websocket, as used by `forward_frames`."""

    @property
    def close_code(self) -> int | None: ...

    def __aiter__(self) -> _cabc.AsyncIterator[_ahttp.WSMessage]: ...
    def exception(self) -> BaseException | None: ...


class FrameSink(_abc.ABC):
    @_abc.abstractmethod
    async def on_frame(self, text: str) -> None:
        """
        Take one non-empty text frame, exactly as it arrived.

        Called from the connection task, in arrival order. The next frame is
        not read until this returns.
        """
        raise NotImplementedError()


class QueueFrameSink(FrameSink):
    """Hands every frame to a single consumer through an unbounded queue."""

    def __init__(self) -> None:
        self.queue = _asyncio.Queue[str]()

    @_tp.override
    async def on_frame(self, text: str) -> None:
        self.queue.put_nowait(text)
