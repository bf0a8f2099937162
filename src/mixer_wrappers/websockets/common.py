import logging as _log

import aiohttp as _ahttp
import mixer_wrappers.websockets.types as _mwwt

_LOGGER = _log.getLogger(__name__)


async def forward_frames(
    websocket: _mwwt.FrameSource, frame_sink: _mwwt.FrameSink
) -> int:
    """Forward text frames to `frame_sink` until the socket closes; return the count."""
    _LOGGER.info("Forwarding socket frames.")

    forwarded = 0
    async for message in websocket:
        match message.type:
            case _ahttp.WSMsgType.TEXT if message.data:
                _LOGGER.debug("Frame: %s", message.data)
                await frame_sink.on_frame(message.data)
                forwarded += 1
            case _ahttp.WSMsgType.ERROR:
                _LOGGER.error("Socket reported an error: %r", websocket.exception())
            case _:
                _LOGGER.debug("Skipped %s frame.", message.type.name)

    _LOGGER.info(
        "Socket stopped delivering frames after %d (close code %s).",
        forwarded,
        websocket.close_code,
    )
    return forwarded
