import asyncio as _asyncio
import collections.abc as _cabc
import json as _json
import logging as _log
import typing as _tp

import pydantic as _pyd
import mixer_wrappers.errors as _mwerr

_LOGGER = _log.getLogger(__name__)


class Event(_pyd.BaseModel):
    type: _tp.Literal["event"] = "event"
    event: str
    data: _pyd.JsonValue = None


class MethodBase(_pyd.BaseModel):
    type: _tp.Literal["method"] = "method"
    method: str


class ReplyError(_pyd.BaseModel):
    id: int
    message: str


class ReplyBase(_pyd.BaseModel):
    type: _tp.Literal["reply"] = "reply"
    id: int

    def raise_for_error(self) -> None:
        error = getattr(self, "error", None)
        if error is not None:
            raise _mwerr.MethodCallError(self.id, error)


def parse_stream_message[T: _pyd.BaseModel](
    text: str | bytes, models_by_type: _cabc.Mapping[str, type[T]]
) -> T:
    """
    Decode one inbound frame and validate it into the model selected by its
    `type` field.
    """
    try:
        data = _json.loads(text)
    except ValueError as error:
        raise _mwerr.InvalidJsonError(f"Could not parse JSON: {error}") from error

    type_ = data.get("type") if isinstance(data, dict) else None
    if not isinstance(type_, str):
        raise _mwerr.MissingTypeError()

    model = models_by_type.get(type_)
    if model is None:
        raise _mwerr.UnknownTypeError(type_)

    try:
        return model.model_validate(data)
    except _pyd.ValidationError as error:
        raise _mwerr.InvalidMessageError(
            f"Could not load {type_} from JSON: {error}"
        ) from error


async def receive_stream_message[T: _pyd.BaseModel](
    messages: _asyncio.Queue[str], models_by_type: _cabc.Mapping[str, type[T]]
) -> T:
    """Wait for the next frame that parses; unparsable frames are logged and dropped."""
    while True:
        text = await messages.get()
        try:
            return parse_stream_message(text, models_by_type)
        except _mwerr.MessageParseError as error:
            _LOGGER.error("Dropping message %r: %s", text, error)
