import typing as _tp

import pydantic as _pyd
import mixer_wrappers.protocol.models as _mwpm

Event = _mwpm.Event


class Method(_mwpm.MethodBase):
    arguments: list[_pyd.JsonValue] = []
    id: int


class Reply(_mwpm.ReplyBase):
    data: dict[str, _pyd.JsonValue] | None = None
    error: str | None = None


type StreamMessage = Event | Reply

MODELS_BY_TYPE: _tp.Final[dict[str, type[Event] | type[Reply]]] = {
    "event": Event,
    "reply": Reply,
}
