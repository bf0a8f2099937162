import typing as _tp

import pydantic as _pyd
import mixer_wrappers.constellation.errors as _mwce
import mixer_wrappers.protocol.models as _mwpm

Event = _mwpm.Event


class Method(_mwpm.MethodBase):
    params: dict[str, _pyd.JsonValue] = {}
    id: int


class ReplyError(_mwpm.ReplyError):
    @property
    def description(self) -> str | None:
        return _mwce.describe_error(self.id)


class Reply(_mwpm.ReplyBase):
    result: dict[str, _pyd.JsonValue] | None = None
    error: ReplyError | None = None


type StreamMessage = Event | Reply

MODELS_BY_TYPE: _tp.Final[dict[str, type[Event] | type[Reply]]] = {
    "event": Event,
    "reply": Reply,
}
