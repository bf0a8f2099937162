import dataclasses as _dc

import pydantic as _pyd


class Token(_pyd.BaseModel):
    access_token: str
    expires_in: int | None = None
    token_type: str
    refresh_token: str | None = None


class ShortcodeResponse(_pyd.BaseModel):
    code: str
    expires_in: int
    handle: str


class ShortcodeGrant(_pyd.BaseModel):
    code: str


@_dc.dataclass(frozen=True)
class UserGrantedAccess:
    code: str


@_dc.dataclass(frozen=True)
class WaitingOnUser:
    pass


@_dc.dataclass(frozen=True)
class UserDeniedAccess:
    pass


@_dc.dataclass(frozen=True)
class HandleInvalid:
    pass


type ShortcodeStatus = UserGrantedAccess | WaitingOnUser | UserDeniedAccess | HandleInvalid
