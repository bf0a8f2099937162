import typing as _tp


class MixerWrapperError(Exception):
    pass


class BadHttpResponseError(MixerWrapperError):
    def __init__(self, status: int) -> None:
        super().__init__(f"An error occurred with error code {status}.")
        self.status = status

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BadHttpResponseError):
            return NotImplemented
        return type(self) is type(other) and self.status == other.status

    def __hash__(self) -> int:
        return hash((type(self), self.status))


class TokenRequestError(BadHttpResponseError):
    def __init__(
        self, status: int, error: str | None = None, description: str | None = None
    ) -> None:
        super().__init__(status)
        self.error = error
        self.description = description

    def __str__(self) -> str:
        if not self.error:
            return super().__str__()
        details = f"{self.error}: {self.description}" if self.description else self.error
        return f"{super().__str__()} ({details})"


class MessageParseError(MixerWrapperError):
    pass


class InvalidJsonError(MessageParseError):
    pass


class MissingTypeError(MessageParseError):
    def __init__(self) -> None:
        super().__init__("Message does not have a 'type' field")


class UnknownTypeError(MessageParseError):
    def __init__(self, type_: _tp.Any) -> None:
        super().__init__(f"Unknown type '{type_}'")
        self.type_ = type_


class InvalidMessageError(MessageParseError):
    pass


class InvalidResponseError(MixerWrapperError):
    pass


class NotConnectedError(MixerWrapperError):
    def __init__(self) -> None:
        super().__init__("Not connected to socket")


class ConnectionSetupError(MixerWrapperError):
    pass


class MethodCallError(MixerWrapperError):
    def __init__(self, reply_id: int, error: _tp.Any) -> None:
        super().__init__(f"Method call {reply_id} failed: {error}")
        self.reply_id = reply_id
        self.error = error


class ShortcodeDeniedError(MixerWrapperError):
    def __init__(self) -> None:
        super().__init__("The user denied access.")


class ShortcodeHandleInvalidError(MixerWrapperError):
    def __init__(self, handle: str) -> None:
        super().__init__(f"Shortcode handle '{handle}' is invalid or expired.")
        self.handle = handle
