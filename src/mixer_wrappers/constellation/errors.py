import types as _types
import typing as _tp

ERRORS: _tp.Final = _types.MappingProxyType(
    {
        1011: "Sent in a close or method reply if an unknown internal error occurs.",
        1012: "Sent in a close frame when we deploy or restart Constellation; "
        "clients should attempt to reconnect.",
        4006: "Error parsing payload as JSON",
        4007: "Error decompressing a supposedly-gzipped payload",
        4008: "Unknown packet type",
        4009: "Unknown method name call",
        4010: "Error parsing method arguments (not the right type or structure)",
        4011: "The user session has expired; if using a cookie, they should log in "
        "again, or get a bearer auth token if using an authorization header.",
        4106: "Unknown event used in a livesubscribe call",
        4107: "You do not have access to subscribe to that livesubscribe event",
        4108: "You are already subscribed to that livesubscribe event "
        "(during livesubscribe)",
        4109: "You are not subscribed to that livesubscribe event "
        "(in response to a liveunsubscribe method)",
        4110: "You cannot make more subscriptions (in response to a livesubscribe "
        "method). See liveloading limits.",
    }
)


def describe_error(code: int) -> str | None:
    return ERRORS.get(code)
