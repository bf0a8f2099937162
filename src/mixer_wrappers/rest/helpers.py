import collections.abc as _cabc
import json as _json
import logging as _log
import typing as _tp

import pydantic as _pyd
import mixer_wrappers.errors as _mwerr
import mixer_wrappers.types as _tps

if _tp.TYPE_CHECKING:
    import mixer_wrappers.rest.client as _mwrc

_LOGGER = _log.getLogger(__name__)


class ChatAuth(_pyd.BaseModel):
    authkey: str | None = None
    endpoints: list[str]
    permissions: list[str] = []


class ChatHelper:
    """Chat related REST endpoints, needed before connecting to a chat server."""

    def __init__(self, rest: "_mwrc.RestClient") -> None:
        self._rest = rest

    async def get_channel_id(self, username: str) -> int:
        _LOGGER.debug("Getting channel id for username %s.", username)
        text = await self._rest.query(
            "GET", f"channels/{username}", params={"fields": "id"}
        )
        return int(_json.loads(text)["id"])

    async def get_servers(self, channel_id: int) -> list[str]:
        _LOGGER.debug("Getting servers for channel ID %d.", channel_id)
        text = await self._rest.query("GET", f"chats/{channel_id}")
        return ChatAuth.model_validate_json(text).endpoints

    async def get_chat_auth(self, channel_id: int, access_token: str) -> ChatAuth:
        """
        Servers plus the `authkey` needed to authenticate as the token's user.
        """
        _LOGGER.debug("Getting chat auth for channel ID %d.", channel_id)
        text = await self._rest.query(
            "GET", f"chats/{channel_id}", access_token=access_token
        )
        return ChatAuth.model_validate_json(text)


class WebHookHelper:
    def __init__(self, rest: "_mwrc.RestClient") -> None:
        self._rest = rest

    async def register(
        self, events: _cabc.Sequence[str], url: str, client_secret: str
    ) -> None:
        # Webhooks authorize with the client secret rather than a bearer token.
        _LOGGER.debug(
            "Making webhook register call with events: %s", ", ".join(events)
        )
        headers = {
            "client-id": self._rest.client_id,
            "Authorization": f"Secret {client_secret}",
        }
        body = {"events": list(events), "kind": "web", "url": url}

        async with self._rest.session.post(
            self._rest.url("hooks"),
            json=body,
            headers=headers,
            timeout=self._rest.timeout,
        ) as response:
            if not response.ok:
                _LOGGER.debug(
                    "Webhook registration failed with status code %d: %s",
                    response.status,
                    await response.text(),
                )
                raise _mwerr.BadHttpResponseError(response.status)


class UsersHelper:
    def __init__(self, rest: "_mwrc.RestClient") -> None:
        self._rest = rest

    async def search(
        self, query: str, fields: _cabc.Sequence[str] | None = None
    ) -> list[_tps.JsonObject]:
        params = {"query": query, "noCount": "true"}
        if fields:
            params["fields"] = ",".join(fields)

        text = await self._rest.query("GET", "users/search", params=params)
        return _json.loads(text)

    async def get_user_id(self, username: str) -> int:
        users = await self.search(username, fields=["id"])
        if not users:
            raise LookupError(f"No user found for '{username}'.")
        return int(users[0]["id"])

    async def get_notifications(
        self, user_id: int, access_token: str, limit: int | None = None
    ) -> list[_tps.JsonObject]:
        params = {"noCount": "true"}
        if limit is not None:
            params["limit"] = str(limit)

        text = await self._rest.query(
            "GET",
            f"users/{user_id}/notifications",
            params=params,
            access_token=access_token,
        )
        return _json.loads(text)
