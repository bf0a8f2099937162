import asyncio as _asyncio
import collections.abc as _cabc
import json as _json
import logging as _log
import secrets as _secrets
import typing as _tp

import aiohttp as _ahttp
import pydantic as _pyd
import yarl as _yarl
import mixer_wrappers.endpoints as _mwe
import mixer_wrappers.errors as _mwerr
import mixer_wrappers.oauth.models as _mwom

_LOGGER = _log.getLogger(__name__)


class OAuthClient:
    """
    OAuth helpers for getting an access token for a Mixer user.

    Two flows are supported:

    - The standard authorization code flow: send the user to
      `get_authorize_url`, receive the code on the redirect URL and exchange
      it with `get_token_from_code`. `get_access_token_from_refresh` renews
      the token later.
    - The shortcode flow, for applications without a web server:
      `get_shortcode` returns a 6 digit code the user enters on
      https://mixer.com/go, and `check_shortcode` polls for the outcome.
      The granted code is then exchanged with `get_token_from_code`.
    """

    def __init__(
        self,
        session: _ahttp.ClientSession,
        client_id: str,
        client_secret: str | None = None,
        endpoints: _mwe.Endpoints = _mwe.Endpoints(),
        timeout_seconds: float = _mwe.REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._session = session
        self._client_id = client_id
        self._client_secret = client_secret
        self._endpoints = endpoints
        self._timeout = _ahttp.ClientTimeout(total=timeout_seconds)

    def get_authorize_url(
        self,
        scopes: _cabc.Sequence[str],
        redirect_url: str,
        force: bool = False,
        state: str | None = None,
    ) -> str:
        """
        URL to send the user to for approving the application.

        `force` makes Mixer ask for approval again even if the user already
        granted the scopes.
        """
        query = {
            "client_id": self._client_id,
            "scope": " ".join(scopes),
            "response_type": "code",
            "redirect_uri": redirect_url,
            "state": state if state is not None else str(_secrets.randbits(64)),
        }
        if force:
            query["approval_prompt"] = "force"

        url = _yarl.URL(self._endpoints.authorize_url).with_query(query)
        return str(url)

    async def get_token_from_code(
        self, code: str, redirect_url: str | None = None
    ) -> _mwom.Token:
        form = {"grant_type": "authorization_code", "code": code}
        if redirect_url:
            form["redirect_uri"] = redirect_url
        return await self._request_token(form)

    async def get_access_token_from_refresh(self, refresh_token: str) -> _mwom.Token:
        form = {"grant_type": "refresh_token", "refresh_token": refresh_token}
        return await self._request_token(form)

    async def _request_token(self, form: dict[str, str]) -> _mwom.Token:
        form["client_id"] = self._client_id
        if self._client_secret is not None:
            form["client_secret"] = self._client_secret

        _LOGGER.debug("Requesting token with grant type %s.", form["grant_type"])
        async with self._session.post(
            self._endpoints.token_url, data=form, timeout=self._timeout
        ) as response:
            text = await response.text()

            if not response.ok:
                _LOGGER.debug(
                    "Token request failed with status code %d: %s",
                    response.status,
                    text,
                )
                raise _token_request_error(response.status, text)

            return _mwom.Token.model_validate_json(text)

    async def get_shortcode(
        self, scopes: _cabc.Sequence[str]
    ) -> _mwom.ShortcodeResponse:
        body = {"client_id": self._client_id, "scope": " ".join(scopes)}
        if self._client_secret is not None:
            body["client_secret"] = self._client_secret

        async with self._session.post(
            self._endpoints.shortcode_url, json=body, timeout=self._timeout
        ) as response:
            text = await response.text()

            if not response.ok:
                _LOGGER.debug(
                    "Shortcode request failed with status code %d: %s",
                    response.status,
                    text,
                )
                raise _mwerr.BadHttpResponseError(response.status)

            return _mwom.ShortcodeResponse.model_validate_json(text)

    async def check_shortcode(self, handle: str) -> _mwom.ShortcodeStatus:
        url = f"{self._endpoints.shortcode_check_url}/{handle}"

        async with self._session.get(url, timeout=self._timeout) as response:
            match response.status:
                case 200:
                    text = await response.text()
                    try:
                        grant = _mwom.ShortcodeGrant.model_validate_json(text)
                    except _pyd.ValidationError as error:
                        raise _mwerr.InvalidResponseError(
                            f"Unexpected shortcode grant payload: {text!r}"
                        ) from error
                    return _mwom.UserGrantedAccess(grant.code)
                case 204:
                    return _mwom.WaitingOnUser()
                case 403:
                    return _mwom.UserDeniedAccess()
                case _:
                    _LOGGER.debug(
                        "Shortcode handle %s rejected with status code %d.",
                        handle,
                        response.status,
                    )
                    return _mwom.HandleInvalid()

    async def wait_for_shortcode(
        self, handle: str, interval_seconds: float = 5.0
    ) -> str:
        """
        Poll `check_shortcode` until the user decides; return the granted code.
        """
        while True:
            status = await self.check_shortcode(handle)
            _LOGGER.debug("Shortcode status: %s", status)

            match status:
                case _mwom.UserGrantedAccess(code):
                    return code
                case _mwom.WaitingOnUser():
                    await _asyncio.sleep(interval_seconds)
                case _mwom.UserDeniedAccess():
                    raise _mwerr.ShortcodeDeniedError()
                case _mwom.HandleInvalid():
                    raise _mwerr.ShortcodeHandleInvalidError(handle)
                case _:
                    _tp.assert_never(status)


def _token_request_error(status: int, text: str) -> _mwerr.TokenRequestError:
    try:
        details = _json.loads(text)
    except ValueError:
        details = None

    if not isinstance(details, dict):
        return _mwerr.TokenRequestError(status)

    return _mwerr.TokenRequestError(
        status, details.get("error"), details.get("error_description")
    )
