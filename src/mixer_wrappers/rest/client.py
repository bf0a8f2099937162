import logging as _log

import aiohttp as _ahttp
import mixer_wrappers.endpoints as _mwe
import mixer_wrappers.errors as _mwerr
import mixer_wrappers.rest.helpers as _mwrh
import mixer_wrappers.types as _tps

_LOGGER = _log.getLogger(__name__)


class RestClient:
    def __init__(
        self,
        session: _ahttp.ClientSession,
        client_id: str,
        endpoints: _mwe.Endpoints = _mwe.Endpoints(),
        timeout_seconds: float = _mwe.REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._session = session
        self._client_id = client_id
        self._endpoints = endpoints
        self._timeout = _ahttp.ClientTimeout(total=timeout_seconds)

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def session(self) -> _ahttp.ClientSession:
        return self._session

    @property
    def timeout(self) -> _ahttp.ClientTimeout:
        return self._timeout

    def url(self, endpoint: str) -> str:
        return f"{self._endpoints.rest_base_url}/{endpoint}"

    def headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"client-id": self._client_id}
        if access_token is not None:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def query(
        self,
        method: str,
        endpoint: str,
        params: _tps.QueryParams | None = None,
        body: str | None = None,
        access_token: str | None = None,
    ) -> str:
        """
        Send one request to the REST API and return the response text.

        Raises `BadHttpResponseError` carrying the status code for any
        non-2xx response. Nothing is retried.
        """
        url = self.url(endpoint)
        method = method.upper()

        _LOGGER.debug("Making %s call to %s.", method, url)
        async with self._session.request(
            method,
            url,
            params=params,
            data=body,
            headers=self.headers(access_token),
            timeout=self._timeout,
        ) as response:
            text = await response.text()

            if not response.ok:
                _LOGGER.debug(
                    "Got status code %d from endpoint, text: %s", response.status, text
                )
                raise _mwerr.BadHttpResponseError(response.status)

            return text

    def chat_helper(self) -> _mwrh.ChatHelper:
        return _mwrh.ChatHelper(self)

    def webhook_helper(self) -> _mwrh.WebHookHelper:
        return _mwrh.WebHookHelper(self)

    def users_helper(self) -> _mwrh.UsersHelper:
        return _mwrh.UsersHelper(self)
