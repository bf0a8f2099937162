import unittest.mock as _mock

import aiohttp.web as _ahttpw
import pytest
import yarl as _yarl

import mixer_wrappers.errors as _mwerr
import mixer_wrappers.oauth.client as _mwoc
import mixer_wrappers.oauth.models as _mwom

CLIENT_ID = "a"
CLIENT_SECRET = "b"
SCOPES = ["c", "d"]
REDIRECT_URL = "e"

_TOKEN = {"access_token": "123abc", "expires_in": 3600, "token_type": "test"}


class TestAuthorizeUrl:
    def test_query(self):
        client = _mwoc.OAuthClient(_mock.Mock(), CLIENT_ID, CLIENT_SECRET)

        url = _yarl.URL(client.get_authorize_url(SCOPES, REDIRECT_URL))

        assert url.with_query(None) == _yarl.URL("https://mixer.com/oauth/authorize")
        assert list(url.query.keys()) == [
            "client_id",
            "scope",
            "response_type",
            "redirect_uri",
            "state",
        ]
        assert url.query["client_id"] == CLIENT_ID
        assert url.query["scope"] == "c d"
        assert url.query["response_type"] == "code"
        assert url.query["redirect_uri"] == REDIRECT_URL
        assert url.query["state"].isdigit()
        assert "approval_prompt" not in url.query

    def test_force(self):
        client = _mwoc.OAuthClient(_mock.Mock(), CLIENT_ID, CLIENT_SECRET)

        url = _yarl.URL(client.get_authorize_url(SCOPES, REDIRECT_URL, force=True))

        assert url.query["approval_prompt"] == "force"

    def test_explicit_state(self):
        client = _mwoc.OAuthClient(_mock.Mock(), CLIENT_ID)

        url = _yarl.URL(client.get_authorize_url(SCOPES, REDIRECT_URL, state="xyz"))

        assert url.query["state"] == "xyz"


class TestTokens:
    @pytest.mark.asyncio
    async def test_get_token_from_code(self, session, serve, endpoints_for):
        seen = {}

        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            seen["form"] = dict(await request.post())
            return _ahttpw.json_response(_TOKEN)

        server = await serve(_ahttpw.post("/api/v1/oauth/token", handler))
        client = _mwoc.OAuthClient(
            session, CLIENT_ID, CLIENT_SECRET, endpoints_for(server)
        )

        token = await client.get_token_from_code("the-code", REDIRECT_URL)

        assert token == _mwom.Token(**_TOKEN)
        assert seen["form"] == {
            "grant_type": "authorization_code",
            "code": "the-code",
            "redirect_uri": REDIRECT_URL,
            "client_id": CLIENT_ID,
            "client_secret": CLIENT_SECRET,
        }

    @pytest.mark.asyncio
    async def test_get_access_token_from_refresh(self, session, serve, endpoints_for):
        seen = {}

        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            seen["form"] = dict(await request.post())
            return _ahttpw.json_response({**_TOKEN, "refresh_token": "next"})

        server = await serve(_ahttpw.post("/api/v1/oauth/token", handler))
        client = _mwoc.OAuthClient(session, CLIENT_ID, None, endpoints_for(server))

        token = await client.get_access_token_from_refresh("old")

        assert token.access_token == "123abc"
        assert token.refresh_token == "next"
        assert seen["form"] == {
            "grant_type": "refresh_token",
            "refresh_token": "old",
            "client_id": CLIENT_ID,
        }

    @pytest.mark.asyncio
    async def test_refused_exchange(self, session, serve, endpoints_for):
        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            return _ahttpw.json_response(
                {"error": "invalid_grant", "error_description": "Code expired"},
                status=400,
            )

        server = await serve(_ahttpw.post("/api/v1/oauth/token", handler))
        client = _mwoc.OAuthClient(
            session, CLIENT_ID, CLIENT_SECRET, endpoints_for(server)
        )

        with pytest.raises(_mwerr.TokenRequestError) as error_info:
            await client.get_token_from_code("stale")

        assert error_info.value.status == 400
        assert error_info.value.error == "invalid_grant"
        assert error_info.value.description == "Code expired"
        assert isinstance(error_info.value, _mwerr.BadHttpResponseError)


class TestShortcode:
    @pytest.mark.asyncio
    async def test_get_shortcode(self, session, serve, endpoints_for):
        seen = {}

        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            seen["body"] = await request.json()
            return _ahttpw.json_response(
                {"code": "foo", "expires_in": 120, "handle": "bar"}
            )

        server = await serve(_ahttpw.post("/api/v1/oauth/shortcode", handler))
        client = _mwoc.OAuthClient(
            session, CLIENT_ID, CLIENT_SECRET, endpoints_for(server)
        )

        response = await client.get_shortcode(SCOPES)

        assert response == _mwom.ShortcodeResponse(
            code="foo", expires_in=120, handle="bar"
        )
        assert seen["body"] == {
            "client_id": CLIENT_ID,
            "client_secret": CLIENT_SECRET,
            "scope": "c d",
        }

    @pytest.mark.asyncio
    async def test_get_shortcode_without_secret(self, session, serve, endpoints_for):
        seen = {}

        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            seen["body"] = await request.json()
            return _ahttpw.json_response(
                {"code": "foo", "expires_in": 120, "handle": "bar"}
            )

        server = await serve(_ahttpw.post("/api/v1/oauth/shortcode", handler))
        client = _mwoc.OAuthClient(session, CLIENT_ID, endpoints=endpoints_for(server))

        await client.get_shortcode(SCOPES)

        assert seen["body"] == {"client_id": CLIENT_ID, "scope": "c d"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (204, _mwom.WaitingOnUser()),
            (403, _mwom.UserDeniedAccess()),
            (404, _mwom.HandleInvalid()),
            (500, _mwom.HandleInvalid()),
        ],
    )
    async def test_check_shortcode_without_grant(
        self, session, serve, endpoints_for, status, expected
    ):
        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            return _ahttpw.Response(status=status)

        server = await serve(
            _ahttpw.get("/api/v1/oauth/shortcode/check/{handle}", handler)
        )
        client = _mwoc.OAuthClient(session, CLIENT_ID, endpoints=endpoints_for(server))

        assert await client.check_shortcode("bar") == expected

    @pytest.mark.asyncio
    async def test_check_shortcode_granted(self, session, serve, endpoints_for):
        seen = {}

        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            seen["handle"] = request.match_info["handle"]
            return _ahttpw.json_response({"code": "foo"})

        server = await serve(
            _ahttpw.get("/api/v1/oauth/shortcode/check/{handle}", handler)
        )
        client = _mwoc.OAuthClient(session, CLIENT_ID, endpoints=endpoints_for(server))

        assert await client.check_shortcode("bar") == _mwom.UserGrantedAccess("foo")
        assert seen["handle"] == "bar"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["not json", "{}", '{"code": null}'])
    async def test_check_shortcode_malformed_grant(
        self, session, serve, endpoints_for, text
    ):
        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            return _ahttpw.Response(status=200, text=text)

        server = await serve(
            _ahttpw.get("/api/v1/oauth/shortcode/check/{handle}", handler)
        )
        client = _mwoc.OAuthClient(session, CLIENT_ID, endpoints=endpoints_for(server))

        with pytest.raises(_mwerr.InvalidResponseError):
            await client.check_shortcode("bar")

    @pytest.mark.asyncio
    async def test_wait_for_shortcode_polls_until_granted(
        self, session, serve, endpoints_for
    ):
        responses = [
            _ahttpw.Response(status=204),
            _ahttpw.Response(status=204),
            _ahttpw.json_response({"code": "foo"}),
        ]

        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            return responses.pop(0)

        server = await serve(
            _ahttpw.get("/api/v1/oauth/shortcode/check/{handle}", handler)
        )
        client = _mwoc.OAuthClient(session, CLIENT_ID, endpoints=endpoints_for(server))

        assert await client.wait_for_shortcode("bar", interval_seconds=0) == "foo"
        assert responses == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "error_type"),
        [
            (403, _mwerr.ShortcodeDeniedError),
            (404, _mwerr.ShortcodeHandleInvalidError),
        ],
    )
    async def test_wait_for_shortcode_terminal_outcomes(
        self, session, serve, endpoints_for, status, error_type
    ):
        async def handler(request: _ahttpw.Request) -> _ahttpw.Response:
            return _ahttpw.Response(status=status)

        server = await serve(
            _ahttpw.get("/api/v1/oauth/shortcode/check/{handle}", handler)
        )
        client = _mwoc.OAuthClient(session, CLIENT_ID, endpoints=endpoints_for(server))

        with pytest.raises(error_type):
            await client.wait_for_shortcode("bar", interval_seconds=0)
