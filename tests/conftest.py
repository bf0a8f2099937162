"""
Shared fixtures: a client session and local aiohttp servers standing in for Mixer.
"""
import collections.abc as _cabc

import aiohttp as _ahttp
import aiohttp.test_utils as _ahttpt
import aiohttp.web as _ahttpw
import pytest
import pytest_asyncio

import mixer_wrappers.endpoints as _mwe

type ServerFactory = _cabc.Callable[..., _cabc.Awaitable[_ahttpt.TestServer]]


@pytest_asyncio.fixture
async def session() -> _cabc.AsyncIterator[_ahttp.ClientSession]:
    async with _ahttp.ClientSession() as session:
        yield session


@pytest_asyncio.fixture
async def serve() -> _cabc.AsyncIterator[ServerFactory]:
    """Start a test server for the given routes; stopped after the test."""
    servers = list[_ahttpt.TestServer]()

    async def start(*routes: _ahttpw.RouteDef) -> _ahttpt.TestServer:
        app = _ahttpw.Application()
        app.add_routes(routes)
        server = _ahttpt.TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    yield start

    for server in servers:
        await server.close()


@pytest.fixture
def endpoints_for() -> _cabc.Callable[[_ahttpt.TestServer], _mwe.Endpoints]:
    def create(server: _ahttpt.TestServer) -> _mwe.Endpoints:
        return _mwe.Endpoints.with_base_url(str(server.make_url("/")))

    return create
