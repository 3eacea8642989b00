import httpx
import pytest
import pytest_asyncio

from foryou.services.remote_config import RemoteWeightsClient

URL = "https://config.example/api/admin/ai-recommend"


@pytest_asyncio.fixture
async def client():
    remote = RemoteWeightsClient(url=URL, timeout=1.0)
    yield remote
    await remote.close()


@pytest.mark.asyncio
async def test_fetch_returns_decoded_body(client, respx_mock):
    respx_mock.get(URL).mock(return_value=httpx.Response(200, json={"recommendWeights": {"wFav": 1}}))

    assert await client.fetch() == {"recommendWeights": {"wFav": 1}}


@pytest.mark.asyncio
async def test_error_status_returns_none_without_retrying(client, respx_mock):
    route = respx_mock.get(URL).mock(return_value=httpx.Response(503))

    assert await client.fetch() is None
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_timeout_returns_none(client, respx_mock):
    respx_mock.get(URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

    assert await client.fetch() is None


@pytest.mark.asyncio
async def test_invalid_json_returns_none(client, respx_mock):
    respx_mock.get(URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

    assert await client.fetch() is None


@pytest.mark.asyncio
async def test_unconfigured_url_skips_the_request(respx_mock):
    remote = RemoteWeightsClient(url="")

    assert await remote.fetch() is None
    assert not respx_mock.calls


@pytest.mark.asyncio
async def test_malformed_url_returns_none(respx_mock):
    remote = RemoteWeightsClient(url="https://[not-an-ip]/config")

    assert await remote.fetch() is None
    assert not respx_mock.calls
    await remote.close()


@pytest.mark.asyncio
async def test_invalid_url_error_returns_none(client, respx_mock):
    respx_mock.get(URL).mock(side_effect=httpx.InvalidURL("bad url"))

    assert await client.fetch() is None
