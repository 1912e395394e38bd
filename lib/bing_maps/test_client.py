"""
Unit tests for Bing Maps API Client

This module tests BingMapsClient: URL building, API key injection,
status/header classification and error wrapping.
"""

import logging
from urllib.parse import unquote

import httpx
import pytest

from lib.bing_maps import (
    BingMapsClient,
    ConfigurationError,
    ConversionDirection,
    ConversionError,
    NetworkError,
    RequestError,
    ResponseReadError,
    parseShouldWait,
)


def testInitRejectsEmptyKey():
    """Client cannot be created without an API key"""
    with pytest.raises(ConfigurationError):
        BingMapsClient(apiKey="   ")


def testApiKeyIsReadOnly():
    """API key cannot be replaced after construction"""
    client = BingMapsClient(apiKey="test_key")
    assert client.apiKey == "test_key"

    with pytest.raises(AttributeError):
        client.apiKey = "other_key"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        client.extra = 1  # type: ignore[attr-defined]


def testFromConfig():
    """Client is built from the bing-maps config section"""
    client = BingMapsClient.fromConfig({"api-key": "cfg_key", "base-url": "https://example.com/REST/v1", "timeout": 3})

    assert client.apiKey == "cfg_key"
    assert client.baseUrl == "https://example.com/REST/v1/"
    assert client.timeout == 3

    with pytest.raises(ConfigurationError):
        BingMapsClient.fromConfig({"timeout": 3})


def testBuildUrl():
    """URL is base + path + urlencoded query, without double slashes"""
    client = BingMapsClient(apiKey="test_key")

    url = client.buildUrl("/Locations", {"q": "1 Microsoft Way, Redmond", "key": "test_key"})

    assert url == "https://dev.virtualearth.net/REST/v1/Locations?q=1+Microsoft+Way%2C+Redmond&key=test_key"


def testBuildUrlRejectsNonStringValues():
    """Unformatted numbers are an encode error, not a silently dropped query"""
    client = BingMapsClient(apiKey="test_key")

    with pytest.raises(ConversionError) as excInfo:
        client.buildUrl("/Locations", {"ul": 47.6})  # type: ignore[dict-item]

    assert excInfo.value.direction == ConversionDirection.ENCODE


@pytest.mark.asyncio
async def testGetInjectsApiKey(makeClient, requests):
    """Key is added to the caller's params, overwriting any key already there"""
    client = makeClient(lambda request: httpx.Response(200, json={"resourceSets": []}))
    params = {"q": "Seattle", "key": "caller_key"}

    result = await client.get("/Locations", params)

    assert result == {"resourceSets": []}
    assert params == {"q": "Seattle", "key": "test_key"}
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert requests[0].url.params.get_list("key") == ["test_key"]
    assert requests[0].url.params["q"] == "Seattle"


@pytest.mark.asyncio
async def testGetPathWithPoint(makeClient, requests):
    """Literal point fragments in the path are kept"""
    client = makeClient(lambda request: httpx.Response(200, json={"resourceSets": []}))

    await client.get("/Locations/47.60000,-122.30000", {})

    assert requests[0].url.host == "dev.virtualearth.net"
    assert unquote(requests[0].url.path) == "/REST/v1/Locations/47.60000,-122.30000"


@pytest.mark.asyncio
async def testGetAppliesDecoder(makeClient):
    """Decoder receives parsed JSON"""
    client = makeClient(lambda request: httpx.Response(200, json={"value": 42}))

    result = await client.get("/Locations", {}, lambda data: data["value"] * 2)

    assert result == 84


@pytest.mark.asyncio
async def testServiceErrorWithShouldWait(makeClient):
    """404 with X-MS-BM-WS-INFO: 1 is a transient overload"""
    client = makeClient(lambda request: httpx.Response(404, headers={"X-MS-BM-WS-INFO": "1"}))

    with pytest.raises(RequestError) as excInfo:
        await client.get("/Locations", {"q": "Nowhere"})

    assert excInfo.value.httpStatus == 404
    assert excInfo.value.shouldWait is True


@pytest.mark.asyncio
async def testServiceErrorWithoutShouldWait(makeClient):
    """Same status without the header is a plain error"""
    client = makeClient(lambda request: httpx.Response(404))

    with pytest.raises(RequestError) as excInfo:
        await client.get("/Locations", {"q": "Nowhere"})

    assert excInfo.value.httpStatus == 404
    assert excInfo.value.shouldWait is False
    assert str(excInfo.value) == "error reported by bing maps: RequestError(404)"


@pytest.mark.asyncio
async def testServiceErrorBodyIsNotParsed(makeClient):
    """Error responses never surface as conversion errors"""
    client = makeClient(lambda request: httpx.Response(500, content=b"<html>Internal error</html>"))

    with pytest.raises(RequestError) as excInfo:
        await client.get("/Locations", {})

    assert excInfo.value.httpStatus == 500


@pytest.mark.parametrize(
    "values, expected",
    [
        ([], False),
        (["0"], False),
        (["1"], True),
        (["0, 1"], True),
        (["0", "1"], True),
        (["10"], False),
    ],
)
def testParseShouldWait(values, expected):
    """Any header segment equal to "1" means the caller should wait"""
    headers = httpx.Headers([("X-MS-BM-WS-INFO", value) for value in values])
    assert parseShouldWait(headers) is expected


@pytest.mark.asyncio
async def testInvalidJson(makeClient):
    """Unparseable 2xx body is a decode error"""
    client = makeClient(lambda request: httpx.Response(200, content=b"{not json"))

    with pytest.raises(ConversionError) as excInfo:
        await client.get("/Locations", {})

    assert excInfo.value.direction == ConversionDirection.DECODE


@pytest.mark.asyncio
async def testDecoderFailure(makeClient):
    """Decoder errors are wrapped and keep their cause"""
    client = makeClient(lambda request: httpx.Response(200, json={}))

    with pytest.raises(ConversionError) as excInfo:
        await client.get("/Locations", {}, lambda data: data["missing"])

    assert excInfo.value.direction == ConversionDirection.DECODE
    assert isinstance(excInfo.value.__cause__, KeyError)


@pytest.mark.asyncio
async def testNetworkError(makeClient):
    """Transport failures are wrapped into NetworkError"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    client = makeClient(handler)

    with pytest.raises(NetworkError) as excInfo:
        await client.get("/Locations", {})

    assert isinstance(excInfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def testTimeout(makeClient):
    """Timeouts come from the transport and are network errors"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("Timeout", request=request)

    client = makeClient(handler)

    with pytest.raises(NetworkError):
        await client.get("/Locations", {})


@pytest.mark.asyncio
async def testReadError(makeClient):
    """Failing to read the body is an I/O error"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadError("Connection reset", request=request)

    client = makeClient(handler)

    with pytest.raises(ResponseReadError):
        await client.get("/Locations", {})


@pytest.mark.asyncio
async def testAcloseOwnedClient():
    """Owned transport is closed, and re-created on next use"""
    client = BingMapsClient(apiKey="test_key")
    httpClient = client._getHttpClient()

    await client.aclose()

    assert httpClient.is_closed
    assert client._getHttpClient() is not httpClient
    await client.aclose()


@pytest.mark.asyncio
async def testAcloseKeepsCallerClient():
    """Caller-supplied transport stays open"""
    httpClient = httpx.AsyncClient()
    async with BingMapsClient(apiKey="test_key", httpClient=httpClient) as client:
        assert client._getHttpClient() is httpClient

    assert not httpClient.is_closed
    await httpClient.aclose()


@pytest.mark.asyncio
async def testClosedCallerClient():
    """Closed caller-supplied transport is a configuration error, not a raw httpx error"""
    httpClient = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})))
    client = BingMapsClient(apiKey="test_key", httpClient=httpClient)
    await httpClient.aclose()

    with pytest.raises(ConfigurationError):
        await client.get("/Locations", {"q": "Seattle"})


@pytest.mark.asyncio
async def testServiceErrorLoggedOnce(makeClient, caplog):
    """Service error is logged once, at warning level"""
    client = makeClient(lambda request: httpx.Response(503, headers={"X-MS-BM-WS-INFO": "1"}))

    with caplog.at_level(logging.DEBUG, logger="lib.bing_maps"):
        with pytest.raises(RequestError):
            await client.get("/Locations", {"q": "Seattle"})

    errorRecords = [record for record in caplog.records if "503" in record.getMessage()]
    assert len(errorRecords) == 1
    assert errorRecords[0].levelno == logging.WARNING
