"""Testing utilities for SDKs built on api-sdk-creator.

Modules:
    factories: Stub transports and result factories

Example:
    ```python
    from api_sdk_creator.testing import StubHttpClient


    async def test_sends_client_name():
        client = StubHttpClient('{"ip": "1.2.3.4", "country": "AU"}')
        pipeline = create_pipeline(client, headers=create_headers(constant_headers({"x-client-name": "test"})))
        await pipeline(HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json"))
        assert client.last_request.headers["x-client-name"] == ("test",)
    ```
"""

from api_sdk_creator.testing.factories import StubHttpClient, create_result

__all__ = ["StubHttpClient", "create_result"]
