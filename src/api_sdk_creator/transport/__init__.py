"""Transport stages: the only part of a pipeline that performs I/O.

Modules:
    base: Wrap any async send function as an `HttpClient` stage
    httpx_client: `HttpClient` backed by `httpx.AsyncClient`

Example:
    ```python
    import httpx

    from api_sdk_creator.transport import httpx_client

    client = httpx_client(httpx.AsyncClient(timeout=10.0))
    outcome = await client(request)
    ```
"""

from api_sdk_creator.transport.base import transport_stage
from api_sdk_creator.transport.httpx_client import HttpxTransport, httpx_client

__all__ = ["HttpxTransport", "httpx_client", "transport_stage"]
