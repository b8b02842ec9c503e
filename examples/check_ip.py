#!/usr/bin/env python3
"""Check your IP address using an api-sdk-creator pipeline.

Sends a GET request for some JSON data and prints the result.

Usage:
  python examples/check_ip.py
"""

import asyncio
import logging
import sys
from dataclasses import dataclass

import httpx

from api_sdk_creator import (
    BaseApiClient,
    Either,
    Failure,
    HttpRequest,
    HttpRequestMethod,
    constant_headers,
    create_headers,
    create_pipeline,
    pydantic_marshaller,
    pydantic_unmarshaller,
)
from api_sdk_creator.errors.handler import check_status
from api_sdk_creator.transport import httpx_client


@dataclass(frozen=True)
class IpData:
    ip: str
    country: str


class IpClient(BaseApiClient):
    """A one-operation SDK."""

    async def check_ip(self) -> Either[IpData]:
        request = HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json")
        return await self.send(request, IpData)


async def main() -> int:
    # A failing header provider here would fail every request sent through the pipeline
    defaults = create_headers(constant_headers({"x-client-name": "api-sdk-creator-python"}))

    async with httpx_client(httpx.AsyncClient(timeout=10.0)) as transport:
        pipeline = create_pipeline(
            transport,
            headers=defaults,
            marshaller=pydantic_marshaller(),
            result_handlers=[check_status()],
        )
        client = IpClient(pipeline, pydantic_unmarshaller())
        outcome = await client.check_ip()

    if isinstance(outcome, Failure):
        print(f"Failed to check IP: {outcome.error}", file=sys.stderr)
        return 1

    print(outcome.value)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(asyncio.run(main()))
