"""
HTTP transport for s3presign
"""

from typing import Optional, Union
import os

import httpx

from .error import TransportException


class HttpClient:
    """
    Per-call HTTP session around httpx.AsyncClient.

    Use as an async context manager so the session is closed on every exit
    path. Requests are sent exactly once; there is no retry.
    """

    def __init__(
        self,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """Make a GET request."""
        return await self._request("GET", url, **kwargs)

    async def put(self, url: str, content: Optional[bytes] = None, **kwargs) -> httpx.Response:
        """Make a PUT request."""
        return await self._request("PUT", url, content=content, **kwargs)

    async def delete(self, url: str, **kwargs) -> httpx.Response:
        """Make a DELETE request."""
        return await self._request("DELETE", url, **kwargs)

    async def head(self, url: str, **kwargs) -> httpx.Response:
        """Make a HEAD request."""
        return await self._request("HEAD", url, **kwargs)

    async def download(self, url: str, destination: Union[str, os.PathLike]) -> httpx.Response:
        """
        Stream a GET response body into destination.

        The file is only created for a 200 response; any other response is
        read into memory and returned for the caller to report. A transfer
        that fails part way, for any reason including cancellation, removes
        the partial file.
        """
        try:
            async with self._client.stream("GET", url) as response:
                if response.status_code != 200:
                    await response.aread()
                    return response
                try:
                    with open(destination, "wb") as output:
                        async for chunk in response.aiter_bytes():
                            output.write(chunk)
                except BaseException:
                    if os.path.exists(destination):
                        os.remove(destination)
                    raise
                return response
        except httpx.RequestError as ex:
            raise TransportException(f"GET request failed: {ex}") from ex

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.RequestError as ex:
            raise TransportException(f"{method} request failed: {ex}") from ex

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
