import logging
from typing import Callable, Optional

import httpx

logger = logging.getLogger(__name__)


class FetchResult:
    """Outcome of one GET: the whole body, or the reason there is none."""

    def __init__(
        self,
        url: str,
        status_code: int = 0,
        content: bytes = b'',
        error: str = None,
        content_type: str = None,
        encoding: str = None
    ):
        self.url = url
        self.status_code = status_code
        self.content = content
        self.error = error
        self.content_type = content_type
        self.encoding = encoding

    @property
    def failed(self) -> bool:
        """True when the request itself failed. Status codes are never failures."""
        return self.error is not None

    @property
    def text(self) -> str:
        """Body decoded with the response charset, replacing bytes that don't fit."""
        if not self.content:
            return ""
        try:
            return self.content.decode(self.encoding or 'utf-8')
        except (UnicodeDecodeError, LookupError):
            return self.content.decode('utf-8', errors='replace')

    @property
    def size(self) -> int:
        return len(self.content)


class HTTPFetcher:
    def __init__(self, timeout: Optional[float] = None, transport: httpx.AsyncBaseTransport = None):
        """Initialize the HTTP fetcher.

        Args:
            timeout: Seconds before the request is abandoned. None waits forever.
            transport: Optional transport override, mostly for tests.
        """
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "HTTPFetcher":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def fetch(self, url: str, on_chunk: Callable[[bytes], None] = None) -> FetchResult:
        """GET a URL once and return a FetchResult with the whole body.

        Chunks are kept in the order they arrive. When on_chunk is given
        it sees each chunk before the next one is read.
        """
        try:
            async with self._client.stream("GET", url) as response:
                chunks = []
                async for chunk in response.aiter_bytes():
                    chunks.append(chunk)
                    if on_chunk is not None:
                        on_chunk(chunk)

                return FetchResult(
                    url=url,
                    status_code=response.status_code,
                    content=b''.join(chunks),
                    content_type=response.headers.get('content-type', '').lower() or None,
                    encoding=self._extract_encoding(response.headers),
                )

        except httpx.TimeoutException as e:
            error = f"Timeout after {self.timeout}s: {str(e)}"

        except httpx.ConnectError as e:
            error = f"Connection error: {str(e)}"

        except httpx.DecodingError as e:
            error = f"Undecodable response body: {str(e)}"

        except httpx.RequestError as e:
            error = f"Request error: {str(e)}"

        # the caller reports the failure, keep this one out of the default output
        logger.debug(f"{error} for {url}")
        return FetchResult(url=url, error=error)

    def _extract_encoding(self, headers) -> str:
        """Extract character encoding from the Content-Type header."""
        content_type = headers.get('content-type', '')
        if 'charset=' in content_type.lower():
            charset = content_type.lower().split('charset=')[1].split(';')[0].strip(' \'"')
            if charset:
                return charset
        return 'utf-8'
