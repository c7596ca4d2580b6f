import logging

import httpx
import pytest

from crawler.fetcher import HTTPFetcher


class ChunkedStream(httpx.AsyncByteStream):
    """Response body that arrives in the given pieces"""

    def __init__(self, chunks):
        self.chunks = chunks

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk


def chunked_handler(chunks, status_code=200, headers=None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, headers=headers, stream=ChunkedStream(chunks))
    return handler


def refusing_handler(calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
    return handler


@pytest.fixture
def make_fetcher():
    def factory(handler):
        return HTTPFetcher(transport=httpx.MockTransport(handler))
    return factory


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main.setup_logging replaces the root handlers, put pytest's back afterwards"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
