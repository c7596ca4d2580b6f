import logging

import pytest

from conftest import chunked_handler, refusing_handler
from crawler.worker import Crawler

URL = "http://localhost:3000/"


class RecordingStorage:
    def __init__(self):
        self.saved = []

    def save(self, result):
        self.saved.append(result)


class BrokenStorage:
    def save(self, result):
        raise PermissionError("read-only filesystem")


@pytest.mark.asyncio
async def test_completion_gets_full_body_once(make_fetcher):
    storage = RecordingStorage()
    async with make_fetcher(chunked_handler([b"he", b"llo"])) as fetcher:
        result = await Crawler(fetcher=fetcher, storage=storage, url=URL).start()

    assert len(storage.saved) == 1
    assert storage.saved[0] is result
    assert result.content == b"hello"


@pytest.mark.asyncio
async def test_unreachable_server_logs_once_and_skips_completion(make_fetcher, caplog):
    storage = RecordingStorage()
    async with make_fetcher(refusing_handler()) as fetcher:
        with caplog.at_level(logging.WARNING):
            result = await Crawler(fetcher=fetcher, storage=storage, url=URL).start()

    assert result.failed
    assert storage.saved == []
    reported = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert len(reported) == 1
    assert reported[0].levelno == logging.ERROR
    assert "Connection refused" in reported[0].getMessage()


@pytest.mark.asyncio
async def test_storage_errors_propagate(make_fetcher):
    async with make_fetcher(chunked_handler([b"hello"])) as fetcher:
        with pytest.raises(PermissionError):
            await Crawler(fetcher=fetcher, storage=BrokenStorage(), url=URL).start()
