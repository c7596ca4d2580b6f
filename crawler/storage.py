"""
Completion actions for a finished fetch: print the body or write it to a file.
"""
import logging
import sys
from pathlib import Path
from typing import TextIO

from .fetcher import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = "crawler.html"


class ConsoleOutput:
    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdout

    def save(self, result: FetchResult):
        """Write the decoded body to the stream"""
        self.stream.write(result.text + "\n")
        self.stream.flush()


class FileStorage:
    def __init__(self, path: str = DEFAULT_OUTPUT_PATH):
        self.path = Path(str(path))

    def save(self, result: FetchResult):
        """Write the raw body to the file, replacing whatever was there"""
        with open(self.path, 'wb') as f:
            f.write(result.content)
        logger.info(f"{self.path} saved")


def create_storage(mode: str, path: str = DEFAULT_OUTPUT_PATH):
    if mode == "stdout":
        return ConsoleOutput()
    if mode == "file":
        return FileStorage(path)
    raise ValueError(f"Unknown output mode: {mode!r} (expected 'stdout' or 'file')")
