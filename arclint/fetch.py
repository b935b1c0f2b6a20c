"""Ways of loading the text of a proposal by path."""

from __future__ import annotations

import asyncio
import io
from abc import ABC, abstractmethod
from pathlib import Path


class Fetch(ABC):
    """Loads documents; failures are raised as OSError."""

    @abstractmethod
    async def fetch(self, path: Path | str) -> str:
        """Return the UTF-8 text at ``path``."""


class NullFetch(Fetch):
    """Refuses every request."""

    async def fetch(self, path: Path | str) -> str:
        raise io.UnsupportedOperation(f"fetching `{path}` is not supported")


class FileFetch(Fetch):
    """Reads documents from the local file system, keeping line endings as they are."""

    async def fetch(self, path: Path | str) -> str:
        data = await asyncio.to_thread(Path(path).read_bytes)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as error:
            raise OSError(f"stream did not contain valid UTF-8: {path}") from error