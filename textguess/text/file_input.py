"""
In-memory file input.

Presents a list of files, each a list of byte chunks, through the same
pull-based interface a streaming source would offer.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ListFileInput:
    """Virtual input over ``files``, where every file is a list of chunks."""

    def __init__(self, files: list[list[bytes]]):
        self._files = files
        self._file_index = -1
        self._chunk_index = 0
        self._closed = False

    @classmethod
    def of_sample(cls, sample: bytes) -> ListFileInput:
        """A single file holding ``sample`` as its only chunk."""
        return cls([[bytes(sample)]])

    def next_file(self) -> bool:
        if self._closed:
            return False
        if self._file_index + 1 >= len(self._files):
            return False
        self._file_index += 1
        self._chunk_index = 0
        logger.debug("Advanced to file %d of %d", self._file_index + 1, len(self._files))
        return True

    def poll(self) -> bytes | None:
        """Next chunk of the current file, or None at end of file."""
        if self._closed or self._file_index < 0:
            return None
        chunks = self._files[self._file_index]
        if self._chunk_index >= len(chunks):
            return None
        chunk = chunks[self._chunk_index]
        self._chunk_index += 1
        return chunk

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> ListFileInput:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
