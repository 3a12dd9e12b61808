"""
Line Decoder
============

Turns the byte chunks of a ``ListFileInput`` into decoded text lines.

Decoding
--------
Bytes are fed through the codec's incremental decoder, so a multi-byte
character split across two chunks is decoded once both halves arrived.
Line terminators are searched in the decoded text, never in the raw bytes.
This matters for UTF-16 and UTF-32, where ``0x0A`` bytes show up inside
ordinary characters.

Malformed byte sequences follow the ``errors`` policy of the codec
(``"replace"`` by default). A ``UnicodeError`` raised by the codec (any
malformed input under ``"strict"``, or a codec that refuses the policy) is
re-raised as ``SampleDecodeError``.

UTF-16 and UTF-32 without a byte order mark are decoded as big-endian. The
first bytes of each file are held back until the mark can be checked.

Line delimiters
---------------
    - ``LineDelimiter.LF``: only ``\\n`` ends a line
    - ``LineDelimiter.CR``: only ``\\r`` ends a line
    - ``LineDelimiter.CRLF``: only ``\\r\\n`` ends a line
    - ``None``: any of ``\\r\\n``, ``\\r`` and ``\\n``

Terminators are stripped. Text after the last terminator is the final line;
input that ends with a terminator does not produce a trailing empty line.
A leading U+FEFF (byte order mark) is dropped from the first line of a file.
"""

from __future__ import annotations

import codecs
import logging
import re
import typing

from textguess.exceptions import ConfigError, SampleDecodeError
from textguess.text.file_input import ListFileInput
from textguess.text.newline import LineDelimiter

logger = logging.getLogger(__name__)

_ANY_TERMINATOR = re.compile(r"\r\n|\r|\n")
_BOM = "\ufeff"

# codec -> (byte order marks it detects, codec used when none is present)
_BOM_LESS_CODECS = {
    "utf-16": ((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE), "utf-16-be"),
    "utf-32": ((codecs.BOM_UTF32_LE, codecs.BOM_UTF32_BE), "utf-32-be"),
}
_BOM_SNIFF_BYTES = 4


def decoding_charset(charset: str, head: bytes) -> str:
    """
    Return the codec that decodes data starting with ``head`` as ``charset``.

    UTF-16 and UTF-32 data without a byte order mark is big-endian.
    """
    name = codecs.lookup(charset).name
    if name in _BOM_LESS_CODECS:
        boms, fallback = _BOM_LESS_CODECS[name]
        if not head.startswith(boms):
            return fallback
    return name


class LineDecoder:
    def __init__(
        self,
        file_input: ListFileInput,
        charset: str,
        line_delimiter_recognized: LineDelimiter | None = None,
        *,
        errors: str = "replace",
    ):
        try:
            codecs.getincrementaldecoder(charset)
        except LookupError as exc:
            raise ConfigError(f"Unrecognized charset: '{charset}'", cause=exc) from exc

        self._input = file_input
        self._charset = charset
        self._delimiter = line_delimiter_recognized
        self._errors = errors

        self._open = False
        self._decoder: codecs.IncrementalDecoder | None = None
        self._head = b""
        self._buffer = ""
        self._pos = 0
        self._eof = True
        self._first_line = True

    @classmethod
    def of(
        cls,
        file_input: ListFileInput,
        charset: str,
        line_delimiter_recognized: LineDelimiter | None = None,
        *,
        errors: str = "replace",
    ) -> LineDecoder:
        return cls(file_input, charset, line_delimiter_recognized, errors=errors)

    @property
    def charset(self) -> str:
        return self._charset

    @property
    def line_delimiter_recognized(self) -> LineDelimiter | None:
        return self._delimiter

    def next_file(self) -> bool:
        """Move to the next file of the input. False when there is none."""
        self._decoder = None
        self._head = b""
        if not self._input.next_file():
            self._open = False
            return False
        logger.debug(
            "Decoding file as %s (line delimiter: %s)",
            self._charset,
            self._delimiter.name if self._delimiter else "any",
        )
        self._open = True
        self._buffer = ""
        self._pos = 0
        self._eof = False
        self._first_line = True
        return True

    def poll(self) -> str | None:
        """Next line of the current file, or None once the file is exhausted."""
        if not self._open:
            return None
        while True:
            line = self._take_line()
            if line is not None:
                if self._first_line:
                    self._first_line = False
                    if line.startswith(_BOM):
                        line = line[len(_BOM) :]
                return line
            if self._eof:
                return None
            self._fill()

    def __iter__(self) -> typing.Iterator[str]:
        while True:
            line = self.poll()
            if line is None:
                return
            yield line

    def close(self) -> None:
        self._open = False
        self._decoder = None
        self._head = b""
        self._buffer = ""
        self._pos = 0
        self._input.close()

    def __enter__(self) -> LineDecoder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _fill(self) -> None:
        chunk = self._input.poll()
        # drop the consumed prefix before growing the buffer
        self._buffer = self._buffer[self._pos :]
        self._pos = 0
        final = chunk is None
        data = b"" if final else chunk

        if self._decoder is None:
            # hold back the first bytes until the byte order mark is known
            self._head += data
            if not final and len(self._head) < _BOM_SNIFF_BYTES:
                return
            codec = decoding_charset(self._charset, self._head)
            self._decoder = codecs.getincrementaldecoder(codec)(errors=self._errors)
            data, self._head = self._head, b""

        try:
            self._buffer += self._decoder.decode(data, final=final)
        except UnicodeError as exc:
            raise SampleDecodeError(
                f"Failed to decode sample as {self._charset}: {exc}",
                cause=exc,
            ) from exc
        if final:
            self._eof = True

    def _take_line(self) -> str | None:
        buffer = self._buffer
        start = self._pos

        if self._delimiter is None:
            match = _ANY_TERMINATOR.search(buffer, start)
            if match is not None:
                # a trailing CR may be the first half of a CRLF
                if (
                    match.group() == "\r"
                    and match.end() == len(buffer)
                    and not self._eof
                ):
                    return None
                self._pos = match.end()
                return buffer[start : match.start()]
        else:
            terminator = self._delimiter.string
            index = buffer.find(terminator, start)
            if index >= 0:
                self._pos = index + len(terminator)
                return buffer[start:index]

        if self._eof and start < len(buffer):
            self._pos = len(buffer)
            return buffer[start:]
        return None
