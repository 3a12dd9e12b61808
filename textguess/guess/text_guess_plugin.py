"""
Text Guess Plugin
=================

Base class for guess plugins that inspect decoded text instead of raw bytes.

Subclasses implement ``guess_text``. ``guess`` turns the byte sample into
text using the encoding settings found under ``parser`` in the partial
config, then hands the text to ``guess_text``.

Flow of ``guess``
-----------------
    1. No ``parser.charset`` set: the charset itself is guessed from the raw
       sample and returned. No decoding happens.
    2. ``charset``, ``line_delimiter_recognized`` and ``newline`` are
       resolved. If any of them does not resolve, nothing is guessed. Note
       that ``line_delimiter_recognized`` has no default: a config without it
       yields an empty guess even though the other two would fall back to
       UTF-8 and CRLF.
    3. The sample is decoded line by line and the lines are joined with the
       configured newline.
    4. ``guess_text`` receives the original config and the joined text. Its
       result is returned as is.

Unusable settings, a decoder that finds no file and undecodable samples are
logged as warnings and produce an empty ConfigDiff. Exceptions raised by
``guess_text`` or by the charset guesser are not caught.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Callable

from textguess.config import ConfigDiff, ConfigSource, new_config_diff
from textguess.exceptions import ConfigError, SampleDecodeError
from textguess.guess.charset_guess import guess_charset
from textguess.guess.params import resolve_encoding_params
from textguess.guess.plugin import GuessPlugin
from textguess.text.file_input import ListFileInput
from textguess.text.line_decoder import LineDecoder
from textguess.text.newline import LineDelimiter
from textguess.text.sample import reassemble


class TextGuessPlugin(GuessPlugin):
    def __init__(
        self,
        *,
        charset_guesser: Callable[[bytes], ConfigDiff] = guess_charset,
        logger: logging.Logger | None = None,
    ):
        self.charset_guesser = charset_guesser
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    def guess_text(self, config: ConfigSource, sample_text: str) -> ConfigDiff:
        """Guess settings from the decoded and newline-normalized sample text."""
        ...

    def guess(self, config: ConfigSource, sample: bytes) -> ConfigDiff:
        try:
            parser_config = config.get_nested_or_empty("parser")
        except ConfigError as exc:
            self.logger.warning("Unusable parser config: %s", exc)
            return new_config_diff()

        if not parser_config.is_set("charset"):
            return self.charset_guesser(sample)

        params = resolve_encoding_params(parser_config, self.logger)
        if params is None:
            return new_config_diff()

        sample_text = self._decode_sample(
            sample,
            params.charset,
            params.line_delimiter_recognized,
            params.newline.string,
        )
        if sample_text is None:
            return new_config_diff()

        return self.guess_text(config, sample_text)

    def _decode_sample(
        self,
        sample: bytes,
        charset: str,
        line_delimiter_recognized: LineDelimiter,
        newline: str,
    ) -> str | None:
        with LineDecoder.of(
            ListFileInput.of_sample(sample), charset, line_delimiter_recognized
        ) as decoder:
            if not decoder.next_file():
                self.logger.warning("Found no file input unexpectedly.")
                return None
            try:
                return reassemble(decoder, newline)
            except SampleDecodeError as exc:
                self.logger.warning("Failed to decode sample: %s", exc)
                return None
