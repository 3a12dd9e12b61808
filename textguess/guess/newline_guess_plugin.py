"""
Newline Guess Plugin
====================

Guesses the newline of a sample and reports it both as ``newline`` and as
``line_delimiter_recognized``, so that text guess plugins can decode the
sample on the next pass.

Settings already present in the config are not reported again. Counting is
done on text decoded with ``parser.charset``; without a charset the charset
is guessed first, the same way ``TextGuessPlugin`` does. UTF-16 and UTF-32
without a byte order mark are read as big-endian, as ``LineDecoder`` does.

    - CRLF wins when it makes up more than half of both CR and LF counts
    - CR wins when there are more than half as many CRs as LFs
    - LF otherwise, including samples without any terminator
"""

from __future__ import annotations

import logging
from typing import Callable

from textguess.config import ConfigDiff, ConfigSource, new_config_diff
from textguess.exceptions import ConfigError
from textguess.guess.charset_guess import guess_charset
from textguess.guess.params import resolve_charset
from textguess.guess.plugin import GuessPlugin
from textguess.text.line_decoder import decoding_charset
from textguess.text.newline import Newline

logger = logging.getLogger(__name__)


def guess_newline(sample_text: str) -> Newline:
    cr_count = sample_text.count("\r")
    lf_count = sample_text.count("\n")
    crlf_count = sample_text.count("\r\n")

    if crlf_count > cr_count / 2 and crlf_count > lf_count / 2:
        return Newline.CRLF
    if cr_count > lf_count / 2:
        return Newline.CR
    return Newline.LF


class NewlineGuessPlugin(GuessPlugin):
    def __init__(
        self,
        *,
        charset_guesser: Callable[[bytes], ConfigDiff] = guess_charset,
        logger: logging.Logger | None = None,
    ):
        self.charset_guesser = charset_guesser
        self.logger = logger or logging.getLogger(__name__)

    def guess(self, config: ConfigSource, sample: bytes) -> ConfigDiff:
        try:
            parser_config = config.get_nested_or_empty("parser")
        except ConfigError as exc:
            self.logger.warning("Unusable parser config: %s", exc)
            return new_config_diff()

        if not parser_config.is_set("charset"):
            return self.charset_guesser(sample)

        charset = resolve_charset(parser_config, self.logger)
        if charset is None:
            return new_config_diff()

        try:
            text = sample.decode(decoding_charset(charset, sample), errors="replace")
        except UnicodeError as exc:
            self.logger.warning("Failed to decode sample: %s", exc)
            return new_config_diff()
        newline = guess_newline(text)
        self.logger.debug("Guessed newline: %s", newline.name)

        guessed = {}
        if not parser_config.is_set("newline"):
            guessed["newline"] = newline.name
        if not parser_config.is_set("line_delimiter_recognized"):
            guessed["line_delimiter_recognized"] = newline.name
        if not guessed:
            return new_config_diff()
        return new_config_diff({"parser": guessed})
