"""
Resolution of the encoding settings under the ``parser`` section.

Each resolver returns the parsed value, or None when the setting is unusable.
An unusable user-supplied value is logged as a warning and never raised.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass

from textguess.config import ConfigSource
from textguess.exceptions import ConfigError
from textguess.text.newline import LineDelimiter, Newline

logger = logging.getLogger(__name__)

DEFAULT_CHARSET = "UTF-8"
DEFAULT_NEWLINE = "CRLF"


@dataclass(frozen=True)
class ResolvedEncodingParams:
    charset: str
    line_delimiter_recognized: LineDelimiter
    newline: Newline


def lookup_charset(name: str) -> str:
    """
    Return the Python codec name for charset ``name``.

    Raises LookupError for unknown names and for codecs that do not decode
    bytes to text (``base64``, ``rot13``, ...).
    """
    info = codecs.lookup(name)
    # binary and str-to-str codecs refuse to decode here
    b"".decode(info.name)
    return info.name


def resolve_charset(
    parser_config: ConfigSource, log: logging.Logger = logger
) -> str | None:
    try:
        charset_string = parser_config.get(str, "charset", DEFAULT_CHARSET)
    except ConfigError as exc:
        log.warning("Unrecognized charset: %s", exc)
        return None

    try:
        return lookup_charset(charset_string)
    except (LookupError, ValueError):
        log.warning("Unrecognized charset: '%s'", charset_string)
        return None


def resolve_line_delimiter_recognized(
    parser_config: ConfigSource, log: logging.Logger = logger
) -> LineDelimiter | None:
    try:
        delimiter_string = parser_config.get(str, "line_delimiter_recognized", None)
    except ConfigError as exc:
        log.warning("Unrecognized line delimiter: %s", exc)
        return None

    if delimiter_string is None:
        return None

    try:
        return LineDelimiter[delimiter_string]
    except KeyError:
        log.warning("Unrecognized line delimiter: '%s'", delimiter_string)
        return None


def resolve_newline(
    parser_config: ConfigSource, log: logging.Logger = logger
) -> Newline | None:
    try:
        newline_string = parser_config.get(str, "newline", DEFAULT_NEWLINE)
    except ConfigError as exc:
        log.warning("Unrecognized newline: %s", exc)
        return None

    if newline_string is None:
        return Newline.CRLF

    try:
        return Newline[newline_string]
    except KeyError:
        log.warning("Unrecognized newline: '%s'", newline_string)
        return None


def resolve_encoding_params(
    parser_config: ConfigSource, log: logging.Logger = logger
) -> ResolvedEncodingParams | None:
    """
    Resolve charset, line delimiter and newline, in that order.

    Stops at the first setting that does not resolve, so later settings are
    neither read nor warned about.
    """
    charset = resolve_charset(parser_config, log)
    if charset is None:
        return None

    line_delimiter_recognized = resolve_line_delimiter_recognized(parser_config, log)
    if line_delimiter_recognized is None:
        return None

    newline = resolve_newline(parser_config, log)
    if newline is None:
        return None

    return ResolvedEncodingParams(
        charset=charset,
        line_delimiter_recognized=line_delimiter_recognized,
        newline=newline,
    )
