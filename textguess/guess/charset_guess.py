"""
Charset Guess
=============

Guesses the charset of a byte sample and reports it as
``{"parser": {"charset": NAME}}``.

Detection
---------
Detection is done by charset_normalizer. The codec name it reports
(``utf_8``, ``cp1252``, ...) is translated to the charset label commonly used
in configuration files (``UTF-8``, ``windows-1252``, ...). Every label emitted
here is accepted back by the charset resolver of ``TextGuessPlugin``.

    - Empty samples are reported as UTF-8
    - Samples charset_normalizer has no match for are reported as UTF-8
    - ASCII is reported as UTF-8, which it is a subset of

``CharsetGuessPlugin`` reports nothing when ``parser.charset`` is already set.

Dependencies
------------
    - charset_normalizer: Encoding detection library
"""

import logging

from charset_normalizer import from_bytes

from textguess.config import ConfigDiff, ConfigSource, new_config_diff
from textguess.exceptions import ConfigError
from textguess.guess.plugin import GuessPlugin

logger = logging.getLogger(__name__)

FALLBACK_CHARSET = "UTF-8"

# Python codec name -> configuration label
_CHARSET_LABELS = {
    "ascii": "UTF-8",
    "utf_8": "UTF-8",
    "utf_8_sig": "UTF-8",
    "utf_16": "UTF-16",
    "utf_16_le": "UTF-16LE",
    "utf_16_be": "UTF-16BE",
    "utf_32": "UTF-32",
    "utf_32_le": "UTF-32LE",
    "utf_32_be": "UTF-32BE",
    "latin_1": "ISO-8859-1",
    "cp1250": "windows-1250",
    "cp1251": "windows-1251",
    "cp1252": "windows-1252",
    "cp1253": "windows-1253",
    "cp1254": "windows-1254",
    "cp1255": "windows-1255",
    "cp1256": "windows-1256",
    "cp1257": "windows-1257",
    "cp1258": "windows-1258",
    "shift_jis": "MS932",
    "cp932": "MS932",
    "euc_jp": "EUC-JP",
    "iso2022_jp": "ISO-2022-JP",
    "euc_kr": "EUC-KR",
    "cp949": "MS949",
    "gb2312": "GB2312",
    "gbk": "GBK",
    "gb18030": "GB18030",
    "big5": "Big5",
    "koi8_r": "KOI8-R",
    "koi8_u": "KOI8-U",
}


def charset_label(codec_name: str) -> str:
    """Configuration label for a Python codec name."""
    label = _CHARSET_LABELS.get(codec_name.lower())
    if label is not None:
        return label
    # iso8859_5 -> ISO-8859-5, mac_roman -> MAC-ROMAN
    return codec_name.upper().replace("_", "-").replace("ISO8859", "ISO-8859")


def detect_charset(sample: bytes) -> str:
    """Detect the charset label of ``sample``."""
    if not sample:
        return FALLBACK_CHARSET

    best_match = from_bytes(sample).best()
    if best_match is None:
        logger.debug("Charset detection found no match, falling back to %s", FALLBACK_CHARSET)
        return FALLBACK_CHARSET

    label = charset_label(best_match.encoding)
    logger.debug(
        "Detected charset: %s (codec: %s, chaos: %.2f)",
        label,
        best_match.encoding,
        best_match.chaos,
    )
    return label


def guess_charset(sample: bytes) -> ConfigDiff:
    """Guess the charset of ``sample`` as a ``parser.charset`` delta."""
    return new_config_diff({"parser": {"charset": detect_charset(sample)}})


class CharsetGuessPlugin(GuessPlugin):
    """Guess plugin reporting only the charset of the sample."""

    def guess(self, config: ConfigSource, sample: bytes) -> ConfigDiff:
        try:
            parser_config = config.get_nested_or_empty("parser")
        except ConfigError as exc:
            logger.warning("Unusable parser config: %s", exc)
            return new_config_diff()
        if parser_config.is_set("charset"):
            return new_config_diff()
        return guess_charset(sample)
