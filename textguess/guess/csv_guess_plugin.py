from __future__ import annotations

import csv
import logging

from textguess.config import ConfigDiff, ConfigSource, new_config_diff
from textguess.exceptions import ConfigError
from textguess.guess.text_guess_plugin import TextGuessPlugin

logger = logging.getLogger(__name__)

DELIMITER_CANDIDATES = ",\t;|"


class CsvGuessPlugin(TextGuessPlugin):
    """Guesses delimiter, quote character and header line of delimited text."""

    def guess_text(self, config: ConfigSource, sample_text: str) -> ConfigDiff:
        parser_config = config.get_nested_or_empty("parser")
        try:
            parser_type = parser_config.get(str, "type", None)
        except ConfigError as exc:
            self.logger.warning("Unusable parser type: %s", exc)
            return new_config_diff()
        if parser_type is not None and parser_type != "csv":
            return new_config_diff()

        if len(sample_text.splitlines()) < 2:
            return new_config_diff()

        sniffer = csv.Sniffer()
        try:
            dialect = sniffer.sniff(sample_text, delimiters=DELIMITER_CANDIDATES)
        except csv.Error as exc:
            logger.debug("Sample is not delimited text: %s", exc)
            return new_config_diff()

        try:
            has_header = sniffer.has_header(sample_text)
        except csv.Error:
            has_header = False

        return new_config_diff(
            {
                "parser": {
                    "type": "csv",
                    "delimiter": dialect.delimiter,
                    "quote": dialect.quotechar,
                    "skip_header_lines": 1 if has_header else 0,
                }
            }
        )
