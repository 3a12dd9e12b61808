from __future__ import annotations

import json
import logging

from textguess.config import ConfigDiff, ConfigSource, new_config_diff
from textguess.exceptions import ConfigError
from textguess.guess.text_guess_plugin import TextGuessPlugin

logger = logging.getLogger(__name__)


class JsonGuessPlugin(TextGuessPlugin):
    """Recognizes JSON Lines: every non-blank line is a JSON object."""

    def guess_text(self, config: ConfigSource, sample_text: str) -> ConfigDiff:
        parser_config = config.get_nested_or_empty("parser")
        try:
            parser_type = parser_config.get(str, "type", None)
        except ConfigError as exc:
            self.logger.warning("Unusable parser type: %s", exc)
            return new_config_diff()
        if parser_type is not None and parser_type != "json":
            return new_config_diff()

        lines = [line for line in sample_text.splitlines() if line.strip()]
        if not lines:
            return new_config_diff()

        for index, line in enumerate(lines):
            try:
                value = json.loads(line)
            except json.JSONDecodeError:
                # the sample is a prefix, so its last line may be cut off
                if index == len(lines) - 1 and index > 0:
                    break
                return new_config_diff()
            if not isinstance(value, dict):
                return new_config_diff()

        logger.debug("Sample has %d JSON object lines", len(lines))
        return new_config_diff({"parser": {"type": "json"}})
