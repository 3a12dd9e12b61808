from __future__ import annotations

import logging
import typing

from textguess.config import ConfigDiff, ConfigSource, new_config_diff
from textguess.guess.plugin import GuessPlugin

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 10


def guess_config(
    plugins: typing.Sequence[GuessPlugin],
    config: ConfigSource,
    sample: bytes,
    *,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> ConfigDiff:
    """
    Run ``plugins`` against ``config`` until they stop adding settings.

    Each plugin sees the config merged with everything guessed before it, so
    a charset guessed in one round lets text guess plugins decode the sample
    in the next. ``config`` itself is not modified.

    Returns the merged delta of all rounds.
    """
    current = config.deep_copy()
    guessed = new_config_diff()

    for round_number in range(1, max_rounds + 1):
        before = current.deep_copy()
        for plugin in plugins:
            diff = plugin.guess(current, sample)
            if diff.is_empty():
                continue
            logger.debug(
                "Round %d: %s guessed %s",
                round_number,
                type(plugin).__name__,
                diff.to_json(),
            )
            current.merge(diff)
            guessed.merge(diff)
        if current == before:
            logger.debug("Guess settled after %d round(s)", round_number)
            return guessed

    logger.warning("Guess did not settle after %d rounds", max_rounds)
    return guessed
