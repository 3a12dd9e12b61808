"""
textguess: Turn the leading bytes of a file into text for format guessing.

Guess plugins inspect a small byte sample of a source and infer parser
settings from it. Text guess plugins receive that sample already decoded,
with the configured charset, line delimiter and newline applied.
"""

from pathlib import Path

from textguess.config import ConfigDiff, ConfigSource, new_config_diff
from textguess.guess.charset_guess import CharsetGuessPlugin, guess_charset
from textguess.guess.executor import guess_config
from textguess.guess.plugin import GuessPlugin
from textguess.guess.text_guess_plugin import TextGuessPlugin
from textguess.router import (
    available_guess_plugins,
    create_guess_plugins,
    get_guess_plugin,
)
from textguess.text.newline import LineDelimiter, Newline
from textguess.text.sample import (
    DEFAULT_SAMPLE_LIMITS,
    SampleLimits,
    read_sample,
    reassemble,
)

__version__ = "0.1.0"


def guess_file(
    path: str | Path,
    config: ConfigSource | dict | None = None,
    *,
    plugins: list[str] | None = None,
    limits: SampleLimits = DEFAULT_SAMPLE_LIMITS,
) -> ConfigDiff:
    """
    Guess parser settings for a file.

    Reads the leading bytes of ``path`` and runs the named guess plugins (all
    of them by default) until they stop adding settings.

    Args:
        path: Path to the file to guess.
        config: Partial config to start from.
        plugins: Names of the guess plugins to run, in order.
        limits: How many bytes are read as the sample.

    Returns:
        The guessed settings as a ConfigDiff.

    Raises:
        GuessPluginNotSupportedError: A plugin name is unknown.
        FileNotFoundError: If the file does not exist.

    Example:
        >>> import textguess
        >>> textguess.guess_file("data.csv").to_dict()
        {'parser': {'charset': 'UTF-8', 'newline': 'LF', ...}}
    """
    if not isinstance(config, ConfigSource):
        config = ConfigSource(config)
    sample = read_sample(path, limits=limits)
    return guess_config(create_guess_plugins(plugins), config, sample)


__all__ = [
    # Version
    "__version__",
    # Main functions
    "guess_file",
    "guess_config",
    "guess_charset",
    "read_sample",
    "reassemble",
    "available_guess_plugins",
    "get_guess_plugin",
    # Plugin interfaces
    "GuessPlugin",
    "TextGuessPlugin",
    "CharsetGuessPlugin",
    # Config
    "ConfigSource",
    "ConfigDiff",
    "new_config_diff",
    "Newline",
    "LineDelimiter",
    "SampleLimits",
]
