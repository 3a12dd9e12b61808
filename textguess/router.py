import logging

from textguess.exceptions import GuessPluginNotSupportedError
from textguess.guess.plugin import GuessPlugin

logger = logging.getLogger(__name__)

# Order matters: later plugins see what earlier ones guessed
GUESS_PLUGIN_NAMES = ["charset", "newline", "json", "csv"]


def _get_guess_plugin(name: str) -> type[GuessPlugin]:
    """Return the guess plugin class for a name (lazy import)."""
    if name == "charset":
        from textguess.guess.charset_guess import CharsetGuessPlugin

        return CharsetGuessPlugin
    elif name == "newline":
        from textguess.guess.newline_guess_plugin import NewlineGuessPlugin

        return NewlineGuessPlugin
    elif name == "json":
        from textguess.guess.json_guess_plugin import JsonGuessPlugin

        return JsonGuessPlugin
    elif name == "csv":
        from textguess.guess.csv_guess_plugin import CsvGuessPlugin

        return CsvGuessPlugin
    else:
        raise GuessPluginNotSupportedError(name)


def available_guess_plugins() -> list[str]:
    return list(GUESS_PLUGIN_NAMES)


def get_guess_plugin(name: str) -> type[GuessPlugin]:
    """Returns the guess plugin class registered under ``name``.

    :raises GuessPluginNotSupportedError: No plugin is registered under the name
    """
    plugin = _get_guess_plugin(name.strip().lower())
    logger.debug(f"Resolved guess plugin: {name} -> {plugin.__name__}")
    return plugin


def create_guess_plugins(names: list[str] | None = None) -> list[GuessPlugin]:
    """Instantiate the named plugins, or all of them in default order."""
    if names is None:
        names = GUESS_PLUGIN_NAMES
    return [get_guess_plugin(name)() for name in names]
