class TextGuessError(Exception):
    """Base class for errors raised by textguess."""

    def __init__(self, message: str, *, cause: Exception = None):
        self.message = message
        super().__init__(message)
        self.__cause__ = cause  # Optional chaining for debugging


class ConfigError(TextGuessError):
    """Raised when a configuration value is missing or has the wrong shape."""


class SampleDecodeError(TextGuessError):
    """Raised when the sample bytes cannot be decoded with the given charset."""


class GuessPluginNotSupportedError(TextGuessError):
    """Raised when no guess plugin is registered under the requested name."""

    def __init__(self, name: str, message: str = None, *, cause: Exception = None):
        self.name = name
        if message is None:
            message = f"Guess plugin not supported: {name}"
        super().__init__(message, cause=cause)
