from abc import abstractmethod
from typing import Protocol

from textguess.config import ConfigDiff, ConfigSource


class GuessPlugin(Protocol):
    @abstractmethod
    def guess(self, config: ConfigSource, sample: bytes) -> ConfigDiff:
        """
        Infers settings from the leading bytes of a source.
        Returns the inferred settings as a delta to be merged into ``config``;
        an empty ConfigDiff when nothing could be guessed.
        """
        ...
