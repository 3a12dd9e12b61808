from enum import Enum


class Newline(Enum):
    """Canonical newline written between reassembled lines."""

    CRLF = "\r\n"
    LF = "\n"
    CR = "\r"

    @property
    def string(self) -> str:
        return self.value


class LineDelimiter(Enum):
    """
    Terminator recognized when splitting decoded text into lines.

    A decoder given no ``LineDelimiter`` recognizes all of them.
    """

    CR = "\r"
    LF = "\n"
    CRLF = "\r\n"

    @property
    def string(self) -> str:
        return self.value
