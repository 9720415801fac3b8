"""Exception types raised by the ULA assembler."""

from __future__ import annotations

__all__ = [
    'UlaError', 'InputUnavailableError', 'OutputUnavailableError',
    'UnknownMnemonicError', 'MissingOperandError', 'OperandRangeError',
]


class UlaError(Exception):
    """Base class for all assembler errors."""
    def __init__(self, message: str, line_num: int = 0):
        self.line_num = line_num
        super().__init__(f"Line {line_num}: {message}" if line_num else message)


class InputUnavailableError(UlaError):
    """Source file could not be opened for reading."""
    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        msg = f"Cannot open input file: {self.path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class OutputUnavailableError(UlaError):
    """Destination file could not be opened for writing."""
    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        msg = f"Cannot open output file: {self.path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


# Strict mode only; the default mode logs these and carries on.

class UnknownMnemonicError(UlaError):
    pass


class MissingOperandError(UlaError):
    pass


class OperandRangeError(UlaError):
    pass
