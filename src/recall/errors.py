"""Exceptions raised by the round and session systems."""


class RecallError(Exception):
    """Base class for game errors."""


class ConfigError(RecallError, ValueError):
    """Round configuration cannot be played on the current board."""


class InvalidSelection(RecallError, ValueError):
    """A tile was selected while disabled or outside the board."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"tile {index}: {reason}")
        self.index = index
        self.reason = reason
