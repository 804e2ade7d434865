"""Kanji Browser error types."""


class KanjiBrowserError(Exception):
    """Base error for all kanji browser failures."""


class NoHistoryError(KanjiBrowserError):
    """No further history in the requested direction."""


class OracleFailure(KanjiBrowserError):
    """The dictionary search could not be completed."""
