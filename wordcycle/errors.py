"""
Error types for the vocabulary cycle service.

Only DataUnavailable and NoData ever reach an HTTP caller; the others are
recovered where they are raised.
"""


class WordCycleError(Exception):
    """Base class for all service errors."""


class DataUnavailable(WordCycleError):
    """The vocabulary dataset is missing, unreadable or not a JSON array."""


class NoData(WordCycleError):
    """Sampling was requested against an empty vocabulary."""


class CycleExhausted(WordCycleError):
    """The shuffle stack is empty and must be reinitialized."""


class RemoteStoreUnavailable(WordCycleError):
    """The seen-set document could not be fetched or parsed."""


class RemoteStoreWriteFailure(WordCycleError):
    """The seen-set document could not be updated."""
