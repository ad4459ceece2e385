"""Custom exception hierarchy for puzzle construction and play."""


class CrosswordError(Exception):
    """Base exception for glossword failures."""


class PlacementError(CrosswordError):
    """Raised by a placer when a word list cannot be laid out."""


class NoPlacementError(CrosswordError):
    """Raised when no puzzle could be built from the supplied words."""


class NoWordsError(NoPlacementError):
    """Raised when no usable words were supplied at all."""


class WordSourceError(CrosswordError):
    """Raised when a term/definition source cannot be read."""


class SessionClosedError(CrosswordError):
    """Raised when an event reaches a discarded puzzle session."""
