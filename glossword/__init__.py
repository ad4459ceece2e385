"""Crossword builder and player for term/definition word lists.

This package exposes the public API surface via:

- ``glossword.engine.builder.PuzzleBuilder``: grows a bounded puzzle one word at a time.
- ``glossword.engine.index.PlacementIndex``: cell ownership and clue numbering.
- ``glossword.engine.session.PuzzleSession``: the interactive grid state machine.
- ``glossword.data.word_source`` helpers: CSV and HTTP term/definition sources.
"""

from .engine.builder import BuilderConfig, DebouncedBuilder, PuzzleBuilder, build_puzzle
from .engine.index import PlacementIndex
from .engine.session import PuzzleSession, SessionConfig, discard_session, new_session

__all__ = [
    "BuilderConfig",
    "DebouncedBuilder",
    "PlacementIndex",
    "PuzzleBuilder",
    "PuzzleSession",
    "SessionConfig",
    "build_puzzle",
    "discard_session",
    "new_session",
]

__version__ = "0.1.0"
