"""Incremental puzzle construction.

The builder grows the puzzle one word at a time:

  1. Normalise, deduplicate and length-filter the terms; multi-word terms
     are dropped.
  2. Shuffle them with a seeded ``random.Random``.
  3. Seed the placer with the first two words.
  4. Append each following word and re-run the placer on the whole list,
     stopping once the grid overflows the maximum size in both dimensions.

Placer failures after the seed, of any exception type, are recovered
locally: the offending word is dropped and the last good layout is kept.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from ..core.constants import DEFAULT_DEBOUNCE_SECONDS, DEFAULT_MAX_DIM, MIN_SEED_WORDS
from ..core.exceptions import CrosswordError, NoPlacementError, NoWordsError
from ..core.models import PlacementResult
from ..data.normalization import clean_term, dedupe_terms
from ..utils.logger import get_logger
from .placer import Placer, place
from .scheduler import Scheduler, TimerHandle


LOGGER = get_logger(__name__)


@dataclass
class BuilderConfig:
    max_dim: int = DEFAULT_MAX_DIM
    seed: Optional[int] = None
    dedupe: bool = True

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)


@dataclass
class BuildReport:
    """What happened during the last build; useful for logs and the CLI."""

    candidates: List[str]
    placed: List[str]
    rejected: List[str]
    overflowed: Optional[str] = None


class PuzzleBuilder:
    """Feeds words to a placer and keeps the best bounded layout."""

    def __init__(
        self,
        config: Optional[BuilderConfig] = None,
        placer: Placer = place,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or BuilderConfig()
        self.placer = placer
        self.rng = rng or self.config.make_rng()
        self.last_report: Optional[BuildReport] = None

    def prepare(self, words: Iterable[str]) -> List[str]:
        """Return the shuffled candidate list the placer will be fed."""

        cleaned = [clean_term(word) for word in words]
        cleaned = [word for word in cleaned if word]
        single = [word for word in cleaned if " " not in word]
        if len(single) != len(cleaned):
            LOGGER.info("Discarded %d multi-word terms", len(cleaned) - len(single))
        cleaned = single
        if self.config.dedupe:
            cleaned = dedupe_terms(cleaned)
        fitting = [word for word in cleaned if len(word) <= self.config.max_dim]
        dropped = len(cleaned) - len(fitting)
        if dropped:
            LOGGER.info("Discarded %d words longer than %d letters", dropped, self.config.max_dim)
        self.rng.shuffle(fitting)
        return fitting

    def build(self, words: Sequence[str]) -> PlacementResult:
        if not words:
            raise NoWordsError("No words supplied")

        ordered = self.prepare(words)
        report = BuildReport(candidates=list(ordered), placed=[], rejected=[])
        self.last_report = report
        if len(ordered) < MIN_SEED_WORDS:
            raise NoPlacementError(
                f"Need at least {MIN_SEED_WORDS} usable words, got {len(ordered)}"
            )

        working = ordered[:MIN_SEED_WORDS]
        try:
            current = self.placer(list(working))
        except Exception as exc:
            raise NoPlacementError(f"Cannot seed puzzle with {working}: {exc}") from exc
        report.placed.extend(working)
        LOGGER.debug("Seeded puzzle with %s (%dx%d)", working, current.width, current.height)

        max_dim = self.config.max_dim
        for word in ordered[MIN_SEED_WORDS:]:
            working.append(word)
            try:
                attempt = self.placer(list(working))
            except Exception as exc:
                LOGGER.warning("Placer rejected '%s', keeping previous layout: %s", word, exc)
                working.pop()
                report.rejected.append(word)
                continue
            if attempt.width > max_dim and attempt.height > max_dim:
                LOGGER.info(
                    "Adding '%s' grows the grid to %dx%d; stopping at %d words",
                    word,
                    attempt.width,
                    attempt.height,
                    len(working) - 1,
                )
                working.pop()
                report.overflowed = word
                break
            current = attempt
            report.placed.append(word)

        LOGGER.info(
            "Built %dx%d puzzle with %d words", current.width, current.height, len(current.placed_words)
        )
        return current


def build_puzzle(
    words: Sequence[str],
    max_dim: int = DEFAULT_MAX_DIM,
    rng: Optional[random.Random] = None,
    placer: Placer = place,
) -> PlacementResult:
    """One-shot helper around :class:`PuzzleBuilder`."""

    return PuzzleBuilder(BuilderConfig(max_dim=max_dim), placer=placer, rng=rng).build(words)


class DebouncedBuilder:
    """Coalesces bursts of generate requests; only the last one runs."""

    def __init__(
        self,
        builder: PuzzleBuilder,
        scheduler: Scheduler,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self.builder = builder
        self.scheduler = scheduler
        self.delay = delay
        self._pending: Optional[TimerHandle] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def request(
        self,
        words: Sequence[str],
        on_result: Callable[[PlacementResult], None],
        on_error: Optional[Callable[[CrosswordError], None]] = None,
    ) -> TimerHandle:
        if self.has_pending:
            LOGGER.debug("Cancelling pending build in favour of a newer request")
        self.cancel()
        snapshot = list(words)

        def run() -> None:
            self._pending = None
            try:
                result = self.builder.build(snapshot)
            except NoPlacementError as exc:
                if on_error is None:
                    raise
                on_error(exc)
                return
            on_result(result)

        self._pending = self.scheduler.call_later(self.delay, run)
        return self._pending

    def cancel(self) -> None:
        self.scheduler.cancel(self._pending)
        self._pending = None
