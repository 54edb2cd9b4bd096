from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Sequence

from config.diff_config import DiffConfig
from config.logging_config import get_logger
from textdiff import diff_engine, revert_resolver
from textdiff.diff_types import ComparisonMode, DiffSegment, RevertAction, RevertCandidate

_log = get_logger(__name__)

DiffProvider = Callable[[str, str, ComparisonMode], list[DiffSegment]]
DiffKey = tuple[str, str, ComparisonMode]


class DiffInputTooLargeError(ValueError):
    pass


@dataclass
class DiffService:
    """
    App-facing wrapper around the diff engine and the revert resolver.

    The engine is pure; this service holds what callers usually want kept
    between calls: a bounded result cache, the most recent segments for
    `update_if_needed`, and the configured default mode and size limit.
    """

    config: DiffConfig
    diff_provider: DiffProvider = diff_engine.compute_segments
    segments: list[DiffSegment] = field(default_factory=list, init=False)
    _cache: "OrderedDict[DiffKey, tuple[DiffSegment, ...]]" = field(
        default_factory=OrderedDict, init=False, repr=False
    )
    _last_key: DiffKey | None = field(default=None, init=False, repr=False)

    def _resolve_mode(self, mode: ComparisonMode | None) -> ComparisonMode:
        return mode if mode is not None else self.config.comparison_mode

    def _check_size(self, original: str, updated: str) -> None:
        limit = self.config.max_input_chars
        longest = max(len(original), len(updated))
        if longest > limit:
            raise DiffInputTooLargeError(
                f"Input of {longest} characters exceeds max_input_chars={limit}."
            )

    def compute(
        self,
        original: str,
        updated: str,
        mode: ComparisonMode | None = None,
    ) -> list[DiffSegment]:
        resolved = self._resolve_mode(mode)
        self._check_size(original, updated)

        key: DiffKey = (original, updated, resolved)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            _log.debug("diff_cache_hit", mode=resolved)
            return list(cached)

        segments = self.diff_provider(original, updated, resolved)
        _log.info(
            "diff_computed",
            mode=resolved,
            original_chars=len(original),
            updated_chars=len(updated),
            segments=len(segments),
        )

        if self.config.cache_size > 0:
            self._cache[key] = tuple(segments)
            while len(self._cache) > self.config.cache_size:
                self._cache.popitem(last=False)

        return list(segments)

    def update_if_needed(
        self,
        original: str,
        updated: str,
        mode: ComparisonMode | None = None,
    ) -> bool:
        """
        Recompute `segments` only when an input changed since the last call.
        Returns True when a recomputation happened.
        """
        key: DiffKey = (original, updated, self._resolve_mode(mode))
        if key == self._last_key:
            return False

        self.segments = self.compute(*key)
        self._last_key = key
        return True

    def candidates(
        self,
        original: str,
        updated: str,
        mode: ComparisonMode | None = None,
    ) -> list[RevertCandidate]:
        resolved = self._resolve_mode(mode)
        segments = self.compute(original, updated, resolved)
        return revert_resolver.candidates(segments, resolved, original, updated)

    @staticmethod
    def candidate_index(candidates: Sequence[RevertCandidate]) -> dict[int, int]:
        """
        Map each segment index to the id of the candidate that owns it.
        """
        index: dict[int, int] = {}
        for candidate in candidates:
            for segment_index in candidate.segment_indices:
                index[segment_index] = candidate.id
        return index

    def revert(
        self,
        original: str,
        updated: str,
        candidate_id: int,
        mode: ComparisonMode | None = None,
    ) -> RevertAction | None:
        for candidate in self.candidates(original, updated, mode):
            if candidate.id == candidate_id:
                return revert_resolver.action(candidate, updated)

        _log.info("revert_candidate_not_found", candidate_id=candidate_id)
        return None

    def revert_all(self, original: str, updated: str) -> str:
        """
        Undo every change one candidate at a time, recomputing candidates
        against the new text after each applied action.
        """
        current = updated
        budget = len(self.candidates(original, current, "token")) + 1

        for _ in range(budget):
            pending = self.candidates(original, current, "token")
            if not pending:
                break
            result = revert_resolver.action(pending[0], current)
            if result is None or result.resulting_updated == current:
                break
            current = result.resulting_updated

        return current
