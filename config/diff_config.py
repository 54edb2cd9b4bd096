from __future__ import annotations
from dataclasses import dataclass

from textdiff.diff_types import COMPARISON_MODES, ComparisonMode

@dataclass(frozen=True, slots=True)
class DiffConfig:
    mode: str = "token"
    max_input_chars: int = 200_000
    cache_size: int = 128

    @property
    def comparison_mode(self) -> ComparisonMode:
        return "character" if self.mode == "character" else "token"

    def validate(self) -> None:
        if self.mode not in COMPARISON_MODES:
            raise ValueError(f"DiffConfig.mode must be one of {', '.join(COMPARISON_MODES)}.")

        # bool is a subclass of int; reject it explicitly.
        if isinstance(self.max_input_chars, bool) or not isinstance(self.max_input_chars, int):
            raise ValueError("DiffConfig.max_input_chars must be an integer.")
        if self.max_input_chars < 1:
            raise ValueError("DiffConfig.max_input_chars must be >= 1.")

        if isinstance(self.cache_size, bool) or not isinstance(self.cache_size, int):
            raise ValueError("DiffConfig.cache_size must be an integer.")
        if self.cache_size < 0:
            raise ValueError("DiffConfig.cache_size must be >= 0.")

    @staticmethod
    def from_strings(
        mode: str = "token",
        max_input_chars: str | int = 200_000,
        cache_size: str | int = 128,
    ) -> "DiffConfig":
        cfg = DiffConfig(
            mode=(mode or "").strip().lower(),
            max_input_chars=int(max_input_chars),
            cache_size=int(cache_size),
        )
        cfg.validate()
        return cfg
