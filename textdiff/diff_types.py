from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

TokenKind = Literal["word", "punctuation", "whitespace"]
EditKind = Literal["equal", "delete", "insert"]
ComparisonMode = Literal["token", "character"]
RevertCandidateKind = Literal["single_insertion", "single_deletion", "paired_replacement"]

COMPARISON_MODES: tuple[ComparisonMode, ...] = ("token", "character")

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str


@dataclass(frozen=True, slots=True)
class Operation(Generic[T]):
    """
    One step of an edit script. `item` is whatever was compared:
    a Token at word granularity, a str at character granularity.
    """
    kind: EditKind
    item: T


@dataclass(frozen=True, slots=True)
class DiffSegment:
    kind: EditKind
    token_kind: TokenKind
    text: str

    @property
    def is_lexical_change(self) -> bool:
        return self.token_kind != "whitespace" and self.kind != "equal"


@dataclass(frozen=True, slots=True)
class TextRange:
    """
    Half-open [start, end) range of str indices.
    """
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @classmethod
    def empty_at(cls, position: int) -> "TextRange":
        return cls(start=position, end=position)


@dataclass(frozen=True, slots=True)
class IndexedSegment:
    segment_index: int
    segment: DiffSegment
    original_range: TextRange
    updated_range: TextRange


@dataclass(frozen=True, slots=True)
class RevertCandidate:
    id: int
    kind: RevertCandidateKind
    token_kind: TokenKind
    segment_indices: tuple[int, ...]
    updated_range: TextRange
    replacement_text: str
    original_fragment: str | None = None
    updated_fragment: str | None = None


@dataclass(frozen=True, slots=True)
class RevertAction:
    kind: RevertCandidateKind
    updated_range: TextRange
    replacement_text: str
    original_fragment: str | None
    updated_fragment: str | None
    resulting_updated: str
