from __future__ import annotations

from typing import Sequence

import structlog

from textdiff.diff_types import (
    ComparisonMode,
    DiffSegment,
    IndexedSegment,
    RevertAction,
    RevertCandidate,
    TextRange,
)

_log = structlog.get_logger(__name__)


def indexed_segments(
    segments: Sequence[DiffSegment],
    original: str,
    updated: str,
) -> list[IndexedSegment]:
    """
    Locate every segment in both texts.

    Equal segments advance both cursors, deletions only the original one,
    insertions only the updated one. An equal word or punctuation segment
    whose text is not found at the cursor leaves that side's cursor where it
    is. An equal whitespace segment takes whatever whitespace run sits at the
    cursor on each side: the engine may keep whitespace that exists on one
    side only, so its text says nothing about the other side.
    """
    output: list[IndexedSegment] = []
    original_cursor = 0
    updated_cursor = 0

    for index, segment in enumerate(segments):
        text = segment.text
        length = len(text)

        if segment.kind == "equal" and segment.token_kind == "whitespace":
            original_range = _whitespace_run_at(original, original_cursor)
            updated_range = _whitespace_run_at(updated, updated_cursor)
        elif segment.kind == "equal":
            if original.startswith(text, original_cursor):
                original_range = TextRange(original_cursor, original_cursor + length)
            else:
                original_range = TextRange.empty_at(original_cursor)
            if updated.startswith(text, updated_cursor):
                updated_range = TextRange(updated_cursor, updated_cursor + length)
            else:
                updated_range = TextRange.empty_at(updated_cursor)
        elif segment.kind == "delete":
            original_range = TextRange(original_cursor, original_cursor + length)
            updated_range = TextRange.empty_at(updated_cursor)
        else:
            original_range = TextRange.empty_at(original_cursor)
            updated_range = TextRange(updated_cursor, updated_cursor + length)

        original_cursor = original_range.end
        updated_cursor = updated_range.end
        output.append(
            IndexedSegment(
                segment_index=index,
                segment=segment,
                original_range=original_range,
                updated_range=updated_range,
            )
        )

    return output


def _whitespace_run_at(text: str, cursor: int) -> TextRange:
    # Empty when an earlier segment already consumed the run.
    end = cursor
    while end < len(text) and text[end].isspace():
        end += 1
    return TextRange(cursor, end)


def candidates(
    segments: Sequence[DiffSegment],
    mode: ComparisonMode,
    original: str,
    updated: str,
) -> list[RevertCandidate]:
    """
    Turn lexical changes into independently revertible units.

    A deletion directly followed by an insertion becomes one paired
    replacement; any other lexical insertion or deletion stands alone.
    Character-refined segments are never offered.
    """
    if mode != "token":
        return []

    indexed = indexed_segments(segments, original, updated)
    output: list[RevertCandidate] = []

    index = 0
    while index < len(indexed):
        current = indexed[index]
        segment = current.segment

        if index + 1 < len(indexed):
            following = indexed[index + 1]
            if (
                segment.kind == "delete"
                and following.segment.kind == "insert"
                and segment.is_lexical_change
                and following.segment.is_lexical_change
            ):
                output.append(
                    RevertCandidate(
                        id=len(output),
                        kind="paired_replacement",
                        token_kind=segment.token_kind,
                        segment_indices=(current.segment_index, following.segment_index),
                        updated_range=following.updated_range,
                        replacement_text=segment.text,
                        original_fragment=segment.text,
                        updated_fragment=following.segment.text,
                    )
                )
                index += 2
                continue

        if segment.is_lexical_change and segment.kind == "insert":
            output.append(
                RevertCandidate(
                    id=len(output),
                    kind="single_insertion",
                    token_kind=segment.token_kind,
                    segment_indices=(current.segment_index,),
                    updated_range=current.updated_range,
                    replacement_text="",
                    original_fragment=None,
                    updated_fragment=segment.text,
                )
            )
        elif segment.is_lexical_change and segment.kind == "delete":
            output.append(
                RevertCandidate(
                    id=len(output),
                    kind="single_deletion",
                    token_kind=segment.token_kind,
                    segment_indices=(current.segment_index,),
                    updated_range=TextRange.empty_at(current.updated_range.start),
                    replacement_text=segment.text,
                    original_fragment=segment.text,
                    updated_fragment=None,
                )
            )

        index += 1

    return output


def action(candidate: RevertCandidate, updated: str) -> RevertAction | None:
    """
    Apply a candidate to `updated`.

    Returns None when the candidate's range does not fit `updated`, which
    happens when the candidate was computed against another version of the text.
    """
    target = candidate.updated_range
    replacement = candidate.replacement_text

    if candidate.kind == "single_deletion":
        position = min(target.start, len(updated))
        target = TextRange.empty_at(position)

    if target.start < 0 or target.length < 0 or target.end > len(updated):
        _log.debug(
            "revert_candidate_stale",
            candidate_id=candidate.id,
            start=target.start,
            end=target.end,
            updated_length=len(updated),
        )
        return None

    if candidate.kind == "single_deletion" and candidate.token_kind == "word":
        replacement = _pad_word_boundaries(replacement, updated, target.start)

    return RevertAction(
        kind=candidate.kind,
        updated_range=target,
        replacement_text=replacement,
        original_fragment=candidate.original_fragment,
        updated_fragment=candidate.updated_fragment,
        resulting_updated=updated[: target.start] + replacement + updated[target.end :],
    )


def _pad_word_boundaries(text: str, updated: str, position: int) -> str:
    # Keep a reinserted word from fusing with alphanumeric neighbours.
    if not any(ch.isalnum() for ch in text):
        return text

    if not text[0].isspace() and position > 0 and updated[position - 1].isalnum():
        text = " " + text
    if not text[-1].isspace() and position < len(updated) and updated[position].isalnum():
        text = text + " "
    return text
