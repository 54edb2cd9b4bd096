from __future__ import annotations

from typing import Sequence

import structlog

from textdiff import myers_diff
from textdiff.diff_types import ComparisonMode, DiffSegment, Operation, Token
from textdiff.tokenizer import split_characters, tokenize

_log = structlog.get_logger(__name__)


def compute_segments(
    original: str,
    updated: str,
    mode: ComparisonMode = "token",
) -> list[DiffSegment]:
    """
    Diff two texts into display-ready segments.

    Whitespace never shows up as a change: whitespace runs are either kept as
    equal segments or dropped. In "character" mode adjacent word replacements
    are refined into per-character segments.
    """
    operations = myers_diff.diff(tokenize(original), tokenize(updated))
    _log.debug(
        "token_diff_computed",
        operations=len(operations),
        edit_distance=myers_diff.edit_distance(operations),
        mode=mode,
    )

    segments = _token_segments(operations)
    if mode == "character":
        segments = _refine_word_replacements(segments)
    return merge_adjacent_segments(segments)


def _token_segments(operations: Sequence[Operation[Token]]) -> list[DiffSegment]:
    segments: list[DiffSegment] = []

    index = 0
    while index < len(operations):
        token = operations[index].item

        if token.kind == "whitespace":
            run_end = index
            while run_end < len(operations) and operations[run_end].item.kind == "whitespace":
                run_end += 1

            run = operations[index:run_end]
            surviving = "".join(op.item.text for op in run if op.kind != "delete")
            if surviving:
                segments.append(DiffSegment(kind="equal", token_kind="whitespace", text=surviving))
            elif _is_adjacent_to_deleted_lexical(operations, index, run_end):
                deleted = "".join(op.item.text for op in run)
                segments.append(DiffSegment(kind="equal", token_kind="whitespace", text=deleted))

            index = run_end
            continue

        segments.append(
            DiffSegment(kind=operations[index].kind, token_kind=token.kind, text=token.text)
        )
        index += 1

    return segments


def _is_adjacent_to_deleted_lexical(
    operations: Sequence[Operation[Token]],
    run_start: int,
    run_end: int,
) -> bool:
    # A whitespace run is bounded by lexical operations (or the ends of the script).
    if run_start > 0 and operations[run_start - 1].kind == "delete":
        return True
    if run_end < len(operations) and operations[run_end].kind == "delete":
        return True
    return False


def _refine_word_replacements(segments: list[DiffSegment]) -> list[DiffSegment]:
    refined: list[DiffSegment] = []

    index = 0
    while index < len(segments):
        if index + 1 < len(segments):
            replacement = _refine_pair(segments[index], segments[index + 1])
            if replacement is not None:
                refined.extend(replacement)
                index += 2
                continue

        refined.append(segments[index])
        index += 1

    return refined


def _refine_pair(delete_segment: DiffSegment, insert_segment: DiffSegment) -> list[DiffSegment] | None:
    if delete_segment.kind != "delete" or delete_segment.token_kind != "word":
        return None
    if insert_segment.kind != "insert" or insert_segment.token_kind != "word":
        return None

    operations = myers_diff.diff(
        split_characters(delete_segment.text),
        split_characters(insert_segment.text),
    )
    return merge_adjacent_segments(
        [DiffSegment(kind=op.kind, token_kind="word", text=op.item) for op in operations]
    )


def merge_adjacent_segments(segments: Sequence[DiffSegment]) -> list[DiffSegment]:
    merged: list[DiffSegment] = []
    for segment in segments:
        if not segment.text:
            continue
        if merged and merged[-1].kind == segment.kind and merged[-1].token_kind == segment.token_kind:
            last = merged[-1]
            merged[-1] = DiffSegment(kind=last.kind, token_kind=last.token_kind, text=last.text + segment.text)
        else:
            merged.append(segment)
    return merged
