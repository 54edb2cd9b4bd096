from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Sequence

from textdiff.diff_types import DiffSegment, RevertAction, RevertCandidate
from utils.terminal_ui import Color, paint


def format_segments(segments: Sequence[DiffSegment], color: bool = True) -> str:
    """
    Deletions in red strikethrough and insertions in green; without color
    they are bracketed wdiff-style as [-old-] and {+new+}.
    """
    parts: list[str] = []
    for segment in segments:
        if segment.kind == "delete":
            parts.append(paint(segment.text, Color.RED, Color.STRIKE) if color else f"[-{segment.text}-]")
        elif segment.kind == "insert":
            parts.append(paint(segment.text, Color.GREEN) if color else f"{{+{segment.text}+}}")
        else:
            parts.append(segment.text)
    return "".join(parts)


def segments_payload(segments: Sequence[DiffSegment]) -> list[dict[str, Any]]:
    return [asdict(segment) for segment in segments]


def candidate_payload(candidate: RevertCandidate) -> dict[str, Any]:
    payload = asdict(candidate)
    payload["segment_indices"] = list(candidate.segment_indices)
    return payload


def action_payload(action: RevertAction) -> dict[str, Any]:
    return asdict(action)


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def print_segments(segments: Sequence[DiffSegment], color: bool = True) -> None:
    print(format_segments(segments, color=color))


def print_candidates(candidates: Sequence[RevertCandidate]) -> None:
    if not candidates:
        print("No revertible changes.")
        return
    for candidate in candidates:
        rng = candidate.updated_range
        if candidate.kind == "paired_replacement":
            detail = f"{candidate.updated_fragment!r} -> {candidate.original_fragment!r}"
        elif candidate.kind == "single_insertion":
            detail = f"remove {candidate.updated_fragment!r}"
        else:
            detail = f"restore {candidate.original_fragment!r}"
        print(f"  [{candidate.id}] {candidate.kind} @{rng.start}:{rng.end} {detail}")
