from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from config.logging_config import get_logger
from docx_tools.track_changes_editor import TrackChangesEditor
from textdiff.diff_types import DiffSegment

_log = get_logger(__name__)

@dataclass
class DocxOutputService():
    author: str
    output_folder: Path | str = "textdiff_out"

    def __post_init__(self) -> None:
        self._editor = TrackChangesEditor(author=self.author)

    def resolve_output_path(self, output_path: Path | str) -> Path:
        path = Path(output_path).expanduser()
        return path if path.is_absolute() else Path(self.output_folder) / path

    def write_tracked_changes(
        self,
        *,
        output_path: Path | str,
        segments: Sequence[DiffSegment],
        heading: Optional[str] = None,
    ) -> Path:
        path = self.resolve_output_path(output_path)
        written = self._editor.build_document(
            output_path=path,
            segments=segments,
            heading=heading,
        )
        _log.info("tracked_changes_written", path=str(written), segments=len(segments))
        return written
