from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from textdiff.diff_types import DiffSegment


@dataclass
class TrackChangesEditor:
    """
    Writes a diff segment stream into a NEW .docx as Word revision markup:
    equal text as plain runs, deletions as <w:del>, insertions as <w:ins>.
    """
    author: str = "textdiff"
    date: Optional[str] = None
    _rev_id: int = 1

    def __post_init__(self) -> None:
        if self.date is None:
            self.date = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    def reset_rev_ids(self) -> None:
        self._rev_id = 1

    def next_rev_id(self) -> int:
        rid = self._rev_id
        self._rev_id += 1
        return rid

    @staticmethod
    def enable_track_revisions(doc) -> None:
        settings = doc.settings._element
        if settings.find(qn("w:trackRevisions")) is None:
            settings.append(OxmlElement("w:trackRevisions"))

    @staticmethod
    def _text_run(text: str, tag: str = "w:t"):
        r = OxmlElement("w:r")
        t = OxmlElement(tag)
        t.set(qn("xml:space"), "preserve")
        t.text = text
        r.append(t)
        return r

    def _revision(self, tag: str):
        element = OxmlElement(tag)
        element.set(qn("w:id"), str(self.next_rev_id()))
        element.set(qn("w:author"), self.author)
        element.set(qn("w:date"), self.date)
        return element

    def append_plain_run(self, paragraph, text: str) -> None:
        if text:
            paragraph._p.append(self._text_run(text))

    def add_tracked_insertion(self, paragraph, text: str) -> None:
        if not text:
            return
        ins = self._revision("w:ins")
        ins.append(self._text_run(text))
        paragraph._p.append(ins)

    def add_tracked_deletion(self, paragraph, text: str) -> None:
        if not text:
            return
        delete = self._revision("w:del")
        delete.append(self._text_run(text, tag="w:delText"))
        paragraph._p.append(delete)

    def apply_segments(self, paragraph, segments: Sequence[DiffSegment]) -> None:
        for segment in segments:
            if segment.kind == "delete":
                self.add_tracked_deletion(paragraph, segment.text)
            elif segment.kind == "insert":
                self.add_tracked_insertion(paragraph, segment.text)
            else:
                self.append_plain_run(paragraph, segment.text)

    @staticmethod
    def split_lines(segments: Sequence[DiffSegment]) -> List[List[DiffSegment]]:
        """
        Break the stream into paragraphs at newlines. Only whitespace
        segments can carry a newline.
        """
        lines: List[List[DiffSegment]] = [[]]
        for segment in segments:
            if segment.token_kind != "whitespace" or "\n" not in segment.text:
                lines[-1].append(segment)
                continue

            pieces = segment.text.split("\n")
            for i, piece in enumerate(pieces):
                if i > 0:
                    lines.append([])
                piece = piece.rstrip("\r")
                if piece:
                    lines[-1].append(DiffSegment(kind=segment.kind, token_kind="whitespace", text=piece))
        return lines

    def build_document(
        self,
        output_path: str | Path,
        segments: Sequence[DiffSegment],
        heading: Optional[str] = None,
    ) -> Path:
        self.reset_rev_ids()

        out_doc = Document()
        self.enable_track_revisions(out_doc)

        if heading:
            out_doc.add_heading(heading, level=1)

        for line in self.split_lines(segments):
            self.apply_segments(out_doc.add_paragraph(), line)

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        out_doc.save(str(path))
        return path
