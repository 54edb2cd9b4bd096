from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from docx import Document

from docx_tools.track_changes_editor import TrackChangesEditor
from textdiff.diff_types import DiffSegment


def _seg(kind: str, token_kind: str, text: str) -> DiffSegment:
    return DiffSegment(kind=kind, token_kind=token_kind, text=text)


class TrackChangesEditorRuntimeTests(unittest.TestCase):
    def test_revision_id_increment_and_reset(self) -> None:
        editor = TrackChangesEditor(author="A", date="2024-01-01T00:00:00Z")
        self.assertEqual(editor.next_rev_id(), 1)
        self.assertEqual(editor.next_rev_id(), 2)
        editor.reset_rev_ids()
        self.assertEqual(editor.next_rev_id(), 1)

    def test_date_defaults_to_now(self) -> None:
        editor = TrackChangesEditor(author="A")
        self.assertRegex(editor.date, r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")

    def test_enable_track_revisions_inserts_once(self) -> None:
        doc = Document()
        TrackChangesEditor.enable_track_revisions(doc)
        TrackChangesEditor.enable_track_revisions(doc)
        xml = doc.settings._element.xml
        self.assertEqual(xml.count("w:trackRevisions"), 1)

    def test_apply_segments_emits_insert_and_delete_markup(self) -> None:
        editor = TrackChangesEditor(author="Reviewer", date="2024-01-01T00:00:00Z")
        doc = Document()
        p = doc.add_paragraph()

        editor.apply_segments(
            p,
            [
                _seg("delete", "word", "old"),
                _seg("insert", "word", "new"),
                _seg("equal", "whitespace", " "),
                _seg("equal", "word", "value"),
            ],
        )

        xml = p._p.xml
        self.assertEqual(xml.count("<w:ins "), 1)
        self.assertEqual(xml.count("<w:del "), 1)
        self.assertIn("<w:delText", xml)
        self.assertIn("old", xml)
        self.assertIn("new", xml)
        self.assertIn("value", xml)
        self.assertIn('w:author="Reviewer"', xml)

    def test_empty_segments_add_nothing(self) -> None:
        editor = TrackChangesEditor(author="A", date="2024-01-01T00:00:00Z")
        doc = Document()
        p = doc.add_paragraph()
        editor.apply_segments(p, [_seg("insert", "word", ""), _seg("delete", "word", "")])
        self.assertNotIn("w:ins", p._p.xml)
        self.assertNotIn("w:del", p._p.xml)
        self.assertEqual(editor.next_rev_id(), 1)

    def test_split_lines_breaks_on_newlines_in_whitespace(self) -> None:
        lines = TrackChangesEditor.split_lines(
            [
                _seg("equal", "word", "one"),
                _seg("insert", "whitespace", " \n"),
                _seg("equal", "word", "two"),
                _seg("equal", "whitespace", "\r\n\n"),
                _seg("equal", "word", "three"),
            ]
        )
        self.assertEqual(
            lines,
            [
                [_seg("equal", "word", "one"), _seg("insert", "whitespace", " ")],
                [_seg("equal", "word", "two")],
                [],
                [_seg("equal", "word", "three")],
            ],
        )

    def test_split_lines_of_empty_stream(self) -> None:
        self.assertEqual(TrackChangesEditor.split_lines([]), [[]])

    def test_build_document_writes_tracked_paragraphs(self) -> None:
        editor = TrackChangesEditor(author="A", date="2024-01-01T00:00:00Z")
        with tempfile.TemporaryDirectory() as tmpdir:
            out = Path(tmpdir) / "nested" / "diff.docx"
            written = editor.build_document(
                output_path=str(out),
                segments=[
                    _seg("equal", "word", "Keep"),
                    _seg("equal", "whitespace", " "),
                    _seg("delete", "word", "old"),
                    _seg("insert", "word", "new"),
                    _seg("equal", "whitespace", "\n"),
                    _seg("equal", "word", "line"),
                ],
                heading="Changes",
            )

            self.assertEqual(written, out)
            self.assertTrue(out.exists())
            doc = Document(str(out))
            self.assertEqual(len(doc.paragraphs), 3)
            self.assertEqual(doc.paragraphs[0].text, "Changes")
            body_xml = doc.paragraphs[1]._p.xml
            self.assertIn("w:ins", body_xml)
            self.assertIn("w:del", body_xml)
            self.assertIn("line", doc.paragraphs[2]._p.xml)
            self.assertIsNotNone(
                doc.settings._element.find(
                    "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}trackRevisions"
                )
            )


if __name__ == "__main__":
    unittest.main()
