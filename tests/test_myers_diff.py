from __future__ import annotations

import unittest

from textdiff.diff_types import Operation
from textdiff.myers_diff import diff, edit_distance
from textdiff.tokenizer import tokenize


def _kinds(ops: list[Operation]) -> list[str]:
    return [op.kind for op in ops]


def _side(ops: list[Operation], skip: str) -> list:
    return [op.item for op in ops if op.kind != skip]


class MyersDiffTests(unittest.TestCase):
    def test_empty_original_is_all_insert(self) -> None:
        self.assertEqual(
            diff("", "ab"),
            [Operation(kind="insert", item="a"), Operation(kind="insert", item="b")],
        )

    def test_empty_updated_is_all_delete(self) -> None:
        self.assertEqual(_kinds(diff("ab", "")), ["delete", "delete"])

    def test_both_empty(self) -> None:
        self.assertEqual(diff("", ""), [])

    def test_identical_sequences_are_all_equal(self) -> None:
        self.assertEqual(_kinds(diff(list("abc"), list("abc"))), ["equal"] * 3)

    def test_replacement_puts_delete_before_insert(self) -> None:
        self.assertEqual(
            diff(["old"], ["new"]),
            [Operation(kind="delete", item="old"), Operation(kind="insert", item="new")],
        )

    def test_repeated_token_deletes_second_occurrence(self) -> None:
        ops = diff(tokenize("A A B"), tokenize("A B"))
        self.assertEqual(
            [(op.kind, op.item.text) for op in ops],
            [("equal", "A"), ("equal", " "), ("delete", "A"), ("delete", " "), ("equal", "B")],
        )

    def test_repeated_characters_tie_break(self) -> None:
        self.assertEqual(_kinds(diff("aaaa", "aa")), ["equal", "equal", "delete", "delete"])
        self.assertEqual(diff("aaaa", "aa"), diff("aaaa", "aa"))

    def test_script_is_minimal(self) -> None:
        # Classic example from Myers' paper: D = 5.
        self.assertEqual(edit_distance(diff("abcabba", "cbabac")), 5)

    def test_script_reconstructs_both_sides(self) -> None:
        pairs = [
            ("abcabba", "cbabac"),
            ("kitten", "sitting"),
            ("", "xyz"),
            ("same", "same"),
            ("aaaa", "aa"),
            ("abc", "xyz"),
        ]
        for original, updated in pairs:
            with self.subTest(original=original, updated=updated):
                ops = diff(original, updated)
                self.assertEqual("".join(_side(ops, "insert")), original)
                self.assertEqual("".join(_side(ops, "delete")), updated)


if __name__ == "__main__":
    unittest.main()
