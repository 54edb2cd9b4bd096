from __future__ import annotations

import unittest

from config.diff_config import DiffConfig
from services.diff_service import DiffInputTooLargeError, DiffService
from textdiff.diff_types import DiffSegment


class _CountingProvider:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def __call__(self, original: str, updated: str, mode: str) -> list[DiffSegment]:
        self.calls.append((original, updated, mode))
        return [DiffSegment(kind="equal", token_kind="word", text=str(len(self.calls)))]


class DiffServiceCachingTests(unittest.TestCase):
    def test_compute_uses_configured_default_mode(self) -> None:
        provider = _CountingProvider()
        svc = DiffService(config=DiffConfig(mode="character", cache_size=0), diff_provider=provider)
        svc.compute("a", "b")
        self.assertEqual(provider.calls, [("a", "b", "character")])

    def test_compute_caches_by_inputs_and_mode(self) -> None:
        provider = _CountingProvider()
        svc = DiffService(config=DiffConfig(cache_size=4), diff_provider=provider)

        first = svc.compute("old", "new")
        second = svc.compute("old", "new")
        svc.compute("old", "new", "character")

        self.assertEqual(first, second)
        self.assertEqual(len(provider.calls), 2)

    def test_cache_is_bounded(self) -> None:
        provider = _CountingProvider()
        svc = DiffService(config=DiffConfig(cache_size=1), diff_provider=provider)

        svc.compute("a", "b")
        svc.compute("c", "d")
        svc.compute("a", "b")
        self.assertEqual(len(provider.calls), 3)

    def test_zero_cache_size_disables_caching(self) -> None:
        provider = _CountingProvider()
        svc = DiffService(config=DiffConfig(cache_size=0), diff_provider=provider)
        svc.compute("a", "b")
        svc.compute("a", "b")
        self.assertEqual(len(provider.calls), 2)

    def test_returned_list_is_a_copy(self) -> None:
        svc = DiffService(config=DiffConfig())
        segments = svc.compute("old", "new")
        segments.clear()
        self.assertEqual(len(svc.compute("old", "new")), 2)

    def test_rejects_oversized_input(self) -> None:
        svc = DiffService(config=DiffConfig(max_input_chars=3))
        with self.assertRaises(DiffInputTooLargeError):
            svc.compute("abcd", "a")
        with self.assertRaises(ValueError):
            svc.compute("a", "abcd")


class DiffServiceUpdateTests(unittest.TestCase):
    def _service(self) -> tuple[DiffService, _CountingProvider]:
        provider = _CountingProvider()
        svc = DiffService(config=DiffConfig(cache_size=0), diff_provider=provider)
        return svc, provider

    def test_first_update_computes(self) -> None:
        svc, provider = self._service()
        self.assertTrue(svc.update_if_needed("old", "new", "token"))
        self.assertEqual(len(provider.calls), 1)
        self.assertEqual(svc.segments, [DiffSegment(kind="equal", token_kind="word", text="1")])

    def test_identical_inputs_do_nothing(self) -> None:
        svc, provider = self._service()
        svc.update_if_needed("old", "new", "token")
        self.assertFalse(svc.update_if_needed("old", "new", "token"))
        self.assertEqual(len(provider.calls), 1)
        self.assertEqual(svc.segments[0].text, "1")

    def test_recomputes_when_any_input_changes(self) -> None:
        svc, provider = self._service()
        svc.update_if_needed("old", "new", "token")
        self.assertTrue(svc.update_if_needed("old-2", "new", "token"))
        self.assertTrue(svc.update_if_needed("old-2", "new-2", "token"))
        self.assertTrue(svc.update_if_needed("old-2", "new-2", "character"))
        self.assertEqual(len(provider.calls), 4)
        self.assertEqual(svc.segments[0].text, "4")

    def test_failed_compute_keeps_previous_state(self) -> None:
        provider = _CountingProvider()
        svc = DiffService(config=DiffConfig(max_input_chars=5, cache_size=0), diff_provider=provider)
        svc.update_if_needed("old", "new")
        with self.assertRaises(DiffInputTooLargeError):
            svc.update_if_needed("far too long", "new")
        self.assertEqual(svc.segments[0].text, "1")
        self.assertFalse(svc.update_if_needed("old", "new"))


class DiffServiceRevertTests(unittest.TestCase):
    def test_candidates_and_index(self) -> None:
        svc = DiffService(config=DiffConfig())
        found = svc.candidates("Hello world", "Hi world!")
        self.assertEqual([c.kind for c in found], ["paired_replacement", "single_insertion"])
        self.assertEqual(DiffService.candidate_index(found), {0: 0, 1: 0, 4: 1})

    def test_candidates_ignore_configured_character_mode_only_when_asked(self) -> None:
        svc = DiffService(config=DiffConfig(mode="character"))
        self.assertEqual(svc.candidates("old", "new"), [])
        self.assertEqual(len(svc.candidates("old", "new", "token")), 1)

    def test_revert_by_id(self) -> None:
        svc = DiffService(config=DiffConfig())
        result = svc.revert("Hello world", "Hi world!", 1)
        self.assertIsNotNone(result)
        self.assertEqual(result.resulting_updated, "Hi world")

    def test_revert_unknown_id_returns_none(self) -> None:
        svc = DiffService(config=DiffConfig())
        self.assertIsNone(svc.revert("Hello world", "Hi world!", 7))

    def test_revert_all_restores_original(self) -> None:
        svc = DiffService(config=DiffConfig())
        self.assertEqual(svc.revert_all("Hello world", "Hi world!"), "Hello world")
        self.assertEqual(svc.revert_all("Hello brave world", "Hello world"), "Hello brave world")

    def test_revert_all_without_changes_is_identity(self) -> None:
        svc = DiffService(config=DiffConfig())
        self.assertEqual(svc.revert_all("same", "same"), "same")


if __name__ == "__main__":
    unittest.main()
