from __future__ import annotations

import unicodedata
from typing import Iterator

from textdiff.diff_types import Token, TokenKind

_ZWJ = "\u200d"
_ZWNJ = "\u200c"
_PROLONGED_SOUND_MARKS = frozenset({"\u30fc", "\uff70"})

# Characters that may sit between two alphanumeric runs of the same word ("don't", "snake_case").
_WORD_CONNECTORS = frozenset({"'", "\u2019", "_"})

# Blocks whose symbols render as emoji; each cluster becomes a word of its own.
_PICTOGRAPHIC_RANGES = (
    (0x2600, 0x27BF),
    (0x2B00, 0x2BFF),
    (0x1F000, 0x1FAFF),
)


def _is_mark(ch: str) -> bool:
    return unicodedata.category(ch).startswith("M")


def _is_regional_indicator(ch: str) -> bool:
    return 0x1F1E6 <= ord(ch) <= 0x1F1FF


def _is_pictographic(ch: str) -> bool:
    code = ord(ch)
    if not any(low <= code <= high for low, high in _PICTOGRAPHIC_RANGES):
        return False
    return unicodedata.category(ch) == "So"


def _script(ch: str) -> str | None:
    """
    Word class of an alphanumeric character, or None for anything else.
    Han and kana are told apart so that unspaced Japanese and Chinese
    text still breaks into words.
    """
    if not ch.isalnum():
        return None
    name = unicodedata.name(ch, "")
    if name.startswith(("CJK UNIFIED IDEOGRAPH", "CJK COMPATIBILITY IDEOGRAPH")) or ch == "\u3005":
        return "han"
    if name.startswith("HIRAGANA"):
        return "hiragana"
    if name.startswith(("KATAKANA", "HALFWIDTH KATAKANA")):
        return "katakana"
    return "letter"


def _extends_cluster(previous: str, ch: str) -> bool:
    code = ord(ch)
    if _is_mark(ch) or ch == _ZWJ:
        return True
    if 0xFE00 <= code <= 0xFE0F or 0x1F3FB <= code <= 0x1F3FF:
        return True
    if previous.endswith(_ZWJ):
        return True
    if previous == "\r" and ch == "\n":
        return True
    return len(previous) == 1 and _is_regional_indicator(previous) and _is_regional_indicator(ch)


def _cluster_end(text: str, start: int) -> int:
    end = start + 1
    while end < len(text) and _extends_cluster(text[start:end], text[end]):
        end += 1
    return end


def _continues_word(text: str, index: int, script: str) -> int:
    """
    Number of characters at `index` that still belong to a word of `script`,
    0 when the word ends before `index`.
    """
    ch = text[index]
    if _is_mark(ch) or ch in (_ZWJ, _ZWNJ):
        return 1
    if script == "han":
        return 0
    if _script(ch) == script:
        return 1
    if ch in _PROLONGED_SOUND_MARKS and script in ("hiragana", "katakana"):
        return 1
    if (
        script == "letter"
        and ch in _WORD_CONNECTORS
        and index + 1 < len(text)
        and _script(text[index + 1]) == "letter"
    ):
        return 2
    return 0


def _word_spans(text: str) -> Iterator[tuple[int, int]]:
    """
    Yield [start, end) spans of words.

    Alphanumeric runs of one script form a word, keeping combining marks and
    internal connectors inside it. Every Han ideograph is a word of its own,
    kana runs break where the script changes, and an emoji cluster is atomic.
    """
    index = 0
    length = len(text)
    while index < length:
        ch = text[index]
        if _is_pictographic(ch):
            end = _cluster_end(text, index)
            yield index, end
            index = end
            continue

        script = _script(ch)
        if script is None:
            index += 1
            continue

        start = index
        index += 1
        while index < length:
            step = _continues_word(text, index, script)
            if not step:
                break
            index += step
        yield start, index


def _gap_kind(ch: str) -> TokenKind:
    return "whitespace" if ch.isspace() else "punctuation"


def _append_gap_tokens(gap: str, tokens: list[Token]) -> None:
    if not gap:
        return

    start = 0
    current = _gap_kind(gap[0])
    for index in range(1, len(gap)):
        kind = _gap_kind(gap[index])
        if kind != current:
            tokens.append(Token(kind=current, text=gap[start:index]))
            start = index
            current = kind

    tokens.append(Token(kind=current, text=gap[start:]))


def tokenize(text: str) -> list[Token]:
    """
    Split text into word, punctuation and whitespace tokens.

    Joining the token texts gives back the input unchanged.
    """
    if not text:
        return []

    tokens: list[Token] = []
    cursor = 0
    for start, end in _word_spans(text):
        if cursor < start:
            _append_gap_tokens(text[cursor:start], tokens)
        tokens.append(Token(kind="word", text=text[start:end]))
        cursor = end

    if cursor < len(text):
        _append_gap_tokens(text[cursor:], tokens)

    return tokens


def split_characters(text: str) -> list[str]:
    """
    Split text into user-perceived characters: a base character together with
    its combining marks, variation selectors, skin-tone modifiers and
    zero-width-joiner continuations.
    """
    clusters: list[str] = []
    index = 0
    while index < len(text):
        end = _cluster_end(text, index)
        clusters.append(text[index:end])
        index = end
    return clusters
