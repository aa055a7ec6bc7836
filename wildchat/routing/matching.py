"""Keyword matching primitive shared by the classifier and the navigator."""

from __future__ import annotations


def _is_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def _matches_bounded(text_lower: str, keyword_lower: str) -> bool:
    span = len(keyword_lower)
    index = text_lower.find(keyword_lower)
    while index != -1:
        before = text_lower[index - 1] if index > 0 else " "
        end = index + span
        after = text_lower[end] if end < len(text_lower) else " "
        if not _is_letter(before) and not _is_letter(after):
            return True
        index = text_lower.find(keyword_lower, index + 1)
    return False


def matches_whole_word(text: str, keyword: str) -> bool:
    """Return ``True`` when ``keyword`` occurs in ``text`` as a whole word.

    Single-word keywords must be bounded by non-letters (or the string edges)
    on both sides. Every occurrence is inspected, so ``"this is hi"`` still
    matches ``"hi"`` although the first occurrence sits inside ``"this"``.
    Keywords containing a space are phrases and match by plain containment.
    Comparison is case-insensitive; only ASCII letters count as word
    characters.
    """

    if not text or not keyword:
        return False

    text_lower = text.lower()
    keyword_lower = keyword.lower()
    if " " in keyword_lower:
        return keyword_lower in text_lower
    return _matches_bounded(text_lower, keyword_lower)


__all__ = ["matches_whole_word"]
