from __future__ import annotations

from typing import Iterable, List

from ecoblocks.constants import KEYWORD_BONUS, MIN_TOKEN_LENGTH, STOP_WORDS


def tokenize_answer(text: str) -> List[str]:
    """Lowercase whitespace tokens, minus short words and stop words."""
    return [
        token
        for token in text.lower().split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def _overlaps(token: str, keyword: str) -> bool:
    keyword = keyword.lower()
    return token in keyword or keyword in token


def score_answer(text: str, available_keywords: Iterable[str], canonical_answer: str) -> int:
    """Live points for a typed answer.

    Each kept token earns 1, plus a bonus when it overlaps an available
    keyword. A token found inside the canonical answer doubles the whole
    running total, so several matching tokens compound.
    """
    keywords = [keyword for keyword in available_keywords if keyword]
    canonical = canonical_answer.lower()
    total = 0
    for token in tokenize_answer(text):
        total += 1
        if any(_overlaps(token, keyword) for keyword in keywords):
            total += KEYWORD_BONUS
        if token in canonical:
            total *= 2
    return max(0, total)
