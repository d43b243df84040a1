"""Canonical forms for free-text ingredient names.

- normalize(): lower-case, punctuation stripped, whitespace collapsed
- tokenize(): identity-bearing tokens, core ingredient words first
- raw_tokens(): every meaningful token, descriptive words included
"""

import re

from wasteless.matching.vocabulary import CORE_INGREDIENT_WORDS, STOP_WORDS


_PUNCTUATION = re.compile(r"[.,;:!?'\"()]")
_WHITESPACE = re.compile(r"\s+")
_NUMERIC = re.compile(r"^\d+$")


def normalize(text: str) -> str:
    """Return the canonical comparison form of an ingredient name.

    Args:
        text: Any ingredient text, possibly empty.

    Returns:
        Lower-case text without punctuation and with single spaces.
    """
    if not text:
        return ""
    cleaned = _PUNCTUATION.sub("", text.lower())
    return _WHITESPACE.sub(" ", cleaned).strip()


def raw_tokens(text: str) -> list[str]:
    """Tokens longer than two characters that are not plain numbers.

    Keeps descriptive words such as "flavored", which the rejection gate needs.
    """
    return [
        word
        for word in normalize(text).split(" ")
        if len(word) > 2 and not _NUMERIC.match(word)
    ]


def tokenize(text: str) -> list[str]:
    """Return the core tokens of an ingredient name.

    Stop words are dropped and core ingredient words are moved to the front.
    The sort is stable, so words keep their relative order otherwise.

    Args:
        text: Any ingredient text, possibly empty.

    Returns:
        Ordered list of tokens; empty for empty input.
    """
    words = [word for word in raw_tokens(text) if word not in STOP_WORDS]
    return sorted(words, key=lambda word: 0 if word in CORE_INGREDIENT_WORDS else 1)
