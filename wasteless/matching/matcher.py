"""Graded matching between inventory ingredient names and recipe ingredient lines.

A pair of names is compared by these rules, in order:

1. Staples (water, ice) always match, type "common".
2. Rejection gate: a base ingredient never matches a product built around it
   ("butter" vs "flavored butter cookies"), nor a different oil ("olive oil" vs
   "sesame oil"), nor its own oil ("corn" vs "corn oil"), and a sweet pepper
   never matches the spice ("bell pepper" vs "black pepper").
3. Exact: identical normalized text, quality 1.0.
4. Synonym: both names belong to one curated synonym group, or name
   interchangeable oils ("canola oil" vs "rapeseed oil"), quality 0.86-0.92.
5. Partial: compatible food categories and a weighted core-word overlap of at
   least 0.75, quality 0.72-0.76.

Every rule is symmetric in its two arguments, so the pairwise result is memoized
per process. find_best_match() evaluates all candidates and keeps the best one.
"""

import logging
from functools import lru_cache
from typing import Callable, Iterable, Optional

from wasteless.matching.normalizer import normalize, raw_tokens, tokenize
from wasteless.matching.vocabulary import (
    AVOID_PAIRS,
    BASE_INGREDIENTS,
    COMMON_INGREDIENTS,
    COMPATIBLE_CATEGORY_PAIRS,
    COMPOUND_INDICATORS,
    CORE_INGREDIENT_WORDS,
    FOOD_CATEGORIES,
    OIL_EQUIVALENTS,
    OIL_TYPES,
    PEPPER_WORDS,
    SPICE_PEPPER_WORDS,
    SWEET_PEPPER_WORDS,
    SYNONYMS,
)
from wasteless.models.models import IngredientMatch
from wasteless.utils.config import config
from wasteless.utils.logger import logger as default_logger


# Minimum quality for an ingredient to count as present in a recipe
EDGE_QUALITY_THRESHOLD = 0.70
# Minimum core-word overlap for a partial match
PARTIAL_OVERLAP_FLOOR = 0.75

SYNONYM_PHRASE_QUALITY = 0.92
SYNONYM_BASE_QUALITY = 0.86
SYNONYM_CONFIDENCE = 0.9

# Preference among equal-quality candidates
_TYPE_RANK = {"exact": 4, "synonym": 3, "partial": 2, "common": 1, "none": 0}

MatchOutcome = tuple[float, str, float]
_NO_OUTCOME: MatchOutcome = (0.0, "none", 0.0)


class _SynonymGroup:
    """Token view of one SYNONYMS entry."""

    def __init__(self, base: str, phrases: Iterable[str]) -> None:
        self.base = base
        self.base_tokens = frozenset(tokenize(base))
        # Phrases that only add descriptive words ("fresh garlic") say nothing new
        self.phrase_tokens = [
            tokens
            for tokens in (frozenset(tokenize(phrase)) for phrase in phrases)
            if tokens and tokens != self.base_tokens
        ]
        self.vocabulary = self.base_tokens.union(*self.phrase_tokens)


_SYNONYM_GROUPS = [_SynonymGroup(base, phrases) for base, phrases in SYNONYMS.items()]

# normalized listed phrase -> bases of the groups that list it
_LISTED_SYNONYMS: dict[str, set[str]] = {}
for _base, _phrases in SYNONYMS.items():
    for _phrase in (_base, *_phrases):
        _LISTED_SYNONYMS.setdefault(normalize(_phrase), set()).add(_base)


def is_common_ingredient(name: str) -> bool:
    """Check whether a name is one of the always-available staples."""
    return normalize(name) in COMMON_INGREDIENTS


def infer_category(name: str) -> Optional[str]:
    """Return the food category of a name, or None when it cannot be told.

    The most specific listed item wins, so "black pepper" is a seasoning while
    "bell pepper" is a vegetable.
    """
    tokens = set(raw_tokens(name))
    category, specificity = None, 0
    for candidate, items in FOOD_CATEGORIES.items():
        for item in items:
            words = item.split(" ")
            if len(words) > specificity and set(words) <= tokens:
                category, specificity = candidate, len(words)
    return category


def categories_compatible(first: str, second: str) -> bool:
    """Whether two names may partially match given their food categories.

    Unknown categories are always compatible.
    """
    category_a = infer_category(first)
    category_b = infer_category(second)
    if category_a is None or category_b is None:
        return True
    if category_a == category_b:
        return True
    return frozenset({category_a, category_b}) in COMPATIBLE_CATEGORY_PAIRS


def _compound_mismatch(words_a: set[str], words_b: set[str]) -> bool:
    for base in words_a & words_b & BASE_INGREDIENTS:
        extra_a = {w for w in words_a - words_b if w in COMPOUND_INDICATORS and w != base}
        extra_b = {w for w in words_b - words_a if w in COMPOUND_INDICATORS and w != base}
        if extra_a or extra_b:
            return True

    for base, avoid in AVOID_PAIRS.items():
        if base in words_a and avoid & (words_b - words_a):
            return True
        if base in words_b and avoid & (words_a - words_b):
            return True
    return False


def _oil_mismatch(words_a: set[str], words_b: set[str]) -> bool:
    if "oil" not in words_a and "oil" not in words_b:
        return False

    types_a = words_a.intersection(OIL_TYPES)
    types_b = words_b.intersection(OIL_TYPES)

    # "corn" and "corn oil" are different purchases
    if ("oil" in words_a) != ("oil" in words_b) and types_a & types_b:
        return True

    if not types_a or not types_b or types_a & types_b:
        return False
    return not any(
        frozenset({type_a, type_b}) in OIL_EQUIVALENTS
        for type_a in types_a
        for type_b in types_b
    )


def _equivalent_oils(words_a: set[str], words_b: set[str]) -> bool:
    if "oil" not in words_a or "oil" not in words_b:
        return False
    return any(
        frozenset({type_a, type_b}) in OIL_EQUIVALENTS
        for type_a in words_a.intersection(OIL_TYPES)
        for type_b in words_b.intersection(OIL_TYPES)
    )


def _pepper_mismatch(words_a: set[str], words_b: set[str]) -> bool:
    if not (words_a & PEPPER_WORDS and words_b & PEPPER_WORDS):
        return False
    return bool(
        (words_a & SWEET_PEPPER_WORDS and words_b & SPICE_PEPPER_WORDS)
        or (words_a & SPICE_PEPPER_WORDS and words_b & SWEET_PEPPER_WORDS)
    )


def is_rejected_pair(first: str, second: str) -> bool:
    """Rejection gate: True when two names must never match.

    Looks at raw tokens so descriptive modifiers such as "flavored" or "black" count.
    """
    words_a = set(raw_tokens(first))
    words_b = set(raw_tokens(second))
    return (
        _compound_mismatch(words_a, words_b)
        or _oil_mismatch(words_a, words_b)
        or _pepper_mismatch(words_a, words_b)
    )


def _listed_as_synonyms(normalized_a: str, normalized_b: str) -> bool:
    groups_a = _LISTED_SYNONYMS.get(normalized_a)
    groups_b = _LISTED_SYNONYMS.get(normalized_b)
    return bool(groups_a and groups_b and groups_a & groups_b)


def synonym_quality(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> float:
    """Quality of the best synonym-group match between two token sets, 0.0 if none.

    A side belongs to a group when it holds the base word or a full synonym
    phrase and adds no compound-food word on top. At least one side must hold
    the base word.
    """
    set_a, set_b = set(tokens_a), set(tokens_b)
    best = 0.0
    for group in _SYNONYM_GROUPS:
        if not group.base_tokens:
            continue
        sides = []
        for tokens in (set_a, set_b):
            has_base = group.base_tokens <= tokens
            has_phrase = any(phrase <= tokens for phrase in group.phrase_tokens)
            adds_compound = bool((tokens - group.vocabulary) & COMPOUND_INDICATORS)
            sides.append((has_base and not adds_compound, has_phrase and not adds_compound))

        (a_base, a_phrase), (b_base, b_phrase) = sides
        if (a_base and (b_base or b_phrase)) or (b_base and a_phrase):
            quality = SYNONYM_PHRASE_QUALITY if (a_phrase or b_phrase) else SYNONYM_BASE_QUALITY
            best = max(best, quality)
    return best


def _directional_overlap(source: list[str], target: list[str]) -> float:
    total = 0.0
    possible = 0.0
    for word in source:
        importance = 2.0 if word in CORE_INGREDIENT_WORDS else 1.0
        possible += importance
        best = 0.0
        for other in target:
            if word == other:
                best = importance
                break
            if len(word) >= 4 and len(other) >= 4:
                shorter, longer = sorted((word, other), key=len)
                if shorter in longer and len(shorter) >= len(longer) * 0.8:
                    best = max(best, importance * 0.8)
        total += best
    return total / possible if possible else 0.0


def core_word_overlap(tokens_a: list[str], tokens_b: list[str]) -> float:
    """Weighted token overlap in [0, 1], averaged over both directions."""
    if not tokens_a or not tokens_b:
        return 0.0
    return (_directional_overlap(tokens_a, tokens_b) + _directional_overlap(tokens_b, tokens_a)) / 2


def match_pair(first: str, second: str) -> MatchOutcome:
    """Compare two ingredient names (staple rule excluded).

    Returns:
        Tuple of (quality, match_type, confidence); quality 0.0 means no match.
    """
    normalized_a = normalize(first)
    normalized_b = normalize(second)
    if not normalized_a or not normalized_b:
        return _NO_OUTCOME

    if normalized_a == normalized_b:
        return 1.0, "exact", 1.0

    if _listed_as_synonyms(normalized_a, normalized_b):
        return SYNONYM_PHRASE_QUALITY, "synonym", SYNONYM_CONFIDENCE

    if is_rejected_pair(first, second):
        return _NO_OUTCOME

    tokens_a = tokenize(first)
    tokens_b = tokenize(second)

    quality = synonym_quality(tokens_a, tokens_b)
    if quality > 0:
        return quality, "synonym", SYNONYM_CONFIDENCE

    if _equivalent_oils(set(raw_tokens(first)), set(raw_tokens(second))):
        return SYNONYM_BASE_QUALITY, "synonym", SYNONYM_CONFIDENCE

    if not categories_compatible(first, second):
        return _NO_OUTCOME

    overlap = core_word_overlap(tokens_a, tokens_b)
    if overlap >= PARTIAL_OVERLAP_FLOOR:
        # Maps [0.75, 1.0] onto [0.72, 0.76]
        return 0.72 + (overlap - PARTIAL_OVERLAP_FLOOR) * 0.16, "partial", overlap
    return _NO_OUTCOME


class IngredientMatcher:
    """Finds the recipe line an inventory ingredient stands for.

    Args:
        logger: Logger for match decisions. Defaults to the package logger.
        cache_size: Size of the pairwise memo; 0 disables it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, cache_size: Optional[int] = None) -> None:
        self.logger = logger or default_logger
        size = config.MATCH_CACHE_SIZE if cache_size is None else cache_size
        self._compare: Callable[[str, str], MatchOutcome] = lru_cache(maxsize=size)(match_pair) if size else match_pair

    def compare(self, first: str, second: str) -> MatchOutcome:
        """Symmetric pairwise comparison, memoized."""
        # Canonical argument order so (a, b) and (b, a) share a cache entry
        if second < first:
            first, second = second, first
        return self._compare(first, second)

    def find_best_match(
        self,
        inventory_name: str,
        candidates: Iterable[str],
        allow_common: bool = True,
    ) -> IngredientMatch:
        """Return the best acceptable match for a name among candidate lines.

        All candidates are evaluated. Higher quality wins; equal quality prefers
        exact, then synonym, partial, common; remaining ties keep the first.

        Args:
            inventory_name: Name of the inventory item.
            candidates: Recipe ingredient lines (duplicates are ignored).
            allow_common: Apply the staple rule to candidates.

        Returns:
            IngredientMatch; ``match_type == "none"`` when nothing is acceptable.
        """
        best = IngredientMatch.no_match()
        best_rank = (0.0, 0)

        for candidate in dict.fromkeys(candidates):
            if allow_common and is_common_ingredient(candidate):
                quality, match_type, confidence = 1.0, "common", 1.0
            else:
                quality, match_type, confidence = self.compare(inventory_name, candidate)

            if quality <= 0:
                continue
            rank = (quality, _TYPE_RANK[match_type])
            if rank > best_rank:
                best_rank = rank
                best = IngredientMatch(
                    matched_name=candidate,
                    quality=round(quality, 4),
                    match_type=match_type,
                    confidence=round(confidence, 4),
                )

        if best.matched_name is not None:
            self.logger.debug(
                f"Matched '{inventory_name}' -> '{best.matched_name}' "
                f"({best.match_type}, quality {best.quality:.2f})"
            )
        else:
            self.logger.debug(f"No match for '{inventory_name}'")
        return best


default_matcher = IngredientMatcher()


def find_best_match(inventory_name: str, candidates: Iterable[str]) -> IngredientMatch:
    """Module-level shortcut using the shared, memoized matcher."""
    return default_matcher.find_best_match(inventory_name, candidates)
