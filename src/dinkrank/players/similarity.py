"""
Similarity scoring for normalized player names.

Both scores are integers from 0 (nothing in common) to 100 (identical):

- ratio: Levenshtein edit distance scaled by the longer string's length.
  Good for typos ("castilo" vs "castillo").
- token_set_ratio: compares the sets of words in each name, so extra
  middle names and reordered words still score highly
  ("maria lopez" vs "maria elena lopez").

Inputs are expected to be normalized with normalize_name() first.
"""

import math

from rapidfuzz.distance import Levenshtein


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def ratio(a: str, b: str) -> int:
    """
    Edit-distance similarity of two strings.

    Insertions, deletions and substitutions all cost 1. Two empty strings
    are identical (100); an empty string against a non-empty one scores 0.

    Examples:
        >>> ratio("castillo", "castillo")
        100
        >>> ratio("castilo", "castillo")
        88
    """
    distance = Levenshtein.distance(a, b)
    longest = max(len(a), len(b), 1)
    return _round_half_up((1 - distance / longest) * 100)


def token_set_ratio(a: str, b: str) -> int:
    """
    Word-set similarity of two strings.

    Each string is reduced to its sorted set of unique words. The score is
    the best of:
    1. the shared words against the whole of ``a``
    2. the shared words against the whole of ``b``
    3. both sorted word sets against each other

    Sorting makes the result independent of word order, so the function is
    symmetric: token_set_ratio(a, b) == token_set_ratio(b, a).

    Examples:
        >>> token_set_ratio("castillo francisco", "francisco castillo")
        100
        >>> token_set_ratio("francsco castilo", "francisco castillo")
        89
    """
    tokens_a = sorted(set(a.split()))
    tokens_b = sorted(set(b.split()))
    shared = set(tokens_b)
    common = " ".join(token for token in tokens_a if token in shared)

    return max(
        ratio(common, a),
        ratio(common, b),
        ratio(" ".join(tokens_a), " ".join(tokens_b)),
    )
