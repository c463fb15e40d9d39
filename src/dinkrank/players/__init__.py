"""
Player name matching module.

This module handles matching the names users type to the players listed
on the rankings page.

Key components:
- normalize_name: Canonical form used for identity comparison
- ratio / token_set_ratio: Similarity scores (0-100)
- RankingResolver: Tiered matching and ranking of results

The matching strategy (in priority order):
1. Exact normalized name
2. High-confidence fuzzy match (>= 85)
3. Highest-rated player with the same last name
4. Low-confidence fuzzy match (>= 75)
"""

from dinkrank.players.aliases import extract_last_name, normalize_name, parse_name_list
from dinkrank.players.identity import MatchThresholds, PlayerMatch, RankingResolver, resolve
from dinkrank.players.similarity import ratio, token_set_ratio

__all__ = [
    "MatchThresholds",
    "PlayerMatch",
    "RankingResolver",
    "extract_last_name",
    "normalize_name",
    "parse_name_list",
    "ratio",
    "resolve",
    "token_set_ratio",
]
