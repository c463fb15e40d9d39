"""
Data structures shared across the rankings pipeline.

- RankingRecord: one ranked player read from the rankings page
- MatchRow: the outcome of looking up one input name
- RankingsResult: the rows for a whole lookup, ready to serialize

All of them are built once per request and never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class RankingRecord:
    """
    One ranked player.

    The name keeps the spelling used on the rankings page so it can be
    displayed as-is; matching always goes through normalize_name().
    """
    name: str
    rating: float

    def __repr__(self) -> str:
        return f"<RankingRecord(name='{self.name}', rating={self.rating})>"


@dataclass(frozen=True)
class MatchRow:
    """
    Result of resolving one input name.

    Attributes:
        original: The name exactly as the user typed it
        player: Display name of the matched player (the input when unmatched)
        rating: Matched player's rating, None when unmatched
        sort_index: 1-based rank among matched rows, "" when unmatched
        match_type: 'exact', 'fuzzy', 'last_name', 'fuzzy_low', or None
        confidence: Similarity score (0-100) behind the match, None when unmatched
    """
    original: str
    player: str
    rating: Optional[float] = None
    sort_index: Union[int, str] = ""
    match_type: Optional[str] = None
    confidence: Optional[int] = None

    @property
    def is_matched(self) -> bool:
        return self.rating is not None

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "player": self.player,
            "rating": self.rating,
            "sortIndex": self.sort_index,
            "matchType": self.match_type,
        }

    def __repr__(self) -> str:
        return (
            f"<MatchRow({self.sort_index or '-'}: '{self.original}' -> "
            f"'{self.player}', rating={self.rating}, type={self.match_type})>"
        )


@dataclass(frozen=True)
class RankingsResult:
    """All rows for one lookup, in display order."""
    mode: str
    rows: tuple[MatchRow, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "rows": [row.to_dict() for row in self.rows],
        }
