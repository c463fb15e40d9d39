"""
Resolution of user-typed player names against the rankings.

This is where each input name is turned into a ranked player (or left
unmatched). Names typed by captains and organisers are messy: missing
accents, typos, nicknames for first names, extra middle names.

The matching strategy (in priority order, first success wins):
1. Exact normalized name - 100% reliable
2. High-confidence fuzzy (token-set score >= 85 by default)
3. Last name only - the highest-rated player sharing the surname
4. Low-confidence fuzzy (token-set score >= 75 by default)

Anything left over is reported as unmatched rather than guessed.

Matched rows are ranked by rating (highest first); unmatched rows follow
in input order without a rank.
"""

import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from dinkrank.config import settings
from dinkrank.models import MatchRow, RankingRecord
from dinkrank.players.aliases import extract_last_name, normalize_name
from dinkrank.players.similarity import token_set_ratio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchThresholds:
    """
    Acceptance thresholds for the fuzzy tiers.

    Build with from_settings(), passing only the values to change; the
    rest come from the configured settings.

    Attributes:
        fuzzy_high: Minimum token-set score for the high-confidence tier
        fuzzy_low: Minimum token-set score for the last-resort tier
        last_name_fallback: Whether the last-name tier runs at all
    """
    fuzzy_high: int
    fuzzy_low: int
    last_name_fallback: bool

    @classmethod
    def from_settings(cls, **overrides) -> "MatchThresholds":
        configured = cls(
            fuzzy_high=settings.fuzzy_high_threshold,
            fuzzy_low=settings.fuzzy_low_threshold,
            last_name_fallback=settings.last_name_fallback,
        )
        return replace(configured, **overrides)


@dataclass
class PlayerMatch:
    """
    Result of a player matching attempt.

    Returned by RankingResolver.match() to provide details about how
    the match was made.
    """
    record: RankingRecord
    confidence: int  # 0 to 100
    match_type: str  # 'exact', 'fuzzy', 'last_name', 'fuzzy_low'

    def __repr__(self) -> str:
        return f"<PlayerMatch(player='{self.record.name}', conf={self.confidence}, type='{self.match_type}')>"


class RankingResolver:
    """
    Matches names against one set of ranked players.

    The lookup indexes are built from the records passed in and live only
    as long as the resolver, so each rankings fetch gets a fresh resolver.

    Usage:
        resolver = RankingResolver(records)
        rows = resolver.resolve(["Francisco Castillo", "big show"])

        match = resolver.match("Francsco Castilo")
        if match:
            print(match.record.name, match.match_type)
    """

    def __init__(
        self,
        records: Iterable[RankingRecord],
        thresholds: Optional[MatchThresholds] = None,
    ):
        """
        Build the lookup indexes.

        Args:
            records: Deduplicated ranked players (see extract_rankings)
            thresholds: Fuzzy thresholds, defaults to the configured ones
        """
        self.records = tuple(records)
        self.thresholds = thresholds or MatchThresholds.from_settings()

        # Normalized form of every record, computed once per resolver
        self._normalized = tuple(
            (normalize_name(record.name), record) for record in self.records
        )

        self._by_name: dict[str, RankingRecord] = {}
        self._by_last_name: dict[str, list[RankingRecord]] = {}
        for normalized, record in self._normalized:
            if not normalized:
                continue
            self._by_name.setdefault(normalized, record)
            self._by_last_name.setdefault(normalized.split()[-1], []).append(record)

    # =========================================================================
    # Main Public Methods
    # =========================================================================

    def match(self, name: str) -> Optional[PlayerMatch]:
        """
        Find the ranked player for one input name.

        Args:
            name: Name as typed by the user

        Returns:
            PlayerMatch describing the winning tier, or None if unmatched.
            Names that normalize to nothing (e.g. "J. K.") never match.
        """
        normalized = normalize_name(name)
        if not normalized:
            return None

        # Tier 1: exact normalized name
        record = self._by_name.get(normalized)
        if record is not None:
            return PlayerMatch(record=record, confidence=100, match_type="exact")

        # Tier 2: high-confidence fuzzy
        best, best_score = self._best_fuzzy(normalized)
        if best is not None and best_score >= self.thresholds.fuzzy_high:
            return PlayerMatch(record=best, confidence=best_score, match_type="fuzzy")

        # Tier 3: same last name, highest rating
        if self.thresholds.last_name_fallback:
            record = self._best_by_last_name(normalized)
            if record is not None:
                return PlayerMatch(
                    record=record,
                    confidence=token_set_ratio(normalized, normalize_name(record.name)),
                    match_type="last_name",
                )

        # Tier 4: low-confidence fuzzy
        if best is not None and best_score >= self.thresholds.fuzzy_low:
            return PlayerMatch(record=best, confidence=best_score, match_type="fuzzy_low")

        return None

    def resolve(self, inputs: Sequence[str]) -> list[MatchRow]:
        """
        Resolve every input name and rank the results.

        Every input yields exactly one row. Matched rows come first,
        sorted by rating (highest first, input order on ties) and numbered
        from 1. Unmatched rows follow in input order with no rank.

        Args:
            inputs: Names as typed by the user

        Returns:
            One MatchRow per input
        """
        matched: list[tuple[str, PlayerMatch]] = []
        unmatched: list[MatchRow] = []

        for original in inputs:
            match = self.match(original)
            if match is None:
                unmatched.append(MatchRow(original=original, player=original))
            else:
                matched.append((original, match))

        # sort() is stable, so equal ratings keep input order
        matched.sort(key=lambda item: item[1].record.rating, reverse=True)

        ranked = [
            MatchRow(
                original=original,
                player=match.record.name,
                rating=match.record.rating,
                sort_index=index,
                match_type=match.match_type,
                confidence=match.confidence,
            )
            for index, (original, match) in enumerate(matched, start=1)
        ]

        tiers = Counter(match.match_type for _, match in matched)
        logger.debug(
            "Resolved %d names: %s, %d unmatched",
            len(inputs), dict(tiers), len(unmatched),
        )

        return ranked + unmatched

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _best_fuzzy(self, normalized: str) -> tuple[Optional[RankingRecord], int]:
        """
        Score every record and return the best one.

        The first record wins on equal scores. Records with a score of 0
        are never returned.
        """
        best = None
        best_score = 0
        for record_name, record in self._normalized:
            score = token_set_ratio(normalized, record_name)
            if score > best_score:
                best = record
                best_score = score
        return best, best_score

    def _best_by_last_name(self, normalized: str) -> Optional[RankingRecord]:
        """Highest-rated record sharing the input's last name (first on ties)."""
        candidates = self._by_last_name.get(extract_last_name(normalized), [])
        best = None
        for record in candidates:
            if best is None or record.rating > best.rating:
                best = record
        return best


def resolve(
    inputs: Sequence[str],
    records: Iterable[RankingRecord],
    thresholds: Optional[MatchThresholds] = None,
) -> list[MatchRow]:
    """
    Resolve input names against ranked players.

    Convenience wrapper building a one-off RankingResolver.

    Examples:
        >>> records = [RankingRecord("Francisco Castillo", 4.521), RankingRecord("Big Show", 3.9)]
        >>> [row.sort_index for row in resolve(["big show", "Nobody Here"], records)]
        [1, '']
    """
    return RankingResolver(records, thresholds).resolve(inputs)
