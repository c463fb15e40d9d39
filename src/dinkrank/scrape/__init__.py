"""
Rankings page retrieval and parsing.

- source: fetches the singles/doubles rankings page
- parsers: turns the page into ranked (name, rating) records
"""

from dinkrank.scrape.parsers.table import RankingRecord, extract_rankings
from dinkrank.scrape.source import RankingsSource, normalize_mode

__all__ = [
    "RankingRecord",
    "RankingsSource",
    "extract_rankings",
    "normalize_mode",
]
