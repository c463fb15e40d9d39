"""
Parsers for scraped rankings pages.

This module contains:
- Table extraction (markdown and HTML rankings tables)
- Rating cell parsing
"""

from dinkrank.scrape.parsers.table import (
    HtmlTableStrategy,
    MarkdownTableStrategy,
    RankingRecord,
    TableStrategy,
    extract_rankings,
    parse_rating,
)

__all__ = [
    "HtmlTableStrategy",
    "MarkdownTableStrategy",
    "RankingRecord",
    "TableStrategy",
    "extract_rankings",
    "parse_rating",
]
