"""
Rankings lookup service.

Ties the pipeline together for the web API and CLI:

    names + mode → fetch page → extract_rankings → RankingResolver → rows

Usage:
    from dinkrank.services.rankings import resolve_names

    result = resolve_names(["Francisco Castillo", "Big Show"], "doubles")
    for row in result.rows:
        print(row.sort_index, row.player, row.rating)
"""

import logging
from datetime import date
from typing import Optional, Protocol, Sequence, Union

from dinkrank.errors import InvalidRequest, RankingsError
from dinkrank.models import RankingsResult
from dinkrank.players.aliases import parse_name_list
from dinkrank.players.identity import MatchThresholds, RankingResolver
from dinkrank.scrape.parsers.table import extract_rankings
from dinkrank.scrape.source import RankingsSource, normalize_mode

logger = logging.getLogger(__name__)

UNMATCHED_LABEL = "No Ranking Found."


class DocumentSource(Protocol):
    """Anything that returns the rankings page text for a mode."""

    def fetch(self, mode: str) -> str:
        ...


def _coerce_names(names: Union[str, Sequence[str], None]) -> list[str]:
    # A single string is treated as a pasted list of names
    if names is None:
        return []
    if isinstance(names, str):
        return parse_name_list(names)
    return [name.strip() for name in names if name and name.strip()]


def resolve_names(
    names: Union[str, Sequence[str], None],
    mode: Optional[str] = "doubles",
    source: Optional[DocumentSource] = None,
    thresholds: Optional[MatchThresholds] = None,
) -> RankingsResult:
    """
    Look up names in the current singles or doubles rankings.

    Args:
        names: List of names, or a comma/pipe/newline separated string
        mode: 'singles' or 'doubles' (default)
        source: Where to fetch the rankings page from (defaults to HTTP)
        thresholds: Fuzzy matching thresholds (defaults to settings)

    Returns:
        RankingsResult with one row per input name

    Raises:
        InvalidRequest: If there are no names or the mode is unknown
        FetchFailed: If the rankings page can't be retrieved
        NoTableFound / UnrecognizedShape: If the page has no usable table
    """
    name_list = _coerce_names(names)
    if not name_list:
        raise InvalidRequest("NO_NAMES", "Provide at least one player name")
    mode = normalize_mode(mode)

    if source is None:
        with RankingsSource() as default_source:
            text = default_source.fetch(mode)
    else:
        text = source.fetch(mode)

    records = extract_rankings(text)
    rows = RankingResolver(records, thresholds).resolve(name_list)

    matched = sum(1 for row in rows if row.is_matched)
    logger.info(
        "Resolved %d/%d names against %d %s rankings",
        matched, len(rows), len(records), mode,
    )
    return RankingsResult(mode=mode, rows=tuple(rows))


def resolve_names_payload(
    names: Union[str, Sequence[str], None],
    mode: Optional[str] = "doubles",
    source: Optional[DocumentSource] = None,
) -> dict:
    """
    JSON-ready variant of resolve_names().

    Returns:
        {"mode": ..., "rows": [...]} on success, {"error": code} on failure
    """
    try:
        return resolve_names(names, mode, source).to_dict()
    except RankingsError as e:
        logger.warning("Rankings lookup failed (%s): %s", e.code, e.message)
        return {"error": e.code}


def render_markdown(result: RankingsResult, fetched_on: Optional[date] = None) -> str:
    """
    Render a lookup as a markdown table.

    Example output:
        Data fetched: 2025-06-01 • Mode: Doubles

        | Sort | Player | Doubles Rating |
        |---|---|---|
        | 1 | Francisco Castillo | 4.521 |
        |  | Nobody | No Ranking Found. |
    """
    fetched_on = fetched_on or date.today()
    mode_label = result.mode.capitalize()

    lines = [
        f"Data fetched: {fetched_on.isoformat()} • Mode: {mode_label}",
        "",
        f"| Sort | Player | {mode_label} Rating |",
        "|---|---|---|",
    ]
    for row in result.rows:
        rating = f"{row.rating:.3f}" if row.rating is not None else UNMATCHED_LABEL
        player = row.player.replace("|", "\\|")
        lines.append(f"| {row.sort_index} | {player} | {rating} |")

    return "\n".join(lines)
