"""
Rankings table extraction.

The rankings page is not a contract: depending on how it is fetched it
arrives as a markdown rendering (pipe tables) or as raw HTML, and the column
headers have changed over time ("Name", "Player", "Doubles Rating", "CIRP",
or nothing useful at all). Extraction therefore happens in two stages:

1. Find candidate tables with a TableStrategy. Markdown is tried first,
   then HTML.
2. For each candidate, work out which column holds the player name and
   which holds the rating (by header label, falling back to counting
   numeric cells), then read the rows.

The first candidate that produces at least one valid row wins. Rows are
deduplicated by normalized name, keeping each player's highest rating.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence

from bs4 import BeautifulSoup

from dinkrank.errors import NoTableFound, TableExtractionError, UnrecognizedShape
from dinkrank.models import RankingRecord
from dinkrank.players.aliases import normalize_name

logger = logging.getLogger(__name__)

# A markdown table is a header line, a separator line with a run of at
# least three dashes after a pipe, then any number of pipe-delimited lines
_PIPE_ROW_RE = re.compile(r"\|.*\|")
_SEPARATOR_RE = re.compile(r"\|\s*:?-{3,}")

# Header labels (case-insensitive substrings) identifying the columns
_RATING_LABEL_RE = re.compile(r"rating|doubles|singles|cirp")
_NAME_LABEL_RE = re.compile(r"name|player")

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


@dataclass
class CandidateTable:
    """A table-shaped region of the page, split into cells."""
    header: list[str]
    rows: list[list[str]] = field(default_factory=list)
    shape: str = "markdown"

    @property
    def column_count(self) -> int:
        return max([len(self.header)] + [len(row) for row in self.rows])

    def cell(self, row: list[str], index: int) -> str:
        if index < len(row):
            return row[index].strip()
        return ""


def parse_rating(raw: Optional[str]) -> Optional[float]:
    """
    Parse a rating cell.

    Everything except digits and dots is stripped ("4.521 *" → 4.521,
    "CIRP: 3.9" → 3.9), then the leading decimal number is read.

    Returns:
        The rating, or None when the cell holds no finite number
    """
    cleaned = _NON_NUMERIC_RE.sub("", raw or "")
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value


def _find_label(header: list[str], pattern: re.Pattern, exclude: Optional[int] = None) -> Optional[int]:
    for index, label in enumerate(header):
        if index != exclude and pattern.search(label.lower()):
            return index
    return None


def numeric_cell_counts(table: CandidateTable) -> list[int]:
    """Count, per column, the body cells that parse as a rating."""
    counts = [0] * table.column_count
    for row in table.rows:
        for index in range(len(counts)):
            if parse_rating(table.cell(row, index)) is not None:
                counts[index] += 1
    return counts


def is_rank_column(table: CandidateTable, index: int) -> bool:
    """
    Whether a column looks like a rank: whole numbers that never decrease.

    Ratings are decimals listed best first, so they fail this test; a
    "1, 2, 2, 4" position column passes it. Columns with fewer than two
    numbers can't be told apart and are not treated as ranks.
    """
    values = []
    for row in table.rows:
        cell = table.cell(row, index)
        value = parse_rating(cell)
        if value is None:
            continue
        if "." in _NON_NUMERIC_RE.sub("", cell):
            return False
        values.append(value)
    if len(values) < 2:
        return False
    return all(a <= b for a, b in zip(values, values[1:]))


def infer_columns(table: CandidateTable) -> Optional[tuple[int, int]]:
    """
    Decide which columns hold the player name and the rating.

    Header labels are tried first: a rating/doubles/singles/cirp label for
    the rating, then a name/player label among the other columns. A column
    not found by label is inferred from content: the rating column has the
    most numeric cells, the name column the fewest. Ties go to the
    leftmost column. Rank-like columns only become the rating column when
    no other column holds numbers.

    Returns:
        (name_index, rating_index), or None if both resolve to the same column
    """
    rating_index = _find_label(table.header, _RATING_LABEL_RE)
    name_index = _find_label(table.header, _NAME_LABEL_RE, exclude=rating_index)

    if rating_index is None or name_index is None:
        counts = numeric_cell_counts(table)
        if not counts:
            return None
        if rating_index is None:
            candidates = [
                index for index, count in enumerate(counts)
                if count and not is_rank_column(table, index)
            ]
            if not candidates:
                candidates = list(range(len(counts)))
            rating_index = max(candidates, key=lambda index: counts[index])
        if name_index is None:
            name_index = counts.index(min(counts))

    if name_index == rating_index:
        return None
    return name_index, rating_index


def dedupe_records(records: Sequence[RankingRecord]) -> list[RankingRecord]:
    """
    Keep one record per normalized name, the one with the highest rating.

    On equal ratings the first record seen is kept. Output order follows
    the first appearance of each name.
    """
    best: dict[str, RankingRecord] = {}
    for record in records:
        key = normalize_name(record.name)
        previous = best.get(key)
        if previous is None or record.rating > previous.rating:
            best[key] = record
    return list(best.values())


def read_records(table: CandidateTable) -> list[RankingRecord]:
    """
    Read the valid (name, rating) rows of one candidate table.

    Rows with an empty name or an unparseable rating are skipped.

    Returns:
        Deduplicated records, empty if the columns can't be identified
    """
    columns = infer_columns(table)
    if columns is None:
        return []
    name_index, rating_index = columns

    records = []
    for row in table.rows:
        name = table.cell(row, name_index)
        rating = parse_rating(table.cell(row, rating_index))
        if not name or rating is None:
            continue
        records.append(RankingRecord(name=name, rating=rating))

    return dedupe_records(records)


class TableStrategy(ABC):
    """
    Finds candidate tables in one physical page format.

    Subclasses only locate and split tables; column inference and row
    reading are shared.
    """

    shape: str = "unknown"

    @abstractmethod
    def find_tables(self, text: str) -> list[CandidateTable]:
        """Return every table-shaped region of the text, in page order."""
        pass

    def try_extract(self, text: str) -> list[RankingRecord]:
        """
        Extract records from the first usable table in the text.

        Raises:
            NoTableFound: If this format has no table in the text
            UnrecognizedShape: If no table yields a valid record
        """
        tables = self.find_tables(text)
        if not tables:
            raise NoTableFound(f"No {self.shape} table found")

        for position, table in enumerate(tables, start=1):
            records = read_records(table)
            if records:
                logger.info(
                    "Extracted %d ranked players from %s table %d of %d",
                    len(records), self.shape, position, len(tables),
                )
                return records
            logger.debug("Skipping %s table %d: no name/rating rows", self.shape, position)

        raise UnrecognizedShape(
            f"Found {len(tables)} {self.shape} table(s) but none had name and rating columns"
        )


class MarkdownTableStrategy(TableStrategy):
    """
    Pipe-delimited markdown tables.

    Example:
        | # | Name               | Doubles Rating |
        |---|--------------------|----------------|
        | 1 | Francisco Castillo | 4.521          |
    """

    shape = "markdown"

    def find_tables(self, text: str) -> list[CandidateTable]:
        lines = text.splitlines()
        tables = []

        i = 0
        while i < len(lines) - 1:
            if _PIPE_ROW_RE.search(lines[i]) and _SEPARATOR_RE.search(lines[i + 1]):
                header = self._split_cells(lines[i])
                j = i + 2
                rows = []
                while j < len(lines) and _PIPE_ROW_RE.search(lines[j]):
                    rows.append(self._split_cells(lines[j]))
                    j += 1
                tables.append(CandidateTable(header=header, rows=rows, shape=self.shape))
                i = j
            else:
                i += 1

        return tables

    @staticmethod
    def _split_cells(line: str) -> list[str]:
        # Outer pipes delimit the row, they don't open an empty column
        stripped = line.strip()
        if stripped.startswith("|"):
            stripped = stripped[1:]
        if stripped.endswith("|"):
            stripped = stripped[:-1]
        return [cell.strip() for cell in stripped.split("|")]


class HtmlTableStrategy(TableStrategy):
    """
    HTML <table> elements.

    The first row is the header when it sits in <thead>, is made only of
    <th> cells, or has no numeric cell at all (labels written as <td>).
    Otherwise the table has no header and relies on content inference,
    which also covers rows led by a <th> row header such as the rank.
    """

    shape = "html"

    def find_tables(self, text: str) -> list[CandidateTable]:
        soup = BeautifulSoup(text, "html.parser")
        tables = []

        for table in soup.find_all("table"):
            header: list[str] = []
            rows = []
            for tr in table.find_all("tr"):
                tags = tr.find_all(["td", "th"])
                cells = [tag.get_text(" ", strip=True) for tag in tags]
                if not cells:
                    continue
                if not header and not rows and self._is_header_row(tr, tags, cells):
                    header = cells
                else:
                    rows.append(cells)
            if header or rows:
                tables.append(CandidateTable(header=header, rows=rows, shape=self.shape))

        return tables

    @staticmethod
    def _is_header_row(tr, tags, cells: list[str]) -> bool:
        if tr.find_parent("thead") is not None:
            return True
        if all(tag.name == "th" for tag in tags):
            return True
        return all(parse_rating(cell) is None for cell in cells)


DEFAULT_STRATEGIES: tuple[TableStrategy, ...] = (
    MarkdownTableStrategy(),
    HtmlTableStrategy(),
)


def extract_rankings(
    text: str,
    strategies: Sequence[TableStrategy] = DEFAULT_STRATEGIES,
) -> list[RankingRecord]:
    """
    Extract the ranked players from a rankings page.

    Each strategy is tried in order; the first one to produce records wins.
    No attempt is made to merge records across tables or strategies.

    Args:
        text: Complete page content (markdown or HTML)
        strategies: Table formats to try, in priority order

    Returns:
        Non-empty list of deduplicated RankingRecords

    Raises:
        NoTableFound: If no strategy found any table
        UnrecognizedShape: If tables were found but none was usable

    Examples:
        >>> extract_rankings("| Name | Rating |\\n|---|---|\\n| Big Show | 3.9 |")
        [<RankingRecord(name='Big Show', rating=3.9)>]
    """
    failure: Optional[TableExtractionError] = None

    for strategy in strategies:
        try:
            return strategy.try_extract(text or "")
        except TableExtractionError as e:
            logger.debug("%s strategy failed: %s", strategy.shape, e)
            # A table that couldn't be read says more than no table at all
            if failure is None or isinstance(e, UnrecognizedShape):
                failure = e

    if failure is None:
        failure = NoTableFound("No table strategies configured")
    raise failure
