"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

import pytest

from dinkrank.errors import FetchFailed
from dinkrank.models import RankingRecord


DOUBLES_MARKDOWN = """\
Title: Rankings | Pickleball Cayman

# Doubles Rankings

Updated monthly | see the club noticeboard

| Rank | Name | Doubles Rating |
|---|---|---|
| 1 | Francisco Castillo | 4.521 |
| 2 | Big Show | 3.900 |
| 3 | José Núñez | 3.75 |
| 4 | FRANCISCO CASTILLO | 4.100 |
| 5 | Jane Smith | n/a |
"""

SINGLES_HTML = """\
<html><body>
<h1>Singles Rankings</h1>
<table>
  <thead><tr><th>#</th><th>Player</th><th>Singles</th></tr></thead>
  <tbody>
    <tr><td>1</td><td>Ann Lee</td><td>4.25</td></tr>
    <tr><td>2</td><td>Bob Ray</td><td>3.5</td></tr>
    <tr><td>3</td><td>ann  lee</td><td>3.0</td></tr>
  </tbody>
</table>
</body></html>
"""


class FakeSource:
    """
    In-memory rankings source.

    Returns the same text for every mode and records which modes were
    requested. Pass error=True to simulate an unreachable page.
    """

    def __init__(self, text: str = DOUBLES_MARKDOWN, error: bool = False):
        self.text = text
        self.error = error
        self.calls: list[str] = []

    def fetch(self, mode: str) -> str:
        self.calls.append(mode)
        if self.error:
            raise FetchFailed(f"Could not fetch {mode} rankings: HTTP 503")
        return self.text

    def close(self) -> None:
        pass


@pytest.fixture
def doubles_markdown():
    return DOUBLES_MARKDOWN


@pytest.fixture
def singles_html():
    return SINGLES_HTML


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def failing_source():
    return FakeSource(error=True)


@pytest.fixture
def make_source():
    """Factory for a FakeSource serving arbitrary page text."""
    return FakeSource


@pytest.fixture
def castillo_records():
    """The two-player rankings used throughout the resolution tests."""
    return [
        RankingRecord(name="Francisco Castillo", rating=4.521),
        RankingRecord(name="Big Show", rating=3.9),
    ]
