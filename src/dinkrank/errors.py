"""
Error types raised while resolving names against a rankings page.

Every error carries a short machine-readable code which the web API and
CLI report as {"error": code}. Failing to find a player is not an error:
unmatched names come back as rows with no rating.
"""


class RankingsError(Exception):
    """Base class for all failures of a rankings lookup."""

    code = "FAIL"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidRequest(RankingsError):
    """Raised when the caller's input is unusable (no names, unknown mode)."""

    code = "BAD_REQUEST"

    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(message)


class FetchFailed(RankingsError):
    """Raised when the rankings page could not be retrieved."""

    code = "FETCH_FAIL"


class TableExtractionError(RankingsError):
    """Raised when the retrieved page holds no usable rankings table."""

    code = "BAD_SHAPE"


class NoTableFound(TableExtractionError):
    """No table-shaped region was detected in the page."""

    code = "NO_TABLE"


class UnrecognizedShape(TableExtractionError):
    """Tables were found but none yielded a name column and a rating column."""

    code = "BAD_SHAPE"
