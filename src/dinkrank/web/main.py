from typing import Iterator, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse, PlainTextResponse

from dinkrank import __version__
from dinkrank.config import settings
from dinkrank.errors import FetchFailed, InvalidRequest, RankingsError
from dinkrank.scrape.source import RankingsSource
from dinkrank.services.rankings import render_markdown, resolve_names

app = FastAPI(title="Pickleball Ranking Assistant", version=__version__)


def get_source() -> Iterator[RankingsSource]:
    """Provide an HTTP rankings source for one request."""
    source = RankingsSource()
    try:
        yield source
    finally:
        source.close()


def _error_status(error: RankingsError) -> int:
    if isinstance(error, InvalidRequest):
        return 400
    if isinstance(error, FetchFailed):
        return 502
    return 500


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}


# Plain def: the lookup does blocking I/O, so FastAPI runs it in a worker thread
@app.get("/api/rankings")
def api_rankings(
    names: str = Query("", description="Player names separated by commas, pipes or newlines"),
    mode: Optional[str] = Query("doubles", description="'doubles' or 'singles'"),
    format: str = Query("json", pattern="^(json|markdown)$", description="Response format"),
    source: RankingsSource = Depends(get_source),
):
    """
    Look up player names in the current rankings.

    Example:
        /api/rankings?names=Big%20Show,Francisco%20Castillo&mode=doubles

    Returns {"mode": ..., "rows": [...]} where every input name has a row:
    matched players carry a rating and a sortIndex (1 = highest rated),
    unmatched names have rating null and an empty sortIndex.
    Errors come back as {"error": code}.
    """
    try:
        result = resolve_names(names, mode, source=source)
    except RankingsError as e:
        return JSONResponse({"error": e.code}, status_code=_error_status(e))

    if format == "markdown":
        return PlainTextResponse(render_markdown(result), media_type="text/markdown")
    return JSONResponse(result.to_dict())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dinkrank.web.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
