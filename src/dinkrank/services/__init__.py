"""
Service layer for rankings lookups.

Used by the web API and the CLI script; see rankings.resolve_names.
"""

from dinkrank.services.rankings import render_markdown, resolve_names, resolve_names_payload

__all__ = [
    "render_markdown",
    "resolve_names",
    "resolve_names_payload",
]
