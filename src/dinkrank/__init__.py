"""
dinkrank - Pickleball Ranking Assistant

Looks up a list of player names in the published Cayman pickleball
singles/doubles rankings and reports each player's rating and rank.

Main components:
- scrape: Rankings page fetching and table extraction
- players: Name normalization, similarity scoring and tiered matching
- services: The resolve_names entry point and result rendering
- web: FastAPI JSON API
"""

__version__ = "1.0.0"
