"""
Emote metadata sources.

Provides:
- Payload models for the flat and rich schemas (models.py)
- Endpoint fetcher with fail-fast error handling (fetcher.py)
"""

from .fetcher import FetchError, MetadataFetcher
from .models import PNG_MIME, FlatEmoteList, RichEmote, RichEmoteImage

__all__ = [
    "FetchError",
    "MetadataFetcher",
    "PNG_MIME",
    "FlatEmoteList",
    "RichEmote",
    "RichEmoteImage",
]
