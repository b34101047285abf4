"""
File system utilities for emote storage.

Provides:
- Target directory and manifest management (storage.py)
- File naming conventions (naming.py)
"""

from .storage import EmoteStorage
from .naming import MANIFEST_FILENAME, emote_filename, format_manifest, image_url_for

__all__ = [
    "EmoteStorage",
    "MANIFEST_FILENAME",
    "emote_filename",
    "format_manifest",
    "image_url_for",
]
