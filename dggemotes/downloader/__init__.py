"""
Emote downloader.

Provides:
- Case-insensitive name deduplication (dedup.py)
- Download job construction (jobs.py)
- Unbuffered hand-off channel (channel.py)
- Image writer with overwrite and cleanup semantics (writer.py)
- Fixed-size worker pool (pool.py)
"""

from .dedup import NameIndex, dedupe_names
from .jobs import DownloadJob, JobBuilder
from .channel import ChannelClosed, HandoffChannel
from .writer import DownloadResult, DownloadStats, DownloadStatus, ImageWriter
from .pool import DEFAULT_WORKERS, DownloadPool

__all__ = [
    "NameIndex",
    "dedupe_names",
    "DownloadJob",
    "JobBuilder",
    "ChannelClosed",
    "HandoffChannel",
    "DownloadResult",
    "DownloadStats",
    "DownloadStatus",
    "ImageWriter",
    "DEFAULT_WORKERS",
    "DownloadPool",
]
