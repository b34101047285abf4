from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dggemotes.downloader.dedup import dedupe_names
from dggemotes.downloader.jobs import JobBuilder
from dggemotes.downloader.pool import DownloadPool
from dggemotes.downloader.writer import DownloadStats, ImageWriter
from dggemotes.fs.storage import EmoteStorage
from dggemotes.net.http import OpenFunc
from dggemotes.settings.models import EmoteSettings
from dggemotes.sources.fetcher import MetadataFetcher

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    manifest_names: list[str]
    manifest_path: Path
    jobs_total: int
    stats: DownloadStats = field(default_factory=DownloadStats)
    duplicates_skipped: int = 0

    def to_dict(self) -> dict:
        return {
            "manifest_path": str(self.manifest_path),
            "manifest_names": len(self.manifest_names),
            "jobs_total": self.jobs_total,
            "duplicates_skipped": self.duplicates_skipped,
            **self.stats.to_dict(),
        }


def run_emote_sync(settings: EmoteSettings, *, open_func: Optional[OpenFunc] = None) -> SyncReport:
    """
    One run: fetch -> dedup -> download -> manifest.

    Note:
    - Both metadata sources are fetched before any job is handed to a worker;
      FetchError from either aborts the run before the pool starts.
    - Per-image failures only show up in the returned stats.

    Raises:
        ValueError: If no directory is configured.
        FetchError: If a metadata endpoint fails.
        OSError: If the directory cannot be created or the manifest written.
    """
    if not settings.directory_configured():
        raise ValueError("please provide a directory to save the images to")

    endpoints = settings.endpoints
    fetcher = MetadataFetcher(timeout_s=settings.timeout_s, open_func=open_func)
    rich_emotes = fetcher.fetch_rich(endpoints.rich_endpoint)
    flat_names = fetcher.fetch_flat(endpoints.flat_endpoint)

    storage = EmoteStorage(settings.directory, lowercase=settings.lowercase)
    storage.ensure_directory()

    builder = JobBuilder(storage)
    builder.add_rich(rich_emotes)
    builder.add_flat(flat_names, endpoints.flat_image_base)
    jobs = builder.jobs

    manifest_names = dedupe_names(n for n in [*(e.prefix for e in rich_emotes), *flat_names] if n)
    index_stats = builder.index.stats()
    logger.info(
        "Downloading %d emotes to %s with %d workers (%d of %d names were case-insensitive duplicates)",
        len(jobs),
        storage.directory,
        settings.workers,
        index_stats["duplicates_found"],
        index_stats["total_checked"],
    )

    writer = ImageWriter(timeout_s=settings.timeout_s, open_func=open_func)
    pool = DownloadPool(writer, workers=settings.workers)
    stats = pool.run(jobs)

    manifest_path = storage.write_manifest(manifest_names)
    return SyncReport(
        manifest_names=manifest_names,
        manifest_path=manifest_path,
        jobs_total=len(jobs),
        stats=stats,
        duplicates_skipped=index_stats["duplicates_found"],
    )
