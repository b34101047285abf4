"""
Image writer: one HTTP GET streamed to one file.

Overwrite semantics: an existing file at the destination is removed before
the request, so after a failed job there is no file at the destination at
all. The body is streamed into a temp file beside the destination and moved
into place only once fully written.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..net.http import DEFAULT_TIMEOUT_S, HttpStatusError, OpenFunc, open_url
from .jobs import DownloadJob

logger = logging.getLogger(__name__)

# Buffer size for streaming response bodies to disk
CHUNK_SIZE = 65536  # 64 KB


class DownloadStatus(str, Enum):
    """Status of a single download."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DownloadResult:
    """Result of a single emote download."""
    status: DownloadStatus
    job: DownloadJob

    # Set on success
    bytes_written: int = 0

    # Set on failure
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == DownloadStatus.SUCCESS


@dataclass
class DownloadStats:
    """Counters for a set of downloads."""
    downloaded: int = 0
    failed: int = 0
    total_bytes: int = 0

    def increment(self, result: DownloadResult) -> None:
        """Update stats based on a download result."""
        if result.status == DownloadStatus.SUCCESS:
            self.downloaded += 1
            self.total_bytes += result.bytes_written
        else:
            self.failed += 1

    def merge(self, other: "DownloadStats") -> None:
        self.downloaded += other.downloaded
        self.failed += other.failed
        self.total_bytes += other.total_bytes

    @property
    def total_processed(self) -> int:
        """Total jobs attempted (downloaded + failed)."""
        return self.downloaded + self.failed

    def to_dict(self) -> dict:
        return {
            "downloaded": self.downloaded,
            "failed": self.failed,
            "total_bytes": self.total_bytes,
        }


class ImageWriter:
    """
    Downloads a job's image to its destination path.

    Never raises for a failed job: every failure is logged and returned as a
    FAILED DownloadResult so the calling worker can move on.
    """

    def __init__(
        self,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        open_func: Optional[OpenFunc] = None,
    ) -> None:
        self._timeout_s = timeout_s
        self._open_func = open_func or open_url

    def write(self, job: DownloadJob) -> DownloadResult:
        """
        Download job.source_url into job.destination_path.

        Returns:
            DownloadResult with status and details.
        """
        dest = job.destination_path
        try:
            dest.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("File %s already existed but unable to be deleted: %s", dest, exc)
            return DownloadResult(status=DownloadStatus.FAILED, job=job, error=str(exc))

        try:
            size = self._stream_to_file(job.source_url, dest)
        except HttpStatusError as exc:
            logger.warning("Request to url %s returned with status code %d", job.source_url, exc.status_code)
            return DownloadResult(
                status=DownloadStatus.FAILED,
                job=job,
                status_code=exc.status_code,
                error=str(exc),
            )
        except Exception as exc:
            logger.warning("Error downloading %s to %s: %s", job.source_url, dest, exc)
            return DownloadResult(status=DownloadStatus.FAILED, job=job, error=str(exc))

        logger.debug("Saved %s (%d bytes)", dest, size)
        return DownloadResult(status=DownloadStatus.SUCCESS, job=job, bytes_written=size)

    def _stream_to_file(self, url: str, dest: Path) -> int:
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path_str = tempfile.mkstemp(
            dir=str(dest.parent),
            prefix=f".{dest.name}.",
            suffix=".tmp",
        )
        tmp_path = Path(tmp_path_str)
        try:
            size = 0
            with os.fdopen(fd, "wb") as f:
                with self._open_func(url, timeout_s=self._timeout_s) as resp:
                    while True:
                        chunk = resp.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        f.write(chunk)
                        size += len(chunk)
            os.replace(tmp_path, dest)
            return size
        finally:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass
