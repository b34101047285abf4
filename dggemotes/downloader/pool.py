"""
Fixed-size download worker pool.

Workers are started before any job is sent. The producer hands each job over
through an unbuffered channel, closes it after the last job, and joins every
worker. A failed job never affects any other job: each worker logs the
failure and takes the next one.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Protocol

from .channel import HandoffChannel
from .jobs import DownloadJob
from .writer import DownloadResult, DownloadStats, DownloadStatus

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 10


class JobWriter(Protocol):
    def write(self, job: DownloadJob) -> DownloadResult: ...


class DownloadPool:
    """
    Runs download jobs on a fixed number of worker threads.

    Usage:
        pool = DownloadPool(ImageWriter(timeout_s=30.0), workers=10)
        stats = pool.run(jobs)
        print(stats.to_dict())
    """

    def __init__(self, writer: JobWriter, *, workers: int = DEFAULT_WORKERS) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self._writer = writer
        self._workers = workers

    @property
    def workers(self) -> int:
        return self._workers

    def run(self, jobs: Iterable[DownloadJob]) -> DownloadStats:
        """
        Attempt every job exactly once and block until all workers exit.

        Returns:
            Stats merged from every worker.
        """
        channel: HandoffChannel[DownloadJob] = HandoffChannel()
        worker_stats = [DownloadStats() for _ in range(self._workers)]
        threads = [
            threading.Thread(
                target=self._worker,
                args=(channel, worker_stats[i]),
                name=f"emote-worker-{i}",
                daemon=True,
            )
            for i in range(self._workers)
        ]
        for thread in threads:
            thread.start()

        try:
            for job in jobs:
                channel.send(job)
        finally:
            channel.close()
            for thread in threads:
                thread.join()

        stats = DownloadStats()
        for s in worker_stats:
            stats.merge(s)
        return stats

    def _worker(self, channel: HandoffChannel[DownloadJob], stats: DownloadStats) -> None:
        for job in channel:
            try:
                result = self._writer.write(job)
            except Exception as exc:  # noqa: BLE001 - one job must not take the worker down
                logger.exception("Unexpected error downloading %s", job.source_url)
                result = DownloadResult(status=DownloadStatus.FAILED, job=job, error=str(exc))
            stats.increment(result)
