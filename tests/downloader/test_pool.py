"""
Tests for dggemotes/downloader/pool.py

Covers:
- Zero jobs: join returns, no writer calls
- Every job attempted exactly once
- Failures (returned or raised) never stop other jobs
- Workers actually run in parallel
"""

import threading
import time
import unittest
from pathlib import Path

from dggemotes.downloader.jobs import DownloadJob
from dggemotes.downloader.pool import DEFAULT_WORKERS, DownloadPool
from dggemotes.downloader.writer import DownloadResult, DownloadStatus


def make_jobs(n):
    return [
        DownloadJob(name=f"e{i}", source_url=f"https://cdn.example.com/e{i}.png", destination_path=Path(f"/tmp/e{i}.png"))
        for i in range(n)
    ]


class RecordingWriter:
    def __init__(self, fail_names=(), raise_names=(), delay_s=0.0):
        self.calls = []
        self._lock = threading.Lock()
        self._fail = set(fail_names)
        self._raise = set(raise_names)
        self._delay_s = delay_s

    def write(self, job):
        with self._lock:
            self.calls.append(job.name)
        if self._delay_s:
            time.sleep(self._delay_s)
        if job.name in self._raise:
            raise RuntimeError(f"boom {job.name}")
        if job.name in self._fail:
            return DownloadResult(status=DownloadStatus.FAILED, job=job, status_code=404, error="404")
        return DownloadResult(status=DownloadStatus.SUCCESS, job=job, bytes_written=10)


class TestDownloadPool(unittest.TestCase):
    def test_default_worker_count(self):
        pool = DownloadPool(RecordingWriter())
        self.assertEqual(pool.workers, DEFAULT_WORKERS)
        self.assertEqual(DEFAULT_WORKERS, 10)

    def test_invalid_worker_count(self):
        with self.assertRaises(ValueError):
            DownloadPool(RecordingWriter(), workers=0)

    def test_zero_jobs_joins_without_calls(self):
        writer = RecordingWriter()

        stats = DownloadPool(writer, workers=4).run([])

        self.assertEqual(writer.calls, [])
        self.assertEqual(stats.total_processed, 0)

    def test_every_job_attempted_exactly_once(self):
        writer = RecordingWriter()

        stats = DownloadPool(writer, workers=5).run(make_jobs(57))

        self.assertEqual(sorted(writer.calls), sorted(f"e{i}" for i in range(57)))
        self.assertEqual(stats.downloaded, 57)
        self.assertEqual(stats.failed, 0)
        self.assertEqual(stats.total_bytes, 570)

    def test_failures_do_not_abort_batch(self):
        writer = RecordingWriter(fail_names={"e1", "e3"}, raise_names={"e5"})

        with self.assertLogs("dggemotes.downloader.pool", level="ERROR"):
            stats = DownloadPool(writer, workers=2).run(make_jobs(8))

        self.assertEqual(len(writer.calls), 8)
        self.assertEqual(stats.downloaded, 5)
        self.assertEqual(stats.failed, 3)

    def test_more_workers_than_jobs(self):
        writer = RecordingWriter()

        stats = DownloadPool(writer, workers=16).run(make_jobs(3))

        self.assertEqual(stats.downloaded, 3)

    def test_workers_run_in_parallel(self):
        writer = RecordingWriter(delay_s=0.2)

        started = time.monotonic()
        stats = DownloadPool(writer, workers=8).run(make_jobs(8))
        elapsed = time.monotonic() - started

        self.assertEqual(stats.downloaded, 8)
        # Serially this would take 1.6s.
        self.assertLess(elapsed, 1.0)

    def test_accepts_generator(self):
        writer = RecordingWriter()

        stats = DownloadPool(writer, workers=3).run(job for job in make_jobs(4))

        self.assertEqual(stats.downloaded, 4)


if __name__ == "__main__":
    unittest.main()
