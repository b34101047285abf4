"""
Tests for dggemotes/downloader/writer.py

Acceptance criteria:
1. HTTP 200 with body B -> destination contains exactly B
2. HTTP 404 -> no file at destination, pre-existing file removed
3. Existing file with other content is overwritten
4. A failure mid-stream leaves neither destination nor temp file
"""

import io
import tempfile
import unittest
from pathlib import Path
from urllib.error import URLError

from dggemotes.downloader.jobs import DownloadJob
from dggemotes.downloader.writer import DownloadStats, DownloadStatus, ImageWriter
from dggemotes.net.http import HttpStatusError

URL = "https://cdn.example.com/emotes/PepeLaugh.png"


def make_open_func(target):
    """target: bytes | int (status) | Exception | file-like"""
    calls = []

    def _open(url, *, timeout_s):
        calls.append(url)
        if isinstance(target, Exception):
            raise target
        if isinstance(target, int):
            raise HttpStatusError(url, target)
        if isinstance(target, bytes):
            return io.BytesIO(target)
        return target

    _open.calls = calls
    return _open


class BrokenStream(io.BytesIO):
    """Yields the first chunk, then fails like a dropped connection."""

    def __init__(self, first_chunk: bytes):
        super().__init__(first_chunk)
        self._reads = 0

    def read(self, size=-1):
        self._reads += 1
        if self._reads > 1:
            raise ConnectionResetError("connection reset by peer")
        return super().read(size)


class TestImageWriter(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name)
        self.dest = self.directory / "PepeLaugh.png"
        self.job = DownloadJob(name="PepeLaugh", source_url=URL, destination_path=self.dest)

    def tearDown(self):
        self._tmp.cleanup()

    def leftover_files(self):
        return sorted(p.name for p in self.directory.iterdir())

    def test_ok_body_written_exactly(self):
        body = b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 600
        open_func = make_open_func(body)

        result = ImageWriter(open_func=open_func).write(self.job)

        self.assertEqual(result.status, DownloadStatus.SUCCESS)
        self.assertEqual(result.bytes_written, len(body))
        self.assertEqual(self.dest.read_bytes(), body)
        self.assertEqual(self.leftover_files(), ["PepeLaugh.png"])
        self.assertEqual(open_func.calls, [URL])

    def test_404_leaves_no_file(self):
        with self.assertLogs("dggemotes.downloader.writer", level="WARNING"):
            result = ImageWriter(open_func=make_open_func(404)).write(self.job)

        self.assertEqual(result.status, DownloadStatus.FAILED)
        self.assertEqual(result.status_code, 404)
        self.assertFalse(self.dest.exists())
        self.assertEqual(self.leftover_files(), [])

    def test_404_removes_pre_existing_file(self):
        self.dest.write_bytes(b"old content")

        with self.assertLogs("dggemotes.downloader.writer", level="WARNING"):
            result = ImageWriter(open_func=make_open_func(404)).write(self.job)

        self.assertFalse(result.ok)
        self.assertFalse(self.dest.exists())

    def test_existing_file_overwritten(self):
        self.dest.write_bytes(b"old content that is longer than the new one")

        result = ImageWriter(open_func=make_open_func(b"new")).write(self.job)

        self.assertTrue(result.ok)
        self.assertEqual(self.dest.read_bytes(), b"new")

    def test_stream_failure_removes_partial_file(self):
        stream = BrokenStream(b"x" * 100)

        with self.assertLogs("dggemotes.downloader.writer", level="WARNING"):
            result = ImageWriter(open_func=make_open_func(stream)).write(self.job)

        self.assertEqual(result.status, DownloadStatus.FAILED)
        self.assertIn("connection reset", result.error)
        self.assertEqual(self.leftover_files(), [])

    def test_network_error_is_contained(self):
        with self.assertLogs("dggemotes.downloader.writer", level="WARNING"):
            result = ImageWriter(open_func=make_open_func(URLError("timed out"))).write(self.job)

        self.assertEqual(result.status, DownloadStatus.FAILED)
        self.assertIsNone(result.status_code)
        self.assertEqual(self.leftover_files(), [])

    def test_missing_parent_directory_is_created(self):
        dest = self.directory / "nested" / "Kappa.png"
        job = DownloadJob(name="Kappa", source_url=URL, destination_path=dest)

        result = ImageWriter(open_func=make_open_func(b"k")).write(job)

        self.assertTrue(result.ok)
        self.assertEqual(dest.read_bytes(), b"k")


class TestDownloadStats(unittest.TestCase):
    def test_increment_and_merge(self):
        writer = ImageWriter(open_func=make_open_func(b"abc"))
        with tempfile.TemporaryDirectory() as tmpdir:
            job = DownloadJob(name="a", source_url=URL, destination_path=Path(tmpdir) / "a.png")
            ok = writer.write(job)

        a = DownloadStats()
        a.increment(ok)
        b = DownloadStats(downloaded=1, failed=2, total_bytes=10)
        a.merge(b)

        self.assertEqual(a.to_dict(), {"downloaded": 2, "failed": 2, "total_bytes": 13})
        self.assertEqual(a.total_processed, 4)


if __name__ == "__main__":
    unittest.main()
