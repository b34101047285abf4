"""
Emote directory management.

Directory structure:
    <directory>/<name>.png
    <directory>/emotes.txt
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .naming import MANIFEST_FILENAME, emote_filename, format_manifest

logger = logging.getLogger(__name__)


class EmoteStorage:
    """
    Owns the target directory of a run.

    Every emote is a flat file directly under the directory; the manifest
    sits next to them.
    """

    def __init__(self, directory: Path | str, *, lowercase: bool = False):
        """
        Initialize the storage.

        Args:
            directory: Directory the images and the manifest are written to.
            lowercase: If True, image filenames are lowercased.
        """
        self._directory = Path(directory).expanduser().resolve()
        self._lowercase = bool(lowercase)

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def manifest_path(self) -> Path:
        return self._directory / MANIFEST_FILENAME

    def ensure_directory(self) -> Path:
        """
        Create the directory if needed.

        Raises:
            OSError: If the directory cannot be created.
        """
        self._directory.mkdir(parents=True, exist_ok=True)
        return self._directory

    def image_path(self, name: str) -> Path:
        """Destination path of an emote image, honoring the lowercase flag."""
        return self._directory / emote_filename(name, lowercase=self._lowercase)

    def write_manifest(self, names: list[str]) -> Path:
        """
        Write the manifest, replacing any previous one.

        Written via a temp file and os.replace; readers never see a
        truncated manifest.

        Raises:
            OSError: If the manifest cannot be written.
        """
        final_path = self.manifest_path
        final_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path_str = tempfile.mkstemp(
            dir=str(final_path.parent),
            prefix=f".{final_path.name}.",
            suffix=".tmp",
        )
        tmp_path = Path(tmp_path_str)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(format_manifest(names))
            os.replace(tmp_path, final_path)
        finally:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass

        logger.debug("Wrote manifest with %d names to %s", len(names), final_path)
        return final_path

