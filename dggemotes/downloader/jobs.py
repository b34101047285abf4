"""
Download job construction.

A DownloadJob is created per emote, handed to exactly one worker and
consumed once. Jobs are built rich source first, then flat source; a name
that was already turned into a job (case-insensitively) is skipped so no two
jobs ever target the same file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..fs.naming import image_url_for
from ..fs.storage import EmoteStorage
from ..sources.models import PNG_MIME, RichEmote
from .dedup import NameIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadJob:
    """Intent to download one emote image."""
    name: str
    source_url: str
    destination_path: Path


class JobBuilder:
    """
    Turns fetched metadata into download jobs.

    Shares one NameIndex across sources so the first source to mention a
    name owns it.
    """

    def __init__(self, storage: EmoteStorage):
        self._storage = storage
        self._index = NameIndex()
        self._jobs: list[DownloadJob] = []

    @property
    def jobs(self) -> list[DownloadJob]:
        return list(self._jobs)

    @property
    def index(self) -> NameIndex:
        return self._index

    def _add(self, name: str, url: str) -> bool:
        if not self._index.check_and_register(name):
            logger.debug("Skipping duplicate emote %s (%s)", name, url)
            return False
        try:
            destination = self._storage.image_path(name)
        except ValueError as exc:
            logger.warning("Skipping emote %r: %s", name, exc)
            return False
        self._jobs.append(DownloadJob(name=name, source_url=url, destination_path=destination))
        return True

    def add_rich(self, emotes: Iterable[RichEmote]) -> int:
        """
        Add one job per rich record, using the URL of its first image.

        A MIME type other than image/png is logged but still downloaded.

        Returns:
            Number of jobs added.
        """
        added = 0
        for emote in emotes:
            image = emote.first_image
            if image is None:
                continue
            if image.mime != PNG_MIME:
                logger.warning("Unexpected mime type %s for %s", image.mime, emote.prefix)
            if self._add(emote.prefix, image.url):
                added += 1
        return added

    def add_flat(self, names: Iterable[str], image_base: str) -> int:
        """
        Add one job per flat-schema name, URL <image_base>/<name>.png.

        Returns:
            Number of jobs added.
        """
        added = 0
        for name in names:
            if not name:
                continue
            if self._add(name, image_url_for(image_base, name)):
                added += 1
        return added
