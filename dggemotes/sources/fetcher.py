"""
Metadata fetcher: one GET per endpoint, decoded with pydantic.

Every failure here is fatal to a run. Without metadata no download can
proceed, so errors are raised as FetchError and left to the orchestrator.
"""

from __future__ import annotations

import logging
from http.client import HTTPException
from typing import Optional
from urllib.error import URLError

from pydantic import ValidationError

from ..net.http import DEFAULT_TIMEOUT_S, HttpStatusError, OpenFunc, open_url
from .models import RICH_EMOTES_ADAPTER, FlatEmoteList, RichEmote

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Metadata endpoint unreachable, non-200 or malformed."""

    def __init__(self, message: str, *, endpoint: str) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class MetadataFetcher:
    """
    Fetches emote metadata from JSON endpoints.

    Usage:
        fetcher = MetadataFetcher(timeout_s=30.0)
        rich = fetcher.fetch_rich("https://cdn.destiny.gg/.../emotes.json")
        names = fetcher.fetch_flat("https://.../emotes.json")
    """

    def __init__(
        self,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        open_func: Optional[OpenFunc] = None,
    ) -> None:
        self._timeout_s = timeout_s
        self._open_func = open_func or open_url

    def _get_bytes(self, endpoint: str) -> bytes:
        try:
            with self._open_func(endpoint, timeout_s=self._timeout_s) as resp:
                return resp.read()
        except HttpStatusError as exc:
            raise FetchError(
                f"Json endpoint {endpoint} returned with status code {exc.status_code}",
                endpoint=endpoint,
            ) from exc
        except (URLError, OSError, HTTPException) as exc:
            raise FetchError(f"Json endpoint {endpoint} unreachable: {exc}", endpoint=endpoint) from exc
        except ValueError as exc:
            raise FetchError(f"Invalid json endpoint {endpoint!r}: {exc}", endpoint=endpoint) from exc

    def fetch_flat(self, endpoint: str) -> list[str]:
        """
        Fetch a flat-schema payload and return its names.

        Returns:
            destiny names followed by twitch names, in payload order,
            not yet deduplicated.

        Raises:
            FetchError: On network failure, non-200 status or malformed JSON.
        """
        raw = self._get_bytes(endpoint)
        try:
            payload = FlatEmoteList.model_validate_json(raw)
        except ValidationError as exc:
            raise FetchError(f"Malformed emote list from {endpoint}: {exc}", endpoint=endpoint) from exc

        names = payload.names()
        logger.debug("Fetched %d names from %s", len(names), endpoint)
        return names

    def fetch_rich(self, endpoint: str) -> list[RichEmote]:
        """
        Fetch a rich-schema payload.

        Records with no image entries are dropped, as are records with an
        empty prefix.

        Raises:
            FetchError: On network failure, non-200 status or malformed JSON.
        """
        raw = self._get_bytes(endpoint)
        try:
            records = RICH_EMOTES_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            raise FetchError(f"Malformed emote records from {endpoint}: {exc}", endpoint=endpoint) from exc

        emotes: list[RichEmote] = []
        for record in records:
            if record.first_image is None:
                logger.debug("Skipping %r: no image entries", record.prefix)
                continue
            if not record.prefix:
                logger.warning("Skipping record with empty prefix (image %s)", record.first_image.url)
                continue
            emotes.append(record)

        logger.debug("Fetched %d/%d usable records from %s", len(emotes), len(records), endpoint)
        return emotes
