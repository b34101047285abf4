from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..downloader.pool import DEFAULT_WORKERS
from ..net.http import DEFAULT_TIMEOUT_S


DEFAULT_RICH_ENDPOINT = "https://cdn.destiny.gg/4.2.0/emotes/emotes.json"
DEFAULT_FLAT_ENDPOINT = "https://raw.githubusercontent.com/BryceMatthes/chat-gui/master/assets/emotes.json"
DEFAULT_FLAT_IMAGE_BASE = "https://raw.githubusercontent.com/BryceMatthes/chat-gui/master/assets/emotes/emoticons"

MAX_WORKERS = 100


@dataclass(frozen=True)
class EndpointsConfig:
    rich_endpoint: str = DEFAULT_RICH_ENDPOINT
    flat_endpoint: str = DEFAULT_FLAT_ENDPOINT
    flat_image_base: str = DEFAULT_FLAT_IMAGE_BASE

    def to_persist_dict(self) -> dict[str, Any]:
        return {
            "rich_endpoint": self.rich_endpoint,
            "flat_endpoint": self.flat_endpoint,
            "flat_image_base": self.flat_image_base,
        }

    @classmethod
    def from_persist_dict(cls, data: dict[str, Any]) -> "EndpointsConfig":
        return cls(
            rich_endpoint=str(data.get("rich_endpoint") or DEFAULT_RICH_ENDPOINT),
            flat_endpoint=str(data.get("flat_endpoint") or DEFAULT_FLAT_ENDPOINT),
            flat_image_base=str(data.get("flat_image_base") or DEFAULT_FLAT_IMAGE_BASE),
        )


@dataclass(frozen=True)
class EmoteSettings:
    """
    Everything a run needs, passed explicitly to each component.

    Attributes:
        directory: Target directory for images and the manifest ("" = unset).
        lowercase: Lowercase image filename stems (the manifest is always lowercase).
        workers: Number of download worker threads.
        timeout_s: Per-request timeout in seconds.
        endpoints: Metadata endpoints and image base URL.
    """
    directory: str = ""
    lowercase: bool = False
    workers: int = DEFAULT_WORKERS
    timeout_s: float = DEFAULT_TIMEOUT_S
    endpoints: EndpointsConfig = field(default_factory=EndpointsConfig)

    def directory_configured(self) -> bool:
        return bool(self.directory.strip())

    def with_overrides(self, **changes: Any) -> "EmoteSettings":
        """Copy with every non-None keyword applied."""
        endpoint_keys = {"rich_endpoint", "flat_endpoint", "flat_image_base"}
        endpoint_changes = {k: v for k, v in changes.items() if k in endpoint_keys and v is not None}
        other_changes = {k: v for k, v in changes.items() if k not in endpoint_keys and v is not None}

        updated = replace(self, **other_changes)
        if endpoint_changes:
            updated = replace(updated, endpoints=replace(updated.endpoints, **endpoint_changes))
        return updated

    def to_persist_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": 1,
            "lowercase": self.lowercase,
            "workers": self.workers,
            "timeout_s": self.timeout_s,
            "endpoints": self.endpoints.to_persist_dict(),
        }
        if self.directory:
            data["directory"] = self.directory
        return data

    @classmethod
    def from_persist_dict(cls, data: dict[str, Any]) -> "EmoteSettings":
        directory = str(data.get("directory", "") or "")
        lowercase = bool(data.get("lowercase", False))

        try:
            workers = int(data.get("workers", DEFAULT_WORKERS) or DEFAULT_WORKERS)
        except (TypeError, ValueError):
            workers = DEFAULT_WORKERS

        try:
            timeout_s = float(data.get("timeout_s", DEFAULT_TIMEOUT_S) or DEFAULT_TIMEOUT_S)
        except (TypeError, ValueError):
            timeout_s = DEFAULT_TIMEOUT_S

        raw_endpoints: Optional[Any] = data.get("endpoints")
        endpoints = EndpointsConfig()
        if isinstance(raw_endpoints, dict):
            endpoints = EndpointsConfig.from_persist_dict(raw_endpoints)

        return cls(
            directory=directory,
            lowercase=lowercase,
            workers=max(1, min(MAX_WORKERS, workers)),
            timeout_s=max(1.0, timeout_s),
            endpoints=endpoints,
        )
