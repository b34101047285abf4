from __future__ import annotations

import json
from pathlib import Path

from .models import EmoteSettings


class SettingsError(RuntimeError):
    pass


class SettingsStore:
    def __init__(self, *, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> EmoteSettings:
        """
        Load settings from the JSON file, or defaults if it does not exist.

        Raises:
            SettingsError: If the file exists but cannot be read or parsed.
        """
        if not self._path.exists():
            return EmoteSettings()

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SettingsError(f"cannot read settings file {self._path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise SettingsError(f"settings file {self._path} must contain a JSON object")

        return EmoteSettings.from_persist_dict(raw)

    def save(self, settings: EmoteSettings) -> None:
        payload = settings.to_persist_dict()

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        tmp_path.replace(self._path)
