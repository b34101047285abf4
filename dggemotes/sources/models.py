"""
Payload models for the two emote metadata schemas.

Flat schema:
    {"destiny": ["Name", ...], "twitch": ["Name", ...]}

Rich schema:
    [{"prefix": "Name", "twitch": false,
      "image": [{"url": "...", "name": "...", "mime": "image/png"}]}, ...]
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, field_validator


PNG_MIME = "image/png"


class FlatEmoteList(BaseModel):
    destiny: List[str] = Field(default_factory=list)
    twitch: List[str] = Field(default_factory=list)

    @field_validator("destiny", "twitch", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def names(self) -> list[str]:
        """All names, destiny first, in payload order."""
        return [*self.destiny, *self.twitch]


class RichEmoteImage(BaseModel):
    url: str
    name: str = ""
    mime: str = ""


class RichEmote(BaseModel):
    prefix: str = Field(default="", validation_alias=AliasChoices("prefix", "name"))
    twitch: bool = False
    image: List[RichEmoteImage] = Field(default_factory=list)

    @field_validator("image", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def first_image(self) -> Optional[RichEmoteImage]:
        """Only the first image entry of a record is ever used."""
        return self.image[0] if self.image else None


RICH_EMOTES_ADAPTER = TypeAdapter(List[RichEmote])
