"""
Emote file naming conventions.

Image filename: <name>.png (name lowercased when requested)
Manifest filename: emotes.txt
"""

from __future__ import annotations


IMAGE_EXTENSION = "png"

MANIFEST_FILENAME = "emotes.txt"

MANIFEST_SEPARATOR = ","


def emote_filename(name: str, *, lowercase: bool = False) -> str:
    """
    Build the image filename for an emote.

    Args:
        name: Emote name as found in the metadata.
        lowercase: If True, lowercase the stem.

    Returns:
        Filename like "PepeLaugh.png".

    Raises:
        ValueError: If name is empty or contains a path separator.
    """
    if not name:
        raise ValueError("emote name must not be empty")
    if "/" in name or "\\" in name:
        raise ValueError(f"emote name must not contain a path separator: {name!r}")

    stem = name.lower() if lowercase else name
    return f"{stem}.{IMAGE_EXTENSION}"


def image_url_for(image_base: str, name: str) -> str:
    """URL of a flat-schema emote image: <image_base>/<name>.png (original case)."""
    return f"{image_base.rstrip('/')}/{name}.{IMAGE_EXTENSION}"


def format_manifest(names: list[str]) -> str:
    """Comma-joined single line, no trailing newline."""
    return MANIFEST_SEPARATOR.join(names)
