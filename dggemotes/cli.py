"""
Download destiny.gg emotes into a directory and write an emotes.txt manifest.

Examples:
  dgg-emotes -d ./emotes
  dgg-emotes -d ./emotes -lowercase --workers 4
  dgg-emotes -d ./emotes --workers 4 --config emotes.json --save-config
  python -m dggemotes --config emotes.json

Exit codes: 0 after a completed run (individual image failures included),
1 on a fatal error, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dggemotes.pipeline.emote_sync import run_emote_sync
from dggemotes.settings.models import EmoteSettings
from dggemotes.settings.store import SettingsError, SettingsStore
from dggemotes.sources.fetcher import FetchError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dgg-emotes",
        description="Download destiny.gg emote images and write an emotes.txt manifest",
    )

    p.add_argument("-d", dest="directory", default=None, help="directory to save images to")
    p.add_argument(
        "-lowercase",
        "--lowercase",
        dest="lowercase",
        action="store_true",
        default=None,
        help="save images with lowercase name",
    )

    p.add_argument("--config", default="", help="optional JSON settings file (flags take precedence)")
    p.add_argument(
        "--save-config",
        action="store_true",
        help="write the resolved settings back to the --config file before the run",
    )
    p.add_argument("--workers", type=int, default=None, help="number of concurrent downloads (default 10)")
    p.add_argument("--timeout-s", type=float, default=None, help="per-request timeout in seconds (default 30)")

    p.add_argument("--rich-endpoint", default=None, help="JSON endpoint with emote records and image URLs")
    p.add_argument("--flat-endpoint", default=None, help="JSON endpoint with destiny/twitch name lists")
    p.add_argument("--flat-image-base", default=None, help="base URL for images of the flat endpoint")

    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def resolve_settings(args: argparse.Namespace) -> EmoteSettings:
    """
    Config file (if any) first, then command line flags on top.

    Raises:
        SettingsError: If the config file is unreadable.
    """
    settings = EmoteSettings()
    if args.config:
        settings = SettingsStore(path=Path(args.config)).load()

    return settings.with_overrides(
        directory=args.directory,
        lowercase=args.lowercase,
        workers=args.workers,
        timeout_s=args.timeout_s,
        rich_endpoint=args.rich_endpoint,
        flat_endpoint=args.flat_endpoint,
        flat_image_base=args.flat_image_base,
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = resolve_settings(args)
    except SettingsError as exc:
        logger.error("%s", exc)
        return 1

    if not settings.directory_configured():
        logger.error("please provide a directory to save the images to")
        return 1
    if settings.workers < 1:
        logger.error("--workers must be >= 1")
        return 1
    if settings.timeout_s <= 0:
        logger.error("--timeout-s must be > 0")
        return 1

    if args.save_config:
        if not args.config:
            logger.error("--save-config requires --config")
            return 1
        store = SettingsStore(path=Path(args.config))
        try:
            store.save(settings)
        except OSError as exc:
            logger.error("cannot write settings file %s: %s", store.path, exc)
            return 1
        logger.info("Saved settings to %s", store.path)

    try:
        report = run_emote_sync(settings)
    except FetchError as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("cannot write to %s: %s", settings.directory, exc)
        return 1

    stats = report.stats
    logger.info(
        "Done: %d/%d emotes downloaded, %d failed, %d duplicates skipped, %d bytes; manifest %s (%d names)",
        stats.downloaded,
        report.jobs_total,
        stats.failed,
        report.duplicates_skipped,
        stats.total_bytes,
        report.manifest_path,
        len(report.manifest_names),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
