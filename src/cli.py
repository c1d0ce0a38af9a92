"""Command-line entry point: extract one page and print the result as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from src.config import get_settings
from src.extraction import ExtractionEngine, ExtractionError, InputError
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract text context, ranked images and a brand color palette from a web page.",
    )
    parser.add_argument("url", help="Public http(s) URL to extract")
    parser.add_argument(
        "--links",
        action="store_true",
        help="Print the page's internal links instead of the full extraction",
    )
    parser.add_argument(
        "--suggest",
        action="append",
        default=[],
        metavar="HEX",
        help="Externally suggested color for the 20-color palette (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL from the environment",
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace, engine: ExtractionEngine) -> dict:
    if args.links:
        links = await engine.links(args.url)
        return {"url": args.url, "links": [link.model_dump() for link in links]}

    result = await engine.run(args.url)
    payload = result.model_dump(by_alias=True)
    if args.suggest:
        palette = engine.build_palette(
            [color.hex for color in result.colors],
            [{"hex": value} for value in args.suggest],
        )
        payload["suggested_palette"] = [entry.model_dump() for entry in palette]
    return payload


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level, stream=sys.stderr)

    engine = ExtractionEngine(settings)
    try:
        payload = asyncio.run(_run(args, engine))
    except InputError as exc:
        logger.error("invalid input", extra={"url": exc.url, "error": exc.message})
        return 2
    except ExtractionError as exc:
        logger.error("extraction failed", extra={"url": exc.url, "error": exc.message})
        return 1

    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
