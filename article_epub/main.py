import argparse
import sys
from datetime import datetime
from typing import List, Optional

from .batch import BatchRunner
from .config import AppConfig
from .manifest import load_manifest
from .summary import display_summary
from .utils import ensure_dir


def build_config(args: argparse.Namespace) -> AppConfig:
    config = AppConfig(
        merged=args.merge,
        disable_progress=args.no_progress,
        output_dir=args.output_dir,
    )
    if args.resource_dir:
        config.resource_dir = args.resource_dir
    return config


def cli_main(argv: Optional[List[str]] = None) -> int:
    """
    Turn a manifest of extracted articles into epub files.

    Examples:
      article-epub articles.json
      article-epub articles.json --merge reading-list.epub --output-dir ./out
    """
    parser = argparse.ArgumentParser(description="Extracted web articles to EPUB converter")
    parser.add_argument("manifest", help="JSON manifest describing the extracted articles")
    parser.add_argument(
        "--merge",
        default=None,
        metavar="NAME",
        help="Write all articles into a single epub with this file name",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not print generation progress",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory the epub files are written to (default: current directory)",
    )
    parser.add_argument(
        "--resource-dir",
        default=None,
        help="Directory holding the downloaded images (default: system temp directory)",
    )
    args = parser.parse_args(argv)

    def log_fn(msg: str) -> None:
        ts = datetime.now().strftime("%H:%M:%S")
        print(f"[{ts}] {msg}")

    def progress_fn(value: float, text: str) -> None:
        pct = int(value * 100)
        print(f"[{pct:3d}%] {text}")

    config = build_config(args)
    try:
        articles = load_manifest(args.manifest)
    except (OSError, ValueError) as exc:
        log_fn(f"Error: {exc}")
        return 1

    ensure_dir(config.output_dir)
    result = BatchRunner(config, log_fn=log_fn, progress_fn=progress_fn).run(articles)
    return display_summary(result.total, result.results_table, result.errors)


def main() -> None:
    sys.exit(cli_main())
