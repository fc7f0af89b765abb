"""
Command-line interface for the README crawler.
"""

import argparse
import json
import os
import sys
import time
from pathlib import Path

from readme_crawler.config import (
    DEFAULT_BRANCH,
    DEFAULT_IMAGE_CONCURRENCY,
    DEFAULT_MAX_DEPTH,
    DEFAULT_OUTPUT,
    DEFAULT_SEED,
    REQUEST_TIMEOUT,
    auto_concurrency,
)
from readme_crawler.core.crawler import Crawler
from readme_crawler.core.storage import ImageStore
from readme_crawler.errors import CrawlError
from readme_crawler.fetcher import ReadmeFetcher
from readme_crawler.models import RepoRef
from readme_crawler.session import build_session
from readme_crawler.utils.log import setup_logging, log

try:
    from tqdm import tqdm as _tqdm  # noqa: F401
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False


def _repo_arg(value: str) -> RepoRef:
    try:
        return RepoRef.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="readme-crawler",
        description="Recursively follow repository links between GitHub "
                    "READMEs and download one preview image per repository.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m readme_crawler avelino/awesome-go\n"
            "  python -m readme_crawler https://github.com/sindresorhus/awesome --depth 2\n"
            "  python -m readme_crawler owner/repo --branch main --branch master\n"
        ),
    )
    parser.add_argument(
        "seed", nargs="?", type=_repo_arg, default=DEFAULT_SEED,
        help=f"Seed repository as owner/name or GitHub URL (default: {DEFAULT_SEED})",
    )
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT,
        help=f"Directory for downloaded images (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--branch", action="append", dest="branches", metavar="NAME",
        help=f"Branch holding the README; repeat to try several in order "
             f"(default: {DEFAULT_BRANCH})",
    )
    parser.add_argument(
        "--depth", type=int, default=DEFAULT_MAX_DEPTH,
        help=f"Maximum link depth from the seed (0 = unlimited, default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--concurrency", default="auto", metavar="N",
        help="Number of parallel README fetchers, or 'auto' to detect "
             "from CPU/RAM (default: auto)",
    )
    parser.add_argument(
        "--image-concurrency", type=int, default=DEFAULT_IMAGE_CONCURRENCY,
        metavar="N",
        help=f"Maximum simultaneous image downloads (default: {DEFAULT_IMAGE_CONCURRENCY})",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--no-progress", dest="progress", action="store_false", default=True,
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--summary-json", metavar="PATH",
        help="Write the run summary as JSON to this file",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    return parser.parse_args(argv)


def _resolve_concurrency(raw: str) -> int:
    raw = raw.strip().lower()
    if raw in ("auto", "0", ""):
        concurrency = auto_concurrency()
        log.info("Auto-detected concurrency: %d workers (CPU: %s, RAM-aware)",
                 concurrency, os.cpu_count())
        return concurrency
    try:
        concurrency = int(raw)
    except ValueError:
        log.warning("Invalid --concurrency value '%s', using auto", raw)
        return auto_concurrency()
    return max(1, concurrency)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    if args.progress and not _TQDM_AVAILABLE:
        log.info("Tip: install tqdm for a live progress bar  (pip install tqdm)")

    concurrency = _resolve_concurrency(args.concurrency)
    image_concurrency = max(1, args.image_concurrency)

    session = build_session(
        verify_ssl=args.verify_ssl,
        pool_size=concurrency + image_concurrency,
    )
    fetcher = ReadmeFetcher(
        session=session,
        branches=tuple(args.branches or (DEFAULT_BRANCH,)),
        timeout=args.timeout,
    )
    crawler = Crawler(
        seed=args.seed,
        fetcher=fetcher,
        store=ImageStore(Path(args.output)),
        concurrency=concurrency,
        image_concurrency=image_concurrency,
        max_depth=args.depth,
        show_progress=args.progress and not args.debug,
    )

    t0 = time.monotonic()
    try:
        result = crawler.run()
    except CrawlError as exc:
        log.error("Seed repository %s could not be crawled: %s", args.seed, exc)
        return 1
    except Exception:  # pylint: disable=broad-except
        log.exception("Unexpected error crawling seed repository %s", args.seed)
        return 1
    log.info("Total elapsed time: %.1f s", time.monotonic() - t0)

    if args.summary_json:
        summary_path = Path(args.summary_json)
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        summary_path.write_text(
            json.dumps(result.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        log.info("Summary written to %s", summary_path)

    return 130 if result.cancelled else 0


if __name__ == "__main__":
    sys.exit(main())
