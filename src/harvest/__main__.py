import argparse
import re
import sys

from src.config.logger_config import logger
from src.config.settings import HarvestSettings, load_settings
from src.harvest.application.workflows.harvest_index import HarvestWorkflowConfig
from src.harvest.domain.errors import HarvestError
from src.harvest.harvest import run_harvest


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a value >= 1, got {value}")
    return value


def _regex(raw: str) -> str:
    try:
        re.compile(raw)
    except re.error as exc:
        raise argparse.ArgumentTypeError(f"invalid regular expression {raw!r}: {exc}") from None
    return raw


def build_parser(settings: HarvestSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitemap-harvest",
        description="Walk a sitemap index and write every matching product URL to a CSV file.",
    )
    parser.add_argument("--root", default=settings.root_url, help="Root sitemap URL")
    parser.add_argument("--out", default=settings.output_path, help="Output CSV path")
    parser.add_argument("--concurrency", type=_positive_int, default=settings.concurrency)
    parser.add_argument("--timeout", type=_positive_int, default=settings.timeout_ms, help="Per-request timeout (ms)")
    parser.add_argument("--ua", default=settings.user_agent, help="User-Agent header")
    parser.add_argument("--header", default=settings.header, help="CSV header column name")
    parser.add_argument("--leaf-pattern", type=_regex, default=settings.leaf_pattern)
    parser.add_argument("--index-pattern", type=_regex, default=settings.index_pattern)
    parser.add_argument("--retries", type=_positive_int, default=settings.retries)
    parser.add_argument("--max-depth", type=_positive_int, default=settings.max_depth)
    parser.add_argument(
        "--no-fallback",
        dest="fallback",
        action="store_false",
        default=settings.fallback_to_direct_leaves,
        help="Fail instead of reading root entries as leaves when no child index matches",
    )
    parser.add_argument("--no-progress", dest="progress", action="store_false", default=True)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser(load_settings()).parse_args(argv)

    logger.info("Root sitemap: {}", args.root)
    logger.info("Output: {}", args.out)
    logger.info("Concurrency: {}, Timeout: {}ms", args.concurrency, args.timeout)

    try:
        run_harvest(
            root_url=args.root,
            output_path=args.out,
            header=args.header,
            leaf_pattern=args.leaf_pattern,
            index_pattern=args.index_pattern,
            timeout_ms=args.timeout,
            user_agent=args.ua,
            retries=args.retries,
            workflow_config=HarvestWorkflowConfig(
                worker_count=args.concurrency,
                max_depth=args.max_depth,
                fallback_to_direct_leaves=args.fallback,
            ),
            show_progress=args.progress,
        )
    except HarvestError as exc:
        logger.error("Harvest failed: {}", exc)
        return 1
    return 0


# python -m src.harvest --root https://example.com/sitemap.xml --out exports/products_map.csv
if __name__ == "__main__":
    sys.exit(main())
