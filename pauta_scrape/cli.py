"""Command-line interface for the catalog scraper."""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from pauta_scrape.config import get_output_path, partial_path_for  # noqa: E402
from pauta_scrape.discover_categories import discover_categories, print_categories  # noqa: E402
from pauta_scrape.logging_config import get_logger, setup_logging  # noqa: E402
from pauta_scrape.scraper import FetchError  # noqa: E402
from pauta_scrape.snapshot import load_partial, load_snapshot, snapshot_stats  # noqa: E402
from pauta_scrape.workflows import run_crawl  # noqa: E402

__all__ = ["main", "parse_args", "show_stats", "list_categories"]

logger = get_logger("cli")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Harvest the storefront catalog into a JSON snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full crawl into public/produtos.json
  python -m pauta_scrape.cli

  # Crawl into another file, without cooldown pauses
  python -m pauta_scrape.cli --output /tmp/produtos.json --no-pause

  # Only list the categories found in the site menu
  python -m pauta_scrape.cli --list-categories

  # Summarise an existing snapshot
  python -m pauta_scrape.cli --stats
        """,
    )

    parser.add_argument(
        "--output",
        help="Snapshot path (default: $PAUTA_OUTPUT_PATH or public/produtos.json)",
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Skip the cooldown pauses between enrichment batches and category groups",
    )
    parser.add_argument(
        "--list-categories",
        action="store_true",
        help="Discover categories, print them and exit",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show product counts of an existing snapshot and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Don't write the JSONL log file",
    )

    return parser.parse_args(argv)


def show_stats(path: str) -> None:
    """Display per-category product counts of a snapshot."""
    stats = snapshot_stats(load_snapshot(path))

    print(f"\n{'='*50}")
    print(f"Snapshot: {path}")
    print(f"{'='*50}")
    print(f"\nCategories: {stats['categories']}")
    print(f"Total products: {stats['products']}")

    if stats["by_category"]:
        print("\nProducts by category:")
        for category, count in stats["by_category"].items():
            print(f"  {category}: {count}")
    else:
        print("\nNo products yet")

    partial_path = partial_path_for(path)
    if Path(partial_path).exists():
        print(f"\nPartial enrichment file: {len(load_partial(partial_path))} products")
    print()


def list_categories() -> None:
    try:
        categories = discover_categories()
    except FetchError as e:
        logger.error(f"Category discovery failed for {e.url}: {e.cause}")
        return
    print_categories(categories)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for CLI."""
    args = parse_args(argv)
    output_path = args.output or get_output_path()

    if args.stats:
        show_stats(output_path)
        return

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )

    if args.list_categories:
        list_categories()
        return

    snapshot = run_crawl(output_path=output_path, pause=not args.no_pause)
    total = sum(len(products) for products in snapshot.values())
    print(f"\nSaved {total} products in {len(snapshot)} categories to {output_path}")


if __name__ == "__main__":
    main()
