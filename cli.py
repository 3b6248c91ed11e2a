import argparse
import asyncio
import sys

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from hn_distill.client import HNClient
from hn_distill.config import get_max_comments, save_config
from hn_distill.constants import DEFAULT_MAX_COMMENTS, MAX_DEPTH
from hn_distill.logging_config import configure_logging
from hn_distill.render import render_thread
from hn_distill.thread import fetch_thread
from hn_distill.url_utils import parse_item_id

# Diagnostics only; the thread itself goes to stdout untouched by rich markup
console = Console(stderr=True)


async def main(args) -> int:
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        item_id = parse_item_id(args.item)
    except ValueError:
        console.print(f"[red]Error: cannot parse item ID from '{escape(args.item)}'[/]")
        return 1

    max_comments = args.max or get_max_comments() or DEFAULT_MAX_COMMENTS
    if args.max and args.save_default:
        save_config("max_comments", args.max)

    console.print(f"[dim]Fetching item {item_id}...[/]")

    async with HNClient() as client:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task(
                f"[cyan]Fetching up to {max_comments} comments (depth {MAX_DEPTH})...",
                total=max_comments,
            )

            def on_wave(fetched: int, total: int) -> None:
                progress.update(task, completed=fetched, total=total)

            thread = await fetch_thread(
                client,
                item_id,
                max_comments=max_comments,
                max_depth=MAX_DEPTH,
                progress_callback=on_wave,
            )

    if thread is None:
        console.print("[red]Error: could not fetch item[/]")
        return 1

    if thread.root.kids:
        console.print(f"[dim]Done: {len(thread.comments)} comments fetched[/]")

    sys.stdout.write(render_thread(thread))
    return 0


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch a Hacker News thread and output structured text for analysis.",
        epilog=(
            "examples:\n"
            "  hn-distill 46820783\n"
            "  hn-distill https://news.ycombinator.com/item?id=46820783\n"
            "  hn-distill 46820783 --max 500"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "item", help="HN item ID (e.g. 46820783) or full URL"
    )
    parser.add_argument(
        "--max",
        type=_positive_int,
        default=None,
        help=f"Max comments to fetch (default: saved value or {DEFAULT_MAX_COMMENTS})",
    )
    parser.add_argument(
        "--save-default",
        action="store_true",
        help="Remember --max as the default for later runs",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Emit debug logs on stderr"
    )
    return parser


def parse_args(argv=None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.save_default and args.max is None:
        parser.error("--save-default requires --max")
    return args


def run() -> None:
    args = parse_args()
    sys.exit(asyncio.run(main(args)))


if __name__ == "__main__":
    run()
