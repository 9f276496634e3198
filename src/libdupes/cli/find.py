"""
Find command.

This command loads an item file and lists the duplicate sets found in
one of its libraries.
"""

import json
from pathlib import Path
from typing import Optional

import click

from libdupes.cli.formatting import (
    console,
    create_progress,
    format_duration,
    format_number,
    print_config,
    print_duplicate_sets,
    print_header,
    print_section,
    print_statistics,
    print_success,
)
from libdupes.cli.main import pass_context
from libdupes.cli.utils import configure_logging, load_config
from libdupes.dedup import Duplicates
from libdupes.store import MemoryItemStore, load_items
from libdupes.utils.exceptions import LibDupesError


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--library-id",
    type=int,
    help="Library to scan (default: config value, else the user library)",
)
@click.option(
    "--item",
    "item_id",
    type=int,
    help="Only show the duplicate set of this item",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write duplicate sets and statistics to this JSON file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format",
)
@pass_context
def find(
    ctx,
    input_path: Path,
    library_id: Optional[int],
    item_id: Optional[int],
    output_path: Optional[Path],
    output_format: str,
):
    """Find duplicate items.

    INPUT_PATH is a JSONL, JSON or YAML file of items.

    \b
    Examples:
      # List every duplicate set of the user library
      libdupes find library.jsonl

      # Show the duplicates of one item as JSON
      libdupes find library.jsonl --item 42 --format json
    """
    config = load_config(ctx.config_path)
    configure_logging(config, verbose=ctx.verbose, quiet=ctx.quiet)

    if library_id is None:
        library_id = config.library_id

    try:
        items = load_items(input_path)
    except LibDupesError as e:
        raise click.ClickException(str(e))

    store = MemoryItemStore(items)
    as_json = output_format.lower() == "json"
    show_progress = not as_json and not ctx.quiet

    if show_progress:
        print_header("libdupes", "Duplicate item detection")
        print_config({
            "Input": str(input_path),
            "Items": format_number(len(items)),
            "Library": "user library" if library_id is None else library_id,
        })
        console.print()

    duplicates = Duplicates(store, library_id, config.duplicates)
    try:
        if show_progress:
            with create_progress() as progress:
                task = progress.add_task("Finding duplicates...", total=100)

                def on_progress(message: str, percent: int) -> None:
                    progress.update(task, description=message, completed=percent)

                duplicates.progress_callback = on_progress
                duplicates.find_duplicates()
        else:
            duplicates.find_duplicates()
    except LibDupesError as e:
        raise click.ClickException(str(e))

    stats = duplicates.get_statistics()

    if item_id is not None:
        members = sorted(duplicates.duplicates_of(item_id))
        sets = [members] if len(members) > 1 else []
    else:
        sets = duplicates.duplicate_sets()

    result = {
        "library_id": library_id,
        "duplicate_sets": sets,
        "statistics": stats.model_dump(),
    }

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)

    if as_json:
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    if ctx.quiet:
        return

    if item_id is not None and not sets:
        console.print(f"Item {item_id} has no duplicates")
    elif sets:
        print_duplicate_sets(sets, store.items)
    else:
        console.print("No duplicates found")

    print_section("Matches by pass")
    for name, merges in stats.merges_by_pass.items():
        console.print(f"  {name}: {format_number(merges)}")

    console.print()
    print_statistics({
        "Duplicate items": format_number(stats.duplicate_items),
        "Duplicate sets": format_number(stats.duplicate_sets),
        "Largest set": stats.largest_set,
        "Duration": format_duration(stats.duration_ms),
    })

    if output_path:
        print_success(f"Results written to [cyan]{output_path}[/cyan]")
