"""
Command-line interface for feedlist.

Uses Typer to load a feed, show a summary of its items and either print the
rendered list markup or write it into a standalone HTML page.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import DIRECTIONS, load_config
from .logging_utils import setup_logging
from .reader import FeedReader
from .renderer import render_page

app = typer.Typer(add_completion=False)
console = Console()


def _parse_params(values: list[str]) -> dict[str, str]:
    params = {}
    for value in values:
        if "=" not in value:
            raise typer.BadParameter(f"Expected key=value, got {value!r}", param_hint="--param")
        key, _, val = value.partition("=")
        params[key.strip()] = val
    return params


@app.command()
def load(
    url: str = typer.Argument(..., help="Feed URL; [[name]] placeholders are filled from --param."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    item_location: str | None = typer.Option(
        None, "--item-location", "-l", help="Tag or key holding one item (default: item)."
    ),
    param: list[str] = typer.Option([], "--param", "-p", help="URL parameter as key=value."),
    start: int = typer.Option(0, "--start", help="First item to render."),
    count: int | None = typer.Option(None, "--count", "-n", help="Number of items to render."),
    convert: bool | None = typer.Option(
        None, "--convert/--raw", help="Normalize XML items or keep raw elements."
    ),
    strip: bool = typer.Option(True, "--strip/--no-strip", help="Strip embedded tags from descriptions."),
    direction: str | None = typer.Option(None, "--direction", help="vertical or horizontal."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write an HTML page here."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Load a feed and render its items as a navigable list."""
    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if log_level:
        cfg.logging.level = log_level
    if item_location:
        cfg.reader.item_location = item_location
    if convert is not None:
        cfg.reader.convert_xml = convert
    if not strip:
        cfg.reader.strip_tags = None
    if direction:
        if direction not in DIRECTIONS:
            raise typer.BadParameter("Expected vertical or horizontal", param_hint="--direction")
        cfg.reader.direction = direction
    # Pagination is applied below, so the full list is rendered on demand.
    cfg.reader.render = False

    setup_logging(cfg.logging, output.parent if output else None)

    reader = FeedReader(cfg.reader, cfg.fetch)
    response = reader.load_sync(url, params=_parse_params(param))

    if response.error:
        console.print(response.error, style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)

    if response.items is None:
        console.print(f"{len(response.items_raw or [])} raw elements matched '{cfg.reader.item_location}'")
        return

    table = Table(title=response.url)
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Image")
    for item in response.items:
        table.add_row(str(item.index), str(item.get("title", "")), item.image)
    console.print(table)

    response.html = reader.render(response.items, start, count).html if response.items else ""
    if output:
        render_page(response, output)
        console.print(f"Page written: {output}")
    else:
        console.print(response.html, markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
