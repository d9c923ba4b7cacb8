#!/usr/bin/env python3
"""
Main CLI entry point for vibeguide
"""

import asyncio
import logging
import random
from typing import Dict, List, Optional

import typer
from rich.table import Table

from vibeguide import __build_id__, __version__
from vibeguide.config import settings
from vibeguide.config.constants import BLANK_ROW_COUNT
from vibeguide.exceptions import VibeguideError
from vibeguide.guide.controller import GuideConfig, GuideController
from vibeguide.guide.layout import check_layout, generate_layout, streams_for_rows
from vibeguide.models.guide import Category, Layout, Stream
from vibeguide.services.twitch_client import TwitchClient
from vibeguide.ui.gui import gui
from vibeguide.utils.logging import get_logger
from vibeguide.utils.output import console, print_json

app = typer.Typer(help="vibeguide - a cable-TV style channel guide for live Twitch streams")


def version():
    """Show vibeguide version"""
    typer.echo(f"vibeguide version {__version__}")
    typer.echo(f"Build ID: {__build_id__}")


def sample_guide(channels: int, streams_per_channel: int) -> tuple:
    """Synthetic categories and streams for inspecting the layout offline."""
    categories = [Category(id=str(n), name=f"Channel {n + 1}") for n in range(channels)]
    streams_by_category: Dict[str, List[Stream]] = {
        category.id: [
            Stream(user_login=f"streamer{category.id}_{n}", user_name=f"Streamer {category.id}.{n}")
            for n in range(streams_per_channel)
        ]
        for category in categories
    }
    return categories, streams_by_category


def load_live_guide(config: GuideConfig) -> GuideController:
    """Fetch categories and streams from the backend into a controller."""

    async def _load() -> GuideController:
        async with TwitchClient(settings.get_api_url()) as client:
            controller = GuideController(client, config)
            await controller.load()
            return controller

    return asyncio.run(_load())


def layout_table(layout: Layout, categories: List[Category], bound: Dict[str, int]) -> Table:
    table = Table(title=f"Layout ({len(layout)} rows, max width {layout.max_width:g})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Row")
    table.add_column("Channel")
    table.add_column("Widths")
    table.add_column("Streams", justify="right")

    for actual_index, row in enumerate(layout.rows):
        if row.is_blank:
            table.add_row(str(actual_index), row.id, "", "[dim]blank[/dim]", "")
            continue
        widths = " ".join(f"{width:g}" for width in row.widths())
        table.add_row(
            str(actual_index),
            row.id,
            categories[row.category_index].name,
            widths,
            f"{bound.get(row.id, 0)}/{len(row.blocks)}",
        )
    return table


def layout(
    channels: int = typer.Option(8, "--channels", "-c", min=0, help="Number of synthetic channels"),
    streams: int = typer.Option(6, "--streams", "-s", min=0, help="Streams per synthetic channel"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a repeatable layout"),
    blank_rows: bool = typer.Option(
        True, "--blank-rows/--no-blank-rows", help="Include leading blank rows"
    ),
    size_by_name: bool = typer.Option(
        False, "--size-by-name/--random-widths", help="Size blocks by streamer name length"
    ),
    live: bool = typer.Option(False, "--live", help="Use channels from the backend API"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Generate a guide layout and print its rows."""
    try:
        if live:
            config = GuideConfig.from_settings(
                include_leading_blank_rows=blank_rows, size_by_name=size_by_name, seed=seed
            )
            controller = load_live_guide(config)
            categories = controller.categories
            streams_by_category = controller.streams_by_category
            guide_layout = controller.layout
        else:
            categories, streams_by_category = sample_guide(channels, streams)
            guide_layout = generate_layout(
                categories,
                streams_by_category,
                include_leading_blank_rows=blank_rows,
                blank_row_count=BLANK_ROW_COUNT,
                rng=random.Random(seed),
                size_by_name=size_by_name,
            )
    except VibeguideError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1) from e

    problems = check_layout(guide_layout)
    bound = streams_for_rows(guide_layout, categories, streams_by_category)

    if json_output:
        print_json(
            {
                "max_width": guide_layout.max_width,
                "leading_blank_rows": guide_layout.leading_blank_rows,
                "rows": [
                    {
                        "id": row.id,
                        "category": None if row.is_blank else categories[row.category_index].name,
                        "widths": row.widths(),
                        "bound_streams": bound.get(row.id, 0),
                    }
                    for row in guide_layout.rows
                ],
                "problems": problems,
            }
        )
    else:
        console.print(layout_table(guide_layout, list(categories), bound))
        for problem in problems:
            console.print(f"  [red]•[/red] {problem}")

    if problems:
        raise typer.Exit(1)


def load_top_streams(count: int) -> List[Stream]:
    """Fetch the top live streams across all categories."""

    async def _load() -> List[Stream]:
        async with TwitchClient(settings.get_api_url()) as client:
            return await client.fetch_top_streams(count)

    return asyncio.run(_load())


def top(
    count: int = typer.Option(20, "--count", "-n", min=1, help="Number of streams to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the most watched live streams right now."""
    try:
        streams = load_top_streams(count)
    except VibeguideError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1) from e

    if json_output:
        print_json(
            [
                {
                    "rank": rank,
                    "user_login": stream.user_login,
                    "user_name": stream.display_name,
                    "game_name": stream.game_name,
                    "viewer_count": stream.viewer_count,
                    "title": stream.title,
                }
                for rank, stream in enumerate(streams, start=1)
            ]
        )
        return

    if not streams:
        console.print("[yellow]No live streams returned[/yellow]")
        return

    table = Table(title=f"Top {len(streams)} live streams")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Streamer")
    table.add_column("Category")
    table.add_column("Viewers", justify="right")
    table.add_column("Title", overflow="ellipsis", no_wrap=True)
    for rank, stream in enumerate(streams, start=1):
        table.add_row(
            str(rank),
            stream.display_name,
            stream.game_name,
            f"{stream.viewer_count:,}",
            stream.title,
        )
    console.print(table)


def env():
    """Show vibeguide environment variables"""
    table = Table(title="Environment")
    table.add_column("Variable")
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Valid")
    for name, info in settings.get_env_info().items():
        value = info["value"] if info["is_set"] else "[dim]unset[/dim]"
        valid = "[green]yes[/green]" if info["valid"] else "[red]no[/red]"
        table.add_row(name, value, str(info["default"]), valid)
    console.print(table)


# Callback for global options
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    vibeguide - channel guide for live Twitch streams

    [bold]Examples:[/bold]

    Open the guide:
        [cyan]vibeguide gui[/cyan]

    Inspect a repeatable layout:
        [cyan]vibeguide layout --seed 7 --channels 10[/cyan]

    List the most watched streams:
        [cyan]vibeguide top --count 10[/cyan]
    """
    if verbose:
        get_logger("vibeguide", logging.DEBUG)
        for problem in settings.validate_all_env_vars():
            console.print(f"[yellow]Warning:[/yellow] {problem}")


app.callback()(main)
app.command()(gui)
app.command()(layout)
app.command()(top)
app.command()(env)
app.command()(version)


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
