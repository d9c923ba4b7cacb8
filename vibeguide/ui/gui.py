"""
GUI entry point for vibeguide - launches the channel grid TUI
"""

from typing import Optional

import typer

from vibeguide.exceptions import VibeguideError
from vibeguide.utils.output import console

app = typer.Typer()


@app.command()
def gui(
    theme: Optional[str] = typer.Option(
        None,
        "--theme",
        "-t",
        help="Theme to use (vibeguide-dark, vibeguide-light, vibeguide-nord)",
    ),
    blank_rows: Optional[bool] = typer.Option(
        None,
        "--blank-rows/--no-blank-rows",
        help="Start with blank rows above the first channel (default: saved preference)",
    ),
    size_by_name: Optional[bool] = typer.Option(
        None,
        "--size-by-name/--random-widths",
        help="Size program cells by streamer name length",
    ),
    auto_scroll: Optional[bool] = typer.Option(
        None,
        "--auto-scroll/--no-auto-scroll",
        help="Scroll the guide automatically when idle",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for repeatable layouts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to the log file"),
):
    """Open the live channel guide."""
    from vibeguide.ui.guide_app import run_guide
    from vibeguide.ui.themes import get_theme_names

    if theme is not None and theme not in get_theme_names():
        console.print(f"Unknown theme '{theme}'. Available: {', '.join(get_theme_names())}", style="red")
        raise typer.Exit(1)

    try:
        run_guide(
            theme=theme,
            include_leading_blank_rows=blank_rows,
            size_by_name=size_by_name,
            auto_scroll=auto_scroll,
            seed=seed,
            verbose=verbose,
        )
    except KeyboardInterrupt:
        pass
    except VibeguideError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1) from e
