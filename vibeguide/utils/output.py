"""Shared console output utilities."""

import json
from typing import Any

from rich.console import Console

# Shared console instance for all CLI output
console = Console()


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout.

    Handles non-serializable values by converting them to strings.
    """
    print(json.dumps(data, indent=2, default=str))
