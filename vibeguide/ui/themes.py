"""
vibeguide TUI theme definitions.

Custom themes for the guide using Textual's theming system. The palette
borrows from late-night cable listings: deep navy panels with bright accents.
"""

from typing import Any

from textual.theme import Theme

# =============================================================================
# Dark Theme (Default)
# =============================================================================

VIBEGUIDE_DARK = Theme(
    name="vibeguide-dark",
    primary="#16213E",      # Navy - channel labels
    secondary="#0F3460",    # Deep blue - program cells
    accent="#00FF88",       # Signal green - focus/highlight
    foreground="#E0E0E0",
    background="#0B0F1F",
    surface="#131A33",
    panel="#1A2347",
    boost="#243061",
    success="#00FF88",
    warning="#FFD166",
    error="#E94560",
    dark=True,
)

# =============================================================================
# Light Theme
# =============================================================================

VIBEGUIDE_LIGHT = Theme(
    name="vibeguide-light",
    primary="#0969DA",
    secondary="#DDE6F5",
    accent="#BF3989",
    foreground="#1F2328",
    background="#FFFFFF",
    surface="#F6F8FA",
    panel="#F0F2F5",
    boost="#DFE3E8",
    success="#1A7F37",
    warning="#9A6700",
    error="#CF222E",
    dark=False,
)

# =============================================================================
# Nord Theme
# =============================================================================

VIBEGUIDE_NORD = Theme(
    name="vibeguide-nord",
    primary="#5E81AC",      # Frost blue
    secondary="#3B4252",    # Polar night
    accent="#EBCB8B",       # Aurora yellow
    foreground="#ECEFF4",
    background="#2E3440",
    surface="#3B4252",
    panel="#434C5E",
    boost="#4C566A",
    success="#A3BE8C",
    warning="#EBCB8B",
    error="#BF616A",
    dark=True,
)

# =============================================================================
# Theme Registry
# =============================================================================

VIBEGUIDE_THEMES: dict[str, Theme] = {
    "vibeguide-dark": VIBEGUIDE_DARK,
    "vibeguide-light": VIBEGUIDE_LIGHT,
    "vibeguide-nord": VIBEGUIDE_NORD,
}

DEFAULT_THEME = "vibeguide-dark"


def register_all_themes(app: Any) -> None:
    """
    Register all custom vibeguide themes with the app.

    Args:
        app: The Textual App instance
    """
    for theme in VIBEGUIDE_THEMES.values():
        app.register_theme(theme)


def get_theme_names() -> list[str]:
    """Get list of all available vibeguide theme names."""
    return list(VIBEGUIDE_THEMES.keys())


def resolve_theme(theme_name: str | None) -> str:
    """Return ``theme_name`` if it is a vibeguide theme, else the default."""
    if theme_name in VIBEGUIDE_THEMES:
        return theme_name
    return DEFAULT_THEME
