"""Dashboard theme registry."""

from typing import Dict, Optional

from .dark_theme import DARK_THEME
from .light_theme import LIGHT_THEME

DEFAULT_THEME = LIGHT_THEME

THEMES: Dict[str, dict] = {"light": LIGHT_THEME, "dark": DARK_THEME}


def get_theme(name: Optional[str] = None) -> dict:
    """Look up a theme by name, defaulting to the light theme."""
    if not name:
        return DEFAULT_THEME
    return THEMES.get(name.lower(), DEFAULT_THEME)


__all__ = ["DARK_THEME", "LIGHT_THEME", "DEFAULT_THEME", "THEMES", "get_theme"]
