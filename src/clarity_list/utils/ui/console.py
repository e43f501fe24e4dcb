"""Shared Rich consoles for Clarity List output."""

from functools import lru_cache

from rich.console import Console

_color_enabled = True


@lru_cache(maxsize=None)
def get_console(highlight: bool = True) -> Console:
    """Shared console; pass ``highlight=False`` for raw values such as IDs."""
    return Console(highlight=highlight, no_color=not _color_enabled)


def set_color(enabled: bool) -> None:
    """Turn colour on or off for every shared console (``output.color``)."""
    global _color_enabled
    _color_enabled = enabled
    get_console().no_color = not enabled
    get_console(highlight=False).no_color = not enabled
