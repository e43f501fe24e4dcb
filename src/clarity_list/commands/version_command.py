"""Command 'version' of clarity"""

import typer

from clarity_list import __version__
from clarity_list.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information"""
    console.print(__version__)
