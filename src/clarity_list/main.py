"""Main entry point for Clarity List."""

import typer

from clarity_list.commands import (
    add_command,
    complete_command,
    config,
    delete_command,
    edit_command,
    list_command,
    version_command,
)
from clarity_list.services.config_service import get_config_service
from clarity_list.utils.logger import set_level
from clarity_list.utils.ui.console import set_color

app = typer.Typer(
    name="clarity",
    help="Clarity List - a to-do list that estimates how long your tasks take",
    no_args_is_help=True,
)

# Top-level commands
app.command("add")(add_command.add)
app.command("list")(list_command.list_tasks)
app.command("complete")(complete_command.complete_command)
app.command("edit")(edit_command.edit_command)
app.command("delete")(delete_command.delete_command)
app.command("version")(version_command.version)

app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    # Output and log settings apply before any command runs
    try:
        config = get_config_service().config
    except RuntimeError:
        # A broken config file is reported by the command that needs it
        return
    set_color(config.output.color)
    set_level(config.logging.level)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
