import click

from .commands.apply import apply_command
from .commands.types import list_types_command


@click.group()
def app() -> None:
    pass


app.add_command(apply_command, name="apply")
app.add_command(list_types_command, name="types")
__all__ = ["app"]
