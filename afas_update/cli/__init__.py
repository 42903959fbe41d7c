import click

from .commands.render import render_command
from .commands.show import show_type_command
from .commands.types import list_types_command


@click.group()
def app() -> None:
    pass


app.add_command(list_types_command, name="types")
app.add_command(show_type_command, name="show")
app.add_command(render_command, name="render")
__all__ = ["app"]
