import click
from rich.console import Console
from rich.table import Table

from ...infrastructure.schema_registry import get_hooks, get_schema, list_object_types

console = Console()


@click.command()
def list_types_command() -> None:
    table = Table(title="Update Connector Object Types")
    table.add_column("Type", style="cyan")
    table.add_column("Id Field")
    table.add_column("Description")
    table.add_column("Hooks", style="dim")
    for object_type in sorted(list_object_types()):
        schema = get_schema(object_type)
        table.add_row(
            schema.type,
            schema.id_field or "",
            schema.description,
            get_hooks(object_type).describe(),
        )
    console.print(table)
