import click
from rich.console import Console
from rich.table import Table

from ...domain.services.element_validator import normalize_action
from ...exceptions import SchemaError
from ...infrastructure.schema_registry import schema_for

console = Console()


@click.command()
@click.argument("object_type")
@click.option("--parent", "parent_type", default="", help="Type of the embedding object")
@click.option("--action", default="", help="Action the schema applies to (insert/update/delete)")
def show_type_command(object_type: str, parent_type: str, action: str) -> None:
    """Show the fields and embedded objects of OBJECT_TYPE.

    The schema shown is the one that applies when the object is embedded in
    --parent and validated for --action.
    """
    normalized = normalize_action(action)
    if normalized is None:
        raise click.BadParameter(f"unknown action {action!r}", param_hint="--action")
    try:
        schema = schema_for(object_type, parent_type=parent_type, action=normalized)
    except SchemaError as e:
        raise click.ClickException(str(e)) from e

    title = f"{schema.type} fields"
    if schema.description:
        title = f"{schema.type} ({schema.description}) fields"
    fields = Table(title=title)
    fields.add_column("Field", style="cyan")
    fields.add_column("Alias")
    fields.add_column("Type")
    fields.add_column("Required")
    fields.add_column("Default")
    fields.add_column("Label", style="dim")
    for definition in schema.fields:
        default = repr(definition.default) if definition.has_default else ""
        if definition.always_default and default:
            default = f"{default} (always)"
        fields.add_row(
            definition.name,
            definition.alias,
            definition.type,
            definition.required.name.lower(),
            default,
            definition.label,
        )
    console.print(fields)

    if schema.objects:
        objects = Table(title=f"{schema.type} embedded objects")
        objects.add_column("Reference", style="cyan")
        objects.add_column("Type")
        objects.add_column("Alias")
        objects.add_column("Multiple")
        objects.add_column("Required")
        for relation in schema.objects:
            objects.add_row(
                relation.name,
                relation.type,
                relation.alias,
                "yes" if relation.multiple else "no",
                "yes" if relation.required else "no",
            )
        console.print(objects)
