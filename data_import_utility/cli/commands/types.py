import click
from rich.console import Console
from rich.table import Table

from ...catalog import MAPPING_RULES, VALUE_TRANSFORMATIONS
from ...comparisons import COMPARISON_OPERATIONS
from ...registry import get_registry

console = Console()


def _kind(cls: type) -> str:
    if cls in MAPPING_RULES:
        return "rule"
    if cls in VALUE_TRANSFORMATIONS:
        return "transformation"
    if cls in COMPARISON_OPERATIONS:
        return "comparison"
    return "custom"


@click.command()
def list_types_command() -> None:
    """List the registered rules, transformations and comparison operations."""
    table = Table(title="Registered Types")
    table.add_column("Type Id", style="cyan")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Description")
    for type_id, cls in get_registry().get_all_registered_types().items():
        table.add_row(
            type_id,
            _kind(cls),
            getattr(cls, "display_name", cls.__name__),
            getattr(cls, "description", ""),
        )
    console.print(table)
