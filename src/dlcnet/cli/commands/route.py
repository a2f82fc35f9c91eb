"""
Route Command - Show which DLCs a route's locomotives need.

Terminal rendition of the info panel: one row per locomotive with the
DLCs it needs, plus the graph nodes and edges that selecting the route
would highlight.
"""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from ...core.types import NodeClass
from ..utils import echo_error, load_engine

console = Console()


@click.command()
@click.argument("lookup_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("network_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("route_id")
@click.option("--json", "as_json", is_flag=True, help="Output details as JSON")
def route(lookup_file: str, network_file: str, route_id: str, as_json: bool):
    """
    Show the locomotives of ROUTE_ID and the DLCs each one requires.

    \b
    Examples:
        dlcnet route route_lookup.csv dlc_network.csv RTA
    """
    engine = load_engine(lookup_file, network_file)
    if engine is None:
        sys.exit(1)

    result = engine.result
    if route_id not in result.dependency_index and not result.graph.has_node(route_id):
        echo_error(f"Route not found: {route_id}")
        sys.exit(1)

    details = engine.route_details(route_id)
    classification = engine.classify(route_id)

    if as_json:
        payload = details.model_dump()
        payload["locomotive_count"] = details.locomotive_count
        payload["highlighted_nodes"] = classification.required()
        payload["highlighted_edges"] = classification.highlighted_edges()
        click.echo(json.dumps(payload, indent=2))
        return

    console.print(f"[bold]{details.display_name}[/bold] ({details.route_id})")
    console.print(f"Region: {details.region}")
    console.print(f"Locomotives: {details.locomotive_count}\n")

    if not details.has_requirements:
        console.print(f"No DLC requirements found for {route_id}.")
        return

    table = Table(title="Required DLCs For Additional Playable Trains")
    table.add_column("Locomotive", style="cyan")
    table.add_column("Included in")
    for item in details.locomotives:
        names = []
        for dlc in item.required:
            label = dlc.identity.short_name
            if dlc.identity.canonical_name:
                label += f" ({dlc.identity.canonical_name})"
            if not dlc.identity.known:
                label = f"[dim]{label}[/dim]"
            names.append(label)
        table.add_row(item.locomotive or "-", ", ".join(names) or "[dim]base route[/dim]")
    console.print(table)

    required_nodes = [
        node_id for node_id, cls in classification.node_class.items() if cls is NodeClass.REQUIRED
    ]
    if required_nodes:
        console.print(f"\nHighlighted in graph: {', '.join(required_nodes)}")
