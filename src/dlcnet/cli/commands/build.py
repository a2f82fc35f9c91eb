"""
Build Command - Resolve both tables into the requirement graph.

Prints a summary of the graph (routes, requirement edges, regions and
short names missing from the lookup), or the full graph as JSON.
"""

import json
import sys
from typing import List

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from ..utils import echo_warning, load_engine

console = Console()


class BuildSummary(BaseModel):
    """
    Structured response for the build command.
    """
    nodes: int
    edges: int
    indexed_routes: int
    regions: List[str]
    unresolved: List[str]
    isolated: int


@click.command()
@click.argument("lookup_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("network_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output the full graph as JSON")
def build(lookup_file: str, network_file: str, as_json: bool):
    """
    Build the DLC requirement graph and summarize it.

    \b
    Examples:
        dlcnet build route_lookup.csv dlc_network.csv
        dlcnet build route_lookup.csv dlc_network.csv --json
    """
    engine = load_engine(lookup_file, network_file)
    if engine is None:
        sys.exit(1)

    result = engine.result
    stats = result.graph.get_stats()

    if as_json:
        payload = result.graph.to_dict()
        payload["regions"] = result.regions
        payload["unresolved"] = result.unresolved
        click.echo(json.dumps(payload, indent=2))
        return

    summary = BuildSummary(
        nodes=stats["total_nodes"],
        edges=stats["total_edges"],
        indexed_routes=len(result.dependency_index),
        regions=result.regions,
        unresolved=result.unresolved,
        isolated=stats["isolated"],
    )

    console.print(
        f"[bold]🚂 {summary.nodes} routes, {summary.edges} requirements "
        f"({summary.indexed_routes} routes indexed)[/bold]\n"
    )

    table = Table(title="Routes by region")
    table.add_column("Region", style="cyan")
    table.add_column("Routes", justify="right")
    for region in summary.regions:
        table.add_row(region, str(stats["nodes_by_region"].get(region, 0)))
    console.print(table)

    if summary.unresolved:
        echo_warning(
            f"{len(summary.unresolved)} short names are not in the lookup: "
            + ", ".join(summary.unresolved)
        )
