"""
Layout Command - Run the force simulation headless and export positions.

Writes the renderer read model (nodes with x/y, edges, regions) once the
layout has come to rest, so a static page can draw it without running
any physics itself.
"""

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from ...config import LayoutSettings
from ...layout.simulation import SimulationError
from ..utils import echo_error, echo_info, echo_success, load_engine


@click.command()
@click.argument("lookup_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("network_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default="layout.json", help="Output JSON file ('-' for stdout)")
@click.option("--width", type=float, default=None, help="Viewport width")
@click.option("--height", type=float, default=None, help="Viewport height")
@click.option("--max-ticks", type=int, default=None, help="Stop after this many ticks")
def layout(
    lookup_file: str,
    network_file: str,
    output: str,
    width: float | None,
    height: float | None,
    max_ticks: int | None,
):
    """
    Compute node positions and write the read model as JSON.

    \b
    Examples:
        dlcnet layout route_lookup.csv dlc_network.csv -o layout.json
        dlcnet layout route_lookup.csv dlc_network.csv --width 400 --height 400 -o -
    """
    overrides = {
        key: value
        for key, value in {"width": width, "height": height, "max_ticks": max_ticks}.items()
        if value is not None
    }
    try:
        settings = LayoutSettings(**overrides)
    except ValidationError as e:
        echo_error(f"Invalid layout settings: {e}")
        sys.exit(1)

    engine = load_engine(lookup_file, network_file, settings=settings)
    if engine is None:
        sys.exit(1)

    try:
        ticks = engine.layout.run()
    except SimulationError as e:
        echo_error(f"Layout failed: {e}")
        sys.exit(1)

    payload = json.dumps(engine.snapshot().model_dump(), indent=2)
    if output == "-":
        click.echo(payload)
        return

    output_path = Path(output)
    output_path.write_text(payload)
    echo_success(f"Generated: {output_path}")
    echo_info(f"{len(engine.nodes)} nodes placed in {ticks} ticks (alpha={engine.layout.alpha:.4f})")
