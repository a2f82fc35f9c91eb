"""
dlcnet CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import build, layout, route
from .utils import configure_logging


@click.group()
@click.version_option(package_name="dlcnet")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """dlcnet: which DLCs unlock which trains.

    Builds the route/DLC requirement graph from a route lookup table and
    a DLC network table, and lays it out with a force simulation.

    \b
    Quick Start:
      dlcnet build route_lookup.csv dlc_network.csv
      dlcnet route route_lookup.csv dlc_network.csv RTA
      dlcnet layout route_lookup.csv dlc_network.csv -o layout.json
    """
    configure_logging(verbose)


# Register commands
main.add_command(build.build)
main.add_command(route.route)
main.add_command(layout.layout)

if __name__ == "__main__":
    main()
