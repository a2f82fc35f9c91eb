"""
Unit tests for the 'route' command.
"""

import json

from click.testing import CliRunner

from dlcnet.cli.commands.route import route


class TestRouteCommand:
    def test_requirements_table(self, csv_files):
        runner = CliRunner()
        result = runner.invoke(route, [str(p) for p in csv_files] + ["RTA"])

        assert result.exit_code == 0
        assert "RouteA" in result.output
        assert "Required DLCs For Additional Playable Trains" in result.output
        assert "Loco1" in result.output
        assert "RTX" in result.output
        assert "Highlighted in graph: RTB" in result.output

    def test_route_without_requirements(self, csv_files):
        runner = CliRunner()
        result = runner.invoke(route, [str(p) for p in csv_files] + ["RTC"])

        assert result.exit_code == 0
        assert "No DLC requirements found for RTC." in result.output

    def test_json_output(self, csv_files):
        runner = CliRunner()
        result = runner.invoke(route, [str(p) for p in csv_files] + ["RTA", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["display_name"] == "RouteA"
        assert data["locomotive_count"] == 3
        assert data["unrestricted"] == ["Loco3"]
        assert data["highlighted_nodes"] == ["RTB"]
        assert data["highlighted_edges"] == ["RTA-RTB"]

    def test_unknown_route(self, csv_files):
        runner = CliRunner()
        result = runner.invoke(route, [str(p) for p in csv_files] + ["NOPE"])

        assert result.exit_code == 1
        assert "Route not found: NOPE" in result.output
