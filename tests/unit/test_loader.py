"""Unit tests for the CSV load boundary."""

import pytest

from dlcnet.loader import (
    DataLoadError,
    SchemaValidationError,
    load_tables,
    parse_network_rows,
    read_table,
)


class TestReadTable:
    def test_reads_cells_as_strings(self, tmp_path):
        f = tmp_path / "lookup.csv"
        f.write_text("Route,Short Name,Region\nRoute 1,0001,US\n")

        rows = read_table(f, "lookup", ["Route", "Short Name", "Region"])

        assert rows == [{"Route": "Route 1", "Short Name": "0001", "Region": "US"}]

    def test_missing_column(self, tmp_path):
        f = tmp_path / "network.csv"
        f.write_text("Route,Required DLC\nRTA,RTB\n")

        with pytest.raises(SchemaValidationError) as exc:
            read_table(f, "network", ["Route", "Loco"])
        assert exc.value.missing_columns == ["Loco"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            read_table(tmp_path / "absent.csv", "lookup", ["Route"])


class TestLoadTables:
    def test_loads_both_tables(self, csv_files):
        lookup, network = load_tables(*csv_files)

        assert [entry.short_name for entry in lookup] == ["RTA", "RTB", "RTC", "RTD"]
        assert len(network) == 5
        assert network[0].required_dlcs == ["RTB", "RTX"]
        assert network[2].required_dlcs == []

    def test_network_without_requirement_column(self, tmp_path, csv_files):
        lookup_file, _ = csv_files
        network = tmp_path / "plain.csv"
        network.write_text("Route,Loco\nRTA,Loco1\n")

        _, rows = load_tables(lookup_file, network)

        assert rows[0].required_dlcs == []


class TestParseRows:
    def test_invalid_row_raises_load_error(self):
        with pytest.raises(DataLoadError):
            parse_network_rows([{"Route": "RTA", "Loco": "L", "Required DLC": 12}])
