"""Unit tests for the network engine facade."""

import asyncio
from unittest.mock import patch

import pytest

from dlcnet.core.types import EdgeClass, LoadState, NodeClass
from dlcnet.engine import NetworkEngine
from dlcnet.layout.scheduler import ManualScheduler
from dlcnet.layout.simulation import UnknownNodeError
from dlcnet.loader import DataLoadError


class TestLoading:
    def test_load_graph_from_rows(self, lookup_rows, network_rows):
        engine = NetworkEngine(scheduler=ManualScheduler())
        engine.load_graph(lookup_rows, network_rows)

        assert engine.state is LoadState.READY
        assert [n.id for n in engine.nodes] == ["RTA", "RTB", "RTC", "RTD"]
        assert engine.regions == ["US", "DE", "UK"]
        assert engine.layout.is_running

    def test_load_files(self, csv_files):
        engine = NetworkEngine(autostart=False)
        engine.load_files(*csv_files)

        assert engine.state is LoadState.READY
        assert [e.id for e in engine.edges] == ["RTA-RTB", "RTB-RTA", "RTB-RTC"]
        assert not engine.layout.is_running

    def test_load_files_async(self, csv_files):
        engine = NetworkEngine(autostart=False)
        asyncio.run(engine.load_files_async(*csv_files))

        assert engine.state is LoadState.READY
        assert len(engine.nodes) == 4

    def test_failed_load_discards_previous_graph(self, csv_files, tmp_path):
        engine = NetworkEngine(autostart=False)
        engine.load_files(*csv_files)

        with pytest.raises(DataLoadError):
            engine.load_files(tmp_path / "missing.csv", csv_files[1])

        assert engine.state is LoadState.FAILED
        assert isinstance(engine.load_error, DataLoadError)
        assert engine.result is None
        assert engine.layout is None
        with pytest.raises(RuntimeError):
            engine.snapshot()

    @pytest.mark.parametrize(
        "row",
        [
            {"Route": "RTA", "Loco": "", "Required DLC": "RTB"},
            {"Route": "RTA", "Required DLC": "RTB"},
        ],
    )
    def test_blank_locomotive_row_loads(self, lookup_rows, row):
        engine = NetworkEngine(autostart=False)
        engine.load_graph(lookup_rows, [row])

        assert engine.state is LoadState.READY
        assert engine.edges[0].locomotives == [None]
        assert engine.route_details("RTA").unrestricted == []

    def test_blank_locomotive_cell_in_csv(self, tmp_path, csv_files):
        network = tmp_path / "blank_loco.csv"
        network.write_text("Route,Loco,Required DLC\nRTA,,RTB\n")

        engine = NetworkEngine(autostart=False)
        engine.load_files(csv_files[0], network)

        assert engine.state is LoadState.READY
        assert [e.id for e in engine.edges] == ["RTA-RTB"]

    def test_build_failure_marks_load_failed(self, lookup_rows, network_rows):
        engine = NetworkEngine(autostart=False)

        with patch("dlcnet.engine.GraphBuilder.build", side_effect=RuntimeError("boom")):
            with pytest.raises(DataLoadError):
                engine.load_graph(lookup_rows, network_rows)

        assert engine.state is LoadState.FAILED
        assert isinstance(engine.load_error, DataLoadError)
        assert engine.result is None
        assert engine.resolver is None

    def test_reload_replaces_layout(self, lookup_rows, network_rows):
        scheduler = ManualScheduler()
        engine = NetworkEngine(scheduler=scheduler)
        engine.load_graph(lookup_rows, network_rows)
        first = engine.layout

        engine.load_graph(lookup_rows, network_rows)

        assert engine.layout is not first
        assert not first.is_running
        assert scheduler.pending == 1


class TestReadModel:
    @pytest.fixture
    def engine(self, lookup_rows, network_rows):
        engine = NetworkEngine(scheduler=ManualScheduler())
        engine.load_graph(lookup_rows, network_rows)
        return engine

    def test_snapshot_carries_positions(self, engine):
        snapshot = engine.snapshot()

        assert [n.id for n in snapshot.nodes] == ["RTA", "RTB", "RTC", "RTD"]
        node = snapshot.nodes[0]
        assert (node.x, node.y) == engine.layout.state.position("RTA")
        assert snapshot.regions == ["US", "DE", "UK"]

    def test_position_listeners_fire_per_tick(self, engine):
        seen = []
        engine.add_position_listener(lambda eng: seen.append(eng.snapshot().nodes[0].x))

        engine.layout.scheduler.run_until_idle(limit=2)

        assert len(seen) == 2

    def test_drag_passthrough(self, engine):
        engine.on_drag_start("RTB", (0.0, 0.0))
        engine.on_drag_move("RTB", (10.0, 20.0))
        engine.layout.scheduler.run_next()
        engine.on_drag_end("RTB")

        assert engine.snapshot().nodes[1].x == 10.0


class TestSelection:
    @pytest.fixture
    def engine(self, lookup_rows, network_rows):
        engine = NetworkEngine(autostart=False)
        engine.load_graph(lookup_rows, network_rows)
        return engine

    def test_select_and_classify(self, engine):
        engine.select_node("RTA")
        classes = engine.classify()

        assert classes.node_class["RTA"] is NodeClass.SELECTED
        assert classes.node_class["RTB"] is NodeClass.REQUIRED
        assert classes.edge_class["RTA-RTB"] is EdgeClass.HIGHLIGHTED

    def test_deselect(self, engine):
        engine.select_node("RTA")
        engine.select_node(None)

        assert engine.selection.selected_id is None
        assert engine.classify().selected() == []

    def test_classify_without_selection_overrides_current(self, engine):
        engine.select_node("RTA")

        classes = engine.classify(None)

        assert classes.selected() == []
        assert classes.highlighted_edges() == []
        assert engine.selection.selected_id == "RTA"

    def test_select_unknown_node(self, engine):
        with pytest.raises(UnknownNodeError):
            engine.select_node("RTZ")


class TestRouteDetails:
    @pytest.fixture
    def engine(self, lookup_rows, network_rows):
        engine = NetworkEngine(autostart=False)
        engine.load_graph(lookup_rows, network_rows)
        return engine

    def test_known_route(self, engine):
        details = engine.route_details("RTA")

        assert details.display_name == "RouteA"
        assert details.region == "US"
        assert details.locomotive_count == 3
        assert details.unrestricted == ["Loco3"]
        assert details.has_requirements
        first = details.locomotives[0]
        assert [d.identity.short_name for d in first.required] == ["RTB", "RTX"]
        assert all(d.in_selection for d in first.required)

    def test_route_without_requirements(self, engine):
        details = engine.route_details("RTC")

        assert details.locomotive_count == 0
        assert not details.has_requirements

    def test_unrestricted_only_route(self, lookup_rows):
        engine = NetworkEngine(autostart=False)
        engine.load_graph(
            lookup_rows,
            [{"Route": "RTC", "Loco": "A", "Required DLC": ""}, {"Route": "RTC", "Loco": "B"}],
        )

        details = engine.route_details("RTC")

        assert details.locomotive_count == 2
        assert details.unrestricted == ["A", "B"]
        assert not details.has_requirements

    def test_unknown_route_is_still_queryable(self, engine):
        details = engine.route_details("RTZ")

        assert details.display_name == "RTZ"
        assert details.region == "Unknown"
        assert details.locomotive_count == 1
