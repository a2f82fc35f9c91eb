"""Shared fixtures: a small route lookup and DLC network."""

import pytest

LOOKUP_ROWS = [
    {"Route": "RouteA", "Short Name": "RTA", "Region": "US"},
    {"Route": "RouteB", "Short Name": "RTB", "Region": "DE"},
    {"Route": "RouteC", "Short Name": "RTC", "Region": "UK"},
    {"Route": "RouteD", "Short Name": "RTD", "Region": "US"},
]

NETWORK_ROWS = [
    {"Route": "RTA", "Loco": "Loco1", "Required DLC": "RTB, RTX"},
    {"Route": "RTA", "Loco": "Loco2", "Required DLC": "RTB"},
    {"Route": "RTA", "Loco": "Loco3", "Required DLC": ""},
    {"Route": "RTB", "Loco": "Loco4", "Required DLC": "RTA,RTC"},
    {"Route": "RTZ", "Loco": "Loco5", "Required DLC": "RTD"},
    {"Route": "  ", "Loco": "Ghost", "Required DLC": "RTB"},
]

LOOKUP_CSV = """Route,Short Name,Region
RouteA,RTA,US
RouteB,RTB,DE
RouteC,RTC,UK
RouteD,RTD,US
"""

NETWORK_CSV = """Route,Loco,Required DLC
RTA,Loco1,"RTB, RTX"
RTA,Loco2,RTB
RTA,Loco3,
RTB,Loco4,"RTA,RTC"
RTZ,Loco5,RTD
"""


@pytest.fixture
def lookup_rows():
    return [dict(row) for row in LOOKUP_ROWS]


@pytest.fixture
def network_rows():
    return [dict(row) for row in NETWORK_ROWS]


@pytest.fixture
def csv_files(tmp_path):
    lookup = tmp_path / "route_lookup.csv"
    network = tmp_path / "dlc_network.csv"
    lookup.write_text(LOOKUP_CSV)
    network.write_text(NETWORK_CSV)
    return lookup, network
