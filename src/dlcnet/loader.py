"""
Table Loader - the load boundary for the lookup and network tables.

Both tables are CSV files with a header row; column names are part of
the contract (see ``config.LOOKUP_COLUMNS``). Cells are read as strings
(``infer_schema_length=0``) so short names such as ``"0001"`` survive
untouched, and empty cells arrive as nulls which the row models turn
into explicit ``None`` / empty lists.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

import polars as pl
from pydantic import ValidationError

from .config import LOOKUP_COLUMNS, NETWORK_OPTIONAL_COLUMNS, NETWORK_REQUIRED_COLUMNS
from .core.types import LookupEntry, RequirementRow

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """Base exception for data loading errors."""
    pass


class SchemaValidationError(DataLoadError):
    """Raised when a table lacks one of its contract columns."""

    def __init__(self, table: str, missing_columns: List[str]):
        self.table = table
        self.missing_columns = missing_columns
        super().__init__(f"{table} table is missing columns: {missing_columns}")


def read_table(path: str | Path, table: str, required: Sequence[str]) -> List[Dict[str, Any]]:
    """
    Read a CSV file into a list of row dicts.

    Fully blank lines are dropped. Columns outside the contract are kept
    but ignored downstream.

    Raises:
        DataLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If a required column is missing.
    """
    path = Path(path)
    try:
        df = pl.read_csv(path, has_header=True, infer_schema_length=0)
    except (OSError, pl.exceptions.PolarsError) as e:
        raise DataLoadError(f"Failed to read {table} table {path}: {e}") from e

    check_columns(table, df.columns, required)
    df = df.filter(~pl.all_horizontal(pl.all().is_null()))
    logger.info(f"Loaded {df.height} rows from {table} table {path}")
    return df.to_dicts()


def check_columns(table: str, columns: Iterable[str], required: Sequence[str]) -> None:
    present = set(columns)
    missing = [name for name in required if name not in present]
    if missing:
        raise SchemaValidationError(table, missing)


def parse_lookup_rows(rows: Iterable[Mapping[str, Any]]) -> List[LookupEntry]:
    """Validate raw lookup rows into LookupEntry models."""
    return _parse(rows, LookupEntry, "lookup")


def parse_network_rows(rows: Iterable[Mapping[str, Any]]) -> List[RequirementRow]:
    """Validate raw network rows into RequirementRow models."""
    return _parse(rows, RequirementRow, "network")


def _parse(rows, model, table: str):
    parsed = []
    for line, row in enumerate(rows, start=1):
        try:
            parsed.append(model.model_validate(dict(row)))
        except ValidationError as e:
            raise DataLoadError(f"Invalid {table} row {line}: {e}") from e
    return parsed


def load_tables(
    lookup_path: str | Path,
    network_path: str | Path,
) -> Tuple[List[LookupEntry], List[RequirementRow]]:
    """
    Load and validate both tables.

    Either both tables load or a DataLoadError is raised; no partial result
    is ever returned.
    """
    lookup_raw = read_table(lookup_path, "lookup", LOOKUP_COLUMNS)
    network_raw = read_table(network_path, "network", NETWORK_REQUIRED_COLUMNS)
    if network_raw:
        absent = [name for name in NETWORK_OPTIONAL_COLUMNS if name not in network_raw[0]]
        if absent:
            logger.debug(f"Network table has no {absent} column; every route is unrestricted")
    return parse_lookup_rows(lookup_raw), parse_network_rows(network_raw)
