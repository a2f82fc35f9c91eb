"""
Core type definitions for dlcnet.

Raw table rows are validated into explicit models at the load boundary;
absent or empty cells become ``None`` / empty lists instead of implicit
falsy checks further down the pipeline.
"""

from enum import StrEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import UNKNOWN_REGION


class LoadState(StrEnum):
    """Lifecycle of a data load."""
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class NodeClass(StrEnum):
    """Highlight category of a node relative to the current selection."""
    SELECTED = "selected"
    REQUIRED = "required"
    NORMAL = "normal"


class EdgeClass(StrEnum):
    """Highlight category of an edge relative to the current selection."""
    HIGHLIGHTED = "highlighted"
    NORMAL = "normal"


def _blank_to_none(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class LookupEntry(BaseModel):
    """
    One row of the route lookup table.

    Rows lacking a canonical name or a short name are kept as models but
    never make a short name "known" (see IdentifierResolver).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    canonical_name: str | None = Field(default=None, alias="Route")
    short_name: str | None = Field(default=None, alias="Short Name")
    region: str | None = Field(default=None, alias="Region")

    @field_validator("canonical_name", "short_name", "region", mode="before")
    @classmethod
    def _strip_cells(cls, value):
        return _blank_to_none(value)

    @property
    def is_usable(self) -> bool:
        return self.canonical_name is not None and self.short_name is not None


class RequirementRow(BaseModel):
    """
    One (route, locomotive) pairing of the network table.

    ``required_dlcs`` holds the trimmed, non-empty tokens of the
    comma-separated "Required DLC" cell, in cell order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    route: str = Field(default="", alias="Route")
    locomotive: str | None = Field(default=None, alias="Loco")
    required_dlcs: List[str] = Field(default_factory=list, alias="Required DLC")

    @field_validator("route", mode="before")
    @classmethod
    def _strip_route(cls, value) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("locomotive", mode="before")
    @classmethod
    def _keep_locomotive(cls, value):
        # Locomotive names are displayed verbatim
        return None if value is None or value == "" else str(value)

    @field_validator("required_dlcs", mode="before")
    @classmethod
    def _split_tokens(cls, value) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple)):
            raise ValueError(f"expected comma-separated text, got {type(value).__name__}")
        return [str(token).strip() for token in value if token is not None and str(token).strip()]


class ResolvedIdentity(BaseModel):
    """A short name after lookup resolution."""

    model_config = ConfigDict(frozen=True)

    short_name: str
    canonical_name: str | None = None
    region: str = UNKNOWN_REGION
    known: bool = False

    @property
    def display_name(self) -> str:
        return self.canonical_name or self.short_name


class Node(BaseModel):
    """A graph-visible route. Only created for known identities."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    region: str
    full_name: str

    @classmethod
    def from_identity(cls, identity: ResolvedIdentity) -> "Node":
        return cls(
            id=identity.short_name,
            label=identity.short_name,
            region=identity.region,
            full_name=identity.display_name,
        )


class Edge(BaseModel):
    """
    Directed requirement between two known routes.

    The id keeps the pair order: ``A-B`` and ``B-A`` are different edges.
    """

    id: str
    source: str
    target: str
    locomotives: List[str | None] = Field(default_factory=list)

    @staticmethod
    def key(source: str, target: str) -> str:
        return f"{source}-{target}"


class DependencyEntry(BaseModel):
    """One locomotive of a route together with the DLCs it needs."""

    model_config = ConfigDict(frozen=True)

    locomotive: str | None
    required_dlcs: List[ResolvedIdentity] = Field(default_factory=list)

    @property
    def needs_extra_dlc(self) -> bool:
        return bool(self.required_dlcs)
