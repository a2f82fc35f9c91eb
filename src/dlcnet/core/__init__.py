"""Graph construction: identifier resolution, building and highlighting."""

from .builder import BuildResult, GraphBuilder
from .graph import RequirementGraph
from .highlight import Classification, Selection, SelectionHighlighter
from .resolver import IdentifierResolver

__all__ = [
    "BuildResult",
    "Classification",
    "GraphBuilder",
    "IdentifierResolver",
    "RequirementGraph",
    "Selection",
    "SelectionHighlighter",
]
