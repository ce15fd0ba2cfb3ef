"""API filter tree and the engine that applies it to reflection information."""

from .api_filter_engine import ApiFilterEngine
from .api_filter_node import ApiEntryType, ApiFilterNode
from .api_filter_tree import ApiFilterTree

__all__ = [
    "ApiEntryType",
    "ApiFilterEngine",
    "ApiFilterNode",
    "ApiFilterTree",
]
