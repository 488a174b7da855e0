"""Indexing engine: tree building, materialization, search and selection."""

from .indexer import Indexer, to_listing_result
from .hierarchy import build_type_node, item_full_name
from .children import ChildMaterializer, crawl_retrieved_files
from .folders import FolderMaterializer
from .visibility import set_visibility
from .selection import (
    set_checked,
    ensure_parents_checked,
    set_third_state_checked,
    apply_selection,
    iter_nodes
)

__all__ = [
    "Indexer",
    "to_listing_result",
    "build_type_node",
    "item_full_name",
    "ChildMaterializer",
    "crawl_retrieved_files",
    "FolderMaterializer",
    "set_visibility",
    "set_checked",
    "ensure_parents_checked",
    "set_third_state_checked",
    "apply_selection",
    "iter_nodes"
]
