"""
orgindexer: A navigable index of a remote platform's metadata catalog.

Lists subscribed metadata types, deepens child-bearing and folder-scoped
types into a four-level tree, and filters and selects over the result.
"""

__version__ = "0.1.0"

# Import main components
from .errors import IndexerError, UnknownTypeError, TransportError, CrawlError, ParseError
from .models import TreeNode, CheckState, TypeDescriptor, ListingResult, forest_to_dicts
from .catalog import TypeCatalog, child_type_registry
from .clients import BaseMetadataClient, MockMetadataClient
from .indexer import (
    Indexer,
    set_visibility,
    set_checked,
    ensure_parents_checked,
    set_third_state_checked,
    apply_selection
)

__all__ = [
    "IndexerError",
    "UnknownTypeError",
    "TransportError",
    "CrawlError",
    "ParseError",
    "TreeNode",
    "CheckState",
    "TypeDescriptor",
    "ListingResult",
    "forest_to_dicts",
    "TypeCatalog",
    "child_type_registry",
    "BaseMetadataClient",
    "MockMetadataClient",
    "Indexer",
    "set_visibility",
    "set_checked",
    "ensure_parents_checked",
    "set_third_state_checked",
    "apply_selection"
]
