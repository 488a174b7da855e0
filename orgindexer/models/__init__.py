"""Data models for orgindexer."""

from .descriptors import TypeDescriptor, ChildType, ListingResult
from .tree import TreeNode, CheckState, forest_to_dicts

__all__ = [
    "TypeDescriptor",
    "ChildType",
    "ListingResult",
    "TreeNode",
    "CheckState",
    "forest_to_dicts"
]
