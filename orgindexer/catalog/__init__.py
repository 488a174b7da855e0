"""Metadata type catalog: descriptor resolution and the child-tag table."""

from .resolver import TypeCatalog, folder_request_name, folder_base_name
from .child_types import ChildTypeRegistry, child_type_registry

__all__ = [
    "TypeCatalog",
    "folder_request_name",
    "folder_base_name",
    "ChildTypeRegistry",
    "child_type_registry"
]
