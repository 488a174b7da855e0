"""
Hierarchy builder.

Turns one type's listing into a two-level tree: a level-1 node for the type
and one level-2 node per listed item, sorted by title.
"""

import logging
from typing import Any, Dict, List

from ..files import item_name_from_path
from ..models import ListingResult, TreeNode
from ..models.tree import FOLDER_CLS


def item_full_name(item: Dict[str, Any]) -> str:
    """The item's fullName, falling back to the name derived from its fileName."""
    full_name = item.get("fullName")
    if full_name:
        return full_name
    file_name = item.get("fileName")
    if not file_name:
        raise ValueError(f"Listed item has neither fullName nor fileName: {item}")
    return item_name_from_path(file_name)


def build_type_node(listing: ListingResult) -> TreeNode:
    """
    Build the level-1 node for a listed type with its level-2 items.

    Items of child-bearing and folder-scoped types are expandable folders
    with an empty ``children`` list; all other items are leaves.
    """
    type_name = listing.type_name
    descriptor = listing.descriptor
    expandable = descriptor.has_child_types or descriptor.in_folder

    logging.debug(f"Building {type_name} from {len(listing.items)} listed items "
                  f"(child types: {descriptor.has_child_types}, in folder: {descriptor.in_folder})")

    items: List[TreeNode] = []
    for item in listing.items:
        full_name = item_full_name(item)
        items.append(TreeNode(
            id=f"{type_name}.{full_name}",
            level=2,
            text=full_name,
            title=full_name,
            is_folder=expandable,
            leaf=not expandable,
            cls=FOLDER_CLS if expandable else "",
            full_name=full_name,
            file_name=item.get("fileName")
        ))

    return TreeNode(
        id=type_name,
        level=1,
        text=type_name,
        title=type_name,
        is_folder=True,
        cls=FOLDER_CLS,
        xml_name=type_name,
        key=type_name,
        type_def=descriptor,
        has_child_types=descriptor.has_child_types,
        in_folder=descriptor.in_folder,
        children=sorted(items, key=lambda node: node.title)
    )


def child_item_names(type_node: TreeNode) -> List[str]:
    """Full names of the level-2 items to retrieve for child materialization."""
    return [child.full_name or child.text for child in type_node.children]
