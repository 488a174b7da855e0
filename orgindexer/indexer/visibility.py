"""
Visibility engine.

Filters the forest against a search query by marking nodes visible or
hidden. A node stays visible when its title contains the query
(case-insensitive) or any descendant's does; visible folders are expanded
so matches are reachable in a collapsed tree.
"""

from typing import List, Optional

from ..config import ConfigManager, config
from ..models import TreeNode


def set_visibility(forest: List[TreeNode], query: str,
                   config_manager: Optional[ConfigManager] = None) -> None:
    """
    Mark every node of the forest visible (1) or hidden (0) for query.

    Mutates the forest in place. Running it twice with the same query over
    an unmodified forest leaves identical flags.
    """
    cfg = config_manager or config
    _crawl_children(forest, query.lower(), cfg)


def _crawl_children(children: List[TreeNode], query: str, cfg: ConfigManager) -> int:
    any_visible = 0
    for index, child in enumerate(children):
        child.index = index
        if _crawl_node(child, query, cfg):
            any_visible = 1
            if child.is_folder:
                child.expanded = True
    return any_visible


def _crawl_node(node: TreeNode, query: str, cfg: ConfigManager) -> int:
    local_visibility = 1 if query in node.title.lower() else 0
    child_visibility = _crawl_children(node.children, query, cfg)
    visibility = local_visibility or child_visibility
    node.visibility = visibility

    if visibility == 0:
        node.cls = cfg.hidden_cls
        node.add_class = cfg.hidden_add_class
    elif node.cls == cfg.hidden_cls:
        # hidden by an earlier query
        node.cls = node.default_cls(cfg.partial_cls)
        node.add_class = None

    return visibility
