"""
Selection engine.

Reconciles a flat set of selected node ids (as a caller keeps them, e.g.
'CustomObject.Account.fields.Region__c') with the checked flags of the
forest, and derives each parent's tri-state from its children.
"""

from typing import Iterable, Iterator, List, Optional

from ..config import ConfigManager, config
from ..models import CheckState, TreeNode
from .visibility import set_visibility


def iter_nodes(forest: List[TreeNode]) -> Iterator[TreeNode]:
    """Every node of the forest, parents before children."""
    for node in forest:
        yield from node.walk()


def _mark_checked(node: TreeNode) -> None:
    node.checked = True
    node.select = True
    node.check_state = CheckState.FULLY_CHECKED


def set_checked(forest: List[TreeNode], ids: Iterable[str]) -> None:
    """
    Check every node whose id is selected, together with its descendants.

    Args:
        forest: The index forest, mutated in place
        ids: Selected node ids
    """
    targets = set(ids)
    if not targets:
        return
    for node in iter_nodes(forest):
        if node.id in targets:
            for descendant in node.walk():
                _mark_checked(descendant)


def ensure_parents_checked(forest: List[TreeNode]) -> None:
    """
    Check each parent whose children are all selected.

    Parents are visited before their children, so one pass completes a
    single level: a grandparent is not re-evaluated after its children are
    completed.
    """
    for node in iter_nodes(forest):
        if node.children and all(child.select for child in node.children):
            _mark_checked(node)


def set_third_state_checked(forest: List[TreeNode],
                            config_manager: Optional[ConfigManager] = None) -> None:
    """
    Compute the tri-state of every node bottom-up.

    A parent with all children checked becomes checked. A parent with some
    but not all children checked, or with any partially checked child, is
    PARTIALLY_CHECKED, keeps checked=False and carries the partial css
    marker. A hidden node keeps the hidden marker; visibility restores the
    partial one when the node is shown again.

    Partial state propagates through every level, so a node whose only
    partially checked descendant is a grandchild is itself partial, even
    though none of its direct children is checked.
    """
    cfg = config_manager or config
    for node in forest:
        _third_state(node, cfg)


def _third_state(node: TreeNode, cfg: ConfigManager) -> CheckState:
    for child in node.children:
        _third_state(child, cfg)

    state = CheckState.FULLY_CHECKED if node.checked else CheckState.UNCHECKED
    if node.children:
        number_checked = sum(1 for child in node.children if child.checked)
        any_partial = any(child.check_state == CheckState.PARTIALLY_CHECKED for child in node.children)
        if number_checked == len(node.children):
            node.checked = True
            state = CheckState.FULLY_CHECKED
        elif number_checked > 0 or any_partial:
            state = CheckState.PARTIALLY_CHECKED

    node.check_state = state
    if node.cls != cfg.hidden_cls:
        node.cls = node.default_cls(cfg.partial_cls)
    return state


def apply_selection(forest: List[TreeNode], ids: Iterable[str], keyword: Optional[str] = None,
                    config_manager: Optional[ConfigManager] = None) -> List[TreeNode]:
    """
    Bring a freshly indexed forest in line with a caller's selection.

    Checks the selected ids, completes fully selected parents, computes
    tri-state and, when a keyword is given, filters visibility.

    Returns:
        The same forest, for chaining
    """
    set_checked(forest, ids)
    ensure_parents_checked(forest)
    set_third_state_checked(forest, config_manager)
    if keyword:
        set_visibility(forest, keyword, config_manager)
    return forest
