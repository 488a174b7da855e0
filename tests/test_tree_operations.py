import pytest

from orgindexer.config import ConfigManager
from orgindexer.errors import CrawlError
from orgindexer.indexer import (
    apply_selection,
    crawl_retrieved_files,
    ensure_parents_checked,
    iter_nodes,
    set_checked,
    set_third_state_checked,
    set_visibility,
)
from orgindexer.models import CheckState, TreeNode


def node(node_id, level, children=None, is_folder=None):
    name = node_id.rsplit(".", 1)[-1]
    children = children or []
    folder = bool(children) if is_folder is None else is_folder
    return TreeNode(id=node_id, level=level, text=name, title=name, is_folder=folder,
                    leaf=not folder, cls="folder" if folder else "", children=children)


@pytest.fixture
def config(tmp_path):
    return ConfigManager(str(tmp_path / "missing.yaml"))


@pytest.fixture
def forest():
    return [
        node("CustomObject", 1, [
            node("CustomObject.Account", 2, [
                node("CustomObject.Account.fields", 3, [
                    node("CustomObject.Account.fields.Region__c", 4),
                    node("CustomObject.Account.fields.Tier__c", 4),
                ]),
            ]),
            node("CustomObject.Contact", 2, [], is_folder=True),
            node("CustomObject.Lead", 2, [], is_folder=True),
        ]),
        node("ApexClass", 1, [
            node("ApexClass.BatchCleanup", 2),
            node("ApexClass.SiteController", 2),
        ]),
    ]


def by_id(forest):
    return {n.id: n for n in iter_nodes(forest)}


def test_visibility_marks_match_and_ancestors(forest, config):
    set_visibility(forest, "account", config)
    nodes = by_id(forest)

    assert nodes["CustomObject.Account"].visibility == 1
    assert nodes["CustomObject"].visibility == 1
    assert nodes["CustomObject"].expanded is True
    for hidden in ("CustomObject.Contact", "CustomObject.Lead", "ApexClass", "ApexClass.BatchCleanup"):
        assert nodes[hidden].visibility == 0
        assert nodes[hidden].cls == "hidden"
        assert nodes[hidden].add_class == "dynatree-hidden"


def test_visibility_of_deep_match(forest, config):
    set_visibility(forest, "TIER", config)
    nodes = by_id(forest)

    for visible in ("CustomObject", "CustomObject.Account", "CustomObject.Account.fields",
                    "CustomObject.Account.fields.Tier__c"):
        assert nodes[visible].visibility == 1
    assert nodes["CustomObject.Account.fields"].expanded is True
    assert nodes["CustomObject.Account.fields.Region__c"].cls == "hidden"


def test_visibility_is_idempotent(forest, config):
    set_visibility(forest, "account", config)
    first = [n.to_dict() for n in forest]
    set_visibility(forest, "account", config)

    assert [n.to_dict() for n in forest] == first


def test_visibility_clears_stale_hidden_marker(forest, config):
    set_visibility(forest, "account", config)
    set_visibility(forest, "contact", config)
    nodes = by_id(forest)

    contact = nodes["CustomObject.Contact"]
    assert contact.visibility == 1
    assert contact.cls == "folder"
    assert contact.add_class is None
    assert nodes["CustomObject.Account"].cls == "hidden"


def test_visibility_records_sibling_index(forest, config):
    set_visibility(forest, "", config)

    assert [n.index for n in forest[0].children] == [0, 1, 2]
    assert all(n.visibility == 1 for n in iter_nodes(forest))


def test_set_checked_marks_targets_and_descendants(forest):
    set_checked(forest, {"CustomObject.Account", "ApexClass.BatchCleanup"})
    nodes = by_id(forest)

    for checked in ("CustomObject.Account", "CustomObject.Account.fields",
                    "CustomObject.Account.fields.Region__c", "ApexClass.BatchCleanup"):
        assert nodes[checked].checked and nodes[checked].select
    assert not nodes["CustomObject"].checked
    assert not nodes["ApexClass.SiteController"].checked


def test_set_checked_ignores_unknown_ids(forest):
    set_checked(forest, ["Workflow.Account"])

    assert not any(n.checked for n in iter_nodes(forest))


def test_ensure_parents_checked_completes_one_level(forest):
    set_checked(forest, ["CustomObject.Account.fields.Region__c", "CustomObject.Account.fields.Tier__c"])
    ensure_parents_checked(forest)
    nodes = by_id(forest)

    assert nodes["CustomObject.Account.fields"].select
    assert not nodes["CustomObject.Account"].select
    assert not nodes["CustomObject"].select


def test_ensure_parents_checked_leaves_empty_folders_alone(forest):
    ensure_parents_checked(forest)

    assert not by_id(forest)["CustomObject.Contact"].checked


def test_third_state_all_children_checked(forest, config):
    set_checked(forest, ["ApexClass.BatchCleanup", "ApexClass.SiteController"])
    set_third_state_checked(forest, config)

    assert forest[1].checked
    assert forest[1].check_state == CheckState.FULLY_CHECKED


def test_third_state_partial(forest, config):
    set_checked(forest, ["CustomObject.Lead"])
    set_third_state_checked(forest, config)
    custom_object = forest[0]

    assert custom_object.checked is False
    assert custom_object.check_state == CheckState.PARTIALLY_CHECKED
    assert custom_object.cls == "x-tree-checkbox-checked-disabled"
    assert forest[1].check_state == CheckState.UNCHECKED


def test_third_state_partial_grandchild_propagates(forest, config):
    set_checked(forest, ["CustomObject.Account.fields.Tier__c"])
    set_third_state_checked(forest, config)
    nodes = by_id(forest)

    assert nodes["CustomObject.Account.fields"].check_state == CheckState.PARTIALLY_CHECKED
    assert nodes["CustomObject.Account"].check_state == CheckState.PARTIALLY_CHECKED
    assert nodes["CustomObject"].check_state == CheckState.PARTIALLY_CHECKED


def test_third_state_bottom_up_completion(forest, config):
    set_checked(forest, ["CustomObject.Account.fields.Region__c", "CustomObject.Account.fields.Tier__c",
                         "CustomObject.Contact", "CustomObject.Lead"])
    set_third_state_checked(forest, config)

    assert forest[0].checked
    assert forest[0].cls == "folder"


def test_apply_selection_with_keyword(forest, config):
    apply_selection(forest, ["ApexClass.SiteController"], keyword="site", config_manager=config)
    nodes = by_id(forest)

    assert nodes["ApexClass.SiteController"].checked
    assert nodes["ApexClass"].check_state == CheckState.PARTIALLY_CHECKED
    assert nodes["ApexClass"].visibility == 1
    assert nodes["CustomObject"].visibility == 0


def test_requery_restores_partial_marker(forest, config):
    apply_selection(forest, ["ApexClass.SiteController"], keyword="zzz", config_manager=config)
    apex_class = forest[1]
    assert apex_class.cls == "hidden"

    set_visibility(forest, "site", config)

    assert apex_class.visibility == 1
    assert apex_class.cls == "x-tree-checkbox-checked-disabled"
    assert apex_class.add_class is None
    assert forest[0].cls == "hidden"


def test_third_state_keeps_hidden_marker(forest, config):
    set_visibility(forest, "account", config)
    set_checked(forest, ["ApexClass.SiteController"])
    set_third_state_checked(forest, config)
    apex_class = forest[1]

    assert apex_class.check_state == CheckState.PARTIALLY_CHECKED
    assert apex_class.cls == "hidden"
    assert apex_class.add_class == "dynatree-hidden"


def test_crawl_missing_directory(tmp_path):
    with pytest.raises(CrawlError):
        crawl_retrieved_files(tmp_path / "unpackaged" / "objects")


def test_crawl_reads_nested_files_in_order(tmp_path):
    type_dir = tmp_path / "objects"
    (type_dir / "nested").mkdir(parents=True)
    (type_dir / "B.object").write_text("<b/>")
    (type_dir / "A.object").write_text("<a/>")
    (type_dir / "nested" / "C.object").write_text("<c/>")

    files = crawl_retrieved_files(type_dir)

    assert [path.name for path, _ in files] == ["A.object", "B.object", "C.object"]
    assert files[0][1] == b"<a/>"
