"""
Child type registry for orgindexer.

This module holds the fixed table of embedded tags that declare trackable
child metadata (a CustomObject file's <fields>, a Workflow file's <rules>).
The child materializer consults it to decide which top-level tags of a
retrieved file become level-3 nodes.
"""

from typing import Dict, List, Optional

from ..models import ChildType


_DEFAULT_CHILD_TYPES = [
    ("ActionOverride", "actionOverrides", "CustomObject"),
    ("CustomField", "fields", "CustomObject"),
    ("BusinessProcess", "businessProcesses", "CustomObject"),
    ("RecordType", "recordTypes", "CustomObject"),
    ("WebLink", "webLinks", "CustomObject"),
    ("ValidationRule", "validationRules", "CustomObject"),
    ("SearchLayouts", "searchLayouts", "CustomObject"),
    ("NamedFilter", "namedFilters", "CustomObject"),
    ("SharingReason", "sharingReasons", "CustomObject"),
    ("ListView", "listViews", "CustomObject"),
    ("FieldSet", "fieldSets", "CustomObject"),
    ("SharingRecalculation", "sharingRecalculations", "CustomObject"),
    ("CompactLayout", "compactLayouts", "CustomObject"),
    ("CustomLabel", "customLabels", "CustomLabels"),
    ("SharingCriteriaRule", "sharingCriteriaRules", "SharingRules"),
    ("SharingOwnerRule", "sharingOwnerRules", "SharingRules"),
    ("SharingTerritoryRule", "sharingTerritoryRules", "SharingRules"),
    ("WorkflowAlert", "alerts", "Workflow"),
    ("WorkflowTask", "tasks", "Workflow"),
    ("WorkflowOutboundMessage", "outboundMessages", "Workflow"),
    ("WorkflowFieldUpdate", "fieldUpdates", "Workflow"),
    ("WorkflowRule", "rules", "Workflow"),
    ("WorkflowEmailRecipient", "emailRecipients", "Workflow"),
    ("WorkflowTimeTrigger", "timeTriggers", "Workflow"),
    ("WorkflowActionReference", "actionReferences", "Workflow"),
]


class ChildTypeRegistry:
    """
    Registry of child types keyed by the tag that declares them.
    """

    def __init__(self):
        """Initialize the registry with the platform's default child types."""
        self._by_tag: Dict[str, ChildType] = {}
        self._register_default_child_types()

    def _register_default_child_types(self):
        for xml_name, tag_name, parent_xml_name in _DEFAULT_CHILD_TYPES:
            self.register_child_type(ChildType(
                xml_name=xml_name,
                tag_name=tag_name,
                parent_xml_name=parent_xml_name
            ))

    def register_child_type(self, child_type: ChildType) -> None:
        """
        Register a child type, replacing any entry with the same tag.

        Args:
            child_type: The child type to register
        """
        self._by_tag[child_type.tag_name] = child_type

    def get_by_tag(self, tag_name: str) -> Optional[ChildType]:
        """
        Get the child type declared by a tag.

        Args:
            tag_name: Top-level tag of a retrieved file (e.g. 'fields')

        Returns:
            The matching child type, or None if the tag is not tracked
        """
        return self._by_tag.get(tag_name)

    def get_by_parent(self, parent_xml_name: str) -> List[ChildType]:
        """Get every child type embedded in files of the given parent type."""
        return [
            child_type for child_type in self._by_tag.values()
            if child_type.parent_xml_name == parent_xml_name
        ]

    def list_tags(self) -> List[str]:
        """
        Get all tracked tag names.

        Returns:
            List of tag names
        """
        return list(self._by_tag.keys())


# Global child type registry instance
child_type_registry = ChildTypeRegistry()
