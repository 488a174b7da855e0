"""
Tree node model for orgindexer.

A single node shape is used for all four levels of the index:

    1. metadata type          (ApexClass, CustomObject, Document)
    2. item or folder         (ApexClass.MyController, Document.Logos)
    3. child tag / folder item (CustomObject.Account.fields, Document.Logos.logo.png)
    4. child declaration      (CustomObject.Account.fields.Region__c)

Level-1 only fields (xml_name, type_def, has_child_types, in_folder) and
level-2 only fields (full_name, file_name) are None elsewhere.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .descriptors import TypeDescriptor

FOLDER_CLS = "folder"


class CheckState(str, Enum):
    """Tri-state selection status of a node."""

    UNCHECKED = "unchecked"
    PARTIALLY_CHECKED = "partially_checked"
    FULLY_CHECKED = "fully_checked"


class TreeNode(BaseModel):
    """
    The universal unit of the org metadata index.

    Node ids are dotted paths built from ancestor keys, so every child id
    extends its parent's id by one or more dot-separated segments.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Dotted path unique within the forest")
    level: int = Field(..., ge=1, le=4)
    text: str
    title: str
    is_folder: bool = Field(default=False, alias="isFolder")
    leaf: bool = False
    children: List['TreeNode'] = Field(default_factory=list)

    checked: bool = False
    select: bool = False
    check_state: CheckState = Field(default=CheckState.UNCHECKED, alias="checkState")

    cls: str = ""
    expanded: bool = False
    visibility: Optional[int] = None
    add_class: Optional[str] = Field(default=None, alias="addClass")
    index: Optional[int] = None

    # level 1
    xml_name: Optional[str] = Field(default=None, alias="xmlName")
    key: Optional[str] = None
    type_def: Optional[TypeDescriptor] = Field(default=None, alias="type")
    has_child_types: Optional[bool] = Field(default=None, alias="hasChildTypes")
    in_folder: Optional[bool] = Field(default=None, alias="inFolder")

    # level 2
    full_name: Optional[str] = Field(default=None, alias="fullName")
    file_name: Optional[str] = Field(default=None, alias="fileName")

    def default_cls(self, partial_cls: Optional[str] = None) -> str:
        """
        The css class a node carries when it is not hidden.

        With ``partial_cls`` given, a partially checked node gets that marker
        back instead of its plain class.
        """
        if partial_cls and self.check_state == CheckState.PARTIALLY_CHECKED:
            return partial_cls
        return FOLDER_CLS if self.is_folder else ""

    def find_child(self, **attrs: Any) -> Optional['TreeNode']:
        """Return the first direct child whose attributes all match."""
        for child in self.children:
            if all(getattr(child, name) == value for name, value in attrs.items()):
                return child
        return None

    def walk(self) -> Iterator['TreeNode']:
        """Yield this node and every descendant, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape consumed by tree widgets."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# Enable forward references for self-referencing model
TreeNode.model_rebuild()


def forest_to_dicts(forest: List[TreeNode]) -> List[Dict[str, Any]]:
    """Serialize a whole forest."""
    return [node.to_dict() for node in forest]
