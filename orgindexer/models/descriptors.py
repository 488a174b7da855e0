"""
Catalog data models for orgindexer.

These describe what the remote platform reports about its metadata types and
what a single listing call returns for one subscribed type.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TypeDescriptor(BaseModel):
    """
    Remote-supplied description of one metadata type.

    Field aliases follow the camelCase keys returned by the platform's
    describe call so raw responses validate directly.
    """

    model_config = ConfigDict(populate_by_name=True)

    xml_name: str = Field(
        ...,
        alias="xmlName",
        description="Canonical type name (e.g. 'ApexClass', 'CustomObject')"
    )

    directory_name: str = Field(
        ...,
        alias="directoryName",
        description="Directory retrieved files of this type are written to"
    )

    in_folder: bool = Field(
        default=False,
        alias="inFolder",
        description="True when items are organized under named folders"
    )

    child_xml_names: Optional[List[str]] = Field(
        default=None,
        alias="childXmlNames",
        description="Names of child types declared inside this type's files"
    )

    suffix: Optional[str] = Field(
        default=None,
        description="File suffix of retrieved items"
    )

    meta_file: bool = Field(
        default=False,
        alias="metaFile",
        description="Whether items carry a companion -meta.xml file"
    )

    @property
    def has_child_types(self) -> bool:
        """True when files of this type embed child declarations."""
        return bool(self.child_xml_names)


class ChildType(BaseModel):
    """
    One entry of the fixed child-tag table.

    Ties an embedded tag (e.g. 'fields') to the child type it declares
    (e.g. 'CustomField') and the parent type whose files contain it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    xml_name: str = Field(..., alias="xmlName")
    tag_name: str = Field(..., alias="tagName")
    parent_xml_name: str = Field(..., alias="parentXmlName")


class ListingResult(BaseModel):
    """
    The outcome of listing one subscribed type.

    Each concurrent listing call produces its own record so nothing is shared
    between in-flight requests.
    """

    request_name: str = Field(
        ...,
        description="Key returned by the listing call (e.g. 'DocumentFolder')"
    )

    type_name: str = Field(
        ...,
        description="Canonical type name the key normalizes to"
    )

    descriptor: TypeDescriptor

    items: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Raw item stubs, each with a fullName or a fileName"
    )
