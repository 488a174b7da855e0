"""
Type catalog resolver.

Maps subscribed type names to their remote descriptors and translates
between canonical type names and the folder type names the listing API
expects for folder-scoped types.
"""

from typing import Dict, Iterable

from ..errors import UnknownTypeError
from ..models import TypeDescriptor

FOLDER_SUFFIX = "Folder"

# The platform lists EmailTemplate folders as EmailFolder, not EmailTemplateFolder.
_FOLDER_REQUEST_OVERRIDES = {"EmailTemplate": "EmailFolder"}
_FOLDER_BASE_OVERRIDES = {v: k for k, v in _FOLDER_REQUEST_OVERRIDES.items()}


class TypeCatalog:
    """
    Lookup over the descriptor table returned by the remote describe call.
    """

    def __init__(self, descriptors: Iterable[TypeDescriptor]):
        self._descriptors: Dict[str, TypeDescriptor] = {
            descriptor.xml_name: descriptor for descriptor in descriptors
        }

    def resolve(self, xml_name: str) -> TypeDescriptor:
        """
        Find the descriptor for a type name.

        Args:
            xml_name: Exact type name (e.g. 'ApexClass')

        Returns:
            The type's descriptor

        Raises:
            UnknownTypeError: If the remote table has no such type
        """
        descriptor = self._descriptors.get(xml_name)
        if descriptor is None:
            raise UnknownTypeError(xml_name)
        return descriptor

    def list_request_name(self, xml_name: str) -> str:
        """Name to submit to the listing call for a subscribed type."""
        descriptor = self.resolve(xml_name)
        if descriptor.in_folder:
            return folder_request_name(xml_name)
        return xml_name

    def canonical_name(self, listing_key: str) -> str:
        """
        Normalize a listing result key back to a canonical type name.

        Keys ending in 'Folder' are only rewritten when the key itself is not
        a known type.
        """
        if listing_key.endswith(FOLDER_SUFFIX) and listing_key not in self._descriptors:
            return folder_base_name(listing_key)
        return listing_key


def folder_request_name(xml_name: str) -> str:
    """'Document' -> 'DocumentFolder', 'EmailTemplate' -> 'EmailFolder'."""
    return _FOLDER_REQUEST_OVERRIDES.get(xml_name, xml_name + FOLDER_SUFFIX)


def folder_base_name(folder_type_name: str) -> str:
    """'DocumentFolder' -> 'Document', 'EmailFolder' -> 'EmailTemplate'."""
    if folder_type_name in _FOLDER_BASE_OVERRIDES:
        return _FOLDER_BASE_OVERRIDES[folder_type_name]
    if folder_type_name.endswith(FOLDER_SUFFIX):
        return folder_type_name[:-len(FOLDER_SUFFIX)]
    return folder_type_name
