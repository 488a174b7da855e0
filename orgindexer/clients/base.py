"""
Base metadata client interface for orgindexer.

This module defines the asynchronous contract the indexer needs from a
remote metadata API client. Authentication, transport and retries belong to
the implementation; any failed call must raise TransportError.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models import TypeDescriptor


class BaseMetadataClient(ABC):
    """
    Abstract base class for remote metadata clients.
    """

    @abstractmethod
    async def describe(self) -> List[TypeDescriptor]:
        """
        Retrieve the descriptor table of all metadata types.

        Returns:
            List of TypeDescriptor objects
        """
        pass

    @abstractmethod
    async def list_metadata(self, request_name: str) -> Dict[str, List[Dict[str, Any]]]:
        """
        List the items of one type.

        Args:
            request_name: Type name, or folder type name for folder-scoped types

        Returns:
            A single-key mapping of request name to item stubs, e.g.
            {"ApexClass": [{"fullName": "MyController"}]}
        """
        pass

    @abstractmethod
    async def list_folder(self, type_name: str, folder_name: str) -> Dict[str, List[Dict[str, Any]]]:
        """
        List the contents of one folder of a folder-scoped type.

        Returns:
            A single-key mapping of folder name to item stubs whose fullName
            has the form 'Folder/Name'
        """
        pass

    @abstractmethod
    async def retrieve_unpackaged(self, members: Dict[str, List[str]], use_zip: bool, dest_dir: str) -> None:
        """
        Retrieve full file bodies for the given members into dest_dir.

        Files land under <dest_dir>/unpackaged/<directoryName>/.

        Args:
            members: Type name -> item names to retrieve
            use_zip: Whether to request a zipped payload
            dest_dir: Directory to extract into
        """
        pass
