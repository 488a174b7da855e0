"""
Folder materializer.

Deepens folder-scoped types (Document, EmailTemplate, Report, Dashboard) by
listing each level-2 folder and appending its contents as level-3 leaves.
"""

import asyncio
import logging
from typing import Optional

from ..clients import BaseMetadataClient
from ..models import TreeNode
from .hierarchy import item_full_name
from .limits import RequestLimiter


class FolderMaterializer:
    """
    Inserts level 3 under the folders of a folder-scoped type.
    """

    def __init__(self, client: BaseMetadataClient, limiter: Optional[RequestLimiter] = None):
        self.client = client
        self.limiter = limiter or RequestLimiter()

    async def materialize(self, type_node: TreeNode, type_name: str) -> TreeNode:
        """
        List every folder of the type concurrently and attach the contents.

        Args:
            type_node: Level-1 node whose level-2 children are folders
            type_name: Canonical type name

        Returns:
            The deepened type_node
        """
        folder_names = [folder.full_name or folder.text for folder in type_node.children]
        logging.debug(f"Listing {len(folder_names)} {type_name} folders")

        try:
            results = await asyncio.gather(*(
                self.limiter.run(self.client.list_folder(type_name, folder_name))
                for folder_name in folder_names
            ))
        except Exception as e:
            logging.error(f"Could not list folders of {type_name}: {e}")
            raise

        for result in results:
            for folder_name, contents in result.items():
                folder_node = type_node.find_child(text=folder_name)
                if folder_node is None:
                    logging.warning(f"Folder listing returned unknown {type_name} folder {folder_name}, skipping")
                    continue
                for item in contents:
                    folder, separator, name = item_full_name(item).partition("/")
                    if not separator:
                        folder, name = folder_name, folder
                    folder_node.children.append(TreeNode(
                        id=f"{type_name}.{folder}.{name}",
                        level=3,
                        text=name,
                        title=name,
                        leaf=True
                    ))

        return type_node
