"""
Child materializer.

Deepens child-bearing types (CustomObject, Workflow, ...) by retrieving the
full file of every level-2 item, parsing the embedded child declarations and
inserting level-3 tag nodes with level-4 leaves:

    CustomObject                          level 1
      CustomObject.Account                level 2
        CustomObject.Account.fields       level 3
          CustomObject.Account.fields.Region__c   level 4
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ..catalog import ChildTypeRegistry, child_type_registry
from ..clients import BaseMetadataClient
from ..config import ConfigManager, config
from ..errors import CrawlError, ParseError
from ..files import item_name_from_path
from ..markup import as_list, first_text, parse_markup, root_element
from ..models import ChildType, TreeNode, TypeDescriptor
from ..models.tree import FOLDER_CLS
from .limits import RequestLimiter

LEAF_KEY_FIELDS = ("fullName", "actionName")


def crawl_retrieved_files(type_dir: Path) -> List[Tuple[Path, bytes]]:
    """
    Read every file under a retrieved type directory.

    Returns:
        (path, raw body) pairs in path order; decoding is left to the parser

    Raises:
        CrawlError: If the directory cannot be walked or a file cannot be read
    """
    def _on_walk_error(error: OSError) -> None:
        raise CrawlError(f"Could not crawl retrieved metadata: {error}", path=str(type_dir)) from error

    paths: List[Path] = []
    for root, _dirs, file_names in os.walk(type_dir, onerror=_on_walk_error):
        paths.extend(Path(root) / name for name in file_names)

    files = []
    for path in sorted(paths):
        try:
            files.append((path, path.read_bytes()))
        except OSError as e:
            raise CrawlError(f"Could not read retrieved file {path}: {e}", path=str(path)) from e
    return files


class ChildMaterializer:
    """
    Inserts levels 3 and 4 under the items of a child-bearing type.
    """

    def __init__(self, client: BaseMetadataClient, limiter: Optional[RequestLimiter] = None,
                 child_types: Optional[ChildTypeRegistry] = None,
                 config_manager: Optional[ConfigManager] = None):
        self.client = client
        self.limiter = limiter or RequestLimiter()
        self.child_types = child_types or child_type_registry
        self.config = config_manager or config

    async def materialize(self, type_node: TreeNode, type_name: str,
                          descriptor: TypeDescriptor, item_names: List[str]) -> TreeNode:
        """
        Retrieve and parse every named item of the type, deepening type_node in place.

        Args:
            type_node: Level-1 node whose level-2 children are the items
            type_name: Canonical type name
            descriptor: The type's descriptor
            item_names: Full names of the items to retrieve

        Returns:
            The deepened type_node
        """
        logging.debug(f"Indexing children of {type_name}: {item_names}")
        if not item_names:
            return type_node

        retrieve_package = {type_name: item_names}
        retrieve_dir = tempfile.mkdtemp(prefix=self.config.retrieve_prefix)
        logging.debug(f"Child retrieve package is {retrieve_package}, retrieving into {retrieve_dir}")

        try:
            await self.limiter.run(
                self.client.retrieve_unpackaged(retrieve_package, self.config.use_zip, retrieve_dir)
            )
            type_dir = Path(retrieve_dir) / self.config.unpackaged_directory / descriptor.directory_name
            files = await asyncio.to_thread(crawl_retrieved_files, type_dir)
        except Exception as e:
            logging.error(f"Could not index metadata type {type_name}: {e}", exc_info=True)
            raise

        for path, body in files:
            self._index_file(type_node, type_name, path, body)

        # TODO: remove retrieve_dir once callers stop reading retrieved files from it
        logging.debug(f"Retrieved files for {type_name} left in {retrieve_dir}")
        return type_node

    def _index_file(self, type_node: TreeNode, type_name: str, path: Path, body: bytes) -> None:
        base_name = item_name_from_path(path.name)
        item_node = type_node.find_child(id=f"{type_name}.{base_name}")
        if item_node is None:
            logging.warning(f"Retrieved file {path.name} has no listed {type_name} item, skipping")
            return

        try:
            document = parse_markup(body, str(path))
        except ParseError as e:
            logging.error(f"Skipping {path.name}: {e}")
            return

        root = root_element(document, type_name)
        if root is None:
            logging.warning(f"Retrieved file {path.name} has no <{type_name}> root element, skipping")
            return

        for tag_name, value in root.items():
            child_type = self.child_types.get_by_tag(tag_name)
            if child_type is None:
                continue

            leaves = self._build_leaves(type_name, base_name, tag_name, child_type, value)
            if item_node.find_child(text=tag_name) is None:
                item_node.children.append(TreeNode(
                    id=f"{type_name}.{base_name}.{tag_name}",
                    level=3,
                    text=tag_name,
                    title=tag_name,
                    is_folder=True,
                    cls=FOLDER_CLS,
                    children=leaves
                ))

    def _build_leaves(self, type_name: str, base_name: str, tag_name: str,
                      child_type: ChildType, value: Any) -> List[TreeNode]:
        leaves = []
        for entry in as_list(value):
            key = None
            if isinstance(entry, dict):
                for field_name in LEAF_KEY_FIELDS:
                    key = first_text(entry.get(field_name))
                    if key:
                        break
            if not key:
                logging.warning(f"Unrecognized child metadata {child_type.xml_name} in {type_name}.{base_name}: {entry}")
                continue
            leaves.append(TreeNode(
                id=f"{type_name}.{base_name}.{tag_name}.{key}",
                level=4,
                text=key,
                title=key,
                leaf=True
            ))
        return leaves
