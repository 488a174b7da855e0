"""
Org metadata indexer.

Builds the navigable forest for a subscription: one listing per subscribed
type issued concurrently, each type built into a tree as soon as its own
listing returns, then deepened by the child or folder materializer where
the type calls for it.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..catalog import ChildTypeRegistry, TypeCatalog
from ..clients import BaseMetadataClient
from ..config import ConfigManager, config
from ..models import ListingResult, TreeNode
from .children import ChildMaterializer
from .folders import FolderMaterializer
from .hierarchy import build_type_node, child_item_names
from .limits import RequestLimiter


def to_listing_result(raw: Dict[str, List[Dict[str, Any]]], request_name: str,
                      catalog: TypeCatalog) -> ListingResult:
    """
    Wrap a raw listing response in a per-type record.

    Args:
        raw: The client's response, keyed by request name
        request_name: Name the listing was requested with
        catalog: Descriptor lookup

    Returns:
        ListingResult keyed by the canonical type name
    """
    request_key, items = next(iter(raw.items()), (request_name, []))
    type_name = catalog.canonical_name(request_key)
    return ListingResult(
        request_name=request_key,
        type_name=type_name,
        descriptor=catalog.resolve(type_name),
        items=items or []
    )


class Indexer:
    """
    Indexes a remote org's metadata for a subscription of type names.
    """

    def __init__(self, client: BaseMetadataClient, subscription: Iterable[str],
                 child_types: Optional[ChildTypeRegistry] = None,
                 config_manager: Optional[ConfigManager] = None):
        """
        Initialize the indexer.

        Args:
            client: Remote metadata client
            subscription: Type names to index, in display order
            child_types: Child-tag table (defaults to the global registry)
            config_manager: Configuration (defaults to the global config)
        """
        self.client = client
        # Ordered set: duplicates keep their first position
        self.subscription = list(dict.fromkeys(subscription))
        self.child_types = child_types
        self.config = config_manager or config

    async def index(self) -> List[TreeNode]:
        """
        Index every subscribed type.

        Returns:
            The forest: one level-1 node per subscribed type, in subscription order

        Raises:
            UnknownTypeError: A subscribed type is not in the remote descriptor
                table; raised before any listing call
            TransportError, CrawlError: Any remote or crawl failure; no partial
                forest is returned
        """
        logging.debug(f"Indexing subscription: {self.subscription}")

        try:
            catalog = TypeCatalog(await self.client.describe())
            request_names = [catalog.list_request_name(type_name) for type_name in self.subscription]
            logging.debug(f"Listing request names: {request_names}")

            limiter = RequestLimiter(self.config.max_concurrent_requests)
            forest = await asyncio.gather(*(
                self._index_type(request_name, catalog, limiter) for request_name in request_names
            ))
        except Exception as e:
            logging.error("An error occurred indexing server properties")
            logging.error(str(e), exc_info=True)
            raise

        logging.info(f"Indexed {len(forest)} metadata types")
        return list(forest)

    async def _index_type(self, request_name: str, catalog: TypeCatalog,
                          limiter: RequestLimiter) -> TreeNode:
        raw = await limiter.run(self.client.list_metadata(request_name))
        listing = to_listing_result(raw, request_name, catalog)
        logging.debug(f"Indexing type {listing.type_name} ({len(listing.items)} items)")

        type_node = build_type_node(listing)
        descriptor = listing.descriptor

        # A type is never both child-bearing and folder-scoped
        if descriptor.has_child_types:
            materializer = ChildMaterializer(self.client, limiter, self.child_types, self.config)
            return await materializer.materialize(
                type_node, listing.type_name, descriptor, child_item_names(type_node)
            )
        if descriptor.in_folder:
            return await FolderMaterializer(self.client, limiter).materialize(type_node, listing.type_name)
        return type_node
