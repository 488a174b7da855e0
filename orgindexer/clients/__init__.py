"""Remote metadata client contract and a mock implementation."""

from .base import BaseMetadataClient
from .mock import MockMetadataClient

__all__ = ["BaseMetadataClient", "MockMetadataClient"]
