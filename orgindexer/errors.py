"""
Exception types raised while building or deepening an org metadata index.
"""

from typing import Optional


class IndexerError(Exception):
    """Base class for all indexing failures."""


class UnknownTypeError(IndexerError):
    """A subscribed type name is absent from the remote descriptor table."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unknown metadata type: {type_name}")


class TransportError(IndexerError):
    """A call to the remote metadata client failed."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)


class CrawlError(IndexerError):
    """Walking or reading the retrieved file tree failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class ParseError(IndexerError):
    """A retrieved file body is not well-formed markup."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
