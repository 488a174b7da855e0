"""
File naming helpers.

Retrieved and listed items are identified by file paths such as
'classes/MyController.cls' or 'objects/Account.object'; the index keys them
by the logical item name ('MyController', 'Account').
"""

from pathlib import PurePosixPath

META_SUFFIX = "-meta.xml"


def item_name_from_path(file_path: str) -> str:
    """
    Derive a logical item name from a file path.

    Args:
        file_path: Path as reported by the platform or found on disk

    Returns:
        The file name without directories, companion meta suffix or extension
    """
    name = PurePosixPath(file_path.replace("\\", "/")).name
    if name.endswith(META_SUFFIX):
        name = name[:-len(META_SUFFIX)]
    if "." in name:
        name = name.rsplit(".", 1)[0]
    return name
