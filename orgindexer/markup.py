"""
Structured markup parsing for retrieved metadata files.

Bodies are parsed with xmltodict into nested dictionaries. Every element is
forced into a list so singular and repeated tags are read the same way:

    <CustomObject><fields><fullName>A</fullName></fields></CustomObject>

    {"CustomObject": [{"fields": [{"fullName": ["A"]}]}]}
"""

from typing import Any, Dict, List, Optional, Union
from xml.parsers.expat import ExpatError

import xmltodict

from .errors import ParseError

TEXT_KEY = "#text"


def parse_markup(body: Union[str, bytes], path: Optional[str] = None) -> Dict[str, Any]:
    """
    Parse a file body into a key -> list-of-values mapping.

    Raw bytes are decoded by the parser from the document's declared
    encoding, so undecodable content surfaces as ParseError too.

    Raises:
        ParseError: If the body is not well-formed markup
    """
    try:
        return xmltodict.parse(body, force_list=True)
    except ExpatError as e:
        raise ParseError(f"Malformed markup in {path or '<string>'}: {e}", path=path) from e


def as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def first_text(value: Any) -> Optional[str]:
    """Text content of the first occurrence of an element, if any."""
    for entry in as_list(value):
        if isinstance(entry, str):
            return entry
        if isinstance(entry, dict) and TEXT_KEY in entry:
            return first_text(entry[TEXT_KEY])
    return None


def root_element(document: Dict[str, Any], tag: str) -> Optional[Dict[str, Any]]:
    """The body of the document's root element when it is named ``tag``."""
    for entry in as_list(document.get(tag)):
        if isinstance(entry, dict):
            return entry
    return None
