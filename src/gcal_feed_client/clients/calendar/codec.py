"""
XML entry codec for the Calendar feed protocol.

Entries are mapped to and from plain attribute values through declarative
binding tables: each binding names the child element and where its value
lives (text content or an attribute). Decoding walks the direct children of
an entry; encoding rewrites the children that already exist in a template
and never injects new ones.
"""

import copy
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from lxml import etree

from ...exceptions.calendar import InvalidEntryError
from .constants import ENTRY_NAMESPACES

logger = logging.getLogger(__name__)

# Feed documents come from the network: never resolve entities or fetch DTDs
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)

VALID_KINDS = ("str", "bool", "datetime")


@dataclass(frozen=True)
class FieldBinding:
    """
    Binds one attribute of a domain object to a child element of an entry.
    Args:
        element: Local name of the child element (namespace is ignored).
        attribute: XML attribute holding the value, or None for the element text.
        kind: How the raw string is decoded: "str", "bool" or "datetime".
    """
    element: str
    attribute: Optional[str] = None
    kind: str = "str"

    def __post_init__(self):
        if self.kind not in VALID_KINDS:
            raise ValueError(f"Invalid binding kind: {self.kind}. Must be one of: {', '.join(VALID_KINDS)}")


def local_name(element: etree._Element) -> str:
    """Returns the tag name without its namespace, or "" for comments and processing instructions."""
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def parse_entry(xml: Union[str, bytes]) -> etree._Element:
    """
    Parses an entry or feed document.
    Args:
        xml: The document as text or bytes.
    Returns:
        The root element.
    Raises:
        InvalidEntryError: If the document is empty or not well-formed.
    """
    if not xml:
        raise InvalidEntryError("Entry document is empty")
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    try:
        return etree.fromstring(xml, _PARSER)
    except etree.XMLSyntaxError as e:
        raise InvalidEntryError(f"Malformed entry XML: {e}") from e


def to_string(root: etree._Element) -> str:
    return etree.tostring(root, encoding="unicode")


def parse_datetime(raw: Optional[str]) -> Optional[datetime]:
    """Parses an RFC 3339 timestamp or a bare date as used by gd:when."""
    if not raw:
        return None
    try:
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return datetime.fromisoformat(raw)
    except ValueError as e:
        logger.warning("Failed to parse datetime %r: %s", raw, e)
        return None


def decode_value(element: etree._Element, binding: FieldBinding) -> Any:
    raw = element.text if binding.attribute is None else element.get(binding.attribute)
    if binding.kind == "bool":
        return raw == "true"
    if binding.kind == "datetime":
        return parse_datetime(raw)
    return raw


def encode_value(value: Any, binding: FieldBinding) -> Optional[str]:
    if value is None:
        return None
    if binding.kind == "bool":
        return "true" if value else "false"
    if binding.kind == "datetime" and isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _bindings_by_element(bindings: Mapping[str, FieldBinding]) -> Dict[str, list]:
    grouped: Dict[str, list] = {}
    for field_name, binding in bindings.items():
        grouped.setdefault(binding.element, []).append((field_name, binding))
    return grouped


def decode_fields(root: etree._Element, bindings: Mapping[str, FieldBinding]) -> Dict[str, Any]:
    """
    Reads every bound field present among the direct children of root.
    Fields whose element is missing are left out of the result; unknown
    elements are ignored.
    """
    grouped = _bindings_by_element(bindings)
    values: Dict[str, Any] = {}
    for child in root:
        for field_name, binding in grouped.get(local_name(child), ()):
            values[field_name] = decode_value(child, binding)
    return values


def encode_fields(root: etree._Element, bindings: Mapping[str, FieldBinding], values: Mapping[str, Any]) -> None:
    """Rewrites the bound children of root in place with the given values."""
    grouped = _bindings_by_element(bindings)
    for child in root:
        for field_name, binding in grouped.get(local_name(child), ()):
            if field_name not in values:
                continue
            encoded = encode_value(values[field_name], binding)
            if binding.attribute is None:
                child.text = encoded
            elif encoded is None:
                child.attrib.pop(binding.attribute, None)
            else:
                child.set(binding.attribute, encoded)


def child_text(root: etree._Element, name: str) -> Optional[str]:
    for child in root:
        if local_name(child) == name:
            return child.text
    return None


def find_link(root: etree._Element, rel: str) -> Optional[str]:
    """Returns the href of the first link child with the given rel."""
    for child in root:
        if local_name(child) == "link" and child.get("rel") == rel:
            return child.get("href")
    return None


def standalone_entry(entry: etree._Element) -> etree._Element:
    """
    Copies a feed entry onto a new root element that declares the full set of
    entry namespaces, so its serialized form parses on its own.
    """
    nsmap = {**entry.nsmap, **ENTRY_NAMESPACES}
    root = etree.Element(entry.tag, attrib=dict(entry.attrib), nsmap=nsmap)
    root.text = entry.text
    for child in entry:
        root.append(copy.deepcopy(child))
    return root


def feed_entries(xml: Union[str, bytes]) -> Iterator[etree._Element]:
    """
    Yields each entry of a feed document as a standalone element.
    Raises:
        InvalidEntryError: If the feed document itself is malformed.
    """
    root = parse_entry(xml)
    for child in root:
        if local_name(child) == "entry":
            yield standalone_entry(child)


def _previous_element(element: etree._Element) -> Optional[etree._Element]:
    previous = element.getprevious()
    while previous is not None and not isinstance(previous.tag, str):
        previous = previous.getprevious()
    return previous


def default_scope_role(acl_feed: etree._Element) -> Optional[str]:
    """
    Finds the role granted to the default (everyone) scope in an ACL feed.
    A role counts only when its immediately preceding sibling is a scope
    element with type="default". The last such role wins.
    Returns:
        The role value, or None if no entry grants the default scope.
    """
    role_value = None
    for entry in acl_feed:
        if local_name(entry) != "entry":
            continue
        for element in entry:
            if local_name(element) != "role":
                continue
            previous = _previous_element(element)
            if previous is not None and local_name(previous) == "scope" and previous.get("type") == "default":
                role_value = element.get("value") or ""
    return role_value
