"""Generic XML decoding into an ordered, namespace-free node tree."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from osis_bible.errors import OsisDecodeError


@dataclass
class XmlNode:
    """An element with raw string attributes and ordered mixed content.

    ``content`` interleaves text fragments and child nodes in document
    order. Whitespace-only text is kept; trimming is left to callers.
    """

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    content: List[Union[str, "XmlNode"]] = field(default_factory=list)

    def elements(self) -> Iterator["XmlNode"]:
        """Iterate over child elements."""
        for item in self.content:
            if isinstance(item, XmlNode):
                yield item

    def children(self, tag: str) -> List["XmlNode"]:
        """Return all child elements with the given tag (possibly empty)."""
        return [node for node in self.elements() if node.tag == tag]

    def child(self, tag: str) -> Optional["XmlNode"]:
        """Return the first child element with the given tag."""
        for node in self.elements():
            if node.tag == tag:
                return node
        return None

    def attr(self, *names: str) -> Optional[str]:
        """Return the first non-empty attribute among ``names``."""
        for name in names:
            value = self.attrs.get(name)
            if value:
                return value
        return None

    @property
    def text(self) -> str:
        """Direct text of this node, without descendants."""
        return "".join(item for item in self.content if isinstance(item, str))

    def collect_text(self) -> str:
        """Concatenate all descendant text depth-first in document order."""
        parts: List[str] = []
        stack: List[Union[str, XmlNode]] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            else:
                stack.extend(reversed(item.content))
        return "".join(parts)


def _local_name(name: str) -> str:
    """Strip a "{namespace}" or "prefix:" qualifier."""
    if name.startswith("{"):
        name = name.split("}", 1)[1]
    return name.rsplit(":", 1)[-1]


def _convert(element: ET.Element) -> XmlNode:
    node = XmlNode(
        tag=_local_name(element.tag),
        attrs={_local_name(k): v for k, v in element.attrib.items()},
    )
    if element.text:
        node.content.append(element.text)
    for sub in element:
        # Comments and processing instructions have a callable tag
        if isinstance(sub.tag, str):
            node.content.append(_convert(sub))
        if sub.tail:
            node.content.append(sub.tail)
    return node


def decode(source: Union[str, bytes]) -> XmlNode:
    """Decode an XML document.

    Args:
        source: Complete XML document as text or bytes

    Returns:
        A document node (empty tag) whose only child is the root element

    Raises:
        OsisDecodeError: If the document is not well-formed
    """
    try:
        if isinstance(source, bytes):
            root = ET.fromstring(source)
        else:
            root = ET.fromstring(source.lstrip("\ufeff"))
    except ET.ParseError as exc:
        raise OsisDecodeError(f"Malformed XML: {exc}") from exc
    except (UnicodeError, ValueError) as exc:
        raise OsisDecodeError(f"Undecodable XML: {exc}") from exc
    return XmlNode(tag="", content=[_convert(root)])
