"""Parser collaborator: API XML -> ResponseNode tree (xml.etree.ElementTree)."""

import re
import xml.etree.ElementTree as ET
from typing import List, Optional

from wikibot.domain.errors import MalformedResponse

# Very old wikis answer some requests with plain text such as
# "unknown_action: Unrecognised value for parameter 'action'"
_PLAIN_ERROR_RE = re.compile(r"^([a-z][a-z_-]*):\s*(.*)$", re.DOTALL)


class ElementNode:
    """ResponseNode over an ElementTree element."""

    __slots__ = ("_element",)

    def __init__(self, element: ET.Element):
        self._element = element

    @property
    def name(self) -> str:
        return self._element.tag

    @property
    def text(self) -> str:
        return self._element.text or ""

    def child(self, name: str) -> Optional["ElementNode"]:
        for element in self._element:
            if element.tag == name:
                return ElementNode(element)
        return None

    def children(self, name: Optional[str] = None) -> List["ElementNode"]:
        return [ElementNode(e) for e in self._element if name is None or e.tag == name]

    def attr(self, key: str) -> Optional[str]:
        return self._element.get(key)

    def attrs(self) -> dict:
        return dict(self._element.attrib)

    def __repr__(self):
        return f"<ElementNode {self.name} {self.attrs()}>"


class EtreeParser:
    def parse(self, raw: str) -> ElementNode:
        text = (raw or "").strip()
        if not text:
            raise MalformedResponse("Empty response body")

        if not text.startswith("<"):
            match = _PLAIN_ERROR_RE.match(text)
            if match is None:
                raise MalformedResponse(f"Response is not XML: {text[:80]!r}")
            return ElementNode(self._error_document(match.group(1), match.group(2).strip()))

        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise MalformedResponse(f"Response is not well-formed XML: {e}") from e
        return ElementNode(root)

    @staticmethod
    def _error_document(code: str, info: str) -> ET.Element:
        root = ET.Element("api")
        ET.SubElement(root, "error", {"code": code, "info": info})
        return root
