"""API filter tree loaded from user configuration.

This module provides the ApiFilterTree class, an ordered collection of namespace-level
filter entries. The tree is built once per build (optionally merged from several
configuration sources) and is read-only while it is applied to a reflection document.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from apidocprep.api_filter.api_filter_node import ApiEntryType, ApiFilterNode
from apidocprep.exceptions import ApiFilterConfigurationError
from apidocprep.types import PathType


def _attribute(element: ET.Element, name: str) -> Optional[str]:
    """Get an attribute value using a case-insensitive attribute name."""
    for key, value in element.attrib.items():
        if key.lower() == name.lower():
            return value
    return None


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ApiFilterConfigurationError(f"Invalid isExposed value: '{value}'")


class ApiFilterTree:
    """An ordered collection of namespace-level API filter entries.

    Each root entry describes one namespace. Type entries hang below namespace entries
    and member entries hang below type entries. Ordering carries no meaning beyond
    making filter application deterministic.

    The configuration format is the ``ApiFilter`` XML fragment used in project files:

    .. code-block:: xml

        <ApiFilter>
          <Filter entryType="Namespace" fullName="MyCompany.Internal" isExposed="False" />
          <Filter entryType="Namespace" fullName="MyCompany.Utils" isExposed="True">
            <Filter entryType="Class" fullName="MyCompany.Utils.Helper" isExposed="False" />
          </Filter>
        </ApiFilter>

    Example:
        >>> tree = ApiFilterTree()
        >>> tree.add(ApiFilterNode("MyCompany.Internal", is_exposed=False))
        >>> len(tree)
        1
        >>> print(tree.get_tree_representation())
        ApiFilter
        └── MyCompany.Internal [excluded]
    """

    def __init__(self, namespaces: Optional[Iterable[ApiFilterNode]] = None) -> None:
        self._namespaces: List[ApiFilterNode] = []
        if namespaces is not None:
            for node in namespaces:
                self.add(node)

    def add(self, node: ApiFilterNode) -> None:
        """Add a namespace-level entry to the end of the tree.

        Raises:
            TypeError: If node is not an ApiFilterNode.
            ValueError: If node is attached to a parent.
        """
        if not isinstance(node, ApiFilterNode):
            raise TypeError(f"Expected ApiFilterNode, got {type(node).__name__}")
        if node.parent is not None:
            raise ValueError(f"Namespace entry '{node.full_name}' must not have a parent")
        self._namespaces.append(node)

    def namespaces(self) -> List[ApiFilterNode]:
        """Get a copy of the namespace-level entries."""
        return list(self._namespaces)

    def find(self, full_name: str) -> Optional[ApiFilterNode]:
        """Return the first namespace entry with the given full name, or None."""
        for node in self._namespaces:
            if node.full_name == full_name:
                return node
        return None

    def __iter__(self) -> Iterator[ApiFilterNode]:
        return iter(self._namespaces)

    def __len__(self) -> int:
        return len(self._namespaces)

    def __bool__(self) -> bool:
        return bool(self._namespaces)

    # ------------------------------------------------------------------
    # Configuration loading and saving
    # ------------------------------------------------------------------

    @classmethod
    def from_xml(cls, source: Union[PathType, str]) -> "ApiFilterTree":
        """Load an API filter from an ``ApiFilter`` XML file or XML text.

        Args:
            source: Path to a configuration file, or the XML text itself. Strings that
                start with ``<`` (after leading whitespace) are treated as XML text.

        Returns:
            The loaded filter tree.

        Raises:
            ApiFilterConfigurationError: If the XML is malformed, the root element is not
                ``ApiFilter``, or an entry lacks a ``fullName`` attribute.
            FileNotFoundError: If the configuration file does not exist.
        """
        try:
            if isinstance(source, str) and source.lstrip().startswith("<"):
                root = ET.fromstring(source)
            else:
                path = Path(source)
                if not path.exists():
                    raise FileNotFoundError(f"API filter file not found: {path}")
                root = ET.parse(path).getroot()
        except ET.ParseError as e:
            raise ApiFilterConfigurationError(f"Unable to parse API filter: {e}") from e

        if root.tag != "ApiFilter":
            raise ApiFilterConfigurationError(f"Expected an ApiFilter root element, found '{root.tag}'")

        tree = cls()
        for element in root:
            if element.tag == "Filter":
                tree.add(cls._parse_entry(element, None))
        return tree

    @classmethod
    def _parse_entry(cls, element: ET.Element, parent: Optional[ApiFilterNode]) -> ApiFilterNode:
        full_name = _attribute(element, "fullName")
        if full_name is None:
            raise ApiFilterConfigurationError("API filter entry is missing the fullName attribute")

        node = ApiFilterNode(
            full_name,
            parent=parent,
            is_exposed=_parse_bool(_attribute(element, "isExposed"), True),
            entry_type=ApiEntryType.parse(_attribute(element, "entryType")),
        )
        for child in element:
            if child.tag == "Filter":
                cls._parse_entry(child, node)
        return node

    def to_xml(self) -> str:
        """Serialize the tree to ``ApiFilter`` XML text."""
        root = ET.Element("ApiFilter")

        def write_entry(parent: ET.Element, node: ApiFilterNode) -> None:
            element = ET.SubElement(
                parent,
                "Filter",
                {
                    "entryType": node.entry_type.value,
                    "fullName": node.full_name,
                    "isExposed": "True" if node.is_exposed else "False",
                },
            )
            for child in node.children:
                write_entry(element, child)

        for node in self._namespaces:
            write_entry(root, node)

        ET.indent(root)
        return ET.tostring(root, encoding="unicode")

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge(self, other: "ApiFilterTree") -> None:
        """Merge the entries of another filter tree into this one.

        Entries with the same full name at the same level are merged. The entry from
        ``other`` takes precedence: if it is a blanket exclusion, or its exposure flag
        differs from the existing entry, it replaces the existing entry's children.
        Otherwise both entries list children in the same mode and their children are
        merged recursively. Entries without a counterpart are copied and appended in
        order. ``other`` is not modified.
        """
        for node in other:
            existing = self.find(node.full_name)
            if existing is None:
                self._namespaces.append(node.copy())
            else:
                self._merge_node(existing, node)

    @classmethod
    def _merge_node(cls, target: ApiFilterNode, source: ApiFilterNode) -> None:
        if source.is_blanket_exclusion or source.is_exposed != target.is_exposed:
            # Children of one mode mean the opposite under the other
            for child in target.children:
                child.parent = None
        target.is_exposed = source.is_exposed
        if source.entry_type != ApiEntryType.UNKNOWN:
            target.entry_type = source.entry_type
        for child in source.children:
            existing = target.find_child(child.full_name)
            if existing is None:
                child.copy(parent=target)
            else:
                cls._merge_node(existing, child)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a tree representation of the filter one line at a time.

        Yields:
            Lines of the tree representation, including the connecting lines. Hidden
            entries are marked with ``[excluded]``.
        """

        def write_node(node: ApiFilterNode, prefix: str, is_last: bool) -> Iterator[str]:
            connector = "└── " if is_last else "├── "
            suffix = "" if node.is_exposed else " [excluded]"
            yield f"{prefix}{connector}{node.full_name or '(global)'}{suffix}"

            children = node.children
            for i, child in enumerate(children):
                yield from write_node(child, prefix + ("    " if is_last else "│   "), i == len(children) - 1)

        yield "ApiFilter"
        for i, node in enumerate(self._namespaces):
            yield from write_node(node, "", i == len(self._namespaces) - 1)

    def get_tree_representation(self) -> str:
        """Get a complete string representation of the filter tree."""
        return "\n".join(self.stream_tree_representation())
