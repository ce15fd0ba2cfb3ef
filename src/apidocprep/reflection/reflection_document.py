"""Indexed, mutable view of a reflection information file.

The reflection information file describes an entire reflected API surface:

.. code-block:: xml

    <reflection>
      <apis>
        <api id="N:MyCompany.Utils">
          <elements><element api="T:MyCompany.Utils.Helper" /></elements>
        </api>
        <api id="T:MyCompany.Utils.Helper">
          <containers><namespace api="N:MyCompany.Utils" /></containers>
          <elements><element api="M:MyCompany.Utils.Helper.Run" /></elements>
        </api>
        <api id="M:MyCompany.Utils.Helper.Run">
          <containers>
            <namespace api="N:MyCompany.Utils" />
            <type api="T:MyCompany.Utils.Helper" />
          </containers>
        </api>
      </apis>
    </reflection>

Indices are built once when the document is loaded, and every removal goes through
:meth:`ReflectionDocument.remove_api` so that cross-reference ``element`` entries can
never outlive the ``api`` node they refer to.

Comments and processing instructions inside the root element are kept and written back
by :meth:`ReflectionDocument.save`. Those outside the root element are not.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from apidocprep.exceptions import MalformedReflectionError
from apidocprep.types import PathType


def _parser() -> ET.XMLParser:
    return ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))


class ReflectionDocument:
    """A reflection information document with id and container indices.

    Attributes:
        source (str): Description of where the document was loaded from.

    Example:
        >>> doc = ReflectionDocument.from_string(
        ...     '<reflection><apis>'
        ...     '<api id="N:A"/>'
        ...     '<api id="T:A.B"><containers><namespace api="N:A"/></containers></api>'
        ...     '</apis></reflection>')
        >>> [api.get("id") for api in doc.namespace_members("N:A")]
        ['T:A.B']
        >>> doc.remove_api("T:A.B")
        True
        >>> "T:A.B" in doc
        False
    """

    def __init__(self, tree: ET.ElementTree, source: str = "<memory>") -> None:
        """Wrap a parsed element tree and build its indices.

        Args:
            tree: The parsed reflection information.
            source: Description of the document source used in error messages.

        Raises:
            MalformedReflectionError: If the tree has no ``reflection/apis`` node.
        """
        self.source = source
        self._tree = tree
        root = tree.getroot()
        apis = root.find("apis") if root.tag == "reflection" else None
        if apis is None:
            raise MalformedReflectionError(source)
        self._apis = apis

        self._parents: Dict[ET.Element, ET.Element] = {}
        self._api_by_id: Dict[str, ET.Element] = {}
        self._duplicate_apis: Dict[str, List[ET.Element]] = {}
        self._namespace_members: Dict[str, List[ET.Element]] = {}
        self._type_members: Dict[str, List[ET.Element]] = {}
        self._element_refs: Dict[str, List[ET.Element]] = {}
        self._build_indices()

    @classmethod
    def load(cls, filename: PathType) -> "ReflectionDocument":
        """Load a reflection information file.

        Raises:
            FileNotFoundError: If the file does not exist.
            MalformedReflectionError: If the file has no ``reflection/apis`` node.
        """
        path = Path(filename)
        if not path.exists():
            raise FileNotFoundError(f"Reflection information file not found: {path}")
        return cls(ET.parse(path, parser=_parser()), str(path))

    @classmethod
    def from_string(cls, text: str) -> "ReflectionDocument":
        """Parse reflection information from XML text."""
        return cls(ET.ElementTree(ET.fromstring(text, parser=_parser())))

    def _build_indices(self) -> None:
        for parent in self._tree.getroot().iter():
            for child in parent:
                self._parents[child] = parent

        for api in self._apis.iter("api"):
            api_id = api.get("id")
            if api_id is None:
                continue
            if api_id in self._api_by_id:
                self._duplicate_apis.setdefault(api_id, []).append(api)
                continue
            self._api_by_id[api_id] = api

            containers = api.find("containers")
            if containers is not None:
                namespace = containers.find("namespace")
                if namespace is not None and namespace.get("api") is not None:
                    self._namespace_members.setdefault(namespace.get("api", ""), []).append(api)
                type_ref = containers.find("type")
                if type_ref is not None and type_ref.get("api") is not None:
                    self._type_members.setdefault(type_ref.get("api", ""), []).append(api)

        for element in self._tree.getroot().iter("element"):
            ref = element.get("api")
            if ref is not None:
                self._element_refs.setdefault(ref, []).append(element)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_api(self, api_id: str) -> Optional[ET.Element]:
        """Return the ``api`` element with the given id, or None if absent."""
        return self._api_by_id.get(api_id)

    def api_ids(self) -> List[str]:
        """Return the ids of all ``api`` elements still in the document."""
        return list(self._api_by_id)

    def _live(self, elements: List[ET.Element]) -> List[ET.Element]:
        return [api for api in elements if self._api_by_id.get(api.get("id", "")) is api]

    def namespace_members(self, namespace_id: str) -> List[ET.Element]:
        """Return the ``api`` elements contained in the namespace ``namespace_id``.

        Args:
            namespace_id: The prefixed namespace id (e.g. ``N:MyCompany.Utils``).

        Returns:
            A snapshot list in document order. It is safe to remove entries while
            iterating over it.
        """
        return self._live(self._namespace_members.get(namespace_id, []))

    def type_members(self, type_id: str) -> List[ET.Element]:
        """Return the ``api`` elements contained in the type ``type_id`` (e.g. ``T:A.B``)."""
        return self._live(self._type_members.get(type_id, []))

    def element_references(self, api_id: str) -> List[ET.Element]:
        """Return the ``element`` entries that reference ``api_id`` and are still attached."""
        return [element for element in self._element_refs.get(api_id, []) if element in self._parents]

    def __contains__(self, api_id: object) -> bool:
        return api_id in self._api_by_id

    def __len__(self) -> int:
        return len(self._api_by_id)

    def __iter__(self) -> Iterator[Tuple[str, ET.Element]]:
        return iter(list(self._api_by_id.items()))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _detach(self, node: ET.Element) -> None:
        parent = self._parents.pop(node, None)
        if parent is not None:
            parent.remove(node)

    def remove_api(self, api_id: str) -> bool:
        """Remove an ``api`` element and purge every ``element`` entry referencing it.

        This is the only removal primitive. Namespace, type and member removal all go
        through it so that no stale cross-reference survives a removal.
        Later ``api`` elements with the same id are removed along with the first one.

        Args:
            api_id: The full, prefixed id of the ``api`` element.

        Returns:
            True if the element was found and removed, False if it was absent.
        """
        api = self._api_by_id.pop(api_id, None)
        if api is None:
            return False

        for node in [api] + self._duplicate_apis.pop(api_id, []):
            self._detach(node)
            # Entries nested in the removed node are no longer part of the document
            for descendant in node.iter():
                self._parents.pop(descendant, None)

        for element in self._element_refs.pop(api_id, []):
            self._detach(element)
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, filename: PathType) -> None:
        """Write the document to ``filename`` as UTF-8 with an XML declaration."""
        self._tree.write(Path(filename), encoding="utf-8", xml_declaration=True)

    def to_string(self) -> str:
        """Serialize the document to XML text."""
        return ET.tostring(self._tree.getroot(), encoding="unicode")
