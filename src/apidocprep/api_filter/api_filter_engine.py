"""Application of an API filter to reflection information.

The engine walks the namespace entries of an ApiFilterTree and removes the matching
namespaces, types and members from a ReflectionDocument. Removal is destructive and
final: the document is mutated in place.
"""

import logging
from typing import Optional

from apidocprep.api_filter.api_filter_node import ApiFilterNode
from apidocprep.api_filter.api_filter_tree import ApiFilterTree
from apidocprep.build.progress import LoggingProgressReporter, ProgressReporter
from apidocprep.reflection.reflection_document import ReflectionDocument
from apidocprep.types import PathType

logger = logging.getLogger(__name__)


def strip_member_id(api_id: str) -> str:
    """Reduce an API id to the identity used for filtering.

    The two character kind prefix (``N:``, ``T:``, ``M:``, ``P:``, ...) is removed along
    with any parameter list, so all overloads of a method share one identity.

    Example:
        >>> strip_member_id("M:MyCompany.Utils.Helper.Run(System.Int32)")
        'MyCompany.Utils.Helper.Run'
        >>> strip_member_id("P:MyCompany.Utils.Helper.Name")
        'MyCompany.Utils.Helper.Name'
    """
    if len(api_id) >= 2 and api_id[1] == ":":
        api_id = api_id[2:]
    pos = api_id.find("(")
    if pos != -1:
        api_id = api_id[:pos]
    return api_id


class ApiFilterEngine:
    """Applies API filter trees to reflection documents.

    For each namespace entry in the filter:

    - An entry without children removes the entire namespace.
    - A hidden entry keeps only the listed types. Each listed type has its own member
      filter applied, and every other type in the namespace is removed.
    - An exposed entry removes the listed types that are blanket exclusions and applies
      the member filter of every other listed type.

    Member filters work the same way one level down: a hidden type entry keeps only the
    listed members, while an exposed type entry removes only the listed members. Member
    names are compared without their parameter lists.

    Every removal is reported through the progress reporter with the removed entity's
    full id.

    Attributes:
        reporter (ProgressReporter): Destination for progress messages.
        removed_count (int): Number of ``api`` nodes removed by the last call to apply.

    Example:
        >>> doc = ReflectionDocument.from_string(
        ...     '<reflection><apis><api id="N:A"/></apis></reflection>')
        >>> tree = ApiFilterTree([ApiFilterNode("A", is_exposed=False)])
        >>> ApiFilterEngine().apply(tree, doc)
        1
    """

    def __init__(self, reporter: Optional[ProgressReporter] = None) -> None:
        self.reporter = reporter if reporter is not None else LoggingProgressReporter(logger)
        self.removed_count = 0

    def apply(self, filter_tree: ApiFilterTree, document: ReflectionDocument) -> int:
        """Apply a filter tree to a reflection document in place.

        Args:
            filter_tree: The API filter to apply.
            document: The reflection document to filter.

        Returns:
            The number of ``api`` nodes removed from the document.
        """
        self.removed_count = 0

        for ns_filter in filter_tree:
            if not ns_filter.children:
                self.remove_namespace(document, ns_filter.full_name)
            elif not ns_filter.is_exposed:
                self._keep_listed_types(document, ns_filter)
            else:
                self._remove_listed_types(document, ns_filter)

        return self.removed_count

    def apply_to_file(self, filter_tree: ApiFilterTree, reflection_filename: PathType) -> int:
        """Apply a filter tree to a reflection information file and save it in place.

        Returns:
            The number of ``api`` nodes removed from the file.
        """
        document = ReflectionDocument.load(reflection_filename)
        removed = self.apply(filter_tree, document)
        document.save(reflection_filename)
        return removed

    def _keep_listed_types(self, document: ReflectionDocument, ns_filter: ApiFilterNode) -> None:
        for type_node in document.namespace_members("N:" + ns_filter.full_name):
            type_id = type_node.get("id", "")
            if not type_id.startswith("T:"):
                continue

            type_filter = ns_filter.find_child(type_id[2:])
            if type_filter is not None:
                self.apply_member_filter(document, type_filter)
            else:
                self.remove_type(document, type_id[2:])

    def _remove_listed_types(self, document: ReflectionDocument, ns_filter: ApiFilterNode) -> None:
        for type_filter in ns_filter.children:
            if type_filter.is_blanket_exclusion:
                self.remove_type(document, type_filter.full_name)
            else:
                self.apply_member_filter(document, type_filter)

    def apply_member_filter(self, document: ReflectionDocument, type_filter: ApiFilterNode) -> None:
        """Keep or remove the members of a single type.

        Args:
            document: The reflection document to filter.
            type_filter: The type entry whose children list member names.
        """
        members = document.type_members("T:" + type_filter.full_name)

        if not type_filter.is_exposed:
            keep = {member_filter.full_name for member_filter in type_filter.children}
            for member in members:
                member_id = member.get("id", "")
                if strip_member_id(member_id) not in keep:
                    self._remove_member(document, member_id)
        else:
            for member_filter in type_filter.children:
                for member in members:
                    member_id = member.get("id", "")
                    if member_id in document and strip_member_id(member_id) == member_filter.full_name:
                        self._remove_member(document, member_id)

    def _remove_member(self, document: ReflectionDocument, member_id: str) -> None:
        self.reporter.report_progress("    Removing member '{0}'", member_id)
        if document.remove_api(member_id):
            self.removed_count += 1

    def remove_namespace(self, document: ReflectionDocument, name: str) -> None:
        """Remove a namespace and every API it contains.

        A namespace that is not in the document is skipped after the progress message.

        Args:
            document: The reflection document to filter.
            name: The namespace name without its ``N:`` prefix.
        """
        namespace_id = "N:" + name
        self.reporter.report_progress("    Removing namespace '{0}'", namespace_id)

        if namespace_id not in document:
            return

        members = document.namespace_members(namespace_id)
        self._remove(document, namespace_id)
        for member in members:
            self._remove(document, member.get("id", ""))

    def remove_type(self, document: ReflectionDocument, name: str) -> None:
        """Remove a type and all of its members.

        A type that is not in the document is skipped after the progress message.

        Args:
            document: The reflection document to filter.
            name: The fully qualified type name without its ``T:`` prefix.
        """
        type_id = "T:" + name
        self.reporter.report_progress("    Removing type '{0}'", type_id)

        if type_id not in document:
            return

        members = document.type_members(type_id)
        self._remove(document, type_id)
        for member in members:
            self._remove(document, member.get("id", ""))

    def _remove(self, document: ReflectionDocument, api_id: str) -> None:
        if document.remove_api(api_id):
            self.removed_count += 1
