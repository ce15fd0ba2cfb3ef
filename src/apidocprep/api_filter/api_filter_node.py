"""Node representation for entries in an API filter tree."""

from enum import Enum
from typing import Any, Optional

from anytree import Node


class ApiEntryType(str, Enum):
    """Kind of API entity an API filter entry describes.

    The entry type is informational only. Filtering is driven by a node's position in
    the tree (namespace, type, member) and never by its entry type.
    """

    NAMESPACE = "Namespace"
    CLASS = "Class"
    STRUCTURE = "Structure"
    INTERFACE = "Interface"
    ENUMERATION = "Enumeration"
    DELEGATE = "Delegate"
    CONSTRUCTOR = "Constructor"
    METHOD = "Method"
    OPERATOR = "Operator"
    PROPERTY = "Property"
    EVENT = "Event"
    FIELD = "Field"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ApiEntryType":
        """Parse an entry type name case-insensitively, falling back to UNKNOWN."""
        if value:
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return cls.UNKNOWN


class ApiFilterNode(Node):  # type: ignore
    """Node class representing a namespace, type or member entry in an API filter.

    Extends anytree.Node with the exposure flag used by the filter engine. The node name
    is the entry's full name: the namespace name for namespace entries, the fully
    qualified type name for type entries, and the fully qualified member name without
    its parameter list for member entries. Member identity is parameter-insensitive, so
    individual overloads cannot be addressed.

    A node that is not exposed and has no children is a blanket exclusion of its whole
    subtree. Otherwise the children refine the node: under an exposed node they list the
    entries to remove, under a hidden node they list the entries to keep.

    Attributes:
        name (str): The entry's full name (inherited from anytree.Node).
        is_exposed (bool): True if the entry is kept, False if it is removed.
        entry_type (ApiEntryType): The kind of API entity described by the entry.
        children (tuple[ApiFilterNode]): The child entries (inherited from anytree.Node).

    Example:
        >>> ns = ApiFilterNode("MyCompany.Utils", is_exposed=False)
        >>> ns.is_blanket_exclusion
        True
        >>> _ = ApiFilterNode("MyCompany.Utils.Helper", parent=ns)
        >>> ns.is_blanket_exclusion
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["ApiFilterNode"] = None,
        is_exposed: bool = True,
        entry_type: ApiEntryType = ApiEntryType.UNKNOWN,
        **kwargs: Any,
    ) -> None:
        """Initialize an ApiFilterNode.

        Args:
            name: The full name of the filtered entry.
            parent: The parent node. Defaults to None.
            is_exposed: Whether the entry is kept. Defaults to True.
            entry_type: The kind of API entity. Defaults to UNKNOWN.
            **kwargs: Additional arguments passed to anytree.Node.
        """
        super().__init__(name, parent, **kwargs)
        self.is_exposed = is_exposed
        self.entry_type = entry_type

    @property
    def full_name(self) -> str:
        """The entry's full name."""
        return str(self.name)

    @property
    def is_blanket_exclusion(self) -> bool:
        """True if this entry removes its entire subtree."""
        return not self.is_exposed and not self.children

    def find_child(self, full_name: str) -> Optional["ApiFilterNode"]:
        """Return the first child whose full name matches exactly, or None."""
        for child in self.children:
            if child.full_name == full_name:
                return child
        return None

    def copy(self, parent: Optional["ApiFilterNode"] = None) -> "ApiFilterNode":
        """Return a deep copy of this node and its children attached to ``parent``."""
        clone = ApiFilterNode(self.full_name, parent=parent, is_exposed=self.is_exposed, entry_type=self.entry_type)
        for child in self.children:
            child.copy(parent=clone)
        return clone
