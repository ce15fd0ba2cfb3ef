"""Build property lookup."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Mapping, Optional, Tuple


class PropertySource(ABC):
    """Abstract base class for case-insensitive build property lookup.

    A property source distinguishes two sets of properties. Evaluated properties are
    the properties from the project file, in evaluation order, and may contain the
    same name more than once. Global properties are supplied from outside the project,
    e.g. on the command line.
    """

    @abstractmethod
    def get_evaluated(self, name: str) -> Optional[str]:
        """Return the value of the last evaluated property named ``name``, or None.

        Names are compared case-insensitively. Later evaluations (properties redeclared in
        an importing project file, command line overrides) take precedence over earlier
        ones with the same name.
        """
        pass

    @abstractmethod
    def get_global(self, name: str) -> Optional[str]:
        """Return the value of the global property named ``name``, or None.

        Names are compared case-insensitively.
        """
        pass


class ProjectProperties(PropertySource):
    """In-memory property source.

    Attributes:
        evaluated (list[tuple[str, str]]): Evaluated properties in evaluation order.
        global_properties (dict[str, str]): Global properties.

    Example:
        >>> props = ProjectProperties([("OutDir", "bin"), ("outdir", "out")], {"Configuration": "Release"})
        >>> props.get_evaluated("OUTDIR")
        'out'
        >>> props.get_global("configuration")
        'Release'
        >>> props.get_evaluated("Missing") is None
        True
    """

    def __init__(
        self,
        evaluated: Optional[Iterable[Tuple[str, str]]] = None,
        global_properties: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.evaluated: List[Tuple[str, str]] = list(evaluated or [])
        self.global_properties = dict(global_properties or {})

    def get_evaluated(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for prop_name, value in reversed(self.evaluated):
            if prop_name.lower() == wanted:
                return value
        return None

    def get_global(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.global_properties.items():
            if key.lower() == wanted:
                return value
        return None

    def with_global(self, global_properties: Mapping[str, str]) -> "ProjectProperties":
        """Return a copy with additional global properties, which override existing ones."""
        overridden = {key.lower() for key in global_properties}
        merged = {key: value for key, value in self.global_properties.items() if key.lower() not in overridden}
        merged.update(global_properties)
        return ProjectProperties(self.evaluated, merged)
