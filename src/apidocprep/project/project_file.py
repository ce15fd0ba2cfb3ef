"""Minimal reader for MSBuild-style documentation project files.

Only the parts of a project file needed by the build steps are read: the properties of
every ``PropertyGroup`` in document order, and the items of every ``ItemGroup``. Item
``Include`` and ``Exclude`` attributes may contain wildcards, which are expanded against
the project folder. Conditions, imports and property functions are not evaluated.

.. code-block:: xml

    <Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
      <PropertyGroup>
        <HtmlHelpName>Documentation</HtmlHelpName>
      </PropertyGroup>
      <ItemGroup>
        <Tokens Include="Content\\Common.tokens" />
        <Image Include="media\\*.png" Exclude="media\\draft*.png" />
        <ContentLayout Include="Content Layout.content">
          <SortOrder>1</SortOrder>
        </ContentLayout>
      </ItemGroup>
    </Project>
"""

import os
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from apidocprep.conceptual.content_file import ContentFile
from apidocprep.conceptual.image_reference import ImageReference
from apidocprep.project.project_properties import ProjectProperties
from apidocprep.types import PathType

WILDCARD_CHARACTERS = frozenset("*?[")


class BuildAction(str, Enum):
    """Build action of a project item, i.e. the item element name."""

    NONE = "None"
    CONTENT = "Content"
    TOKENS = "Tokens"
    CODE_SNIPPETS = "CodeSnippets"
    IMAGE = "Image"
    CONTENT_LAYOUT = "ContentLayout"
    SITE_MAP = "SiteMap"

    @classmethod
    def parse(cls, value: str) -> Optional["BuildAction"]:
        """Parse a build action name case-insensitively. Returns None for other item types."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        return None


def _local_name(tag: str) -> str:
    """Strip an XML namespace from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _normalize(pattern: str) -> str:
    return pattern.strip().replace("\\", "/")


class FileItem:
    """A single build item from a project file.

    Attributes:
        project (ProjectFile): The project containing the item.
        build_action (BuildAction): The item's build action.
        full_path (Path): Absolute path to the item's file.
        link_path (Path): Project-relative location of the item. Differs from full_path
            only for linked items.
        metadata (dict[str, str]): Item metadata read from child elements.
    """

    def __init__(
        self,
        project: "ProjectFile",
        build_action: BuildAction,
        full_path: Path,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.project = project
        self.build_action = build_action
        self.full_path = full_path
        self.metadata: Dict[str, str] = dict(metadata or {})

        link = self.get_metadata("Link")
        self.link_path = (project.folder / _normalize(link)).resolve() if link else full_path

    def get_metadata(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get an item metadata value using a case-insensitive name."""
        for key, value in self.metadata.items():
            if key.lower() == name.lower():
                return value
        return default

    @property
    def sort_order(self) -> int:
        """The item's SortOrder metadata, or 0 if it is absent or not a number."""
        try:
            return int(self.get_metadata("SortOrder", "0") or "0")
        except ValueError:
            return 0

    def __repr__(self) -> str:
        return f"FileItem({self.build_action.value}, {str(self.full_path)!r})"


class ProjectFile:
    """A documentation project file.

    Attributes:
        path (Path): Absolute path to the project file.
        folder (Path): Folder containing the project file. Relative item paths are
            resolved against it.

    Example:
        >>> project = ProjectFile.load("Documentation.shfbproj")  # doctest: +SKIP
        >>> project.properties.get_evaluated("HtmlHelpName")  # doctest: +SKIP
        'Documentation'
    """

    def __init__(self, path: PathType, global_properties: Optional[Mapping[str, str]] = None) -> None:
        self.path = Path(path).resolve()
        self.folder = self.path.parent
        self._evaluated: List[Tuple[str, str]] = []
        self._global_properties = dict(global_properties or {})
        self._items: List[FileItem] = []
        self._project_files: Optional[List[str]] = None

    @classmethod
    def load(cls, path: PathType, global_properties: Optional[Mapping[str, str]] = None) -> "ProjectFile":
        """Load a project file.

        Args:
            path: Path to the project file.
            global_properties: Properties supplied from outside the project.

        Raises:
            FileNotFoundError: If the project file does not exist.
            xml.etree.ElementTree.ParseError: If the project file is not well formed.
        """
        project = cls(path, global_properties)
        if not project.path.exists():
            raise FileNotFoundError(f"Project file not found: {project.path}")

        root = ET.parse(project.path).getroot()
        for group in root:
            group_name = _local_name(group.tag)
            if group_name == "PropertyGroup":
                for prop in group:
                    project._evaluated.append((_local_name(prop.tag), (prop.text or "").strip()))
            elif group_name == "ItemGroup":
                for item in group:
                    project._add_item(item)
        return project

    def _add_item(self, element: ET.Element) -> None:
        build_action = BuildAction.parse(_local_name(element.tag))
        include = element.get("Include")
        if build_action is None or not include:
            return

        metadata = {_local_name(child.tag): (child.text or "").strip() for child in element}
        for full_path in self._expand(include, element.get("Exclude", "")):
            self._items.append(FileItem(self, build_action, full_path, metadata))

    def _all_files(self) -> List[str]:
        if self._project_files is None:
            self._project_files = sorted(
                Path(dirpath, name).relative_to(self.folder).as_posix()
                for dirpath, _, filenames in os.walk(self.folder)
                for name in filenames
            )
        return self._project_files

    def _expand(self, include: str, exclude: str) -> List[Path]:
        """Expand an item's Include and Exclude attributes into absolute paths.

        Entries without wildcards are returned whether or not the file exists so that
        missing files can be reported by the build steps that need them.
        """
        excluded = [_normalize(p) for p in exclude.split(";") if p.strip()]
        exclude_spec = PathSpec.from_lines(GitWildMatchPattern, ["/" + p.lstrip("/") for p in excluded])

        paths: List[Path] = []
        for pattern in (_normalize(p) for p in include.split(";") if p.strip()):
            if WILDCARD_CHARACTERS.isdisjoint(pattern):
                if not exclude_spec.match_file(pattern):
                    paths.append((self.folder / pattern).resolve())
                continue

            include_spec = PathSpec.from_lines(GitWildMatchPattern, ["/" + pattern.lstrip("/")])
            for relative in self._all_files():
                if include_spec.match_file(relative) and not exclude_spec.match_file(relative):
                    paths.append((self.folder / relative).resolve())
        return paths

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def properties(self) -> ProjectProperties:
        """The project's evaluated and global properties."""
        return ProjectProperties(self._evaluated, self._global_properties)

    def get_property(self, name: str, default: str = "") -> str:
        """Get a property value, preferring global properties over evaluated ones."""
        props = self.properties
        value = props.get_global(name)
        if value is None:
            value = props.get_evaluated(name)
        return default if value is None or value == "" else value

    @property
    def presentation_style(self) -> str:
        return self.get_property("PresentationStyle", "VS2013")

    @property
    def naming_method(self) -> str:
        return self.get_property("NamingMethod", "Guid")

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def items(self, build_action: BuildAction) -> List[FileItem]:
        """Return the items with the given build action in project file order."""
        return [item for item in self._items if item.build_action == build_action]

    def content_files(self, build_action: BuildAction) -> List[ContentFile]:
        """Return the items with the given build action as content files."""
        files = []
        for item in self.items(build_action):
            content_file = ContentFile(str(item.full_path))
            content_file.link_path = str(item.link_path)
            files.append(content_file)
        return files

    def image_references(self) -> List[ImageReference]:
        """Return the project's image items as image references."""
        images = []
        for item in self.items(BuildAction.IMAGE):
            copy_to_media = (item.get_metadata("CopyToMedia", "") or "").lower() == "true"
            images.append(
                ImageReference(
                    str(item.full_path),
                    image_id=item.get_metadata("ImageId") or None,
                    alternate_text=item.get_metadata("AlternateText", "") or "",
                    copy_to_media=copy_to_media,
                )
            )
        return images
