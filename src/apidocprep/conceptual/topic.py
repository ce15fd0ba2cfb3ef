"""Conceptual topics and content layout files.

A content layout file defines the table of contents of the conceptual topics:

.. code-block:: xml

    <Topics>
      <Topic id="4f2b9b9c-..." visible="True" title="Welcome" tocTitle="Welcome">
        <HelpKeywords>
          <HelpKeyword index="K" term="getting started" />
        </HelpKeywords>
        <Topic id="7a1e..." visible="True" title="Version {@BuildDate:%Y}" />
      </Topic>
    </Topics>

The topic files themselves are the project's ``.aml`` files. Each one is matched to its
layout entry by the ``id`` attribute of its root ``topic`` element.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

from apidocprep.project.project_file import BuildAction, FileItem

if TYPE_CHECKING:
    from apidocprep.build.build_context import BuildContext

logger = logging.getLogger(__name__)

TOPIC_FILE_EXTENSION = ".aml"


class Topic:
    """A single conceptual topic from a content layout file.

    Attributes:
        id (str): The topic id. Generated files are named after it.
        title (str): The topic title. May contain substitution tags.
        toc_title (str): Table of contents title. Defaults to the title.
        link_text (str): Text used for links to the topic.
        visible (bool): Whether the topic appears in the table of contents.
        keywords (list[tuple[str, str]]): Index keywords as (index, term) pairs.
        source_file (Optional[Path]): The topic file, or None for a container-only entry.
        subtopics (list[Topic]): Child topics.
    """

    def __init__(
        self,
        topic_id: str,
        title: str = "",
        toc_title: str = "",
        link_text: str = "",
        visible: bool = True,
        keywords: Optional[List[Tuple[str, str]]] = None,
        source_file: Optional[Path] = None,
    ) -> None:
        self.id = topic_id
        self.title = title
        self.toc_title = toc_title
        self.link_text = link_text
        self.visible = visible
        self.keywords: List[Tuple[str, str]] = list(keywords or [])
        self.source_file = source_file
        self.subtopics: List["Topic"] = []

    @property
    def display_title(self) -> str:
        return self.title or self.id

    def __iter__(self) -> Iterator["Topic"]:
        """Iterate over this topic and all of its subtopics, depth-first."""
        yield self
        for subtopic in self.subtopics:
            yield from subtopic

    def __repr__(self) -> str:
        return f"Topic({self.id!r}, {self.title!r})"

    def generate(self, folder: Path, build: "BuildContext") -> Optional[Path]:
        """Copy the topic file to ``folder`` as ``<id>.xml``.

        Content whose root element is not ``topic`` is wrapped in a ``topic`` element.
        Topics without a file are skipped.

        Returns:
            The generated file, or None if the topic has no file.
        """
        if self.source_file is None:
            return None

        root = ET.parse(self.source_file).getroot()
        if root.tag != "topic":
            wrapper = ET.Element("topic", {"id": self.id, "revisionNumber": "1"})
            wrapper.append(root)
            root = wrapper

        dest = folder / f"{self.id}.xml"
        build.report_progress("    {0} -> {1}", self.source_file, dest)
        ET.ElementTree(root).write(dest, encoding="utf-8", xml_declaration=True)
        return dest

    def write_companion_file(self, folder: Path, build: "BuildContext") -> Path:
        """Write the companion file used to resolve conceptual links to this topic."""
        root = ET.Element("metadata", {"fileAssetGuid": self.id, "assetTypeId": "CompanionFile"})
        topic = ET.SubElement(root, "topic", {"id": self.id})
        ET.SubElement(topic, "title").text = build.transform_text(self.display_title)
        if self.link_text:
            ET.SubElement(topic, "linkText").text = build.transform_text(self.link_text)

        dest = folder / f"{self.id}.cmp.xml"
        ET.indent(root)
        ET.ElementTree(root).write(dest, encoding="utf-8", xml_declaration=True)
        return dest

    def write_metadata(self, parent: ET.Element, build: "BuildContext") -> ET.Element:
        """Append this topic's content metadata to ``parent``."""
        topic = ET.SubElement(parent, "topic", {"id": self.id, "revisionNumber": "1"})
        ET.SubElement(topic, "title").text = build.transform_text(self.display_title)
        ET.SubElement(topic, "tableOfContentsTitle").text = build.transform_text(self.toc_title or self.display_title)
        for index, term in self.keywords:
            ET.SubElement(topic, "keyword", {"index": index}).text = build.transform_text(term)
        return topic

    def write_manifest(self, parent: ET.Element, build: "BuildContext") -> ET.Element:
        """Append this topic's manifest entry to ``parent``."""
        return ET.SubElement(parent, "topic", {"id": self.id, "type": "MAML"})


class TopicCollection:
    """The topics defined by a single content layout file.

    Iterating over a collection yields every topic depth-first, starting with the first
    root topic.

    Attributes:
        file_item (FileItem): The content layout file item.
        topics (list[Topic]): The root topics. Empty until load() is called.
    """

    def __init__(self, file_item: FileItem) -> None:
        self.file_item = file_item
        self.topics: List[Topic] = []

    def __iter__(self) -> Iterator[Topic]:
        for topic in self.topics:
            yield from topic

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def _topic_files(self) -> Dict[str, Path]:
        """Map topic ids to the project's topic files."""
        files: Dict[str, Path] = {}
        for item in self.file_item.project.items(BuildAction.NONE) + self.file_item.project.items(
            BuildAction.CONTENT
        ):
            if item.full_path.suffix.lower() != TOPIC_FILE_EXTENSION or not item.full_path.exists():
                continue
            try:
                topic_id = ET.parse(item.full_path).getroot().get("id")
            except ET.ParseError:
                logger.warning("Unable to parse topic file %s", item.full_path)
                continue
            if topic_id:
                files.setdefault(topic_id, item.full_path)
        return files

    def load(self) -> None:
        """Load the topics from the content layout file."""
        topic_files = self._topic_files()
        root = ET.parse(self.file_item.full_path).getroot()
        self.topics = [self._parse_topic(element, topic_files) for element in root.findall("Topic")]

    def _parse_topic(self, element: ET.Element, topic_files: Dict[str, Path]) -> Topic:
        topic_id = element.get("id", "")
        keywords = [
            (keyword.get("index", "K"), keyword.get("term", ""))
            for keyword in element.findall("HelpKeywords/HelpKeyword")
        ]
        topic = Topic(
            topic_id,
            title=element.get("title", ""),
            toc_title=element.get("tocTitle", ""),
            link_text=element.get("linkText", ""),
            visible=element.get("visible", "True").lower() != "false",
            keywords=keywords,
            source_file=topic_files.get(topic_id),
        )
        topic.subtopics = [self._parse_topic(child, topic_files) for child in element.findall("Topic")]
        return topic

    def generate_conceptual_topics(self, folder: Path, build: "BuildContext") -> List[Path]:
        """Generate the topic files of every topic in the collection into ``folder``."""
        generated = []
        for topic in self:
            dest = topic.generate(folder, build)
            if dest is not None:
                generated.append(dest)
        return generated
