"""Conceptual content settings for a project build.

This module copies the conceptual content of a project (token files, code snippet files,
images and topics) into the build's working folder, and generates the media content,
content metadata and manifest files consumed by the documentation compiler.
"""

import os
import shutil
import stat
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List

from apidocprep.build.build_context import BuildContext
from apidocprep.conceptual.content_file import ContentFile
from apidocprep.conceptual.image_reference import ImageReference
from apidocprep.conceptual.topic import TopicCollection
from apidocprep.exceptions import MissingContentFilesError
from apidocprep.project.file_item_collection import FileItemCollection
from apidocprep.project.project_file import BuildAction, ProjectFile
from apidocprep.types import PathType

STANDARD_TOKENS_TEMPLATE = "HelpFileBuilderTokens.tokens"
MEDIA_CONTENT_FILE = "_MediaContent_.xml"
CONTENT_METADATA_FILE = "_ContentMetadata_.xml"
CONCEPTUAL_MANIFEST_FILE = "ConceptualManifest.xml"
MEDIA_FOLDER = "media"
TOPIC_FOLDER = "ddueXml"
COMPANION_FOLDER = "xmlComp"

# Copied files stay writable so that they can be deleted after the build
NORMAL_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH


def _sorted_by_link_path(files: List[ContentFile]) -> List[ContentFile]:
    return sorted(files, key=lambda f: f.link_path)


def _write_xml(root: ET.Element, filename: PathType) -> None:
    ET.indent(root)
    ET.ElementTree(root).write(filename, encoding="utf-8", xml_declaration=True)


def _copy_file(source: str, dest: Path) -> None:
    shutil.copyfile(source, dest)
    os.chmod(dest, NORMAL_FILE_MODE)


class ConceptualContentSettings:
    """The conceptual content of a project during a build.

    Attributes:
        image_files (list[ImageReference]): Image files referenced by topics.
        code_snippet_files (list[ContentFile]): Code snippet files, ordered by link path.
        token_files (list[ContentFile]): Token files, ordered by link path.
        content_layout_files (list[ContentFile]): Content layout files.
        topics (list[TopicCollection]): One topic collection per content layout file.

    Example:
        >>> settings = ConceptualContentSettings(ProjectFile.load("Doc.shfbproj"))  # doctest: +SKIP
        >>> settings.copy_content_files(build)  # doctest: +SKIP
        >>> settings.create_configuration_files(build)  # doctest: +SKIP
    """

    def __init__(self, project: ProjectFile) -> None:
        self.image_files: List[ImageReference] = []
        self.code_snippet_files: List[ContentFile] = []
        self.token_files: List[ContentFile] = []
        self.content_layout_files: List[ContentFile] = []
        self.topics: List[TopicCollection] = []
        self.merge_content_from(project)

    def merge_content_from(self, project: ProjectFile) -> None:
        """Add the conceptual content of another project to these settings.

        This allows content generated into a temporary project to be added to the build
        without altering the project being built.
        """
        self.image_files.extend(project.image_references())
        self.code_snippet_files.extend(_sorted_by_link_path(project.content_files(BuildAction.CODE_SNIPPETS)))
        self.token_files.extend(_sorted_by_link_path(project.content_files(BuildAction.TOKENS)))
        self.content_layout_files.extend(project.content_files(BuildAction.CONTENT_LAYOUT))

        for file_item in FileItemCollection(project, BuildAction.CONTENT_LAYOUT):
            self.topics.append(TopicCollection(file_item))

    # ------------------------------------------------------------------
    # Content files
    # ------------------------------------------------------------------

    def copy_content_files(self, build: BuildContext) -> None:
        """Copy the token, image and topic files into the build's working folder.

        The standard token template and every project token file are transformed into
        the working folder. Code snippet files are checked for existence. Images are
        copied to the ``media`` folder and listed in ``_MediaContent_.xml``, and the
        topic files are generated into the ``ddueXml`` folder.

        Raises:
            MissingContentFilesError: If any token file (BE0052) or code snippet file
                (BE0053) is missing. All missing files of a kind are reported together.
            TransformError: If a token file cannot be transformed.
        """
        working_folder = Path(build.working_folder)
        working_folder.mkdir(parents=True, exist_ok=True)

        build.report_progress("Copying standard token shared content file...")
        build.transform_template(STANDARD_TOKENS_TEMPLATE, build.template_folder, working_folder)

        build.report_progress("Checking for other token files...")
        missing = []
        for token_file in self.token_files:
            if not os.path.exists(token_file.full_path):
                missing.append(token_file.full_path)
                build.report_progress("    Missing token file: {0}", token_file.full_path)
            else:
                build.report_progress("    {0} -> {1}", token_file.full_path, working_folder / token_file.filename)
                build.transform_template(token_file.filename, os.path.dirname(token_file.full_path), working_folder)

        if missing:
            raise MissingContentFilesError("BE0052", "One or more token files could not be found", missing)

        build.report_progress("Checking for code snippets files...")
        missing = []
        for snippets_file in self.code_snippet_files:
            if not os.path.exists(snippets_file.full_path):
                missing.append(snippets_file.full_path)
                build.report_progress("    Missing code snippets file: {0}", snippets_file.full_path)
            else:
                build.report_progress("    Found {0}", snippets_file.full_path)

        if missing:
            raise MissingContentFilesError("BE0053", "One or more code snippets files could not be found", missing)

        media_folder = working_folder / MEDIA_FOLDER
        media_folder.mkdir(parents=True, exist_ok=True)
        build.ensure_output_folders_exist(MEDIA_FOLDER)

        build.report_progress("Copying images and creating the media map file...")
        self.save_image_shared_content(working_folder / MEDIA_CONTENT_FILE, media_folder, build)

        topic_folder = working_folder / TOPIC_FOLDER
        topic_folder.mkdir(parents=True, exist_ok=True)

        build.report_progress("Generating conceptual topic files")
        for collection in self.topics:
            collection.load()
            collection.generate_conceptual_topics(topic_folder, build)

    def save_image_shared_content(self, filename: PathType, image_path: PathType, build: BuildContext) -> None:
        """Write the image map file and copy the image files.

        Every image is copied to ``image_path``. Images marked ``copy_to_media`` are also
        copied to the media folder of every help format output folder.

        Args:
            filename: The media content file to create.
            image_path: The folder to which the image files are copied.
            build: The current build.
        """
        build.ensure_output_folders_exist(MEDIA_FOLDER)
        root = ET.Element("stockSharedContentDefinitions")

        for image in self.image_files:
            item = ET.SubElement(root, "item", {"id": image.id})
            # Only the file name is needed since all images end up in one folder
            image_element = ET.SubElement(item, "image", {"file": image.filename})
            if image.alternate_text:
                ET.SubElement(image_element, "altText").text = image.alternate_text

            dest_file = Path(image_path) / image.filename
            if dest_file.exists():
                build.report_warning(
                    "BE0010",
                    "Image file '{0}' already exists.  It will be replaced by '{1}'.",
                    dest_file,
                    image.full_path,
                )

            build.report_progress("    {0} -> {1}", image.full_path, dest_file)
            _copy_file(image.full_path, dest_file)

            if image.copy_to_media:
                for base_folder in build.help_format_output_folders:
                    dest_file = Path(base_folder) / MEDIA_FOLDER / image.filename
                    build.report_progress("    {0} -> {1} (Always copied)", image.full_path, dest_file)
                    _copy_file(image.full_path, dest_file)

        _write_xml(root, filename)

    # ------------------------------------------------------------------
    # Configuration files
    # ------------------------------------------------------------------

    def create_configuration_files(self, build: BuildContext) -> None:
        """Create the companion, content metadata and conceptual manifest files.

        Topic collections must have been loaded, e.g. by copy_content_files().
        """
        self._create_companion_files(build)
        self._create_content_metadata(build)
        self._create_conceptual_manifest(build)

    def _create_companion_files(self, build: BuildContext) -> None:
        dest_folder = Path(build.working_folder) / COMPANION_FOLDER
        build.report_progress("    Companion files")
        dest_folder.mkdir(parents=True, exist_ok=True)

        for collection in self.topics:
            for topic in collection:
                topic.write_companion_file(dest_folder, build)

    def _create_content_metadata(self, build: BuildContext) -> None:
        build.report_progress("    {0}", CONTENT_METADATA_FILE)
        root = ET.Element("metadata")
        for collection in self.topics:
            for topic in collection:
                topic.write_metadata(root, build)
        _write_xml(root, Path(build.working_folder) / CONTENT_METADATA_FILE)

    def _create_conceptual_manifest(self, build: BuildContext) -> None:
        build.report_progress("    {0}", CONCEPTUAL_MANIFEST_FILE)
        root = ET.Element("topics")
        for collection in self.topics:
            for topic in collection:
                topic.write_manifest(root, build)
        _write_xml(root, Path(build.working_folder) / CONCEPTUAL_MANIFEST_FILE)
