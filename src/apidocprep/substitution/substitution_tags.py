"""Substitution tag replacement in build template text and template files.

Substitution tags have the form ``{@Name}`` or ``{@Name:Format}``. A tag is replaced
with the value of a build field when ``Name`` matches one, otherwise with the value of a
project or global build property of that name. Values may contain further tags, so
replacement is repeated until no tags remain.
"""

import html
import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from apidocprep.build.build_context import terminate_path
from apidocprep.build.presentation_style import TransformationSettings
from apidocprep.exceptions import (
    BuilderError,
    SubstitutionLoopError,
    TransformError,
    UnknownSubstitutionTagError,
)
from apidocprep.io.encoded_text import read_with_encoding, write_with_encoding
from apidocprep.types import PathType

if TYPE_CHECKING:
    from apidocprep.build.build_context import BuildContext

logger = logging.getLogger(__name__)

FIELD_PATTERN = re.compile(r"\{@(?P<field>\w*?)(?::(?P<format>.*?))?\}")
POSITIONAL_PATTERN = re.compile(r"\{(\d+)\}")

# Tags that resolve to an empty string when no property defines them
IGNORABLE_TAGS = frozenset({"REFERENCEPATH", "OUTDIR"})

MAX_PASSES = 100

FieldFunction = Callable[[str], Any]


class SubstitutionTagReplacement:
    """Replaces substitution tags with build field and build property values.

    The set of build fields is fixed and registered once when the instance is created.
    Field names are matched case-insensitively. Each field receives the tag's format
    string, which is empty when the tag has none.

    Attributes:
        build (BuildContext): The build supplying folders, properties and the
            presentation style.
        fields (Mapping[str, FieldFunction]): Read-only mapping from lower-cased field
            name to the function producing the field's value.

    Example:
        >>> replacement = SubstitutionTagReplacement(build)  # doctest: +SKIP
        >>> replacement.transform_text("Output goes to {@OutputFolder}")  # doctest: +SKIP
        'Output goes to /work/help/'
    """

    def __init__(self, build: "BuildContext") -> None:
        self.build = build

        registry: Dict[str, FieldFunction] = {}
        for name, function in self._field_functions().items():
            registry[name.lower()] = function
        self.fields: Mapping[str, FieldFunction] = MappingProxyType(registry)

    def _field_functions(self) -> Dict[str, FieldFunction]:
        return {
            # Project and build folders
            "AppDataFolder": lambda fmt: self.build.app_data_folder,
            "LocalDataFolder": self._local_data_folder,
            "SHFBFolder": lambda fmt: self.build.tools_folder,
            "ComponentsFolder": lambda fmt: self.build.components_folder,
            "ProjectFolder": lambda fmt: self.build.project_folder,
            "HtmlEncProjectFolder": lambda fmt: html.escape(self.build.project_folder),
            "OutputFolder": lambda fmt: self.build.output_folder,
            "HtmlEncOutputFolder": lambda fmt: html.escape(self.build.output_folder),
            "WorkingFolder": lambda fmt: self.build.working_folder,
            "HtmlEncWorkingFolder": lambda fmt: html.escape(self.build.working_folder),
            "HHCPath": lambda fmt: self.build.help1_compiler_folder,
            # Presentation style
            "PresentationStyle": self._presentation_style,
            "PresentationPath": lambda fmt: terminate_path(self.build.presentation_style_folder),
            "DocModelTransformation": lambda fmt: self._transformation_file("document_model_transformation"),
            "DocModelTransformationParameters": lambda fmt: self._transformation_parameters(
                "document_model_transformation"
            ),
            "TocTransformation": lambda fmt: self._transformation_file("intermediate_toc_transformation"),
            "TocTransformParameters": lambda fmt: self._transformation_parameters("intermediate_toc_transformation"),
            # General
            "NamingMethod": lambda fmt: self.build.naming_method,
            "BuildDate": self._build_date,
        }

    # ------------------------------------------------------------------
    # Field functions
    # ------------------------------------------------------------------

    def _local_data_folder(self, fmt: str) -> str:
        folder = self.build.local_data_folder
        Path(folder).mkdir(parents=True, exist_ok=True)
        return folder

    def _presentation_style(self, fmt: str) -> str:
        style = self.build.presentation_style
        return style.name if style is not None else ""

    def _transformation(self, attribute: str) -> Optional[TransformationSettings]:
        style = self.build.presentation_style
        return getattr(style, attribute) if style is not None else None

    def _transformation_file(self, attribute: str) -> str:
        transformation = self._transformation(attribute)
        if transformation is None or self.build.presentation_style is None:
            return ""
        return self.build.presentation_style.resolve_path(transformation.transformation_filename)

    def _transformation_parameters(self, attribute: str) -> str:
        transformation = self._transformation(attribute)
        return transformation.format_parameters() if transformation is not None else ""

    def _build_date(self, fmt: str) -> str:
        return self.build.build_start.strftime(fmt) if fmt else self.build.build_start.date().isoformat()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_tag(self, name: str, fmt: str = "") -> str:
        """Resolve a single substitution tag to its replacement text.

        Resolution order: build field, last evaluated project property, global property,
        and finally the ignorable tags (``ReferencePath``, ``OutDir``) which resolve to an
        empty string.

        Args:
            name: The tag name.
            fmt: The tag's format string, or an empty string if it has none.

        Returns:
            The replacement text.

        Raises:
            UnknownSubstitutionTagError: If the tag cannot be resolved.
        """
        function = self.fields.get(name.lower())
        if function is not None:
            result = function(fmt)
            return "" if result is None else str(result)

        value = self.build.properties.get_evaluated(name)
        if value is not None:
            return value

        value = self.build.properties.get_global(name)
        if value is not None:
            return value

        if name.upper() in IGNORABLE_TAGS:
            return ""

        raise UnknownSubstitutionTagError(name)

    def _on_field_match(self, match: "re.Match[str]") -> str:
        return self.resolve_tag(match.group("field"), match.group("format") or "")

    def replace_tags(self, text: str) -> str:
        """Replace substitution tags in ``text`` until none remain.

        Raises:
            UnknownSubstitutionTagError: If a tag cannot be resolved.
            SubstitutionLoopError: If replacement stops making progress or does not
                finish within MAX_PASSES passes.
        """
        passes = 0
        while FIELD_PATTERN.search(text):
            if passes == MAX_PASSES:
                raise SubstitutionLoopError([m.group(0) for m in FIELD_PATTERN.finditer(text)])

            replaced = FIELD_PATTERN.sub(self._on_field_match, text)
            if replaced == text:
                raise SubstitutionLoopError([m.group(0) for m in FIELD_PATTERN.finditer(text)])

            text = replaced
            passes += 1
        return text

    # ------------------------------------------------------------------
    # Transformation
    # ------------------------------------------------------------------

    def transform_text(self, template_text: Optional[str], *args: Any) -> str:
        """Transform a block of template text.

        Args:
            template_text: The text to transform. Blank text is returned unchanged, and
                None is returned as an empty string.
            *args: Optional values inserted into ``{0}``, ``{1}``, ... markers before
                the substitution tags are replaced.

        Returns:
            The transformed text.

        Raises:
            TransformError: If the text cannot be transformed.
            BuilderError: Build errors such as unknown tags are raised unchanged.
        """
        if template_text is None or not template_text.strip():
            return template_text or ""

        try:
            if args:
                template_text = POSITIONAL_PATTERN.sub(lambda m: str(args[int(m.group(1))]), template_text)

            return self.replace_tags(template_text)
        except BuilderError:
            raise
        except Exception as e:
            raise TransformError("BE0018", template_text, e) from e

    def transform_template(
        self,
        template_file: str,
        source_folder: PathType,
        dest_folder: PathType,
        default_encoding: Optional[str] = None,
    ) -> Path:
        """Transform a template file and save it to the destination folder.

        The template is read with byte order mark detection and the result is written
        back using the same encoding, byte order mark included.

        Args:
            template_file: Name of the template file.
            source_folder: Folder containing the template.
            dest_folder: Folder in which to save the transformed file under the same name.
            default_encoding: Codec used when the template has no byte order mark.
                Defaults to the build's template encoding.

        Returns:
            The path of the transformed file.

        Raises:
            TransformError: If the template cannot be read, transformed or written.
            BuilderError: Build errors such as unknown tags are raised unchanged.
        """
        if template_file is None:
            raise TypeError("template_file must not be None")
        if source_folder is None:
            raise TypeError("source_folder must not be None")
        if dest_folder is None:
            raise TypeError("dest_folder must not be None")

        transformed_file = Path(dest_folder) / template_file
        try:
            template_text, encoding = read_with_encoding(
                Path(source_folder) / template_file, default_encoding or self.build.template_encoding
            )
            logger.debug("Transforming template %s (%s)", template_file, encoding.name)

            write_with_encoding(transformed_file, self.replace_tags(template_text), encoding)
        except BuilderError:
            raise
        except Exception as e:
            raise TransformError("BE0019", template_file, e, is_file=True) from e

        return transformed_file
