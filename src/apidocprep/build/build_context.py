"""Build context shared by the build steps.

The build context is the narrow view of the build process that the substitution tag
and conceptual content steps consume: resolved folders, build properties, the
presentation style, and progress reporting.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from apidocprep.build.presentation_style import PresentationStyleSettings
from apidocprep.build.progress import LoggingProgressReporter, ProgressReporter
from apidocprep.project.project_properties import ProjectProperties, PropertySource
from apidocprep.types import PathType

if TYPE_CHECKING:
    from apidocprep.substitution.substitution_tags import SubstitutionTagReplacement

PROGRAM_DATA_FOLDER = "apidocprep"


def terminate_path(path: Optional[PathType]) -> str:
    """Return ``path`` as a string ending in a path separator.

    Example:
        >>> terminate_path("/work/build") == "/work/build" + os.sep
        True
        >>> terminate_path("")
        ''
    """
    if path is None:
        return ""
    text = os.fspath(path)
    if text and not text.endswith(("/", os.sep)):
        text += os.sep
    return text


def _default_app_data_folder() -> Path:
    base = os.environ.get("PROGRAMDATA") or os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / PROGRAM_DATA_FOLDER


def _default_local_data_folder() -> Path:
    base = os.environ.get("LOCALAPPDATA") or os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / PROGRAM_DATA_FOLDER


class BuildContext:
    """Folders, properties and reporting for a single documentation build.

    All folder attributes are absolute paths terminated with a path separator.

    Attributes:
        properties (PropertySource): Source of build property values.
        working_folder (str): Folder in which intermediate build files are created.
        output_folder (str): The build's output folder.
        help_format_output_folders (list[str]): Output folders of the help formats being
            built. Defaults to the output folder alone.
        template_folder (str): Folder containing the build template files.
        project_folder (str): Folder containing the project file.
        presentation_style (Optional[PresentationStyleSettings]): The presentation style.
        reporter (ProgressReporter): Destination for progress and warning messages.
        template_encoding (str): Codec used to read templates that have no byte order
            mark.
        build_start (datetime): When the build started.

    Example:
        >>> build = BuildContext(working_folder="/tmp/build", output_folder="/tmp/help")  # doctest: +SKIP
        >>> build.transform_text("{@OutputFolder}")  # doctest: +SKIP
        '/tmp/help/'
    """

    def __init__(
        self,
        *,
        working_folder: PathType,
        output_folder: PathType,
        properties: Optional[PropertySource] = None,
        help_format_output_folders: Optional[Sequence[PathType]] = None,
        template_folder: Optional[PathType] = None,
        project_folder: Optional[PathType] = None,
        tools_folder: Optional[PathType] = None,
        components_folder: Optional[PathType] = None,
        presentation_style: Optional[PresentationStyleSettings] = None,
        help1_compiler_folder: Optional[PathType] = None,
        app_data_folder: Optional[PathType] = None,
        local_data_folder: Optional[PathType] = None,
        naming_method: str = "Guid",
        template_encoding: str = "utf-8",
        reporter: Optional[ProgressReporter] = None,
        build_start: Optional[datetime] = None,
    ) -> None:
        self.properties: PropertySource = properties if properties is not None else ProjectProperties()
        self.working_folder = terminate_path(Path(working_folder).absolute())
        self.output_folder = terminate_path(Path(output_folder).absolute())
        self.help_format_output_folders: List[str] = [
            terminate_path(Path(folder).absolute()) for folder in (help_format_output_folders or [output_folder])
        ]

        tools = Path(tools_folder) if tools_folder is not None else Path(__file__).resolve().parent.parent
        self.tools_folder = terminate_path(tools.absolute())
        self.template_folder = terminate_path(
            Path(template_folder).absolute() if template_folder is not None else tools.absolute() / "templates"
        )
        self.components_folder = terminate_path(
            Path(components_folder).absolute() if components_folder is not None else tools.absolute() / "components"
        )
        self.project_folder = terminate_path(Path(project_folder).absolute() if project_folder is not None else None)
        self.help1_compiler_folder = terminate_path(help1_compiler_folder)
        self.app_data_folder = terminate_path(
            Path(app_data_folder) if app_data_folder is not None else _default_app_data_folder()
        )
        self.local_data_folder = terminate_path(
            Path(local_data_folder) if local_data_folder is not None else _default_local_data_folder()
        )

        self.presentation_style = presentation_style
        self.naming_method = naming_method
        self.template_encoding = template_encoding
        self.reporter = reporter if reporter is not None else LoggingProgressReporter()
        self.build_start = build_start if build_start is not None else datetime.now()
        self._substitution_tags: Optional["SubstitutionTagReplacement"] = None

    @property
    def presentation_style_folder(self) -> str:
        """The presentation style folder, or an empty string if no style is set."""
        if self.presentation_style is None:
            return ""
        return terminate_path(self.presentation_style.folder)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def report_progress(self, message: str, *args: Any) -> None:
        self.reporter.report_progress(message, *args)

    def report_warning(self, warning_code: str, message: str, *args: Any) -> None:
        self.reporter.report_warning(warning_code, message, *args)

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def ensure_output_folders_exist(self, subfolder: Optional[str] = None) -> None:
        """Create every help format output folder, optionally with a subfolder."""
        for folder in self.help_format_output_folders:
            target = Path(folder) / subfolder if subfolder else Path(folder)
            target.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Substitution tags
    # ------------------------------------------------------------------

    @property
    def substitution_tags(self) -> "SubstitutionTagReplacement":
        """The substitution tag replacement instance for this build, created on first use."""
        if self._substitution_tags is None:
            from apidocprep.substitution.substitution_tags import SubstitutionTagReplacement

            self._substitution_tags = SubstitutionTagReplacement(self)
        return self._substitution_tags

    def transform_text(self, template_text: Optional[str], *args: Any) -> str:
        """Replace the substitution tags in a block of template text."""
        return self.substitution_tags.transform_text(template_text, *args)

    def transform_template(
        self,
        template_file: str,
        source_folder: PathType,
        dest_folder: PathType,
        default_encoding: Optional[str] = None,
    ) -> Path:
        """Replace the substitution tags in a template file and save it to ``dest_folder``."""
        return self.substitution_tags.transform_template(template_file, source_folder, dest_folder, default_encoding)
