"""Presentation style transformation settings."""

from pathlib import Path
from typing import Iterator, Mapping, Optional, Tuple

from apidocprep.types import PathType


class TransformationSettings:
    """An XSL transformation file and its ordered parameters.

    Example:
        >>> settings = TransformationSettings("ProductionTransforms/ApplyVSDocModel.xsl",
        ...                                   {"IncludeAllMembersTopic": "false", "project": "Project"})
        >>> settings.format_parameters()
        'IncludeAllMembersTopic=false;project=Project'
    """

    def __init__(self, transformation_filename: str, parameters: Optional[Mapping[str, str]] = None) -> None:
        self.transformation_filename = transformation_filename
        self.parameters = dict(parameters or {})

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.parameters.items())

    def format_parameters(self) -> str:
        """Join the parameters as ``key=value`` pairs separated by semicolons."""
        return ";".join(f"{key}={value}" for key, value in self)


class PresentationStyleSettings:
    """The transformation settings of a presentation style.

    Attributes:
        name (str): The presentation style name.
        folder (Path): The folder containing the presentation style files.
        document_model_transformation (TransformationSettings): Transformation applied to
            the reflection information to produce the document model.
        intermediate_toc_transformation (TransformationSettings): Transformation used to
            produce the intermediate table of contents.
    """

    def __init__(
        self,
        name: str,
        folder: PathType,
        document_model_transformation: Optional[TransformationSettings] = None,
        intermediate_toc_transformation: Optional[TransformationSettings] = None,
    ) -> None:
        self.name = name
        self.folder = Path(folder)
        self.document_model_transformation = document_model_transformation or TransformationSettings("")
        self.intermediate_toc_transformation = intermediate_toc_transformation or TransformationSettings("")

    def resolve_path(self, path: str) -> str:
        """Resolve a presentation style relative path to an absolute path.

        Backslash separators are accepted. Absolute paths are returned unchanged.
        """
        if not path:
            return ""
        return str(self.folder / path.replace("\\", "/"))
