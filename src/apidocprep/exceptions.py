from typing import Optional, Sequence


class BuilderError(Exception):
    """
    Base exception for all build errors raised by apidocprep.

    Every build error carries a stable error code (e.g. ``BE0020``) so that the invoking
    pipeline stage can report it consistently. Build errors are fatal for the current
    build and are never retried internally.

    Attributes:
        error_code (str): Stable error code identifying the failure.
        message (str): Human readable description of the failure.

    Example:
        >>> error = BuilderError("BE0001", "Something went wrong")
        >>> str(error)
        'BE0001: Something went wrong'
        >>> error.error_code
        'BE0001'
    """

    def __init__(self, error_code: str, message: str) -> None:
        self.error_code = error_code
        self.message = message
        super().__init__(f"{error_code}: {message}")


class UnknownSubstitutionTagError(BuilderError):
    """
    Exception raised when a substitution tag matches neither a field nor a property.

    Attributes:
        tag_name (str): The unresolved tag name exactly as it appeared in the template.

    Example:
        >>> error = UnknownSubstitutionTagError("NotARealTag")
        >>> error.tag_name
        'NotARealTag'
        >>> str(error)
        "BE0020: Unknown substitution tag ID: 'NotARealTag'"
    """

    def __init__(self, tag_name: str) -> None:
        self.tag_name = tag_name
        super().__init__("BE0020", f"Unknown substitution tag ID: '{tag_name}'")


class SubstitutionLoopError(BuilderError):
    """
    Exception raised when substitution tag replacement does not converge.

    This happens when a field or property value re-introduces a tag that expands back to
    itself, so that repeated replacement passes never remove the last tag from the text.

    Attributes:
        remaining_tags (list[str]): The tags still present when replacement gave up.
    """

    def __init__(self, remaining_tags: Sequence[str]) -> None:
        self.remaining_tags = list(remaining_tags)
        super().__init__(
            "BE0021",
            "Substitution tags could not be fully expanded: " + ", ".join(self.remaining_tags),
        )


class TransformError(BuilderError):
    """
    Exception raised when a template or block of template text cannot be transformed.

    Wraps unexpected failures (I/O errors, decoding errors, formatting errors) with the
    identifier of the artifact that was being transformed. Other build errors are never
    wrapped in this exception.

    Attributes:
        template (str): The template file name or template text being transformed.
        cause (Optional[BaseException]): The underlying exception.

    Example:
        >>> error = TransformError("BE0019", "Tokens.tokens", OSError("disk full"), is_file=True)
        >>> str(error)
        "BE0019: Unable to transform template 'Tokens.tokens': disk full"
    """

    def __init__(
        self, error_code: str, template: str, cause: Optional[BaseException] = None, is_file: bool = False
    ) -> None:
        self.template = template
        self.cause = cause
        kind = "template" if is_file else "template text"
        super().__init__(error_code, f"Unable to transform {kind} '{template}': {cause}")


class MissingContentFilesError(BuilderError):
    """
    Exception raised when one or more required content files could not be found.

    Missing files of the same kind are collected before this is raised so that the user
    sees the complete list in a single failure.

    Attributes:
        missing_files (list[str]): Full paths of every missing file.

    Example:
        >>> error = MissingContentFilesError("BE0052", "One or more token files could not be found",
        ...                                  ["/a.tokens", "/b.tokens"])
        >>> error.missing_files
        ['/a.tokens', '/b.tokens']
    """

    def __init__(self, error_code: str, message: str, missing_files: Sequence[str]) -> None:
        self.missing_files = list(missing_files)
        super().__init__(error_code, f"{message}: {', '.join(self.missing_files)}")


class ApiFilterConfigurationError(BuilderError):
    """Exception raised when an API filter configuration cannot be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__("BE0070", message)


class MalformedReflectionError(BuilderError):
    """
    Exception raised when a reflection information file lacks the ``reflection/apis`` node.

    Attributes:
        source (str): Description of the document source (usually its file name).
    """

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__("BE0071", f"Reflection information '{source}' does not contain a reflection/apis node")
