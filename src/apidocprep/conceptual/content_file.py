"""Content file representation (token files, code snippet files, layout files)."""

import os
from typing import Optional


class ContentFile:
    """A content file such as a token file or a code snippet file.

    Attributes:
        full_path (str): Absolute path to the file's true location.
        link_path (str): Project-relative location of the file. For linked items this
            differs from full_path; otherwise the two match.

    Example:
        >>> content_file = ContentFile("/docs/Content/Common.tokens")
        >>> content_file.filename
        'Common.tokens'
        >>> content_file.link_path == content_file.full_path
        True
    """

    def __init__(self, full_path: str, link_path: Optional[str] = None) -> None:
        """Initialize a ContentFile.

        Args:
            full_path: Path to the content file. Made absolute.
            link_path: Project-relative location. Defaults to the full path.

        Raises:
            ValueError: If full_path is empty or blank.
        """
        if not full_path or not full_path.strip():
            raise ValueError("A full path to the content file is required")

        self.full_path = os.path.abspath(full_path)
        self.link_path = link_path if link_path is not None else self.full_path

    @property
    def filename(self) -> str:
        """The content file name without its path."""
        return os.path.basename(self.full_path)

    def __repr__(self) -> str:
        return f"ContentFile({self.full_path!r})"
