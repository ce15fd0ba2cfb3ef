"""Image references used by conceptual topics."""

import os
from typing import Optional

from apidocprep.conceptual.content_file import ContentFile


class ImageReference(ContentFile):
    """A conceptual content image that topics can reference by id.

    Attributes:
        id (str): The image id used by topics. Defaults to the file name without its
            extension.
        alternate_text (str): Optional alternate text for the image.
        copy_to_media (bool): If True, the image is always copied to the media folder
            of every help format output folder, even if no topic references it.

    Example:
        >>> image = ImageReference("/docs/media/Architecture.png", alternate_text="Overview")
        >>> image.id, image.filename
        ('Architecture', 'Architecture.png')
    """

    def __init__(
        self,
        full_path: str,
        image_id: Optional[str] = None,
        alternate_text: str = "",
        copy_to_media: bool = False,
    ) -> None:
        super().__init__(full_path)
        self.id = image_id or os.path.splitext(self.filename)[0]
        self.alternate_text = alternate_text
        self.copy_to_media = copy_to_media

    def __repr__(self) -> str:
        return f"ImageReference({self.id!r}, {self.full_path!r})"
