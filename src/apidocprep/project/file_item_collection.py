"""Sorted collections of project build items."""

from typing import List

from apidocprep.project.project_file import BuildAction, FileItem, ProjectFile


class FileItemCollection(List[FileItem]):
    """The build items of a project with a given build action, in build order.

    Content layout and site map items are ordered by their SortOrder metadata and then
    by link path. All other items are ordered by link path. Link paths are compared
    case-insensitively.

    Example:
        >>> layouts = FileItemCollection(project, BuildAction.CONTENT_LAYOUT)  # doctest: +SKIP
        >>> [item.sort_order for item in layouts]  # doctest: +SKIP
        [0, 1, 5]
    """

    def __init__(self, project: ProjectFile, build_action: BuildAction) -> None:
        items = project.items(build_action)

        if build_action in (BuildAction.CONTENT_LAYOUT, BuildAction.SITE_MAP):
            items.sort(key=lambda item: (item.sort_order, str(item.link_path).lower()))
        else:
            items.sort(key=lambda item: str(item.link_path).lower())

        super().__init__(items)
        self.project = project
        self.build_action = build_action
