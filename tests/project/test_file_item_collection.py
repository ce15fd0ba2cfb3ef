"""Unit tests for sorted build item collections."""

from apidocprep.project.file_item_collection import FileItemCollection
from apidocprep.project.project_file import BuildAction, ProjectFile


def test_content_layout_sorted_by_sort_order_then_link_path(project_path):
    project = ProjectFile.load(project_path)
    collection = FileItemCollection(project, BuildAction.CONTENT_LAYOUT)

    assert [item.full_path.name for item in collection] == ["Z.content", "a.content", "B.content"]
    assert collection.project is project
    assert collection.build_action == BuildAction.CONTENT_LAYOUT


def test_other_items_sorted_by_link_path(project_path):
    project = ProjectFile.load(project_path)
    collection = FileItemCollection(project, BuildAction.IMAGE)

    assert [item.full_path.name for item in collection] == ["Logo.jpg", "a.png", "b.png"]


def test_empty_collection(project_path):
    project = ProjectFile.load(project_path)
    assert len(FileItemCollection(project, BuildAction.SITE_MAP)) == 0
