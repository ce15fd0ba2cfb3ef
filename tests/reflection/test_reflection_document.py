"""Unit tests for the ReflectionDocument class."""

import pytest

from apidocprep.exceptions import MalformedReflectionError
from apidocprep.reflection.reflection_document import ReflectionDocument


@pytest.fixture
def document(reflection_xml):
    return ReflectionDocument.from_string(reflection_xml)


def test_indices(document):
    """Test the id and container indices built on load."""
    assert len(document) == 12
    assert "T:MyCompany.Utils.Helper" in document
    assert document.get_api("T:MyCompany.Utils.Helper").get("id") == "T:MyCompany.Utils.Helper"
    assert document.get_api("T:Missing") is None

    assert [api.get("id") for api in document.namespace_members("N:MyCompany.Internal")] == [
        "T:MyCompany.Internal.Secret",
        "M:MyCompany.Internal.Secret.Do",
    ]
    assert [api.get("id") for api in document.type_members("T:MyCompany.Utils.Helper")] == [
        "M:MyCompany.Utils.Helper.Run(System.Int32)",
        "M:MyCompany.Utils.Helper.Run(System.String)",
        "M:MyCompany.Utils.Helper.Foo",
        "P:MyCompany.Utils.Helper.FooBar",
    ]
    assert document.type_members("T:Missing") == []
    assert len(document.element_references("T:MyCompany.Utils.Helper")) == 1


def test_remove_api_purges_references(document):
    """Removing an api node also removes every element entry referencing it."""
    assert document.remove_api("T:MyCompany.Utils.Other")

    assert "T:MyCompany.Utils.Other" not in document
    assert document.element_references("T:MyCompany.Utils.Other") == []
    assert '<element api="T:MyCompany.Utils.Other"' not in document.to_string()
    assert [api.get("id") for api in document.namespace_members("N:MyCompany.Utils")][-1] == (
        "M:MyCompany.Utils.Other.Go"
    )


def test_remove_api_absent(document):
    """Removing an id that is not present returns False and changes nothing."""
    before = document.to_string()
    assert not document.remove_api("T:Missing")
    assert document.to_string() == before


def test_references_inside_removed_api_are_detached(document):
    """Element entries nested in a removed api node are no longer reported."""
    document.remove_api("T:MyCompany.Utils.Helper")
    assert document.element_references("M:MyCompany.Utils.Helper.Foo") == []

    # Removing the member afterwards still works
    assert document.remove_api("M:MyCompany.Utils.Helper.Foo")


def test_member_lists_are_snapshots(document):
    """Members can be removed while iterating over a member list."""
    members = document.type_members("T:MyCompany.Utils.Helper")
    for member in members:
        document.remove_api(member.get("id"))

    assert document.type_members("T:MyCompany.Utils.Helper") == []
    assert len(document) == 8


def test_iteration_and_ids(document):
    ids = document.api_ids()
    assert ids[0] == "R:Project"
    assert [api_id for api_id, _ in document] == ids


def test_save_and_load(document, tmp_path):
    """Test saving a document and loading it back."""
    document.remove_api("N:MyCompany.Internal")
    path = tmp_path / "out.xml"
    document.save(path)

    content = path.read_bytes()
    assert content.startswith(b"<?xml version='1.0' encoding='utf-8'?>")

    reloaded = ReflectionDocument.load(path)
    assert reloaded.source == str(path)
    assert "N:MyCompany.Internal" not in reloaded
    assert len(reloaded) == 11


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ReflectionDocument.load(tmp_path / "missing.xml")


@pytest.mark.parametrize(
    "xml_text",
    [
        "<reflection><assemblies /></reflection>",
        "<topics><apis /></topics>",
    ],
)
def test_malformed_reflection(xml_text):
    """Documents without a reflection/apis node are rejected."""
    with pytest.raises(MalformedReflectionError) as exc_info:
        ReflectionDocument.from_string(xml_text)
    assert exc_info.value.error_code == "BE0071"


def test_comments_and_processing_instructions_are_kept(tmp_path):
    path = tmp_path / "reflection.xml"
    path.write_text(
        "<reflection><!-- generated --><?build step='1'?><apis><api id='N:A' /><!-- end --></apis></reflection>",
        encoding="utf-8",
    )

    document = ReflectionDocument.load(path)
    assert document.api_ids() == ["N:A"]
    document.save(path)

    content = path.read_text(encoding="utf-8")
    assert "<!-- generated -->" in content
    assert "<?build step='1'?>" in content
    assert "<!-- end -->" in content


def test_duplicate_ids_are_removed_together():
    document = ReflectionDocument.from_string(
        "<reflection><apis>"
        '<api id="T:A.B"><containers><namespace api="N:A" /></containers></api>'
        '<api id="T:A.B"><containers><namespace api="N:A" /></containers></api>'
        '<api id="N:A"><elements><element api="T:A.B" /></elements></api>'
        "</apis></reflection>"
    )
    assert len(document) == 2

    assert document.remove_api("T:A.B")
    assert 'id="T:A.B"' not in document.to_string()
    assert 'api="T:A.B"' not in document.to_string()
    assert not document.remove_api("T:A.B")
