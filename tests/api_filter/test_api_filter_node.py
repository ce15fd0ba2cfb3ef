"""Unit tests for the ApiFilterNode class."""

from apidocprep.api_filter.api_filter_node import ApiEntryType, ApiFilterNode


def test_api_filter_node_initialization():
    """Test basic initialization of ApiFilterNode."""
    node = ApiFilterNode("MyCompany.Utils")
    assert node.name == "MyCompany.Utils"
    assert node.full_name == "MyCompany.Utils"
    assert node.is_exposed
    assert node.entry_type == ApiEntryType.UNKNOWN
    assert node.parent is None

    hidden = ApiFilterNode("MyCompany.Internal", is_exposed=False, entry_type=ApiEntryType.NAMESPACE)
    assert not hidden.is_exposed
    assert hidden.entry_type == ApiEntryType.NAMESPACE


def test_blanket_exclusion():
    """Only a hidden node without children is a blanket exclusion."""
    namespace = ApiFilterNode("MyCompany.Utils", is_exposed=False)
    assert namespace.is_blanket_exclusion

    ApiFilterNode("MyCompany.Utils.Helper", parent=namespace)
    assert not namespace.is_blanket_exclusion

    assert not ApiFilterNode("MyCompany.Public").is_blanket_exclusion


def test_find_child_exact_match():
    """find_child matches full names exactly."""
    helper = ApiFilterNode("MyCompany.Utils.Helper")
    foo = ApiFilterNode("MyCompany.Utils.Helper.Foo", parent=helper, is_exposed=False)
    ApiFilterNode("MyCompany.Utils.Helper.FooBar", parent=helper)

    assert helper.find_child("MyCompany.Utils.Helper.Foo") is foo
    assert helper.find_child("MyCompany.Utils.Helper.Fo") is None
    assert helper.find_child("mycompany.utils.helper.foo") is None


def test_copy_is_deep():
    """Copying a node copies its subtree without touching the original."""
    namespace = ApiFilterNode("MyCompany.Utils", is_exposed=False, entry_type=ApiEntryType.NAMESPACE)
    helper = ApiFilterNode("MyCompany.Utils.Helper", parent=namespace, entry_type=ApiEntryType.CLASS)
    ApiFilterNode("MyCompany.Utils.Helper.Run", parent=helper, is_exposed=False)

    clone = namespace.copy()

    assert clone is not namespace
    assert clone.parent is None
    assert not clone.is_exposed
    assert clone.entry_type == ApiEntryType.NAMESPACE
    assert [child.full_name for child in clone.children] == ["MyCompany.Utils.Helper"]
    assert clone.children[0] is not helper
    assert clone.children[0].children[0].full_name == "MyCompany.Utils.Helper.Run"
    assert not clone.children[0].children[0].is_exposed

    clone.children[0].is_exposed = False
    assert helper.is_exposed


def test_entry_type_parse():
    """Entry type names parse case-insensitively and fall back to UNKNOWN."""
    assert ApiEntryType.parse("Class") == ApiEntryType.CLASS
    assert ApiEntryType.parse("namespace") == ApiEntryType.NAMESPACE
    assert ApiEntryType.parse("Widget") == ApiEntryType.UNKNOWN
    assert ApiEntryType.parse(None) == ApiEntryType.UNKNOWN
    assert ApiEntryType.parse("") == ApiEntryType.UNKNOWN
