"""Unit tests for build property lookup."""

from apidocprep.project.project_properties import ProjectProperties, PropertySource


def test_last_evaluated_property_wins():
    props = ProjectProperties([("OutDir", "bin"), ("HelpTitle", "Docs"), ("outdir", "out")])
    assert isinstance(props, PropertySource)
    assert props.get_evaluated("OUTDIR") == "out"
    assert props.get_evaluated("helptitle") == "Docs"
    assert props.get_evaluated("Missing") is None


def test_global_properties():
    props = ProjectProperties(global_properties={"Configuration": "Release"})
    assert props.get_global("configuration") == "Release"
    assert props.get_global("Platform") is None
    assert props.get_evaluated("Configuration") is None


def test_with_global_overrides_case_insensitively():
    props = ProjectProperties([("A", "1")], {"Configuration": "Debug", "Platform": "x64"})
    merged = props.with_global({"CONFIGURATION": "Release"})

    assert merged.get_global("Configuration") == "Release"
    assert merged.get_global("Platform") == "x64"
    assert merged.get_evaluated("A") == "1"
    assert len(merged.global_properties) == 2
    # The original is unchanged
    assert props.get_global("Configuration") == "Debug"
