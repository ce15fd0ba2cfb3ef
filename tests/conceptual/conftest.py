"""Fixtures for conceptual content tests."""

import pytest

from apidocprep.build.build_context import BuildContext
from apidocprep.project.project_file import ProjectFile

PROJECT_TEMPLATE = r"""<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <PropertyGroup>
    <HelpTitle>Sample</HelpTitle>
  </PropertyGroup>
  <ItemGroup>
    <Tokens Include="Content\Common.tokens" />
    <CodeSnippets Include="Content\Code.snippets" />
    <Image Include="media\Arch.png">
      <AlternateText>Architecture</AlternateText>
    </Image>
    <Image Include="media\Logo.png">
      <ImageId>Logo</ImageId>
      <CopyToMedia>true</CopyToMedia>
    </Image>
    <ContentLayout Include="Layout.content" />
    <None Include="Content\Welcome.aml" />
    <None Include="Content\Details.aml" />
    {extra_items}
  </ItemGroup>
</Project>
"""

LAYOUT_XML = """<Topics>
  <Topic id="welcome-id" visible="True" title="Welcome to {@HelpTitle}" linkText="Welcome">
    <HelpKeywords>
      <HelpKeyword index="K" term="{@HelpTitle} overview" />
    </HelpKeywords>
    <Topic id="details-id" visible="True" title="Details" tocTitle="More details" />
  </Topic>
  <Topic id="container-id" visible="False" title="Container" />
</Topics>
"""

FILES = {
    "Content/Common.tokens": '<content><item id="out">{@OutputFolder}</item></content>',
    "Content/Code.snippets": "<examples />",
    "Content/Welcome.aml": '<topic id="welcome-id" revisionNumber="1"><developerConceptualDocument /></topic>',
    "Content/Details.aml": '<developerConceptualDocument id="details-id" />',
    "Layout.content": LAYOUT_XML,
}


@pytest.fixture
def make_project(tmp_path):
    """Create a project with conceptual content, optionally adding raw item XML."""

    def _make_project(extra_items=""):
        folder = tmp_path / "Doc"
        for relative, content in FILES.items():
            path = folder / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

        (folder / "media").mkdir(exist_ok=True)
        (folder / "media" / "Arch.png").write_bytes(b"\x89PNG arch")
        (folder / "media" / "Logo.png").write_bytes(b"\x89PNG logo")

        path = folder / "Doc.shfbproj"
        path.write_text(PROJECT_TEMPLATE.replace("{extra_items}", extra_items), encoding="utf-8")
        return ProjectFile.load(path)

    return _make_project


@pytest.fixture
def project(make_project):
    return make_project()


@pytest.fixture
def template_folder(tmp_path):
    folder = tmp_path / "templates"
    folder.mkdir()
    (folder / "HelpFileBuilderTokens.tokens").write_text(
        '<content><item id="naming">{@NamingMethod}</item></content>', encoding="utf-8"
    )
    return folder


@pytest.fixture
def build(tmp_path, project, template_folder, reporter):
    return BuildContext(
        working_folder=tmp_path / "Working",
        output_folder=tmp_path / "Help",
        properties=project.properties,
        template_folder=template_folder,
        project_folder=project.folder,
        reporter=reporter,
    )
