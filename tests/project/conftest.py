"""Fixtures for project file tests."""

import pytest

PROJECT_XML = r"""<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="4.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <PropertyGroup>
    <HtmlHelpName>Documentation</HtmlHelpName>
    <PresentationStyle>VS2013</PresentationStyle>
  </PropertyGroup>
  <PropertyGroup>
    <htmlhelpname>Docs</htmlhelpname>
    <NamingMethod />
  </PropertyGroup>
  <ItemGroup>
    <Tokens Include="Content\Common.tokens" />
    <Tokens Include="Content\Missing.tokens" />
    <Image Include="media\*.png" Exclude="media\draft*.png" />
    <Image Include="art\Logo.jpg">
      <ImageId>CompanyLogo</ImageId>
      <AlternateText>Company logo</AlternateText>
      <CopyToMedia>True</CopyToMedia>
    </Image>
    <ContentLayout Include="B.content">
      <SortOrder>2</SortOrder>
    </ContentLayout>
    <ContentLayout Include="a.content">
      <SortOrder>2</SortOrder>
    </ContentLayout>
    <ContentLayout Include="Z.content">
      <SortOrder>1</SortOrder>
    </ContentLayout>
    <CodeSnippets Include="..\Shared\Snippets.snippets">
      <Link>Content\Snippets.snippets</Link>
    </CodeSnippets>
    <None Include="Content\Welcome.aml" />
    <Compile Include="Program.cs" />
  </ItemGroup>
</Project>
"""


@pytest.fixture
def project_path(tmp_path):
    """A project folder with a project file and some of the files it references."""
    folder = tmp_path / "Doc"
    for relative in [
        "Content/Common.tokens",
        "Content/Welcome.aml",
        "media/a.png",
        "media/b.png",
        "media/draft1.png",
        "media/sub/c.png",
        "art/Logo.jpg",
    ]:
        path = folder / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(relative, encoding="utf-8")

    (tmp_path / "Shared").mkdir()
    (tmp_path / "Shared" / "Snippets.snippets").write_text("<examples />", encoding="utf-8")

    path = folder / "Doc.shfbproj"
    path.write_text(PROJECT_XML, encoding="utf-8")
    return path
