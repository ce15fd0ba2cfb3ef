"""Test configuration and shared fixtures for apidocprep."""

from typing import Any, List, Tuple

import pytest

from apidocprep.build.progress import ProgressReporter, format_message

REFLECTION_XML = """<reflection>
  <assemblies>
    <assembly name="MyCompany.Utils" />
  </assemblies>
  <apis>
    <api id="R:Project">
      <elements>
        <element api="N:MyCompany.Utils" />
        <element api="N:MyCompany.Internal" />
      </elements>
    </api>
    <api id="N:MyCompany.Utils">
      <elements>
        <element api="T:MyCompany.Utils.Helper" />
        <element api="T:MyCompany.Utils.Other" />
      </elements>
    </api>
    <api id="T:MyCompany.Utils.Helper">
      <containers><namespace api="N:MyCompany.Utils" /></containers>
      <elements>
        <element api="M:MyCompany.Utils.Helper.Run(System.Int32)" />
        <element api="M:MyCompany.Utils.Helper.Run(System.String)" />
        <element api="M:MyCompany.Utils.Helper.Foo" />
        <element api="P:MyCompany.Utils.Helper.FooBar" />
      </elements>
    </api>
    <api id="M:MyCompany.Utils.Helper.Run(System.Int32)">
      <containers><namespace api="N:MyCompany.Utils" /><type api="T:MyCompany.Utils.Helper" /></containers>
    </api>
    <api id="M:MyCompany.Utils.Helper.Run(System.String)">
      <containers><namespace api="N:MyCompany.Utils" /><type api="T:MyCompany.Utils.Helper" /></containers>
    </api>
    <api id="M:MyCompany.Utils.Helper.Foo">
      <containers><namespace api="N:MyCompany.Utils" /><type api="T:MyCompany.Utils.Helper" /></containers>
    </api>
    <api id="P:MyCompany.Utils.Helper.FooBar">
      <containers><namespace api="N:MyCompany.Utils" /><type api="T:MyCompany.Utils.Helper" /></containers>
    </api>
    <api id="T:MyCompany.Utils.Other">
      <containers><namespace api="N:MyCompany.Utils" /></containers>
      <elements>
        <element api="M:MyCompany.Utils.Other.Go" />
      </elements>
    </api>
    <api id="M:MyCompany.Utils.Other.Go">
      <containers><namespace api="N:MyCompany.Utils" /><type api="T:MyCompany.Utils.Other" /></containers>
    </api>
    <api id="N:MyCompany.Internal">
      <elements>
        <element api="T:MyCompany.Internal.Secret" />
      </elements>
    </api>
    <api id="T:MyCompany.Internal.Secret">
      <containers><namespace api="N:MyCompany.Internal" /></containers>
      <elements>
        <element api="M:MyCompany.Internal.Secret.Do" />
      </elements>
    </api>
    <api id="M:MyCompany.Internal.Secret.Do">
      <containers><namespace api="N:MyCompany.Internal" /><type api="T:MyCompany.Internal.Secret" /></containers>
    </api>
  </apis>
</reflection>
"""


class RecordingReporter(ProgressReporter):
    """Progress reporter that keeps every formatted message for inspection."""

    def __init__(self) -> None:
        self.progress: List[str] = []
        self.warnings: List[Tuple[str, str]] = []

    def report_progress(self, message: str, *args: Any) -> None:
        self.progress.append(format_message(message, *args))

    def report_warning(self, warning_code: str, message: str, *args: Any) -> None:
        self.warnings.append((warning_code, format_message(message, *args)))


@pytest.fixture
def reflection_xml():
    """Reflection information with two namespaces, three types and their members."""
    return REFLECTION_XML


@pytest.fixture
def reflection_file(tmp_path):
    """Reflection information written to a temporary file."""
    path = tmp_path / "reflection.xml"
    path.write_text(REFLECTION_XML, encoding="utf-8")
    return path


@pytest.fixture
def reporter():
    """A progress reporter that records its messages."""
    return RecordingReporter()
