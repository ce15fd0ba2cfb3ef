"""Documentation build helpers for reflection data and conceptual content.

This package filters reflection information files against an API filter,
replaces substitution tags in build templates, and assembles conceptual
content into the intermediate files used by the documentation compiler.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("apidocprep")
except PackageNotFoundError:
    __version__ = "unknown"
