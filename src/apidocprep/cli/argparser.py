"""Command-line argument parsing for apidocprep.

This module defines the command-line interface for apidocprep,
handling argument parsing and validation.
"""

import argparse
import codecs
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from apidocprep import __version__


class GlobalPropertyAction(argparse.Action):
    """Action to collect ``NAME=VALUE`` global properties in command line order.

    Later definitions of the same property override earlier ones.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        text = str(values) if values is not None else ""
        name, separator, value = text.partition("=")
        if not separator or not name.strip():
            parser.error(f"{option_string} expects NAME=VALUE, got '{text}'")

        properties: Dict[str, str] = dict(getattr(namespace, self.dest, None) or {})
        properties[name.strip()] = value
        setattr(namespace, self.dest, properties)


def _add_build_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the folder and property options shared by the build subcommands."""
    parser.add_argument(
        "--project",
        type=Path,
        metavar="FILE",
        help="Documentation project file supplying build properties and content items.",
    )
    parser.add_argument(
        "-p",
        "--property",
        dest="properties",
        metavar="NAME=VALUE",
        action=GlobalPropertyAction,
        default={},
        help="Global build property (can be specified multiple times).",
    )
    parser.add_argument(
        "-w",
        "--working-folder",
        type=Path,
        metavar="DIR",
        default=Path("Working"),
        help="Folder for intermediate build files (default: ./Working).",
    )
    parser.add_argument(
        "-O",
        "--output-folder",
        type=Path,
        metavar="DIR",
        default=Path("Help"),
        help="Build output folder (default: ./Help).",
    )
    parser.add_argument(
        "--help-format-folder",
        type=Path,
        metavar="DIR",
        action="append",
        help=(
            "Output folder of a help format being built (can be specified multiple times). "
            "Defaults to the output folder."
        ),
    )
    parser.add_argument(
        "--template-folder",
        type=Path,
        metavar="DIR",
        help="Folder containing the build template files.",
    )
    parser.add_argument(
        "--tools-folder",
        type=Path,
        metavar="DIR",
        help="Installation folder of the documentation tools.",
    )
    parser.add_argument(
        "--template-encoding",
        metavar="CODEC",
        default="utf-8",
        help="Encoding of templates without a byte order mark (default: utf-8).",
    )
    parser.add_argument(
        "--presentation-folder",
        type=Path,
        metavar="DIR",
        help="Folder containing the presentation style files.",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with apidocprep's subcommands.
    """
    description = """
    apidocprep: Documentation build helpers for reflection data and conceptual content.

    Subcommands:
    - filter:      apply API filter files to a reflection information file
    - transform:   replace substitution tags in a build template file
    - conceptual:  copy conceptual content and create its configuration files
    """

    epilog = """
    Examples:
      # Remove filtered namespaces, types and members from reflection data
      apidocprep filter reflection.xml -f ApiFilter.xml

      # Merge several filter files and write the result to a new file
      apidocprep filter reflection.xml -f common.xml -f product.xml -o filtered.xml

      # Transform a template using project and command line properties
      apidocprep transform Templates/sandcastle.config -d Working --project Doc.shfbproj -p HtmlHelpName=Doc

      # Prepare conceptual content in the working folder
      apidocprep conceptual --project Doc.shfbproj -w Working -O Help
    """

    parser = argparse.ArgumentParser(
        prog="apidocprep",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"apidocprep {__version__}", help="Show the version and exit"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug messages.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors.")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    filter_parser = subparsers.add_parser("filter", help="Apply API filters to reflection information.")
    filter_parser.add_argument("reflection", type=Path, help="The reflection information file to filter.")
    filter_parser.add_argument(
        "-f",
        "--filter",
        dest="filters",
        type=Path,
        metavar="FILE",
        action="append",
        required=True,
        help="ApiFilter XML file (can be specified multiple times; filters are merged in order).",
    )
    filter_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, the reflection file is updated in place.",
    )
    filter_parser.add_argument(
        "--show-filter",
        action="store_true",
        help="Print the merged API filter tree before applying it.",
    )

    transform_parser = subparsers.add_parser("transform", help="Replace substitution tags in a template file.")
    transform_parser.add_argument("template", type=Path, help="The template file to transform.")
    transform_parser.add_argument(
        "-d",
        "--dest",
        type=Path,
        metavar="DIR",
        required=True,
        help="Folder in which to save the transformed file.",
    )
    _add_build_arguments(transform_parser)

    conceptual_parser = subparsers.add_parser(
        "conceptual", help="Copy conceptual content and create its configuration files."
    )
    _add_build_arguments(conceptual_parser)

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.command == "conceptual" and args.project is None:
        raise ValueError("conceptual requires --project to be specified")

    if args.command in ("transform", "conceptual"):
        try:
            codecs.lookup(args.template_encoding)
        except LookupError:
            raise ValueError(f"Unknown template encoding: {args.template_encoding}") from None

    if args.command == "filter" and args.output is not None and args.output.is_dir():
        raise ValueError(f"--output must be a file, not a directory: {args.output}")
