"""Command-line interface for apidocprep.

This module provides the command-line interface for apidocprep, allowing users to apply
API filters to reflection information, transform build templates, and prepare
conceptual content for a documentation build.

Exit Codes:
    0: Successful completion
    1: Runtime or build error during execution
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Apply an API filter to a reflection information file in place
    $ apidocprep filter reflection.xml -f ApiFilter.xml

    # Display version information
    $ apidocprep --version
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from apidocprep.api_filter.api_filter_engine import ApiFilterEngine
from apidocprep.api_filter.api_filter_tree import ApiFilterTree
from apidocprep.build.build_context import BuildContext
from apidocprep.build.presentation_style import PresentationStyleSettings
from apidocprep.cli.argparser import create_parser, validate_args
from apidocprep.conceptual.conceptual_content_settings import ConceptualContentSettings
from apidocprep.project.project_file import ProjectFile
from apidocprep.project.project_properties import ProjectProperties
from apidocprep.reflection.reflection_document import ReflectionDocument

logger = logging.getLogger("apidocprep")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send apidocprep log messages to stderr at the requested level."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)
    logger.setLevel(level)


def run_filter(args: argparse.Namespace) -> None:
    """Merge the API filter files and apply them to the reflection information file."""
    filter_tree = ApiFilterTree()
    for filter_file in args.filters:
        filter_tree.merge(ApiFilterTree.from_xml(filter_file))

    if args.show_filter:
        print(filter_tree.get_tree_representation())

    document = ReflectionDocument.load(args.reflection)
    removed = ApiFilterEngine().apply(filter_tree, document)
    document.save(args.output or args.reflection)
    logger.info("Removed %d API entries from %s", removed, args.reflection)


def load_project(args: argparse.Namespace) -> Optional[ProjectFile]:
    """Load the project file named on the command line, if any."""
    if args.project is None:
        return None
    return ProjectFile.load(args.project, args.properties)


def create_build_context(args: argparse.Namespace, project: Optional[ProjectFile]) -> BuildContext:
    """Create the build context described by the shared build options."""
    if project is not None:
        properties = project.properties
    else:
        properties = ProjectProperties(global_properties=args.properties)

    presentation_style = None
    if args.presentation_folder is not None:
        name = project.presentation_style if project is not None else args.presentation_folder.name
        presentation_style = PresentationStyleSettings(name, args.presentation_folder.absolute())

    args.working_folder.mkdir(parents=True, exist_ok=True)

    return BuildContext(
        working_folder=args.working_folder,
        output_folder=args.output_folder,
        properties=properties,
        help_format_output_folders=args.help_format_folder,
        template_folder=args.template_folder,
        project_folder=project.folder if project is not None else None,
        tools_folder=args.tools_folder,
        presentation_style=presentation_style,
        naming_method=project.naming_method if project is not None else "Guid",
        template_encoding=args.template_encoding,
    )


def run_transform(args: argparse.Namespace) -> None:
    """Transform a single template file into the destination folder."""
    build = create_build_context(args, load_project(args))
    args.dest.mkdir(parents=True, exist_ok=True)
    transformed = build.transform_template(args.template.name, args.template.parent, args.dest)
    logger.info("Transformed %s -> %s", args.template, transformed)


def run_conceptual(args: argparse.Namespace) -> None:
    """Copy the project's conceptual content and create its configuration files."""
    project = load_project(args)
    build = create_build_context(args, project)
    settings = ConceptualContentSettings(project)
    settings.copy_content_files(build)
    build.report_progress("Creating conceptual content configuration files")
    settings.create_configuration_files(build)


COMMANDS = {
    "filter": run_filter,
    "transform": run_transform,
    "conceptual": run_conceptual,
}


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the apidocprep command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime or build error during execution
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
    """
    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args(argv)

    configure_logging(args.verbose, args.quiet)

    try:
        validate_args(args)
        COMMANDS[args.command](args)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
