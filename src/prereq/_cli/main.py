import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from prereq._errors import CycleDetectedError, PrereqError
from prereq._graph import CourseGraph
from prereq._io import ExportFormat, export_order, read_courses_from_csv
from prereq._models import DuplicatePolicy, number_courses
from prereq._sort import sort_topologically

from .config import PrereqConfig, get_config
from .graph_query import get_course_detail, get_dependency_tree, list_courses
from .graph_render import (
    render_course_detail,
    render_course_table,
    render_cycle,
    render_order_table,
    render_tree,
)

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

FORMAT_HELP = """\
The course file is a CSV file with a header row followed by one course per row:

  1. Course code (e.g. CS101)
  2. Course name (e.g. Introduction to Programming)
  3. Prerequisites (course codes separated by ';', empty if none)

Example:

  Code,Name,Prerequisites
  CS101,Introduction to Programming,
  MA101,Basic Mathematics,
  CS201,Data Structures,CS101;MA101
  CS301,Algorithms,CS201

Notes:
  - The first row must contain the column headers and is skipped
  - Leave the third column empty for courses without prerequisites
  - Prerequisites may refer to courses listed further down the file"""

InputArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to the course CSV file (defaults to [tool.prereq].input)"),
]
DuplicatesOption = Annotated[
    DuplicatePolicy | None,
    typer.Option("--duplicates", help="How to handle a course code listed twice", case_sensitive=False),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Order courses so that every prerequisite comes first."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> PrereqConfig:
    try:
        return get_config()
    except PrereqError as e:
        _fail(e)


def _fail(error: Exception) -> NoReturn:
    err_console.print(f"[red]✗ {escape(str(error))}[/red]")
    err_console.print()
    raise typer.Exit(code=1)


def _load_graph(
    path: Path | None,
    config: PrereqConfig,
    duplicates: DuplicatePolicy | None,
) -> CourseGraph:
    """Read the course file and build its prerequisite graph."""
    input_path = path if path is not None else config.input
    if input_path is None:
        msg = "No course file specified. Provide a path argument or configure [tool.prereq].input in pyproject.toml."
        raise typer.BadParameter(msg)

    policy = duplicates if duplicates is not None else config.duplicates

    err_console.print(f"[cyan]Loading courses from:[/cyan] {input_path}")
    try:
        courses = read_courses_from_csv(input_path)
        graph = CourseGraph.from_courses(courses, duplicate_policy=policy)
    except PrereqError as e:
        _fail(e)

    err_console.print(f"[green]✓ {len(graph)} courses loaded[/green]")
    err_console.print()
    return graph


@app.command("list")
def list_command(
    path: InputArgument = None,
    *,
    roots: Annotated[
        bool,
        typer.Option("--roots", help="Only show courses without prerequisites"),
    ] = False,
    leaves: Annotated[
        bool,
        typer.Option("--leaves", help="Only show courses no other course requires"),
    ] = False,
    duplicates: DuplicatesOption = None,
) -> None:
    """List the courses in a course file."""
    err_console.print()
    config = _load_config()
    graph = _load_graph(path, config, duplicates)

    render_course_table(list_courses(graph, roots_only=roots, leaves_only=leaves), out_console)


@app.command("sort")
def sort_command(
    path: InputArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Export the order to this file"),
    ] = None,
    export_format: Annotated[
        ExportFormat | None,
        typer.Option("--format", help="Export format (defaults to the output file suffix)", case_sensitive=False),
    ] = None,
    duplicates: DuplicatesOption = None,
) -> None:
    """Compute a course order that respects every prerequisite."""
    err_console.print()
    config = _load_config()
    graph = _load_graph(path, config, duplicates)

    err_console.print("[cyan]Sorting courses...[/cyan]")
    try:
        order = sort_topologically(graph)
    except CycleDetectedError as e:
        render_cycle(e, err_console)
        err_console.print()
        raise typer.Exit(code=1) from None

    entries = number_courses(order)
    err_console.print()
    out_console.print(Panel.fit("[bold]Suggested course order[/bold]", border_style="cyan"))
    render_order_table(entries, out_console)
    out_console.print()
    out_console.print(f"[dim]Total courses: {len(entries)}[/dim]")

    output_path = output if output is not None else config.output
    if output_path is not None:
        fmt = export_format if export_format is not None else config.format
        err_console.print()
        err_console.print(f"[cyan]Exporting order to:[/cyan] {output_path}")
        try:
            export_order(order, output_path, fmt)
        except PrereqError as e:
            _fail(e)
        err_console.print("[green]✓ Export complete[/green]")

    err_console.print()


@app.command()
def check(
    path: InputArgument = None,
    *,
    duplicates: DuplicatesOption = None,
) -> None:
    """Check that a course file loads and has no circular prerequisites."""
    err_console.print()
    config = _load_config()
    graph = _load_graph(path, config, duplicates)

    err_console.print("[cyan]Checking for circular prerequisites...[/cyan]")
    try:
        graph.topological_order()
    except CycleDetectedError as e:
        render_cycle(e, err_console)
        err_console.print()
        raise typer.Exit(code=1) from None

    edge_count = sum(len(graph.successors(code)) for code in graph.codes)
    err_console.print(
        f"[dim]{len(graph)} courses, {edge_count} prerequisite links, "
        f"{len(graph.roots())} without prerequisites[/dim]",
    )
    err_console.print()
    err_console.print("[green]✓ Course file is valid[/green]")
    err_console.print()


@app.command()
def show(
    code: Annotated[str, typer.Argument(help="Course code to inspect")],
    path: InputArgument = None,
    *,
    invert: Annotated[
        bool,
        typer.Option("--invert", help="Show the courses that require this course instead"),
    ] = False,
    depth: Annotated[
        int | None,
        typer.Option("--depth", min=1, help="Maximum depth of the tree"),
    ] = None,
    duplicates: DuplicatesOption = None,
) -> None:
    """Show a course and its prerequisite tree."""
    err_console.print()
    config = _load_config()
    graph = _load_graph(path, config, duplicates)

    try:
        detail = get_course_detail(graph, code)
        tree = get_dependency_tree(graph, code, invert=invert, max_depth=depth)
    except PrereqError as e:
        _fail(e)

    render_course_detail(detail, out_console)
    out_console.print()
    render_tree(tree, out_console)


@app.command("format")
def format_command() -> None:
    """Describe the expected course file format."""
    out_console.print(Panel(escape(FORMAT_HELP), title="[bold]Course file format[/bold]", border_style="cyan"))


def main() -> None:
    app()
