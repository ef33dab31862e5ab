"""Rich rendering utilities for course graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from prereq._errors import CycleDetectedError
    from prereq._models import ScheduleEntry

    from .graph_query import CourseDetail, CourseInfo, TreeNode


def render_course_table(courses: list[CourseInfo], console: Console) -> None:
    """Render course list as a Rich table.

    Args:
        courses: List of CourseInfo to render.
        console: Rich Console to output to.

    """
    if not courses:
        console.print("[dim]No courses match the given filters[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Prerequisites", style="dim")
    table.add_column("Dependents", justify="right")

    for course in courses:
        table.add_row(
            escape(course.code),
            escape(course.name),
            escape(", ".join(course.prerequisites)) or "-",
            str(course.dependent_count),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(courses)} courses[/dim]")


def render_order_table(entries: list[ScheduleEntry], console: Console) -> None:
    """Render a computed course order as a numbered Rich table."""
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Code", style="bold")
    table.add_column("Name")

    for entry in entries:
        table.add_row(str(entry.position), escape(entry.code), escape(entry.name))

    console.print(table)


def render_cycle(error: CycleDetectedError, console: Console) -> None:
    """Render the courses involved in a prerequisite cycle."""
    console.print("[red]✗ Circular prerequisites detected[/red]")
    if error.cycle:
        console.print(f"  [red]Cycle:[/red] {escape(' -> '.join(error.cycle))}")
    console.print(f"  [yellow]Unresolved courses ({len(error.remaining)}):[/yellow]")
    for code in error.remaining:
        console.print(f"    [yellow]•[/yellow] {escape(code)}")


def render_course_detail(detail: CourseDetail, console: Console) -> None:
    """Render detailed course information.

    Args:
        detail: CourseDetail to render.
        console: Rich Console to output to.

    """
    console.print(f"[bold]Course:[/bold] {escape(detail.code)}")
    console.print(f"[cyan]Name:[/cyan]   {escape(detail.name)}")
    console.print()

    if detail.direct_prerequisites:
        console.print(f"[cyan]Prerequisites ({len(detail.direct_prerequisites)} direct):[/cyan]")
        for code in detail.direct_prerequisites:
            console.print(f"  {escape(code)}")
    else:
        console.print("[cyan]Prerequisites:[/cyan] [dim]None[/dim]")
    console.print()

    if detail.direct_dependents:
        console.print(f"[cyan]Required by ({len(detail.direct_dependents)} direct):[/cyan]")
        for code in detail.direct_dependents:
            console.print(f"  {escape(code)}")
    else:
        console.print("[cyan]Required by:[/cyan] [dim]None[/dim]")
    console.print()

    console.print(
        f"[dim]{len(detail.all_prerequisites)} prerequisites in total, "
        f"required by {len(detail.all_dependents)} courses in total[/dim]",
    )


def render_tree(tree_node: TreeNode, console: Console) -> None:
    """Render a prerequisite tree using Rich Tree.

    Args:
        tree_node: TreeNode root to render.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(tree_node.code)}[/bold]")
    _add_tree_children(rich_tree, tree_node.children)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode]) -> None:
    for child in children:
        child_tree = parent.add(escape(child.code))
        _add_tree_children(child_tree, child.children)
