"""Terminal rendering of the directory and the click-backed collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from studentdir.collaborators import NoticeKind
from studentdir.pagination import page_numbers

if TYPE_CHECKING:
    from studentdir.directory import DirectoryState
    from studentdir.gateway import Student

COLUMNS = ("ID", "Name", "Email", "Age", "Average Marks")

_NOTICE_COLORS = {
    NoticeKind.SUCCESS: "green",
    NoticeKind.ERROR: "red",
    NoticeKind.INFO: "yellow",
}


def _row(student: Student) -> tuple[str, ...]:
    return (
        str(student.id),
        student.name,
        student.email,
        "" if student.age is None else str(student.age),
        f"{student.display_score:g}",
    )


def format_table(state: DirectoryState) -> list[str]:
    """Format the rows as an aligned text table."""
    if state.loading:
        return ["Loading..."]

    rows = [_row(student) for student in state.rows]
    widths = [len(col) for col in COLUMNS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row, strict=True)]

    def line(cells: tuple[str, ...]) -> str:
        return " | ".join(cell.ljust(w) for cell, w in zip(cells, widths, strict=True)).rstrip()

    lines = [line(COLUMNS), "-+-".join("-" * w for w in widths)]
    if rows:
        lines.extend(line(row) for row in rows)
    else:
        lines.append("No students found")
    return lines


def format_footer(state: DirectoryState) -> list[str]:
    """Format the "Showing X to Y of Z entries" summary and page links."""
    p = state.pagination
    lines = [f"Showing {state.first_shown} to {state.last_shown} of {p.total_records} entries"]
    if state.is_searching:
        return lines

    links = [f"[{n}]" if n == p.page else str(n) for n in page_numbers(p.total_pages)]
    back = "First | Previous" if p.page > 1 else "(First | Previous)"
    forward = "Next | Last" if p.page < p.total_pages else "(Next | Last)"
    lines.append(f"{back} | {' '.join(links)} | {forward}")
    return lines


def format_student(student: Student) -> list[str]:
    """Format one student's details for the view command."""
    return [
        student.name,
        f"  Email: {student.email}",
        f"  Age: {'' if student.age is None else student.age}",
        f"  Average Marks: {student.display_score:g}",
    ]


def render_state(state: DirectoryState) -> None:
    for text in [*format_table(state), "", *format_footer(state)]:
        click.echo(text)


class ClickNotifier:
    """Prints notices; errors go to stderr."""

    def __init__(self) -> None:
        self.history: list[tuple[NoticeKind, str]] = []

    def notify(self, kind: NoticeKind, message: str) -> None:
        self.history.append((kind, message))
        click.secho(message, fg=_NOTICE_COLORS[kind], err=kind is NoticeKind.ERROR)

    @property
    def had_error(self) -> bool:
        return any(kind is NoticeKind.ERROR for kind, _ in self.history)


class ClickConfirmer:
    """Asks on the terminal unless confirmation was given up front."""

    def __init__(self, assume_yes: bool = False) -> None:
        self.assume_yes = assume_yes

    async def request_confirmation(self, message: str) -> bool:
        if self.assume_yes:
            return True
        return click.confirm(f"{message} Continue?", default=False)


class ClickViewer:
    """Prints a student's details."""

    def show_record(self, student: Student) -> None:
        for text in format_student(student):
            click.echo(text)
