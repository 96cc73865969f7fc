# -*- coding: utf-8 -*-
import logging
from datetime import datetime

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tracker_cli.utils import (
    PRIORITY_STYLES,
    STATUS_STYLES,
    console,
    fail,
    format_datetime_human,
    parse_score_options,
    styled,
    truncate_title,
)
from tracker_config import TRACKER_DATA_PATH, configure_logging, get_timezone
from tracker_engine.grades import GradeEntrySet, category_average, calculate_grade, letter_grade
from tracker_engine.models import Assignment, Course
from tracker_engine.ranking import course_display_name, filter_courses, index_courses, unique_semesters
from tracker_engine.schedule import assignments_due_on, calendar_days, week_agenda
from tracker_engine.summary import (
    build_assignment_stats,
    build_course_stats,
    build_dashboard_summary,
)
from tracker_records.store import RecordError, load_records
from tracker_server.views import build_grade_report, resolve_now, select_assignments

logger = logging.getLogger(__name__)


def _load(ctx: click.Context) -> tuple[list[Course], list[Assignment]]:
    """Load the export named on the command line, exiting on failure."""
    try:
        return load_records(ctx.obj["data_path"])
    except (FileNotFoundError, RecordError) as e:
        fail(str(e))


def _stats_panel(title: str, rows: list[tuple[str, str]]) -> Panel:
    stats_text = Text()
    for idx, (label, value) in enumerate(rows):
        if idx:
            stats_text.append("\n")
        stats_text.append(f"{label}: ", style="white")
        stats_text.append(value, style="bold green")
    return Panel(stats_text, title=title, border_style="green")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--data",
    "data_path",
    envvar="TRACKER_DATA_PATH",
    default=TRACKER_DATA_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="JSON export of courses and assignments.",
)
@click.option("--now", default="", help="Use this ISO timestamp as the current time.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, data_path: str, now: str, verbose: bool) -> None:
    """Course and assignment tracker: status, schedule and grade summaries."""
    configure_logging("DEBUG" if verbose else None)
    try:
        moment = resolve_now(now)
    except ValueError as e:
        fail(str(e))
    logger.debug("Using data file %s at %s", data_path, moment.isoformat())
    ctx.obj = {"data_path": data_path, "now": moment}


@main.command()
@click.pass_context
def dashboard(ctx: click.Context) -> None:
    """Show counts, upcoming work and recent grades."""
    courses, assignments = _load(ctx)
    summary = build_dashboard_summary(courses, assignments, ctx.obj["now"])
    courses_by_id = index_courses(courses)

    console.print(_stats_panel("📊 Dashboard", [
        ("Courses", str(summary.total_courses)),
        ("Due this week", str(summary.upcoming_count)),
        ("Overdue", str(summary.overdue_count)),
        ("Completion rate", f"{summary.completion_rate:.0f}%"),
        ("Average GPA", f"{summary.average_gpa:.2f}"),
    ]))

    if summary.upcoming_preview:
        table = Table(title="📅 Upcoming", show_header=True, header_style="bold magenta")
        table.add_column("Title", style="white")
        table.add_column("Course", style="cyan")
        table.add_column("Due", style="yellow")
        table.add_column("Priority")
        for assignment in summary.upcoming_preview:
            table.add_row(
                escape(truncate_title(assignment.name)),
                escape(course_display_name(assignment.course_id, courses_by_id)),
                format_datetime_human(assignment.due_date),
                styled(assignment.priority, PRIORITY_STYLES),
            )
        console.print(table)
    else:
        console.print("[dim]Nothing due in the next 7 days.[/dim]")

    if summary.recent_grades:
        table = Table(title="🎓 Grades", show_header=True, header_style="bold magenta")
        table.add_column("Course", style="white")
        table.add_column("Grade", justify="right")
        table.add_column("Letter", style="bold")
        for course in summary.recent_grades:
            table.add_row(escape(course.name), f"{course.current_grade:.1f}%", letter_grade(course.current_grade))
        console.print(table)


@main.command()
@click.option("--search", "-s", default="", help="Match assignment or course names.")
@click.option(
    "--status",
    type=click.Choice(["all", "pending", "completed", "overdue"]),
    default="all",
    show_default=True,
)
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(["due_date", "priority", "course"]),
    default="due_date",
    show_default=True,
)
@click.pass_context
def assignments(ctx: click.Context, search: str, status: str, sort_by: str) -> None:
    """List assignments, filtered and sorted."""
    courses, records = _load(ctx)
    now = ctx.obj["now"]
    views = select_assignments(courses, records, now, search, status, sort_by)

    if not views:
        console.print("📚 No assignments found.")
    else:
        table = Table(title="📚 Assignments", show_header=True, header_style="bold magenta")
        table.add_column("#", style="dim", width=4)
        table.add_column("Title", style="white")
        table.add_column("Course", style="cyan")
        table.add_column("Due", style="yellow")
        table.add_column("Priority")
        table.add_column("Status")
        for idx, view in enumerate(views, 1):
            table.add_row(
                str(idx),
                escape(truncate_title(view.name)),
                escape(view.course_name),
                format_datetime_human(view.due_date),
                styled(view.priority, PRIORITY_STYLES),
                styled(view.effective_status, STATUS_STYLES),
            )
        console.print(table)

    stats = build_assignment_stats(records, now)
    console.print(_stats_panel("📊 Statistics", [
        ("Total", str(stats.total)),
        ("Completed", str(stats.completed)),
        ("Pending", str(stats.pending)),
        ("Overdue", str(stats.overdue)),
    ]))


@main.command()
@click.option("--search", "-s", default="", help="Match course name, code or instructor.")
@click.option("--semester", default="all", show_default=True)
@click.pass_context
def courses(ctx: click.Context, search: str, semester: str) -> None:
    """List courses."""
    records, _ = _load(ctx)
    matched = filter_courses(records, search, semester)

    if not matched:
        console.print("📘 No courses found.")
        semesters = unique_semesters(records)
        if semester != "all" and semester not in semesters:
            console.print(f"[dim]Known semesters: {escape(', '.join(semesters)) or 'none'}[/dim]")
    else:
        table = Table(title="📘 Courses", show_header=True, header_style="bold magenta")
        table.add_column("Code", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Instructor")
        table.add_column("Semester", style="yellow")
        table.add_column("Credits", justify="right")
        table.add_column("Grade", justify="right")
        for course in matched:
            grade = f"{course.current_grade:.1f}%" if course.is_graded else "—"
            table.add_row(
                escape(course.code),
                escape(course.name),
                escape(course.instructor),
                escape(course.semester),
                str(course.credits),
                grade,
            )
        console.print(table)

    stats = build_course_stats(records)
    console.print(_stats_panel("📊 Statistics", [
        ("Courses", str(stats.total_courses)),
        ("Credits", str(stats.total_credits)),
        ("Semesters", str(stats.semester_count)),
    ]))


@main.command()
@click.pass_context
def grades(ctx: click.Context) -> None:
    """Show GPA, grade statistics and the grade distribution."""
    courses, assignments = _load(ctx)
    report = build_grade_report(courses, assignments)

    console.print(_stats_panel("🎓 Grades", [
        ("Overall GPA", f"{report.overall_gpa:.2f}"),
        ("Average grade", f"{report.average_grade:.1f}%"),
        ("Highest", f"{report.highest_grade:.1f}%"),
        ("Lowest", f"{report.lowest_grade:.1f}%"),
        ("Credits", str(report.total_credits)),
        ("Graded assignments", str(report.completed_assignments)),
    ]))

    if report.courses:
        table = Table(title="Course Grades", show_header=True, header_style="bold magenta")
        table.add_column("Course", style="white")
        table.add_column("Credits", justify="right")
        table.add_column("Grade", justify="right")
        table.add_column("Letter", style="bold")
        for row in report.courses:
            table.add_row(escape(row.name), str(row.credits), f"{row.current_grade:.1f}%", row.letter)
        console.print(table)

        distribution = Table(title="Distribution", show_header=True, header_style="bold magenta")
        for band in report.distribution:
            distribution.add_column(band, justify="center")
        distribution.add_row(*(str(count) for count in report.distribution.values()))
        console.print(distribution)


@main.command()
@click.argument("course_id", type=int)
@click.option(
    "--score",
    "-s",
    "scores",
    multiple=True,
    help="A score as CATEGORY=SCORE; repeat for more scores.",
)
@click.pass_context
def calculate(ctx: click.Context, course_id: int, scores: tuple[str, ...]) -> None:
    """Calculate a course grade from scores entered per category.

    COURSE_ID: Id of the course whose grade categories to use.
    """
    courses, _ = _load(ctx)
    course = index_courses(courses).get(course_id)
    if course is None:
        fail(f"Course {course_id} not found")
    try:
        entry_set = GradeEntrySet(parse_score_options(scores))
    except ValueError as e:
        fail(str(e))

    entries = entry_set.as_mapping()
    result = calculate_grade(course, entries)

    table = Table(title=f"🧮 {escape(course.name)}", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="white")
    table.add_column("Weight", justify="right")
    table.add_column("Scores")
    table.add_column("Average", justify="right")
    for category in course.grade_categories:
        category_scores = entry_set.scores(category.name)
        average = category_average(category_scores)
        table.add_row(
            escape(category.name),
            f"{category.weight:g}%",
            escape(", ".join(str(score) for score in category_scores)) or "—",
            f"{average:.1f}" if average is not None else "—",
        )
    console.print(table)

    unknown = sorted(set(entries) - {category.name for category in course.grade_categories})
    if unknown:
        console.print(f"[yellow]Ignored unknown categories:[/yellow] {escape(', '.join(unknown))}")

    if result.grade is None:
        console.print("[dim]Enter scores to calculate a grade.[/dim]")
    else:
        console.print(
            f"\n[bold green]Calculated grade: {result.grade:.1f}% ({result.letter})[/bold green] "
            f"[dim]from {result.scored_weight:g}% of {result.total_weight:g}% weight[/dim]"
        )


@main.command()
@click.option("--month", default="", help="Month to show as YYYY-MM (defaults to the current month).")
@click.pass_context
def calendar(ctx: click.Context, month: str) -> None:
    """Show a month calendar with assignment counts and the week agenda."""
    courses, assignments = _load(ctx)
    now: datetime = ctx.obj["now"]
    tz = get_timezone()
    local_now = now.astimezone(tz)

    if month:
        try:
            shown = datetime.strptime(month, "%Y-%m")
        except ValueError:
            fail(f"Invalid month {month!r}, expected YYYY-MM")
        year, month_number = shown.year, shown.month
    else:
        year, month_number = local_now.year, local_now.month

    days = calendar_days(year, month_number)
    grid = Table(title=f"📅 {datetime(year, month_number, 1):%B %Y}", show_header=True, header_style="bold magenta")
    for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
        grid.add_column(name, justify="center")

    for week_start in range(0, len(days), 7):
        cells = []
        for day in days[week_start:week_start + 7]:
            due = assignments_due_on(assignments, day, tz)
            label = str(day.day) if day.month == month_number else f"[dim]{day.day}[/dim]"
            if day == local_now.date():
                label = f"[reverse]{label}[/reverse]"
            cells.append(f"{label}\n[yellow]{len(due)} due[/yellow]" if due else label)
        grid.add_row(*cells)
    console.print(grid)

    agenda = week_agenda(assignments, now)
    courses_by_id = index_courses(courses)
    if not agenda:
        console.print("[dim]Nothing due this week.[/dim]")
        return
    console.print("\n[bold cyan]This week[/bold cyan]")
    for assignment in agenda:
        console.print(
            f"   {styled(assignment.priority, PRIORITY_STYLES, width=8)} {escape(truncate_title(assignment.name))} "
            f"[dim]({escape(course_display_name(assignment.course_id, courses_by_id))} • "
            f"{format_datetime_human(assignment.due_date)})[/dim]"
        )


if __name__ == "__main__":
    main()
