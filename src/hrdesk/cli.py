"""
HR Desk Command Line Interface

Provides CLI commands for listing jobs and applications, updating
application status and interview progress, and database utilities.
"""

import json
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from hrdesk.core.access import CallerContext
from hrdesk.core.errors import HRDeskError
from hrdesk.utils.constants import Role, SortOrder

app = typer.Typer(
    name="hr-desk",
    help="Job posting and application tracking CLI",
    add_completion=False,
)
console = Console()


def _caller(user_id: str, role: Role) -> CallerContext:
    return CallerContext(user_id=user_id, role=role)


def _fail(error: HRDeskError) -> None:
    console.print(f"[red]{error.code.value}: {error.message}[/red]")
    for detail in error.details:
        console.print(f"  [dim]{detail['field']}: {detail['message']}[/dim]")
    raise typer.Exit(1)


def _print_json(data: Any) -> None:
    console.print_json(json.dumps(data))


def _applications_table(title: str, items: list, progress: Optional[list] = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Candidate", style="cyan")
    table.add_column("Email")
    table.add_column("Job")
    table.add_column("Status", style="green")
    table.add_column("Rounds", justify="right")
    if progress is not None:
        table.add_column("Progress", justify="right")

    for index, item in enumerate(items):
        row = [
            str(item.id),
            item.candidate_name,
            item.candidate_email,
            item.job.title if item.job else "-",
            item.status,
            str(item.interview_rounds),
        ]
        if progress is not None:
            row.append(f"{progress[index].progress:.0f}%")
        table.add_row(*row)
    return table


@app.callback()
def main() -> None:
    """Initialize logging before any command runs."""
    from hrdesk.utils.logger import setup_logging

    setup_logging()


@app.command()
def version():
    """Show application version."""
    from hrdesk import __version__, __app_name__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    from hrdesk.utils.config import get_settings

    settings = get_settings()

    table = Table(title="HR Desk Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Default Page Size", str(settings.pagination.default_limit))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required indexes."""
    from hrdesk.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()

    console.print("  Checking database connection...")
    if not db_manager.check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)

    console.print("  [green]✓[/green] Connected to MongoDB")

    console.print("  Creating indexes...")
    try:
        db_manager.ensure_indexes()
    except Exception as e:
        console.print(f"[red]Error creating indexes: {e}[/red]")
        raise typer.Exit(1)
    finally:
        db_manager.close_all()
    console.print("  [green]✓[/green] Indexes created")

    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def seed():
    """Replace all jobs and applications with sample data."""
    from hrdesk.data.repositories import ApplicationRepository, JobRepository
    from hrdesk.data.seed import seed_sample_data

    jobs = JobRepository()
    applications = ApplicationRepository(job_repository=jobs)

    try:
        result = seed_sample_data(jobs, applications)
    except HRDeskError as e:
        _fail(e)

    console.print("[green]Database seeded successfully[/green]")
    console.print(f"  HR user ID:        [cyan]{result.hr_user_id}[/cyan]")
    console.print(f"  Applicant user ID: [cyan]{result.applicant_user_id}[/cyan]")
    console.print(f"  Job ID:            [cyan]{result.job.id}[/cyan]")
    for application in result.applications:
        console.print(f"  Application ID:    [cyan]{application.id}[/cyan] ({application.candidate_name})")


@app.command()
def jobs(
    user_id: str = typer.Option(..., "--user-id", "-u", help="Caller user ID"),
    role: Role = typer.Option(..., "--role", "-r", help="Caller role"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Text to find in title, department or location"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="Field to sort by"),
    sort_order: SortOrder = typer.Option(SortOrder.ASC, "--sort-order", help="Sort direction"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """List jobs with their application counts."""
    from hrdesk.core.views import get_view_assembler

    try:
        listings = get_view_assembler().list_jobs(_caller(user_id, role), search, sort_by, sort_order)
    except HRDeskError as e:
        _fail(e)

    if as_json:
        _print_json([listing.model_dump(mode="json") for listing in listings])
        return

    table = Table(title="Jobs")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Department")
    table.add_column("Location")
    table.add_column("Posted")
    table.add_column("Applications", justify="right", style="green")
    for listing in listings:
        table.add_row(
            str(listing.id),
            listing.title,
            listing.department,
            listing.location or "-",
            listing.posted_date.strftime("%Y-%m-%d"),
            str(listing.total_applications),
        )
    console.print(table)


@app.command()
def job_applications(
    job_id: str = typer.Argument(..., help="Job ID"),
    user_id: str = typer.Option(..., "--user-id", "-u", help="Caller user ID"),
    role: Role = typer.Option(..., "--role", "-r", help="Caller role"),
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """List a job's applications (HR only)."""
    from hrdesk.core.views import get_view_assembler

    try:
        result = get_view_assembler().list_job_applications(_caller(user_id, role), job_id, page, limit)
    except HRDeskError as e:
        _fail(e)

    if as_json:
        _print_json(result.model_dump(mode="json"))
        return

    console.print(_applications_table("Applications", result.items))
    console.print(f"[dim]Page {result.page}, {len(result.items)} of {result.total} applications[/dim]")


@app.command()
def my_applications(
    user_id: str = typer.Option(..., "--user-id", "-u", help="Caller user ID"),
    role: Role = typer.Option(..., "--role", "-r", help="Caller role"),
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """List the caller's own applications with interview progress (applicants only)."""
    from hrdesk.core.views import get_view_assembler

    try:
        result = get_view_assembler().list_my_applications(_caller(user_id, role), page, limit)
    except HRDeskError as e:
        _fail(e)

    if as_json:
        _print_json(result.model_dump(mode="json"))
        return

    console.print(_applications_table("My Applications", result.items, result.progress))
    console.print(f"[dim]Page {result.page}, {len(result.items)} of {result.total} applications[/dim]")


@app.command()
def update_status(
    application_id: str = typer.Argument(..., help="Application ID"),
    status: str = typer.Argument(..., help="Applied, Under Review, Interview, Rejected or Hired"),
    user_id: str = typer.Option(..., "--user-id", "-u", help="Caller user ID"),
    role: Role = typer.Option(..., "--role", "-r", help="Caller role"),
):
    """Set an application's status (HR only)."""
    from hrdesk.core.lifecycle import get_lifecycle_controller

    try:
        view = get_lifecycle_controller().update_status(_caller(user_id, role), application_id, status)
    except HRDeskError as e:
        _fail(e)

    _print_json(view.model_dump(mode="json"))


@app.command()
def update_progress(
    application_id: str = typer.Argument(..., help="Application ID"),
    rounds: int = typer.Argument(..., help="Completed interview rounds (0-4)"),
    user_id: str = typer.Option(..., "--user-id", "-u", help="Caller user ID"),
    role: Role = typer.Option(..., "--role", "-r", help="Caller role"),
):
    """Set an application's completed interview rounds (HR only)."""
    from hrdesk.core.lifecycle import get_lifecycle_controller

    try:
        view = get_lifecycle_controller().update_interview_rounds(
            _caller(user_id, role), application_id, rounds
        )
    except HRDeskError as e:
        _fail(e)

    _print_json(view.model_dump(mode="json"))


if __name__ == "__main__":
    app()
