"""
adapters.cli.main - CLI adapter for the wellness chat tracker.

Uses the same ServiceFactory and services as any other adapter would, so
everything a chat message does here is exactly what the pipeline does.

Commands
--------
  init             Create the database tables
  register         Create a profile and select it
  use              Select an existing profile by id
  whoami           Show the selected profile
  profile          Show (or update) the selected profile
  say              Send one chat message and print the reply
  chat             Interactive chat session
  recommend        Generate fresh recommendations
  recommendations  List stored recommendations
  mark-read        Mark a recommendation as read
  history          Show everything recorded on one day
  messages         Show the chat history

Usage
-----
  wellness-chat register --name Ana --email ana@example.com
  wellness-chat say "I ran for 30 minutes and drank 500ml of water"
  wellness-chat chat
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from wellness_chat import __version__
from wellness_chat.adapters.cli.session import Session, load_session, save_session
from wellness_chat.application.context import SessionContext
from wellness_chat.application.dto import CreateUserRequest, ProcessingResult
from wellness_chat.domain.exceptions import (
    DomainError,
    DuplicateEmailError,
    InvalidRecordError,
    NotFoundError,
)
from wellness_chat.factory import ServiceFactory
from wellness_chat.infrastructure.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

console = Console()
app = typer.Typer(
    help="Wellness Chat: track your day by talking about it.",
    add_completion=False,
    no_args_is_help=True,
)

_PRIORITY_STYLE = {"high": "bold red", "medium": "yellow", "low": "green"}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _settings() -> Settings:
    return Settings.from_env()


def _require_session(settings: Settings) -> Session:
    """Return the selected user or exit with a user-friendly error."""
    session = load_session(settings.session_dir)
    if session is None:
        console.print(
            "[bold red]No user selected.[/bold red] "
            "Run [bold]register[/bold] or [bold]use <id>[/bold] first."
        )
        raise typer.Exit(code=1)
    return session


async def _make_factory(settings: Settings) -> ServiceFactory:
    factory = ServiceFactory(settings)
    await factory.initialize()
    return factory


def _run(coro) -> None:
    """Run a command coroutine, turning domain errors into exit code 1."""
    try:
        asyncio.run(coro)
    except NotFoundError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1)
    except (InvalidRecordError, DuplicateEmailError) as exc:
        console.print(f"[bold red]Invalid input:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except DomainError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)


def _print_reply(result: ProcessingResult) -> None:
    if result.reply is None:
        console.print("[dim]Message was already processed.[/dim]")
        return
    border = "green" if result.message.extracted else "cyan"
    console.print(Panel(result.reply.message, title="Wellness Coach", border_style=border))


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"wellness-chat v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands: Setup & profile
# ---------------------------------------------------------------------------

@app.command()
def init() -> None:
    """Create the database tables (safe to run more than once)."""
    settings = _settings()

    async def _main() -> None:
        await _make_factory(settings)
        console.print(Panel(
            f"[bold green]Database ready[/bold green] at {settings.db_path}",
            border_style="green",
        ))

    _run(_main())


@app.command()
def register(
    name: str = typer.Option(..., prompt=True, help="Your name."),
    email: str = typer.Option(..., prompt=True, help="Unique email address."),
    age: Optional[int] = typer.Option(None, help="Age in years."),
    gender: Optional[str] = typer.Option(None, help="male, female or other."),
    height: Optional[float] = typer.Option(None, help="Height in cm."),
    weight: Optional[float] = typer.Option(None, help="Weight in kg."),
    activity_level: Optional[str] = typer.Option(
        None, help="sedentary, lightly_active, moderately_active, very_active or extremely_active.",
    ),
    goals: Optional[str] = typer.Option(None, help="Your wellness goals, in your own words."),
) -> None:
    """Create a profile and select it for the following commands."""
    settings = _settings()

    async def _main() -> None:
        factory = await _make_factory(settings)
        user = await factory.create_profile_service().register(CreateUserRequest(
            name=name,
            email=email,
            age=age,
            gender=gender,
            height=height,
            weight=weight,
            activity_level=activity_level,
            goals=goals,
        ))
        save_session(settings.session_dir, Session(user_id=user.id, name=user.name))
        console.print(Panel(
            f"[bold green]Profile created![/bold green]\n"
            f"Welcome, [bold]{user.name}[/bold] (user_id={user.id}).\n"
            "Run [bold]chat[/bold] or [bold]say[/bold] to start tracking.",
            border_style="green",
        ))

    _run(_main())


@app.command()
def use(user_id: int = typer.Argument(..., help="Id of an existing profile.")) -> None:
    """Select an existing profile."""
    settings = _settings()

    async def _main() -> None:
        factory = await _make_factory(settings)
        user = await factory.create_profile_service().get(user_id)
        save_session(settings.session_dir, Session(user_id=user.id, name=user.name))
        console.print(f"Now acting as [bold]{user.name}[/bold] (user_id={user.id})")

    _run(_main())


@app.command()
def whoami() -> None:
    """Show the selected profile."""
    session = load_session(_settings().session_dir)
    if session is None:
        console.print("[dim]No user selected.[/dim]")
        return
    console.print(f"Acting as [bold]{session.name or '?'}[/bold] (user_id={session.user_id})")


@app.command()
def profile(
    goals: Optional[str] = typer.Option(None, help="Replace your goals."),
    weight: Optional[float] = typer.Option(None, help="Update weight in kg."),
    activity_level: Optional[str] = typer.Option(None, help="Update activity level."),
    complete_onboarding: bool = typer.Option(
        False, "--complete-onboarding", help="Mark onboarding as finished.",
    ),
) -> None:
    """Show your profile, optionally updating some fields first."""
    settings = _settings()
    session = _require_session(settings)

    async def _main() -> None:
        factory = await _make_factory(settings)
        profile_svc = factory.create_profile_service()

        changes = {
            k: v for k, v in
            {"goals": goals, "weight": weight, "activity_level": activity_level}.items()
            if v is not None
        }
        if complete_onboarding:
            changes["onboarding_completed"] = True
        if changes:
            user = await profile_svc.update(session.user_id, **changes)
        else:
            user = await profile_svc.get(session.user_id)

        t = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
        t.add_column("Field", style="bold")
        t.add_column("Value")
        t.add_row("Name", user.name)
        t.add_row("Email", user.email)
        for label, value in (
            ("Age", user.age),
            ("Gender", user.gender),
            ("Height (cm)", user.height),
            ("Weight (kg)", user.weight),
            ("Activity level", user.activity_level),
            ("Goals", user.goals),
        ):
            t.add_row(label, str(value) if value is not None else "[dim]-[/dim]")
        t.add_row("Onboarding", "complete" if user.onboarding_completed else "pending")
        console.print(Panel(t, title="Your Profile", border_style="blue"))

    _run(_main())


# ---------------------------------------------------------------------------
# Commands: Chat
# ---------------------------------------------------------------------------

@app.command()
def say(text: str = typer.Argument(..., help="What you want to tell the tracker.")) -> None:
    """Send one chat message and print the reply."""
    settings = _settings()
    session = _require_session(settings)

    async def _main() -> None:
        factory = await _make_factory(settings)
        result = await factory.create_chat_service().send(
            SessionContext(user_id=session.user_id), text,
        )
        _print_reply(result)

    _run(_main())


@app.command()
def chat() -> None:
    """Start an interactive chat session."""
    settings = _settings()
    session = _require_session(settings)

    async def _main() -> None:
        factory = await _make_factory(settings)
        chat_svc = factory.create_chat_service()
        ctx = SessionContext(user_id=session.user_id)

        console.print(Panel(
            f"[bold]Wellness Chat[/bold]\n"
            f"Acting as [bold]{session.name or session.user_id}[/bold]\n"
            "Tell me about your day, or type [bold]exit[/bold] / [bold]quit[/bold] to stop.",
            border_style="cyan",
        ))

        while True:
            try:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]")
            except (KeyboardInterrupt, EOFError):
                console.print("\n[dim]Goodbye![/dim]")
                break

            if user_input.strip().lower() in ("exit", "quit", "q", "bye"):
                console.print("[dim]Goodbye![/dim]")
                break
            if not user_input.strip():
                continue

            ctx.new_request()
            result = await chat_svc.send(ctx, user_input)
            _print_reply(result)

    _run(_main())


@app.command()
def messages(
    limit: int = typer.Option(20, "--limit", "-n", help="How many messages to show."),
) -> None:
    """Show the chat history, newest first."""
    settings = _settings()
    session = _require_session(settings)

    async def _main() -> None:
        factory = await _make_factory(settings)
        history = await factory.create_chat_service().history(session.user_id, limit)
        if not history:
            console.print("[dim]No messages yet.[/dim]")
            return
        t = Table(box=box.SIMPLE)
        t.add_column("#", justify="right")
        t.add_column("When")
        t.add_column("From")
        t.add_column("Message")
        t.add_column("Saved")
        for m in history:
            t.add_row(
                str(m.id),
                m.created_at.strftime("%Y-%m-%d %H:%M") if m.created_at else "",
                m.direction.value,
                m.message,
                "yes" if m.extracted else "",
            )
        console.print(t)

    _run(_main())


# ---------------------------------------------------------------------------
# Commands: Recommendations
# ---------------------------------------------------------------------------

def _recommendation_table(recommendations) -> Table:
    t = Table(box=box.SIMPLE)
    t.add_column("#", justify="right")
    t.add_column("Priority")
    t.add_column("Category")
    t.add_column("Title", style="bold")
    t.add_column("Description")
    t.add_column("Read")
    for r in recommendations:
        style = _PRIORITY_STYLE.get(r.priority.value, "")
        t.add_row(
            str(r.id),
            f"[{style}]{r.priority.value}[/{style}]" if style else r.priority.value,
            r.category.value,
            r.title,
            r.description,
            "yes" if r.is_read else "",
        )
    return t


@app.command()
def recommend() -> None:
    """Generate fresh recommendations from your recent history."""
    settings = _settings()
    session = _require_session(settings)

    async def _main() -> None:
        factory = await _make_factory(settings)
        generated = await factory.create_recommendation_service().generate(session.user_id)
        console.print(Panel(
            _recommendation_table(generated),
            title=f"Recommendations ({len(generated)})",
            border_style="magenta",
        ))

    _run(_main())


@app.command()
def recommendations(
    unread: bool = typer.Option(False, "--unread", help="Only show unread ones."),
) -> None:
    """List stored recommendations, most urgent first."""
    settings = _settings()
    session = _require_session(settings)

    async def _main() -> None:
        factory = await _make_factory(settings)
        stored = await factory.create_recommendation_service().list_for_user(
            session.user_id, unread_only=unread,
        )
        if not stored:
            console.print("[dim]No recommendations.[/dim]")
            return
        console.print(_recommendation_table(stored))

    _run(_main())


@app.command("mark-read")
def mark_read(
    recommendation_id: int = typer.Argument(..., help="Recommendation id."),
) -> None:
    """Mark a recommendation as read."""
    settings = _settings()

    async def _main() -> None:
        factory = await _make_factory(settings)
        rec = await factory.create_recommendation_service().mark_read(recommendation_id)
        console.print(f"[green]Marked as read:[/green] {rec.title}")

    _run(_main())


# ---------------------------------------------------------------------------
# Commands: Daily history
# ---------------------------------------------------------------------------

def _parse_day(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter("Use the YYYY-MM-DD format.", param_hint="--date")


@app.command()
def history(
    day: Optional[str] = typer.Option(None, "--date", "-d", help="Day to show (YYYY-MM-DD), default today."),
) -> None:
    """Show everything recorded on one day."""
    settings = _settings()
    session = _require_session(settings)
    target = _parse_day(day)

    async def _main() -> None:
        factory = await _make_factory(settings)
        summary = await factory.create_tracking_service().day_summary(session.user_id, target)

        t = Table(box=box.SIMPLE, title=f"Recorded on {target.isoformat()}")
        t.add_column("Time")
        t.add_column("Kind", style="bold")
        t.add_column("Details")
        rows = []
        for a in summary.activities:
            rows.append((a.recorded_at, "activity", f"{a.activity_type}, {a.duration_minutes} min"))
        for n in summary.nutrition:
            rows.append((n.recorded_at, "meal", f"{n.meal_type.value}: {n.food_item}"))
        for h in summary.hydration:
            rows.append((h.recorded_at, "drink", f"{h.amount_ml}ml {h.beverage_type}"))
        for s in summary.sleep:
            quality = f" ({s.sleep_quality.value})" if s.sleep_quality else ""
            rows.append((s.recorded_at, "sleep", f"{s.sleep_duration_hours:.1f}h{quality}"))
        for w in summary.wellbeing:
            rows.append((
                w.recorded_at, "wellbeing",
                f"mood {w.mood.value}, stress {w.stress_level.value}, energy {w.energy_level.value}",
            ))
        if not rows:
            console.print(f"[dim]Nothing recorded on {target.isoformat()}.[/dim]")
            return
        for when, kind, details in sorted(rows, key=lambda r: r[0]):
            t.add_row(when.strftime("%H:%M"), kind, details)
        console.print(t)

    _run(_main())


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Wellness Chat CLI"""
    logging.basicConfig(level=_settings().log_level_value, format=LOG_FORMAT)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
