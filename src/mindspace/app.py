"""Interactive CLI application."""
import logging
import os
import time

from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt, IntPrompt
from rich.table import Table

from mindspace.achievements import get_achievement
from mindspace.assessment import complete_assessment, get_assessment_history
from mindspace.breathing import BreathingSession
from mindspace.db import get_badges, init_db, DEFAULT_DB_PATH
from mindspace.models import MOOD_LABELS
from mindspace.mood import (
    delete_mood, edit_mood, get_current_streak, get_longest_streak, get_mood_history, get_mood_summary,
    log_mood,
)
from mindspace.patterns import PATTERNS
from mindspace.settings import (
    get_current_user, set_current_user, get_preferred_pattern, set_preferred_pattern,
)
from mindspace.streak import get_streak_color, get_streak_message, next_milestone
from mindspace.stress_quiz import DEFAULT_QUESTION_COUNT, create_stress_quiz

console = Console()

TICK_SECONDS = 1.0

MOOD_EMOJI = {1: "😢", 2: "😔", 3: "😐", 4: "😊", 5: "😄"}


def configure_logging(level: str | None = None) -> None:
    level = (level or os.environ.get("MINDSPACE_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def show_welcome(user_id: str):
    console.print(Panel(
        f"[bold]Mindspace[/bold]\n[dim]Mood, breathing and stress check-ins for {user_id}[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("mood", "Log how you feel today"),
        ("breathe", "Guided breathing exercise"),
        ("assess", "Stress self-assessment"),
        ("streak", "Your logging streak"),
        ("history", "Recent moods and assessments"),
        ("edit", "Change a logged mood"),
        ("delete", "Remove a logged mood"),
        ("user", "Switch user"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<10}[/cyan] {desc}")


def progress_bar(percent: float, color: str, width: int = 20) -> str:
    filled = int(percent / 100 * width)
    return f"[{color}]{'█' * filled}{'░' * (width - filled)}[/{color}]"


def render_session(session: BreathingSession) -> Panel:
    phase = session.current_phase
    color = session.phase_color
    lines = [
        f"[bold {color}]{phase.kind.capitalize()}[/bold {color}]  {session.remaining_seconds}s",
        f"[dim]{phase.instruction}[/dim]",
        "",
        f"Cycle {session.cycle_index + 1} of {session.pattern.total_cycles}  "
        f"{progress_bar(session.overall_progress, color)} {round(session.overall_progress)}% complete",
    ]
    if session.completed:
        lines += ["", f"[green]Exercise Complete! {session.completion_message}[/green]"]
    return Panel("\n".join(lines), title=session.pattern.name, border_style=color)


def run_breathing_session(session: BreathingSession, sleep=time.sleep) -> bool:
    """Drive the session once per TICK_SECONDS until it completes.

    Ctrl+C pauses the session and asks whether to resume, restart or stop.
    Returns True when the session ran to completion.
    """
    session.start()
    generation = session.generation
    with Live(render_session(session), console=console, refresh_per_second=4) as live:
        while not session.completed:
            try:
                sleep(TICK_SECONDS)
                session.tick(generation)
                live.update(render_session(session))
            except KeyboardInterrupt:
                session.pause()
                live.stop()
                choice = Prompt.ask("Paused", choices=["resume", "restart", "stop"], default="resume")
                if choice == "stop":
                    return False
                if choice == "restart":
                    session.reset()
                    generation = session.generation
                session.start()
                live.start()
    return True


def cmd_mood(db_path: str, user_id: str):
    console.print("\n[bold]How are you feeling?[/bold]")
    for value, label in MOOD_LABELS.items():
        console.print(f"  [cyan]{value}[/cyan]) {MOOD_EMOJI[value]} {label.replace('-', ' ').title()}")
    score = IntPrompt.ask("Mood", choices=[str(v) for v in MOOD_LABELS])
    note = Prompt.ask("Note [dim](optional)[/dim]", default="")
    tags = Prompt.ask("Tags, comma separated [dim](optional)[/dim]", default="")
    result = log_mood(db_path, user_id, score, note=note, tags=tags.split(","))
    count = result["streak_count"]
    color = get_streak_color(count)
    console.print(f"[green]Mood logged.[/green] Streak: [{color}]{count} day(s)[/{color}]")
    if result["milestone_crossed"]:
        console.print(Panel(
            f"[bold]{result['milestone']}-day streak![/bold]\n{get_streak_message(count)}",
            title="Milestone", border_style=color,
        ))
    for badge in result["new_badges"]:
        achievement = get_achievement(badge)
        console.print(f"[yellow]Achievement unlocked:[/yellow] [bold]{achievement.title}[/bold] ({achievement.description})")


def cmd_edit(db_path: str, user_id: str):
    mood_id = IntPrompt.ask("Mood log id")
    score = Prompt.ask("New mood 1-5 [dim](Enter to keep)[/dim]",
                       choices=[str(v) for v in MOOD_LABELS] + [""], default="", show_choices=False)
    note = Prompt.ask("New note [dim](Enter to keep)[/dim]", default="")
    tags = Prompt.ask("New tags, comma separated [dim](Enter to keep)[/dim]", default="")
    event = edit_mood(
        db_path, user_id, mood_id,
        score=int(score) if score else None,
        note=note or None,
        tags=tags.split(",") if tags else None,
    )
    console.print(f"[green]Updated.[/green] {MOOD_EMOJI[event.score]} {event.label}  {event.note}")


def cmd_delete(db_path: str, user_id: str):
    mood_id = IntPrompt.ask("Mood log id")
    if Confirm.ask(f"Delete mood log {mood_id}?", default=False):
        delete_mood(db_path, user_id, mood_id)
        console.print("[green]Deleted.[/green]")


def cmd_breathe(db_path: str):
    preferred = get_preferred_pattern(db_path)
    for i, pattern in enumerate(PATTERNS, 1):
        marker = " [dim](default)[/dim]" if pattern.name == preferred.name else ""
        console.print(f"  [cyan]{i}[/cyan]) [bold]{pattern.name}[/bold]{marker}: {pattern.description}")
    choice = IntPrompt.ask(
        "Pattern", choices=[str(i) for i in range(1, len(PATTERNS) + 1)],
        default=PATTERNS.index(preferred) + 1,
    )
    pattern = PATTERNS[choice - 1]
    set_preferred_pattern(db_path, pattern.name)
    session = BreathingSession(
        pattern,
        on_completed=lambda s: console.bell(),
    )
    console.print(f"[dim]{pattern.total_cycles} cycles, about {pattern.total_duration}s. Ctrl+C to pause.[/dim]")
    run_breathing_session(session)


def cmd_assess(db_path: str, user_id: str):
    quiz = create_stress_quiz(DEFAULT_QUESTION_COUNT)
    console.print(Panel(quiz.description, title=quiz.title))
    answers = {}
    for i, question in enumerate(quiz.questions, 1):
        console.print(f"\n[bold]Q{i}.[/bold] {question.text}")
        for n, (_, label) in enumerate(question.options, 1):
            console.print(f"  [cyan]{n}[/cyan]) {label}")
        pick = Prompt.ask("Answer [dim](Enter to skip)[/dim]",
                          choices=[str(n) for n in range(1, len(question.options) + 1)] + [""],
                          default="", show_choices=False)
        if pick:
            answers[question.id] = question.options[int(pick) - 1][0]
    result = complete_assessment(db_path, user_id, quiz, answers)
    band = result.band
    console.print(Panel(
        f"Score: [bold]{result.total_score}[/bold] out of {result.max_score}\n\n{band.description}",
        title=band.label, border_style=band.color or "blue",
    ))


def cmd_streak(db_path: str, user_id: str):
    count = get_current_streak(db_path, user_id)
    longest = get_longest_streak(db_path, user_id)
    color = get_streak_color(count)
    upcoming = next_milestone(count)
    body = f"[bold {color}]{count}[/bold {color}] day(s)\n{get_streak_message(count)}\n\nLongest: {longest}"
    if upcoming:
        body += f"  |  Next milestone: {upcoming} ({upcoming - count} to go)"
    badges = get_badges(db_path, user_id)
    if badges:
        body += "\nBadges: " + ", ".join(get_achievement(b).title for b in badges)
    console.print(Panel(body, title="Streak", border_style=color))


def cmd_history(db_path: str, user_id: str):
    summary = get_mood_summary(db_path, user_id)
    table = Table(title="Recent Moods")
    table.add_column("ID", justify="right")
    table.add_column("When")
    table.add_column("Mood")
    table.add_column("Note")
    for event in get_mood_history(db_path, user_id, limit=10):
        table.add_row(
            str(event.id),
            event.timestamp.strftime("%Y-%m-%d %H:%M"),
            f"{MOOD_EMOJI[event.score]} {event.label}",
            event.note,
        )
    console.print(table)
    console.print(f"  Entries: [bold]{summary['entries']}[/bold]  |  "
                  f"Average: [bold]{summary['average']}[/bold]  |  "
                  f"Days logged: [bold]{summary['days_logged']}[/bold]")

    assessments = get_assessment_history(db_path, user_id, limit=5)
    if assessments:
        table = Table(title="Stress Assessments")
        table.add_column("Completed")
        table.add_column("Score", justify="right")
        table.add_column("Level")
        for a in assessments:
            table.add_row(a["completed_at"][:16].replace("T", " "), f"{a['total_score']}/{a['max_score']}", a["level"])
        console.print(table)


def main():
    configure_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    user_id = get_current_user(db_path)

    show_welcome(user_id)

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="mood").strip().lower()
        try:
            if choice == "mood":
                cmd_mood(db_path, user_id)
            elif choice == "breathe":
                cmd_breathe(db_path)
            elif choice == "assess":
                cmd_assess(db_path, user_id)
            elif choice == "streak":
                cmd_streak(db_path, user_id)
            elif choice == "history":
                cmd_history(db_path, user_id)
            elif choice == "edit":
                cmd_edit(db_path, user_id)
            elif choice == "delete":
                cmd_delete(db_path, user_id)
            elif choice == "user":
                set_current_user(db_path, Prompt.ask("User id", default=user_id))
                user_id = get_current_user(db_path)
                console.print(f"[green]Now logging as {user_id}[/green]")
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Take care of yourself![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
