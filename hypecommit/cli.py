"""
hypecommit: commit messages, hypedoc summaries and Jira context from the terminal.
"""

import signal
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import NoReturn, Optional, Sequence

import httpx
import pyperclip
import typer
from openai import OpenAIError
from rich import box as rich_box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from hypecommit import git
from hypecommit.box import print_box
from hypecommit.config import ConfigError, Settings, load_settings
from hypecommit.github import fetch_merged_pull_requests
from hypecommit.jira import JiraApi
from hypecommit.llm import generate_commit_message, make_client, summarize_pull_requests
from hypecommit.models import JiraIssue, PullRequest
from hypecommit.text import clean_commit_message

DEFAULT_WEEKS = 2

MESSAGES = {
    "rewrite_prompt": "🔄 Do you want to re-write the prompt?",
    "enter_custom_prompt": "✏️ Enter your custom prompt",
    "add_context": "📚 Do you want to add any context to the prompt?",
    "enter_extra_context": "📝 Enter your extra context",
    "add_jira_ticket": "🎫 Do you want to add a Jira ticket description?",
    "select_jira_ticket": "🔍 Select the Jira ticket to include (number, or none)",
    "enter_jira_ticket": "🔢 Enter the Jira ticket number",
}

app = typer.Typer(
    name="hypecommit",
    help="AI-written commit messages and hypedoc summaries.",
    add_completion=False,
)
console = Console()


# --- Helpers ---


def _fail(message: str, detail: object = None) -> NoReturn:
    """Print an error line and stop with exit code 1."""
    line = Text(message, style="red")
    if detail is not None:
        line.append(f" {detail}")
    console.print(line)
    raise typer.Exit(1)


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _debug(ctx: typer.Context, message: str) -> None:
    if ctx.obj["verbose"]:
        console.print(Text(message, style="dim"))


def ordinal(day: int) -> str:
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_merged_date(dt: datetime) -> str:
    """e.g. 3rd Feb 2024"""
    return f"{ordinal(dt.day)} {dt.strftime('%b %Y')}"


def parse_selection(answer: str, count: int) -> list[int]:
    """Turn "1,3-4" or "all" into zero-based indices. Raises ValueError on bad input."""
    answer = answer.strip().lower()
    if answer in ("all", "*"):
        return list(range(count))
    if answer in ("", "none"):
        return []

    indices: list[int] = []
    for token in answer.replace(" ", "").split(","):
        if not token:
            continue
        if "-" in token:
            start_s, end_s = token.split("-", 1)
            start, end = int(start_s), int(end_s)
        else:
            start = end = int(token)
        if start < 1 or end > count or start > end:
            raise ValueError(f"{token} is out of range 1-{count}")
        for number in range(start, end + 1):
            if number - 1 not in indices:
                indices.append(number - 1)
    return indices


def _jira_api(settings: Settings) -> JiraApi:
    settings.require("jira_username", "jira_api_key")
    return JiraApi(settings.jira_username, settings.jira_api_key, settings.jira_host)


def _fetch_ticket(settings: Settings, ticket_number: str) -> Optional[JiraIssue]:
    api = _jira_api(settings)
    try:
        return api.get_issue(ticket_number)
    finally:
        api.close()


def _fetch_user_tickets(settings: Settings, open_only: bool = True) -> list[JiraIssue]:
    api = _jira_api(settings)
    try:
        return api.get_user_issues(open_only=open_only)
    finally:
        api.close()


def print_tickets(issues: Sequence[JiraIssue]) -> None:
    table = Table(box=rich_box.SIMPLE, padding=(0, 1))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Summary", style="white")
    for number, issue in enumerate(issues, start=1):
        table.add_row(str(number), issue.key, issue.summary)
    console.print(table)


def _select_ticket(settings: Settings) -> Optional[JiraIssue]:
    """Pick one of the user's open tickets, or type a key when none are assigned."""
    issues = _fetch_user_tickets(settings)
    if not issues:
        ticket_number = typer.prompt(MESSAGES["enter_jira_ticket"]).strip()
        issue = _fetch_ticket(settings, ticket_number)
        if issue is None:
            console.print(Text(f"Jira ticket {ticket_number} not found, continuing without it.", style="yellow"))
        return issue

    print_tickets(issues)
    while True:
        answer = typer.prompt(MESSAGES["select_jira_ticket"], default="1")
        try:
            chosen = parse_selection(answer, len(issues))
        except ValueError as exc:
            console.print(Text(f"Invalid selection: {exc}", style="yellow"))
            continue
        if len(chosen) > 1:
            console.print(Text("Pick a single ticket.", style="yellow"))
            continue
        return issues[chosen[0]] if chosen else None


def _ask_prompt_extras(
    settings: Settings, ask_ticket: bool = True
) -> tuple[Optional[str], Optional[str], Optional[JiraIssue]]:
    """Interactive custom prompt, extra context and Jira ticket, in that order."""
    system_prompt = context = None
    issue = None
    if typer.confirm(MESSAGES["rewrite_prompt"], default=False):
        system_prompt = typer.prompt(MESSAGES["enter_custom_prompt"])
    if typer.confirm(MESSAGES["add_context"], default=False):
        context = typer.prompt(MESSAGES["enter_extra_context"])
    if ask_ticket and typer.confirm(MESSAGES["add_jira_ticket"], default=False):
        issue = _select_ticket(settings)
    return system_prompt, context, issue


def print_commit_message(message: str) -> None:
    console.print()
    console.print(Text("Commit message:", style="bold"))
    console.print(Text(message, style="green"))
    console.print()


def print_pull_requests(prs: Sequence[PullRequest]) -> None:
    table = Table(box=rich_box.SIMPLE, padding=(0, 1))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="white")
    table.add_column("Merged", style="cyan")
    for number, pr in enumerate(prs, start=1):
        table.add_row(str(number), pr.title, format_merged_date(pr.closed_at))
    console.print(table)


def _select_pull_requests(prs: Sequence[PullRequest]) -> list[PullRequest]:
    while True:
        answer = typer.prompt("Select PRs to fetch summaries for (e.g. 1,3-5, all, none)", default="all")
        try:
            return [prs[i] for i in parse_selection(answer, len(prs))]
        except ValueError as exc:
            console.print(Text(f"Invalid selection: {exc}", style="yellow"))


# --- Commands ---


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print diagnostic details"),
):
    """AI-written commit messages and hypedoc summaries."""
    ctx.obj = {"settings": load_settings(), "verbose": verbose}


@app.command()
def commit(
    ctx: typer.Context,
    repo_dir: Path = typer.Option(Path("."), "--dir", "-d", help="Directory of the git repository"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Commit without asking for confirmation"),
    ticket: Optional[str] = typer.Option(None, "--ticket", "-t", help="Jira ticket to give the model as context"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Override the OpenAI model"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="Extra context for the model"),
    system_prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="Replace the default instructions"),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Ask for a custom prompt, extra context and a Jira ticket"
    ),
):
    """Generate a Conventional Commits message for the staged changes and commit."""
    settings = _settings(ctx)
    model = model or settings.openai_model
    _debug(ctx, f"Repository: {repo_dir.resolve()}")

    try:
        diff = git.get_staged_diff(repo_dir)
        staged_files = git.get_staged_files(repo_dir)
    except git.GitError as exc:
        _fail("Error:", exc)

    if not diff.strip():
        console.print(Text("No staged changes found.", style="red"))
        return

    print_box(console, staged_files)
    _debug(ctx, f"{len(staged_files)} staged files, {len(diff)} characters of diff")

    issue = None
    if ticket:
        try:
            issue = _fetch_ticket(settings, ticket)
        except ConfigError as exc:
            _fail("Error:", exc)
        except httpx.HTTPError as exc:
            _fail(f"Failed to fetch Jira ticket {ticket}:", exc)
        if issue is None:
            console.print(Text(f"Jira ticket {ticket} not found, continuing without it.", style="yellow"))

    if interactive:
        try:
            asked_prompt, asked_context, asked_issue = _ask_prompt_extras(settings, ask_ticket=not ticket)
        except ConfigError as exc:
            _fail("Error:", exc)
        except httpx.HTTPError as exc:
            _fail("Failed to fetch Jira tickets:", exc)
        system_prompt = asked_prompt or system_prompt
        context = asked_context or context
        issue = asked_issue or issue

    _debug(ctx, f"Model: {model}")
    try:
        with make_client(settings) as client:
            with console.status("[blue]Generating commit message...[/blue]"):
                raw_message = generate_commit_message(client, model, diff, issue, context, system_prompt)
    except ConfigError as exc:
        _fail("Error:", exc)
    except OpenAIError as exc:
        _fail("Failed to generate commit message:", exc)
    console.print(Text("✔ Commit message generated", style="blue"))

    message = clean_commit_message(raw_message)
    if not message:
        _fail("The model returned an empty commit message.")
    print_commit_message(message)

    if not yes and not typer.confirm("Do you want to commit with the above message?", default=True):
        console.print(Text("Commit aborted by user.", style="yellow"))
        return

    try:
        git.commit_changes(repo_dir, message)
    except git.GitError as exc:
        _fail("Failed to commit changes:", exc)
    console.print(Text("Changes committed successfully.", style="green"))


@app.command()
def hypedoc(
    ctx: typer.Context,
    weeks: Optional[int] = typer.Option(None, "--weeks", "-w", help="How many weeks back to look for merged PRs"),
    select_all: bool = typer.Option(False, "--all", "-a", help="Summarise every PR without asking"),
    copy: bool = typer.Option(False, "--copy", "-c", help="Copy the summaries to the clipboard"),
):
    """Summarise your recently merged pull requests for your hypedoc."""
    settings = _settings(ctx)
    try:
        settings.require("openai_api_key", "github_username")
    except ConfigError as exc:
        _fail("Error:", exc)

    console.print(Text("Fetching merged PRs...", style="cyan"))
    if weeks is None:
        weeks = typer.prompt("How many weeks ago should PRs be fetched from?", default=DEFAULT_WEEKS, type=int)
    if weeks < 1:
        weeks = DEFAULT_WEEKS
    since = datetime.now(timezone.utc) - timedelta(weeks=weeks)
    _debug(ctx, f"Merged after {since.isoformat()}")

    try:
        with httpx.Client() as client:
            prs = fetch_merged_pull_requests(client, settings.github_username, since, settings.github_token)
    except httpx.HTTPError as exc:
        _fail("Failed to process PRs:", exc)

    console.print(Text(f"Found [{len(prs)}] pull requests...", style="blue"))
    if not prs:
        return
    print_pull_requests(prs)

    selected = list(prs) if select_all else _select_pull_requests(prs)
    if not selected:
        console.print(Text("No PRs selected for summarization.", style="yellow"))
        return

    try:
        with make_client(settings) as client:
            with console.status("[blue]Summarising pull requests...[/blue]"):
                summaries = summarize_pull_requests(client, settings.openai_model, selected)
    except OpenAIError as exc:
        _fail("Error executing command:", exc)

    console.print(Text("🚀 Hypedoc summaries generated:", style="green"))
    console.print()
    console.print(Text(summaries))

    if copy:
        try:
            pyperclip.copy(summaries)
        except pyperclip.PyperclipException as exc:
            console.print(Text(f"Could not copy to the clipboard: {exc}", style="yellow"))
        else:
            console.print(Text("📋 Copied to the clipboard.", style="green"))


@app.command()
def tickets(
    ctx: typer.Context,
    include_closed: bool = typer.Option(False, "--all", "-a", help="Include resolved tickets"),
):
    """List the Jira tickets assigned to you."""
    settings = _settings(ctx)
    try:
        issues = _fetch_user_tickets(settings, open_only=not include_closed)
    except ConfigError as exc:
        _fail("Error:", exc)
    except httpx.HTTPError as exc:
        _fail("Failed to fetch Jira tickets:", exc)

    if not issues:
        console.print(Text("No tickets assigned to you.", style="yellow"))
        return
    print_tickets(issues)


def _exit_gracefully(signum, frame) -> None:
    console.print(Text("\nExiting gracefully...", style="red"))
    sys.exit(0)


def main() -> None:
    signal.signal(signal.SIGINT, _exit_gracefully)
    app()


if __name__ == "__main__":
    main()
