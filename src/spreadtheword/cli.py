"""Command-line interface for spreadtheword."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from spreadtheword.errors import ConfigurationError
from spreadtheword.generator import Changelog, ChangelogGenerator
from spreadtheword.log_config import configure_logging
from spreadtheword.models import ChangelogConfig, Settings
from spreadtheword.models.config import DEFAULT_TITLE

app = typer.Typer(
    name="spreadtheword",
    help="Turn git history into release notes grouped by GitLab issue and Wrike task",
    add_completion=False,
)
console = Console()


@app.callback()
def main() -> None:
    """Release notes from git history, grouped by GitLab issue and Wrike task."""


def _print_summary(changelog: Changelog) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Topic", style="cyan")
    table.add_column("Origin", style="blue")
    table.add_column("Title", style="white")
    table.add_column("Commits", justify="right", style="yellow")

    for topic in changelog.topics:
        table.add_row(
            topic.identifier or "-",
            topic.origin.value,
            topic.title[:60],
            str(len(topic.entries)),
        )

    console.print(f"\n[bold]{changelog.title}[/bold] [dim]by {changelog.author}[/dim]")
    console.print(table)


@app.command()
def generate(
    projects: Optional[List[Path]] = typer.Argument(None, help="Project checkouts (default: current directory)"),
    since: Optional[str] = typer.Option(None, "--since", "-s", help="Only commits after this revision"),
    title: str = typer.Option(DEFAULT_TITLE, "--title", "-t", help="Document title"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Document author (default: git user.name)"),
    gitlab_endpoint: Optional[str] = typer.Option(None, "--gitlab-endpoint", envvar="SPREADTHEWORD_GITLAB_ENDPOINT", help="GitLab API endpoint"),
    gitlab_token: Optional[str] = typer.Option(None, "--gitlab-token", envvar="SPREADTHEWORD_GITLAB_TOKEN", help="GitLab private token"),
    wrike_token: Optional[str] = typer.Option(None, "--wrike-token", envvar="SPREADTHEWORD_WRIKE_TOKEN", help="Wrike access token"),
    google_translate_key: Optional[str] = typer.Option(None, "--google-translate-key", envvar="SPREADTHEWORD_GOOGLE_TRANSLATE_KEY", help="Google Translate API key"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write topics as JSON to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Collect commits, resolve their tracker references and group them into topics."""
    overrides = {
        "gitlab_endpoint": gitlab_endpoint,
        "gitlab_token": gitlab_token,
        "wrike_token": wrike_token,
        "google_translate_key": google_translate_key,
    }
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    configure_logging("DEBUG" if verbose else settings.log_level)

    config = ChangelogConfig(
        projects=projects or [],
        since=since,
        title=title,
        author=author,
    )

    try:
        generator = ChangelogGenerator(config, settings)
        changelog = generator.run()
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _print_summary(changelog)

    if verbose:
        for name, stats in generator.get_stats().items():
            console.print(
                f"[bold]{name} cache:[/bold] {stats['hits']} hits, "
                f"{stats['misses']} misses ({stats['hit_rate']})"
            )

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(changelog.to_dict(), f, indent=2, ensure_ascii=False, default=str)
        console.print(f"[bold green]✓[/bold green] Saved to {output}")


if __name__ == "__main__":
    app()
