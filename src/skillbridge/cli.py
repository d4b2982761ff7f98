"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from skillbridge.config import load_config
from skillbridge.errors import FileReadError
from skillbridge.export.transcript import format_transcript, transcript_filename
from skillbridge.models.document import EXTENSION_MEDIA_TYPES, CandidateDocument
from skillbridge.models.session import Phase
from skillbridge.pipeline.gap_analyst import GapAnalyst
from skillbridge.pipeline.session import AnalysisSession, describe_error

app = typer.Typer(
    name="skillbridge",
    help="Resume gap analysis for a target job role",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _bullets(items: list[str]) -> str:
    return "\n".join(f"• {escape(item)}" for item in items) if items else "[dim](none)[/dim]"


@app.command()
def analyze(
    resume: Path = typer.Argument(help="Resume file (PDF/DOC/DOCX/TXT)"),
    role: str = typer.Option(..., "--role", "-r", help="Target job role, e.g. 'Data Scientist'"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the text transcript to this path"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Analyze a resume against a target role."""
    _configure_logging(verbose)
    config = load_config()

    try:
        document = CandidateDocument.from_path(resume)
    except FileReadError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    analyst = GapAnalyst(config.llm)
    session = AnalysisSession(analyst, limits=config.limits)
    for state in (session.select_document(document), session.set_role(role)):
        if state.issue is not None:
            console.print(f"[red]{escape(describe_error(state))}[/red]")
            raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Resume: {document.display_name} ({document.media_type}, {document.size_bytes} bytes)[/dim]")
        console.print(f"[dim]Target role: {role.strip()}[/dim]")
        console.print(f"[dim]Model: {config.llm.model}[/dim]")

    with console.status("Analyzing resume..."):
        state = asyncio.run(session.submit())

    if verbose:
        usage = analyst.token_summary()
        console.print(f"[dim]Tokens: {usage['input']} input, {usage['output']} output[/dim]")

    if state.phase is not Phase.SUCCESS:
        console.print(f"[red]{escape(describe_error(state))}[/red]")
        raise typer.Exit(1)

    result = state.result
    if as_json:
        console.print_json(json.dumps(result.model_dump()))
    else:
        console.print(Panel(escape(result.gap_summary), title=f"Gap Summary: {state.role.strip()}"))
        console.print(Panel(_bullets(result.missing_skills), title="Missing Skills"))
        console.print(Panel(_bullets(result.certifications), title="Recommended Certifications"))
        console.print(Panel(_bullets(result.learning_resources), title="Learning Resources"))

    if output is not None:
        if output.is_dir():
            output = output / transcript_filename(state.role)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(format_transcript(state.role, result), encoding="utf-8")
        console.print(f"[green]Transcript saved: {output}[/green]")


@app.command()
def formats() -> None:
    """Show the accepted resume formats and size limit."""
    for ext, media_type in EXTENSION_MEDIA_TYPES.items():
        console.print(f"  [bold]{ext}[/bold]: {media_type}")
    limits = load_config().limits
    console.print(f"[dim]Max size: {limits.max_file_size_bytes // (1024 * 1024)}MB[/dim]")


if __name__ == "__main__":
    app()
