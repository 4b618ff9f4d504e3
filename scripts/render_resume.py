#!/usr/bin/env python3
"""
Render a résumé YAML file with the persisted theme and customization.

Usage:
    python scripts/render_resume.py preview data/jane_doe.yaml
    python scripts/render_resume.py html data/jane_doe.yaml -o outs/jane_doe.html
    python scripts/render_resume.py html data/jane_doe.yaml --theme minimal-classic
"""

from pathlib import Path
from typing import Optional

import typer

from vitae.contexts.content import ResumeDocument
from vitae.contexts.rendering import format_document_markdown
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.contexts.theming import UnknownThemeError
from vitae.session import EditorSession
from vitae.utils.local_storage import LocalStorage

app = typer.Typer(add_completion=False, help="Render a résumé YAML file.")


def _session(resume_yaml: Path, state_dir: Optional[Path], theme: Optional[str]) -> EditorSession:
    try:
        document = ResumeDocument.from_yaml(resume_yaml)
    except FileNotFoundError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    session = EditorSession(storage=LocalStorage(state_dir))
    session.load_document(document)
    if theme:
        try:
            session.select_theme(theme)
        except UnknownThemeError as e:
            typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
    return session


@app.command("preview")
def preview_command(
    resume_yaml: Path = typer.Argument(..., help="Résumé YAML file"),
    state_dir: Optional[Path] = typer.Option(None, "--state-dir", help="State directory"),
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Select this theme first"),
):
    """Print a markdown preview of the rendered résumé."""
    session = _session(resume_yaml, state_dir, theme)
    typer.echo(format_document_markdown(session.render()))


@app.command("html")
def html_command(
    resume_yaml: Path = typer.Argument(..., help="Résumé YAML file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output .html path"),
    state_dir: Optional[Path] = typer.Option(None, "--state-dir", help="State directory"),
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Select this theme first"),
):
    """Write the rendered résumé as a standalone HTML page."""
    log_file = setup_rendering_logger(resume=resume_yaml.stem)
    session = _session(resume_yaml, state_dir, theme)

    if output is None:
        output = resume_yaml.with_suffix(".html")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(session.render_html(), encoding="utf-8")

    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)
    typer.echo(f"Log: {log_file}")


if __name__ == "__main__":
    app()
