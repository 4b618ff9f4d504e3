#!/usr/bin/env python3
"""
Command-line interface for saved résumés.

Commands:
    list    - List saved résumés, most recently updated first
    show    - Show one saved résumé as a markdown preview
    improve - Import a résumé file, improve it with the content service, and save it
    delete  - Delete a saved résumé
"""

from pathlib import Path
from typing import Optional

import typer

from vitae.contexts.content import ContentService, ResumeDocument
from vitae.contexts.content.logger import setup_content_logger
from vitae.contexts.editing.logger import setup_editing_logger
from vitae.contexts.rendering import format_document_markdown
from vitae.session import EditorSession
from vitae.utils.llm import get_provider
from vitae.utils.local_storage import LocalStorage
from vitae.utils.resume_records import RecordStoreError, ResumeRecordStore
from vitae.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="Manage saved résumés",
    invoke_without_command=True,
)

_db_path: Optional[Path] = None


@app.callback()
def main(
    ctx: typer.Context,
    db: Optional[Path] = typer.Option(None, "--db", help="SQLite file (default: VITAE_RECORDS_DB)"),
):
    """Show help by default when no command is provided."""
    global _db_path
    _db_path = db
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_store() -> ResumeRecordStore:
    try:
        return ResumeRecordStore(_db_path)
    except RecordStoreError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


@app.command("list")
def list_command(
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Show at most this many"),
):
    """List saved résumés, most recently updated first."""
    with _open_store() as store:
        records = store.list_by_recency(limit)

    if not records:
        typer.echo("No saved résumés")
        return

    typer.secho(f"\n{len(records)} saved résumé(s)", fg=typer.colors.BLUE, bold=True)
    for record in records:
        updated = format_timestamp(record.updated_at, relative=True)
        typer.echo(f"  {record.id}  {record.title:<35} {updated}")


@app.command("show")
def show_command(
    record_id: str = typer.Argument(..., help="Record id (see `list`)"),
    state_dir: Optional[Path] = typer.Option(None, "--state-dir", help="State directory"),
):
    """Render a saved résumé with the persisted theme and customization."""
    with _open_store() as store:
        session = EditorSession(storage=LocalStorage(state_dir), record_store=store)
        if not session.open_record(record_id):
            typer.secho(f"ERROR: {session.last_notification.message}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        record = store.get(record_id)

    typer.echo(f"Title:   {record.title}")
    typer.echo(f"Created: {format_timestamp(record.created_at)}")
    typer.echo(f"Updated: {format_timestamp(record.updated_at)}\n")
    typer.echo(format_document_markdown(session.render()))


@app.command("improve")
def improve_command(
    resume_file: Path = typer.Argument(..., help="Résumé file (.pdf, .docx, .txt, .md)"),
    title: Optional[str] = typer.Option(None, "--title", help="Record title (default: candidate name)"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="openai or anthropic (default: LLM_PROVIDER)"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model override"),
    state_dir: Optional[Path] = typer.Option(None, "--state-dir", help="State directory"),
):
    """
    Import a résumé file, improve it with the content service, and save it.

    Examples:\n

        $ manage_records.py improve ~/Downloads/resume.pdf

        $ manage_records.py improve resume.docx -p anthropic --title "Resume (improved)"
    """
    log_file = setup_content_logger(source_file=resume_file.name)

    try:
        content_service = ContentService(get_provider(provider, model))
    except ValueError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    with _open_store() as store:
        session = EditorSession(
            storage=LocalStorage(state_dir), content_service=content_service, record_store=store
        )
        text = session.import_file(resume_file)
        improvements = session.improve_resume(text) if text is not None else None
        record = session.save(title) if improvements is not None else None

    if record is None:
        typer.secho(f"ERROR: {session.last_notification.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho(f"\n✓ Saved '{record.title}' ({record.id})", fg=typer.colors.GREEN)
    for improvement in improvements:
        typer.echo(f"  • {improvement}")
    typer.echo(f"Log: {log_file}")


@app.command("delete")
def delete_command(
    record_id: str = typer.Argument(..., help="Record id (see `list`)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a saved résumé."""
    setup_editing_logger(record_id=record_id)
    with _open_store() as store:
        record = store.get(record_id)
        if record is None:
            typer.secho(f"ERROR: No saved résumé with id {record_id}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)

        name = ResumeDocument.from_dict(record.rendered_content).full_name or record.title
        if not yes:
            typer.confirm(f"Delete '{record.title}' ({name})?", abort=True)
        store.delete(record_id)

    typer.secho(f"✓ Deleted {record_id}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
