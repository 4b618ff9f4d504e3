#!/usr/bin/env python3
"""
Browse the theme catalog.

Usage:
    python scripts/themes.py list
    python scripts/themes.py show executive-elite
"""

from dataclasses import asdict

import typer

from vitae.contexts.theming import DEFAULT_THEME_ID, UnknownThemeError, get_theme, list_themes

app = typer.Typer(add_completion=False, help="Browse the résumé theme catalog.")


@app.command("list")
def list_command():
    """List every theme in catalog order."""
    for theme in list_themes():
        marker = "*" if theme.id == DEFAULT_THEME_ID else " "
        premium = " [premium]" if theme.is_premium else ""
        typer.echo(f"{marker} {theme.id:<22} {theme.name}{premium}")
        typer.echo(f"    {theme.description}")


@app.command("show")
def show_command(
    theme_id: str = typer.Argument(..., help="Theme id (see `themes.py list`)"),
):
    """Show every style value of one theme."""
    try:
        theme = get_theme(theme_id)
    except UnknownThemeError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho(f"\n{theme.name} ({theme.id})", fg=typer.colors.BLUE, bold=True)
    typer.echo(theme.description)
    typer.echo(f"\nfont_family: {theme.font_family}")
    for group in ("header_style", "section_style", "body_style", "colors"):
        typer.echo(f"\n=== {group} ===")
        for key, value in asdict(getattr(theme, group)).items():
            typer.echo(f"  {key}: {value!r}")


if __name__ == "__main__":
    app()
