#!/usr/bin/env python3
"""
Inspect and change the persisted résumé customization.

Every setting changed here becomes an explicit override: it wins over the
selected theme's value until `reset`.

Commands:
    show        - Show theme, resolved style, sections and overrides
    typography  - Set font family, sizes, line height, letter spacing
    layout      - Set page margin and spacings
    density     - Apply a density preset (compact, balanced, spacious)
    color       - Set the accent color (preset name or CSS color)
    header      - Set contact toggles, alignment, separator
    skills      - Set the skills display style
    toggle      - Show/hide a section
    move        - Move a section to another position
    title       - Set (or clear) a section's custom title
    theme       - Select a theme
    reset       - Restore default customization
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

import typer

from vitae.contexts.theming import (
    CustomizationStore,
    CustomizationValidationError,
    ThemeSelectionStore,
    UnknownThemeError,
    resolve_style,
)
from vitae.contexts.theming.customization_data_structure import ACCENT_COLOR_PRESETS
from vitae.contexts.theming.logger import setup_theming_logger
from vitae.utils.local_storage import LocalStorage

app = typer.Typer(
    add_completion=False,
    help="Inspect and change résumé customization",
    invoke_without_command=True,
)

_state_dir: Optional[Path] = None


@app.callback()
def main(
    ctx: typer.Context,
    state_dir: Optional[Path] = typer.Option(
        None, "--state-dir", help="State directory (default: VITAE_STATE_PATH)"
    ),
):
    """Show help by default when no command is provided."""
    global _state_dir
    _state_dir = state_dir
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _storage() -> LocalStorage:
    return LocalStorage(_state_dir)


def _apply(change: Callable[[], Any]) -> None:
    """Run a store change, turning validation errors into a CLI error."""
    setup_theming_logger(state_dir=str(_storage().state_dir))
    try:
        change()
    except (CustomizationValidationError, UnknownThemeError) as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.secho("✓ Saved", fg=typer.colors.GREEN)


def _given(**options: Any) -> Dict[str, Any]:
    """Keep only the options that were passed."""
    partial = {key: value for key, value in options.items() if value is not None}
    if not partial:
        typer.secho("Nothing to change (pass at least one option)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(1)
    return partial


@app.command("show")
def show_command():
    """Show the selected theme, the resolved style, sections and overrides."""
    storage = _storage()
    store = CustomizationStore(storage)
    theme = ThemeSelectionStore(storage).theme
    style = resolve_style(theme, store.customization, store.flags)

    typer.secho(f"\nTheme: {theme.name} ({theme.id})", fg=typer.colors.BLUE, bold=True)

    typer.echo("\n=== Resolved style ===")
    for key, value in style.to_dict().items():
        typer.echo(f"  {key}: {value!r}")

    typer.echo("\n=== Sections ===")
    for section in store.ordered_sections():
        shown = "✓" if section.visible else "·"
        mode = "bullets" if section.use_bullets else "paragraph"
        limit = f", max {section.bullet_limit}" if section.bullet_limit else ""
        typer.echo(f"  {section.order}. {shown} {section.id:<15} {section.display_title} ({mode}{limit})")

    typer.echo("\n=== Overrides ===")
    overridden = store.flags.overridden()
    if not overridden:
        typer.echo("  None (theme values apply)")
    for record_name, keys in overridden.items():
        typer.echo(f"  {record_name}: {', '.join(keys)}")


@app.command("typography")
def typography_command(
    font: Optional[str] = typer.Option(None, "--font", help="Font family id (e.g. inter, georgia)"),
    name_size: Optional[float] = typer.Option(None, "--name-size", help="Name font size (px)"),
    section_size: Optional[float] = typer.Option(None, "--section-size", help="Section title size (px)"),
    body_size: Optional[float] = typer.Option(None, "--body-size", help="Body font size (px)"),
    line_height: Optional[float] = typer.Option(None, "--line-height", help="Line height ratio"),
    letter_spacing: Optional[float] = typer.Option(None, "--letter-spacing", help="Letter spacing (em)"),
):
    """Set typography settings."""
    partial = _given(
        font_family=font,
        name_font_size=name_size,
        section_header_font_size=section_size,
        body_font_size=body_size,
        line_height=line_height,
        letter_spacing=letter_spacing,
    )
    store = CustomizationStore(_storage())
    _apply(lambda: store.update_typography(**partial))


@app.command("layout")
def layout_command(
    margin: Optional[float] = typer.Option(None, "--margin", help="Page margin (mm)"),
    section_spacing: Optional[float] = typer.Option(None, "--section-spacing", help="Section spacing (rem)"),
    bullet_spacing: Optional[float] = typer.Option(None, "--bullet-spacing", help="Bullet spacing (rem)"),
):
    """Set layout spacing."""
    partial = _given(page_margin=margin, section_spacing=section_spacing, bullet_spacing=bullet_spacing)
    store = CustomizationStore(_storage())
    _apply(lambda: store.update_layout(**partial))


@app.command("density")
def density_command(
    preset: str = typer.Argument(..., help="compact, balanced or spacious"),
):
    """Apply a density preset to margin and spacings."""
    store = CustomizationStore(_storage())
    _apply(lambda: store.set_density_preset(preset))


@app.command("color")
def color_command(
    color: str = typer.Argument(..., help=f"Preset ({', '.join(ACCENT_COLOR_PRESETS)}) or CSS color"),
):
    """Set the accent color."""
    value = ACCENT_COLOR_PRESETS.get(color.capitalize(), color)
    store = CustomizationStore(_storage())
    _apply(lambda: store.update_colors(accent_color=value))


@app.command("header")
def header_command(
    email: Optional[bool] = typer.Option(None, "--email/--no-email", help="Show email"),
    phone: Optional[bool] = typer.Option(None, "--phone/--no-phone", help="Show phone"),
    location: Optional[bool] = typer.Option(None, "--location/--no-location", help="Show location"),
    linkedin: Optional[bool] = typer.Option(None, "--linkedin/--no-linkedin", help="Show LinkedIn"),
    portfolio: Optional[bool] = typer.Option(None, "--portfolio/--no-portfolio", help="Show portfolio"),
    alignment: Optional[str] = typer.Option(None, "--align", help="left or center"),
    separator: Optional[str] = typer.Option(None, "--separator", help="dot, line or space"),
):
    """Set header contact toggles, alignment and separator."""
    partial = _given(
        show_email=email,
        show_phone=phone,
        show_location=location,
        show_linkedin=linkedin,
        show_portfolio=portfolio,
        alignment=alignment,
        separator_style=separator,
    )
    store = CustomizationStore(_storage())
    _apply(lambda: store.update_header(**partial))


@app.command("skills")
def skills_command(
    style: str = typer.Argument(..., help="comma, grouped or bullets"),
):
    """Set how skills are displayed."""
    store = CustomizationStore(_storage())
    _apply(lambda: store.update_skills(display_style=style))


@app.command("toggle")
def toggle_command(
    section_id: str = typer.Argument(..., help="Section id (e.g. projects)"),
):
    """Show or hide a section."""
    store = CustomizationStore(_storage())
    _apply(lambda: store.toggle_section_visibility(section_id))


@app.command("move")
def move_command(
    from_index: int = typer.Argument(..., help="Current position (0-based)"),
    to_index: int = typer.Argument(..., help="New position (0-based)"),
):
    """Move a section from one position to another."""
    store = CustomizationStore(_storage())
    _apply(lambda: store.reorder_sections(from_index, to_index))


@app.command("title")
def title_command(
    section_id: str = typer.Argument(..., help="Section id"),
    title: str = typer.Argument("", help="Custom title; omit to restore the default"),
):
    """Set or clear a section's custom title."""
    store = CustomizationStore(_storage())
    _apply(lambda: store.update_section_title(section_id, title))


@app.command("theme")
def theme_command(
    theme_id: str = typer.Argument(..., help="Theme id (see scripts/themes.py list)"),
):
    """Select the active theme."""
    selection = ThemeSelectionStore(_storage())
    _apply(lambda: selection.select(theme_id))


@app.command("reset")
def reset_command(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Restore default customization and clear all overrides."""
    if not yes:
        typer.confirm("Reset all customization to defaults?", abort=True)
    store = CustomizationStore(_storage())
    _apply(store.reset_to_defaults)


if __name__ == "__main__":
    app()
