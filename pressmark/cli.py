"""CLI entrypoints for inspecting themes and rendering individual pages."""

from pathlib import Path
from typing import Annotated, Iterator

import typer
from rich.console import Console
from rich.table import Table

from .content import ContentQuery, ContentQueryError, PublishingContext, SnapshotError, load_snapshot
from .content.models import Location
from .themes import DEFAULT_THEME_NAME, Theme, ThemeError, get_theme

console = Console()
app = typer.Typer(help="pressmark theme inspection toolkit.")

ThemeOption = Annotated[
    str,
    typer.Option("--theme", "-t", help="Name of the registered theme to use."),
]
SnapshotArgument = Annotated[
    Path,
    typer.Argument(help="YAML snapshot describing the site content."),
]


@app.command()
def theme(name: ThemeOption = DEFAULT_THEME_NAME) -> None:
    """Show the templates and assets a theme registers."""
    selected = _theme(name)
    table = Table(title=f"Theme '{selected.name}'")
    table.add_column("Entity")
    table.add_column("Template")
    for entity, method_name in selected.bindings():
        table.add_row(entity, method_name)
    console.print(table)
    for style in selected.assets.styles:
        console.print(f"[bold]stylesheet[/] {style}")


@app.command()
def pages(snapshot: SnapshotArgument) -> None:
    """List every location the snapshot produces, with its path."""
    context = _load(snapshot)
    table = Table(title=context.site.name)
    table.add_column("Kind")
    table.add_column("Path")
    table.add_column("Title")
    for location in iter_locations(context):
        table.add_row(type(location).__name__, context.path_for(location), location.title)
    console.print(table)


@app.command()
def render(
    snapshot: SnapshotArgument,
    path: Annotated[str, typer.Option("--path", "-p", help="Site path of the page to render.")] = "/",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the HTML to this file instead of stdout."),
    ] = None,
    theme_name: ThemeOption = DEFAULT_THEME_NAME,
) -> None:
    """Render one page of the snapshot."""
    context = _load(snapshot)
    selected = _theme(theme_name)
    location = find_location(context, path)
    if location is None:
        console.print(f"[bold red]No page found at[/] {path}")
        raise typer.Exit(code=1)

    try:
        document = selected.render(location, context)
    except (ContentQueryError, ThemeError) as exc:
        console.print(f"[bold red]Render failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    if document is None:
        console.print(f"[yellow]Theme '{selected.name}' skips {path}[/]")
        raise typer.Exit(code=1)

    html_text = document.render()
    if output is None:
        typer.echo(html_text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html_text + "\n", encoding="utf-8")
    console.print(f"[bold green]Wrote[/] {output}")


def iter_locations(context: ContentQuery) -> Iterator[Location]:
    """Yield every renderable location in a stable order."""
    yield context.index
    for section in context.sections():
        yield section
        yield from context.items(section)
    yield from context.pages()
    yield context.tag_list_page()
    for tag in sorted(context.all_tags()):
        yield context.tag_details_page(tag)


def find_location(context: ContentQuery, path: str) -> Location | None:
    wanted = _normalize_path(path)
    for location in iter_locations(context):
        if _normalize_path(context.path_for(location)) == wanted:
            return location
    return None


def _normalize_path(value: str) -> str:
    return "/" + value.strip().strip("/")


def _theme(name: str) -> Theme:
    try:
        return get_theme(name)
    except ThemeError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _load(path: Path) -> PublishingContext:
    try:
        return load_snapshot(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Snapshot file not found: {path}") from exc
    except SnapshotError as exc:
        raise typer.BadParameter(str(exc)) from exc


def main() -> None:  # pragma: no cover - console script entrypoint
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
