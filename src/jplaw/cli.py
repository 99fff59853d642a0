import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional

import typer

from .citation.formatter import format_citation
from .citation.parser import parse_citation
from .citation.types import CitationFormat
from .config import DB_PATH, SEED_DIR

app = typer.Typer(add_completion=False)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _open_store(db: Path):
    from .core.store import LawStore
    try:
        return LawStore(db)
    except sqlite3.OperationalError as e:
        typer.echo(f"Cannot open database {db}: {e}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    """
    Japanese legislation citation toolkit.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def parse(citation: str = typer.Argument(..., help="Citation text")):
    """
    Parse a citation into its normalized form.
    """
    _echo_json(parse_citation(citation).to_dict())


@app.command("format")
def format_(
    citation: str = typer.Argument(..., help="Citation text"),
    style: str = typer.Option("full", help="full, short, pinpoint or japanese"),
):
    """
    Re-format a citation in another style.
    """
    if style not in {f.value for f in CitationFormat}:
        raise typer.BadParameter(f"Invalid style: {style}. Must be one of full, short, pinpoint, japanese.")
    parsed = parse_citation(citation)
    if not parsed.valid:
        typer.echo(parsed.error, err=True)
        raise typer.Exit(code=1)
    typer.echo(format_citation(parsed, style))


@app.command()
def validate(
    citation: str = typer.Argument(..., help="Citation text"),
    db: Path = typer.Option(DB_PATH, help="Path to SQLite database"),
):
    """
    Check that the cited statute and article exist in the database.
    """
    from .tools.validate_citation import validate_citation_tool
    with _open_store(db) as store:
        _echo_json(validate_citation_tool(store, citation))


@app.command()
def get_provision(
    document_id: str = typer.Argument(..., help="Statute ID, law number or title"),
    article: Optional[str] = typer.Option(None, help='Article ("17" or "第十七条")'),
    db: Path = typer.Option(DB_PATH, help="Path to SQLite database"),
):
    """
    Print a provision (or all provisions) of a statute.
    """
    from .tools.get_provision import get_provision_tool
    with _open_store(db) as store:
        _echo_json(get_provision_tool(store, document_id, article=article))


@app.command()
def sources(db: Path = typer.Option(DB_PATH, help="Path to SQLite database")):
    """
    Show data sources and database statistics.
    """
    from .tools.list_sources import list_sources_tool
    with _open_store(db) as store:
        _echo_json(list_sources_tool(store))


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name"),
    arguments: str = typer.Option("{}", "--args", help="Tool arguments as JSON"),
    db: Path = typer.Option(DB_PATH, help="Path to SQLite database"),
):
    """
    Invoke a registered tool the way a calling agent would.
    """
    from .tools.registry import call_tool
    try:
        args = json.loads(arguments)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"--args is not valid JSON: {e}")
    if not isinstance(args, dict):
        raise typer.BadParameter("--args must be a JSON object")

    with _open_store(db) as store:
        response = call_tool(store, name, args)
    _echo_json(response)
    if response.get("isError"):
        raise typer.Exit(code=1)


@app.command()
def build_db(
    seed_dir: Path = typer.Option(SEED_DIR, help="Directory of YAML seed files"),
    db: Path = typer.Option(DB_PATH, help="Output SQLite database"),
):
    """
    Build the SQLite database from seed files.
    """
    from .core.builder import DatabaseBuilder
    try:
        stats = DatabaseBuilder(seed_dir, db).build()
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    _echo_json(stats)


@app.command()
def ingest(
    seed_dir: Path = typer.Option(SEED_DIR, help="Directory to write YAML seed files"),
    targets: Optional[Path] = typer.Option(None, help="Path to targets.yaml (defaults to key laws)"),
):
    """
    Fetch laws from the e-Gov API and write seed files.
    """
    from .core.ingest import Ingester
    report = Ingester(seed_dir, targets).ingest()
    _echo_json(report)
    if report["failed"]:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
