"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblog.config import Settings, load_config
from mdblog.core.parse import parse_file
from mdblog.core.pipeline import load_posts, run_build


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory of posts")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    title: Annotated[Optional[str], typer.Option("--site-title", help="Site title for pages and index")] = None,
    bullets: Annotated[Optional[str], typer.Option("--bullets", help="Unordered list bullet characters, e.g. '-+*'")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress as well as warnings")] = False,
    ):
    """Render every post to HTML, copy its images, and write the index page."""
    _configure_logging(verbose)
    settings = _settings(overrides={"output_dir": out, "site_title": title, "bullets": bullets})
    output_dir = Path(settings.output_dir)
    try:
        results, copied = run_build(
            Path(path), output_dir, settings.site_title, settings.bullets,
            settings.asset_workers, settings.write_sidecar,
        )
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No markdown files found under {path}.")
        raise typer.Exit(1)
    for src, html_path in results:
        typer.echo(f"  {src} -> {html_path}")
    typer.echo(f"Built {len(results)} post(s) and copied {copied} asset(s) to {output_dir}/")


def render_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file")],
    meta: Annotated[bool, typer.Option("--meta", help="Also print metadata as JSON")] = False,
    bullets: Annotated[Optional[str], typer.Option("--bullets", help="Unordered list bullet characters")] = None,
    ):
    """Print the HTML body of a single post."""
    _configure_logging(False)
    settings = _settings(overrides={"bullets": bullets})
    try:
        doc = parse_file(path, settings.bullets)
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Failed to read {path}", e)
    typer.echo(doc.html_body)
    if meta:
        typer.echo(json.dumps(doc.metadata.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))


def list_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory of posts")],
    ):
    """List posts newest first as: date  slug  title."""
    _configure_logging(False)
    settings = _settings()
    try:
        posts = load_posts(Path(path), settings.bullets)
    except RuntimeError as e:
        _fail(str(e))
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for p in posts:
        published = p.document.metadata.publish_date
        typer.echo(f"{published.isoformat() if published else '----------'}  {p.slug}  {p.document.metadata.title}")
