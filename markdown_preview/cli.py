"""
Exports a Markdown file as a themed HTML preview.
Writes to the given output file, or to stdout when none is given.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import FOLD_KEY_STRATEGIES, THEME_NAMES, ConfigError, build_config
from .filesystem import normalize_filepath, read_markdown, write_html
from .renderer import MarkdownRenderer

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="markdown-preview")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the HTML to this file instead of stdout",
)
@click.option("--theme", type=click.Choice(THEME_NAMES, case_sensitive=False), help="Theme preset")
@click.option("--fragment", is_flag=True, help="Emit the body fragment without the document wrapper")
@click.option("--no-highlight", is_flag=True, help="Disable syntax highlighting in code blocks")
@click.option("--no-folding", is_flag=True, help="Disable code block fold controls")
@click.option("--fold-keys", type=click.Choice(FOLD_KEY_STRATEGIES), help="Code block id strategy")
@click.option("--max-input-chars", type=int, help="Truncate input after this many characters")
@click.option("-v", "--verbose", is_flag=True, help="Log rendering details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: str | None = None,
    theme: str | None = None,
    fragment: bool = False,
    no_highlight: bool = False,
    no_folding: bool = False,
    fold_keys: str | None = None,
    max_input_chars: int | None = None,
    verbose: bool = False,
):
    """
    Entry point for exporting a Markdown file to HTML.

    Args:
        filepath: Path to the Markdown file to export.
        output: Destination HTML file; stdout when omitted.
        theme: Theme preset overriding the configured one.
        fragment: Emit only the rendered body.
        no_highlight: Disable syntax highlighting.
        no_folding: Disable fold controls.
        fold_keys: Code block id strategy (`content` or `position`).
        max_input_chars: Override for the input size cap.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If the file cannot be read or the export cannot
            be written.

    Examples:
        markdown-preview README.md -o README.html --theme dark
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        source = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            source.parent,
            theme=theme,
            fold_keys=fold_keys,
            max_input_chars=max_input_chars,
            enable_syntax_highlight=False if no_highlight else None,
            enable_code_folding=False if no_folding else None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        markdown_text = read_markdown(source)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    renderer = MarkdownRenderer(config)
    html = renderer.render_fragment(markdown_text) if fragment else renderer.render(markdown_text)

    if output is None:
        click.echo(html, nl=False)
        return

    target = Path(output)
    try:
        write_html(target, html)
    except IOError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"Exported HTML to {target}", err=True)


if __name__ == "__main__":
    cli()
