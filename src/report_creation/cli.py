"""report-creation CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from report_creation.compiler import compile_pdf
from report_creation.config import CompilerConfig
from report_creation.errors import CompilationError, ConfigurationError
from report_creation.validation import find_syntax_issues


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_path", metavar="INPUT.typ", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output PDF path. Defaults to the input path with a .pdf suffix.",
)
@click.option(
    "--font-path",
    "font_paths",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Extra directory to search for fonts (repeatable)",
)
@click.option("--check", is_flag=True, help="Check delimiter balance before compiling")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(input_path: Path, output: Path | None, font_paths: tuple[Path, ...], check: bool, verbose: bool) -> None:
    """Generate a PDF file from an existing Typst document."""
    configure_logging(verbose=verbose)
    source = input_path.read_text(encoding="utf-8")

    if check:
        issues = find_syntax_issues(source)
        if issues:
            details = "\n".join(f"{input_path}:{issue}" for issue in issues)
            raise click.ClickException(f"Syntax check failed:\n{details}")

    try:
        config = CompilerConfig.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    if font_paths:
        config = CompilerConfig(
            typst_binary=config.typst_binary,
            font_paths=config.font_paths + font_paths,
            timeout=config.timeout,
        )

    output_path = output or input_path.with_suffix(".pdf")
    try:
        pdf_bytes = compile_pdf(source, input_path, config=config)
    except CompilationError as exc:
        raise click.ClickException(str(exc)) from exc

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf_bytes)

    click.echo(f"PDF written to {output_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
