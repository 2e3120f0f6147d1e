"""
slc - SimpleLang Compiler Command-Line Interface
================================================

This module implements the command-line interface for the SimpleLang
compiler.

Usage Examples
--------------
Compile input.sl in the current directory to output.asm:
    $ slc

Basic compilation (writes prog.asm):
    $ slc prog.sl

With output and symbol files:
    $ slc prog.sl -o prog.asm -s prog.sym

Show every token as it is scanned:
    $ slc --trace prog.sl
"""

import logging
from pathlib import Path
from typing import Optional

import click

from simplelang import __version__
from simplelang.cli.errors import handle_cli_exception
from simplelang.compiler import CompilerOptions, SimpleLangCompiler
from simplelang.emitter import DEFAULT_MAX_LINES
from simplelang.symbols import DEFAULT_BASE_ADDRESS, DEFAULT_MAX_VARIABLES

logger = logging.getLogger(__name__)

DEFAULT_INPUT = Path("input.sl")
DEFAULT_OUTPUT = Path("output.asm")


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output assembly file (default: input.asm, or output.asm without INPUT_FILE)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a symbol listing (name and address per line)",
)
@click.option(
    "--trace",
    is_flag=True,
    help="Print every token as it is scanned",
)
@click.option(
    "--max-vars",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_VARIABLES,
    show_default=True,
    help="Maximum number of distinct variables",
)
@click.option(
    "--max-lines",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_LINES,
    show_default=True,
    help="Maximum number of assembly lines",
)
@click.option(
    "--base-address",
    type=click.IntRange(min=0),
    default=DEFAULT_BASE_ADDRESS,
    show_default=True,
    help="Address of the first variable",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Suppress banner and success message",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (enables debug logging)",
)
@click.version_option(version=__version__, prog_name="slc")
def main(
    input_file: Optional[Path],
    output: Optional[Path],
    symbols: Optional[Path],
    trace: bool,
    max_vars: int,
    max_lines: int,
    base_address: int,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Compile SimpleLang source to accumulator-machine assembly.

    INPUT_FILE is the SimpleLang source file (default: input.sl).

    \b
    Examples:
        slc                          # input.sl -> output.asm
        slc prog.sl                  # Outputs prog.asm
        slc prog.sl -o out.asm       # Specify output file
        slc --trace prog.sl          # Print tokens while compiling
    """
    setup_logging(verbose)

    # Determine input and output filenames
    if input_file is None:
        input_file = DEFAULT_INPUT
        if output is None:
            output = DEFAULT_OUTPUT
    elif output is None:
        output = input_file.with_suffix(".asm")

    if not quiet:
        click.echo("SimpleLang Compiler")

    try:
        options = CompilerOptions(
            base_address=base_address,
            max_variables=max_vars,
            max_lines=max_lines,
        )
        compiler = SimpleLangCompiler(options)

        on_token = None
        if trace:
            on_token = lambda token: click.echo(token.trace_line())

        logger.debug(f"Compiling {input_file} -> {output}")
        result = compiler.compile_file(input_file, on_token=on_token)

        # Only a complete compilation reaches the output files
        output.write_text(result.assembly, encoding="utf-8")

        if symbols:
            symbols.write_text(result.symbol_listing(), encoding="utf-8")
            logger.debug(f"Wrote {len(result.symbols)} symbols to {symbols}")

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Variables: {len(result.symbols)}")
            click.echo(f"Labels: {result.label_count}")
            click.echo(f"Wrote {len(result.lines)} lines to {output}")

        if not quiet:
            click.echo(f"Compilation successful! Assembly written to {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
