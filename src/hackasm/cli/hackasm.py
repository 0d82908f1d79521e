"""
hackasm - Hack Assembler Command-Line Interface
===============================================

Usage Examples
--------------
Basic assembly (writes Max.hack next to the source):
    $ hackasm Max.asm

With output file:
    $ hackasm Max.asm -o out.hack

Generate listing and symbol files:
    $ hackasm Max.asm -l Max.lst -s Max.sym

Reject duplicate labels:
    $ hackasm --strict-labels Max.asm

Verbose mode (debug trace of every encoded instruction):
    $ hackasm -v Max.asm
"""

from pathlib import Path
from typing import Optional
import logging

import click

from hackasm import __version__
from hackasm.assembler import Assembler
from hackasm.cli.errors import handle_cli_exception
from hackasm.config import AssemblerConfig


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default="input.asm",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input file with .hack suffix)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--strict-labels/--no-strict-labels",
    default=None,
    help="Treat a label declared twice as an error. "
         "Default: first declaration wins (HACKASM_STRICT_LABELS).",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    strict_labels: Optional[bool],
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (default: input.asm).

    \b
    Examples:
        hackasm Max.asm              # Outputs Max.hack
        hackasm Max.asm -o out.hack  # Specify output file
        hackasm -l Max.lst Max.asm   # Also write a listing
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="debug: %(message)s")

    config = AssemblerConfig.from_env()
    if strict_labels is not None:
        config.strict_labels = strict_labels

    output_file = output if output is not None else input_file.with_suffix(config.output_suffix)

    asm = Assembler(config)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        code = asm.assemble_file(input_file)

        # Malformed lines are skipped, not fatal
        if asm.has_errors() or asm.get_warnings():
            click.echo(asm.get_error_report(), err=True)

        asm.write_hack(output_file)
        if verbose:
            click.echo(f"Wrote {len(code)} instructions to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(f"Assembly complete: {len(code)} instructions")
            click.echo(f"Defined {len(asm.get_symbols())} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
