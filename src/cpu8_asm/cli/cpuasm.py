"""
cpuasm - 8-bit CPU Assembler Command-Line Interface
===================================================

Usage Examples
--------------
Basic assembly:
    $ cpuasm program.asm program.out

With symbol file:
    $ cpuasm program.asm program.out -s program.sym

Verbose mode (debug log and hex dump on the terminal):
    $ cpuasm -v program.asm program.out
"""

from pathlib import Path
from typing import Optional
import logging

import click

from cpu8_asm import __version__
from cpu8_asm.assembler import Assembler
from cpu8_asm.assembler.image import format_hex_dump
from cpu8_asm.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
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
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="cpuasm")
def main(
    input_file: Path,
    output_file: Path,
    symbols: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble 8-bit CPU source code into a Logisim memory image.

    INPUT_FILE is the assembly source file (.asm) to assemble.
    OUTPUT_FILE receives the "v2.0 raw" memory image.

    \b
    Examples:
        cpuasm count.asm count.out
        cpuasm count.asm count.out -s count.sym
    """
    setup_logging(verbose)

    try:
        asm = Assembler()
        asm.assemble_file(input_file)

        # Nothing is written unless both passes succeeded
        asm.write_image(output_file)

        if symbols:
            try:
                asm.write_symbols(symbols)
            except OSError:
                # A failed run leaves no output behind
                output_file.unlink(missing_ok=True)
                raise
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        click.echo(f"Successfully assembled program ({asm.get_size()} bytes)")
        if verbose:
            click.echo()
            click.echo(format_hex_dump(asm.get_code()), nl=False)
            click.echo()
        click.echo(f"Wrote output to '{output_file}'.")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
