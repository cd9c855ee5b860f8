"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack
assembler.

Usage Examples
--------------
Basic assembly:
    $ hackasm Max.asm Max.hack

Also write the symbol table and a listing:
    $ hackasm Max.asm Max.hack -s Max.sym -l Max.lst

Trace every line while assembling:
    $ hackasm -v Max.asm Max.hack

Exactly two positional arguments are required. With any other number
the usage line is printed and nothing else happens.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hack_asm import __version__
from hack_asm.assembler import Assembler
from hack_asm.cli.errors import handle_cli_exception


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the final symbol table to this file",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write an assembly listing to this file",
)
@click.option(
    "--strict/--permissive",
    default=True,
    help="Reject unknown dest/comp/jump mnemonics (default), or encode "
         "them as zero bits like the original Hack tools.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Log every line, its classification and machine code",
)
@click.version_option(version=__version__, prog_name="hackasm")
@click.pass_context
def main(
    ctx: click.Context,
    files: tuple[Path, ...],
    symbols: Optional[Path],
    listing: Optional[Path],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly into Hack machine language.

    INPUT is the assembly source (.asm). OUTPUT is the machine code file
    (.hack) to create; an existing file is overwritten. The output is
    only written once both passes have succeeded.

    \b
    Examples:
        hackasm Max.asm Max.hack
        hackasm -s Max.sym Max.asm Max.hack
    """
    if len(files) != 2:
        click.echo(f"Usage: {ctx.command_path} [OPTIONS] INPUT OUTPUT")
        return

    input_file, output_file = files

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    asm = Assembler(strict=strict, verbose=verbose)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        words = asm.assemble_file(input_file)
        asm.write_hack(output_file)

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if verbose:
            click.echo(f"Wrote {len(words)} instructions to {output_file}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
