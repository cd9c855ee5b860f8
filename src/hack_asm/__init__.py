"""
Hack Assembler Toolchain
========================

This package provides an assembler for the Hack computer, the 16-bit
machine built in the "Nand to Tetris" course. It translates Hack
assembly (.asm) into Hack machine language (.hack): text files with one
16-character binary word per instruction.

Quick Start
-----------
Assemble a program:
    >>> from hack_asm import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm Max.hack

Version History
---------------
1.0.0 - Initial release with the two-pass assembler and hackasm CLI
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_asm.assembler import Assembler, SymbolTable, assemble, assemble_file
from hack_asm.errors import (
    HackError,
    SourceLocation,
    AssemblerError,
    AssemblySyntaxError,
    DuplicateLabelError,
    InvalidMnemonicError,
    AddressOverflowError,
    SourceChangedError,
    CommandTypeError,
    SymbolNotFoundError,
)

__all__ = [
    "__version__",
    "Assembler",
    "SymbolTable",
    "assemble",
    "assemble_file",
    "HackError",
    "SourceLocation",
    "AssemblerError",
    "AssemblySyntaxError",
    "DuplicateLabelError",
    "InvalidMnemonicError",
    "AddressOverflowError",
    "SourceChangedError",
    "CommandTypeError",
    "SymbolNotFoundError",
]
