"""
Hack Assembler - Main Interface
===============================

This module provides the Assembler class, the primary interface for
translating Hack assembly into Hack machine language. It runs the two
passes over a rewindable LineSource:

Pass 1 (Label Resolution)
-------------------------
- Count real instructions (A and C); labels do not count
- Bind each "(NAME)" to the number of instructions before it
- Reject a label declared twice

Pass 2 (Encoding)
-----------------
- Rewind the source and walk exactly the same lines again
- Resolve "@symbol" through the symbol table, allocating unknown
  symbols as variables from address 16 in first-use order
- Encode every A and C instruction as a 16-character binary word

Example Usage
-------------
>>> from hack_asm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string('''
...     @2
...     D=A
...     @3
...     D=D+A
...     @0
...     M=D
... ''')
['0000000000000010', '1110110000010000', '0000000000000011', '1110000010010000', '0000000000000000', '1110001100001000']
>>> asm.write_hack("Add.hack")
"""

import logging
from pathlib import Path
from typing import Optional

from hack_asm.assembler.codes import encode_address, encode_computation, WORD_SIZE
from hack_asm.assembler.lexer import Command, CommandType, LineSource, Tokenizer, is_decimal
from hack_asm.assembler.symbols import SymbolTable
from hack_asm.errors import DuplicateLabelError, SourceChangedError, SourceLocation


# First RAM address handed out to variables (after R0..R15)
VARIABLE_BASE_ADDRESS = 16


class Assembler:
    """
    Two-pass Hack assembler.

    Configuration is held by the instance, so two assemblers with
    different settings can run side by side.

    Attributes:
        strict: If True (default), unknown dest/comp/jump mnemonics are
                errors; if False, they encode as zeros
        verbose: If True, log every line and its machine word at DEBUG level
    """

    def __init__(self, strict: bool = True, verbose: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the assembler.

        Args:
            strict: Reject unknown mnemonics instead of encoding them as zeros
            verbose: Trace each line, its classification and machine code
            logger: Logger to trace to (default: this module's logger)
        """
        self.strict = strict
        self.verbose = verbose
        self._log = logger or logging.getLogger(__name__)
        self._symbols: Optional[SymbolTable] = None
        self._words: list[str] = []
        self._listing_lines: list[str] = []

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_source(self, source: LineSource) -> list[str]:
        """
        Assemble a program from a rewindable line source.

        The source is traversed once per pass and rewound in between.
        Both traversals must see identical content.

        Returns:
            The machine words, one per A or C instruction, in program order

        Raises:
            AssemblerError: On any error in the source; nothing is kept
        """
        self._symbols = None
        self._words = []
        self._listing_lines = []

        symbols = self.first_pass(source)
        first_digest = source.digest

        source.rewind()
        words = self.second_pass(source, symbols)

        if source.digest != first_digest:
            raise SourceChangedError(
                f"'{source.filename}' changed between the first and second pass"
            )

        self._symbols = symbols
        self._words = words

        if self.verbose:
            self._log.debug("Assembled %d instructions from %s", len(words), source.filename)
            self._log.debug("%s", symbols.format_table())

        return list(words)

    def assemble_string(self, text: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        Args:
            text: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The machine words
        """
        with LineSource.from_string(text, filename) as source:
            return self.assemble_source(source)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)

        if self.verbose:
            self._log.debug("Assembling %s", filepath)

        with LineSource.from_path(filepath) as source:
            return self.assemble_source(source)

    # =========================================================================
    # Pass 1: Label Resolution
    # =========================================================================

    def first_pass(self, source: LineSource) -> SymbolTable:
        """
        Build a symbol table holding the predefined symbols and all labels.

        A label's address is the number of A and C instructions before
        it. Variables are not allocated here.

        Raises:
            DuplicateLabelError: If a label is declared twice
        """
        symbols = SymbolTable()
        declared: dict[str, SourceLocation] = {}
        line_number = 0

        for command in Tokenizer(source):
            if command.type == CommandType.LABEL:
                name = command.symbol
                if symbols.contains(name):
                    raise DuplicateLabelError(
                        name,
                        location=command.location,
                        original_location=declared.get(name),
                        source_line=command.source_line,
                    )
                symbols.add_entry(name, line_number)
                declared[name] = command.location
                if self.verbose:
                    self._log.debug("%s: label %s = %d", command.location, name, line_number)
            else:
                line_number += 1

        return symbols

    # =========================================================================
    # Pass 2: Encoding
    # =========================================================================

    def second_pass(self, source: LineSource, symbols: SymbolTable) -> list[str]:
        """
        Encode every A and C instruction, allocating variables as found.

        Args:
            source: The same program seen by first_pass, already rewound
            symbols: Table from first_pass; extended with variables

        Returns:
            The machine words in program order
        """
        words: list[str] = []
        self._listing_lines = []
        variable_address = VARIABLE_BASE_ADDRESS

        for command in Tokenizer(source):
            if command.type == CommandType.LABEL:
                continue

            if command.type == CommandType.ADDRESS:
                address, variable_address = self._resolve_address(
                    command, symbols, variable_address
                )
                word = encode_address(address, command.location, command.source_line)
            else:
                word = encode_computation(
                    command.comp, command.dest, command.jump,
                    strict=self.strict,
                    location=command.location,
                    source_line=command.source_line,
                )

            assert len(word) == WORD_SIZE, f"{command.location}: '{word}' is not {WORD_SIZE} bits"

            if self.verbose:
                self._log.debug("%s: %-20s %s", command.location, command.text, word)

            self._listing_lines.append(
                f"{len(words):5d}  {word}  {command.location.line:4d}  {command.source_line}"
            )
            words.append(word)

        return words

    def _resolve_address(self, command: Command, symbols: SymbolTable,
                         variable_address: int) -> tuple[int, int]:
        """
        Resolve the target of an A-instruction.

        Returns:
            (address, next free variable address)
        """
        symbol = command.symbol
        if is_decimal(symbol):
            return int(symbol), variable_address

        if not symbols.contains(symbol):
            symbols.add_entry(symbol, variable_address)
            if self.verbose:
                self._log.debug("%s: variable %s = %d", command.location, symbol, variable_address)
            variable_address += 1

        return symbols.get_address(symbol), variable_address

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_words(self) -> list[str]:
        """Machine words from the last successful run."""
        return list(self._words)

    def get_symbols(self) -> Optional[SymbolTable]:
        """Symbol table from the last successful run, or None."""
        return self._symbols

    def get_output(self) -> str:
        """The .hack file contents: one newline-terminated word per line."""
        return "".join(f"{word}\n" for word in self._words)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Instruction address, machine word, source line number and
            source text for every emitted word, followed by the symbol table
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append(" Addr  Word              Line  Source")
        lines.append("-" * 60)
        lines.extend(self._listing_lines)
        if self._symbols is not None:
            lines.append("")
            lines.append(self._symbols.format_table())
        return "\n".join(lines) + "\n"

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the machine words to a .hack file.

        Any existing file is truncated.
        """
        with open(filepath, "w", newline="\n") as f:
            f.write(self.get_output())

        if self.verbose:
            self._log.debug("Wrote %d words to %s", len(self._words), filepath)

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        with open(filepath, "w") as f:
            f.write(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line, ascending address)
        """
        symbols = self._symbols or SymbolTable()
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for name, address in symbols.entries():
                f.write(f"{name} {address}\n")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(text: str, filename: str = "<input>", strict: bool = True) -> list[str]:
    """
    Convenience function to assemble source code.

    Returns:
        The machine words

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(strict=strict).assemble_string(text, filename)


def assemble_file(filepath: str | Path, strict: bool = True) -> list[str]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(strict=strict).assemble_file(filepath)
