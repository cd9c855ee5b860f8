"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
├── AssemblerError (problems in the assembly source)
│   ├── AssemblySyntaxError - malformed line
│   ├── DuplicateLabelError - label declared more than once
│   ├── InvalidMnemonicError - unknown dest/comp/jump mnemonic
│   ├── AddressOverflowError - address does not fit in 15 bits
│   └── SourceChangedError - input changed between the two passes
├── CommandTypeError - field requested from the wrong kind of line
└── SymbolNotFoundError - lookup of an unbound symbol

Assembly errors are fatal: the first one aborts the run and no output
is produced.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Physical line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for errors found in assembly source.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:12:1: error: duplicate label 'LOOP'
                (LOOP)
                ^
            hint: 'LOOP' was first declared at Max.asm:4:1
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Malformed line in assembly source.

    Examples:
        - "@" with nothing after it
        - "(LOOP" without the closing parenthesis
        - "()" with an empty label name
        - "D=" with an empty computation
    """
    pass


class DuplicateLabelError(AssemblerError):
    """
    Label declared more than once.

    Raised during the first pass. Labels are bound exactly once, so a
    second "(NAME)" declaration aborts assembly before any output is
    produced.
    """

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{label}' was first declared at {original_location}"

        super().__init__(
            f"duplicate label '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidMnemonicError(AssemblerError):
    """
    Unknown dest, comp or jump mnemonic in a computation instruction.

    Only raised in strict mode. In permissive mode unknown mnemonics
    encode as all-zero bits instead.
    """

    def __init__(
        self,
        kind: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar: Optional[list[str]] = None,
    ):
        self.kind = kind
        self.mnemonic = mnemonic
        self.similar = similar or []

        hint = None
        if self.similar:
            suggestions = ", ".join(f"'{s}'" for s in self.similar[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown {kind} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressOverflowError(AssemblerError):
    """
    Address that does not fit in the 15-bit field of an A-instruction.

    Valid addresses are 0 to 32767. Larger values are rejected rather
    than truncated.
    """

    def __init__(
        self,
        value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        super().__init__(
            f"address {value} out of range (0 to 32767)",
            location=location,
            hint="A-instructions hold a 15-bit unsigned address",
            source_line=source_line,
        )


class SourceChangedError(AssemblerError):
    """
    The input produced different lines in the second pass than in the first.

    Label addresses computed in pass one are only valid if pass two sees
    exactly the same program.
    """
    pass


# =============================================================================
# Contract Violations
# =============================================================================

class CommandTypeError(HackError, TypeError):
    """
    A field was requested from the wrong kind of command.

    Asking for dest/comp/jump on an A-instruction or label, or for the
    symbol of a C-instruction, is a defect in the caller rather than a
    problem with the assembly source.
    """

    def __init__(self, field: str, command_type: str, text: str):
        self.field = field
        self.command_type = command_type
        self.text = text
        super().__init__(
            f"'{field}' is not available on {command_type} command '{text}'"
        )


class SymbolNotFoundError(HackError, LookupError):
    """Lookup of a symbol that has not been bound."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"symbol '{symbol}' is not in the symbol table")
