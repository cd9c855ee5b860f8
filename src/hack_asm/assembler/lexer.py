"""
Hack Assembly Language Lexer
============================

This module turns raw source lines into classified commands that the
pass controller can process. Hack assembly is strictly line oriented,
so instead of a token stream the lexer produces one Command per
non-blank line.

Line Cleaning
-------------
Every physical line is reduced before classification:

1. Everything from the first "//" to the end of the line is dropped.
2. All remaining whitespace is removed, including whitespace inside
   the instruction ("D = M ; JGT" becomes "D=M;JGT").
3. A line that reduces to nothing is skipped and does not count as an
   instruction.

Command Types
-------------
| First char | Type        | Example    | Fields           |
|------------|-------------|------------|------------------|
| @          | ADDRESS     | @21, @LOOP | symbol           |
| (          | LABEL       | (LOOP)     | symbol           |
| other      | COMPUTATION | D=D+A;JGT  | dest, comp, jump |

Example
-------
>>> from hack_asm.assembler.lexer import LineSource, Tokenizer
>>> source = LineSource.from_string("@2  // load two\\nD=A\\n")
>>> for command in Tokenizer(source):
...     print(command)
Command(ADDRESS, '@2', <input>:1:1)
Command(COMPUTATION, 'D=A', <input>:2:1)
"""

import hashlib
import io
import re
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Iterator, Optional, TextIO

from hack_asm.errors import (
    AssemblerError,
    AssemblySyntaxError,
    CommandTypeError,
    SourceLocation,
)


COMMENT_MARKER = "//"

_WHITESPACE = re.compile(r"\s+")
_DECIMAL = re.compile(r"\d+", re.ASCII)


# =============================================================================
# Command Type Enumeration
# =============================================================================

class CommandType(Enum):
    """
    The three shapes a Hack assembly line can take.

    Only ADDRESS and COMPUTATION commands produce a machine word.
    LABEL is a pseudo-command that binds a name to the address of the
    next real instruction.
    """
    ADDRESS = auto()      # @value or @symbol
    COMPUTATION = auto()  # [dest=]comp[;jump]
    LABEL = auto()        # (symbol)

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return {
            CommandType.ADDRESS: "address",
            CommandType.COMPUTATION: "computation",
            CommandType.LABEL: "label",
        }[self]


def strip_line(raw: str) -> str:
    """Remove the comment and all whitespace from a raw source line."""
    marker = raw.find(COMMENT_MARKER)
    if marker >= 0:
        raw = raw[:marker]
    return _WHITESPACE.sub("", raw)


def classify(text: str) -> CommandType:
    """Classify a stripped, non-empty line by its first character."""
    if text.startswith("@"):
        return CommandType.ADDRESS
    if text.startswith("("):
        return CommandType.LABEL
    return CommandType.COMPUTATION


def is_decimal(symbol: str) -> bool:
    """True if symbol is a decimal literal rather than a symbolic name."""
    return _DECIMAL.fullmatch(symbol) is not None


# =============================================================================
# Command Data Class
# =============================================================================

@dataclass(frozen=True)
class Command:
    """
    A single classified line of assembly source.

    Field accessors enforce the command type: asking a C-instruction for
    its symbol, or an A-instruction for its dest, raises CommandTypeError.

    Attributes:
        text: The line with comments and whitespace removed
        type: The CommandType classification
        location: Where the line appears in the source
        source_line: The raw line as written (for error messages)
    """
    text: str
    type: CommandType
    location: SourceLocation
    source_line: str = ""

    def __repr__(self) -> str:
        return f"Command({self.type.name}, {self.text!r}, {self.location})"

    @property
    def symbol(self) -> str:
        """The address literal or symbol of an A-instruction, or a label name."""
        if self.type == CommandType.ADDRESS:
            return self.text[1:]
        if self.type == CommandType.LABEL:
            return self.text[1:-1]
        raise CommandTypeError("symbol", str(self.type), self.text)

    @property
    def dest(self) -> Optional[str]:
        """Destination mnemonic, or None when the line has no '='."""
        self._require_computation("dest")
        if "=" not in self.text:
            return None
        return self.text.partition("=")[0]

    @property
    def comp(self) -> str:
        """Computation mnemonic: right of '=' (if any), left of ';' (if any)."""
        self._require_computation("comp")
        expression = self.text
        if "=" in expression:
            expression = expression.partition("=")[2]
        if ";" in expression:
            expression = expression.partition(";")[0]
        return expression

    @property
    def jump(self) -> Optional[str]:
        """Jump mnemonic, or None when the line has no ';'."""
        self._require_computation("jump")
        if ";" not in self.text:
            return None
        return self.text.partition(";")[2]

    def _require_computation(self, field: str) -> None:
        if self.type != CommandType.COMPUTATION:
            raise CommandTypeError(field, str(self.type), self.text)


# =============================================================================
# Line Source
# =============================================================================

class LineSource:
    """
    Rewindable supplier of raw source lines.

    The two assembly passes must observe exactly the same lines, so the
    source is rewound explicitly between them: seekable streams seek
    back to the start, and non-seekable streams opened from a path are
    re-opened. Each complete traversal records a SHA-256 digest of the
    lines it produced so the caller can verify both passes saw the same
    program.

    Usage:
        with LineSource.from_path("Prog.asm") as source:
            for number, line in source:
                ...
            source.rewind()

    Attributes:
        filename: Name used in error locations
    """

    def __init__(self, stream: TextIO, filename: str = "<input>",
                 path: Optional[Path] = None, owns_stream: bool = False):
        self._stream = stream
        self._path = path
        self._owns_stream = owns_stream
        self._digest: Optional[str] = None
        self.filename = filename

    @classmethod
    def from_path(cls, path: str | Path) -> "LineSource":
        """Open a source file for reading."""
        path = Path(path)
        stream = path.open("r", encoding="utf-8")
        return cls(stream, filename=str(path), path=path, owns_stream=True)

    @classmethod
    def from_string(cls, text: str, filename: str = "<input>") -> "LineSource":
        """Wrap in-memory source text."""
        return cls(io.StringIO(text), filename=filename, owns_stream=True)

    def __iter__(self) -> Iterator[tuple[int, str]]:
        """Yield (line_number, raw_line) pairs, line numbers 1-indexed."""
        digest = hashlib.sha256()
        self._digest = None
        for number, line in enumerate(self._stream, start=1):
            line = line.rstrip("\r\n")
            digest.update(line.encode("utf-8"))
            digest.update(b"\n")
            yield number, line
        self._digest = digest.hexdigest()

    @property
    def digest(self) -> Optional[str]:
        """Digest of the last complete traversal, or None."""
        return self._digest

    def rewind(self) -> None:
        """
        Reset the source so the next traversal starts at the first line.

        Raises:
            AssemblerError: If the stream cannot be rewound or re-opened
        """
        if self._stream.seekable():
            self._stream.seek(0)
            return

        if self._path is not None:
            if self._owns_stream:
                self._stream.close()
            self._stream = self._path.open("r", encoding="utf-8")
            self._owns_stream = True
            return

        raise AssemblerError(
            f"input '{self.filename}' cannot be rewound for the second pass",
            hint="assemble from a file or an in-memory string instead",
        )

    def close(self) -> None:
        """Close the underlying stream if this source opened it."""
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """
    Reads commands from a LineSource one at a time.

    The tokenizer only holds the current command; advancing discards it.
    Blank and comment-only lines are skipped.

    Usage:
        tokenizer = Tokenizer(source)
        while tokenizer.has_more_commands():
            command = tokenizer.advance()

    or simply:
        for command in Tokenizer(source):
            ...
    """

    def __init__(self, source: LineSource):
        self._source = source
        self._lines = iter(source)
        self._pending: Optional[Command] = None
        self._current: Optional[Command] = None

    @property
    def current(self) -> Optional[Command]:
        """The command made current by the last advance()."""
        return self._current

    def has_more_commands(self) -> bool:
        """Skip blank lines and report whether another command remains."""
        if self._pending is not None:
            return True

        for number, raw in self._lines:
            text = strip_line(raw)
            if not text:
                continue
            self._pending = self._make_command(number, raw, text)
            return True

        return False

    def advance(self) -> Command:
        """
        Make the next command current and return it.

        Raises:
            EOFError: If there are no more commands
        """
        if not self.has_more_commands():
            raise EOFError(f"no more commands in {self._source.filename}")
        self._current, self._pending = self._pending, None
        return self._current

    def __iter__(self) -> Iterator[Command]:
        while self.has_more_commands():
            yield self.advance()

    def _make_command(self, number: int, raw: str, text: str) -> Command:
        """Classify a stripped line and check its basic shape."""
        column = len(raw) - len(raw.lstrip()) + 1
        location = SourceLocation(self._source.filename, number, column)
        command = Command(text, classify(text), location, raw.strip())

        if command.type == CommandType.ADDRESS:
            if not command.symbol:
                raise AssemblySyntaxError(
                    "missing address after '@'",
                    location, source_line=command.source_line,
                )

        elif command.type == CommandType.LABEL:
            if not text.endswith(")"):
                raise AssemblySyntaxError(
                    f"unterminated label '{text}'",
                    location,
                    hint="label declarations have the form (NAME)",
                    source_line=command.source_line,
                )
            if not command.symbol:
                raise AssemblySyntaxError(
                    "empty label name",
                    location, source_line=command.source_line,
                )

        elif not command.comp:
            raise AssemblySyntaxError(
                f"missing computation in '{text}'",
                location,
                hint="computation instructions have the form dest=comp;jump",
                source_line=command.source_line,
            )

        return command
