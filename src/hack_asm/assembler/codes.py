"""
Hack Instruction Encoding
=========================

This module defines the Hack machine-language bit fields and the
functions that turn assembly mnemonics into 16-bit instruction words.

Instruction Formats
-------------------
A-instruction (address):

    0 vvvvvvvvvvvvvvv
    |  15-bit unsigned address

C-instruction (computation):

    1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
    |  |  | |-- comp ------| |- dest -| |- jump -|
    |  unused (set to 1)
    opcode

Field Tables
------------
dest (d1 d2 d3 = A D M):

| Mnemonic | Bits | Stores to            |
|----------|------|----------------------|
| null     | 000  | nowhere              |
| M        | 001  | RAM[A]               |
| D        | 010  | D register           |
| MD       | 011  | RAM[A] and D         |
| A        | 100  | A register           |
| AM       | 101  | A and RAM[A]         |
| AD       | 110  | A and D              |
| AMD      | 111  | A, D and RAM[A]      |

jump (j1 j2 j3 = out<0, out=0, out>0):

| Mnemonic | Bits | Condition        |
|----------|------|------------------|
| null     | 000  | no jump          |
| JGT      | 001  | out > 0          |
| JEQ      | 010  | out == 0         |
| JGE      | 011  | out >= 0         |
| JLT      | 100  | out < 0          |
| JNE      | 101  | out != 0         |
| JLE      | 110  | out <= 0         |
| JMP      | 111  | always           |

comp: the leading "a" bit selects the A register (0) or RAM[A] (1) as
the ALU's second operand, so every M form shares the ALU control bits
of its A counterpart.

Strict and Permissive Modes
---------------------------
In strict mode (the default) an unknown mnemonic raises
InvalidMnemonicError. In permissive mode it encodes as all zeros, which
is how the original Hack toolchains behaved.
"""

from enum import Enum
from typing import Optional

from hack_asm.errors import (
    AddressOverflowError,
    InvalidMnemonicError,
    SourceLocation,
)


WORD_SIZE = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1  # 32767

A_INSTRUCTION_PREFIX = "0"
C_INSTRUCTION_PREFIX = "111"


# =============================================================================
# Field Enumerations
# =============================================================================

class Dest(Enum):
    """Destination field (3 bits, ordered A D M)."""
    NULL = "000"
    M = "001"
    D = "010"
    MD = "011"
    A = "100"
    AM = "101"
    AD = "110"
    AMD = "111"


class Jump(Enum):
    """Jump field (3 bits)."""
    NULL = "000"
    JGT = "001"
    JEQ = "010"
    JGE = "011"
    JLT = "100"
    JNE = "101"
    JLE = "110"
    JMP = "111"


class Comp(Enum):
    """
    Computation field (7 bits: a c1 c2 c3 c4 c5 c6).

    Member names spell out the operation since mnemonics such as "D+1"
    are not valid identifiers. COMP_MNEMONICS maps the source spelling.
    """
    # a = 0: operate on A
    ZERO = "0101010"
    ONE = "0111111"
    MINUS_ONE = "0111010"
    D = "0001100"
    A = "0110000"
    NOT_D = "0001101"
    NOT_A = "0110001"
    NEG_D = "0001111"
    NEG_A = "0110011"
    D_PLUS_1 = "0011111"
    A_PLUS_1 = "0110111"
    D_MINUS_1 = "0001110"
    A_MINUS_1 = "0110010"
    D_PLUS_A = "0000010"
    D_MINUS_A = "0010011"
    A_MINUS_D = "0000111"
    D_AND_A = "0000000"
    D_OR_A = "0010101"

    # a = 1: operate on M (RAM[A])
    M = "1110000"
    NOT_M = "1110001"
    NEG_M = "1110011"
    M_PLUS_1 = "1110111"
    M_MINUS_1 = "1110010"
    D_PLUS_M = "1000010"
    D_MINUS_M = "1010011"
    M_MINUS_D = "1000111"
    D_AND_M = "1000000"
    D_OR_M = "1010101"

    @property
    def uses_memory(self) -> bool:
        """True if the a bit selects RAM[A] instead of A."""
        return self.value[0] == "1"


# =============================================================================
# Mnemonic Tables
# =============================================================================

DEST_MNEMONICS: dict[str, Dest] = {
    "null": Dest.NULL,
    "M": Dest.M,
    "D": Dest.D,
    "MD": Dest.MD,
    "A": Dest.A,
    "AM": Dest.AM,
    "AD": Dest.AD,
    "AMD": Dest.AMD,
}

JUMP_MNEMONICS: dict[str, Jump] = {
    "null": Jump.NULL,
    "JGT": Jump.JGT,
    "JEQ": Jump.JEQ,
    "JGE": Jump.JGE,
    "JLT": Jump.JLT,
    "JNE": Jump.JNE,
    "JLE": Jump.JLE,
    "JMP": Jump.JMP,
}

COMP_MNEMONICS: dict[str, Comp] = {
    "0": Comp.ZERO,
    "1": Comp.ONE,
    "-1": Comp.MINUS_ONE,
    "D": Comp.D,
    "A": Comp.A,
    "!D": Comp.NOT_D,
    "!A": Comp.NOT_A,
    "-D": Comp.NEG_D,
    "-A": Comp.NEG_A,
    "D+1": Comp.D_PLUS_1,
    "A+1": Comp.A_PLUS_1,
    "D-1": Comp.D_MINUS_1,
    "A-1": Comp.A_MINUS_1,
    "D+A": Comp.D_PLUS_A,
    "D-A": Comp.D_MINUS_A,
    "A-D": Comp.A_MINUS_D,
    "D&A": Comp.D_AND_A,
    "D|A": Comp.D_OR_A,
    "M": Comp.M,
    "!M": Comp.NOT_M,
    "-M": Comp.NEG_M,
    "M+1": Comp.M_PLUS_1,
    "M-1": Comp.M_MINUS_1,
    "D+M": Comp.D_PLUS_M,
    "D-M": Comp.D_MINUS_M,
    "M-D": Comp.M_MINUS_D,
    "D&M": Comp.D_AND_M,
    "D|M": Comp.D_OR_M,
}

_ZERO_DEST = "000"
_ZERO_COMP = "0000000"
_ZERO_JUMP = "000"


# =============================================================================
# Field Encoders
# =============================================================================

def _lookup(
    kind: str,
    table: dict,
    mnemonic: str,
    fallback: str,
    strict: bool,
    location: Optional[SourceLocation],
    source_line: Optional[str],
) -> str:
    member = table.get(mnemonic)
    if member is not None:
        return member.value
    if strict:
        raise InvalidMnemonicError(
            kind, mnemonic, location,
            source_line=source_line,
            similar=find_similar(mnemonic, table),
        )
    return fallback


def dest(mnemonic: Optional[str], strict: bool = True,
         location: Optional[SourceLocation] = None,
         source_line: Optional[str] = None) -> str:
    """Encode a destination mnemonic as 3 bits. None means no destination."""
    if mnemonic is None:
        return Dest.NULL.value
    return _lookup("dest", DEST_MNEMONICS, mnemonic, _ZERO_DEST,
                   strict, location, source_line)


def jump(mnemonic: Optional[str], strict: bool = True,
         location: Optional[SourceLocation] = None,
         source_line: Optional[str] = None) -> str:
    """Encode a jump mnemonic as 3 bits. None means no jump."""
    if mnemonic is None:
        return Jump.NULL.value
    return _lookup("jump", JUMP_MNEMONICS, mnemonic, _ZERO_JUMP,
                   strict, location, source_line)


def comp(mnemonic: Optional[str], strict: bool = True,
         location: Optional[SourceLocation] = None,
         source_line: Optional[str] = None) -> str:
    """Encode a computation mnemonic as 7 bits (a bit first)."""
    if mnemonic is None:
        if strict:
            raise InvalidMnemonicError("comp", "", location, source_line=source_line)
        return _ZERO_COMP
    return _lookup("comp", COMP_MNEMONICS, mnemonic, _ZERO_COMP,
                   strict, location, source_line)


# =============================================================================
# Instruction Encoders
# =============================================================================

def encode_address(value: int,
                   location: Optional[SourceLocation] = None,
                   source_line: Optional[str] = None) -> str:
    """
    Encode an A-instruction.

    Args:
        value: Address or constant, 0 to 32767

    Returns:
        16-character string: "0" followed by the zero-padded 15-bit value

    Raises:
        AddressOverflowError: If value does not fit in 15 bits
    """
    if value < 0 or value > MAX_ADDRESS:
        raise AddressOverflowError(value, location, source_line=source_line)
    return A_INSTRUCTION_PREFIX + format(value, f"0{ADDRESS_BITS}b")


def encode_computation(comp_mnemonic: str,
                       dest_mnemonic: Optional[str] = None,
                       jump_mnemonic: Optional[str] = None,
                       strict: bool = True,
                       location: Optional[SourceLocation] = None,
                       source_line: Optional[str] = None) -> str:
    """
    Encode a C-instruction as "111" + comp + dest + jump.

    Raises:
        InvalidMnemonicError: In strict mode, for any unknown field
    """
    word = (
        C_INSTRUCTION_PREFIX
        + comp(comp_mnemonic, strict, location, source_line)
        + dest(dest_mnemonic, strict, location, source_line)
        + jump(jump_mnemonic, strict, location, source_line)
    )
    assert len(word) == WORD_SIZE, f"C-instruction encoded to {len(word)} bits"
    return word


# =============================================================================
# Helper Functions
# =============================================================================

def find_similar(mnemonic: str, candidates) -> list[str]:
    """
    Find known mnemonics close to an unknown one, for error hints.

    Uses a simple edit distance heuristic, and also catches case
    mistakes such as "jmp" for "JMP".
    """
    target = mnemonic.upper()
    similar = []

    for candidate in candidates:
        if candidate == "null":
            continue
        upper = candidate.upper()
        if upper == target or (
            abs(len(candidate) - len(mnemonic)) <= 1
            and _edit_distance(target, upper) <= 1
        ):
            similar.append(candidate)

    return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(distances[j], distances[j + 1], new_distances[-1]))
        distances = new_distances
    return distances[-1]
