"""
Hack Assembler
==============

This package translates Hack assembly language into Hack machine
language: text files of 16-character binary words, one per instruction.

Main Components
---------------
- **Assembler**: Runs the two passes and writes the output files
- **Tokenizer**: Strips comments and whitespace and classifies each line
- **LineSource**: Rewindable line supplier shared by both passes
- **SymbolTable**: Predefined symbols, labels and variables
- **codes**: Bit-field tables and instruction encoders

Assembly Process
----------------
1. **Pass 1**: Walk the program, binding each label to the number of
   real instructions before it.
2. **Rewind** the line source.
3. **Pass 2**: Walk the same program again, allocating variables from
   address 16 and encoding every A and C instruction.

Example Usage
-------------
>>> from hack_asm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string('''
... (LOOP)
...     @LOOP
...     0;JMP
... ''')
['0000000000000000', '1110101010000111']
>>> asm.write_hack("Loop.hack")
"""

from hack_asm.assembler.assembler import Assembler, assemble, assemble_file
from hack_asm.assembler.lexer import (
    Command,
    CommandType,
    LineSource,
    Tokenizer,
    classify,
    strip_line,
)
from hack_asm.assembler.symbols import SymbolTable, PREDEFINED_SYMBOLS
from hack_asm.assembler.codes import (
    Comp,
    Dest,
    Jump,
    encode_address,
    encode_computation,
)

__all__ = [
    # Main interface
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "Command",
    "CommandType",
    "LineSource",
    "Tokenizer",
    "classify",
    "strip_line",
    # Symbols
    "SymbolTable",
    "PREDEFINED_SYMBOLS",
    # Encoding
    "Comp",
    "Dest",
    "Jump",
    "encode_address",
    "encode_computation",
]
