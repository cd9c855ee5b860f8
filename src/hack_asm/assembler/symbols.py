"""
Hack Symbol Table
=================

Maps symbolic names to 15-bit RAM/ROM addresses.

A fresh table is created for every assembly run and is seeded with the
predefined Hack symbols:

| Symbol        | Address | Meaning                     |
|---------------|---------|-----------------------------|
| SP            | 0       | Stack pointer               |
| LCL           | 1       | Local segment base          |
| ARG           | 2       | Argument segment base       |
| THIS          | 3       | This segment base           |
| THAT          | 4       | That segment base           |
| R0 .. R15     | 0 .. 15 | Virtual registers           |
| SCREEN        | 16384   | Memory-mapped screen        |
| KBD           | 24576   | Memory-mapped keyboard      |

Labels are added during pass one, variables during pass two.
"""

from typing import Iterator

from hack_asm.errors import SymbolNotFoundError


PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": 16384,
    "KBD": 24576,
}


class SymbolTable:
    """
    Symbol name to address mapping.

    add_entry() overwrites silently; callers that must reject duplicates
    check contains() first.

    Usage:
        table = SymbolTable()
        if not table.contains("LOOP"):
            table.add_entry("LOOP", 4)
        table.get_address("LOOP")   # 4
    """

    def __init__(self) -> None:
        self._table: dict[str, int] = dict(PREDEFINED_SYMBOLS)

    def add_entry(self, name: str, address: int) -> None:
        """Bind name to address, replacing any existing binding."""
        self._table[name] = address

    def contains(self, name: str) -> bool:
        """True if name is bound."""
        return name in self._table

    def get_address(self, name: str) -> int:
        """
        Return the address bound to name.

        Raises:
            SymbolNotFoundError: If name is not bound (a LookupError)
        """
        try:
            return self._table[name]
        except KeyError:
            raise SymbolNotFoundError(name) from None

    def is_predefined(self, name: str) -> bool:
        """True if name is one of the built-in Hack symbols."""
        return name in PREDEFINED_SYMBOLS

    def entries(self) -> list[tuple[str, int]]:
        """All (name, address) pairs in ascending address order."""
        return sorted(self._table.items(), key=lambda item: item[1])

    def as_dict(self) -> dict[str, int]:
        return dict(self._table)

    def format_table(self) -> str:
        """Render the table for diagnostics, one symbol per line."""
        lines = ["Symbol Table", "-" * 30]
        for name, address in self.entries():
            lines.append(f"{name:20s} = {address:5d}")
        return "\n".join(lines)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolTable):
            return NotImplemented
        return self._table == other._table

    def __repr__(self) -> str:
        return f"SymbolTable({len(self._table)} symbols)"
