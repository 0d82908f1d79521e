"""
Hack Symbol Table
=================

Maps symbol names to addresses. A table starts out holding the predefined
symbols and is filled in during the first pass:

- **Labels** map to the instruction address (emit index) of the next
  instruction after their declaration.
- **Variables** are A-instruction tokens that are neither decimal literals
  nor known symbols. Each new variable gets the next free data address,
  starting at 16, in order of first appearance.

Once every name is known the table is frozen, so the second pass can only
look addresses up.

Example
-------
>>> table = SymbolTable.initialize()
>>> table.record_label("LOOP", 4)
True
>>> table.resolve_or_allocate("counter")
16
>>> table.resolve_or_allocate("LOOP")
4
>>> table.resolve_or_allocate("42")
42
"""

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum, auto
from typing import Iterator, Optional
import logging
import re

from hackasm.assembler.codes import PREDEFINED_SYMBOLS, VARIABLE_BASE_ADDRESS
from hackasm.errors import (
    AssemblerError,
    DuplicateSymbolError,
    SourceLocation,
    UndefinedSymbolError,
)

logger = logging.getLogger(__name__)

DECIMAL_LITERAL = re.compile(r"[0-9]+")

PREDEFINED_LOCATION = SourceLocation("<predefined>", 0, 0)


def parse_literal(token: str) -> Optional[int]:
    """Return the value of a non-negative decimal literal, or None."""
    if DECIMAL_LITERAL.fullmatch(token):
        return int(token)
    return None


# =============================================================================
# Symbol Table Entry
# =============================================================================

class SymbolKind(Enum):
    """Where a symbol's address came from."""
    PREDEFINED = auto()  # Built into the architecture (SP, R0, SCREEN...)
    LABEL = auto()       # (NAME) declaration, instruction memory
    VARIABLE = auto()    # Allocated from data memory


@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        value: Resolved address
        kind: How the symbol was defined
        location: Where the symbol was defined or first referenced
    """
    name: str
    value: int
    kind: SymbolKind
    location: SourceLocation = PREDEFINED_LOCATION


# =============================================================================
# Symbol Table
# =============================================================================

class SymbolTable:
    """
    Symbol table with built-in variable address allocation.

    Each instance owns its allocation state, so separate assembly runs
    never share addresses.

    Attributes:
        strict: If True, record_label() raises DuplicateSymbolError on a
                second declaration instead of ignoring it
    """

    def __init__(self, strict: bool = False):
        self._symbols: dict[str, Symbol] = {}
        self._next_free = VARIABLE_BASE_ADDRESS
        self._frozen = False
        self.strict = strict

    @classmethod
    def initialize(cls, strict: bool = False) -> "SymbolTable":
        """
        Create a table preloaded with the predefined symbols.

        Args:
            strict: Reject duplicate label declarations

        Returns:
            A new, writable SymbolTable
        """
        table = cls(strict=strict)
        for name, value in PREDEFINED_SYMBOLS.items():
            table._symbols[name] = Symbol(name, value, SymbolKind.PREDEFINED)
        return table

    # =========================================================================
    # Mapping Interface
    # =========================================================================

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> int:
        return self._symbols[name].value

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def get(self, name: str) -> Optional[Symbol]:
        """Return the entry for name, or None."""
        return self._symbols.get(name)

    def entries(self) -> list[Symbol]:
        """Return all entries in insertion order."""
        return list(self._symbols.values())

    def as_dict(self) -> dict[str, int]:
        """Return a plain name -> address mapping."""
        return {name: sym.value for name, sym in self._symbols.items()}

    @property
    def next_free(self) -> int:
        """Address the next new variable would receive."""
        return self._next_free

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the table read-only. Called once the first pass is done."""
        self._frozen = True

    # =========================================================================
    # First Pass: Insertion
    # =========================================================================

    def record_label(
        self,
        name: str,
        emit_index: int,
        location: Optional[SourceLocation] = None,
    ) -> bool:
        """
        Bind a label to an instruction address.

        The first binding of a name wins. A later declaration of the same
        name is ignored (or rejected in strict mode).

        Args:
            name: Label name
            emit_index: Emit index of the next instruction
            location: Where the label was declared

        Returns:
            True if the label was added, False if the name already existed

        Raises:
            DuplicateSymbolError: In strict mode, if the name already exists
            AssemblerError: If the table has been frozen
        """
        self._check_writable(name)

        existing = self._symbols.get(name)
        if existing is not None:
            if self.strict:
                raise DuplicateSymbolError(
                    name,
                    location=location,
                    original_location=existing.location,
                )
            return False

        self._symbols[name] = Symbol(
            name,
            emit_index,
            SymbolKind.LABEL,
            location or PREDEFINED_LOCATION,
        )
        logger.debug(f"label {name} = {emit_index}")
        return True

    def resolve_or_allocate(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
    ) -> int:
        """
        Return the address for an A-instruction token, allocating if new.

        Args:
            token: Decimal literal or symbol name
            location: Where the token was first referenced

        Returns:
            The literal value, the existing address, or a newly allocated
            variable address

        Raises:
            AssemblerError: If a new variable is needed but the table is frozen
        """
        value = parse_literal(token)
        if value is not None:
            return value

        existing = self._symbols.get(token)
        if existing is not None:
            return existing.value

        self._check_writable(token)

        address = self._next_free
        self._symbols[token] = Symbol(
            token,
            address,
            SymbolKind.VARIABLE,
            location or PREDEFINED_LOCATION,
        )
        self._next_free += 1
        logger.debug(f"variable {token} = {address}")
        return address

    # =========================================================================
    # Second Pass: Lookup
    # =========================================================================

    def resolve(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> int:
        """
        Look up an A-instruction token without allocating.

        Raises:
            UndefinedSymbolError: If the token is neither a literal nor known
        """
        value = parse_literal(token)
        if value is not None:
            return value

        existing = self._symbols.get(token)
        if existing is not None:
            return existing.value

        raise UndefinedSymbolError(
            token,
            location=location,
            source_line=source_line,
            similar_symbols=get_close_matches(token, list(self._symbols), n=3),
        )

    def _check_writable(self, name: str) -> None:
        if self._frozen:
            raise AssemblerError(
                f"cannot define '{name}': symbol table is read-only after the first pass"
            )
