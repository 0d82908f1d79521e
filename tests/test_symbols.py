# =============================================================================
# test_symbols.py - Symbol Table Unit Tests
# =============================================================================
# Tests for the symbol table and variable address allocator.
#
# Test coverage includes:
#   - Predefined symbols
#   - Label recording, first-wins duplicates and strict mode
#   - Variable allocation order starting at 16
#   - Literal handling
#   - Read-only lookups and freezing
# =============================================================================

import pytest

from hackasm.assembler.codes import PREDEFINED_SYMBOLS
from hackasm.assembler.symbols import SymbolKind, SymbolTable, parse_literal
from hackasm.errors import (
    AssemblerError,
    DuplicateSymbolError,
    SourceLocation,
    UndefinedSymbolError,
)


# =============================================================================
# Predefined Symbol Tests
# =============================================================================

class TestPredefined:
    """The table starts with the architecture's symbols."""

    def test_virtual_registers(self):
        table = SymbolTable.initialize()
        assert table["SP"] == 0
        assert table["LCL"] == 1
        assert table["ARG"] == 2
        assert table["THIS"] == 3
        assert table["THAT"] == 4

    def test_io_addresses(self):
        table = SymbolTable.initialize()
        assert table["SCREEN"] == 16384
        assert table["KBD"] == 24576

    def test_r_registers(self):
        table = SymbolTable.initialize()
        for n in range(16):
            assert table[f"R{n}"] == n
        assert "R16" not in table

    def test_entry_count(self):
        assert len(SymbolTable.initialize()) == 23
        assert len(PREDEFINED_SYMBOLS) == 23

    def test_kind_is_predefined(self):
        table = SymbolTable.initialize()
        assert table.get("KBD").kind is SymbolKind.PREDEFINED


# =============================================================================
# Label Tests
# =============================================================================

class TestLabels:
    """record_label() behaviour."""

    def test_record_label(self):
        table = SymbolTable.initialize()
        assert table.record_label("LOOP", 7) is True
        assert table["LOOP"] == 7
        assert table.get("LOOP").kind is SymbolKind.LABEL

    def test_duplicate_label_first_wins(self):
        table = SymbolTable.initialize()
        table.record_label("LOOP", 3)
        assert table.record_label("LOOP", 9) is False
        assert table["LOOP"] == 3

    def test_label_shadowing_predefined_is_ignored(self):
        table = SymbolTable.initialize()
        assert table.record_label("SCREEN", 2) is False
        assert table["SCREEN"] == 16384

    def test_strict_mode_rejects_duplicates(self):
        table = SymbolTable.initialize(strict=True)
        first = SourceLocation("a.asm", 2, 1)
        second = SourceLocation("a.asm", 9, 1)
        table.record_label("LOOP", 3, first)
        with pytest.raises(DuplicateSymbolError) as exc_info:
            table.record_label("LOOP", 9, second)
        error = exc_info.value
        assert error.symbol == "LOOP"
        assert error.original_location == first
        assert "a.asm:2:1" in str(error)

    def test_labels_do_not_consume_variable_addresses(self):
        table = SymbolTable.initialize()
        table.record_label("LOOP", 0)
        assert table.next_free == 16


# =============================================================================
# Variable Allocation Tests
# =============================================================================

class TestAllocation:
    """resolve_or_allocate() behaviour."""

    def test_first_three_variables(self):
        table = SymbolTable.initialize()
        assert table.resolve_or_allocate("i") == 16
        assert table.resolve_or_allocate("sum") == 17
        assert table.resolve_or_allocate("x") == 18

    def test_rereference_is_stable(self):
        table = SymbolTable.initialize()
        table.resolve_or_allocate("i")
        table.resolve_or_allocate("sum")
        assert table.resolve_or_allocate("i") == 16
        assert table.next_free == 18

    def test_literals_are_not_stored(self):
        table = SymbolTable.initialize()
        assert table.resolve_or_allocate("42") == 42
        assert "42" not in table
        assert table.next_free == 16

    def test_known_symbols_are_returned(self):
        table = SymbolTable.initialize()
        table.record_label("END", 12)
        assert table.resolve_or_allocate("END") == 12
        assert table.resolve_or_allocate("R3") == 3
        assert table.next_free == 16

    def test_case_sensitive_names(self):
        table = SymbolTable.initialize()
        assert table.resolve_or_allocate("sp") == 16
        assert table["SP"] == 0

    def test_uppercase_names_are_variables_too(self):
        table = SymbolTable.initialize()
        assert table.resolve_or_allocate("NOTVARIABLE") == 16
        assert table.get("NOTVARIABLE").kind is SymbolKind.VARIABLE

    def test_tables_are_independent(self):
        first = SymbolTable.initialize()
        second = SymbolTable.initialize()
        first.resolve_or_allocate("a")
        first.resolve_or_allocate("b")
        assert second.resolve_or_allocate("c") == 16

    def test_parse_literal(self):
        assert parse_literal("0") == 0
        assert parse_literal("00012") == 12
        assert parse_literal("-1") is None
        assert parse_literal("1a") is None
        assert parse_literal("x1") is None


# =============================================================================
# Frozen Table Tests
# =============================================================================

class TestFrozen:
    """After the first pass the table is read-only."""

    def test_resolve_known(self):
        table = SymbolTable.initialize()
        table.resolve_or_allocate("i")
        table.freeze()
        assert table.resolve("i") == 16
        assert table.resolve("100") == 100
        assert table.resolve_or_allocate("i") == 16

    def test_resolve_unknown(self):
        table = SymbolTable.initialize()
        table.record_label("LOOP", 0)
        table.freeze()
        with pytest.raises(UndefinedSymbolError) as exc_info:
            table.resolve("LOPO")
        assert exc_info.value.symbol == "LOPO"
        assert "LOOP" in exc_info.value.similar_symbols

    def test_frozen_rejects_new_variables(self):
        table = SymbolTable.initialize()
        table.freeze()
        assert table.frozen
        with pytest.raises(AssemblerError):
            table.resolve_or_allocate("new")

    def test_frozen_rejects_labels(self):
        table = SymbolTable.initialize()
        table.freeze()
        with pytest.raises(AssemblerError):
            table.record_label("LOOP", 0)

    def test_as_dict(self):
        table = SymbolTable.initialize()
        table.resolve_or_allocate("i")
        symbols = table.as_dict()
        assert symbols["i"] == 16
        assert symbols["KBD"] == 24576
