# =============================================================================
# test_encoder.py - Instruction Encoder Unit Tests
# =============================================================================
# Tests for A- and C-instruction encoding.
#
# Test coverage includes:
#   - A-instruction formatting and 15-bit range checks
#   - Every comp x dest x jump combination
#   - Null handling for absent dest and jump
#   - Unknown mnemonic errors with hints
#   - Dispatch on instruction kind
# =============================================================================

import pytest

from hackasm.assembler.codes import COMP_CODES, DEST_CODES, JUMP_CODES
from hackasm.assembler.encoder import (
    encode,
    encode_a_instruction,
    encode_c_instruction,
)
from hackasm.assembler.parser import AInstruction, Blank, CInstruction, Label
from hackasm.assembler.symbols import SymbolTable
from hackasm.errors import (
    AddressRangeError,
    AssemblerError,
    SourceLocation,
    UnknownMnemonicError,
)


# =============================================================================
# Table Shape Tests
# =============================================================================

class TestTables:
    """The fixed tables have the sizes the architecture defines."""

    def test_table_sizes(self):
        assert len(COMP_CODES) == 28
        assert len(DEST_CODES) == 8
        assert len(JUMP_CODES) == 8

    def test_code_widths(self):
        assert all(len(code) == 7 for code in COMP_CODES.values())
        assert all(len(code) == 3 for code in DEST_CODES.values())
        assert all(len(code) == 3 for code in JUMP_CODES.values())

    def test_codes_are_unique(self):
        assert len(set(COMP_CODES.values())) == 28
        assert len(set(DEST_CODES.values())) == 8
        assert len(set(JUMP_CODES.values())) == 8

    def test_a_bit_selects_memory(self):
        for mnemonic, code in COMP_CODES.items():
            assert code[0] == ("1" if "M" in mnemonic else "0"), mnemonic


# =============================================================================
# A-Instruction Tests
# =============================================================================

class TestAInstruction:
    """A-instruction encoding."""

    def test_small_value(self):
        assert encode_a_instruction(4) == "0000000000000100"

    def test_zero(self):
        assert encode_a_instruction(0) == "0000000000000000"

    def test_largest_value(self):
        assert encode_a_instruction(32767) == "0111111111111111"

    def test_value_too_large(self):
        with pytest.raises(AddressRangeError) as exc_info:
            encode_a_instruction(32768)
        assert exc_info.value.value == 32768

    def test_negative_value(self):
        with pytest.raises(AddressRangeError):
            encode_a_instruction(-1)


# =============================================================================
# C-Instruction Tests
# =============================================================================

class TestCInstruction:
    """C-instruction encoding."""

    def test_full_form(self):
        assert encode_c_instruction("MD", "A-1", "JGE") == "1110110010011011"

    def test_comp_only(self):
        assert encode_c_instruction(None, "A-1", None) == "1110110010000000"

    def test_unconditional_jump(self):
        assert encode_c_instruction(None, "0", "JMP") == "1110101010000111"

    def test_explicit_null(self):
        assert encode_c_instruction("null", "D", "null") == "1110001100000000"

    def test_every_combination(self):
        """All 28 x 8 x 8 combinations concatenate their table codes."""
        count = 0
        for comp, comp_code in COMP_CODES.items():
            for dest, dest_code in DEST_CODES.items():
                for jump, jump_code in JUMP_CODES.items():
                    word = encode_c_instruction(dest, comp, jump)
                    assert word == "111" + comp_code + dest_code + jump_code
                    assert len(word) == 16
                    count += 1
        assert count == 28 * 8 * 8

    def test_unknown_comp(self):
        location = SourceLocation("prog.asm", 7, 1)
        with pytest.raises(UnknownMnemonicError) as exc_info:
            encode_c_instruction("D", "D+2", None, location, "D=D+2")
        error = exc_info.value
        assert error.field == "comp"
        assert error.mnemonic == "D+2"
        assert "D+1" in error.similar_mnemonics
        assert str(error).startswith("prog.asm:7:1: error: unknown comp mnemonic 'D+2'")

    def test_unknown_dest(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            encode_c_instruction("DM", "A", None)
        assert exc_info.value.field == "dest"

    def test_unknown_jump(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            encode_c_instruction(None, "0", "JMPP")
        assert exc_info.value.field == "jump"
        assert "JMP" in exc_info.value.similar_mnemonics

    def test_empty_jump_is_unknown(self):
        with pytest.raises(UnknownMnemonicError):
            encode_c_instruction(None, "D", "")

    def test_mnemonics_are_case_sensitive(self):
        with pytest.raises(UnknownMnemonicError):
            encode_c_instruction("d", "A", None)


# =============================================================================
# encode() Dispatch Tests
# =============================================================================

class TestEncodeDispatch:
    """encode() on each instruction kind."""

    def test_predefined_symbols(self):
        table = SymbolTable.initialize()
        table.freeze()
        assert encode(AInstruction("SCREEN"), table) == "0100000000000000"
        assert encode(AInstruction("KBD"), table) == "0110000000000000"
        assert encode(AInstruction("R1"), table) == "0000000000000001"
        assert encode(AInstruction("THAT"), table) == "0000000000000100"

    def test_every_predefined_symbol_zero_extends(self):
        table = SymbolTable.initialize()
        for name in list(table):
            assert encode(AInstruction(name), table) == format(table[name], "016b")

    def test_literal(self):
        table = SymbolTable.initialize()
        assert encode(AInstruction("4"), table) == "0000000000000100"

    def test_literal_out_of_range(self):
        table = SymbolTable.initialize()
        with pytest.raises(AddressRangeError):
            encode(AInstruction("40000"), table)

    def test_c_instruction(self):
        table = SymbolTable.initialize()
        assert encode(CInstruction("MD", "A-1", "JGE"), table) == "1110110010011011"

    def test_label_is_contract_violation(self):
        with pytest.raises(AssemblerError):
            encode(Label("LOOP"), SymbolTable.initialize())

    def test_blank_is_contract_violation(self):
        with pytest.raises(AssemblerError):
            encode(Blank(), SymbolTable.initialize())
