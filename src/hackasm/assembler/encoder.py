"""
Hack Instruction Encoder
========================

Turns classified A- and C-instructions into 16-character binary words.

A-instruction: '0' followed by the 15-bit value.

    @4        -> 0000000000000100
    @SCREEN   -> 0100000000000000

C-instruction: '111' + comp(7) + dest(3) + jump(3). A missing dest or jump
encodes as null (000).

    MD=A-1;JGE -> 111 0110010 011 011
    A-1        -> 111 0110010 000 000
"""

from difflib import get_close_matches
from typing import Optional

from hackasm.assembler.codes import (
    A_INSTRUCTION_PREFIX,
    ADDRESS_BITS,
    C_INSTRUCTION_PREFIX,
    COMP_CODES,
    DEST_CODES,
    JUMP_CODES,
    MAX_ADDRESS,
    NULL_MNEMONIC,
)
from hackasm.assembler.parser import AInstruction, CInstruction, LineKind
from hackasm.assembler.symbols import SymbolTable
from hackasm.errors import (
    AddressRangeError,
    AssemblerError,
    SourceLocation,
    UnknownMnemonicError,
)


def encode_a_instruction(
    value: int,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode an A-instruction value.

    Raises:
        AddressRangeError: If value is outside 0..32767
    """
    if not 0 <= value <= MAX_ADDRESS:
        raise AddressRangeError(value, location=location, source_line=source_line)
    return f"{A_INSTRUCTION_PREFIX}{value:0{ADDRESS_BITS}b}"


def _lookup(
    table: dict[str, str],
    field: str,
    mnemonic: str,
    location: Optional[SourceLocation],
    source_line: Optional[str],
) -> str:
    code = table.get(mnemonic)
    if code is None:
        raise UnknownMnemonicError(
            field,
            mnemonic,
            location=location,
            source_line=source_line,
            similar_mnemonics=get_close_matches(mnemonic, list(table), n=3),
        )
    return code


def encode_c_instruction(
    dest: Optional[str],
    comp: str,
    jump: Optional[str],
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode a C-instruction from its three mnemonics.

    Args:
        dest: Destination mnemonic, None for no destination
        comp: Computation mnemonic
        jump: Jump mnemonic, None for no jump

    Raises:
        UnknownMnemonicError: If any present mnemonic is not in its table
    """
    comp_code = _lookup(COMP_CODES, "comp", comp, location, source_line)
    dest_code = _lookup(
        DEST_CODES, "dest", NULL_MNEMONIC if dest is None else dest,
        location, source_line,
    )
    jump_code = _lookup(
        JUMP_CODES, "jump", NULL_MNEMONIC if jump is None else jump,
        location, source_line,
    )
    return f"{C_INSTRUCTION_PREFIX}{comp_code}{dest_code}{jump_code}"


def encode(
    kind: LineKind,
    symbols: SymbolTable,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode one instruction using a completed symbol table.

    Args:
        kind: AInstruction or CInstruction
        symbols: Symbol table after the first pass
        location: Source location for error messages
        source_line: Source text for error messages

    Returns:
        16-character binary string

    Raises:
        AssemblerError: If kind is a Label or Blank, or encoding fails
    """
    if isinstance(kind, AInstruction):
        value = symbols.resolve(kind.token, location, source_line)
        return encode_a_instruction(value, location, source_line)

    if isinstance(kind, CInstruction):
        return encode_c_instruction(
            kind.dest, kind.comp, kind.jump, location, source_line
        )

    raise AssemblerError(
        f"{type(kind).__name__} lines do not produce machine code",
        location=location,
        source_line=source_line,
    )
