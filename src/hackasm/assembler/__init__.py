"""
Hack Assembler
==============

Two-pass assembler for the Hack 16-bit computer. Source lines are
classified, labels and variables are given addresses in the first pass,
and every instruction is encoded to a 16-character binary word in the
second pass.

Main Components
---------------
- **Assembler**: Runs the pipeline and writes output files
- **parser**: Classifies lines into Blank, Label, AInstruction, CInstruction
- **SymbolTable**: Predefined symbols, labels and variable allocation
- **encoder**: A- and C-instruction encoding
- **codes**: Fixed dest/comp/jump tables and predefined symbol values

Example Usage
-------------
>>> from hackasm.assembler import assemble
>>> assemble("MD=A-1;JGE")
['1110110010011011']
"""

from hackasm.assembler.assembler import Assembler, ListingEntry, assemble, assemble_file
from hackasm.assembler.codes import COMP_CODES, DEST_CODES, JUMP_CODES, PREDEFINED_SYMBOLS
from hackasm.assembler.encoder import encode, encode_a_instruction, encode_c_instruction
from hackasm.assembler.parser import (
    AInstruction,
    Blank,
    CInstruction,
    ClassifiedLine,
    Label,
    LineKind,
    classify_line,
    parse_lines,
    parse_source,
)
from hackasm.assembler.symbols import Symbol, SymbolKind, SymbolTable

__all__ = [
    # Main class and functions
    "Assembler",
    "ListingEntry",
    "assemble",
    "assemble_file",
    # Parser
    "AInstruction",
    "Blank",
    "CInstruction",
    "ClassifiedLine",
    "Label",
    "LineKind",
    "classify_line",
    "parse_lines",
    "parse_source",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Encoder
    "encode",
    "encode_a_instruction",
    "encode_c_instruction",
    # Tables
    "COMP_CODES",
    "DEST_CODES",
    "JUMP_CODES",
    "PREDEFINED_SYMBOLS",
]
