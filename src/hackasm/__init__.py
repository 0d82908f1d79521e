"""
hackasm - Assembler for the Hack 16-bit Computer
================================================

Translates Hack assembly (.asm) into Hack machine code (.hack): one
16-character line of 0s and 1s per instruction.

Quick Start
-----------
Assemble a program:
    >>> from hackasm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm -o Max.hack -l Max.lst -s Max.sym
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.assembler import Assembler, assemble, assemble_file
from hackasm.config import AssemblerConfig
from hackasm.errors import (
    HackError,
    AssemblerError,
    AssemblySyntaxError,
    UndefinedSymbolError,
    DuplicateSymbolError,
    UnknownMnemonicError,
    AddressRangeError,
    TooManyErrors,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "AssemblySyntaxError",
    "UndefinedSymbolError",
    "DuplicateSymbolError",
    "UnknownMnemonicError",
    "AddressRangeError",
    "TooManyErrors",
    "SourceLocation",
]
