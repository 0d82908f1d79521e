"""
Hack Assembler - Main Interface
===============================

This module provides the Assembler class, which runs the full pipeline:

1. **Classification**: every source line becomes a Blank, Label,
   AInstruction or CInstruction record. Malformed lines are reported and
   skipped.

2. **Pass 1 (Symbol Collection)**:
   - Bind each label to the emit index of the next instruction
   - Allocate a data address for every new variable, in order of first use
   - Freeze the symbol table

3. **Pass 2 (Encoding)**: encode every A- and C-instruction against the
   frozen symbol table.

Labels are all bound before any variable is allocated, so `@LOOP` used
before `(LOOP)` is declared still resolves to the label.

Example Usage
-------------
>>> from hackasm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string('''
... @LOOP
... 0;JMP
... (LOOP)
... D=A
... ''')
['0000000000000010', '1110101010000111', '1110110000010000']
>>> asm.write_hack("Loop.hack")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional
import logging

from hackasm.assembler.encoder import encode
from hackasm.assembler.parser import (
    AInstruction,
    ClassifiedLine,
    EMITTING_KINDS,
    Label,
    parse_lines,
)
from hackasm.assembler.symbols import SymbolTable
from hackasm.config import AssemblerConfig
from hackasm.errors import ErrorCollector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingEntry:
    """
    One row of the assembly listing.

    Attributes:
        line: Source line number (1-based)
        source: Raw source text
        emit_index: Instruction address, or None for labels and blanks
        word: Encoded instruction, or None for labels and blanks
        error: Error message for a skipped malformed line
    """
    line: int
    source: str
    emit_index: Optional[int] = None
    word: Optional[str] = None
    error: Optional[str] = None


class Assembler:
    """
    Hack assembler.

    Each assemble_* call is an independent run with a fresh symbol table.
    Results of the most recent run are available through the get_* and
    write_* methods.

    Attributes:
        config: Settings for strictness, error limits and output naming
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()
        self._symbols = SymbolTable.initialize(strict=self.config.strict_labels)
        self._errors = ErrorCollector(max_errors=self.config.max_errors)
        self._code: list[str] = []
        self._listing: list[ListingEntry] = []

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_lines(self, lines: Iterable[str], filename: str = "<input>") -> list[str]:
        """
        Assemble an ordered sequence of source lines.

        Args:
            lines: Source lines without line terminators
            filename: Name used in error messages

        Returns:
            One 16-character binary string per emitted instruction

        Raises:
            AssemblerError: On any fatal error (unknown mnemonic, value out
                of range, duplicate label in strict mode, too many errors)
        """
        self._reset()

        classified, syntax_errors = parse_lines(lines, filename)
        for error in syntax_errors:
            logger.warning(str(error))
            self._errors.add(error)

        self._pass1(classified)
        code = self._pass2(classified)

        for error in syntax_errors:
            self._listing.append(ListingEntry(
                error.location.line, error.source_line or "", error=error.message
            ))
        self._listing.sort(key=lambda entry: entry.line)

        self._code = code
        logger.debug(f"Assembled {len(code)} instructions from {filename}")
        return list(code)

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            One 16-character binary string per emitted instruction
        """
        return self.assemble_lines(source.split("\n"), filename)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        logger.debug(f"Assembling {filepath}")

        source = filepath.read_text(encoding="utf-8")
        return self.assemble_string(source, str(filepath))

    def _reset(self) -> None:
        self._symbols = SymbolTable.initialize(strict=self.config.strict_labels)
        self._errors = ErrorCollector(max_errors=self.config.max_errors)
        self._code = []
        self._listing = []

    # =========================================================================
    # Pass 1: Symbol Collection
    # =========================================================================

    def _pass1(self, lines: list[ClassifiedLine]) -> None:
        """
        First pass: bind labels, then allocate variables, then freeze.

        Variables are allocated in a second sweep so a label that is
        referenced before its declaration is never mistaken for a variable.
        """
        emit_index = 0
        for line in lines:
            kind = line.kind
            if isinstance(kind, Label):
                if not self._symbols.record_label(kind.name, emit_index, line.location):
                    original = self._symbols.get(kind.name)
                    message = (
                        f"{line.location}: duplicate label '{kind.name}' ignored, "
                        f"first defined at {original.location}"
                    )
                    logger.warning(message)
                    self._errors.add_warning(message)
            elif isinstance(kind, EMITTING_KINDS):
                emit_index += 1

        for line in lines:
            if isinstance(line.kind, AInstruction):
                self._symbols.resolve_or_allocate(line.kind.token, line.location)

        self._symbols.freeze()

    # =========================================================================
    # Pass 2: Encoding
    # =========================================================================

    def _pass2(self, lines: list[ClassifiedLine]) -> list[str]:
        """Second pass: encode each instruction against the frozen table."""
        code: list[str] = []
        for line in lines:
            if not line.is_emitting:
                self._listing.append(ListingEntry(line.location.line, line.text))
                continue

            word = encode(line.kind, self._symbols, line.location, line.text)
            logger.debug(f"{word}\t{line.text.strip()}")
            code.append(word)
            self._listing.append(
                ListingEntry(line.location.line, line.text, line.emit_index, word)
            )
        return code

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[str]:
        """Return the encoded instructions from the last run."""
        return list(self._code)

    def get_output(self) -> str:
        """Return the instructions one per line, without a trailing newline."""
        return "\n".join(self._code)

    def get_symbols(self) -> dict[str, int]:
        """Return the symbol table as a name -> address mapping."""
        return self._symbols.as_dict()

    def get_listing(self) -> str:
        """
        Return the assembly listing as a string.

        Each source line is shown with its instruction address and encoded
        word (labels and blank lines have neither), followed by the
        symbol table. Skipped malformed lines show "error" in the word
        column and the error message after the source.
        """
        lines = [f"{'addr':>5}  {'word':16}  {'line':>5}  source"]
        for entry in self._listing:
            addr = "" if entry.emit_index is None else str(entry.emit_index)
            if entry.error is not None:
                lines.append(
                    f"{addr:>5}  {'error':16}  {entry.line:>5}  {entry.source}"
                    f"    ; {entry.error}"
                )
                continue
            word = entry.word or ""
            lines.append(f"{addr:>5}  {word:16}  {entry.line:>5}  {entry.source}")

        lines.append("")
        lines.append("Symbols:")
        for sym in self._sorted_symbols():
            lines.append(f"{sym.name:20s} = {sym.value}")
        return "\n".join(lines)

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the machine code file.

        One 16-character line per instruction, no trailing newline.
        """
        Path(filepath).write_text(self.get_output(), encoding="utf-8")
        logger.debug(f"Wrote {len(self._code)} instructions to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write assembly listing file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.get_listing())
            f.write("\n")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address kind (one per line, ordered by address)
        """
        with open(filepath, "w", encoding="utf-8") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for sym in self._sorted_symbols():
                f.write(f"{sym.name} {sym.value} {sym.kind.name.lower()}\n")

    def _sorted_symbols(self):
        return sorted(self._symbols.entries(), key=lambda s: (s.value, s.name))

    # =========================================================================
    # Error Handling
    # =========================================================================

    def has_errors(self) -> bool:
        """Return True if the last run skipped any malformed lines."""
        return self._errors.has_errors()

    def get_warnings(self) -> list[str]:
        """Return warnings (duplicate labels) from the last run."""
        return list(self._errors.warnings)

    def get_error_report(self) -> str:
        """Return the formatted report of malformed lines and warnings."""
        return self._errors.report()


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> list[str]:
    """
    Convenience function to assemble source code.

    Returns:
        One 16-character binary string per emitted instruction

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  config: Optional[AssemblerConfig] = None) -> list[str]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_file(filepath)
