"""
Hack Assembly Language Parser
=============================

This module classifies raw lines of Hack assembly into instruction records.
Every line is exactly one of:

1. **Blank**: Empty, whitespace or comment only
   ```asm
   // compute the maximum
   ```

2. **Label**: Binds a name to the next instruction's address
   ```asm
   (LOOP)
   ```

3. **AInstruction**: Loads a value or symbol address into A
   ```asm
   @17
   @counter
   ```

4. **CInstruction**: dest=comp;jump, with dest and jump optional
   ```asm
   MD=A-1;JGE
   D;JGT
   M=0
   ```

Comments start at `//` and run to the end of the line. Whitespace anywhere
on a line is insignificant, so `D = D + A ; JMP` is the same as `D=D+A;JMP`.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Union
import logging

from hackasm.errors import AssemblySyntaxError, SourceLocation

logger = logging.getLogger(__name__)

COMMENT_MARKER = "//"


# =============================================================================
# Instruction Kinds
# =============================================================================

@dataclass(frozen=True)
class Blank:
    """Line with nothing to assemble."""


@dataclass(frozen=True)
class Label:
    """
    Label declaration.

    Attributes:
        name: Text between the parentheses
    """
    name: str


@dataclass(frozen=True)
class AInstruction:
    """
    Address instruction.

    Attributes:
        token: Text after '@', either a decimal literal or a symbol name
    """
    token: str


@dataclass(frozen=True)
class CInstruction:
    """
    Compute instruction.

    Attributes:
        dest: Destination mnemonic, or None when there is no '='
        comp: Computation mnemonic (required)
        jump: Jump mnemonic, or None when there is no ';'
    """
    dest: Optional[str]
    comp: str
    jump: Optional[str]


LineKind = Union[Blank, Label, AInstruction, CInstruction]

EMITTING_KINDS = (AInstruction, CInstruction)


@dataclass(frozen=True)
class ClassifiedLine:
    """
    A source line together with its classification.

    Attributes:
        kind: The instruction record
        location: Where the line came from
        text: The raw source text
        emit_index: Position in the emitted instruction stream, or None for
                    labels and blank lines
    """
    kind: LineKind
    location: SourceLocation
    text: str
    emit_index: Optional[int] = None

    @property
    def is_emitting(self) -> bool:
        return isinstance(self.kind, EMITTING_KINDS)


# =============================================================================
# Classification
# =============================================================================

def strip_line(text: str) -> str:
    """Remove the trailing comment and every whitespace character."""
    code, _, _ = text.partition(COMMENT_MARKER)
    return "".join(code.split())


def classify_line(text: str) -> LineKind:
    """
    Classify one raw line of source.

    This is a pure function: the same text always yields an equal record.

    Args:
        text: Raw source line (may include comments and whitespace)

    Returns:
        Blank, Label, AInstruction or CInstruction

    Raises:
        AssemblySyntaxError: If the line cannot be classified. The error
            carries no location; parse_lines() attaches one.
    """
    code = strip_line(text)

    if not code:
        return Blank()

    if code[0] == "(":
        if code[-1] != ")":
            raise AssemblySyntaxError(
                f"unterminated label '{code}'",
                hint="labels are written as (NAME)",
            )
        name = code[1:-1]
        if not name:
            raise AssemblySyntaxError("empty label name")
        if "(" in name or ")" in name:
            raise AssemblySyntaxError(f"malformed label '{code}'")
        return Label(name)

    if code[0] == "@":
        token = code[1:]
        if not token:
            raise AssemblySyntaxError(
                "missing value after '@'",
                hint="write @number or @symbol",
            )
        return AInstruction(token)

    dest_comp, semicolon, jump = code.partition(";")
    dest, equals, comp = dest_comp.partition("=")
    if not equals:
        dest, comp = "", dest_comp

    if not comp:
        raise AssemblySyntaxError(
            f"missing computation in '{code}'",
            hint="C-instructions are written as dest=comp;jump",
        )

    return CInstruction(
        dest=dest if equals else None,
        comp=comp,
        jump=jump if semicolon else None,
    )


# =============================================================================
# Source Parsing
# =============================================================================

def parse_lines(
    lines: Iterable[str],
    filename: str = "<input>",
) -> tuple[list[ClassifiedLine], list[AssemblySyntaxError]]:
    """
    Classify a sequence of source lines.

    Every well-formed line yields one record, blank lines included. Emit
    indices are assigned in order, counting only A- and C-instructions.
    Malformed lines are returned as errors and left out of the line list,
    so they neither emit nor declare symbols.

    Args:
        lines: Source lines without line terminators
        filename: Name used in source locations

    Returns:
        (classified lines, syntax errors) in source order
    """
    classified: list[ClassifiedLine] = []
    errors: list[AssemblySyntaxError] = []
    emit_index = 0

    for line_number, text in enumerate(lines, start=1):
        text = text.rstrip("\r\n")
        column = len(text) - len(text.lstrip()) + 1
        location = SourceLocation(filename, line_number, column)

        try:
            kind = classify_line(text)
        except AssemblySyntaxError as e:
            errors.append(AssemblySyntaxError(
                e.message,
                location=location,
                hint=e.hint,
                source_line=text,
            ))
            continue

        if isinstance(kind, EMITTING_KINDS):
            record = ClassifiedLine(kind, location, text, emit_index)
            emit_index += 1
        else:
            record = ClassifiedLine(kind, location, text)

        if not isinstance(kind, Blank):
            logger.debug(f"{location}: {kind}")
        classified.append(record)

    return classified, errors


def parse_source(
    source: str,
    filename: str = "<input>",
) -> tuple[list[ClassifiedLine], list[AssemblySyntaxError]]:
    """
    Classify assembly source text.

    Args:
        source: Complete source text
        filename: Name used in source locations

    Returns:
        (classified lines, syntax errors) in source order
    """
    return parse_lines(source.split("\n"), filename)
