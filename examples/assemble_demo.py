#!/usr/bin/env python3
"""
hackasm Demo
============

Assembles Max.asm and prints the listing, showing each instruction's
address and machine word next to its source line.

Usage:
    python examples/assemble_demo.py
"""

import sys
from pathlib import Path

from hackasm import Assembler, HackError


def main() -> int:
    source = Path(__file__).parent / "Max.asm"

    asm = Assembler()
    try:
        code = asm.assemble_file(source)
    except HackError as e:
        print(e, file=sys.stderr)
        return 1

    print(asm.get_listing())
    print()
    print(f"{len(code)} instructions, {len(asm.get_symbols())} symbols")
    return 0


if __name__ == "__main__":
    sys.exit(main())
