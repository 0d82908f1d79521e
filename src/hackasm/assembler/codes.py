"""
Hack Instruction Set Definition
===============================

Fixed encoding tables for the Hack 16-bit computer. Every emitted word is
one of two formats:

A-instruction (load address register)
-------------------------------------
```
bit   15  14..0
      0   value (15-bit unsigned)
```

C-instruction (compute, store, jump)
------------------------------------
```
bit   15 14 13  12..6   5..3   2..0
      1  1  1   a cccccc  ddd   jjj
```

The 7-bit comp field includes the "a" bit, which selects M (memory at A)
instead of the A register as the second ALU operand.
"""

# =============================================================================
# Destination Field
# =============================================================================

DEST_CODES: dict[str, str] = {
    "null": "000",
    "M":    "001",
    "D":    "010",
    "MD":   "011",
    "A":    "100",
    "AM":   "101",
    "AD":   "110",
    "AMD":  "111",
}

# =============================================================================
# Jump Field
# =============================================================================

JUMP_CODES: dict[str, str] = {
    "null": "000",
    "JGT":  "001",
    "JEQ":  "010",
    "JGE":  "011",
    "JLT":  "100",
    "JNE":  "101",
    "JLE":  "110",
    "JMP":  "111",
}

# =============================================================================
# Computation Field
# =============================================================================

COMP_CODES: dict[str, str] = {
    # a=0: second operand is the A register
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a=1: second operand is M
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
}

NULL_MNEMONIC = "null"

C_INSTRUCTION_PREFIX = "111"
A_INSTRUCTION_PREFIX = "0"

ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1  # 32767

# =============================================================================
# Predefined Symbols
# =============================================================================

SCREEN_ADDRESS = 16384
KBD_ADDRESS = 24576

PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": SCREEN_ADDRESS,
    "KBD": KBD_ADDRESS,
}

# First data-memory address handed out to variables (after R0..R15)
VARIABLE_BASE_ADDRESS = 16
