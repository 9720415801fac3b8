"""
ULA Assembler
=============
Translates .ula ALU control programs into 3-digit hexadecimal instruction
words (.hex), one word per W line.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌───────────┐    ┌──────────┐
    │ .ula     │───>│  lines   │───>│ assembler │───>│ .hex     │
    │ source   │    │ (UlaLine)│    │ (X/Y/W)   │    │ words    │
    └──────────┘    └──────────┘    └───────────┘    └──────────┘
                                      │        │
                               operands.py  opcodes.py
                               (X, Y digit) (W digit)

    - lines.py:     marker/comment handling and X/Y/W classification
    - operands.py:  decimal operand -> single hex digit
    - opcodes.py:   16-entry mnemonic -> opcode table
    - assembler.py: running X/Y state, word emission, file I/O
"""

__version__ = "1.0.0"

from .errors import (
    UlaError, InputUnavailableError, OutputUnavailableError,
    UnknownMnemonicError, MissingOperandError, OperandRangeError,
)
from .lines import LineKind, UlaLine, parse_line, DIALECTS, DEFAULT_DIALECT
from .opcodes import MNEMONICS, FUNCTIONS, opcode_of, describe
from .operands import encode, is_decimal
from .assembler import (
    AssemblerState, Instruction, Assembler, assemble, assemble_file,
    format_listing, OUTPUT_FORMATS,
)
