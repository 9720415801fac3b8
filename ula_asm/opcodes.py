"""
ULA logic-function opcode table.

Each W mnemonic selects one of the 16 functions of the ALU and encodes as a
single hex digit, the last character of the instruction word.

The naming follows the course notation: 'n' negates the operand that
follows it, 'e' is AND, 'o' is OR, 'x' is XOR, and a trailing 'n' negates
the whole expression (AeBn = (A.B)').
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Tuple

__all__ = ['MNEMONICS', 'FUNCTIONS', 'opcode_of', 'describe']


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: (mnemonic, opcode digit, boolean function)

_TABLE: Tuple[Tuple[str, str, str], ...] = (
    ('umL',    '0', "1"),
    ('zeroL',  '1', "0"),
    ('AonB',   '2', "A + B'"),
    ('nAonB',  '3', "A' + B'"),
    ('AeBn',   '4', "(A.B)'"),
    ('nB',     '5', "B'"),
    ('nA',     '6', "A'"),
    ('nAxnB',  '7', "A' xor B'"),
    ('AxB',    '8', "A xor B"),
    ('copiaA', '9', "A"),
    ('copiaB', 'A', "B"),
    ('AeB',    'B', "A.B"),
    ('AenB',   'C', "A.B'"),
    ('nAeB',   'D', "A'.B"),
    ('AoB',    'E', "A + B"),
    ('nAeBn',  'F', "(A'.B)'"),
)

MNEMONICS: Mapping[str, str] = MappingProxyType(
    {mnem: code for mnem, code, _ in _TABLE})

# Opcode digit -> boolean function, for listings
FUNCTIONS: Mapping[str, str] = MappingProxyType(
    {code: func for _, code, func in _TABLE})


def opcode_of(mnemonic: str) -> str:
    """Return the opcode digit for mnemonic, or '' if it is not in the table.

    Matching is exact: no case folding, no whitespace stripping.
    """
    return MNEMONICS.get(mnemonic, '')


def describe(mnemonic: str) -> str:
    """Boolean function computed by mnemonic ('' if unknown)."""
    code = opcode_of(mnemonic)
    return FUNCTIONS[code] if code else ''
