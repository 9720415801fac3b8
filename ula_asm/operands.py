"""
Operand encoder for ULA instruction words.

X and Y operands are written in decimal in the .ula source (or as symbolic
register names). Each one occupies a single hex digit in the instruction
word, so decimal 10..15 become A..F. Values below 10 are left exactly as
written, and non-numeric tokens pass straight through.
"""

from __future__ import annotations
import logging

from .errors import OperandRangeError

__all__ = ['encode', 'is_decimal', 'MAX_OPERAND']

logger = logging.getLogger(__name__)

# Largest value that fits in one hex digit
MAX_OPERAND = 0xF


def is_decimal(token: str) -> bool:
    """True if token is non-empty and every character is an ASCII digit."""
    if not token:
        return False
    return all('0' <= ch <= '9' for ch in token)


def encode(token: str, strict: bool = False, line_num: int = 0) -> str:
    """Encode one operand token as its instruction-word field.

    Args:
        token: Operand text as assigned to X or Y.
        strict: Raise OperandRangeError for decimal values above 15
                instead of passing them through.
        line_num: Source line, used only in diagnostics.

    Returns:
        'A'..'F' for decimal 10..15, otherwise the token unchanged.
    """
    if not is_decimal(token):
        return token

    # Anything past two significant digits is out of range; never int() it
    digits = token.lstrip('0') or '0'
    if len(digits) <= 2:
        value = int(digits)
        if value < 10:
            return token
        if value <= MAX_OPERAND:
            return chr(ord('A') + value - 10)

    # Out of the single-digit domain
    shown = token if len(token) <= 20 else f"{token[:20]}... ({len(token)} digits)"
    if strict:
        raise OperandRangeError(
            f"Operand {shown} does not fit in one hex digit (max {MAX_OPERAND})",
            line_num)
    logger.warning("Line %d: operand %s exceeds one hex digit, passed through",
                   line_num, shown)
    return token
