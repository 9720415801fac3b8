"""
Line parser for .ula source files.

A .ula program is a flat list of assignments:

    inicio
    X = 3        ; first operand
    Y = 12       ; second operand
    W = AeB      ; function, emits one instruction word
    fim.

Each raw line is reduced to a UlaLine carrying its kind and, for X/Y/W
assignments, the assigned value. Marker checks run on the raw line before
comment stripping, end marker first, so a line holding both markers stops
the program.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Dict, Optional

__all__ = ['LineKind', 'UlaLine', 'parse_line', 'DIALECTS', 'DEFAULT_DIALECT',
           'COMMENT_MARKER']


COMMENT_MARKER = ';'

# Start/end markers per source dialect
DIALECTS: Dict[str, Dict[str, str]] = {
    "pt": {
        "start": "inicio",
        "end": "fim.",
        "description": "Portuguese markers (inicio / fim.)",
    },
    "en": {
        "start": "start",
        "end": "end.",
        "description": "English markers (start / end.)",
    },
}

DEFAULT_DIALECT = "pt"


class LineKind(enum.Enum):
    START = "START"
    END = "END"
    BLANK = "BLANK"
    UNRECOGNIZED = "UNRECOGNIZED"
    X = "X"
    Y = "Y"
    W = "W"


ASSIGNMENT_KINDS = {'X': LineKind.X, 'Y': LineKind.Y, 'W': LineKind.W}


@dataclass
class UlaLine:
    """Parsed .ula source line."""
    kind: LineKind = LineKind.BLANK
    target: Optional[str] = None
    value: Optional[str] = None
    comment: Optional[str] = None
    line_num: int = 0
    raw: str = ""

    @property
    def is_assignment(self) -> bool:
        return self.value is not None


def _strip_spaces(text: str) -> str:
    # Only plain spaces count; tabs are kept
    return text.strip(' ')


def parse_line(raw: str, line_num: int = 0, dialect: str = DEFAULT_DIALECT) -> UlaLine:
    """Classify one raw source line.

    Args:
        raw: Line text, with or without its line terminator.
        line_num: 1-based line number for diagnostics.
        dialect: Key into DIALECTS selecting the start/end markers.
    """
    markers = DIALECTS[dialect]
    text = raw.rstrip('\r\n')
    result = UlaLine(line_num=line_num, raw=text)

    if markers["end"] in text:
        result.kind = LineKind.END
        return result
    if markers["start"] in text:
        result.kind = LineKind.START
        return result

    # Strip comment
    semi_pos = text.find(COMMENT_MARKER)
    if semi_pos >= 0:
        result.comment = text[semi_pos + 1:].strip()
        text = text[:semi_pos]

    text = _strip_spaces(text)
    if not text:
        return result

    kind = ASSIGNMENT_KINDS.get(text[0])
    if kind is None:
        result.kind = LineKind.UNRECOGNIZED
        return result

    result.target = text[0]
    eq_pos = text.find('=')
    if eq_pos < 0:
        # "X 5" and the like: ignored, value untouched
        return result

    result.kind = kind
    result.value = text[eq_pos + 1:].lstrip(' ')
    return result
