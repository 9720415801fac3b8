"""
Single-pass assembler for .ula ALU programs.

Input:  .ula source lines (X/Y operand assignments, W function lines)
Output: one 3-character instruction word per W line, in source order

How the loop works:
  X and Y lines only update the running operand state. A W line triggers an
  emit: the current X and Y are encoded to one hex digit each, the mnemonic
  is looked up in the opcode table, and the word X+Y+opcode goes to the sink.
  X and Y are not cleared after an emit, so consecutive W lines reuse them:

      X = 15
      Y = 0
      W = umL     ->  F00
      W = nA      ->  F06

  The end marker stops the loop at once. Later lines are never read.

Default mode is permissive: an unknown mnemonic contributes an empty opcode
field (the word is 2 characters long), an unset operand contributes an empty
field, and nothing aborts the run. Pass strict=True to turn those cases into
errors.
"""

from __future__ import annotations
import contextlib
import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .errors import (
    UlaError, InputUnavailableError, OutputUnavailableError,
    UnknownMnemonicError, MissingOperandError,
)
from .lines import LineKind, UlaLine, parse_line, DEFAULT_DIALECT, DIALECTS
from .opcodes import opcode_of, describe
from .operands import encode

__all__ = [
    'AssemblerState', 'Instruction', 'Assembler', 'assemble', 'assemble_file',
    'format_listing', 'OUTPUT_FORMATS',
]

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('hex', 'listing')


# ──────────────────────────────────────────────
# Data classes
# ──────────────────────────────────────────────

@dataclass
class AssemblerState:
    """Running operand values. W is never stored."""
    x: str = ""
    y: str = ""

    def reset(self):
        self.x = ""
        self.y = ""


@dataclass
class Instruction:
    """One emitted instruction word and where it came from."""
    x: str
    y: str
    opcode: str
    mnemonic: str = ""
    line_num: int = 0
    source: str = ""

    @property
    def word(self) -> str:
        return self.x + self.y + self.opcode


# ──────────────────────────────────────────────
# Assembler
# ──────────────────────────────────────────────

class Assembler:
    """ULA instruction assembler.

    Usage:
        asm = Assembler()
        instructions = asm.run(lines, sink)
        words = [i.word for i in instructions]
    """

    def __init__(self, dialect: str = DEFAULT_DIALECT, strict: bool = False):
        if dialect not in DIALECTS:
            raise UlaError(f"Unknown dialect '{dialect}' "
                           f"(choose from {', '.join(DIALECTS)})")
        self.dialect = dialect
        self.strict = strict
        self.state = AssemblerState()
        self.instructions: List[Instruction] = []
        self.stopped_at: Optional[int] = None  # Line of the end marker, if seen

    def run(self, lines: Iterable[str], sink: Callable[[str], None]) -> List[Instruction]:
        """Assemble lines, passing each word to sink as it is produced.

        lines is consumed lazily; nothing after the end marker is pulled.
        Returns the emitted instructions in order.
        """
        self.state.reset()
        self.instructions = []
        self.stopped_at = None

        for line_num, raw in enumerate(lines, 1):
            line = parse_line(raw, line_num, self.dialect)
            if line.kind is LineKind.END:
                logger.debug("Line %d: end marker, stopping", line_num)
                self.stopped_at = line_num
                break
            self._process(line, sink)

        logger.debug("Emitted %d instruction(s)", len(self.instructions))
        return self.instructions

    def _process(self, line: UlaLine, sink: Callable[[str], None]):
        kind = line.kind
        if kind is LineKind.X:
            self.state.x = line.value
            logger.debug("Line %d: X = %r", line.line_num, line.value)
        elif kind is LineKind.Y:
            self.state.y = line.value
            logger.debug("Line %d: Y = %r", line.line_num, line.value)
        elif kind is LineKind.W:
            instr = self._encode_instruction(line)
            self.instructions.append(instr)
            sink(instr.word)
            logger.debug("Line %d: W = %s -> %s", line.line_num, line.value, instr.word)
        elif kind is LineKind.UNRECOGNIZED:
            logger.debug("Line %d: ignored: %r", line.line_num, line.raw)
        elif line.target and not line.is_assignment:
            logger.debug("Line %d: %s without '=', ignored", line.line_num, line.target)

    def _encode_instruction(self, line: UlaLine) -> Instruction:
        """Build the word for one W line from the current X/Y state."""
        mnem = line.value
        for name, value in (('X', self.state.x), ('Y', self.state.y)):
            if not value:
                if self.strict:
                    raise MissingOperandError(f"W before {name} was assigned",
                                              line.line_num)
                logger.warning("Line %d: %s not set, operand field left empty",
                               line.line_num, name)

        opcode = opcode_of(mnem)
        if not opcode:
            if self.strict:
                raise UnknownMnemonicError(f"Unknown mnemonic: '{mnem}'", line.line_num)
            logger.warning("Line %d: unknown mnemonic '%s', opcode field left empty",
                           line.line_num, mnem)

        return Instruction(
            x=encode(self.state.x, self.strict, line.line_num),
            y=encode(self.state.y, self.strict, line.line_num),
            opcode=opcode,
            mnemonic=mnem,
            line_num=line.line_num,
            source=line.raw,
        )


# ──────────────────────────────────────────────
# Listing
# ──────────────────────────────────────────────

def format_listing(instructions: Iterable[Instruction]) -> str:
    """Return a human-readable listing: line, word, operands and function."""
    lines = []
    lines.append(f"{'LINE':>5}  {'WORD':<4}  {'X':<4} {'Y':<4} {'MNEMONIC':<8}  FUNCTION")
    lines.append("-" * 52)
    for instr in instructions:
        func = describe(instr.mnemonic) or '?'
        lines.append(f"{instr.line_num:>5}  {instr.word:<4}  {instr.x:<4} {instr.y:<4} "
                     f"{instr.mnemonic:<8}  {func}")
    return '\n'.join(lines) + '\n'


# ──────────────────────────────────────────────
# Convenience functions
# ──────────────────────────────────────────────

def assemble(source: str, *, dialect: str = DEFAULT_DIALECT, strict: bool = False) -> List[str]:
    """Assemble source text, return the instruction words."""
    words: List[str] = []
    Assembler(dialect=dialect, strict=strict).run(source.split('\n'), words.append)
    return words


def _for_terminal(text: str) -> str:
    # Undecodable source bytes survive into files; stdout gets U+FFFD instead
    return text.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')


def assemble_file(input_path, output_path, *, dialect: str = DEFAULT_DIALECT,
                  strict: bool = False, fmt: str = 'hex') -> List[Instruction]:
    """Assemble a .ula file into a .hex (or listing) file.

    The input is opened first; the output is only opened once the input is
    known to be readable. Either failure raises before any line is read.
    """
    if fmt not in OUTPUT_FORMATS:
        raise UlaError(f"Unknown output format '{fmt}'")

    asm = Assembler(dialect=dialect, strict=strict)

    try:
        src = open(input_path, 'r', encoding='utf-8', errors='surrogateescape')
    except OSError as e:
        raise InputUnavailableError(input_path, e.strerror or str(e)) from e

    with src:
        to_stdout = os.fspath(output_path) == '-'
        if to_stdout:
            sink_file = contextlib.nullcontext(sys.stdout)
        else:
            # Opening with 'w' would truncate the source before it is read
            if os.path.exists(output_path) and os.path.samefile(input_path, output_path):
                raise OutputUnavailableError(output_path, "same file as the input")
            try:
                sink_file = open(output_path, 'w', encoding='utf-8', errors='surrogateescape')
            except OSError as e:
                raise OutputUnavailableError(output_path, e.strerror or str(e)) from e

        with sink_file as dst:
            logger.debug("Reading %s, writing %s", input_path, output_path)
            out = _for_terminal if to_stdout else str
            if fmt == 'hex':
                instructions = asm.run(src, lambda word: dst.write(out(word) + '\n'))
            else:
                instructions = asm.run(src, lambda word: None)
                dst.write(out(format_listing(instructions)))

    logger.info("Assembled %d instruction(s) from %s into %s",
                len(instructions), os.fspath(input_path), os.fspath(output_path))
    return instructions
