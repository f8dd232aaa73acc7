"""
Instruction decoding for the Intcode VM.

An instruction word packs the opcode into its two lowest decimal digits and
one addressing mode per operand into the hundreds, thousands and
ten-thousands digits.
"""
from typing import Dict, Optional, Tuple
from enum import IntEnum

from .errors import DecodeError, ImmediateWriteError, UnknownOpcodeError


class Opcode(IntEnum):
    """Intcode instruction set"""
    ADD = 1             # mem[dst] = a + b
    MUL = 2             # mem[dst] = a * b
    INPUT = 3           # mem[dst] = next input
    OUTPUT = 4          # emit a
    JUMP_IF_TRUE = 5    # ip = b if a != 0
    JUMP_IF_FALSE = 6   # ip = b if a == 0
    LESS_THAN = 7       # mem[dst] = a < b
    EQUALS = 8          # mem[dst] = a == b
    ADJUST_BASE = 9     # relative_base += a
    HALT = 99


class ParamMode(IntEnum):
    """Operand addressing mode"""
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


# opcode -> (operand count, index of the write operand or None)
INSTRUCTION_LAYOUT: Dict[Opcode, Tuple[int, Optional[int]]] = {
    Opcode.ADD: (3, 2),
    Opcode.MUL: (3, 2),
    Opcode.INPUT: (1, 0),
    Opcode.OUTPUT: (1, None),
    Opcode.JUMP_IF_TRUE: (2, None),
    Opcode.JUMP_IF_FALSE: (2, None),
    Opcode.LESS_THAN: (3, 2),
    Opcode.EQUALS: (3, 2),
    Opcode.ADJUST_BASE: (1, None),
    Opcode.HALT: (0, None),
}


class Instruction:
    """A decoded instruction word"""

    __slots__ = ("opcode", "modes", "word")

    def __init__(self, opcode: Opcode, modes: Tuple[ParamMode, ...], word: int):
        self.opcode = opcode
        self.modes = modes
        self.word = word

    @property
    def width(self) -> int:
        """Number of cells the instruction occupies, opcode included"""
        return len(self.modes) + 1

    def __repr__(self):
        modes = ",".join(m.name for m in self.modes)
        return f"Instruction({self.opcode.name}, [{modes}])"


def parameter_modes(word: int) -> Tuple[int, int, int]:
    """Raw mode digits for the first, second and third operand."""
    return (word // 100) % 10, (word // 1000) % 10, (word // 10000) % 10


def decode(word: int, pointer: int = 0) -> Instruction:
    """Decode one instruction word.

    Only the modes of operands the opcode uses are validated. A write operand
    in immediate mode is rejected here so the executor never sees one.
    """
    if word < 0:
        raise UnknownOpcodeError(word, pointer)
    try:
        opcode = Opcode(word % 100)
    except ValueError:
        raise UnknownOpcodeError(word % 100, pointer) from None

    count, write_index = INSTRUCTION_LAYOUT[opcode]
    digits = parameter_modes(word)[:count]

    modes = []
    for digit in digits:
        try:
            modes.append(ParamMode(digit))
        except ValueError:
            raise DecodeError(word, digit, pointer) from None

    if write_index is not None and modes[write_index] is ParamMode.IMMEDIATE:
        raise ImmediateWriteError(word, pointer)

    return Instruction(opcode, tuple(modes), word)
