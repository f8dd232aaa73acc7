"""
Fetch-decode-execute step for the Intcode VM.

``step`` performs exactly one instruction against a machine's state and
classifies the result. Fatal conditions are raised as IntcodeError
subclasses; the three ordinary outcomes are returned as StepOutcome values.

Memory growth follows one rule for every instruction: all addresses the
instruction dereferences (position and relative operands, read or write)
are resolved first and memory is grown once to cover the largest of them.
Immediate operands and jump targets never grow memory.
"""

from enum import Enum
import operator
from typing import TYPE_CHECKING, List, Optional

from .decoder import Instruction, Opcode, ParamMode, decode
from .errors import InvalidAddressError, PointerOutOfBoundsError

if TYPE_CHECKING:
    from .machine import Machine


class StepOutcome(Enum):
    """Classification of one executed step"""
    CONTINUE = "continue"
    HALTED = "halted"
    WAITING_FOR_INPUT = "waiting_for_input"


_BINARY_OPS = {
    Opcode.ADD: operator.add,
    Opcode.MUL: operator.mul,
    Opcode.LESS_THAN: lambda a, b: 1 if a < b else 0,
    Opcode.EQUALS: lambda a, b: 1 if a == b else 0,
}


def fetch(machine: "Machine") -> Instruction:
    """Decode the instruction at the machine's pointer"""
    memory = machine.memory
    pointer = machine.ip
    if pointer < 0 or pointer >= len(memory):
        raise PointerOutOfBoundsError(pointer, len(memory))
    return decode(memory[pointer], pointer)


def resolve_addresses(machine: "Machine", instruction: Instruction) -> List[Optional[int]]:
    """Resolve each operand to the address it dereferences.

    Immediate operands resolve to None. Memory is grown to cover every
    resolved address before anything is read or written.
    """
    memory = machine.memory
    pointer = machine.ip
    last = pointer + instruction.width - 1
    if last >= len(memory):
        raise PointerOutOfBoundsError(last, len(memory))

    addresses: List[Optional[int]] = []
    for offset, mode in enumerate(instruction.modes, start=1):
        raw = memory[pointer + offset]
        if mode is ParamMode.POSITION:
            address = raw
        elif mode is ParamMode.RELATIVE:
            address = raw + machine.relative_base
        else:
            addresses.append(None)
            continue
        if address < 0:
            raise InvalidAddressError(address, pointer)
        addresses.append(address)

    highest = max((a for a in addresses if a is not None), default=None)
    if highest is not None:
        memory.ensure(highest, pointer)
    return addresses


def step(machine: "Machine") -> StepOutcome:
    """Execute one instruction"""
    instruction = fetch(machine)
    opcode = instruction.opcode

    if opcode is Opcode.HALT:
        return StepOutcome.HALTED

    # Suspend before touching memory so the instruction can be retried as is
    if opcode is Opcode.INPUT and not machine.inputs:
        return StepOutcome.WAITING_FOR_INPUT

    memory = machine.memory
    pointer = machine.ip
    addresses = resolve_addresses(machine, instruction)

    def read(index: int) -> int:
        address = addresses[index]
        if address is None:
            return memory[pointer + index + 1]
        return memory[address]

    if opcode in _BINARY_OPS:
        memory[addresses[2]] = _BINARY_OPS[opcode](read(0), read(1))
        machine.ip = pointer + 4
    elif opcode is Opcode.INPUT:
        memory[addresses[0]] = machine.inputs.popleft()
        machine.ip = pointer + 2
    elif opcode is Opcode.OUTPUT:
        machine.outputs.append(read(0))
        machine.ip = pointer + 2
    elif opcode is Opcode.JUMP_IF_TRUE:
        machine.ip = read(1) if read(0) != 0 else pointer + 3
    elif opcode is Opcode.JUMP_IF_FALSE:
        machine.ip = read(1) if read(0) == 0 else pointer + 3
    elif opcode is Opcode.ADJUST_BASE:
        machine.relative_base += read(0)
        machine.ip = pointer + 2

    return StepOutcome.CONTINUE
