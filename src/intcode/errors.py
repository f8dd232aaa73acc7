"""
Error types for the Intcode VM.

Every fatal condition the interpreter can hit is raised as a subclass of
IntcodeError so embedding code can catch the whole family at once.
"""

from typing import Optional


class IntcodeError(Exception):
    """Base class for all Intcode failures"""
    pass


class ProgramParseError(IntcodeError):
    """Raised when program text is not a comma separated list of integers"""
    def __init__(self, message: str, literal: Optional[str] = None, index: Optional[int] = None):
        self.literal = literal
        self.index = index
        super().__init__(message)


class DecodeError(IntcodeError):
    """Raised when an instruction word carries an unsupported parameter mode"""
    def __init__(self, word: int, mode: int, pointer: int, message: Optional[str] = None):
        self.word = word
        self.mode = mode
        self.pointer = pointer
        super().__init__(
            message or f"Parameter mode {mode} not supported (instruction {word} at {pointer})"
        )


class ImmediateWriteError(DecodeError):
    """Raised when a write target is encoded in immediate mode"""
    def __init__(self, word: int, pointer: int):
        super().__init__(
            word, 1, pointer,
            f"Write target in immediate mode (instruction {word} at {pointer})",
        )


class BoundsError(IntcodeError):
    """Base class for memory bounds violations"""
    pass


class PointerOutOfBoundsError(BoundsError):
    """Instruction pointer is outside memory at fetch time"""
    def __init__(self, pointer: int, length: int):
        self.pointer = pointer
        self.length = length
        super().__init__(f"Instruction pointer {pointer} out of bounds, memory length {length}")


class InvalidAddressError(BoundsError):
    """An operand resolved to a negative memory address"""
    def __init__(self, address: int, pointer: int):
        self.address = address
        self.pointer = pointer
        super().__init__(f"Invalid memory address {address} (instruction at {pointer})")


class UnknownOpcodeError(IntcodeError):
    """Raised when the decoded opcode is not part of the instruction set"""
    def __init__(self, opcode: int, pointer: int):
        self.opcode = opcode
        self.pointer = pointer
        super().__init__(f"Unknown opcode {opcode} at {pointer}")


class StepLimitExceededError(IntcodeError):
    """Raised when a machine exhausts its step budget"""
    def __init__(self, steps: int, max_steps: int):
        self.steps = steps
        self.max_steps = max_steps
        super().__init__(f"Step limit exceeded: {steps}/{max_steps}")


class ChannelClosedError(IntcodeError):
    """Raised when sending on a channel whose peer has gone away"""
    def __init__(self, channel: str, value: Optional[int] = None):
        self.channel = channel
        self.value = value
        super().__init__(f"Cannot send on closed channel '{channel}'")


class PipelineError(IntcodeError):
    """An amplifier inside a pipeline stopped with a fatal error"""
    def __init__(self, amplifier: str, error: BaseException):
        self.amplifier = amplifier
        self.error = error
        super().__init__(f"Amplifier '{amplifier}' failed: {error}")


class DeadlockError(IntcodeError):
    """Every machine in a cooperative pipeline is waiting for input"""
    def __init__(self, phases):
        self.phases = list(phases)
        super().__init__(f"Pipeline with phases {self.phases} deadlocked")
