"""
Intcode Virtual Machine

This package provides:
- Memory, decoder and single step executor for Intcode programs
- Resumable machines and a synchronous runner
- Channels and threaded amplifiers for connecting machines
- Chained and feedback amplifier pipelines
- ASCII input/output helpers
"""

# Core VM
from .memory import Memory, parse_program
from .decoder import Opcode, ParamMode, Instruction, decode
from .executor import StepOutcome, step
from .machine import Machine
from .runner import run

# Concurrency
from .channel import Channel
from .amplifier import Amplifier, spawn
from .pipeline import (
    run_in_sequence,
    run_chain,
    run_feedback_loop,
    run_feedback_round_robin,
    find_max_signal,
)

# Helpers
from .ascii import encode_ascii, encode_lines, split_ascii_output
from .config import IntcodeConfig, get_config, reset_config

# Errors
from .errors import (
    IntcodeError,
    ProgramParseError,
    DecodeError,
    ImmediateWriteError,
    BoundsError,
    PointerOutOfBoundsError,
    InvalidAddressError,
    UnknownOpcodeError,
    StepLimitExceededError,
    ChannelClosedError,
    PipelineError,
    DeadlockError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    'Memory', 'parse_program', 'Opcode', 'ParamMode', 'Instruction', 'decode',
    'StepOutcome', 'step', 'Machine', 'run',
    # Concurrency
    'Channel', 'Amplifier', 'spawn',
    'run_in_sequence', 'run_chain', 'run_feedback_loop',
    'run_feedback_round_robin', 'find_max_signal',
    # Helpers
    'encode_ascii', 'encode_lines', 'split_ascii_output',
    'IntcodeConfig', 'get_config', 'reset_config',
    # Errors
    'IntcodeError', 'ProgramParseError', 'DecodeError', 'ImmediateWriteError',
    'BoundsError', 'PointerOutOfBoundsError', 'InvalidAddressError',
    'UnknownOpcodeError', 'StepLimitExceededError', 'ChannelClosedError',
    'PipelineError', 'DeadlockError',
]
