"""
Intcode machine state.

A Machine bundles everything one VM instance owns: memory, instruction
pointer, relative base, pending inputs and produced outputs. It is driven one
instruction at a time by the executor and can be resumed after it suspends
for input, so callers that interact over several rounds keep one machine
instead of restarting the program.
"""
from collections import deque
from typing import Deque, Iterable, List, Optional, Union
import logging

from .config import get_config
from .decoder import Opcode
from .errors import StepLimitExceededError
from .executor import StepOutcome, fetch, step
from .memory import Memory

logger = logging.getLogger(__name__)


class Machine:
    def __init__(self, program: Union[str, Iterable[int]], inputs: Iterable[int] = (),
                 name: str = "intcode", max_steps: Optional[int] = None,
                 trace: Optional[bool] = None):
        config = get_config()
        self.name = name
        self.memory = Memory(program)
        self.ip = 0
        self.relative_base = 0
        self.inputs: Deque[int] = deque(inputs)
        self.outputs: List[int] = []
        self.steps = 0
        self.max_steps = max_steps if max_steps is not None else config.max_steps
        self.trace = config.trace if trace is None else trace
        self._last_outcome: Optional[StepOutcome] = None

    def __repr__(self):
        return (f"Machine({self.name!r}, ip={self.ip}, base={self.relative_base}, "
                f"memory={len(self.memory)}, pending_inputs={len(self.inputs)})")

    @property
    def halted(self) -> bool:
        return self._last_outcome is StepOutcome.HALTED

    @property
    def waiting_for_input(self) -> bool:
        return self._last_outcome is StepOutcome.WAITING_FOR_INPUT and not self.inputs

    def feed(self, *values: int) -> None:
        """Queue input values in order"""
        self.inputs.extend(values)

    def drain_output(self) -> List[int]:
        """Return and clear everything produced so far"""
        produced, self.outputs = self.outputs, []
        return produced

    def step(self) -> StepOutcome:
        if self.max_steps is not None and self.steps >= self.max_steps:
            # halting and suspending for input are not counted steps
            opcode = fetch(self).opcode
            if not (opcode == Opcode.HALT or (opcode == Opcode.INPUT and not self.inputs)):
                raise StepLimitExceededError(self.steps, self.max_steps)
        if self.trace:
            logger.debug("%s ip=%d base=%d %r", self.name, self.ip,
                         self.relative_base, fetch(self))
        outcome = step(self)
        if outcome is StepOutcome.CONTINUE:
            self.steps += 1
        self._last_outcome = outcome
        return outcome

    def run_until_blocked(self) -> StepOutcome:
        """Step until the machine halts or needs more input"""
        while True:
            outcome = self.step()
            if outcome is not StepOutcome.CONTINUE:
                return outcome
