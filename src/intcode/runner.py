"""Synchronous Intcode runner."""

from typing import Iterable, List, Optional, Union
import logging

from .executor import StepOutcome
from .machine import Machine

logger = logging.getLogger(__name__)


def run(program: Union[str, Iterable[int]], inputs: Iterable[int] = (),
        max_steps: Optional[int] = None) -> List[int]:
    """Run a fresh machine on ``program`` with a finite input list.

    Returns every value the program produced once it halts or asks for input
    that was not supplied. Fatal failures propagate as IntcodeError.
    """
    machine = Machine(program, inputs, max_steps=max_steps)
    outcome = machine.run_until_blocked()
    if outcome is StepOutcome.WAITING_FOR_INPUT:
        logger.debug("Input exhausted after %d steps, returning %d outputs",
                     machine.steps, len(machine.outputs))
    return machine.drain_output()
