"""
Amplifier pipelines.

Several copies of one program are chained so that each stage's output is the
next stage's input. Every stage is primed with its phase setting and the
head stage additionally with the initial signal.

- run_in_sequence: stages run one after another with the synchronous runner
- run_chain: one thread per stage, connected by channels
- run_feedback_loop: run_chain plus a controller that relays the tail's
  output back into the head until the head has halted
- run_feedback_round_robin: the same loop on a single thread, stepping each
  machine until it blocks
- find_max_signal: best final signal over every phase permutation

Usage:
    from intcode.pipeline import run_feedback_loop

    signal = run_feedback_loop(program, [9, 8, 7, 6, 5])
"""

from itertools import permutations
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
import logging

from .amplifier import Amplifier, spawn
from .channel import Channel
from .errors import ChannelClosedError, DeadlockError, PipelineError
from .machine import Machine
from .runner import run

logger = logging.getLogger(__name__)

_STAGE_NAMES = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def stage_name(index: int) -> str:
    if index < len(_STAGE_NAMES):
        return _STAGE_NAMES[index]
    return f"amp{index}"


def _check_phases(phases: Sequence[int]) -> List[int]:
    phases = list(phases)
    if not phases:
        raise ValueError("At least one phase setting is required")
    return phases


def run_in_sequence(program: str, phases: Sequence[int], signal: int = 0) -> Optional[int]:
    """Run each stage to completion before starting the next one."""
    for phase in _check_phases(phases):
        outputs = run(program, [phase, signal])
        if not outputs:
            return None
        signal = outputs[-1]
    return signal


def _spawn_chain(program: str, phases: Sequence[int], signal: int,
                 tail: Channel) -> List[Amplifier]:
    count = len(phases)
    channels = [Channel(f"->{stage_name(i)}") for i in range(count)]
    channels.append(tail)

    # Prime before any thread starts so phases always arrive first
    for channel, phase in zip(channels, phases):
        channel.send(phase)
    channels[0].send(signal)

    return [
        spawn(program, stage_name(i), inbound=channels[i], outbound=channels[i + 1])
        for i in range(count)
    ]


def _join_and_check(amplifiers: Iterable[Amplifier]) -> None:
    failure = None
    for amp in amplifiers:
        amp.join()
        if amp.error is not None and not isinstance(amp.error, ChannelClosedError):
            failure = failure or amp
    if failure is not None:
        raise PipelineError(failure.name, failure.error) from failure.error


def run_chain(program: str, phases: Sequence[int], signal: int = 0) -> Optional[int]:
    """Run every stage on its own thread; return the tail's last output."""
    phases = _check_phases(phases)
    tail = Channel("controller")
    amplifiers = _spawn_chain(program, phases, signal, tail)
    # The head gets nothing beyond its phase and the initial signal
    amplifiers[0].inbound.close()

    last = None
    for value in tail:
        last = value

    _join_and_check(amplifiers)
    logger.info("Chain %s finished with signal %s", phases, last)
    return last


def run_feedback_loop(program: str, phases: Sequence[int], signal: int = 0) -> Optional[int]:
    """Run the stages in a ring closed by an explicit relay.

    The controller forwards every value from the tail back to the head. A
    forward that fails because the head already halted means the value is
    the final signal. If the tail stops first, the last value it produced is
    returned.
    """
    phases = _check_phases(phases)
    tail = Channel("controller")
    amplifiers = _spawn_chain(program, phases, signal, tail)
    head = amplifiers[0].inbound

    last = None
    try:
        for value in tail:
            last = value
            try:
                head.send(value)
            except ChannelClosedError:
                logger.debug("Head halted, %s is the final signal", value)
                break
    finally:
        # Nothing else will feed the head
        head.close()

    _join_and_check(amplifiers)
    logger.info("Feedback loop %s finished with signal %s", phases, last)
    return last


def run_feedback_round_robin(program: str, phases: Sequence[int],
                             signal: int = 0) -> Optional[int]:
    """Cooperative single threaded version of run_feedback_loop.

    A stage stops once it halts, or when it waits for input after the stage
    feeding it has stopped. The head is fed by the tail, so a stopped tail
    ends the loop the same way a closed controller channel does.
    """
    phases = _check_phases(phases)
    machines = [Machine(program, [phase], name=stage_name(i)) for i, phase in enumerate(phases)]
    machines[0].feed(signal)
    stopped = [False] * len(machines)

    last = None
    while True:
        progressed = False
        for index, machine in enumerate(machines):
            if stopped[index]:
                continue
            before = machine.steps
            machine.run_until_blocked()
            outputs = machine.drain_output()
            # index - 1 wraps to the tail for the head
            if machine.halted or stopped[index - 1]:
                stopped[index] = True
                logger.debug("Stage %s stopped", machine.name)
            progressed = (progressed or bool(outputs) or stopped[index]
                          or machine.steps != before)

            if index + 1 < len(machines):
                machines[index + 1].feed(*outputs)
                continue
            for value in outputs:
                last = value
                if machines[0].halted:
                    logger.debug("Head halted, %s is the final signal", value)
                    return last
                machines[0].feed(value)

        if all(stopped):
            return last
        if not progressed:
            # Every running machine waits on a live stage that waits too
            raise DeadlockError(phases)


def find_max_signal(program: str, phase_values: Iterable[int],
                    feedback: bool = False) -> Tuple[Optional[int], Tuple[int, ...]]:
    """Try every ordering of ``phase_values`` and keep the highest signal."""
    runner: Callable[[str, Sequence[int]], Optional[int]]
    runner = run_feedback_loop if feedback else run_in_sequence

    best_signal: Optional[int] = None
    best_phases: Tuple[int, ...] = ()
    for candidate in permutations(phase_values):
        result = runner(program, candidate)
        if result is not None and (best_signal is None or result > best_signal):
            best_signal, best_phases = result, candidate
    logger.info("Best signal %s with phases %s", best_signal, best_phases)
    return best_signal, best_phases
