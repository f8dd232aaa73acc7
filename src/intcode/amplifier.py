"""
Threaded Intcode runner.

An Amplifier runs one machine on its own daemon thread. It reads input from
an inbound channel and writes output to an outbound channel:

- when the machine asks for input, pending output is flushed downstream in
  order, then the thread blocks on the inbound channel
- when the machine halts, the inbound receiver is closed first (so upstream
  sends start failing), the last output is flushed and the outbound channel
  is closed, which downstream sees as end of stream
- when the inbound channel reports end of stream while the machine waits,
  the amplifier flushes and stops as if its producer had halted

A fatal failure is kept on ``error`` and both channel ends are closed, so
neighbours observe it as a dropped channel.
"""

from typing import Iterable, Optional, Union
import logging
import threading

from .channel import Channel
from .errors import ChannelClosedError, IntcodeError
from .executor import StepOutcome
from .machine import Machine

logger = logging.getLogger(__name__)


class Amplifier:
    def __init__(self, program: Union[str, Iterable[int]], name: str,
                 inbound: Optional[Channel] = None, outbound: Optional[Channel] = None,
                 max_steps: Optional[int] = None):
        self.name = name
        self.machine = Machine(program, name=name, max_steps=max_steps)
        self.inbound = inbound if inbound is not None else Channel(f"{name}.in")
        self.outbound = outbound if outbound is not None else Channel(f"{name}.out")
        self.error: Optional[IntcodeError] = None
        self._thread = threading.Thread(target=self._run, name=f"intcode-{name}", daemon=True)

    def __repr__(self):
        state = "running" if self.is_alive() else ("failed" if self.error else "stopped")
        return f"Amplifier({self.name!r}, {state})"

    def start(self) -> "Amplifier":
        self._thread.start()
        return self

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the thread; returns False if it is still running"""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    @property
    def halted(self) -> bool:
        return self.machine.halted

    def _flush(self) -> None:
        for value in self.machine.drain_output():
            self.outbound.send(value)

    def _drive(self) -> None:
        machine = self.machine
        while True:
            outcome = machine.run_until_blocked()
            if outcome is StepOutcome.HALTED:
                self.inbound.close_receiver()
                self._flush()
                logger.info("Amplifier %s halted after %d steps", self.name, machine.steps)
                return

            self._flush()
            value = self.inbound.receive()
            if value is None:
                logger.info("Amplifier %s: upstream closed while waiting for input", self.name)
                return
            machine.feed(value)

    def _run(self) -> None:
        logger.info("Amplifier %s started", self.name)
        try:
            self._drive()
        except ChannelClosedError as exc:
            self.error = exc
            logger.warning("Amplifier %s: %s", self.name, exc)
        except IntcodeError as exc:
            self.error = exc
            logger.error("Amplifier %s failed: %s", self.name, exc)
        finally:
            self.inbound.close_receiver()
            self.outbound.close()


def spawn(program: Union[str, Iterable[int]], name: str,
          inbound: Optional[Channel] = None, outbound: Optional[Channel] = None,
          max_steps: Optional[int] = None) -> Amplifier:
    """Start ``program`` on its own thread.

    The returned amplifier's ``inbound`` and ``outbound`` attributes are the
    handles used to feed it and read from it. Pass existing channels to wire
    amplifiers together.
    """
    return Amplifier(program, name, inbound, outbound, max_steps).start()
