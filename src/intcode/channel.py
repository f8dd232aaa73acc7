"""
Point-to-point channels between Intcode machines.

A channel is an unbounded FIFO with one producer and one consumer. Either
end can be closed independently:
- the sender closes when it has nothing more to send; once the buffer is
  drained, receive() returns None (end of stream)
- the receiver closes when it stops listening; any later send() raises
  ChannelClosedError, which is how a producer learns its consumer halted

send() never blocks. receive() is the only blocking operation.
"""

from collections import deque
from dataclasses import dataclass, field
from threading import Condition, Lock
from typing import Deque, Iterator, Optional
import logging
import time

from .errors import ChannelClosedError

logger = logging.getLogger(__name__)


@dataclass
class Channel:
    """
    Unbounded FIFO channel of integers

    Example:
        channel = Channel("a->b")
        channel.send(42)
        value = channel.receive()
    """

    name: str = "channel"
    _buffer: Deque[int] = field(default_factory=deque)
    _lock: Lock = field(default_factory=Lock)
    _recv_ready: Condition = field(default=None)
    _closed: bool = field(default=False)
    _receiver_closed: bool = field(default=False)

    def __post_init__(self):
        self._recv_ready = Condition(self._lock)

    @property
    def is_open(self) -> bool:
        """True while both ends are still attached"""
        with self._lock:
            return not self._closed and not self._receiver_closed

    @property
    def receiver_closed(self) -> bool:
        with self._lock:
            return self._receiver_closed

    def send(self, value: int) -> None:
        """
        Queue value for the receiver

        Raises:
            ChannelClosedError: If either end of the channel is closed
        """
        with self._lock:
            if self._closed or self._receiver_closed:
                raise ChannelClosedError(self.name, value)
            self._buffer.append(value)
            self._recv_ready.notify()

    def receive(self, timeout: Optional[float] = None) -> Optional[int]:
        """
        Receive the next value (blocking)

        Args:
            timeout: Maximum wait time (None = infinite)

        Returns:
            Next value, or None once the sender closed and the buffer is empty

        Raises:
            TimeoutError: If timeout expires with nothing to receive
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._lock:
            while not self._buffer:
                if self._closed or self._receiver_closed:
                    return None
                if deadline is None:
                    self._recv_ready.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError(f"Timeout receiving from channel '{self.name}'")
                self._recv_ready.wait(remaining)
            return self._buffer.popleft()

    def close(self) -> None:
        """Sender side: no more values will be sent"""
        with self._lock:
            if not self._closed:
                logger.debug("Channel '%s' closed by sender", self.name)
            self._closed = True
            self._recv_ready.notify_all()

    def close_receiver(self) -> None:
        """Receiver side: stop listening and discard anything buffered"""
        with self._lock:
            if not self._receiver_closed:
                logger.debug("Channel '%s' closed by receiver (%d values dropped)",
                             self.name, len(self._buffer))
            self._receiver_closed = True
            self._buffer.clear()
            self._recv_ready.notify_all()

    def pending(self) -> int:
        """Number of buffered values"""
        with self._lock:
            return len(self._buffer)

    def __iter__(self) -> Iterator[int]:
        while True:
            value = self.receive()
            if value is None:
                return
            yield value

    def __repr__(self) -> str:
        if self._receiver_closed:
            status = "receiver closed"
        elif self._closed:
            status = "closed"
        else:
            status = "open"
        return f"Channel({self.name}, pending={len(self._buffer)}, {status})"
