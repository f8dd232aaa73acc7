"""
Program memory for the Intcode VM.

Memory is a flat list of integer cells that only ever grows. Growth fills
the new cells with zero, the same way an extend-mode safe array behaves.
"""

import re
from typing import Iterable, Iterator, List, Union

from .errors import InvalidAddressError, ProgramParseError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_LITERAL = re.compile(r"[+-]?[0-9]+")


def _check_range(value: int, literal: str, index: int) -> int:
    if value < INT64_MIN or value > INT64_MAX:
        raise ProgramParseError(
            f"Literal {literal} at position {index} does not fit in 64 bits",
            literal=literal, index=index,
        )
    return value


def parse_program(text: str) -> List[int]:
    """Parse comma separated decimal literals into a list of cells.

    A trailing separator is tolerated and surrounding whitespace (such as the
    newline at the end of a program file) is ignored.
    """
    if text is None:
        raise ProgramParseError("No program text given")

    stripped = text.strip()
    if not stripped:
        raise ProgramParseError("Program text is empty")

    parts = stripped.split(",")
    if parts[-1] == "":
        parts.pop()

    cells: List[int] = []
    for index, raw in enumerate(parts):
        literal = raw.strip()
        if not _LITERAL.fullmatch(literal):
            raise ProgramParseError(
                f"Invalid integer literal {literal!r} at position {index}",
                literal=literal, index=index,
            )
        cells.append(_check_range(int(literal), literal, index))
    return cells


class Memory:
    """Growable, zero-filled cell array addressed by non-negative index."""

    def __init__(self, cells: Union[str, Iterable[int]] = ()):
        if isinstance(cells, str):
            self._cells = parse_program(cells)
        else:
            self._cells = [_check_range(int(c), str(c), i) for i, c in enumerate(cells)]

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[int]:
        return iter(self._cells)

    def __getitem__(self, address: int) -> int:
        return self._cells[address]

    def __setitem__(self, address: int, value: int):
        self._cells[address] = value

    def __repr__(self) -> str:
        return f"Memory(len={len(self._cells)})"

    def ensure(self, address: int, pointer: int = -1) -> None:
        """Grow memory so that ``address`` is a valid cell.

        Raises InvalidAddressError for negative addresses; ``pointer`` is only
        used to report where the bad address came from.
        """
        if address < 0:
            raise InvalidAddressError(address, pointer)
        missing = address + 1 - len(self._cells)
        if missing > 0:
            self._cells.extend([0] * missing)

    def snapshot(self) -> List[int]:
        """Copy of the current cells"""
        return list(self._cells)
