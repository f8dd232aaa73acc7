"""ASCII conventions layered on top of integer input and output.

Some programs take text as input: every character becomes one input value
(its ordinal) and lines end with a newline (10). Output mixes printable
ASCII with plain integer results, which split_ascii_output separates.
"""

from typing import Iterable, List, Tuple

NEWLINE = 10
_ASCII_MAX = 127


def encode_ascii(text: str) -> List[int]:
    """Map each character of ``text`` to its ordinal."""
    values = []
    for index, char in enumerate(text):
        code = ord(char)
        if code > _ASCII_MAX:
            raise ValueError(f"Non-ASCII character {char!r} at position {index}")
        values.append(code)
    return values


def encode_lines(lines: Iterable[str]) -> List[int]:
    """Encode lines of text, each terminated by a newline."""
    values: List[int] = []
    for line in lines:
        values.extend(encode_ascii(line.rstrip("\n")))
        values.append(NEWLINE)
    return values


def split_ascii_output(values: Iterable[int]) -> Tuple[str, List[int]]:
    """Split output into rendered text and the values outside ASCII range."""
    chars = []
    others = []
    for value in values:
        if 0 <= value <= _ASCII_MAX:
            chars.append(chr(value))
        else:
            others.append(value)
    return "".join(chars), others
