"""Minimal formatted output: %c %s %p %d %i %u %x %X and %% conversions."""

from __future__ import annotations

import operator
import os
import sys
from collections.abc import Callable
from typing import IO, Any

from sigtalk.chars import itoa

Target = "int | IO[str]"


def _int32(value: Any) -> int:
    return ((operator.index(value) + 2**31) % 2**32) - 2**31


def _uint32(value: Any) -> int:
    return operator.index(value) % 2**32


def _c_text(text: str) -> str:
    """The part of ``text`` before the first NUL character."""
    return text.split("\0", 1)[0]


def _format_char(arg: Any) -> str:
    if isinstance(arg, str):
        if len(arg) != 1:
            raise ValueError(f"%c expects a single character, got {arg!r}")
        return arg
    return chr(operator.index(arg) & 0xFF)


def _format_string(arg: Any) -> str:
    if arg is None:
        return "(null)"
    return _c_text(str(arg))


def _format_pointer(arg: Any) -> str:
    if arg is None:
        return "(nil)"
    address = arg if isinstance(arg, int) else id(arg)
    address %= 2**64
    if address == 0:
        return "(nil)"
    return "0x" + format(address, "x")


_CONVERSIONS: dict[str, Callable[[Any], str]] = {
    "c": _format_char,
    "s": _format_string,
    "p": _format_pointer,
    "d": lambda arg: str(_int32(arg)),
    "i": lambda arg: str(_int32(arg)),
    "u": lambda arg: str(_uint32(arg)),
    "x": lambda arg: format(_uint32(arg), "x"),
    "X": lambda arg: format(_uint32(arg), "X"),
}


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text.

    Unknown conversions print nothing and take no argument; a lone ``%`` at
    the end of the format is dropped. Raises TypeError when ``fmt`` is None
    or when the format needs more arguments than were given.
    """
    if fmt is None:
        raise TypeError("format must not be None")
    pieces: list[str] = []
    remaining = iter(args)
    chars = iter(_c_text(fmt))
    for ch in chars:
        if ch != "%":
            pieces.append(ch)
            continue
        spec = next(chars, None)
        if spec is None:
            break
        if spec == "%":
            pieces.append("%")
            continue
        convert = _CONVERSIONS.get(spec)
        if convert is None:
            continue
        try:
            arg = next(remaining)
        except StopIteration:
            raise TypeError(f"not enough arguments for format {fmt!r}") from None
        pieces.append(convert(arg))
    return "".join(pieces)


def _write(target: int | IO[str], text: str) -> None:
    if isinstance(target, int):
        data = text.encode("utf-8", "surrogateescape")
        view = memoryview(data)
        while view:
            written = os.write(target, view)
            view = view[written:]
    else:
        target.write(text)


def printf(fmt: str, *args: Any, stream: int | IO[str] | None = None) -> int:
    """Format like :func:`sprintf`, write to ``stream`` (stdout by default).

    ``stream`` is a text stream or a file descriptor. Returns the number of
    characters written.
    """
    text = sprintf(fmt, *args)
    _write(sys.stdout if stream is None else stream, text)
    return len(text)


def put_char(c: int | str, fd: int | IO[str]) -> None:
    """Write one character to ``fd``."""
    _write(fd, _format_char(c))


def put_str(s: str | None, fd: int | IO[str]) -> None:
    """Write ``s`` to ``fd``; nothing for None."""
    if s is not None:
        _write(fd, _c_text(s))


def put_endl(s: str | None, fd: int | IO[str]) -> None:
    """Write ``s`` and a newline to ``fd``; nothing for None."""
    if s is not None:
        _write(fd, _c_text(s) + "\n")


def put_nbr(n: int, fd: int | IO[str]) -> None:
    """Write the 32-bit signed integer ``n`` in decimal to ``fd``."""
    _write(fd, itoa(n))