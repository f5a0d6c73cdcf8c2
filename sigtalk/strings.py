"""C-string style searching, slicing, joining, splitting and mapping on text.

Every function treats its text the way a C string is read: only the part
before the first NUL character counts.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence

NUL = "\0"


def _terminated(s: str) -> str:
    """The part of ``s`` before the first NUL character."""
    return s.split(NUL, 1)[0]


def _char(c: int | str) -> str:
    """``c`` as a one-character string; ints are taken modulo 256."""
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        return c
    return chr(int(c) & 0xFF)


def strchr(s: str, c: int | str) -> int | None:
    """Index of the first ``c`` in ``s``, or None.

    Searching for NUL finds the terminator, at ``len(s)``.
    """
    text = _terminated(s)
    target = _char(c)
    if target == NUL:
        return len(text)
    index = text.find(target)
    return None if index < 0 else index


def strrchr(s: str, c: int | str) -> int | None:
    """Index of the last ``c`` in ``s``, or None.

    Searching for NUL finds the terminator, at ``len(s)``.
    """
    text = _terminated(s)
    target = _char(c)
    if target == NUL:
        return len(text)
    index = text.rfind(target)
    return None if index < 0 else index


def strncmp(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters; 0 if equal, else the code difference.

    The end of a string counts as code 0.
    """
    if n < 0:
        raise ValueError(f"negative length {n}")
    a = _terminated(s1)
    b = _terminated(s2)
    for index in range(n):
        x = ord(a[index]) if index < len(a) else 0
        y = ord(b[index]) if index < len(b) else 0
        if x != y or x == 0:
            return x - y
    return 0


def strnstr(big: str, little: str, length: int) -> int | None:
    """Index of the first ``little`` that lies wholly within ``length`` characters of ``big``.

    An empty ``little`` is found at 0.
    """
    if length < 0:
        raise ValueError(f"negative length {length}")
    haystack = _terminated(big)
    needle = _terminated(little)
    if not needle:
        return 0
    limit = min(length, len(haystack))
    index = haystack[:limit].find(needle)
    return None if index < 0 else index


def substr(s: str, start: int, length: int) -> str:
    """At most ``length`` characters of ``s`` from ``start``; empty past the end."""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    text = _terminated(s)
    if start >= len(text):
        return ""
    return text[start:start + length]


def strjoin(s1: str | None, s2: str | None) -> str:
    """``s1`` followed by ``s2``; a missing side counts as empty."""
    return _terminated(s1 or "") + _terminated(s2 or "")


def split(s: str, sep: int | str) -> list[str]:
    """The non-empty runs of ``s`` between occurrences of ``sep``."""
    text = _terminated(s)
    separator = _char(sep)
    if separator == NUL:
        return [text] if text else []
    return [word for word in text.split(separator) if word]


def strtrim(s: str | None, charset: str | None) -> str:
    """``s`` without leading and trailing characters found in ``charset``.

    A missing ``s`` gives an empty string; a missing ``charset`` trims nothing.
    """
    if s is None:
        return ""
    text = _terminated(s)
    if charset is None:
        return text
    return text.strip(_terminated(charset))


def strmapi(s: str | None, f: Callable[[int, str], str] | None) -> str:
    """A new string of ``f(index, char)`` for each character of ``s``.

    A missing ``s`` or ``f`` gives an empty string.
    """
    if s is None or f is None:
        return ""
    return "".join(f(index, ch) for index, ch in enumerate(_terminated(s)))


def striteri(
    chars: MutableSequence[str] | None,
    f: Callable[[int, str], str | None] | None,
) -> None:
    """Replace each character of ``chars`` in place by ``f(index, char)``.

    Stops at the first NUL. When ``f`` returns None the character is kept.
    """
    if chars is None or f is None:
        return
    for index, ch in enumerate(chars):
        if ch == NUL:
            break
        replacement = f(index, ch)
        if replacement is not None:
            chars[index] = replacement