"""Bit-level wire protocol: each byte goes as eight signals, low bit first,
and a NUL byte ends a message."""

from __future__ import annotations

import enum
import signal
from collections.abc import Iterator

SIGUSR1 = getattr(signal, "SIGUSR1", 10)
SIGUSR2 = getattr(signal, "SIGUSR2", 12)

BITS_PER_CHAR = 8


def _check_bit(bit: int) -> int:
    if bit not in (0, 1):
        raise ValueError(f"a bit must be 0 or 1, got {bit!r}")
    return int(bit)


class Encoding(enum.Enum):
    """How bits map onto the two user signals.

    STANDARD sends 0 as SIGUSR1 and 1 as SIGUSR2; ACKNOWLEDGED, used by the
    variant in which the server confirms every bit, sends them the other way.
    """

    STANDARD = "standard"
    ACKNOWLEDGED = "acknowledged"

    @property
    def _signals(self) -> tuple[int, int]:
        if self is Encoding.STANDARD:
            return SIGUSR1, SIGUSR2
        return SIGUSR2, SIGUSR1

    def signal_for(self, bit: int) -> int:
        """The signal that carries ``bit``."""
        return self._signals[_check_bit(bit)]

    def bit_for(self, signum: int) -> int:
        """The bit carried by ``signum``; ValueError for any other signal."""
        zero, one = self._signals
        if signum == one:
            return 1
        if signum == zero:
            return 0
        raise ValueError(f"signal {signum} carries no bit")


def _byte_value(c: int | str | bytes) -> int:
    if isinstance(c, (str, bytes, bytearray)):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        value = ord(c)
    else:
        value = int(c)
    if not 0 <= value <= 255:
        raise ValueError(f"{c!r} does not fit in one byte")
    return value


def encode_char(c: int | str | bytes) -> tuple[int, ...]:
    """The eight bits of one byte, lowest bit first."""
    value = _byte_value(c)
    return tuple((value >> bit) & 1 for bit in range(BITS_PER_CHAR))


def encode_message(message: str | bytes) -> Iterator[int]:
    """Bits for every byte of ``message`` and then for the closing NUL.

    Text is sent as UTF-8; the message ends at its first NUL, if any.
    """
    data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    data = data.split(b"\0", 1)[0]
    for byte in data:
        yield from encode_char(byte)
    yield from encode_char(0)


class MessageDecoder:
    """Rebuilds messages from bits fed one at a time."""

    def __init__(self) -> None:
        self._current = 0
        self._bit_count = 0
        self._buffer = bytearray()

    def feed(self, bit: int) -> bytes | None:
        """Take one bit; return the whole message once its NUL arrives."""
        self._current |= _check_bit(bit) << self._bit_count
        self._bit_count += 1
        if self._bit_count < BITS_PER_CHAR:
            return None
        value = self._current
        self._current = 0
        self._bit_count = 0
        if value == 0:
            message = bytes(self._buffer)
            self._buffer.clear()
            return message
        self._buffer.append(value)
        return None