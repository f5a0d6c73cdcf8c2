"""Byte-buffer helpers: fill, copy, search, compare and bounded C-string copies."""

from __future__ import annotations

SIZE_MAX = 2**64 - 1


def _check_length(buf_len: int, n: int, what: str) -> None:
    if n < 0:
        raise ValueError(f"negative length {n}")
    if n > buf_len:
        raise ValueError(f"{what} holds {buf_len} bytes, {n} requested")


def _cstrlen(data: bytes | bytearray | memoryview) -> int:
    """Length of the C string in ``data``: up to the first NUL, or all of it."""
    raw = bytes(data)
    index = raw.find(0)
    return len(raw) if index < 0 else index


def memset(buf: bytearray, value: int, n: int) -> bytearray:
    """Set the first ``n`` bytes of ``buf`` to ``value`` (taken modulo 256)."""
    _check_length(len(buf), n, "buffer")
    buf[:n] = bytes([value & 0xFF]) * n
    return buf


def bzero(buf: bytearray, n: int) -> None:
    """Zero the first ``n`` bytes of ``buf``."""
    memset(buf, 0, n)


def memcpy(dest: bytearray, src: bytes | bytearray | memoryview, n: int) -> bytearray:
    """Copy ``n`` bytes from ``src`` to the start of ``dest``."""
    _check_length(len(dest), n, "destination")
    _check_length(len(src), n, "source")
    dest[:n] = bytes(src[:n])
    return dest


def memmove(buf: bytearray, dest: int, src: int, n: int) -> bytearray:
    """Move ``n`` bytes within ``buf`` from offset ``src`` to offset ``dest``.

    Overlapping ranges are handled correctly.
    """
    if dest < 0 or src < 0:
        raise ValueError("offsets must not be negative")
    _check_length(len(buf) - dest, n, "destination range")
    _check_length(len(buf) - src, n, "source range")
    if n and dest != src:
        buf[dest:dest + n] = bytes(buf[src:src + n])
    return buf


def memchr(data: bytes | bytearray | memoryview, value: int, n: int) -> int | None:
    """Index of the first byte equal to ``value`` within ``n`` bytes, or None."""
    _check_length(len(data), n, "buffer")
    index = bytes(data[:n]).find(value & 0xFF)
    return None if index < 0 else index


def memcmp(a: bytes | bytearray | memoryview, b: bytes | bytearray | memoryview, n: int) -> int:
    """Difference of the first differing bytes within ``n``; 0 if equal."""
    _check_length(len(a), n, "first buffer")
    _check_length(len(b), n, "second buffer")
    for x, y in zip(bytes(a[:n]), bytes(b[:n])):
        if x != y:
            return x - y
    return 0


def calloc(nmemb: int, size: int) -> bytearray:
    """A zero-filled buffer of ``nmemb * size`` bytes.

    Raises MemoryError when the total would overflow a 64-bit size.
    """
    if nmemb < 0 or size < 0:
        raise ValueError("counts must not be negative")
    if nmemb == 0 or size == 0:
        return bytearray()
    if nmemb > SIZE_MAX // size:
        raise MemoryError(f"{nmemb} * {size} bytes overflows the size limit")
    return bytearray(nmemb * size)


def strlcpy(dst: bytearray, src: bytes | bytearray | memoryview, size: int) -> int:
    """Copy the C string ``src`` into ``dst``, at most ``size - 1`` bytes, NUL-terminated.

    Returns the length of ``src``.
    """
    src_len = _cstrlen(src)
    if size > 0:
        count = min(src_len, size - 1)
        _check_length(len(dst), count + 1, "destination")
        dst[:count] = bytes(src[:count])
        dst[count] = 0
    return src_len


def strlcat(dst: bytearray, src: bytes | bytearray | memoryview, size: int) -> int:
    """Append the C string ``src`` to the C string in ``dst`` within ``size`` bytes.

    Returns the length the joined string would have had; when ``size`` is no
    more than the current length of ``dst``, returns ``size`` plus the length
    of ``src`` and leaves ``dst`` untouched.
    """
    dst_len = _cstrlen(dst)
    src_len = _cstrlen(src)
    if size <= dst_len:
        return size + src_len
    count = min(src_len, size - dst_len - 1)
    _check_length(len(dst) - dst_len, count + 1, "destination")
    dst[dst_len:dst_len + count] = bytes(src[:count])
    dst[dst_len + count] = 0
    return dst_len + src_len