"""Client that sends a message to a server process as a stream of user signals."""

from __future__ import annotations

import os
import signal
import sys
import time

from sigtalk.chars import atoi
from sigtalk.printf import printf
from sigtalk.protocol import SIGUSR1, SIGUSR2, Encoding, encode_message


def _send(pid: int, signum: int) -> None:
    try:
        os.kill(pid, signum)
    except OSError as exc:
        raise ConnectionError(f"Failed to send signal to {pid} PID.") from exc


def _drain(signals: set[int]) -> None:
    while signals & set(signal.sigpending()):
        signal.sigwait(signals & set(signal.sigpending()))


def send_message(
    pid: int,
    message: str | bytes,
    acknowledged: bool = False,
    delay: float = 0.001,
) -> bool:
    """Send ``message`` and its closing NUL to ``pid``, one signal per bit.

    In acknowledged mode each bit waits for the server's SIGUSR1; returns True
    once the server confirms the whole message with SIGUSR2. The plain mode
    never receives a confirmation and returns False.
    Raises ConnectionError when a signal cannot be sent.
    """
    if pid <= 0:
        raise ValueError(f"invalid server PID {pid}")
    encoding = Encoding.ACKNOWLEDGED if acknowledged else Encoding.STANDARD
    bits = encode_message(message)
    if not acknowledged:
        for bit in bits:
            _send(pid, encoding.signal_for(bit))
            time.sleep(delay)
        return False

    waited = {SIGUSR1, SIGUSR2}
    previous_handlers = {
        signum: signal.signal(signum, lambda _s, _f: None) for signum in waited
    }
    previous_mask = signal.pthread_sigmask(signal.SIG_BLOCK, waited)
    try:
        for bit in bits:
            _send(pid, encoding.signal_for(bit))
            time.sleep(delay)
            if signal.sigwait(waited) == SIGUSR2:
                return True
        if SIGUSR2 in signal.sigpending():
            signal.sigwait({SIGUSR2})
            return True
        return False
    finally:
        _drain(waited)
        signal.pthread_sigmask(signal.SIG_SETMASK, previous_mask)
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)


def main(argv: list[str] | None = None) -> int:
    """Command line: ``client [--ack] <PID server> <message>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    acknowledged = "--ack" in args
    positional = [arg for arg in args if arg != "--ack"]
    if len(positional) != 2:
        printf("Error! Use: ./client <PID server> <message>\n")
        return 1
    pid = atoi(positional[0])
    try:
        confirmed = send_message(pid, positional[1], acknowledged=acknowledged)
    except ValueError as exc:
        printf("Error! %s\n", str(exc))
        return 1
    except ConnectionError as exc:
        printf("Error! %s\n", str(exc))
        return 1
    if confirmed:
        printf("Message sent successfully!!\n")
    elif not acknowledged:
        printf("Message sent succesfully!!\n")
    return 0