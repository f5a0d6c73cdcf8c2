"""Server that rebuilds messages sent bit by bit as user signals and prints them."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable
from typing import IO

from sigtalk.printf import printf
from sigtalk.protocol import SIGUSR1, SIGUSR2, Encoding, MessageDecoder

KillFunc = Callable[[int, int], None]


class Server:
    """Decodes incoming bit signals and writes each finished message as a line.

    In acknowledged mode every bit is answered with SIGUSR1 to the sender,
    and a finished message is also answered with SIGUSR2.
    """

    def __init__(
        self,
        acknowledged: bool = False,
        stream: IO[str] | None = None,
        kill: KillFunc | None = None,
    ) -> None:
        self.acknowledged = acknowledged
        self.encoding = Encoding.ACKNOWLEDGED if acknowledged else Encoding.STANDARD
        self._stream = stream
        self._kill = kill if kill is not None else os.kill
        self._decoder = MessageDecoder()
        self._client_pid = 0

    def _output(self, message: bytes) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        text = message.decode("utf-8", "replace") if message else None
        printf("%s\n", text, stream=stream)
        stream.flush()

    def _notify(self, signum: int) -> None:
        name = "SIGUSR2" if signum == SIGUSR2 else "SIGUSR1"
        if self._client_pid <= 0:
            raise ConnectionError(f"Communication failed. Signal: {name} (no client)")
        try:
            self._kill(self._client_pid, signum)
        except OSError as exc:
            raise ConnectionError(f"Communication failed. Signal: {name}") from exc

    def handle_signal(self, signum: int, sender_pid: int = 0) -> bytes | None:
        """Take one signal; return the message once it is complete.

        Raises ValueError for a signal that carries no bit and ConnectionError
        when an acknowledgement cannot be delivered.
        """
        bit = self.encoding.bit_for(signum)
        if sender_pid:
            self._client_pid = sender_pid
        message = self._decoder.feed(bit)
        if message is not None:
            if not self.acknowledged:
                self._output(message)
            else:
                if message:
                    self._output(message)
                self._notify(SIGUSR2)
        if self.acknowledged:
            self._notify(SIGUSR1)
        return message

    def serve_forever(self) -> None:
        """Wait for signals and handle them until interrupted."""
        signals = {SIGUSR1, SIGUSR2}
        if hasattr(signal, "sigwaitinfo"):
            previous = signal.pthread_sigmask(signal.SIG_BLOCK, signals)
            try:
                while True:
                    info = signal.sigwaitinfo(signals)
                    self.handle_signal(info.si_signo, info.si_pid)
            finally:
                signal.pthread_sigmask(signal.SIG_SETMASK, previous)
        if self.acknowledged:
            raise OSError("acknowledged mode needs to know the sending process")
        previous_handlers = {
            signum: signal.signal(signum, lambda s, _frame: self.handle_signal(s, 0))
            for signum in signals
        }
        try:
            while True:
                signal.pause()
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)


def main(argv: list[str] | None = None) -> int:
    """Print the server PID and serve; ``--ack`` selects acknowledged mode."""
    args = list(sys.argv[1:] if argv is None else argv)
    acknowledged = "--ack" in args
    extra = [arg for arg in args if arg != "--ack"]
    if extra:
        printf("Error! Use: server [--ack]\n")
        return 1
    server = Server(acknowledged=acknowledged)
    printf("Server PID: %d\n", os.getpid())
    sys.stdout.flush()
    try:
        server.serve_forever()
    except ConnectionError as exc:
        printf("Error! %s\n", str(exc))
        return 1
    except KeyboardInterrupt:
        return 0
    return 0