import io

import pytest

from sigtalk.protocol import SIGUSR1, SIGUSR2, Encoding, encode_message
from sigtalk.server import Server


class Recorder:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def __call__(self, pid, signum):
        if self.fail:
            raise ProcessLookupError(pid)
        self.calls.append((pid, signum))


def feed(server, message, encoding, pid=4242):
    results = []
    for bit in encode_message(message):
        results.append(server.handle_signal(encoding.signal_for(bit), pid))
    return results


def test_standard_message_printed():
    out = io.StringIO()
    server = Server(stream=out)
    results = feed(server, "hello", Encoding.STANDARD)
    assert results[-1] == b"hello"
    assert all(r is None for r in results[:-1])
    assert out.getvalue() == "hello\n"


def test_standard_empty_message_prints_null():
    out = io.StringIO()
    server = Server(stream=out)
    results = feed(server, "", Encoding.STANDARD)
    assert results[-1] == b""
    assert out.getvalue() == "(null)\n"


def test_standard_consecutive_messages():
    out = io.StringIO()
    server = Server(stream=out)
    feed(server, "one", Encoding.STANDARD)
    feed(server, "two", Encoding.STANDARD)
    assert out.getvalue() == "one\ntwo\n"


def test_standard_sends_no_acknowledgements():
    kill = Recorder()
    server = Server(stream=io.StringIO(), kill=kill)
    feed(server, "x", Encoding.STANDARD)
    assert kill.calls == []


def test_acknowledged_every_bit_confirmed():
    kill = Recorder()
    out = io.StringIO()
    server = Server(acknowledged=True, stream=out, kill=kill)
    bits = list(encode_message("a"))
    feed(server, "a", Encoding.ACKNOWLEDGED, pid=777)
    assert out.getvalue() == "a\n"
    assert len(kill.calls) == len(bits) + 1
    assert kill.calls[-2] == (777, SIGUSR2)
    assert kill.calls[-1] == (777, SIGUSR1)
    assert all(call == (777, SIGUSR1) for call in kill.calls[:-2])


def test_acknowledged_empty_message_prints_nothing():
    kill = Recorder()
    out = io.StringIO()
    server = Server(acknowledged=True, stream=out, kill=kill)
    results = feed(server, "", Encoding.ACKNOWLEDGED, pid=55)
    assert results[-1] == b""
    assert out.getvalue() == ""
    assert (55, SIGUSR2) in kill.calls


def test_acknowledged_keeps_known_sender_when_pid_missing():
    kill = Recorder()
    server = Server(acknowledged=True, stream=io.StringIO(), kill=kill)
    server.handle_signal(Encoding.ACKNOWLEDGED.signal_for(0), 321)
    server.handle_signal(Encoding.ACKNOWLEDGED.signal_for(0), 0)
    assert kill.calls == [(321, SIGUSR1), (321, SIGUSR1)]


def test_acknowledged_failure_raises():
    server = Server(acknowledged=True, stream=io.StringIO(), kill=Recorder(fail=True))
    with pytest.raises(ConnectionError, match="SIGUSR1"):
        server.handle_signal(SIGUSR1, 99)


def test_acknowledged_without_sender_raises():
    server = Server(acknowledged=True, stream=io.StringIO(), kill=Recorder())
    with pytest.raises(ConnectionError):
        server.handle_signal(SIGUSR2, 0)


def test_unknown_signal_rejected():
    server = Server(stream=io.StringIO())
    with pytest.raises(ValueError):
        server.handle_signal(2, 1)