import pytest

from sigtalk.protocol import (
    SIGUSR1,
    SIGUSR2,
    Encoding,
    MessageDecoder,
    encode_char,
    encode_message,
)


def _decode_all(bits):
    decoder = MessageDecoder()
    return [m for m in (decoder.feed(b) for b in bits) if m is not None]


def test_encode_char_low_bit_first():
    assert encode_char("A") == (1, 0, 0, 0, 0, 0, 1, 0)


def test_encode_char_int_and_str_agree():
    assert encode_char(ord("z")) == encode_char("z") == encode_char(b"z")


def test_encode_char_rejects_wide_values():
    with pytest.raises(ValueError):
        encode_char(256)
    with pytest.raises(ValueError):
        encode_char("ab")


def test_empty_message_is_only_terminator():
    assert list(encode_message("")) == [0] * 8


def test_message_length():
    bits = list(encode_message("hello"))
    assert len(bits) == 8 * (len("hello") + 1)
    assert bits[-8:] == [0] * 8


@pytest.mark.parametrize("message", ["hello", "Hola, mundo!", "ñandú €", ""])
def test_round_trip(message):
    assert _decode_all(encode_message(message)) == [message.encode("utf-8")]


def test_round_trip_bytes():
    data = bytes(range(1, 256))
    assert _decode_all(encode_message(data)) == [data]


def test_message_ends_at_nul():
    assert _decode_all(encode_message("ab\0cd")) == [b"ab"]


def test_several_messages_in_sequence():
    bits = list(encode_message("first")) + list(encode_message("second"))
    assert _decode_all(bits) == [b"first", b"second"]


def test_partial_message_returns_nothing():
    decoder = MessageDecoder()
    results = [decoder.feed(b) for b in encode_char("x")]
    assert results == [None] * 8


def test_feed_rejects_non_bits():
    with pytest.raises(ValueError):
        MessageDecoder().feed(2)


def test_standard_encoding_signals():
    assert Encoding.STANDARD.signal_for(0) == SIGUSR1
    assert Encoding.STANDARD.signal_for(1) == SIGUSR2


def test_acknowledged_encoding_signals():
    assert Encoding.ACKNOWLEDGED.signal_for(1) == SIGUSR1
    assert Encoding.ACKNOWLEDGED.signal_for(0) == SIGUSR2


@pytest.mark.parametrize("bit", [0, 1])
def test_bit_signal_round_trip(bit):
    standard_signal = Encoding.STANDARD.signal_for(bit)
    assert Encoding.STANDARD.bit_for(standard_signal) == bit
    acknowledged_signal = Encoding.ACKNOWLEDGED.signal_for(bit)
    assert Encoding.ACKNOWLEDGED.bit_for(acknowledged_signal) == bit


def test_bit_for_unknown_signal():
    with pytest.raises(ValueError):
        Encoding.STANDARD.bit_for(SIGUSR1 + SIGUSR2 + 100)


def test_signal_for_rejects_non_bit():
    with pytest.raises(ValueError):
        Encoding.ACKNOWLEDGED.signal_for(3)


def test_round_trip_through_signals():
    encoding = Encoding.ACKNOWLEDGED
    signals = [encoding.signal_for(b) for b in encode_message("sig")]
    assert _decode_all(encoding.bit_for(s) for s in signals) == [b"sig"]