# sigtalk

Pass text messages between two processes on the same machine using nothing
but the `SIGUSR1` and `SIGUSR2` signals. Each byte is sent as eight
signals, least significant bit first, and a message ends with a NUL byte.
Text is sent as UTF-8.

Runs on POSIX systems only.

## Installation

```
pip install .
```

## Usage

Start the server in one terminal. It prints its process id and then waits
until interrupted:

```
sigtalk-server
```

```
Server PID: 4242
```

In another terminal, send it a message:

```
sigtalk-client 4242 "hello there"
```

The server prints each complete message on its own line. An empty message
in the basic mode prints `(null)`. The client prints
`Message sent succesfully!!` once all signals have gone out.

### Acknowledged mode

Both commands take `--ack`:

```
sigtalk-server --ack
sigtalk-client --ack 4242 "hello there"
```

In this mode the server answers every bit with `SIGUSR1` and confirms the
end of a message with `SIGUSR2`; the client waits for each answer before
sending the next bit and prints `Message sent successfully!!` when the
confirmation arrives. Empty messages are confirmed but not printed. The
server needs `signal.sigwaitinfo` to learn the sender's process id, so
acknowledged mode is not available where that call is missing.

Client and server must use the same mode. If a signal cannot be delivered,
the command prints an error and exits with status 1.

### Encodings

`sigtalk.protocol.Encoding` has two members:

- `Encoding.STANDARD`: `SIGUSR1` carries a 0 bit and `SIGUSR2` a 1 bit.
- `Encoding.ACKNOWLEDGED`: `SIGUSR1` carries a 1 bit and `SIGUSR2` a 0 bit.

`signal_for(bit)` and `bit_for(signum)` convert between the two.

### From Python

```python
from sigtalk.protocol import encode_message, MessageDecoder

bits = list(encode_message("hi"))
decoder = MessageDecoder()
messages = [m for m in map(decoder.feed, bits) if m is not None]
# messages == [b"hi"]
```

`encode_char(c)` gives the eight bits of one byte.

`sigtalk.client.send_message(pid, message, acknowledged=False, delay=0.001)`
sends one message to a running server. It returns True when the server
confirmed the message (acknowledged mode only) and raises `ConnectionError`
when a signal cannot be sent.

`sigtalk.server.Server(acknowledged=False, stream=None, kill=None)` receives
messages. `handle_signal(signum, sender_pid=0)` takes one signal and returns
the message once it is complete; `serve_forever()` waits for signals.

### Helpers

The package also ships small helpers used by the programs:

- `sigtalk.chars`: `is_alpha`, `is_digit`, `is_alnum`, `is_ascii`,
  `is_print`, `to_upper`, `to_lower`, `atoi` and `itoa` (32-bit integers).
- `sigtalk.memory`: `memset`, `bzero`, `memcpy`, `memmove`, `memchr`,
  `memcmp`, `calloc`, `strlcpy` and `strlcat` on byte buffers.
- `sigtalk.strings`: `strchr`, `strrchr`, `strncmp`, `strnstr`, `substr`,
  `strjoin`, `split`, `strtrim`, `strmapi` and `striteri` on text, each
  reading only up to the first NUL.
- `sigtalk.printf`: `sprintf` and `printf` with `%c %s %p %d %i %u %x %X %%`,
  and `put_char`, `put_str`, `put_endl`, `put_nbr` writing to a file
  descriptor or text stream.

## Tests

```
pip install .[test]
pytest
```