"""Parent/child exchanges over anonymous pipes."""

from __future__ import annotations

import argparse
import os
import struct
import sys
from typing import Callable, Iterable

_INT = struct.Struct("=i")
_WORD_BUFFER = 50


def _wrap_int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def _read_all(fd: int) -> bytes:
    chunks = []
    while chunk := os.read(fd, 4096):
        chunks.append(chunk)
    return b"".join(chunks)


def _write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        view = view[os.write(fd, view):]


def _round_trip(payload: bytes, transform: Callable[[bytes], bytes]) -> bytes:
    """Send payload to a forked child, which replies with transform(payload)."""
    to_child_r, to_child_w = os.pipe()
    reply_r, reply_w = os.pipe()
    sys.stdout.flush()
    sys.stderr.flush()
    pid = os.fork()
    if pid == 0:
        status = 1
        try:
            os.close(to_child_w)
            os.close(reply_r)
            received = _read_all(to_child_r)
            os.close(to_child_r)
            _write_all(reply_w, transform(received))
            os.close(reply_w)
            status = 0
        finally:
            os._exit(status)
    os.close(to_child_r)
    os.close(reply_w)
    try:
        _write_all(to_child_w, payload)
    finally:
        os.close(to_child_w)
    with os.fdopen(reply_r, "rb") as reply_stream:
        reply = reply_stream.read()
    _, status = os.waitpid(pid, 0)
    if os.waitstatus_to_exitcode(status) != 0:
        raise ChildProcessError("child process failed")
    return reply


def _until_nul(data: bytes) -> bytes:
    return data.split(b"\0", 1)[0]


def pipe_message(message: str) -> str:
    """Send a NUL-terminated message to a child; return what the child read."""
    reply = _round_trip(message.encode() + b"\0", _until_nul)
    return reply.decode()


def _child_sum(data: bytes) -> bytes:
    total = 0
    for (element,) in _INT.iter_unpack(data):
        print(f"e={element}", flush=True)
        total = _wrap_int32(total + element)
    return _INT.pack(total)


def pipe_sum(values: Iterable[int]) -> int:
    """Stream 32-bit integers to a child and return the sum it sends back."""
    try:
        payload = b"".join(_INT.pack(v) for v in values)
    except struct.error as exc:
        raise ValueError(f"value does not fit in a 32-bit integer: {exc}") from exc
    (result,) = _INT.unpack(_round_trip(payload, _child_sum))
    return result


def _child_upper(data: bytes) -> bytes:
    return _until_nul(data[:_WORD_BUFFER]).upper() + b"\0"


def pipe_upper(word: str) -> str:
    """Have a child upper-case the ASCII letters of a word."""
    data = word.encode()
    if b"\0" in data:
        raise ValueError("word must not contain NUL characters")
    if len(data) + 1 > _WORD_BUFFER:
        raise ValueError(f"word must be shorter than {_WORD_BUFFER} bytes")
    reply = _round_trip(data + b"\0", _child_upper)
    return _until_nul(reply).decode()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oslabkit-pipes", description="Exchange data with a child over pipes."
    )
    parser.add_argument("demo", choices=["message", "sum", "upper"])
    args = parser.parse_args(argv)
    try:
        if args.demo == "message":
            print(f"msg={pipe_message('Hello')}")
        elif args.demo == "sum":
            print(f"result={pipe_sum(range(1, 11))}")
        else:
            sys.stdout.write("Enter a word: ")
            sys.stdout.flush()
            words = sys.stdin.readline().split()
            if not words:
                print("error: no word given", file=sys.stderr)
                return 1
            print(f"Modified word from child: {pipe_upper(words[0])}")
    except (ValueError, ChildProcessError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())