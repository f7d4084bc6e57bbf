"""Wire codec used to carry one test result from an isolated child to its parent.

A result travels as a single line::

    <status-code><space><message>

``status-code`` is the integer value of a :class:`TestStatus`. The message is
escaped so that it never contains a raw line break.
"""

import re
from typing import IO

from isotest.core.results import TestStatus

SEPARATOR = " "

_CODE = re.compile(r"\s*([0-9]+)")
_ESCAPE = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPE = {"\\": "\\", "n": "\n", "r": "\r"}
_ESCAPED = re.compile(r"\\(.)", re.DOTALL)


class ProtocolError(ValueError):
    """Raised when a protocol line cannot be decoded into a result."""

    pass


def escape(message: str) -> str:
    return "".join(_ESCAPE.get(char, char) for char in message)


def unescape(message: str) -> str:
    return _ESCAPED.sub(
        lambda match: _UNESCAPE.get(match.group(1), match.group(0)), message
    )


def encode(status: TestStatus, message: str = "") -> str:
    """Encode a status and message as one protocol line, newline included."""
    return f"{int(status)}{SEPARATOR}{escape(message)}\n"


def decode(line: str) -> tuple[TestStatus, str]:
    """Decode one protocol line.

    Raises:
        ProtocolError: If the line does not start with an integer, or the
            integer is not a known status code
    """
    match = _CODE.match(line)
    if match is None:
        raise ProtocolError(f"no status code in {line[:40]!r}")

    code = int(match.group(1))
    try:
        status = TestStatus(code)
    except ValueError:
        raise ProtocolError(f"unknown status code {code}") from None

    # Exactly one separator character follows the code
    message = line[match.end() + 1 :].rstrip("\r\n")
    return status, unescape(message)


def write_result(stream: IO[str], status: TestStatus, message: str = "") -> None:
    """Write one result line and flush it through to the reader."""
    stream.write(encode(status, message))
    stream.flush()


def read_result(stream: IO[str]) -> tuple[TestStatus, str]:
    """Read and decode the next result line from a stream.

    Raises:
        ProtocolError: If the stream ends before a decodable line arrives
    """
    line = stream.readline()
    if not line:
        raise ProtocolError("stream ended before a result was written")
    return decode(line)
