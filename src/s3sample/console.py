"""Console transcript output for s3sample."""

import codecs
import re
import sys
from collections.abc import Iterator
from contextlib import closing
from typing import Any, TextIO

# Prefix applied to every line of a displayed object body.
BODY_INDENT = "    "

# Body read size: 64 KB
_CHUNK_SIZE = 64 * 1024
_LINE_END = re.compile(r"\r\n|\r|\n")


class Console:
    """Line-oriented writer for the user-facing transcript.

    Attributes:
        stream: Text stream lines are written to. Defaults to the
            process stdout at write time so pytest capture sees it.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def write_line(self, text: str = "") -> None:
        out = self.stream if self.stream is not None else sys.stdout
        out.write(text + "\n")

    def write_lines(self, lines: list[str]) -> None:
        for line in lines:
            self.write_line(line)


def iter_text_lines(body: Any, encoding: str = "utf-8") -> Iterator[str]:
    """Yield the text lines of a binary stream without their terminators.

    Only ``\\n``, ``\\r\\n`` and a lone ``\\r`` end a line. A ``\\r`` at the
    end of a chunk is held back until the next chunk shows whether a
    ``\\n`` follows. Undecodable bytes are replaced.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    pending = ""
    while True:
        chunk = body.read(_CHUNK_SIZE)
        pending += decoder.decode(chunk, final=not chunk)
        start = 0
        for match in _LINE_END.finditer(pending):
            if chunk and match.end() == len(pending) and match.group() == "\r":
                break
            yield pending[start:match.start()]
            start = match.end()
        pending = pending[start:]
        if not chunk:
            break
    if pending:
        yield pending


def display_text_stream(body: Any, console: Console, encoding: str = "utf-8") -> int:
    """Print a binary stream as indented text, then a blank line.

    The body is read lazily and closed afterwards, also when reading fails.
    Lines are split as iter_text_lines() splits them.

    Args:
        body: Binary stream with a ``read()`` method (botocore
            ``StreamingBody``, ``io.BytesIO``, ...).
        console: Destination for the indented lines.
        encoding: Text encoding of the body.

    Returns:
        The number of lines printed.
    """
    count = 0
    with closing(body):
        for line in iter_text_lines(body, encoding):
            console.write_line(BODY_INDENT + line)
            count += 1
    console.write_line()
    return count
