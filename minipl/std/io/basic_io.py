import sys
from collections import deque
from typing import Deque, Optional, TextIO


class BasicIO:
    """Console reader and writer handed to the interpreter.

    Streams default to the process's stdin/stdout, looked up on every
    call so that redirected or captured streams are honoured.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout
        self.pending: Deque[str] = deque()

    @property
    def input_stream(self) -> TextIO:
        return self.stdin if self.stdin is not None else sys.stdin

    @property
    def output_stream(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    def read_token(self) -> Optional[str]:
        """Return the next whitespace-delimited token, or None at end of input."""
        while not self.pending:
            line = self.input_stream.readline()
            if line == '':
                return None
            self.pending.extend(line.split())
        return self.pending.popleft()

    def write(self, text: str) -> None:
        stream = self.output_stream
        stream.write(text)
        stream.flush()
