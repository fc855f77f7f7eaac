"""Heuristic real/fake line counting for source and resource files.

A line is "fake" when, once stripped, it is empty or starts with
`import`, `/`, `*` or `}`. Everything else is "real". This is not a parser:
`{` on its own line counts as real and so does a line with several statements.
"""

from dataclasses import dataclass
from pathlib import Path

FAKE_PREFIXES = ("import", "/", "*", "}")
# control characters and space; other Unicode whitespace such as NBSP is kept
TRIM_CHARS = "".join(chr(c) for c in range(0x21))


@dataclass(frozen=True)
class LineCount:
    real: int = 0
    fake: int = 0

    @property
    def total(self) -> int:
        return self.real + self.fake

    def __add__(self, other: "LineCount") -> "LineCount":
        return LineCount(self.real + other.real, self.fake + other.fake)


def is_fake_line(line: str | None) -> bool:
    if line is None:
        return True
    line = line.strip(TRIM_CHARS)
    if not line:
        return True
    return line.startswith(FAKE_PREFIXES)


def classify_lines(lines) -> LineCount:
    real = 0
    fake = 0
    for line in lines:
        if is_fake_line(line):
            fake += 1
        else:
            real += 1
    return LineCount(real=real, fake=fake)


def count_file(path: Path) -> LineCount:
    """Count the lines of one file. Raises OSError if it cannot be read."""
    with open(path, encoding="utf-8", errors="replace") as f:
        return classify_lines(f)
