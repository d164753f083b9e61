from __future__ import annotations

from pathlib import Path
from typing import Optional

# C-locale isspace() set; the tokenizer splits on exactly these.
WHITESPACE = frozenset(" \t\n\v\f\r")

_NEEDS_ESCAPE = WHITESPACE | {"'", '"', "\\"}


def dup_argv(argv: Optional[list[str]]) -> Optional[list[str]]:
    """Return an independent copy of *argv*, or None when given None."""
    if argv is None:
        return None
    return [str(arg) for arg in argv]


def free_argv(argv: Optional[list[str]]) -> None:
    """Release every element of *argv* and then the vector itself.

    A no-op for None. The list is left empty; releasing the same vector
    twice is the caller's responsibility to avoid.
    """
    if argv is None:
        return
    argv.clear()


def count_argv(argv: Optional[list[str]]) -> int:
    if argv is None:
        return 0
    return len(argv)


def quote_arg(arg: str) -> str:
    """Backslash-escape *arg* so the tokenizer reads it back as one argument."""
    if arg == "":
        return '""'
    out: list[str] = []
    for ch in arg:
        if ch in _NEEDS_ESCAPE:
            out.append("\\")
        out.append(ch)
    return "".join(out)


def write_argv(argv: list[str], path: str | Path, *, encoding: str = "utf-8") -> None:
    """Write *argv* to a response file, one quoted argument per line.

    Expanding a reference to the file yields exactly *argv* again.
    """
    p = Path(path)
    if str(p.parent) not in (".", ""):
        p.parent.mkdir(parents=True, exist_ok=True)
    text = "".join(quote_arg(arg) + "\n" for arg in argv)
    p.write_text(text, encoding=encoding, errors="surrogateescape")
