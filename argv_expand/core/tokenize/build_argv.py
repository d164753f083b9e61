from __future__ import annotations

from typing import Literal, Optional

from argv_expand.core.vector.vector_ops import WHITESPACE


QuoteMode = Literal["none", "single", "double"]


def only_whitespace(text: str) -> bool:
    return all(ch in WHITESPACE for ch in text)


def _skip_whitespace(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and text[pos] in WHITESPACE:
        pos += 1
    return pos


def build_argv(text: Optional[str]) -> Optional[list[str]]:
    """Split *text* into an argument vector.

    Fields are separated by runs of unquoted whitespace. Single or double
    quotes group characters and are stripped; a backslash outside single
    quotes makes the next character literal.

    - None gives None.
    - An empty or whitespace-only string gives [""] (one empty argument).
    - Unterminated quotes and a trailing backslash close silently at the end
      of input.

    The input is never modified; every element is a new string.
    """
    if text is None:
        return None

    argv: list[str] = []
    n = len(text)
    pos = 0
    mode: QuoteMode = "none"
    escaped = False

    # Always pick off at least one argument, even for empty input.
    while True:
        pos = _skip_whitespace(text, pos)

        arg: list[str] = []
        while pos < n:
            ch = text[pos]
            if escaped:
                escaped = False
                arg.append(ch)
            elif mode == "single":
                if ch == "'":
                    mode = "none"
                else:
                    arg.append(ch)
            elif ch == "\\":
                escaped = True
            elif mode == "double":
                if ch == '"':
                    mode = "none"
                else:
                    arg.append(ch)
            elif ch in WHITESPACE:
                break
            elif ch == "'":
                mode = "single"
            elif ch == '"':
                mode = "double"
            else:
                arg.append(ch)
            pos += 1

        argv.append("".join(arg))

        pos = _skip_whitespace(text, pos)
        if pos >= n:
            break

    return argv
