from __future__ import annotations

import sys
from typing import Optional

from argv_expand.core.errors import ExpandFatalError, TooManyResponseFilesError
from argv_expand.core.expand.expand_config import ExpandConfig
from argv_expand.core.io.load_response_file import read_response_file
from argv_expand.core.log import get_logger
from argv_expand.core.model import ArgumentVector, ArgvHandle
from argv_expand.core.tokenize.build_argv import build_argv, only_whitespace


logger = get_logger(__name__)


def _consume_budget(remaining: int) -> int:
    remaining -= 1
    if remaining <= 0:
        raise TooManyResponseFilesError(
            code="E_TOO_MANY_RESPONSE_FILES",
            message="too many @-files encountered",
        )
    return remaining


def _file_arguments(contents: str) -> ArgumentVector:
    # An empty or blank file contributes no arguments, not one empty one.
    if only_whitespace(contents):
        return []
    parsed = build_argv(contents)
    assert parsed is not None
    return parsed


def expand_argv(
    argv: ArgumentVector,
    argc: Optional[int] = None,
    *,
    config: Optional[ExpandConfig] = None,
) -> tuple[ArgumentVector, int]:
    """Replace ``@file`` arguments with the arguments read from *file*.

    argv[0] is the program name and is never examined. For every later
    argument starting with the marker:

    - the remainder names a response file; if it cannot be stat'ed or read
      the argument is left as-is,
    - a directory raises ResponseFileDirectoryError,
    - otherwise the file is tokenized and its arguments take the place of
      the reference. The first of them is examined next, so response files
      may reference other response files.

    Every reference seen counts against ``config.iteration_limit``;
    exhausting it raises TooManyResponseFilesError.

    The caller's list is never modified. It is copied on the first
    substitution; when nothing is substituted the same list object comes
    back. Returns the vector of record and its new count.
    """
    cfg = config or ExpandConfig()
    if argc is None:
        argc = len(argv)
    if argc < 0 or argc > len(argv):
        raise ValueError(f"argc out of range: {argc} (vector has {len(argv)} elements)")

    handle = ArgvHandle(argv)
    remaining = cfg.iteration_limit

    i = 1
    while i < argc:
        arg = handle.argv[i]
        if not arg.startswith(cfg.marker):
            i += 1
            continue

        remaining = _consume_budget(remaining)

        filename = arg[len(cfg.marker) :]
        contents = read_response_file(filename, encoding=cfg.encoding)
        if contents is None:
            logger.debug("argv[%d]: %r left as-is", i, arg)
            i += 1
            continue

        file_argv = _file_arguments(contents)
        handle.ensure_owned()
        handle.splice(i, file_argv)
        argc += len(file_argv) - 1
        logger.debug("argv[%d]: %r expanded to %d argument(s)", i, arg, len(file_argv))
        # Stay on i: the first spliced argument is scanned next.

    return handle.argv, argc


def fatal_diagnostic(prog: str, error: ExpandFatalError) -> str:
    """Render the one-line report for a fatal expansion error."""
    line = f"{prog}: error: {error.message}"
    if error.file:
        line += f": {error.file}"
    return line


def expand_argv_or_exit(
    argv: ArgumentVector,
    argc: Optional[int] = None,
    *,
    config: Optional[ExpandConfig] = None,
) -> tuple[ArgumentVector, int]:
    """Like expand_argv, but a fatal error ends the process.

    Writes ``<argv[0]>: error: <message>[: <path>]`` to stderr and exits
    with status 1.
    """
    try:
        return expand_argv(argv, argc, config=config)
    except ExpandFatalError as e:
        prog = argv[0] if argv else "argv-expand"
        print(fatal_diagnostic(prog, e), file=sys.stderr)
        raise SystemExit(1) from e
