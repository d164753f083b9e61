from __future__ import annotations

import os
import stat
from typing import Optional

from argv_expand.core.errors import ResponseFileDirectoryError
from argv_expand.core.log import get_logger


logger = get_logger(__name__)


def read_response_file(path: str, *, encoding: str = "utf-8") -> Optional[str]:
    """Return the full contents of response file *path*, or None to skip it.

    A path that cannot be stat'ed, opened, read or decoded is skipped. A
    path naming a directory raises ResponseFileDirectoryError. Undecodable
    bytes are kept via surrogateescape where the codec allows it, so the
    contents reach the tokenizer verbatim.
    """
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        logger.debug("skip %r: cannot stat", path)
        return None

    if stat.S_ISDIR(st.st_mode):
        raise ResponseFileDirectoryError(
            code="E_RESPONSE_FILE_IS_DIRECTORY",
            message="@-file refers to a directory",
            file=path,
        )

    try:
        with open(path, "r", encoding=encoding, errors="surrogateescape", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("skip %r: %s", path, e)
        return None
