from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from argv_expand.core.vector.vector_ops import dup_argv


ArgumentVector = list[str]
Ownership = Literal["borrowed", "owned"]


@dataclass
class ArgvHandle:
    """Copy-on-first-write wrapper around an argument vector.

    Starts out ``borrowed`` (pointing at the caller's list) and is upgraded
    to ``owned`` exactly once, by ``ensure_owned``. Mutation is only allowed
    while owned, so the caller's list is never touched.
    """

    argv: ArgumentVector
    state: Ownership = "borrowed"

    @property
    def owned(self) -> bool:
        return self.state == "owned"

    def ensure_owned(self) -> None:
        if self.owned:
            return
        copy = dup_argv(self.argv)
        assert copy is not None
        self.argv = copy
        self.state = "owned"

    def splice(self, index: int, replacement: ArgumentVector) -> None:
        """Replace the single element at *index* with every element of *replacement*."""
        if not self.owned:
            raise RuntimeError("cannot mutate a borrowed argument vector")
        self.argv[index : index + 1] = replacement
