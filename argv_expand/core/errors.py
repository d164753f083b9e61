from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ArgvError(Exception):
    """Error envelope raised by the loaders and the expander.

    The CLI catches these and renders them as `loc: code: message` lines or
    as JSON error items.
    """

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<argv>"
        return f"{loc}: {self.code}: {self.message}"


class ArgvConfigError(ArgvError):
    pass


class ExpandFatalError(ArgvError):
    """Non-recoverable expansion failure.

    Raised at the point of detection; scanning does not continue past it.
    The embedding host decides whether this terminates the process.
    """


class ResponseFileDirectoryError(ExpandFatalError):
    pass


class TooManyResponseFilesError(ExpandFatalError):
    pass
