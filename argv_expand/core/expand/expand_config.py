from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from argv_expand.core.errors import ArgvConfigError


DEFAULT_ITERATION_LIMIT = 2000
DEFAULT_MARKER = "@"
DEFAULT_ENCODING = "utf-8"

_KNOWN_KEYS = {"iteration_limit", "marker", "encoding"}


@dataclass(frozen=True)
class ExpandConfig:
    # Bounds self- and mutually-referencing response files.
    iteration_limit: int = DEFAULT_ITERATION_LIMIT
    marker: str = DEFAULT_MARKER
    encoding: str = DEFAULT_ENCODING


def _invalid(message: str, path: Path) -> ArgvConfigError:
    return ArgvConfigError(code="E_CONFIG_INVALID", message=message, file=str(path))


def load_config_file(path: str | Path) -> ExpandConfig:
    """Load expansion settings from a YAML file.

    Format:
      iteration_limit: 2000
      marker: "@"
      encoding: utf-8

    Every key is optional; an empty file gives the defaults.
    """
    p = Path(path)
    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return ExpandConfig()
    if not isinstance(raw, dict):
        raise _invalid("config file must be a mapping", p)

    unknown = sorted(str(k) for k in raw.keys() if k not in _KNOWN_KEYS)
    if unknown:
        raise _invalid(f"unknown config keys: {', '.join(unknown)}", p)

    values: dict[str, Any] = {}

    if "iteration_limit" in raw:
        limit = raw["iteration_limit"]
        # bool is an int subclass; reject it explicitly.
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise _invalid("iteration_limit must be a positive integer", p)
        values["iteration_limit"] = limit

    if "marker" in raw:
        marker = raw["marker"]
        if not isinstance(marker, str) or len(marker) != 1:
            raise _invalid("marker must be a single character", p)
        values["marker"] = marker

    if "encoding" in raw:
        encoding = raw["encoding"]
        if not isinstance(encoding, str) or not encoding.strip():
            raise _invalid("encoding must be a non-empty string", p)
        try:
            codecs.lookup(encoding.strip())
        except LookupError:
            raise _invalid(f"unknown encoding: {encoding}", p) from None
        values["encoding"] = encoding.strip()

    return ExpandConfig(**values)


def load_config(config_file: str | None) -> ExpandConfig:
    if not config_file:
        return ExpandConfig()
    return load_config_file(config_file)
