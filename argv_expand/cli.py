from __future__ import annotations

import json
import logging
from typing import Any

import typer

from argv_expand.core.errors import ArgvConfigError, ArgvError, ExpandFatalError
from argv_expand.core.expand.expand_argv import expand_argv, fatal_diagnostic
from argv_expand.core.expand.expand_config import ExpandConfig, load_config
from argv_expand.core.log import setup_logging
from argv_expand.core.tokenize.build_argv import build_argv
from argv_expand.core.vector.vector_ops import count_argv, write_argv

app = typer.Typer(add_completion=False, no_args_is_help=True)

_PASSTHROUGH = {"ignore_unknown_options": True}


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each @-file lookup to stderr"),
) -> None:
    """Split command lines and expand @-files."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command("split")
def split(
    text: str = typer.Argument(..., help="Command-line text to split"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Split TEXT into arguments (quotes and backslashes honored)."""
    _check_format(format)
    argv = build_argv(text)
    assert argv is not None
    _emit("split", argv, format)


@app.command("expand", context_settings=_PASSTHROUGH)
def expand(
    args: list[str] = typer.Argument(..., help="Argument vector; the first one is the program name"),
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Optional YAML file with iteration_limit / marker / encoding",
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Replace @file arguments with the contents of the named response files."""
    _check_format(format)
    config = _load_config_or_exit(config_file, format)

    try:
        argv, _ = expand_argv(list(args), config=config)
    except ExpandFatalError as e:
        if format == "json":
            _emit_errors_json("expand", [e], exit_code=1)
        typer.echo(fatal_diagnostic(args[0], e), err=True)
        raise typer.Exit(code=1)

    _emit("expand", argv, format)


@app.command("write", context_settings=_PASSTHROUGH)
def write(
    out: str = typer.Argument(..., help="Response file to write"),
    args: list[str] = typer.Argument(..., help="Arguments to store"),
) -> None:
    """Write ARGS to a response file that expands back to exactly ARGS."""
    write_argv(list(args), out)
    typer.echo(f"OK: wrote {count_argv(args)} argument(s) to {out}")


def _check_format(format: str) -> None:
    if format not in ("text", "json"):
        _print_errors(
            [
                ArgvError(
                    code="E_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: text, json)",
                    file=None,
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)


def _load_config_or_exit(config_file: str | None, format: str) -> ExpandConfig:
    try:
        return load_config(config_file)
    except FileNotFoundError:
        err = ArgvConfigError(
            code="E_CONFIG_FILE_NOT_FOUND",
            message=f"config file not found: {config_file}",
            file=None,
            path="config",
        )
        exit_code = 1
    except ArgvConfigError as e:
        err = e
        exit_code = 2

    if format == "json":
        _emit_errors_json("expand", [err], exit_code=exit_code)
    _print_errors([err])
    raise typer.Exit(code=exit_code)


def _emit(command: str, argv: list[str], format: str) -> None:
    if format == "json":
        payload: dict[str, Any] = {
            "tool": "argv-expand",
            "command": command,
            "ok": True,
            "error_count": 0,
            "errors": [],
            "argc": count_argv(argv),
            "argv": argv,
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        return
    for arg in argv:
        typer.echo(arg)


def _to_item(e: ArgvError) -> dict:
    return {
        "code": e.code,
        "message": e.message,
        "file": e.file,
        "path": e.path,
        "severity": "error",
    }


def _emit_errors_json(command: str, errors: list[ArgvError], *, exit_code: int) -> None:
    payload = {
        "tool": "argv-expand",
        "command": command,
        "ok": False,
        "error_count": len(errors),
        "errors": [_to_item(e) for e in errors],
    }
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    raise typer.Exit(code=exit_code)


def _print_errors(errors: list[ArgvError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="argv-expand")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
