from pathlib import Path

import pytest

from argv_expand.core.errors import TooManyResponseFilesError
from argv_expand.core.expand.expand_argv import expand_argv, expand_argv_or_exit
from argv_expand.core.expand.expand_config import ExpandConfig


def _write_chain(root: Path, n: int) -> None:
    for i in range(n):
        nxt = f"@f{i + 1}" if i + 1 < n else "-end"
        (root / f"f{i}").write_text(f"-{i} {nxt}", encoding="utf-8")


def test_long_chain_expands_fully(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_chain(tmp_path, 50)

    new_argv, argc = expand_argv(["prog", "@f0"])

    assert new_argv == ["prog"] + [f"-{i}" for i in range(50)] + ["-end"]
    assert argc == 52


def test_chain_just_below_limit(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_chain(tmp_path, 2)

    new_argv, _ = expand_argv(["prog", "@f0"], config=ExpandConfig(iteration_limit=3))

    assert new_argv == ["prog", "-0", "-1", "-end"]


def test_chain_at_limit_is_fatal(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_chain(tmp_path, 3)

    with pytest.raises(TooManyResponseFilesError) as exc:
        expand_argv(["prog", "@f0"], config=ExpandConfig(iteration_limit=3))
    assert exc.value.code == "E_TOO_MANY_RESPONSE_FILES"


def test_missing_files_count_against_limit(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    argv = ["prog", "@missing1", "@missing2"]
    with pytest.raises(TooManyResponseFilesError):
        expand_argv(argv, config=ExpandConfig(iteration_limit=2))
    assert argv == ["prog", "@missing1", "@missing2"]


def test_self_reference_cycle_is_fatal(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "loop").write_text("-a @loop", encoding="utf-8")
    argv = ["prog", "@loop"]

    with pytest.raises(TooManyResponseFilesError):
        expand_argv(argv)
    assert argv == ["prog", "@loop"]


def test_mutual_reference_cycle_exits(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a").write_text("@b", encoding="utf-8")
    (tmp_path / "b").write_text("@a", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        expand_argv_or_exit(["tool", "@a"], config=ExpandConfig(iteration_limit=10))
    assert exc.value.code == 1
    assert capsys.readouterr().err == "tool: error: too many @-files encountered\n"
