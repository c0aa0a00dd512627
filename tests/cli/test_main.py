# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the colrecord CLI entry point."""

import sys
from pathlib import Path

import pytest

from colrecord.cli.main import main

# ###############
# Helpers
# ###############

_RECORDS_MODULE = "colrecord_cli_records"

_RECORDS_SOURCE = """\
from dataclasses import dataclass
from typing import Annotated

from colrecord import ListField, PrimitiveField, StructField


@dataclass
class Address:
    city: Annotated[str, PrimitiveField()]
    zip: Annotated[str, PrimitiveField()]


@dataclass
class Person:
    name: Annotated[str, PrimitiveField()]
    age: Annotated[int, PrimitiveField()]
    address: Annotated[Address, StructField()]
    tags: Annotated[list[int], ListField()]


@dataclass
class Clash:
    a: Annotated[int, PrimitiveField(key="id")]
    b: Annotated[int, PrimitiveField(key="id")]


NOT_A_CLASS = 1
"""


@pytest.fixture
def records(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide an importable module of record types and run from its directory."""
    (tmp_path / f"{_RECORDS_MODULE}.py").write_text(_RECORDS_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, _RECORDS_MODULE, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["colrecord", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    monkeypatch.setattr(sys, "argv", ["colrecord"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 0


# -------- schema tests --------


def test_schema_prints_orc_string(
    records: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(monkeypatch, "schema", f"{_RECORDS_MODULE}:Person") == 0
    out = capsys.readouterr().out
    assert out.strip() == "struct<name:string,age:int,address:struct<city:string,zip:string>,tags:array<int>>"


def test_schema_arrow_format(records: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(monkeypatch, "schema", f"{_RECORDS_MODULE}:Address", "--format", "arrow") == 0
    out = capsys.readouterr().out
    assert "city: string" in out
    assert "zip: string" in out


def test_schema_format_from_config(
    records: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (records / ".colrecord.yaml").write_text("schema-format: arrow\n", encoding="utf-8")
    assert _run(monkeypatch, "schema", f"{_RECORDS_MODULE}:Address") == 0
    assert "city: string" in capsys.readouterr().out


def test_schema_explicit_config_path(
    records: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    config = records / "custom.yaml"
    config.write_text("schema-format: orc\nlog-level: error\n", encoding="utf-8")
    assert _run(monkeypatch, "--config", str(config), "schema", f"{_RECORDS_MODULE}:Address") == 0
    assert capsys.readouterr().out.strip() == "struct<city:string,zip:string>"


def test_schema_invalid_config(records: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    (records / ".colrecord.yaml").write_text("log-level: LOUD\n", encoding="utf-8")
    assert _run(monkeypatch, "schema", f"{_RECORDS_MODULE}:Address") == 1
    assert "log-level" in capsys.readouterr().err


def test_schema_duplicate_keys_fail(
    records: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(monkeypatch, "schema", f"{_RECORDS_MODULE}:Clash") == 1
    assert "Key[id] already exists" in capsys.readouterr().err


@pytest.mark.parametrize(
    "target",
    [
        "no_colon_here",
        f"{_RECORDS_MODULE}:Missing",
        f"{_RECORDS_MODULE}:NOT_A_CLASS",
        "colrecord_no_such_module:Person",
    ],
)
def test_schema_bad_target(
    records: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], target: str
) -> None:
    assert _run(monkeypatch, "schema", target) == 1
    assert "cannot load" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("module_name", "source"),
    [
        ("colrecord_cli_raises", "raise RuntimeError('boom')\n"),
        ("colrecord_cli_syntax", "def broken(:\n"),
    ],
)
def test_schema_module_failing_on_import(
    records: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    module_name: str,
    source: str,
) -> None:
    (records / f"{module_name}.py").write_text(source, encoding="utf-8")
    monkeypatch.delitem(sys.modules, module_name, raising=False)
    assert _run(monkeypatch, "schema", f"{module_name}:Person") == 1
    assert f"cannot load '{module_name}:Person'" in capsys.readouterr().err


# -------- kinds tests --------


def test_kinds_lists_support(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "kinds") == 0
    lines = capsys.readouterr().out.splitlines()
    rows = {line.split()[0]: line.split()[1:3] for line in lines[1:]}
    assert rows["int"] == ["yes", "yes"]
    assert rows["boolean"] == ["yes", "no"]
    assert rows["decimal"] == ["no", "no"]
    assert "unknown" not in rows
