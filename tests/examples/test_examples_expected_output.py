"""Run every example topic and compare its stdout with the inline ``# =>`` comments."""

import runpy
from pathlib import Path

import pytest

EXAMPLES_ROOT = Path(__file__).resolve().parents[2] / "examples"
_EXPECTED_MARK = "# =>"


def _example_paths() -> list[Path]:
    return sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))


def _expected_lines(path: Path) -> list[str]:
    return [
        line.split(_EXPECTED_MARK, maxsplit=1)[1].strip()
        for line in path.read_text(encoding="utf-8").splitlines()
        if "print(" in line and _EXPECTED_MARK in line
    ]


def _run_example(path: Path, capsys: pytest.CaptureFixture[str]) -> list[str]:
    runpy.run_path(str(path), run_name="__main__")
    return capsys.readouterr().out.splitlines()


def test_every_topic_has_an_example() -> None:
    assert [path.parent.name for path in _example_paths()] == [
        "ex_01_quickstart",
        "ex_02_positional_arguments",
        "ex_03_id_templates",
        "ex_04_errors",
    ]


@pytest.mark.parametrize("path", _example_paths(), ids=lambda path: path.parent.name)
def test_example_output_matches_inline_expectations(
    path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    expected = _expected_lines(path)

    assert expected
    assert _run_example(path, capsys) == expected


def test_errors_example_reports_argwire_errors(capsys: pytest.CaptureFixture[str]) -> None:
    output = _run_example(EXAMPLES_ROOT / "ex_04_errors" / "01_errors.py", capsys)

    assert [line.split(" ", maxsplit=1)[0] for line in output] == [
        "ArgWireInvalidArgumentError",
        "ArgWireMissingRequiredArgumentError:",
        "ArgWireNotInstantiableError:",
    ]
