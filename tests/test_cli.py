from __future__ import annotations

import json
from pathlib import Path

import pytest

from ng_template_linter.__main__ import EXIT_CLEAN
from ng_template_linter.__main__ import EXIT_DIAGNOSTICS
from ng_template_linter.__main__ import EXIT_ERROR
from ng_template_linter.__main__ import main
from ng_template_linter.validation.rules import rule_names


@pytest.fixture
def deprecated(templates_dir: Path) -> str:
    return str(templates_dir / "deprecated.html")


@pytest.fixture
def clean(templates_dir: Path) -> str:
    return str(templates_dir / "clean.html")


def test_deprecated_template(console_output, deprecated):
    console, buf = console_output
    assert main([deprecated], console=console) == EXIT_DIAGNOSTICS
    output = buf.getvalue()
    for name in rule_names():
        assert f"[{name}]" in output
    assert "4 deprecation(s) found in 1 file(s)." in output


def test_clean_template(console_output, clean):
    console, buf = console_output
    assert main([clean], console=console) == EXIT_CLEAN
    assert "0 deprecation(s) found in 1 file(s)." in buf.getvalue()


def test_directory(console_output, templates_dir):
    console, buf = console_output
    assert main([str(templates_dir)], console=console) == EXIT_DIAGNOSTICS
    assert "5 deprecation(s) found in 3 file(s)." in buf.getvalue()


def test_json_output(console_output, deprecated):
    console, buf = console_output
    assert main([deprecated, "--format", "json"], console=console) == EXIT_DIAGNOSTICS
    report = json.loads(buf.getvalue())
    assert report["files"] == 1
    assert [d["rule"] for d in report["diagnostics"]] == rule_names()
    first = report["diagnostics"][0]
    assert (first["line"], first["column"]) == (1, 21)
    assert first["path"] == deprecated


def test_disable(console_output, deprecated):
    console, buf = console_output
    argv = [
        deprecated,
        "--disable",
        "cdk-focus-trap-selector",
        "--disable",
        "mat-datepicker-selected-changed",
    ]
    assert main(argv, console=console) == EXIT_DIAGNOSTICS
    output = buf.getvalue()
    assert "[cdk-focus-trap-selector]" not in output
    assert "2 deprecation(s) found" in output


def test_disable_unknown_rule(console_output, deprecated):
    console, buf = console_output
    assert main([deprecated, "--disable", "nope"], console=console) == EXIT_ERROR
    assert "Unknown rule(s): nope" in buf.getvalue()


def test_config_file(console_output, deprecated, tmp_path: Path):
    config = tmp_path / "ng-template-linter.toml"
    config.write_text(
        'disabled-rules = ["mat-list-option-selection-change"]\nformat = "json"\n',
        encoding="utf-8",
    )
    console, buf = console_output
    assert main([deprecated, "--config", str(config)], console=console) == 1
    report = json.loads(buf.getvalue())
    assert len(report["diagnostics"]) == 3


def test_format_flag_overrides_config(console_output, clean, tmp_path: Path):
    config = tmp_path / "ng-template-linter.toml"
    config.write_text('format = "json"\n', encoding="utf-8")
    console, buf = console_output
    argv = [clean, "--config", str(config), "--format", "text"]
    assert main(argv, console=console) == EXIT_CLEAN
    assert "0 deprecation(s)" in buf.getvalue()


def test_missing_config(console_output, clean, tmp_path: Path):
    console, _buf = console_output
    argv = [clean, "--config", str(tmp_path / "missing.toml")]
    assert main(argv, console=console) == EXIT_ERROR


def test_missing_path(console_output, tmp_path: Path):
    console, buf = console_output
    assert main([str(tmp_path / "nowhere")], console=console) == EXIT_ERROR
    assert "Path not found" in buf.getvalue()


def test_no_paths(console_output):
    console, _buf = console_output
    assert main([], console=console) == EXIT_ERROR


def test_list_rules(console_output):
    console, buf = console_output
    assert main(["--list-rules"], console=console) == EXIT_CLEAN
    lines = buf.getvalue().splitlines()
    assert [line.split(":", 1)[0] for line in lines] == rule_names()


def test_component_file(console_output, templates_dir: Path):
    component = templates_dir.parent / "components" / "fonts.component.ts"
    console, buf = console_output
    argv = [str(component), "--format", "json"]
    assert main(argv, console=console) == EXIT_DIAGNOSTICS
    report = json.loads(buf.getvalue())
    assert report["files"] == 1

    inline, *external = report["diagnostics"]
    assert inline["rule"] == "mat-button-toggle-group-selected"
    assert inline["path"] == str(component)
    source = component.read_text(encoding="utf-8")
    assert source[inline["start"] : inline["end"]] == "selected"
    assert inline["line"] == 6
    assert [d["rule"] for d in external] == rule_names()


def test_show_source(console_output, deprecated):
    console, buf = console_output
    argv = [deprecated, "--show-source", "--disable", "cdk-focus-trap-selector"]
    assert main(argv, console=console) == EXIT_DIAGNOSTICS
    lines = buf.getvalue().splitlines()
    index = next(i for i, line in enumerate(lines) if "selectedChanged" in line)
    assert lines[index + 1].strip().startswith("<mat-datepicker #picker")
    assert lines[index + 2].strip() == "^" * len("selectedChanged")
