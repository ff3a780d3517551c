"""
Tests for the command-line interface.
"""

import json

import pytest

from hotrefactor.cli.commands import resolve_position
from hotrefactor.cli_entry import create_parser, main

SOURCE = "using System;\nusing Microsoft;\n\npublic class Class1\n{\n}\n"


@pytest.fixture
def source_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "Class1.cs"
    path.write_bytes(SOURCE.encode("utf-8"))
    return path


class TestResolvePosition:
    """Tests for resolve_position."""

    def test_offset(self):
        assert resolve_position(SOURCE, 5, None, None) == 5

    def test_line_and_column(self):
        assert resolve_position(SOURCE, None, 4, 1) == SOURCE.index("public")
        assert resolve_position(SOURCE, None, 2, 7) == SOURCE.index("Microsoft")

    @pytest.mark.parametrize(
        "position,line,column",
        [(len(SOURCE) + 1, None, None), (None, None, None), (None, 99, 1), (None, 1, 40)],
    )
    def test_invalid(self, position, line, column):
        with pytest.raises(ValueError):
            resolve_position(SOURCE, position, line, column)


class TestParser:
    """Tests for argument parsing."""

    def test_apply_requires_title(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["apply", "Class1.cs", "-p", "0"])

    def test_write_and_diff_are_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(
                ["apply", "Class1.cs", "-p", "0", "-t", "To Internal", "--write", "--diff"]
            )


class TestCommands:
    """End-to-end runs of main()."""

    def test_actions_machine_readable(self, source_file, capsys):
        main(["--machine-readable", "actions", str(source_file), "--line", "4"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is True
        assert payload["target"] == "Class1"
        assert [a["title"] for a in payload["actions"]] == [
            "To Protected",
            "To Internal",
            "To Private",
            "To Protected Internal",
            "Add newline betweeen using groups",
        ]

    def test_actions_plain(self, source_file, capsys):
        main(["--no-rich", "actions", str(source_file), "-p", str(SOURCE.index("public"))])
        out = capsys.readouterr().out
        assert "1. To Protected" in out
        assert "5. Add newline betweeen using groups" in out

    def test_apply_prints_new_source(self, source_file, capsys):
        main(["--no-rich", "apply", str(source_file), "-l", "4", "-t", "To Internal"])
        assert capsys.readouterr().out == SOURCE.replace("public", "internal")
        assert source_file.read_bytes() == SOURCE.encode("utf-8")

    def test_apply_write(self, source_file):
        main(["--no-rich", "apply", str(source_file), "-p", "0", "-t", "Add newline betweeen using groups", "-w"])
        assert source_file.read_text(encoding="utf-8") == SOURCE.replace(
            "System;\n", "System;\n\n", 1
        )

    def test_apply_write_keeps_crlf(self, tmp_path):
        path = tmp_path / "Crlf.cs"
        crlf_source = SOURCE.replace("\n", "\r\n")
        path.write_bytes(crlf_source.encode("utf-8"))
        main(["--no-rich", "apply", str(path), "-l", "4", "-t", "To Private", "--write"])
        assert path.read_bytes() == crlf_source.replace("public", "private").encode("utf-8")

    def test_apply_diff(self, source_file, capsys):
        main(["--no-rich", "apply", str(source_file), "-l", "4", "-t", "To Private", "--diff"])
        out = capsys.readouterr().out
        assert "-public class Class1" in out
        assert "+private class Class1" in out

    def test_unknown_title_exits_with_error(self, source_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--machine-readable", "apply", str(source_file), "-l", "4", "-t", "To Friend"])
        assert exc_info.value.code == 1
        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is False
        assert "To Friend" in payload["error"]

    def test_missing_file_exits_with_error(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["actions", str(tmp_path / "Missing.cs"), "-p", "0"])
        assert "Error:" in capsys.readouterr().err


class TestConfigCommand:
    """Tests for the config subcommands."""

    def test_init_then_validate(self, source_file, capsys):
        main(["config", "init", "--path", "settings.yaml", "--format", "yaml"])
        main(["config", "validate", "settings.yaml"])
        assert "settings.yaml is valid" in capsys.readouterr().out

    def test_show_machine_readable(self, source_file, capsys):
        main(["--machine-readable", "config"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["using_groups"]["line_terminator"] == "auto"

    def test_validate_rejects_bad_file(self, source_file, capsys):
        (source_file.parent / "bad.json").write_text(
            json.dumps({"using_groups": {"line_terminator": "cr"}})
        )
        with pytest.raises(SystemExit):
            main(["config", "validate", "bad.json"])

    def test_validate_rejects_scalar_section(self, source_file, capsys):
        (source_file.parent / "bad.yaml").write_text("modifiers: 5\n")
        with pytest.raises(SystemExit):
            main(["config", "validate", "bad.yaml"])
        assert "Error:" in capsys.readouterr().err
