"""Tests for the command line interface."""

import json
import logging
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from jtypes.cli import app

runner = CliRunner()


def _write(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestGenerate:
    def test_shared_shape(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", {"id": 1, "name": "x"})
        b = _write(tmp_path / "b.json", {"name": "y", "id": 2})
        output = tmp_path / "types.d.ts"

        result = runner.invoke(
            app, ["generate", str(a), str(b), "-o", str(output), "--no-contexts"]
        )

        assert result.exit_code == 0, result.output
        text = output.read_text()
        assert text.endswith(
            "\n\nexport type T0 = C<{ id: number; name: string; }>;\n"
        )
        assert text.startswith("/**")

    def test_contexts(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", {"user": {"id": 1}})
        output = tmp_path / "types.d.ts"

        result = runner.invoke(
            app, ["generate", str(a), "-o", str(output), "--no-computed"]
        )

        assert result.exit_code == 0, result.output
        assert output.read_text() == (
            f"type T0 = {{ id: number; }}; // {a}:root.user\n"
            f"export type T1 = {{ user: T0; }}; // {a}:root\n"
        )

    def test_stdin(self) -> None:
        result = runner.invoke(
            app,
            ["generate", "-", "--no-computed", "--no-contexts"],
            input='{"a": [1, 2]}',
        )

        assert result.exit_code == 0, result.output
        assert "export type T0 = { a: number[]; };" in result.output

    def test_unknown_array_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        a = _write(tmp_path / "a.json", {"items": [], "other": []})
        output = tmp_path / "types.d.ts"

        with caplog.at_level(logging.WARNING, logger="jtypes"):
            result = runner.invoke(app, ["generate", str(a), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "type T0, derived from" in caplog.text
        assert "type T1, derived from" in caplog.text
        assert "types.d.ts" in caplog.text
        assert "type T0 = C<unknown[]>;" in output.read_text()

    def test_path(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", {"data": {"attributes": {"x": True}}})
        output = tmp_path / "types.d.ts"

        result = runner.invoke(
            app,
            [
                "generate",
                str(a),
                "-o",
                str(output),
                "-p",
                "data.attributes",
                "--no-computed",
                "--no-contexts",
            ],
        )

        assert result.exit_code == 0, result.output
        assert output.read_text() == "export type T0 = { x: boolean; };\n"

    def test_missing_path(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", {"data": {}})
        result = runner.invoke(app, ["generate", str(a), "-p", "nope"])
        assert result.exit_code == 1

    def test_path_on_non_object(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", [1, 2])
        result = runner.invoke(app, ["generate", str(a), "-p", "data"])
        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path: Path) -> None:
        a = tmp_path / "a.json"
        a.write_text("{not json")

        result = runner.invoke(app, ["generate", str(a)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        a = tmp_path / "a.json"
        a.write_bytes(b'{"a": "\xff"}')

        result = runner.invoke(app, ["generate", str(a)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "invalid JSON" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["generate", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "cannot read file" in result.output

    def test_path_to_null(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", {"data": {"value": None}})
        output = tmp_path / "types.d.ts"

        result = runner.invoke(
            app,
            [
                "generate",
                str(a),
                "-o",
                str(output),
                "-p",
                "data.value",
                "--no-computed",
                "--no-contexts",
            ],
        )

        assert result.exit_code == 0, result.output
        assert output.read_text() == "export type T0 = null;\n"

    def test_array_root_is_exported(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", [{"id": 1}, {"id": 2}])
        b = _write(tmp_path / "b.json", [{"id": 3}])
        output = tmp_path / "types.d.ts"

        result = runner.invoke(
            app,
            ["generate", str(a), str(b), "-o", str(output), "--no-computed"],
        )

        assert result.exit_code == 0, result.output
        assert output.read_text() == (
            f"type T0 = {{ id: number; }}; // {a}:root[0], {b}:root[0]\n"
            f"export type T1 = T0[]; // {a}:root, {b}:root\n"
        )

    def test_primitive_root_is_exported(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", "hello")
        output = tmp_path / "types.d.ts"

        result = runner.invoke(
            app, ["generate", str(a), "-o", str(output), "--no-computed"]
        )

        assert result.exit_code == 0, result.output
        assert output.read_text() == f"export type T0 = string; // {a}:root\n"


class TestOptions:
    def test_version(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("importlib.metadata.version", lambda name: "1.2.3")

        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "jtypes 1.2.3" in result.output

    def test_verbose(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        a = _write(tmp_path / "a.json", {"a": 1})

        result = runner.invoke(
            app, ["-v", "generate", str(a), "-o", str(tmp_path / "out.d.ts")]
        )

        assert result.exit_code == 0, result.output
        assert logging.getLogger("jtypes").level == logging.DEBUG
        assert f"Finished {a}: T0" in caplog.text


class TestShapes:
    def test_table(self, tmp_path: Path) -> None:
        a = _write(tmp_path / "a.json", {"x": {"y": 1}})
        b = _write(tmp_path / "b.json", {"y": 2})

        result = runner.invoke(app, ["shapes", str(a), str(b)])

        assert result.exit_code == 0, result.output
        assert "T0" in result.output
        assert "T1" in result.output
