"""Tests for flowtree tree command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from flowtree.cli.main import cli
from flowtree.cli.tree import render_tree
from flowtree.tree.transform import transform

runner = CliRunner()

C_SOURCE = "int sign(int x) {\n  if (x > 0) { return 1; } else { return -1; }\n}\n"


class TestTreeCommand:
    """Tests for tree command."""

    def test_renders_tree(self, tmp_path: Path) -> None:
        path = tmp_path / "sign.c"
        path.write_text(C_SOURCE)

        result = runner.invoke(cli, ["tree", str(path)])

        assert result.exit_code == 0, result.output
        assert "sign.c" in result.output
        assert "sign(int x)" in result.output
        assert "x > 0" in result.output
        assert "return -1;" in result.output

    def test_json_output_is_wire_format(self, tmp_path: Path) -> None:
        path = tmp_path / "sign.c"
        path.write_text(C_SOURCE)

        result = runner.invoke(cli, ["tree", str(path), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == transform("c", C_SOURCE.encode()).to_wire()

    def test_language_from_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "loop.py"
        path.write_text("def loop(n):\n    while n:\n        n -= 1\n")

        result = runner.invoke(cli, ["tree", str(path), "--json"])

        assert result.exit_code == 0, result.output
        (function,) = json.loads(result.output)
        assert function["data"] == "loop(n)"
        assert function["nodes"][0]["type"] == "while"

    def test_explicit_language_overrides_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "script.txt"
        path.write_text("function f() { return 1; }")

        result = runner.invoke(cli, ["tree", str(path), "-l", "javascript", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)[0]["data"] == "f()"

    def test_unknown_extension_is_usage_error(self, tmp_path: Path) -> None:
        path = tmp_path / "main.rs"
        path.write_text("fn main() {}")

        result = runner.invoke(cli, ["tree", str(path)])

        assert result.exit_code == 2
        assert "--language" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["tree", str(tmp_path / "absent.c")])
        assert result.exit_code == 2


class TestRenderTree:
    """Tests for render_tree helper."""

    def test_one_branch_per_function(self) -> None:
        result = transform("c", b"void a(void) { x(); }\nvoid b(void) {}\n")

        tree = render_tree(result, "two.c")

        assert len(tree.children) == 2
        assert len(tree.children[0].children) == 1

    def test_deeply_nested_source(self) -> None:
        depth = 500
        code = "void f(int x) {" + "if (x) {" * depth + "x++;" + "}" * depth + "}"

        tree = render_tree(transform("c", code.encode()), "deep.c")

        (branch,) = tree.children
        for _ in range(depth):
            (branch,) = branch.children
        (leaf,) = branch.children
        assert "x++;" in str(leaf.label)
